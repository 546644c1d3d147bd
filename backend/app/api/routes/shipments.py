"""Shipments: list/get/create/update/delete, duplicate, tracking, status ledger, invoice."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, require_roles
from app.core.exceptions import DuplicateConsigneeNumberError, NoUpdatableFieldsError
from app.database import get_db
from app.models.shipment import ServiceType, ShipmentStatus
from app.models.user import User, UserRole
from app.schemas.base import MessageResponse
from app.schemas.shipment import (
    DuplicateShipmentRequest,
    Pagination,
    ShipmentCreate,
    ShipmentOut,
    ShipmentPage,
    ShipmentUpdate,
)
from app.schemas.status_history import (
    StatusEntryOut,
    StatusHistoryOut,
    StatusUpdateRequest,
    TrackingResponse,
)
from app.services.invoices import render_invoice_pdf
from app.services.shipments import (
    ShipmentFilters,
    create_shipment,
    delete_shipment,
    duplicate_shipment,
    get_shipment,
    get_shipment_by_consignee_number,
    list_shipments,
    update_shipment,
)
from app.services.status_history import append_status, list_status_history

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shipments", tags=["shipments"])

writers = require_roles(UserRole.ADMIN, UserRole.OPERATOR)
admin_only = require_roles(UserRole.ADMIN)


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Shipment not found")


def _creation_failed(e: DuplicateConsigneeNumberError) -> HTTPException:
    logger.error("Shipment creation failed: %s", e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Failed to create shipment",
    )


@router.get("", response_model=ShipmentPage)
def list_all(
    startDate: datetime | None = Query(None),
    endDate: datetime | None = Query(None),
    destination: str | None = Query(None),
    service: ServiceType | None = Query(None),
    status_: ShipmentStatus | None = Query(None, alias="status"),
    page: int = Query(1),
    limit: int = Query(10),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> ShipmentPage:
    filters = ShipmentFilters(
        start_date=startDate,
        end_date=endDate,
        destination=destination,
        service=service,
        status=status_,
    )
    rows, pagination = list_shipments(db, filters, page=page, limit=limit)
    return ShipmentPage(
        data=[ShipmentOut.model_validate(s) for s in rows],
        pagination=Pagination(**pagination),
    )


@router.get("/track/{consignee_number}", response_model=TrackingResponse)
def track(
    consignee_number: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> TrackingResponse:
    shipment = get_shipment_by_consignee_number(db, consignee_number)
    if not shipment:
        raise _not_found()
    return TrackingResponse(
        shipment=ShipmentOut.model_validate(shipment),
        status_history=list_status_history(db, shipment.id),
    )


@router.get("/{shipment_id}", response_model=ShipmentOut)
def get_one(
    shipment_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> ShipmentOut:
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        raise _not_found()
    return ShipmentOut.model_validate(shipment)


@router.get("/{shipment_id}/status-history", response_model=list[StatusHistoryOut])
def status_history(
    shipment_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> list[StatusHistoryOut]:
    return list_status_history(db, shipment_id)


@router.get("/{shipment_id}/download-invoice")
def download_invoice(
    shipment_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
) -> Response:
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        raise _not_found()
    return Response(
        content=render_invoice_pdf(shipment),
        media_type="application/pdf",
        headers={
            "Content-Disposition": (
                f'attachment; filename="invoice-{shipment.consignee_number}.pdf"'
            )
        },
    )


@router.post("", response_model=ShipmentOut, status_code=status.HTTP_201_CREATED)
def create(
    dto: ShipmentCreate,
    db: Session = Depends(get_db),
    user: User = Depends(writers),
) -> ShipmentOut:
    try:
        shipment = create_shipment(db, dto.model_dump(), user.id)
    except DuplicateConsigneeNumberError as e:
        raise _creation_failed(e)
    return ShipmentOut.model_validate(shipment)


@router.put("/{shipment_id}", response_model=ShipmentOut)
def update(
    shipment_id: int,
    dto: ShipmentUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(writers),
) -> ShipmentOut:
    try:
        shipment = update_shipment(
            db, shipment_id, dto.model_dump(exclude_unset=True), user.id
        )
    except NoUpdatableFieldsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not shipment:
        raise _not_found()
    return ShipmentOut.model_validate(shipment)


@router.delete("/{shipment_id}", response_model=MessageResponse)
def delete(
    shipment_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(admin_only),
) -> MessageResponse:
    if not delete_shipment(db, shipment_id):
        raise _not_found()
    return MessageResponse(message="Shipment deleted successfully")


@router.post(
    "/{shipment_id}/duplicate",
    response_model=ShipmentOut,
    status_code=status.HTTP_201_CREATED,
)
def duplicate(
    shipment_id: int,
    dto: DuplicateShipmentRequest | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(writers),
) -> ShipmentOut:
    overrides = dto.model_dump(exclude_unset=True) if dto else {}
    try:
        shipment = duplicate_shipment(db, shipment_id, user.id, overrides)
    except DuplicateConsigneeNumberError as e:
        raise _creation_failed(e)
    if not shipment:
        raise _not_found()
    return ShipmentOut.model_validate(shipment)


@router.post(
    "/{shipment_id}/status",
    response_model=StatusEntryOut,
    status_code=status.HTTP_201_CREATED,
)
def add_status_update(
    shipment_id: int,
    dto: StatusUpdateRequest,
    db: Session = Depends(get_db),
    user: User = Depends(writers),
) -> StatusEntryOut:
    entry = append_status(
        db,
        shipment_id,
        dto.status,
        location=dto.location,
        notes=dto.notes,
        user_id=user.id,
    )
    if not entry:
        raise _not_found()
    return StatusEntryOut.model_validate(entry)
