"""Shipment store: filtered listing, lookups, create, partial update, delete, duplicate."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.core.exceptions import DuplicateConsigneeNumberError, NoUpdatableFieldsError
from app.core.timeutils import to_naive_utc
from app.models.shipment import Shipment, ShipmentStatus
from app.services.consignee_numbers import generate_consignee_number
from app.services.status_history import STATUS_UPDATED_NOTE, record_status

logger = logging.getLogger(__name__)

SHIPMENT_CREATED_NOTE = "Shipment created"

UPDATABLE_FIELDS = frozenset(
    {
        "service",
        "status",
        "company_name",
        "shipper_name",
        "shipper_phone",
        "shipper_address",
        "shipper_country",
        "shipper_city",
        "shipper_postal",
        "consignee_company_name",
        "receiver_name",
        "receiver_email",
        "receiver_phone",
        "receiver_address",
        "receiver_country",
        "receiver_city",
        "receiver_zip",
        "account_no",
        "shipment_type",
        "pieces",
        "description",
        "fragile",
        "currency",
        "shipper_reference",
        "comments",
        "total_volumetric_weight",
        "dimensions",
        "weight",
        "invoice_type",
    }
)
# Status is never taken from the caller on creation.
CREATABLE_FIELDS = UPDATABLE_FIELDS - {"status"}


@dataclass(frozen=True)
class ShipmentFilters:
    start_date: datetime | None = None
    end_date: datetime | None = None
    destination: str | None = None
    service: str | None = None
    status: str | None = None


def normalize_page(page: int | None) -> int:
    return max(1, page or 1)


def normalize_limit(limit: int | None) -> int:
    if not limit:
        return settings.default_page_size
    return max(1, min(limit, settings.max_page_size))


def list_shipments(
    db: Session,
    filters: ShipmentFilters | None = None,
    page: int | None = 1,
    limit: int | None = None,
) -> tuple[Sequence[Shipment], dict[str, int]]:
    filters = filters or ShipmentFilters()
    page = normalize_page(page)
    limit = normalize_limit(limit)

    q = db.query(Shipment)
    if filters.start_date:
        q = q.filter(Shipment.created_at >= to_naive_utc(filters.start_date))
    if filters.end_date:
        q = q.filter(Shipment.created_at <= to_naive_utc(filters.end_date))
    if filters.destination:
        q = q.filter(
            Shipment.receiver_country.icontains(filters.destination, autoescape=True)
        )
    if filters.service:
        q = q.filter(Shipment.service == filters.service)
    if filters.status:
        q = q.filter(Shipment.status == filters.status)

    # Count and page are separate reads; they need not agree under concurrent writes.
    total = q.count()
    offset = (page - 1) * limit
    # Pages past the end are empty and skip the page query.
    rows = []
    if offset < total:
        rows = (
            q.order_by(Shipment.created_at.desc(), Shipment.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
    pagination = {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": math.ceil(total / limit),
    }
    return rows, pagination


def get_shipment(db: Session, shipment_id: int) -> Shipment | None:
    return db.query(Shipment).filter(Shipment.id == shipment_id).first()


def get_shipment_by_consignee_number(
    db: Session, consignee_number: str
) -> Shipment | None:
    return (
        db.query(Shipment)
        .filter(Shipment.consignee_number == consignee_number)
        .first()
    )


def _consignee_number_taken(db: Session, consignee_number: str) -> bool:
    return (
        db.query(Shipment.id)
        .filter(Shipment.consignee_number == consignee_number)
        .first()
        is not None
    )


def create_shipment(
    db: Session, data: dict[str, Any], user_id: int | None
) -> Shipment:
    fields = {k: v for k, v in data.items() if k in CREATABLE_FIELDS}
    fields["fragile"] = bool(fields.get("fragile"))

    attempts = settings.consignee_number_max_attempts
    for attempt in range(1, attempts + 1):
        consignee_number = generate_consignee_number()
        shipment = Shipment(
            consignee_number=consignee_number,
            created_by=user_id,
            **fields,
        )
        db.add(shipment)
        record_status(
            db,
            shipment,
            ShipmentStatus.PENDING,
            notes=SHIPMENT_CREATED_NOTE,
            user_id=user_id,
        )
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if not _consignee_number_taken(db, consignee_number):
                raise
            logger.warning(
                "Consignee number %s already taken (attempt %d/%d), regenerating",
                consignee_number,
                attempt,
                attempts,
            )
            continue
        db.refresh(shipment)
        logger.info("Shipment %s created by user %s", shipment.consignee_number, user_id)
        return shipment

    logger.error("Gave up creating shipment after %d consignee number collisions", attempts)
    raise DuplicateConsigneeNumberError(
        f"Could not allocate a unique consignee number after {attempts} attempts"
    )


def update_shipment(
    db: Session, shipment_id: int, data: dict[str, Any], user_id: int | None
) -> Shipment | None:
    """Apply only the supplied fields; a supplied status always adds a ledger entry."""
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        return None

    changes = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}
    if not changes:
        raise NoUpdatableFieldsError("No fields to update")

    status = changes.pop("status", None)
    for field, value in changes.items():
        setattr(shipment, field, value)
    if status is not None:
        record_status(
            db, shipment, status, notes=STATUS_UPDATED_NOTE, user_id=user_id
        )

    db.commit()
    db.refresh(shipment)
    logger.info(
        "Shipment %s updated (%s)",
        shipment.consignee_number,
        ", ".join(sorted(data.keys() & UPDATABLE_FIELDS)),
    )
    return shipment


def delete_shipment(db: Session, shipment_id: int) -> bool:
    shipment = get_shipment(db, shipment_id)
    if not shipment:
        return False
    consignee_number = shipment.consignee_number
    db.delete(shipment)
    db.commit()
    logger.info("Shipment %s deleted with its status history", consignee_number)
    return True


def duplicate_shipment(
    db: Session,
    shipment_id: int,
    user_id: int | None,
    overrides: dict[str, Any] | None = None,
) -> Shipment | None:
    """Copy a shipment's contents into a new pending shipment with a fresh number."""
    source = get_shipment(db, shipment_id)
    if not source:
        return None
    data = {field: getattr(source, field) for field in CREATABLE_FIELDS}
    data.update({k: v for k, v in (overrides or {}).items() if k in CREATABLE_FIELDS})
    return create_shipment(db, data, user_id)
