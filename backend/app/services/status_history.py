"""Status ledger: append-only history entries, written together with shipment.status."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.models.shipment import Shipment, ShipmentStatus
from app.models.status_history import StatusHistoryEntry
from app.models.user import User
from app.schemas.status_history import StatusHistoryOut

logger = logging.getLogger(__name__)

STATUS_UPDATED_NOTE = "Status updated"


def record_status(
    db: Session,
    shipment: Shipment,
    status: ShipmentStatus,
    *,
    location: str | None = None,
    notes: str | None = None,
    user_id: int | None = None,
) -> StatusHistoryEntry:
    """Set the current status and stage its ledger entry in the same unit of work.

    Does not commit; the caller commits both writes together.
    """
    shipment.status = status
    entry = StatusHistoryEntry(
        shipment=shipment,
        status=status,
        location=location,
        notes=notes or STATUS_UPDATED_NOTE,
        created_by=user_id,
    )
    db.add(entry)
    return entry


def append_status(
    db: Session,
    shipment_id: int,
    status: ShipmentStatus,
    location: str | None = None,
    notes: str | None = None,
    user_id: int | None = None,
) -> StatusHistoryEntry | None:
    shipment = db.query(Shipment).filter(Shipment.id == shipment_id).first()
    if not shipment:
        return None
    entry = record_status(
        db, shipment, status, location=location, notes=notes, user_id=user_id
    )
    db.commit()
    db.refresh(entry)
    logger.info(
        "Shipment %s status -> %s (entry %s)",
        shipment.consignee_number,
        entry.status.value,
        entry.id,
    )
    return entry


def list_status_history(db: Session, shipment_id: int) -> list[StatusHistoryOut]:
    """Oldest first. Unknown or deleted shipments yield an empty list."""
    rows = (
        db.query(StatusHistoryEntry, User.full_name)
        .outerjoin(User, User.id == StatusHistoryEntry.created_by)
        .filter(StatusHistoryEntry.shipment_id == shipment_id)
        .order_by(StatusHistoryEntry.created_at.asc(), StatusHistoryEntry.id.asc())
        .all()
    )
    return [
        StatusHistoryOut(
            id=entry.id,
            status=entry.status,
            location=entry.location,
            notes=entry.notes,
            created_at=entry.created_at,
            created_by_name=full_name,
        )
        for entry, full_name in rows
    ]
