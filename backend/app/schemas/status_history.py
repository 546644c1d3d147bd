from datetime import datetime

from app.models.shipment import ShipmentStatus
from app.schemas.base import CamelModel, OptionalStr
from app.schemas.shipment import ShipmentOut


class StatusUpdateRequest(CamelModel):
    status: ShipmentStatus
    location: OptionalStr = None
    notes: OptionalStr = None


class StatusHistoryOut(CamelModel):
    id: int
    status: ShipmentStatus
    location: str | None = None
    notes: str | None = None
    created_at: datetime
    # Resolved from users at read time; None when the author is gone.
    created_by_name: str | None = None


class StatusEntryOut(CamelModel):
    id: int
    shipment_id: int
    status: ShipmentStatus
    location: str | None = None
    notes: str | None = None
    created_by: int | None = None
    created_at: datetime


class TrackingResponse(CamelModel):
    shipment: ShipmentOut
    status_history: list[StatusHistoryOut]
