from app.models.user import User, UserRole
from app.models.shipment import (
    CurrencyType,
    InvoiceType,
    ServiceType,
    Shipment,
    ShipmentStatus,
    ShipmentType,
)
from app.models.status_history import StatusHistoryEntry

__all__ = [
    "User",
    "UserRole",
    "Shipment",
    "ShipmentStatus",
    "ServiceType",
    "ShipmentType",
    "InvoiceType",
    "CurrencyType",
    "StatusHistoryEntry",
]
