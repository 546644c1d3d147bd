"""Courier shipment: shipper/receiver blocks, package details and current status."""

import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from app.core.timeutils import utcnow
from app.database import Base


class ShipmentStatus(str, enum.Enum):
    PENDING = "pending"
    IN_TRANSIT = "inTransit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"
    ON_HOLD = "onHold"


class ServiceType(str, enum.Enum):
    EXPRESS = "express"
    STANDARD = "standard"
    ECONOMY = "economy"
    OVERNIGHT = "overnight"
    INTERNATIONAL = "international"


class ShipmentType(str, enum.Enum):
    DOCS = "docs"
    NON_DOCS_FLYER = "nonDocsFlyer"
    NON_DOCS_BOX = "nonDocsBox"


class InvoiceType(str, enum.Enum):
    COMMERCIAL = "commercial"
    GIFT = "gift"
    PERFORMANCE = "performance"
    SAMPLE = "sample"


class CurrencyType(str, enum.Enum):
    USD = "usd"
    EUR = "eur"
    GBP = "gbp"
    AED = "aed"
    PKR = "pkr"


def _enum_column(enum_cls, name: str, **kwargs) -> Column:
    return Column(
        Enum(
            enum_cls,
            values_callable=lambda cls: [e.value for e in cls],
            name=name,
        ),
        **kwargs,
    )


class Shipment(Base):
    __tablename__ = "shipments"

    id = Column(Integer, primary_key=True, index=True)
    # Public tracking number; never changes once assigned.
    consignee_number = Column(String(64), unique=True, nullable=False, index=True)

    service = _enum_column(ServiceType, "shipments_service_enum", nullable=False)
    status = _enum_column(
        ShipmentStatus,
        "shipments_status_enum",
        nullable=False,
        default=ShipmentStatus.PENDING,
    )
    company_name = Column(String(255), nullable=False)

    shipper_name = Column(String(255), nullable=False)
    shipper_phone = Column(String(64), nullable=False)
    shipper_address = Column(String(512), nullable=False)
    shipper_country = Column(String(120), nullable=False)
    shipper_city = Column(String(120), nullable=False)
    shipper_postal = Column(String(32), nullable=False)

    consignee_company_name = Column(String(255), nullable=False)
    receiver_name = Column(String(255), nullable=False)
    receiver_email = Column(String(255), nullable=False)
    receiver_phone = Column(String(64), nullable=False)
    receiver_address = Column(String(512), nullable=False)
    receiver_country = Column(String(120), nullable=False, index=True)
    receiver_city = Column(String(120), nullable=False)
    receiver_zip = Column(String(32), nullable=False)

    account_no = Column(String(64), nullable=False)
    shipment_type = _enum_column(
        ShipmentType, "shipments_shipment_type_enum", nullable=False
    )
    pieces = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=False)
    fragile = Column(Boolean, nullable=False, default=False)
    currency = _enum_column(CurrencyType, "shipments_currency_enum", nullable=False)
    shipper_reference = Column(String(255), nullable=True)
    comments = Column(Text, nullable=True)
    total_volumetric_weight = Column(Float, nullable=True)
    dimensions = Column(String(255), nullable=True)
    weight = Column(Float, nullable=True)
    invoice_type = _enum_column(
        InvoiceType, "shipments_invoice_type_enum", nullable=True
    )

    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    status_history = relationship(
        "StatusHistoryEntry",
        back_populates="shipment",
        cascade="all, delete-orphan",
        order_by="StatusHistoryEntry.id",
    )
