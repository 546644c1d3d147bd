"""Append-only status ledger entries owned by a shipment."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.core.timeutils import utcnow
from app.database import Base
from app.models.shipment import ShipmentStatus


class StatusHistoryEntry(Base):
    __tablename__ = "shipment_status_history"

    id = Column(Integer, primary_key=True, index=True)
    shipment_id = Column(
        Integer,
        ForeignKey("shipments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(
        Enum(
            ShipmentStatus,
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
            name="status_history_status_enum",
        ),
        nullable=False,
    )
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at = Column(DateTime, default=utcnow, nullable=False)

    shipment = relationship("Shipment", back_populates="status_history")
