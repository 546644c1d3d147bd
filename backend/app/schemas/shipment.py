from datetime import datetime

from pydantic import EmailStr, Field, model_validator

from app.models.shipment import (
    CurrencyType,
    InvoiceType,
    ServiceType,
    ShipmentStatus,
    ShipmentType,
)
from app.schemas.base import CamelModel, NonEmptyStr, OptionalStr


class ShipmentCreate(CamelModel):
    service: ServiceType
    company_name: NonEmptyStr

    shipper_name: NonEmptyStr
    shipper_phone: NonEmptyStr
    shipper_address: NonEmptyStr
    shipper_country: NonEmptyStr
    shipper_city: NonEmptyStr
    shipper_postal: NonEmptyStr

    consignee_company_name: NonEmptyStr
    receiver_name: NonEmptyStr
    receiver_email: EmailStr
    receiver_phone: NonEmptyStr
    receiver_address: NonEmptyStr
    receiver_country: NonEmptyStr
    receiver_city: NonEmptyStr
    receiver_zip: NonEmptyStr

    account_no: NonEmptyStr
    shipment_type: ShipmentType
    pieces: int = Field(..., ge=1)
    description: NonEmptyStr
    fragile: bool = False
    currency: CurrencyType
    shipper_reference: OptionalStr = None
    comments: OptionalStr = None
    total_volumetric_weight: float | None = Field(None, ge=0)
    dimensions: OptionalStr = None
    weight: float | None = Field(None, ge=0)
    invoice_type: InvoiceType | None = None

    # Accepted but ignored: new shipments always start as pending.
    status: ShipmentStatus | None = None


# Columns that are NOT NULL; an update may omit them but not null them out.
_REQUIRED_ON_UPDATE = frozenset(
    name
    for name, field in ShipmentCreate.model_fields.items()
    if field.is_required()
) | {"fragile", "status"}


class ShipmentUpdate(CamelModel):
    service: ServiceType | None = None
    status: ShipmentStatus | None = None
    company_name: NonEmptyStr | None = None

    shipper_name: NonEmptyStr | None = None
    shipper_phone: NonEmptyStr | None = None
    shipper_address: NonEmptyStr | None = None
    shipper_country: NonEmptyStr | None = None
    shipper_city: NonEmptyStr | None = None
    shipper_postal: NonEmptyStr | None = None

    consignee_company_name: NonEmptyStr | None = None
    receiver_name: NonEmptyStr | None = None
    receiver_email: EmailStr | None = None
    receiver_phone: NonEmptyStr | None = None
    receiver_address: NonEmptyStr | None = None
    receiver_country: NonEmptyStr | None = None
    receiver_city: NonEmptyStr | None = None
    receiver_zip: NonEmptyStr | None = None

    account_no: NonEmptyStr | None = None
    shipment_type: ShipmentType | None = None
    pieces: int | None = Field(None, ge=1)
    description: NonEmptyStr | None = None
    fragile: bool | None = None
    currency: CurrencyType | None = None
    shipper_reference: OptionalStr = None
    comments: OptionalStr = None
    total_volumetric_weight: float | None = Field(None, ge=0)
    dimensions: OptionalStr = None
    weight: float | None = Field(None, ge=0)
    invoice_type: InvoiceType | None = None

    @model_validator(mode="after")
    def _no_null_required_fields(self):
        nulled = sorted(
            name
            for name in self.model_fields_set & _REQUIRED_ON_UPDATE
            if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class DuplicateShipmentRequest(CamelModel):
    invoice_type: InvoiceType | None = None


class ShipmentOut(CamelModel):
    id: int
    consignee_number: str
    service: ServiceType
    status: ShipmentStatus
    company_name: str

    shipper_name: str
    shipper_phone: str
    shipper_address: str
    shipper_country: str
    shipper_city: str
    shipper_postal: str

    consignee_company_name: str
    receiver_name: str
    receiver_email: str
    receiver_phone: str
    receiver_address: str
    receiver_country: str
    receiver_city: str
    receiver_zip: str

    account_no: str
    shipment_type: ShipmentType
    pieces: int
    description: str
    fragile: bool
    currency: CurrencyType
    shipper_reference: str | None = None
    comments: str | None = None
    total_volumetric_weight: float | None = None
    dimensions: str | None = None
    weight: float | None = None
    invoice_type: InvoiceType | None = None

    created_by: int | None = None
    created_at: datetime
    updated_at: datetime


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ShipmentPage(CamelModel):
    data: list[ShipmentOut]
    pagination: Pagination
