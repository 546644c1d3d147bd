"""Request bodies and auth headers shared by the test modules."""

from app.api.deps import create_access_token
from app.models.user import User
from app.schemas.shipment import ShipmentCreate

PASSWORD = "secret123"


def shipment_payload(**overrides) -> dict:
    """A valid create body in the wire (camelCase) format."""
    payload = {
        "service": "express",
        "companyName": "Acme Exports",
        "shipperName": "Sara Khan",
        "shipperPhone": "+971500000001",
        "shipperAddress": "12 Port Road",
        "shipperCountry": "United Arab Emirates",
        "shipperCity": "Dubai",
        "shipperPostal": "00000",
        "consigneeCompanyName": "Globex",
        "receiverName": "Tom Reed",
        "receiverEmail": "a@b.com",
        "receiverPhone": "+441234567890",
        "receiverAddress": "1 High Street",
        "receiverCountry": "United Kingdom",
        "receiverCity": "London",
        "receiverZip": "EC1A 1BB",
        "accountNo": "ACC-001",
        "shipmentType": "nonDocsBox",
        "pieces": 3,
        "description": "Machine parts",
        "fragile": True,
        "currency": "usd",
        "weight": 4.5,
        "totalVolumetricWeight": 5.0,
        "dimensions": "30x20x10",
        "invoiceType": "commercial",
    }
    payload.update(overrides)
    return payload


def shipment_data(**overrides) -> dict:
    """The same body after validation, as the routes hand it to the service layer."""
    return ShipmentCreate.model_validate(shipment_payload(**overrides)).model_dump()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}
