"""Single-page A4 PDF invoice for a shipment."""

from __future__ import annotations

import io
from datetime import datetime

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from app.models.shipment import Shipment

PRIMARY = HexColor("#2563eb")
TEXT = HexColor("#1f2937")
LIGHT_GRAY = HexColor("#f3f4f6")
MUTED = HexColor("#6b7280")

LEFT = 50
RIGHT = 545


def _value(enum_or_str) -> str:
    if enum_or_str is None:
        return ""
    return getattr(enum_or_str, "value", str(enum_or_str))


def _format_date(value: datetime | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:%B} {value.day}, {value.year}"


class _Page:
    """Top-down text cursor over a reportlab canvas (reportlab's origin is bottom-left)."""

    def __init__(self, pdf: canvas.Canvas):
        self.pdf = pdf
        self.height = A4[1]

    def text(self, x: float, y: float, value: str, size: int = 10, color=TEXT, bold=False):
        self.pdf.setFillColor(color)
        self.pdf.setFont("Helvetica-Bold" if bold else "Helvetica", size)
        self.pdf.drawString(x, self.height - y, value)

    def centered(self, y: float, value: str, size: int, color=TEXT):
        self.pdf.setFillColor(color)
        self.pdf.setFont("Helvetica", size)
        self.pdf.drawCentredString((LEFT + RIGHT) / 2, self.height - y, value)

    def rule(self, y: float, width: float):
        self.pdf.setStrokeColor(PRIMARY)
        self.pdf.setLineWidth(width)
        self.pdf.line(LEFT, self.height - y, RIGHT, self.height - y)

    def box(self, y: float, h: float, fill=None):
        self.pdf.setStrokeColor(PRIMARY)
        self.pdf.setLineWidth(1)
        if fill is not None:
            self.pdf.setFillColor(fill)
        self.pdf.rect(
            LEFT, self.height - y - h, RIGHT - LEFT, h, stroke=1, fill=fill is not None
        )


def render_invoice_pdf(shipment: Shipment) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"Invoice {shipment.consignee_number}")
    page = _Page(pdf)

    page.text(LEFT, 70, "SHIPMENT INVOICE", size=28, color=PRIMARY, bold=True)
    page.text(LEFT, 100, "Courier Track System")
    page.text(LEFT, 115, "Logistics & Shipping Services")
    page.text(LEFT, 130, "support@couriertrack.com")

    page.text(340, 100, f"Invoice #: {shipment.consignee_number}", size=9)
    page.text(340, 115, f"Date: {_format_date(shipment.created_at)}", size=9)
    page.text(340, 130, f"Status: {_value(shipment.status).upper()}", size=9)

    page.rule(160, 2)

    page.text(LEFT, 185, "SHIPPER INFORMATION", size=12, color=PRIMARY, bold=True)
    shipper = [
        f"Name: {shipment.shipper_name}",
        f"Phone: {shipment.shipper_phone}",
        f"Address: {shipment.shipper_address}",
        f"City: {shipment.shipper_city}, {shipment.shipper_postal}",
        f"Country: {shipment.shipper_country}",
    ]
    for i, line in enumerate(shipper):
        page.text(LEFT, 205 + i * 15, line)

    page.text(320, 185, "CONSIGNEE INFORMATION", size=12, color=PRIMARY, bold=True)
    consignee = [
        f"Company: {shipment.consignee_company_name or 'N/A'}",
        f"Name: {shipment.receiver_name}",
        f"Phone: {shipment.receiver_phone}",
        f"Email: {shipment.receiver_email}",
        f"Address: {shipment.receiver_address}",
        f"City: {shipment.receiver_city}, {shipment.receiver_zip}",
        f"Country: {shipment.receiver_country}",
    ]
    for i, line in enumerate(consignee):
        page.text(320, 205 + i * 15, line)

    y = 320
    page.text(LEFT, y, "SHIPMENT DETAILS", size=12, color=PRIMARY, bold=True)
    y += 15
    page.box(y, 25, fill=LIGHT_GRAY)
    for x, label in ((60, "Description"), (250, "Service"), (380, "Pieces"), (460, "Type")):
        page.text(x, y + 16, label)
    y += 25
    page.box(y, 30)
    page.text(60, y + 18, (shipment.description or "General Shipment")[:40], size=9)
    page.text(250, y + 18, _value(shipment.service), size=9)
    page.text(380, y + 18, str(shipment.pieces), size=9)
    page.text(460, y + 18, _value(shipment.shipment_type), size=9)

    y += 50
    details = [
        f"Account Number: {shipment.account_no or 'N/A'}",
        f"Currency: {_value(shipment.currency).upper()}",
        f"Fragile: {'Yes' if shipment.fragile else 'No'}",
    ]
    if shipment.weight:
        details.append(f"Weight: {shipment.weight} kg")
    if shipment.dimensions:
        details.append(f"Dimensions: {shipment.dimensions}")
    if shipment.shipper_reference:
        details.append(f"Reference: {shipment.shipper_reference}")
    for line in details:
        page.text(LEFT, y, line)
        y += 15

    if shipment.invoice_type:
        y += 10
        page.text(LEFT, y, "INVOICE TYPE", size=11, color=PRIMARY, bold=True)
        page.text(LEFT, y + 18, _value(shipment.invoice_type))
        y += 40

    if shipment.comments:
        page.text(LEFT, y, "NOTES", size=11, color=PRIMARY, bold=True)
        page.text(LEFT, y + 18, shipment.comments[:110], size=9)

    footer = 720
    page.rule(footer, 1)
    page.text(LEFT, footer + 15, "Thank you for choosing Courier Track!", size=8)
    page.centered(
        footer + 30,
        "For inquiries, please contact: support@couriertrack.com | +1 (555) 123-4567",
        size=8,
    )
    page.centered(
        footer + 48,
        "This is a computer-generated invoice and does not require a signature.",
        size=7,
        color=MUTED,
    )

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
