"""
Invoice PDF rendering with fpdf2.

``render_invoice_pdf`` lays out the full tax invoice and falls back to a
minimal text-only document if that fails.
"""

import logging
from dataclasses import fields, replace
from typing import Mapping

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from app.services.tax_service import format_currency

logger = logging.getLogger(__name__)

BLUE = (37, 99, 235)
LIGHT_BLUE = (239, 246, 255)
DARK = (17, 24, 39)
GREY = (75, 85, 99)


def _na(value: str) -> str:
    return value or "N/A"


def _latin1(text: str) -> str:
    """Replace characters the core PDF fonts cannot encode."""
    return text.encode("latin-1", "replace").decode("latin-1")


def _encodable(invoice):
    """Copy of *invoice* with every text field reduced to latin-1."""
    return replace(invoice, **{f.name: _latin1(getattr(invoice, f.name)) for f in fields(invoice)})


class InvoicePdfRenderer:
    """Renders a TAX INVOICE for one invoice record or draft."""

    def __init__(self, dealer: Mapping, bank: Mapping) -> None:
        self._dealer = dealer
        self._bank = bank

    def render(self, invoice) -> bytes:
        invoice = _encodable(invoice)
        pdf = FPDF(orientation="portrait", unit="mm", format="A4")
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.add_page()

        self._render_header(pdf, invoice)
        self._render_parties(pdf, invoice)
        self._render_pricing(pdf, invoice)
        self._render_bank_details(pdf, invoice)
        self._render_notes(pdf, invoice)

        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(self, pdf: FPDF, invoice) -> None:
        pdf.set_font("Helvetica", "B", 20)
        pdf.set_text_color(*DARK)
        pdf.cell(0, 9, self._dealer["name"], align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*GREY)
        pdf.cell(0, 6, self._dealer["tagline"], align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 8)
        for line in self._dealer["address_lines"]:
            pdf.cell(0, 4, line, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(0, 4, f"Phone: {self._dealer['phone']}", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(0, 4, f"Email: {self._dealer['email']}", align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

        pdf.set_draw_color(*BLUE)
        pdf.set_line_width(0.6)
        pdf.line(10, pdf.get_y(), 200, pdf.get_y())
        pdf.ln(4)

        pdf.set_font("Helvetica", "B", 14)
        pdf.set_text_color(*BLUE)
        pdf.cell(0, 8, "TAX INVOICE", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*DARK)
        pdf.cell(0, 5, f"Invoice #: {invoice.invoice_number}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(0, 5, f"Date: {invoice.date}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(0, 5, f"VAT No: {self._dealer['vat_number']}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    def _render_parties(self, pdf: FPDF, invoice) -> None:
        top = pdf.get_y()

        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(90, 6, "BILL TO", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "B", 10)
        pdf.cell(90, 5, invoice.customer_name or "[Customer Name]", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 9)
        pdf.cell(90, 5, invoice.customer_email or "[Email Address]", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.cell(90, 5, invoice.customer_phone or "[Phone Number]", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.multi_cell(90, 5, invoice.address or "[Customer Address]", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        left_bottom = pdf.get_y()

        kilometers = f"{int(invoice.kilometers):,} km" if invoice.kilometers.isdigit() else "N/A"
        rows = [
            ("Make & Model", f"{invoice.make} {invoice.model}"),
            ("Year", invoice.year),
            ("Color", _na(invoice.color)),
            ("Condition", invoice.condition),
            ("Kilometers", kilometers),
            ("Chassis No", _na(invoice.chassis_no)),
            ("License No", _na(invoice.license_no)),
        ]
        pdf.set_xy(110, top)
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(90, 6, "VEHICLE INFORMATION", new_x=XPos.LEFT, new_y=YPos.NEXT)
        for label, value in rows:
            pdf.set_x(110)
            pdf.set_font("Helvetica", "", 9)
            pdf.set_text_color(*GREY)
            pdf.cell(30, 5, label)
            pdf.set_font("Helvetica", "B", 9)
            pdf.set_text_color(*DARK)
            pdf.cell(60, 5, value, new_x=XPos.LEFT, new_y=YPos.NEXT)

        pdf.set_y(max(left_bottom, pdf.get_y()) + 6)

    def _render_pricing(self, pdf: FPDF, invoice) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "PRICING DETAILS", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        widths = (95, 20, 37.5, 37.5)
        pdf.set_fill_color(*LIGHT_BLUE)
        pdf.set_text_color(*BLUE)
        pdf.set_font("Helvetica", "B", 9)
        for width, title in zip(widths, ("Description", "Quantity", "Unit Price", "Amount (ZAR)")):
            pdf.cell(width, 7, title, border=1, fill=True)
        pdf.ln()

        price = f"R {format_currency(invoice.selling_price)}"
        pdf.set_text_color(*DARK)
        pdf.set_font("Helvetica", "", 9)
        description = f"{invoice.make} {invoice.model} - {invoice.year} {invoice.condition}"
        for width, value in zip(widths, (description, "1", price, price)):
            pdf.cell(width, 7, value, border=1)
        pdf.ln()
        pdf.set_font("Helvetica", "", 8)
        pdf.set_text_color(*GREY)
        pdf.cell(
            0, 5,
            f"Chassis: {_na(invoice.chassis_no)} | Engine: {_na(invoice.engine_no)}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        pdf.set_text_color(*DARK)
        totals = [
            ("Subtotal", price, ""),
            ("VAT (15%)", f"R {format_currency(invoice.vat_amount)}", ""),
            ("TOTAL", f"R {format_currency(invoice.total_price)}", "B"),
        ]
        for label, value, style in totals:
            pdf.set_font("Helvetica", style, 10)
            pdf.cell(152.5, 6, label, align="R")
            pdf.cell(37.5, 6, value, align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    def _render_bank_details(self, pdf: FPDF, invoice) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "BANKING DETAILS", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 9)
        for label, value in (
            ("Bank", self._bank["name"]),
            ("Account Holder", self._bank["holder_name"]),
            ("Account Number", self._bank["account_number"]),
            ("Branch Code", self._bank["branch_number"]),
            ("Swift Code", self._bank["swift_code"]),
            ("Reference", invoice.invoice_number),
        ):
            pdf.cell(40, 5, label)
            pdf.cell(0, 5, value, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    def _render_notes(self, pdf: FPDF, invoice) -> None:
        if not invoice.notes:
            return
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "NOTES", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 9)
        pdf.multi_cell(0, 5, invoice.notes)


def render_fallback_pdf(invoice, dealer: Mapping, bank: Mapping) -> bytes:
    """Minimal text-only invoice used when the full layout cannot be rendered."""
    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", "", 20)
    pdf.set_xy(0, 15)
    pdf.cell(210, 10, _latin1(f"{dealer['name']} INVOICE"), align="C")
    pdf.set_font("Helvetica", "", 12)
    lines = [
        (40, f"Invoice: {invoice.invoice_number}"),
        (50, f"Date: {invoice.date}"),
        (60, f"Customer: {invoice.customer_name or 'N/A'}"),
        (70, f"Vehicle: {invoice.make} {invoice.model}"),
        (80, f"Total: R {format_currency(invoice.total_price)}"),
        (100, "Bank Details:"),
        (110, f"{bank['name']} - {bank['account_number']}"),
        (120, f"Account Holder: {bank['holder_name']}"),
        (130, f"Reference: {invoice.invoice_number}"),
    ]
    for y, text in lines:
        pdf.text(20, y, _latin1(text))
    return bytes(pdf.output())


def render_invoice_pdf(invoice, dealer: Mapping, bank: Mapping, renderer=None) -> tuple[bytes, str]:
    """Return ``(pdf_bytes, filename)`` for *invoice*.

    Any failure in the full layout yields the text-only document instead.
    """
    renderer = renderer or InvoicePdfRenderer(dealer, bank)
    try:
        return renderer.render(invoice), f"TSK-AUTO-Invoice-{invoice.invoice_number}.pdf"
    except Exception:
        logger.exception("Invoice PDF layout failed for %s, using text-only fallback", invoice.invoice_number)
    return render_fallback_pdf(invoice, dealer, bank), f"TSK-Invoice-{invoice.invoice_number}.pdf"
