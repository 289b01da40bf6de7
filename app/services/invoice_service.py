"""
Invoice business logic: numbering, drafts, record creation, e-mail links.
"""

import time
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Mapping, Optional
from urllib.parse import quote

from app.ledger.records import InvoiceDraft, InvoiceRecord
from app.services.tax_service import (
    VAT_RATE,
    calculate_vat,
    format_currency,
    sanitize_digits,
    sanitize_phone,
    sanitize_price,
)

REQUIRED_FIELDS = {
    "customer_name": "Customer name",
    "customer_email": "Customer email",
    "customer_phone": "Customer phone",
}


def format_invoice_number(epoch_ms: int) -> str:
    """Return ``INV-`` plus the last six digits of *epoch_ms*.

    Two invoices numbered within the same millisecond (modulo 1,000,000)
    share a number; callers that need uniqueness use the record id.
    """
    return f"INV-{epoch_ms % 1_000_000:06d}"


def generate_invoice_number(now: Optional[datetime] = None) -> str:
    if now is None:
        return format_invoice_number(time.time_ns() // 1_000_000)
    return format_invoice_number(int(now.timestamp()) * 1000 + now.microsecond // 1000)


def generate_record_id() -> str:
    return uuid.uuid4().hex


def format_invoice_date(now: datetime) -> str:
    """en-ZA short date, e.g. ``2026/10/19``."""
    return now.strftime("%Y/%m/%d")


def new_draft(now: Optional[datetime] = None) -> InvoiceDraft:
    """A blank draft with a fresh invoice number and today's date."""
    now = now or datetime.now(timezone.utc)
    return recalculate(InvoiceDraft(
        invoice_number=generate_invoice_number(now),
        date=format_invoice_date(now),
    ))


def sample_draft(now: Optional[datetime] = None) -> InvoiceDraft:
    """The pre-filled draft shown on first visit."""
    return recalculate(new_draft(now).with_changes(
        make="TOYOTA",
        model="FORTUNER 4.0 V6 AVT 4X4",
        mm_code="60054440",
        chassis_no="AHTYUS9GX04002340",
        engine_no="1GRD881161",
        kilometers="314596",
        selling_price="104347.83",
        year="2007",
        condition="USED",
        license_no="DSK65GM",
        color="Silver",
    ))


def recalculate(draft: InvoiceDraft, rate: Decimal = VAT_RATE) -> InvoiceDraft:
    vat_amount, total_price = calculate_vat(draft.selling_price, rate)
    return draft.with_changes(vat_amount=vat_amount, total_price=total_price)


def draft_from_form(form: Mapping[str, str], current: InvoiceDraft, rate: Decimal = VAT_RATE) -> InvoiceDraft:
    """Apply submitted form fields to *current*, sanitising as typed input would be."""
    values = {}
    for name in InvoiceDraft.__dataclass_fields__:
        if name in ("vat_amount", "total_price"):
            continue
        if name in form:
            values[name] = (form.get(name) or "").strip()
    if "selling_price" in values:
        values["selling_price"] = sanitize_price(values["selling_price"])
    for name in ("kilometers", "year"):
        if name in values:
            values[name] = sanitize_digits(values[name])
    if "customer_phone" in values:
        values["customer_phone"] = sanitize_phone(values["customer_phone"])
    return recalculate(current.with_changes(**values), rate)


def validate_draft(draft: InvoiceDraft) -> list[str]:
    """Return a message for every required field left blank."""
    return [
        f"{label} is required"
        for name, label in REQUIRED_FIELDS.items()
        if not getattr(draft, name).strip()
    ]


def build_record(draft: InvoiceDraft, now: Optional[datetime] = None, rate: Decimal = VAT_RATE) -> InvoiceRecord:
    """Freeze *draft* into a ledger record with fresh tax fields and numbering."""
    now = now or datetime.now(timezone.utc)
    vat_amount, total_price = calculate_vat(draft.selling_price, rate)
    fields = vars(draft).copy()
    fields.update(
        vat_amount=vat_amount,
        total_price=total_price,
        invoice_number=generate_invoice_number(now),
        date=format_invoice_date(now),
    )
    return InvoiceRecord(
        id=generate_record_id(),
        created_at=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        **fields,
    )


def build_mailto_link(draft, dealer: Mapping, bank: Mapping) -> str:
    """Return a ``mailto:`` URL carrying the invoice summary to the customer."""
    subject = f"{dealer['name']} Invoice {draft.invoice_number} - {draft.make} {draft.model}"
    body = "\n".join([
        f"Dear {draft.customer_name or 'Customer'},",
        "",
        f"Thank you for your business with {dealer['name']}.",
        "",
        f"Invoice: {draft.invoice_number}",
        f"Date: {draft.date}",
        "",
        "Vehicle Details:",
        f"{draft.make} {draft.model}",
        f"Year: {draft.year}",
        f"Color: {draft.color}",
        f"Chassis: {draft.chassis_no}",
        "",
        f"Total Amount: R {format_currency(draft.total_price)}",
        "",
        "Payment Details:",
        f"Bank: {bank['name']}",
        f"Account Holder: {bank['holder_name']}",
        f"Account Number: {bank['account_number']}",
        f"Branch Code: {bank['branch_number']}",
        f"Swift Code: {bank['swift_code']}",
        "",
        "Please find the attached invoice PDF.",
        "",
        "Best regards,",
        f"{dealer['name']} Team",
    ])
    return f"mailto:{draft.customer_email}?subject={quote(subject)}&body={quote(body)}"
