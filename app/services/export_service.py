"""
CSV rendering of invoice history.
"""

from typing import Iterable

from app.ledger.records import InvoiceRecord

CSV_HEADER = [
    "Invoice Number", "Date", "Customer Name", "Email", "Phone",
    "Make", "Model", "Year", "Color", "Condition", "Kilometers",
    "Selling Price", "VAT Amount", "Total Price", "Chassis No",
    "License No", "Address", "Notes",
]

# Free-text columns, quoted whatever their content.
ALWAYS_QUOTED = {"customer_name", "address", "notes"}

_COLUMNS = [
    "invoice_number", "date", "customer_name", "customer_email", "customer_phone",
    "make", "model", "year", "color", "condition", "kilometers",
    "selling_price", "vat_amount", "total_price", "chassis_no",
    "license_no", "address", "notes",
]


def _csv_field(value: str, force: bool = False) -> str:
    if force or any(ch in value for ch in ',"\r\n'):
        return '"' + value.replace('"', '""') + '"'
    return value


def records_to_csv(records: Iterable[InvoiceRecord]) -> str:
    """One header row plus one row per record, in the order given."""
    lines = [",".join(CSV_HEADER)]
    for record in records:
        lines.append(",".join(
            _csv_field(getattr(record, column), column in ALWAYS_QUOTED)
            for column in _COLUMNS
        ))
    return "\r\n".join(lines) + "\r\n"
