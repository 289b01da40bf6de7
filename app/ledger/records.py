"""
Invoice record types.

``InvoiceRecord`` is the frozen snapshot stored in the ledger;
``InvoiceDraft`` is the editable form state it is created from.
Both serialise to the camelCase JSON keys used by the persisted blob.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace

# Python attribute -> persisted JSON key
_JSON_KEYS = {
    "id": "id",
    "make": "make",
    "model": "model",
    "mm_code": "mmCode",
    "chassis_no": "chassisNo",
    "engine_no": "engineNo",
    "register_no": "registerNo",
    "kilometers": "kilometers",
    "year": "year",
    "condition": "condition",
    "color": "color",
    "license_no": "licenseNo",
    "customer_name": "customerName",
    "customer_email": "customerEmail",
    "customer_phone": "customerPhone",
    "address": "address",
    "selling_price": "sellingPrice",
    "vat_amount": "vatAmount",
    "total_price": "totalSellingPrice",
    "invoice_number": "invoiceNumber",
    "date": "date",
    "notes": "notes",
    "created_at": "createdAt",
}


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass
class InvoiceDraft:
    """Editable invoice form state; every attribute is a plain string."""

    make: str = ""
    model: str = ""
    mm_code: str = ""
    chassis_no: str = ""
    engine_no: str = ""
    register_no: str = ""
    kilometers: str = ""
    year: str = ""
    condition: str = "USED"
    color: str = ""
    license_no: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    address: str = ""
    selling_price: str = ""
    vat_amount: str = ""
    total_price: str = ""
    invoice_number: str = ""
    date: str = ""
    notes: str = ""

    def to_dict(self) -> dict:
        return {_JSON_KEYS[f.name]: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> InvoiceDraft:
        return cls(**{f.name: _as_text(data.get(_JSON_KEYS[f.name], f.default)) for f in fields(cls)})

    def with_changes(self, **changes) -> InvoiceDraft:
        return replace(self, **changes)


@dataclass(frozen=True)
class InvoiceRecord:
    """One historical invoice snapshot. Immutable once created."""

    id: str
    make: str = ""
    model: str = ""
    mm_code: str = ""
    chassis_no: str = ""
    engine_no: str = ""
    register_no: str = ""
    kilometers: str = ""
    year: str = ""
    condition: str = ""
    color: str = ""
    license_no: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    address: str = ""
    selling_price: str = ""
    vat_amount: str = ""
    total_price: str = ""
    invoice_number: str = ""
    date: str = ""
    notes: str = ""
    created_at: str = ""

    def to_dict(self) -> dict:
        return {_JSON_KEYS[name]: value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict) -> InvoiceRecord:
        """Build a record from persisted JSON.

        Unknown keys are ignored and missing keys read as empty strings.
        """
        return cls(**{f.name: _as_text(data.get(_JSON_KEYS[f.name])) for f in fields(cls)})

    def to_draft(self) -> InvoiceDraft:
        """Copy the record's fields into a fresh editable draft."""
        draft_fields = {f.name for f in fields(InvoiceDraft)}
        return InvoiceDraft(**{k: v for k, v in asdict(self).items() if k in draft_fields})
