"""
Serialization helpers for API responses.
"""

from __future__ import annotations

from typing import Optional

from app.ledger import InvoiceRecord, LedgerStats, Page


def serialize_record(record: Optional[InvoiceRecord]) -> Optional[dict]:
    """Return the persisted camelCase form of a record."""
    if record is None:
        return None
    return record.to_dict()


def serialize_page(page: Page) -> dict:
    return {
        "invoices": [serialize_record(r) for r in page.items],
        "total": page.total_items,
        "page": page.page,
        "pages": page.total_pages,
        "per_page": page.page_size,
    }


def serialize_stats(stats: LedgerStats) -> dict:
    return {
        "count": stats.count,
        "total_revenue": f"{stats.total_revenue:.2f}",
        "total_vat": f"{stats.total_vat:.2f}",
        "average_total": f"{stats.average_total:.2f}",
        "highest": serialize_record(stats.highest),
        "lowest": serialize_record(stats.lowest),
    }
