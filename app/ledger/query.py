"""
Derived views over invoice history: search, date range, sort,
pagination and summary statistics.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence

from app.ledger.records import InvoiceRecord
from app.services.tax_service import ZERO, parse_amount, round2

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SECONDS_PER_DAY = 86400


class DateFilter(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Optional[str]) -> DateFilter:
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


class SortKey(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    NAME = "name"

    @classmethod
    def parse(cls, value: Optional[str]) -> SortKey:
        try:
            return cls(value)
        except ValueError:
            return cls.DATE


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> SortOrder:
        try:
            return cls(value)
        except ValueError:
            return cls.DESC


# Maximum age in days for each range; TODAY requires exactly zero.
_MAX_AGE_DAYS = {
    DateFilter.WEEK: 7,
    DateFilter.MONTH: 30,
    DateFilter.YEAR: 365,
}

SEARCH_FIELDS = (
    "invoice_number",
    "customer_name",
    "make",
    "model",
    "chassis_no",
    "license_no",
    "customer_email",
)


def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not text:
        return None
    try:
        parsed = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_between(now: datetime, created_at: datetime) -> int:
    """Whole days from *created_at* to *now*, truncated toward zero."""
    return int((now - created_at).total_seconds() / _SECONDS_PER_DAY)


def matches_search(record: InvoiceRecord, search_text: str) -> bool:
    needle = search_text.lower()
    if not needle:
        return True
    return any(needle in getattr(record, name).lower() for name in SEARCH_FIELDS)


def in_date_range(record: InvoiceRecord, date_filter: DateFilter, now: datetime) -> bool:
    if date_filter is DateFilter.ALL:
        return True
    created_at = parse_timestamp(record.created_at)
    if created_at is None:
        return False
    age = days_between(now, created_at)
    if date_filter is DateFilter.TODAY:
        return age == 0
    return age <= _MAX_AGE_DAYS[date_filter]


def _sort_value(record: InvoiceRecord, sort_key: SortKey):
    if sort_key is SortKey.AMOUNT:
        return parse_amount(record.total_price)
    if sort_key is SortKey.NAME:
        return record.customer_name.lower()
    return parse_timestamp(record.created_at) or _EPOCH


def query_records(
    records: Iterable[InvoiceRecord],
    search_text: str = "",
    date_filter: DateFilter = DateFilter.ALL,
    sort_key: SortKey = SortKey.DATE,
    sort_order: SortOrder = SortOrder.DESC,
    now: Optional[datetime] = None,
) -> list[InvoiceRecord]:
    """Filter by search text and date range, then sort. Never mutates *records*."""
    now = now or datetime.now(timezone.utc)
    selected = [
        r for r in records
        if matches_search(r, search_text or "") and in_date_range(r, date_filter, now)
    ]
    # sorted() is stable, including with reverse=True
    return sorted(
        selected,
        key=lambda r: _sort_value(r, sort_key),
        reverse=sort_order is SortOrder.DESC,
    )


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------
@dataclass
class Page:
    items: list[InvoiceRecord]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(records: Sequence[InvoiceRecord], page_size: int, page: int) -> Page:
    """Return page *page* (1-based) of *records*, clamped to the bounds."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    page = max(page, 1)
    start = (page - 1) * page_size
    return Page(
        items=list(records[start:start + page_size]),
        page=page,
        page_size=page_size,
        total_items=len(records),
        total_pages=math.ceil(len(records) / page_size),
    )


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------
@dataclass
class LedgerStats:
    count: int = 0
    total_revenue: Decimal = ZERO
    total_vat: Decimal = ZERO
    average_total: Decimal = ZERO
    highest: Optional[InvoiceRecord] = field(default=None)
    lowest: Optional[InvoiceRecord] = field(default=None)


def aggregate(records: Sequence[InvoiceRecord]) -> LedgerStats:
    """Count, sums, average and the first highest/lowest total."""
    stats = LedgerStats()
    highest_value = lowest_value = None
    for record in records:
        total = parse_amount(record.total_price)
        stats.count += 1
        stats.total_revenue += total
        stats.total_vat += parse_amount(record.vat_amount)
        if highest_value is None or total > highest_value:
            highest_value, stats.highest = total, record
        if lowest_value is None or total < lowest_value:
            lowest_value, stats.lowest = total, record
    if stats.count:
        stats.average_total = round2(stats.total_revenue / stats.count)
    return stats
