"""
Invoice ledger: the persisted, newest-first collection of invoice records.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional

from app.ledger.query import DateFilter, SortKey, SortOrder, query_records
from app.ledger.records import InvoiceRecord
from app.ledger.storage import BlobStore

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 200
HISTORY_KEY = "invoiceHistory"


def history_key(user_id: str) -> str:
    """Blob key holding one user's invoice history."""
    return f"{HISTORY_KEY}:{user_id}"


def decode_records(blob: Optional[str]) -> list[InvoiceRecord]:
    """Parse a persisted blob, degrading to an empty list when malformed."""
    if not blob:
        return []
    try:
        data = json.loads(blob)
    except ValueError as exc:
        logger.warning("Invoice history is not valid JSON, starting empty: %s", exc)
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        logger.warning("Invoice history is not a list of records, starting empty")
        return []
    return [InvoiceRecord.from_dict(item) for item in data]


def encode_records(records) -> str:
    return json.dumps([r.to_dict() for r in records], ensure_ascii=False)


class InvoiceLedger:
    """Newest-first invoice history for one blob key.

    Loaded from *store* once on construction; every mutation writes the
    whole ledger back.
    """

    def __init__(self, store: BlobStore, key: str = HISTORY_KEY, capacity: int = DEFAULT_CAPACITY):
        self._store = store
        self._key = key
        self._capacity = capacity
        self._records: list[InvoiceRecord] = decode_records(store.get(key))

    @property
    def records(self) -> list[InvoiceRecord]:
        return list(self._records)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: str) -> Optional[InvoiceRecord]:
        return next((r for r in self._records if r.id == record_id), None)

    # -- Mutations ------------------------------------------------------------

    def append(self, record: InvoiceRecord) -> None:
        """Insert *record* at the front, dropping the oldest beyond capacity."""
        self._records.insert(0, record)
        if len(self._records) > self._capacity:
            dropped = len(self._records) - self._capacity
            del self._records[self._capacity:]
            logger.info("Invoice history full, dropped %d oldest record(s)", dropped)
        self.save()

    def remove(self, record_id: str) -> None:
        """Delete the record with *record_id*; absent ids are a no-op."""
        self._records = [r for r in self._records if r.id != record_id]
        self.save()

    def clear(self) -> None:
        self._records = []
        self._store.delete(self._key)

    def save(self) -> None:
        self._store.put(self._key, encode_records(self._records))

    # -- Views ----------------------------------------------------------------

    def query(
        self,
        search_text: str = "",
        date_filter: DateFilter = DateFilter.ALL,
        sort_key: SortKey = SortKey.DATE,
        sort_order: SortOrder = SortOrder.DESC,
        now: Optional[datetime] = None,
    ) -> list[InvoiceRecord]:
        """Filtered and sorted copy of the ledger."""
        return query_records(self._records, search_text, date_filter, sort_key, sort_order, now=now)
