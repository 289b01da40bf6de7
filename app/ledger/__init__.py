"""
Invoice history: records, blob storage, the ledger and its query views.
"""

from app.ledger.ledger import InvoiceLedger, history_key
from app.ledger.query import (
    DateFilter,
    LedgerStats,
    Page,
    SortKey,
    SortOrder,
    aggregate,
    paginate,
    query_records,
)
from app.ledger.records import InvoiceDraft, InvoiceRecord
from app.ledger.storage import BlobStore, MemoryBlobStore, MongoBlobStore, create_blob_store

__all__ = [
    "BlobStore",
    "DateFilter",
    "InvoiceDraft",
    "InvoiceLedger",
    "InvoiceRecord",
    "LedgerStats",
    "MemoryBlobStore",
    "MongoBlobStore",
    "Page",
    "SortKey",
    "SortOrder",
    "aggregate",
    "create_blob_store",
    "history_key",
    "paginate",
    "query_records",
]
