"""
Request-scoped helpers: the signed-in user's ledger, invoice draft and
history view options.
"""

import json
from dataclasses import dataclass
from decimal import Decimal

from flask import current_app, g
from flask_login import current_user

from app.ledger import (
    DateFilter,
    InvoiceDraft,
    InvoiceLedger,
    InvoiceRecord,
    SortKey,
    SortOrder,
    history_key,
)
from app.services.invoice_service import sample_draft

DRAFT_KEY = "invoiceDraft"


def current_ledger() -> InvoiceLedger:
    """The signed-in user's ledger, loaded once per request."""
    if "ledger" not in g:
        g.ledger = InvoiceLedger(
            current_app.extensions["blob_store"],
            key=history_key(current_user.id),
            capacity=current_app.config["LEDGER_CAPACITY"],
        )
    return g.ledger


def vat_rate() -> Decimal:
    return Decimal(str(current_app.config["VAT_RATE"]))


def draft_key(user_id: str) -> str:
    return f"{DRAFT_KEY}:{user_id}"


def load_draft() -> InvoiceDraft:
    """The signed-in user's form state, or the sample vehicle on first visit."""
    raw = current_app.extensions["blob_store"].get(draft_key(current_user.id))
    if raw is None:
        return sample_draft()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        data = None
    if not isinstance(data, dict):
        current_app.logger.warning("Stored invoice draft for %s is malformed; using sample", current_user.id)
        return sample_draft()
    return InvoiceDraft.from_dict(data)


def store_draft(draft: InvoiceDraft) -> None:
    """Keep the draft server-side; the session cookie only carries the user."""
    current_app.extensions["blob_store"].put(draft_key(current_user.id), json.dumps(draft.to_dict()))


def discard_draft() -> None:
    current_app.extensions["blob_store"].delete(draft_key(current_user.id))


@dataclass
class HistoryParams:
    """History view options read from the query string."""

    search: str = ""
    date_filter: DateFilter = DateFilter.ALL
    sort_key: SortKey = SortKey.DATE
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1

    @classmethod
    def from_args(cls, args) -> "HistoryParams":
        try:
            page = max(int(args.get("page", 1)), 1)
        except (TypeError, ValueError):
            page = 1
        return cls(
            search=(args.get("q") or "").strip(),
            date_filter=DateFilter.parse(args.get("range")),
            sort_key=SortKey.parse(args.get("sort")),
            sort_order=SortOrder.parse(args.get("order")),
            page=page,
        )

    def to_args(self, **overrides) -> dict:
        args = {
            "q": self.search,
            "range": self.date_filter.value,
            "sort": self.sort_key.value,
            "order": self.sort_order.value,
            "page": self.page,
        }
        args.update(overrides)
        return args

    def run(self, ledger: InvoiceLedger) -> list[InvoiceRecord]:
        return ledger.query(self.search, self.date_filter, self.sort_key, self.sort_order)
