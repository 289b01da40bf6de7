"""
Invoice history routes: search, filter, sort, paginate, delete, reload.
"""

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from app.invoices.routes import pdf_response
from app.ledger import DateFilter, SortKey, SortOrder, aggregate, paginate
from app.utils.helpers import HistoryParams, current_ledger, store_draft

history_bp = Blueprint("history", __name__, url_prefix="/history")


def _get_record(record_id):
    """Fetch a history record by id, flashing when it is missing."""
    record = current_ledger().get(record_id)
    if record is None:
        flash("Invoice not found in history.", "error")
    return record


@history_bp.route("")
@login_required
def index():
    params = HistoryParams.from_args(request.args)
    ledger = current_ledger()
    records = params.run(ledger)
    page = paginate(records, current_app.config["HISTORY_PAGE_SIZE"], params.page)
    return render_template(
        "history.html",
        page=page,
        stats=aggregate(records),
        params=params,
        stored_count=len(ledger),
        capacity=ledger.capacity,
        date_filters=list(DateFilter),
        sort_keys=list(SortKey),
        sort_orders=list(SortOrder),
        user=current_user,
    )


@history_bp.route("/<record_id>/load", methods=["POST"])
@login_required
def load(record_id):
    """Copy a stored invoice into the form as a fresh editable draft."""
    record = _get_record(record_id)
    if record is None:
        return redirect(url_for("history.index"))
    store_draft(record.to_draft())
    flash(f"Invoice {record.invoice_number} loaded into the form.", "info")
    return redirect(url_for("invoices.form"))


@history_bp.route("/<record_id>/pdf")
@login_required
def download_pdf(record_id):
    record = _get_record(record_id)
    if record is None:
        return redirect(url_for("history.index"))
    return pdf_response(record)


@history_bp.route("/<record_id>/delete", methods=["POST"])
@login_required
def delete(record_id):
    current_ledger().remove(record_id)
    flash("Invoice removed from history.", "info")
    return redirect(url_for("history.index", **HistoryParams.from_args(request.args).to_args()))


@history_bp.route("/clear", methods=["POST"])
@login_required
def clear():
    current_ledger().clear()
    current_app.logger.info("Invoice history cleared for %s", current_user.email)
    flash("Invoice history cleared.", "info")
    return redirect(url_for("history.index"))
