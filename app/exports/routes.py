"""
CSV export routes.
"""

from datetime import datetime

from flask import Blueprint, Response, request
from flask_login import login_required

from app.services.export_service import records_to_csv
from app.utils.helpers import HistoryParams, current_ledger

exports_bp = Blueprint("exports", __name__, url_prefix="/export")


def _csv_response(content: str, filename: str) -> Response:
    """Build a CSV download response."""
    return Response(
        content,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _timestamp() -> str:
    return datetime.utcnow().strftime("%Y%m%d_%H%M%S")


# --------------------------------------------------------------------------
# Invoice history
# --------------------------------------------------------------------------
@exports_bp.route("/history")
@login_required
def history_csv():
    """Every record matching the current history filters, in display order."""
    records = HistoryParams.from_args(request.args).run(current_ledger())
    return _csv_response(records_to_csv(records), f"invoice_history_{_timestamp()}.csv")
