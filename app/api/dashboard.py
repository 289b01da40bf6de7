"""
API: History statistics.
"""

from flask import jsonify, request

from app.api import api_bp
from app.api.schemas import serialize_stats
from app.ledger import aggregate
from app.utils.decorators import api_login_required
from app.utils.helpers import HistoryParams, current_ledger


@api_bp.route("/history/stats", methods=["GET"])
@api_login_required
def history_stats():
    """
    Summary statistics over the filtered history.

    Accepts the same ``q``, ``range``, ``sort`` and ``order`` params as
    the history listing.
    """
    records = HistoryParams.from_args(request.args).run(current_ledger())
    return jsonify(serialize_stats(aggregate(records)))
