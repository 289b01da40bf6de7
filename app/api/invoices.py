"""
API: VAT calculation and invoice history.
"""

from flask import current_app, jsonify, request

from app.api import api_bp
from app.api.schemas import serialize_page, serialize_record
from app.ledger import paginate
from app.services.tax_service import calculate_vat, sanitize_price
from app.utils.decorators import api_login_required
from app.utils.helpers import HistoryParams, current_ledger, vat_rate


# --------------------------------------------------------------------------
# VAT
# --------------------------------------------------------------------------
@api_bp.route("/vat", methods=["POST"])
@api_login_required
def vat():
    """
    Recompute VAT for a selling price as the user types.

    JSON body: { "sellingPrice": "104347.83" }
    """
    data = request.get_json(silent=True) or {}
    selling_price = sanitize_price(str(data.get("sellingPrice") or ""))
    vat_amount, total_price = calculate_vat(selling_price, vat_rate())
    return jsonify({
        "sellingPrice": selling_price,
        "vatAmount": vat_amount,
        "totalSellingPrice": total_price,
    })


# --------------------------------------------------------------------------
# List history
# --------------------------------------------------------------------------
@api_bp.route("/history", methods=["GET"])
@api_login_required
def list_history():
    """
    Filtered, sorted, paginated history.

    Optional query params: q, range, sort, order, page, per_page.
    """
    params = HistoryParams.from_args(request.args)
    try:
        per_page = min(max(int(request.args.get("per_page", 0)), 0), 100)
    except ValueError:
        per_page = 0
    per_page = per_page or current_app.config["HISTORY_PAGE_SIZE"]

    records = params.run(current_ledger())
    return jsonify(serialize_page(paginate(records, per_page, params.page)))


# --------------------------------------------------------------------------
# Single record
# --------------------------------------------------------------------------
@api_bp.route("/history/<record_id>", methods=["GET"])
@api_login_required
def get_record(record_id):
    record = current_ledger().get(record_id)
    if record is None:
        return jsonify({"error": "Invoice not found"}), 404
    return jsonify(serialize_record(record))


@api_bp.route("/history/<record_id>", methods=["DELETE"])
@api_login_required
def delete_record(record_id):
    """Remove a record. Unknown ids succeed without changing anything."""
    current_ledger().remove(record_id)
    return jsonify({"deleted": record_id})
