"""
Invoice form routes: edit, preview, save, PDF and e-mail.
"""

from decimal import Decimal

from flask import Blueprint, Response, current_app, flash, redirect, render_template, request, url_for
from flask_login import current_user, login_required

from app.services.invoice_service import (
    build_mailto_link,
    build_record,
    draft_from_form,
    new_draft,
    recalculate,
    validate_draft,
)
from app.services.pdf_service import render_invoice_pdf
from app.services.tax_service import adjust_price
from app.utils.helpers import current_ledger, load_draft, store_draft, vat_rate

invoices_bp = Blueprint("invoices", __name__, url_prefix="/invoice")

PRICE_STEP = Decimal("10000")


def pdf_response(invoice) -> Response:
    """Build a PDF download response for an invoice record or draft."""
    content, filename = render_invoice_pdf(
        invoice, current_app.config["DEALER"], current_app.config["BANK_INFO"]
    )
    return Response(
        content,
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# --------------------------------------------------------------------------
# Form
# --------------------------------------------------------------------------
@invoices_bp.route("", methods=["GET"])
@login_required
def form():
    return render_template(
        "invoice_form.html",
        draft=load_draft(),
        dealer=current_app.config["DEALER"],
        bank=current_app.config["BANK_INFO"],
        user=current_user,
    )


@invoices_bp.route("", methods=["POST"])
@login_required
def save():
    draft = draft_from_form(request.form, load_draft(), vat_rate())
    store_draft(draft)

    errors = validate_draft(draft)
    if errors:
        for message in errors:
            flash(message, "error")
        return redirect(url_for("invoices.form"))

    record = build_record(draft, rate=vat_rate())
    current_ledger().append(record)
    store_draft(record.to_draft())
    current_app.logger.info("Saved invoice %s for %s", record.invoice_number, current_user.email)
    flash("Vehicle details saved successfully!", "success")
    return redirect(url_for("invoices.form"))


@invoices_bp.route("/preview", methods=["POST"])
@login_required
def preview():
    """Apply edits and recompute VAT without saving to history."""
    store_draft(draft_from_form(request.form, load_draft(), vat_rate()))
    return redirect(url_for("invoices.form"))


# --------------------------------------------------------------------------
# Quick actions
# --------------------------------------------------------------------------
@invoices_bp.route("/reset", methods=["POST"])
@login_required
def reset():
    store_draft(new_draft())
    flash("All fields have been reset.", "info")
    return redirect(url_for("invoices.form"))


@invoices_bp.route("/new", methods=["POST"])
@login_required
def new_number():
    """Give the current draft a fresh invoice number and today's date."""
    fresh = new_draft()
    store_draft(load_draft().with_changes(invoice_number=fresh.invoice_number, date=fresh.date))
    return redirect(url_for("invoices.form"))


@invoices_bp.route("/adjust", methods=["POST"])
@login_required
def adjust():
    direction = request.form.get("direction", "up")
    delta = PRICE_STEP if direction == "up" else -PRICE_STEP
    draft = load_draft()
    draft = recalculate(draft.with_changes(selling_price=adjust_price(draft.selling_price, delta)), vat_rate())
    store_draft(draft)
    return redirect(url_for("invoices.form"))


# --------------------------------------------------------------------------
# PDF / e-mail
# --------------------------------------------------------------------------
@invoices_bp.route("/pdf")
@login_required
def download_pdf():
    return pdf_response(load_draft())


@invoices_bp.route("/email")
@login_required
def email():
    draft = load_draft()
    if not draft.customer_email:
        flash("Please enter customer email to send invoice.", "error")
        return redirect(url_for("invoices.form"))
    return redirect(build_mailto_link(
        draft, current_app.config["DEALER"], current_app.config["BANK_INFO"]
    ))
