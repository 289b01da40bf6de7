"""
RESTful API v1: JSON endpoints for the invoice form and history.

All routes are prefixed with ``/api/v1``.
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/api/v1")

from app.api import invoices, dashboard  # noqa: E402, F401
