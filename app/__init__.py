"""
TSK Auto invoicing: application package.

Uses the *application factory* pattern so the app can be created with
different configurations (development, testing, production).
"""

import os

from flask import Flask, redirect, url_for
from flask_login import current_user

from config import config_by_name


def create_app(config_name: str | None = None) -> Flask:
    """Build and return a fully configured Flask application."""
    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -- Extensions --------------------------------------------------------
    from app.extensions import init_auth_client, init_ledger_store, login_manager

    init_ledger_store(app)
    init_auth_client(app)
    login_manager.init_app(app)

    # -- Blueprints --------------------------------------------------------
    from app.auth import auth_bp
    from app.invoices import invoices_bp
    from app.history import history_bp
    from app.exports import exports_bp
    from app.api import api_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(exports_bp)
    app.register_blueprint(api_bp)

    # -- Template helpers --------------------------------------------------
    from app.services.tax_service import format_currency

    app.jinja_env.filters["currency"] = format_currency

    # -- Root redirect -----------------------------------------------------
    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for("invoices.form"))
        return redirect(url_for("auth.login"))

    app.logger.info("Invoice history backend: %s", app.config["LEDGER_BACKEND"])
    return app
