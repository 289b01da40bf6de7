"""
Flask extension instances.

Extensions are instantiated here (without an app) and bound to the
application inside the factory function ``create_app``.
"""

import mongoengine
from flask_login import LoginManager

from app.ledger.storage import create_blob_store
from app.services.auth_service import SupabaseAuthClient


def init_db(app):
    """Connect MongoEngine to the MongoDB instance configured in the app."""
    mongodb_uri = app.config.get(
        "MONGODB_URI", "mongodb://localhost:27017/tskauto"
    )
    mongoengine.connect(host=mongodb_uri)


def init_ledger_store(app):
    """Create the application-wide blob store behind every user's ledger."""
    backend = app.config.get("LEDGER_BACKEND", "mongo")
    if backend == "mongo":
        init_db(app)
    app.extensions["blob_store"] = create_blob_store(backend)


def init_auth_client(app):
    app.extensions["auth_client"] = SupabaseAuthClient(
        app.config["SUPABASE_URL"],
        app.config["SUPABASE_ANON_KEY"],
        timeout=app.config.get("SUPABASE_TIMEOUT", 10.0),
    )


login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message_category = "warning"
