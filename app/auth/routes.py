"""
Authentication routes: login, signup, logout.
"""

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for
from flask_login import current_user, login_required, login_user, logout_user

from app.extensions import login_manager
from app.models import SessionUser
from app.services.auth_service import AuthError, AuthSession, friendly_auth_message
from app.utils.helpers import discard_draft

auth_bp = Blueprint("auth", __name__)

USER_SESSION_KEY = "auth_user"


@login_manager.user_loader
def load_user(user_id: str):
    """Callback used by Flask-Login to reload the user from the session."""
    data = session.get(USER_SESSION_KEY)
    if not data or data.get("id") != user_id:
        return None
    return SessionUser.from_session(data)


def _auth_client():
    return current_app.extensions["auth_client"]


def _start_session(auth: AuthSession) -> None:
    user = SessionUser(auth.user_id, auth.email, auth.full_name, auth.access_token)
    session[USER_SESSION_KEY] = user.to_session()
    login_user(user)


# --------------------------------------------------------------------------
# Login / Logout
# --------------------------------------------------------------------------
@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("invoices.form"))

    if request.method == "POST":
        email = (request.form.get("email") or "").strip()
        password = request.form.get("password") or ""

        if not email or not password:
            flash("Email and password are required", "error")
            return render_template("login.html", email=email)

        try:
            auth = _auth_client().sign_in(email, password)
        except AuthError as exc:
            current_app.logger.info("Sign-in rejected for %s: %s", email, exc.message)
            flash(friendly_auth_message(exc), "error")
            return render_template("login.html", email=email)

        _start_session(auth)
        return redirect(url_for("invoices.form"))

    return render_template("login.html", email="")


@auth_bp.route("/signup", methods=["GET", "POST"])
def signup():
    if current_user.is_authenticated:
        return redirect(url_for("invoices.form"))

    if request.method == "POST":
        full_name = (request.form.get("full_name") or "").strip()
        email = (request.form.get("email") or "").strip()
        password = request.form.get("password") or ""
        confirm = request.form.get("confirm_password") or ""

        if not full_name or not email or not password:
            flash("Name, email and password are required", "error")
            return render_template("signup.html", full_name=full_name, email=email)

        if password != confirm:
            flash("Passwords don't match!", "error")
            return render_template("signup.html", full_name=full_name, email=email)

        try:
            auth = _auth_client().sign_up(full_name, email, password)
        except AuthError as exc:
            current_app.logger.info("Sign-up rejected for %s: %s", email, exc.message)
            flash(friendly_auth_message(exc), "error")
            return render_template("signup.html", full_name=full_name, email=email)

        if auth is None:
            flash("Account created. Check your email to confirm it, then sign in.", "success")
            return redirect(url_for("auth.login"))

        _start_session(auth)
        return redirect(url_for("invoices.form"))

    return render_template("signup.html", full_name="", email="")


@auth_bp.route("/logout")
@login_required
def logout():
    _auth_client().sign_out(current_user.access_token)
    discard_draft()
    logout_user()
    session.pop(USER_SESSION_KEY, None)
    return redirect(url_for("auth.login"))
