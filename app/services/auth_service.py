"""
Supabase authentication over the GoTrue REST API.

Sign-in, sign-up and sign-out by email and password. Provider failures
surface as ``AuthError`` carrying the provider's own wording; the web layer
turns that into one of a few user-facing messages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

GENERIC_AUTH_MESSAGE = "Something went wrong. Please try again."
UNREACHABLE_MESSAGE = "Unable to reach the authentication service. Please try again later."

# (substring of provider error, message shown to the user), first match wins
_AUTH_MESSAGES = (
    ("invalid login credentials", "Invalid email or password."),
    ("email not confirmed", "Please confirm your email address before signing in."),
    ("user already registered", "An account with this email already exists."),
    ("already been registered", "An account with this email already exists."),
    ("password should be at least", "Password must be at least 6 characters long."),
    ("unable to validate email address", "Please enter a valid email address."),
    ("rate limit", "Too many attempts. Please wait a moment and try again."),
)


class AuthError(Exception):
    """Raised when the auth provider rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthUnavailableError(AuthError):
    """Raised when the auth provider cannot be reached."""


def friendly_auth_message(error: AuthError) -> str:
    """Map a provider error onto a short message for the login/signup forms."""
    if isinstance(error, AuthUnavailableError):
        return UNREACHABLE_MESSAGE
    raw = (error.message or "").lower()
    for needle, message in _AUTH_MESSAGES:
        if needle in raw:
            return message
    return GENERIC_AUTH_MESSAGE


@dataclass
class AuthSession:
    """A signed-in Supabase user."""

    user_id: str
    email: str
    full_name: str
    access_token: str

    @classmethod
    def from_payload(cls, payload: dict) -> AuthSession:
        user = payload.get("user") or {}
        metadata = user.get("user_metadata") or {}
        return cls(
            user_id=user.get("id", ""),
            email=user.get("email", ""),
            full_name=metadata.get("full_name", ""),
            access_token=payload.get("access_token", ""),
        )


class SupabaseAuthClient:
    """Thin client for the Supabase auth endpoints the app uses."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=f"{url.rstrip('/')}/auth/v1",
            headers={"apikey": anon_key, "Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )
        self._anon_key = anon_key

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def sign_in(self, email: str, password: str) -> AuthSession:
        payload = self._post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return AuthSession.from_payload(payload)

    def sign_up(self, full_name: str, email: str, password: str) -> Optional[AuthSession]:
        """Create an account.

        Returns the new session, or None when the project requires the user
        to confirm their email first.
        """
        payload = self._post(
            "/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name}},
        )
        if not payload.get("access_token"):
            return None
        return AuthSession.from_payload(payload)

    def sign_out(self, access_token: str) -> None:
        """Revoke *access_token*. Failures are logged, never raised."""
        try:
            self._post("/logout", token=access_token)
        except AuthError as exc:
            logger.warning("Supabase sign-out failed: %s", exc.message)

    def close(self) -> None:
        self._client.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _post(self, path: str, *, token: Optional[str] = None, params=None, json=None) -> dict:
        headers = {"Authorization": f"Bearer {token or self._anon_key}"}
        try:
            response = self._client.post(path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise AuthUnavailableError(str(exc)) from exc

        if response.is_error:
            raise AuthError(_error_message(response), response.status_code)
        if response.status_code == 204 or not response.content:
            return {}
        return response.json()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if not isinstance(body, dict):
        return str(body)
    for key in ("msg", "error_description", "message", "error"):
        if body.get(key):
            return str(body[key])
    return f"HTTP {response.status_code}"
