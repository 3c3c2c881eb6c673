"""Admin authentication gate.

With a remote auth provider configured, credentials are checked by Firebase
Auth. Otherwise a single demo credential pair is accepted. Either way the
resulting session token lives in the client session with an expiry.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

import httpx

from storefront.core.config import settings
from storefront.core.security import get_password_hash, verify_password
from storefront.schemas.auth import AdminUser
from storefront.services.subscriptions import Unsubscribe, poll
from storefront.utils.time import now_ms

logger = logging.getLogger(__name__)

AUTH_SESSION_KEY: str = "amma_auth_session"
DEMO_UID: str = "demo_user_123"

FIREBASE_ERROR_MESSAGES: dict[str, str] = {
    "EMAIL_NOT_FOUND": "Invalid email or password",
    "INVALID_PASSWORD": "Invalid email or password",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password",
    "INVALID_EMAIL": "Invalid email address",
    "USER_DISABLED": "This account has been disabled",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts, try again later",
}

Session = MutableMapping[str, Any]


class AuthenticationError(Exception):
    """Login rejected; the message is safe to show to the user."""


class FirebaseAuthProvider:
    """Email/password sign-in against the Firebase Auth REST API."""

    def __init__(self, api_key: str, *, client: httpx.Client | None = None, url: str | None = None) -> None:
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=10.0)
        self._url = url or settings.firebase_auth_url

    def sign_in(self, email: str, password: str) -> tuple[AdminUser, int]:
        """Return the signed-in user and the token lifetime in seconds."""
        try:
            response = self._client.post(
                self._url,
                params={"key": self._api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as exc:
            logger.warning("Auth provider unreachable", exc_info=True)
            raise AuthenticationError("Authentication service unavailable") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code != 200:
            code = str(body.get("error", {}).get("message", "")).split(" ")[0]
            raise AuthenticationError(FIREBASE_ERROR_MESSAGES.get(code, "Login failed"))

        user = AdminUser(email=body.get("email") or email, uid=body.get("localId", ""), is_anonymous=False)
        return user, int(body.get("expiresIn", 3600))


class AuthGate:
    """Login, logout and session presence for the admin dashboard."""

    def __init__(
        self,
        provider: FirebaseAuthProvider | None = None,
        *,
        demo_email: str | None = None,
        demo_password: str | None = None,
        session_hours: int | None = None,
        poll_interval: float | None = None,
    ) -> None:
        self._provider = provider
        self._demo_email = settings.demo_admin_email if demo_email is None else demo_email
        self._demo_password_hash = get_password_hash(
            settings.demo_admin_password if demo_password is None else demo_password
        )
        self._session_ms = (settings.admin_session_hours if session_hours is None else session_hours) * 3600 * 1000
        self._poll_interval = settings.auth_poll_interval if poll_interval is None else poll_interval

    @property
    def remote_enabled(self) -> bool:
        return self._provider is not None

    def login(self, session: Session, email: str, password: str) -> AdminUser:
        """Authenticate and store the session token.

        Raises:
            AuthenticationError: with a message describing the rejection.
        """
        email = email.strip()
        if self._provider is not None:
            user, expires_in = self._provider.sign_in(email, password)
            expires = now_ms() + expires_in * 1000
        else:
            if email != self._demo_email or not verify_password(password, self._demo_password_hash):
                logger.info("Rejected local login for %s", email)
                raise AuthenticationError("Invalid credentials")
            user = AdminUser(email=email, uid=DEMO_UID, is_anonymous=False)
            expires = now_ms() + self._session_ms

        session[AUTH_SESSION_KEY] = {**user.model_dump(by_alias=True), "expires": expires}
        logger.info("Admin %s signed in", user.email)
        return user

    def logout(self, session: Session) -> None:
        session.pop(AUTH_SESSION_KEY, None)

    def current_user(self, session: Session) -> AdminUser | None:
        """Return the session identity; an expired token is removed."""
        token = session.get(AUTH_SESSION_KEY)
        if not isinstance(token, dict):
            return None
        if int(token.get("expires", 0)) > now_ms():
            return AdminUser.model_validate(token)
        session.pop(AUTH_SESSION_KEY, None)
        return None

    def subscribe(self, session: Session, callback: Callable[[AdminUser | None], None]) -> Unsubscribe:
        """Report session presence now and on every poll."""
        return poll(lambda: self.current_user(session), callback, self._poll_interval, name="auth-poll")


def build_auth_gate() -> AuthGate:
    provider = FirebaseAuthProvider(settings.firebase_api_key) if settings.remote_auth_enabled else None
    return AuthGate(provider)
