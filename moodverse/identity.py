"""
Identity provider and session-change notification stream.

The provider is the sole authority on who is signed in. Callers learn about
sign-in / sign-out only through `IdentityStream`, never from return values.
"""
from __future__ import annotations
import logging
import re
import sqlite3
import uuid
from typing import Callable, Optional

from werkzeug.security import generate_password_hash, check_password_hash

from moodverse.models import Identity

logger = logging.getLogger(__name__)

Listener = Callable[[Optional[Identity]], None]

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LEN = 6


class AuthError(Exception):
    """Provider-side authentication failure. The message is user-facing."""


class IdentityStream:
    """Emits the current identity on subscribe and on every change."""

    def __init__(self):
        self._current: Optional[Identity] = None
        self._listener: Optional[Listener] = None

    @property
    def current(self) -> Optional[Identity]:
        return self._current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        if self._listener is not None:
            raise RuntimeError("IdentityStream already has a subscriber")
        self._listener = listener
        listener(self._current)

        def unsubscribe() -> None:
            if self._listener is listener:
                self._listener = None

        return unsubscribe

    def publish(self, identity: Optional[Identity]) -> None:
        self._current = identity
        logger.debug(f"[identity] session changed uid={identity.uid if identity else None}")
        if self._listener is not None:
            self._listener(identity)


class IdentityProvider:
    """Interface of the external identity service."""

    @property
    def stream(self) -> IdentityStream:
        raise NotImplementedError

    async def sign_in(self, email: str, password: str) -> None:
        raise NotImplementedError

    async def create_account(self, email: str, password: str) -> Identity:
        raise NotImplementedError

    async def sign_out(self) -> None:
        raise NotImplementedError


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class LocalIdentityProvider(IdentityProvider):
    """
    Credential store in SQLite with werkzeug password hashes.

    Creating an account signs it in, the same way hosted providers do.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._stream = IdentityStream()
        self.init_db()

    @property
    def stream(self) -> IdentityStream:
        return self._stream

    def init_db(self) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS accounts (
                    uid TEXT PRIMARY KEY,
                    email TEXT UNIQUE NOT NULL,
                    password_hash TEXT NOT NULL
                )
                """
            )
            conn.commit()

    async def sign_in(self, email: str, password: str) -> None:
        email = _normalize_email(email)
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT uid, password_hash FROM accounts WHERE email=?", (email,)
            ).fetchone()
        if not row or not check_password_hash(row[1], password or ""):
            logger.info(f"[identity] sign-in rejected email={email}")
            raise AuthError("Invalid email or password.")
        self._stream.publish(Identity(uid=row[0], email=email))

    async def create_account(self, email: str, password: str) -> Identity:
        email = _normalize_email(email)
        if not _EMAIL_RE.match(email):
            raise AuthError("Invalid email address.")
        if len(password or "") < MIN_PASSWORD_LEN:
            raise AuthError(f"Password should be at least {MIN_PASSWORD_LEN} characters.")

        uid = uuid.uuid4().hex
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    "INSERT INTO accounts (uid, email, password_hash) VALUES (?, ?, ?)",
                    (uid, email, generate_password_hash(password)),
                )
                conn.commit()
        except sqlite3.IntegrityError:
            raise AuthError("Email already in use.")

        identity = Identity(uid=uid, email=email)
        logger.info(f"[identity] account created uid={uid}")
        self._stream.publish(identity)
        return identity

    async def sign_out(self) -> None:
        self._stream.publish(None)
