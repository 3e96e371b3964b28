"""
Session store: authenticated identity plus async auth-operation status.

Identity is only ever set by the provider's notification stream (`set_user`);
sign_in / sign_up / sign_out merely trigger the provider.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Optional

from pydantic import ValidationError

from moodverse.identity import AuthError, IdentityProvider
from moodverse.models import Identity, RegistrationProfile, SessionState
from moodverse.profiles import ProfileStore, ProfileWriteError

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Request timed out. Please try again."
GENERIC_AUTH_MESSAGE = "Something went wrong. Please try again."
PROFILE_WRITE_MESSAGE = "Account created, but your profile could not be saved."


def _validation_message(err: ValidationError) -> str:
    first = err.errors()[0] if err.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"Invalid {loc}: {first.get('msg', 'invalid value')}" if loc else "Invalid registration details."


class SessionStore:
    def __init__(self, provider: IdentityProvider, profiles: ProfileStore, timeout: float = 0.0):
        self.provider = provider
        self.profiles = profiles
        self.timeout = float(timeout)
        self.identity: Optional[Identity] = None
        self.is_loading = False
        self.last_error: Optional[str] = None
        self._listeners: list[Callable[[Optional[Identity]], None]] = []
        self._unsubscribe: Optional[Callable[[], None]] = None

    # ---- lifecycle ----
    def start(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self.provider.stream.subscribe(self.set_user)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_change(self, listener: Callable[[Optional[Identity]], None]) -> None:
        """Register a callback fired after every identity change."""
        self._listeners.append(listener)

    # ---- reducer ----
    def set_user(self, identity: Optional[Identity]) -> None:
        previous = self.identity
        self.identity = identity
        if (previous and previous.uid) != (identity and identity.uid):
            logger.info(f"[session] identity -> {identity.uid if identity else None}")
        for listener in list(self._listeners):
            listener(identity)

    @property
    def authenticated(self) -> bool:
        return self.identity is not None

    def snapshot(self) -> SessionState:
        return SessionState(identity=self.identity, is_loading=self.is_loading, last_error=self.last_error)

    # ---- operations ----
    async def _call(self, op: Callable[[], Awaitable]):
        coro = op()
        if self.timeout > 0:
            return await asyncio.wait_for(coro, timeout=self.timeout)
        return await coro

    async def _run(self, name: str, op: Callable[[], Awaitable[None]]) -> None:
        self.is_loading = True
        self.last_error = None
        try:
            await op()
        except AuthError as e:
            self.last_error = str(e)
        except asyncio.TimeoutError:
            logger.warning(f"[session] {name} timed out after {self.timeout}s")
            self.last_error = TIMEOUT_MESSAGE
        except Exception as e:
            logger.exception(f"[session] {name} failed")
            self.last_error = str(e) or GENERIC_AUTH_MESSAGE
        finally:
            self.is_loading = False

    async def sign_in(self, email: str, password: str) -> None:
        logger.debug(f"[session] sign_in email={email}")
        await self._run("sign_in", lambda: self._call(lambda: self.provider.sign_in(email, password)))

    async def sign_up(self, email: str, password: str, name: str, gender: str, contact_number: str) -> None:
        logger.debug(f"[session] sign_up email={email}")

        async def op() -> None:
            try:
                profile = RegistrationProfile(
                    name=name, gender=gender, contact_number=contact_number, email=email,
                )
            except ValidationError as e:
                raise AuthError(_validation_message(e))

            identity = await self._call(lambda: self.provider.create_account(email, password))
            try:
                await self._call(lambda: self.profiles.write(identity.uid, profile))
            except (ProfileWriteError, asyncio.TimeoutError):
                # Account stays; no rollback and no retry
                logger.exception(f"[session] profile write failed uid={identity.uid}")
                raise AuthError(PROFILE_WRITE_MESSAGE)

        await self._run("sign_up", op)

    async def sign_out(self) -> None:
        logger.debug("[session] sign_out")
        await self._run("sign_out", lambda: self._call(self.provider.sign_out))
