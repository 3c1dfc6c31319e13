"""
Mocked account session with write-through persistence.

There is no user backend: one existing account is hard-coded and sign-up
only refuses its email. The session state lives in two storage slots per
session, a logged-in flag and the profile JSON, and is kept in sync across
instances sharing the storage the same way bags are.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Callable, Optional

from pydantic import ValidationError

from ..models.session import (
    AVATAR_URLS,
    SessionStatus,
    SignInRequest,
    SignUpRequest,
    UserProfile,
)
from ..services.notifications import Notifier
from .storage import KeyValueStorage, StorageCorruptError, StorageError, StorageEvent

logger = logging.getLogger(__name__)

EXISTING_EMAIL = "existinguser@example.com"
EXISTING_PASSWORD = "Password123!"

LOGGED_IN_SLOT = "isUserLoggedIn"
PROFILE_SLOT = "userProfile"

SessionObserver = Callable[["SessionStore"], None]


def demo_profile() -> UserProfile:
    """Profile shown for the mocked existing account"""
    return UserProfile(
        full_name="Demo User",
        username="demouser123",
        email="demo@marketmate.com",
        joined_at=datetime.utcnow() - timedelta(days=30),
    )


class AuthError(Exception):
    """Raised when a sign-in or sign-up is refused"""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


class InvalidCredentials(AuthError):
    pass


class EmailAlreadyRegistered(AuthError):
    pass


class SessionStore:
    """Signed-in state for one client session"""

    def __init__(self, storage: KeyValueStorage, key: str, notifier: Notifier):
        self.storage = storage
        self.key = key
        self.notifier = notifier
        self.logged_in = False
        self.profile: Optional[UserProfile] = None
        self._observers: list[SessionObserver] = []
        self._remove_listener = storage.add_listener(self._on_storage_event)

    def slot_key(self, slot: str) -> str:
        return f"{self.key}:{slot}"

    # -------- Persistence --------
    def hydrate(self) -> None:
        self.logged_in, self.profile = self._read_slots(discard_corrupt=True)

    def reload(self) -> None:
        self.logged_in, self.profile = self._read_slots(discard_corrupt=False)
        self._notify_observers()

    def _read_slots(self, discard_corrupt: bool) -> tuple[bool, Optional[UserProfile]]:
        flag = self._read(LOGGED_IN_SLOT, discard_corrupt)
        raw_profile = self._read(PROFILE_SLOT, discard_corrupt)

        profile = None
        if raw_profile is not None:
            try:
                profile = UserProfile.model_validate_json(raw_profile)
            except (ValidationError, RecursionError) as e:
                logger.warning(f"Discarding malformed profile slot for {self.key!r}: {e}")
                if discard_corrupt:
                    self._remove(PROFILE_SLOT)

        return flag == "true", profile

    def _read(self, slot: str, discard_corrupt: bool) -> Optional[str]:
        try:
            return self.storage.get_item(self.slot_key(slot))
        except StorageCorruptError as e:
            logger.warning(f"Discarding unreadable slot {self.slot_key(slot)!r}: {e}")
            if discard_corrupt:
                self._remove(slot)
        except StorageError:
            logger.exception(f"Failed to read slot {self.slot_key(slot)!r}")
        return None

    def _write(self, slot: str, value: str) -> None:
        try:
            self.storage.set_item(self.slot_key(slot), value, origin=self)
        except StorageError:
            logger.exception(
                f"Failed to persist slot {self.slot_key(slot)!r}; continuing in memory"
            )

    def _remove(self, slot: str) -> None:
        try:
            self.storage.remove_item(self.slot_key(slot), origin=self)
        except StorageError:
            logger.exception(f"Failed to remove slot {self.slot_key(slot)!r}")

    def _on_storage_event(self, event: StorageEvent) -> None:
        if event.origin is self:
            return
        if event.key not in (self.slot_key(LOGGED_IN_SLOT), self.slot_key(PROFILE_SLOT)):
            return
        logger.debug(f"Session {self.key!r} changed by another writer; resyncing")
        self.reload()

    def _commit(self) -> None:
        if self.logged_in:
            self._write(LOGGED_IN_SLOT, "true")
        else:
            self._remove(LOGGED_IN_SLOT)
        if self.profile is not None:
            self._write(PROFILE_SLOT, self.profile.model_dump_json())
        else:
            self._remove(PROFILE_SLOT)
        self._notify_observers()

    # -------- Observers --------
    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        """Call `observer(session)` after every change; returns an unsubscribe function"""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify_observers(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception:
                logger.exception(f"Session observer failed for {self.key!r}")

    def close(self) -> None:
        self._remove_listener()
        self._observers.clear()

    # -------- Account actions --------
    def status(self) -> SessionStatus:
        profile = self.profile.model_copy() if self.profile else None
        return SessionStatus(logged_in=self.logged_in, profile=profile)

    def sign_in(self, request: SignInRequest) -> str:
        """Sign in against the mocked account; returns the notice text"""
        if request.email != EXISTING_EMAIL or request.password != EXISTING_PASSWORD:
            self.notifier.notify("Login Failed", "Invalid email or password.", destructive=True)
            raise InvalidCredentials("Login Failed", "Invalid email or password.")

        self.logged_in = True
        if self.profile is None:
            self.profile = demo_profile()
        self._commit()
        self.notifier.notify("Login Successful!", "Welcome back!")
        return "Welcome back!"

    def sign_up(self, request: SignUpRequest) -> str:
        """Register a new account and sign it in; returns the notice text"""
        if request.email == EXISTING_EMAIL:
            message = "This email address is already registered."
            self.notifier.notify("Registration Failed", message, destructive=True)
            raise EmailAlreadyRegistered("Registration Failed", message)

        self.logged_in = True
        self.profile = UserProfile(
            full_name=request.full_name,
            username=request.username,
            email=request.email,
        )
        self._commit()
        logger.info(f"Registered {request.username}")

        message = "You have successfully signed up. Welcome to MarketMate!"
        self.notifier.notify("Account Created!", message)
        return message

    def logout(self) -> str:
        self.logged_in = False
        self.profile = None
        self._commit()
        message = "You have been successfully logged out."
        self.notifier.notify("Logged Out", message)
        return message

    def change_avatar(self) -> Optional[str]:
        """Cycle the profile picture through the stock avatars"""
        if self.profile is None:
            return None

        try:
            index = AVATAR_URLS.index(self.profile.avatar_url)
        except ValueError:
            index = -1
        next_url = AVATAR_URLS[(index + 1) % len(AVATAR_URLS)]
        self.profile = self.profile.model_copy(update={"avatar_url": next_url})
        self._commit()

        message = "Your new avatar is now displayed."
        self.notifier.notify("Profile Picture Updated (Simulated)", message)
        return message


class SessionDatabase:
    """Session stores keyed by session id, least recently used closed past the cap"""

    def __init__(
        self,
        storage: KeyValueStorage,
        notifier: Notifier,
        key_prefix: str = "marketmateSession",
        max_sessions: int = 1000,
    ):
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.storage = storage
        self.notifier = notifier
        self.key_prefix = key_prefix
        self.max_sessions = max_sessions
        self.sessions: OrderedDict[str, SessionStore] = OrderedDict()

    def get_session(self, session_id: str) -> SessionStore:
        session = self.sessions.get(session_id)
        if session is not None:
            self.sessions.move_to_end(session_id)
            return session

        session = SessionStore(self.storage, f"{self.key_prefix}:{session_id}", self.notifier)
        session.hydrate()
        self.sessions[session_id] = session

        while len(self.sessions) > self.max_sessions:
            _, evicted = self.sessions.popitem(last=False)
            evicted.close()
        return session

    def close(self) -> None:
        for session in self.sessions.values():
            session.close()
        self.sessions.clear()
