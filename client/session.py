"""Session resolution for the storefront client.

One storage backend, one rule: ``resolve()`` asks the server who the token
belongs to and caches the answer for a fixed TTL until something invalidates
it (login, logout, register, a 401 or 404). Any other failure reads as
logged out without touching storage. ``current()`` is the offline peek at
whatever storage holds, without verifying anything.
"""
import logging
import time
from collections import namedtuple

from client.api import ApiError, NotFoundError, UnauthorizedError
from client.storage import STORAGE_KEYS

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 5 * 60

Session = namedtuple("Session", ["user", "role"])
ANONYMOUS = Session(None, None)


class AccessDenied(Exception):
    """Raised by access gates; ``redirect`` names the page to send the user to."""

    def __init__(self, redirect, reason):
        super().__init__(reason)
        self.redirect = redirect


class SessionManager:
    def __init__(self, api, storage, ttl=CACHE_TTL_SECONDS, clock=time.monotonic):
        self.api = api
        self.storage = storage
        self.ttl = ttl
        self._clock = clock
        self._cached = None
        self._expires_at = 0.0

    def current(self):
        token = self.storage.get(STORAGE_KEYS["TOKEN"])
        user = self.storage.get(STORAGE_KEYS["USER"])
        if not token or not isinstance(user, dict):
            return ANONYMOUS
        return Session(user, user.get("role") or self.storage.get(STORAGE_KEYS["USER_ROLE"]))

    def resolve(self):
        if self._cached is not None and self._clock() < self._expires_at:
            return self._cached

        if not self.storage.get(STORAGE_KEYS["TOKEN"]):
            return ANONYMOUS

        try:
            user = self.api.me()
        except (UnauthorizedError, NotFoundError):
            logger.info("Stored token rejected, clearing session")
            self._clear_storage()
            self.invalidate()
            return ANONYMOUS
        except ApiError as e:
            logger.warning("Could not resolve session: %s", e)
            return ANONYMOUS

        self._remember(user)
        return self._cached

    def login(self, email, password):
        result = self.api.login(email, password)
        self._store(result)
        return result["user"]

    def register(self, data):
        result = self.api.register(data)
        self._store(result)
        return result["user"]

    def logout(self):
        try:
            self.api.logout()
        except ApiError as e:
            # logout is local; the server keeps no session
            logger.warning("Logout request failed: %s", e)
        self._clear_storage()
        self.invalidate()

    def invalidate(self):
        self._cached = None
        self._expires_at = 0.0

    def require_role(self, role=None):
        session = self.resolve()
        if session.user is None:
            raise AccessDenied("register", "Not logged in")
        if role is not None and session.role != role:
            raise AccessDenied("register", f"Requires role {role}, got {session.role}")
        return session

    def _store(self, result):
        user = result["user"]
        self.storage.set(STORAGE_KEYS["TOKEN"], result["token"])
        self.storage.set(STORAGE_KEYS["USER"], user)
        self.storage.set(STORAGE_KEYS["USER_ROLE"], user["role"])
        self.invalidate()

    def _remember(self, user):
        self.storage.set(STORAGE_KEYS["USER"], user)
        self.storage.set(STORAGE_KEYS["USER_ROLE"], user["role"])
        self._cached = Session(user, user["role"])
        self._expires_at = self._clock() + self.ttl

    def _clear_storage(self):
        for key in ("TOKEN", "USER", "USER_ROLE"):
            self.storage.remove(STORAGE_KEYS[key])
