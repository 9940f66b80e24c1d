import pytest

from client.api import NetworkError, UnauthorizedError
from client.session import ANONYMOUS, AccessDenied, SessionManager
from client.storage import STORAGE_KEYS

USER = {"id": 1, "email": "jana@example.cz", "fullname": "Jana Nováková", "role": "buyer"}


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class CountingApi:
    def __init__(self, user=USER):
        self.user = user
        self.calls = 0

    def me(self):
        self.calls += 1
        if self.user is None:
            raise UnauthorizedError("Invalid token", status=401)
        return self.user


def test_resolve_caches_for_ttl(storage):
    clock = FakeClock()
    api = CountingApi()
    storage.set(STORAGE_KEYS["TOKEN"], "token")
    sessions = SessionManager(api, storage, ttl=300, clock=clock)

    assert sessions.resolve().role == "buyer"
    clock.now += 299
    sessions.resolve()
    assert api.calls == 1

    clock.now += 2
    sessions.resolve()
    assert api.calls == 2

    sessions.invalidate()
    sessions.resolve()
    assert api.calls == 3


def test_resolve_without_token_is_anonymous(storage):
    api = CountingApi()

    assert SessionManager(api, storage).resolve() == ANONYMOUS
    assert api.calls == 0


def test_rejected_token_clears_storage(storage):
    storage.set(STORAGE_KEYS["TOKEN"], "stale")
    storage.set(STORAGE_KEYS["USER"], USER)
    storage.set(STORAGE_KEYS["USER_ROLE"], "buyer")

    session = SessionManager(CountingApi(user=None), storage).resolve()

    assert session == ANONYMOUS
    assert storage.get(STORAGE_KEYS["TOKEN"]) is None
    assert storage.get(STORAGE_KEYS["USER"]) is None
    assert storage.get(STORAGE_KEYS["USER_ROLE"]) is None


def test_current_reads_storage_without_network(storage):
    api = CountingApi()
    sessions = SessionManager(api, storage)
    assert sessions.current() == ANONYMOUS

    storage.set(STORAGE_KEYS["TOKEN"], "token")
    storage.set(STORAGE_KEYS["USER"], USER)
    assert sessions.current().user == USER
    assert api.calls == 0

    storage.backend.set_item(STORAGE_KEYS["USER"], "{broken")
    assert sessions.current() == ANONYMOUS


def test_register_login_logout_against_server(api, storage):
    sessions = SessionManager(api, storage)

    user = sessions.register({"email": "jana@example.cz", "password": "secret123",
                              "fullname": "Jana Nováková", "role": "farmer"})
    assert user["role"] == "farmer"
    assert sessions.resolve().role == "farmer"

    sessions.logout()
    assert storage.get(STORAGE_KEYS["TOKEN"]) is None
    assert sessions.resolve() == ANONYMOUS

    sessions.login("jana@example.cz", "secret123")
    assert sessions.resolve().user["email"] == "jana@example.cz"


def test_invalid_token_against_server(api, storage):
    storage.set(STORAGE_KEYS["TOKEN"], "not-a-jwt")

    assert SessionManager(api, storage).resolve() == ANONYMOUS
    assert storage.get(STORAGE_KEYS["TOKEN"]) is None


def test_require_role(storage):
    storage.set(STORAGE_KEYS["TOKEN"], "token")
    sessions = SessionManager(CountingApi(), storage)

    assert sessions.require_role("buyer").user == USER

    with pytest.raises(AccessDenied) as excinfo:
        sessions.require_role("farmer")
    assert excinfo.value.redirect == "register"

    with pytest.raises(AccessDenied):
        SessionManager(CountingApi(), type(storage)()).require_role()


def test_deleted_account_clears_session(api, storage):
    sessions = SessionManager(api, storage)
    sessions.register({"email": "jana@example.cz", "password": "secret123", "fullname": "Jana Nováková"})
    api.delete_account()
    sessions.invalidate()

    assert sessions.resolve() == ANONYMOUS
    assert storage.get(STORAGE_KEYS["TOKEN"]) is None
    assert storage.get(STORAGE_KEYS["USER"]) is None

    with pytest.raises(AccessDenied) as excinfo:
        sessions.require_role("buyer")
    assert excinfo.value.redirect == "register"


class BrokenApi:
    def me(self):
        raise NetworkError("Connection refused")


def test_network_failure_reads_as_logged_out_and_keeps_token(storage):
    storage.set(STORAGE_KEYS["TOKEN"], "token")
    storage.set(STORAGE_KEYS["USER"], USER)
    sessions = SessionManager(BrokenApi(), storage)

    assert sessions.resolve() == ANONYMOUS
    assert storage.get(STORAGE_KEYS["TOKEN"]) == "token"
    assert sessions._cached is None
