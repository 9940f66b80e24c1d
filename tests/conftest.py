import json
from urllib.parse import urlsplit

import pytest

from core.config import Config
from core.extensions import db
from main import create_app
from client.api import ApiClient
from client.storage import Storage


class TestingConfig(Config):
    __test__ = False

    ENV_NAME = "test"
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-which-is-definitely-long-enough"
    BCRYPT_LOG_ROUNDS = 4
    PAYMENT_DELAY_SECONDS = 0
    RECOMPUTE_ORDER_TOTALS = False


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    def _register(email="jana@example.cz", password="secret123", fullname="Jana Nováková", **extra):
        body = {"email": email, "password": password, "fullname": fullname}
        body.update(extra)
        return client.post("/api/auth/register", json=body)
    return _register


@pytest.fixture
def auth_headers(register):
    token = register(address="Vinohradská 12, Praha 2").get_json()["token"]
    return {"Authorization": f"Bearer {token}"}


class _Response:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        return json.loads(self._body)


class FlaskSession:
    """requests.Session stand-in that routes ApiClient calls into the Flask test client."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        response = self.client.open(
            urlsplit(url).path, method=method, headers=headers, json=json, query_string=params
        )
        return _Response(response.status_code, response.get_data(as_text=True))


@pytest.fixture
def storage():
    return Storage()


@pytest.fixture
def api(client, storage):
    return ApiClient("http://testserver", storage, session=FlaskSession(client))
