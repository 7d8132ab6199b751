"""
Shared fixtures.

HTTP is isolated two ways:
- unit tests get a Mock standing in for requests.Session / CartApi
- component tests inject the dev mock backend's TestClient as the HTTP session
"""
import json
import logging
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from foodcart.mock_backend import main as mock_backend
from foodcart.services.cart_api import CartApi
from foodcart.services.cart_store import CartStore
from foodcart.services.http_client import BackendClient
from foodcart.services.notification_service import NotificationService
from foodcart.session import UserSession
from tests.factories import CUSTOMER_EMAIL, CUSTOMER_PASSWORD


def _make_response(status_code=200, body=None):
    resp = Mock()
    resp.status_code = status_code
    if body is None:
        resp.content = b""
        resp.json.side_effect = ValueError("No JSON body")
    else:
        resp.content = json.dumps(body).encode()
        resp.json.return_value = body
    return resp


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def http_session():
    """Mock of requests.Session used by BackendClient."""
    return Mock()


@pytest.fixture
def backend_client(http_session):
    return BackendClient(base_url="http://backend.test", timeout=2, session=http_session)


@pytest.fixture
def notifier():
    return NotificationService(history=10)


@pytest.fixture
def fake_api():
    return Mock(spec=CartApi)


@pytest.fixture
def store(fake_api, notifier):
    return CartStore(fake_api, notifier)


@pytest.fixture
def store_log(caplog):
    """caplog attached directly to the store's logger (it does not propagate)."""
    logger = logging.getLogger("foodcart.services.cart_store")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


@pytest.fixture
def mock_backend_client():
    """TestClient of the dev mock backend with a clean in-memory state."""
    mock_backend.reset_state()
    client = TestClient(mock_backend.app)
    yield client
    mock_backend.reset_state()


@pytest.fixture
def user_session(mock_backend_client):
    session = UserSession.start(
        CUSTOMER_EMAIL,
        CUSTOMER_PASSWORD,
        base_url="http://testserver",
        http_session=mock_backend_client,
    )
    yield session
    session.close()
