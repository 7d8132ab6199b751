# foodcart/services/http_client.py
from typing import Any, Callable, Optional

import requests
from requests import RequestException

from foodcart.utils.retry import http_retry
from foodcart.utils.settings import API_BASE_URL, HTTP_TIMEOUT
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class BackendError(Exception):
    """
    Blad odpowiedzi backendu (status >= 400).
    detail - komunikat z body odpowiedzi, jesli backend go przyslal.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class UnauthorizedError(BackendError):
    pass


class TransportError(BackendError):
    """Brak odpowiedzi: connection error, timeout itp."""
    pass


def _error_message(resp) -> Optional[str]:
    #spring zwraca {"message": ...}, fastapi {"detail": ...}
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        msg = body.get("message") or body.get("detail")
        return msg if isinstance(msg, str) else None
    return None


class BackendClient:
    """
    Wspolna warstwa HTTP dla wszystkich API.
    - dokleja bearer token
    - 401 -> hook on_unauthorized (czyszczenie sesji) i UnauthorizedError
    - bledy transportu -> TransportError
    GET jest ponawiany (tenacity), mutacje nigdy.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = HTTP_TIMEOUT,
        session: Any = None,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self.base_url = (base_url or API_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.on_unauthorized = on_unauthorized
        self.token: str | None = None

    def set_token(self, token: str | None) -> None:
        self.token = token

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _send(self, method: str, path: str, json: Any = None, params: dict | None = None):
        url = f"{self.base_url}{path}"
        logger.info(f"BackendClient {method} {url}")
        return self.session.request(
            method,
            url,
            json=json,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
        )

    @http_retry()
    def _send_idempotent(self, path: str, params: dict | None = None):
        return self._send("GET", path, params=params)

    def request(self, method: str, path: str, json: Any = None, params: dict | None = None) -> Any:
        try:
            if method == "GET":
                resp = self._send_idempotent(path, params=params)
            else:
                resp = self._send(method, path, json=json, params=params)
        except RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(str(e)) from e

        if resp.status_code == 401:
            logger.warning(f"{method} {path} -> 401, session invalid")
            if self.on_unauthorized is not None:
                self.on_unauthorized()
            detail = _error_message(resp)
            raise UnauthorizedError(detail or "Unauthorized", 401, detail)

        if resp.status_code >= 400:
            detail = _error_message(resp)
            message = detail or f"HTTP {resp.status_code}"
            logger.error(f"{method} {path} -> {resp.status_code}: {message}")
            raise BackendError(message, resp.status_code, detail)

        if not resp.content:
            return None

        try:
            return resp.json()
        except ValueError:
            # body ktorego nie da sie sparsowac traktujemy jak brak body
            logger.warning(f"{method} {path} returned non-JSON body")
            return None

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self) -> None:
        close = getattr(self.session, "close", None)
        if close is not None:
            close()
