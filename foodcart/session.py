# foodcart/session.py
from typing import Any

from foodcart.services.auth_service import AuthService
from foodcart.services.cart_api import CartApi
from foodcart.services.cart_store import CartStore
from foodcart.services.catalog_api import CatalogApi
from foodcart.services.checkout_service import CheckoutService
from foodcart.services.http_client import BackendClient
from foodcart.services.notification_service import NotificationService
from foodcart.services.order_api import OrderApi
from foodcart.services.user_api import UserApi
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class UserSession:
    """
    Sesja jednego zalogowanego uzytkownika.
    Tworzona przy logowaniu, zamykana przy wylogowaniu.
    Wszystkie serwisy dostaja ten sam BackendClient (wstrzykiwany),
    zadnego globalnego stanu.
    """

    def __init__(self, client: BackendClient, notifier: NotificationService | None = None):
        self.client = client
        self.notifier = notifier or NotificationService()

        self.auth = AuthService(client)
        self.cart = CartStore(CartApi(client), self.notifier)
        self.orders = OrderApi(client)
        self.catalog = CatalogApi(client)
        self.users = UserApi(client)
        self.checkout = CheckoutService(self.cart, self.orders)

        # 401 z dowolnego endpointu -> czyscimy sesje
        client.on_unauthorized = self._on_unauthorized
        self.closed = False

    @classmethod
    def start(
        cls,
        email: str,
        password: str,
        base_url: str | None = None,
        http_session: Any = None,
        notifier: NotificationService | None = None,
    ) -> "UserSession":
        session = cls(BackendClient(base_url=base_url, session=http_session), notifier)
        session.auth.sign_in(email, password)
        session.cart.fetch()
        return session

    @classmethod
    def register(
        cls,
        full_name: str,
        email: str,
        password: str,
        base_url: str | None = None,
        http_session: Any = None,
        notifier: NotificationService | None = None,
    ) -> "UserSession":
        session = cls(BackendClient(base_url=base_url, session=http_session), notifier)
        session.auth.sign_up(full_name, email, password)
        session.cart.fetch()
        return session

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    def _on_unauthorized(self) -> None:
        logger.warning("Session invalidated by backend, clearing credentials")
        self.auth.sign_out()
        self.cart.reset()

    def close(self) -> None:
        if self.closed:
            return
        self.auth.sign_out()
        self.cart.reset()
        self.client.close()
        self.closed = True
        logger.info("Session closed")

    def __enter__(self) -> "UserSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
