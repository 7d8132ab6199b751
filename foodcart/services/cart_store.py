# foodcart/services/cart_store.py
import itertools
import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator

from pydantic import ValidationError

from foodcart.domain import pricing
from foodcart.domain.normalize import parse_cart
from foodcart.domain.schemas import (
    ActionResult,
    AddCartItemIn,
    Cart,
    CartStatus,
    CartSummary,
    UpdateCartItemIn,
)
from foodcart.services.cart_api import CartApi
from foodcart.services.http_client import BackendError, TransportError, UnauthorizedError
from foodcart.services.notification_service import NotificationService
from foodcart.utils.keyed_locks import KeyedLocks
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)

QUANTITY_ERROR = "Quantity must be at least 1"


class CartStore:
    """
    Lokalne lustro koszyka z serwera.

    Stan to zawsze caly snapshot z backendu (albo pusty koszyk),
    podmieniany w calosci - nigdy pole po polu.

    Wspolbieznosc:
    - mutacje tej samej pozycji (albo tego samego food przy add) ida po kolei
    - kazde wywolanie dostaje numer sekwencyjny przy wyslaniu, snapshot
      starszy niz ostatnio zastosowany jest odrzucany
      (wygrywa ostatnie zadanie, nie ostatnia odpowiedz)
    - clear bierze numer przed wyslaniem, wiec fetch wyslany w trakcie clear
      ma wyzszy numer i jego snapshot wygrywa z pustym koszykiem z clear

    Bledy nie wychodza na zewnatrz: fetch degraduje do pustego koszyka,
    mutacje zwracaja ActionResult(success=False) i zostawiaja stan.
    """

    def __init__(self, api: CartApi, notifier: NotificationService | None = None):
        self.api = api
        self.notifier = notifier or NotificationService()

        self._state_lock = threading.Lock()
        self._cart = Cart.empty()
        self._seq = itertools.count(1)
        self._applied_seq = 0
        self._inflight = 0
        self._keys = KeyedLocks()

    # stan
    @property
    def cart(self) -> Cart:
        with self._state_lock:
            return self._cart

    @property
    def status(self) -> CartStatus:
        with self._state_lock:
            return CartStatus.LOADING if self._inflight else CartStatus.READY

    @property
    def loading(self) -> bool:
        return self.status == CartStatus.LOADING

    def _next_seq(self) -> int:
        with self._state_lock:
            return next(self._seq)

    @contextmanager
    def _in_flight(self) -> Iterator[None]:
        with self._state_lock:
            self._inflight += 1
        try:
            yield
        finally:
            with self._state_lock:
                self._inflight -= 1

    def _apply(self, cart: Cart, seq: int) -> bool:
        with self._state_lock:
            if seq <= self._applied_seq:
                logger.debug(f"Discarding stale cart snapshot #{seq} (applied #{self._applied_seq})")
                return False
            self._cart = cart
            self._applied_seq = seq
            return True

    # query
    def fetch(self) -> Cart:
        seq = self._next_seq()

        with self._in_flight():
            try:
                payload = self.api.get()
            except UnauthorizedError:
                # sesje czysci warstwa HTTP
                cart = Cart.empty()
            except TransportError as e:
                logger.warning(f"Cart fetch failed, degrading to empty cart: {e}")
                self.notifier.error("Could not load your cart")
                cart = Cart.empty()
            except BackendError as e:
                logger.warning(f"Cart fetch returned {e.status_code}, degrading to empty cart")
                self.notifier.error("Could not load your cart")
                cart = Cart.empty()
            else:
                parsed = parse_cart(payload)
                if parsed.is_snapshot:
                    cart = parsed.cart
                else:
                    logger.warning(
                        f"Unrecognized cart response shape '{parsed.shape.value}', falling back to empty cart"
                    )
                    self.notifier.error("Could not load your cart")
                    cart = Cart.empty()

        self._apply(cart, seq)
        return self.cart

    def item_count(self) -> int:
        return pricing.item_count(self.cart.items)

    def subtotal(self) -> Decimal:
        return pricing.subtotal(self.cart.items)

    def delivery_fee(self) -> Decimal:
        # pusty koszyk - bez oplaty, tak samo jak w summary
        return self.summary().delivery_fee

    def summary(self) -> CartSummary:
        return pricing.summarize(self.cart)

    # commands
    def _mutate(self, call: Callable[[], Any], ok_message: str, fail_message: str) -> ActionResult:
        seq = self._next_seq()

        with self._in_flight():
            try:
                response = call()
            except BackendError as e:
                message = e.detail or fail_message
                logger.error(f"Cart mutation failed: {e}")
                self.notifier.error(message)
                return ActionResult(success=False, message=message)

            parsed = parse_cart(response)
            if parsed.is_snapshot:
                self._apply(parsed.cart, seq)
            else:
                # backend zwraca sama pozycje (albo nic) - prawda tylko z fetch
                logger.debug(f"Mutation returned '{parsed.shape.value}', reconciling with fetch")
                self.fetch()

        self.notifier.success(ok_message)
        return ActionResult(success=True, message=ok_message)

    def add_item(self, food_id: int, quantity: int = 1, ingredients: Iterable[str] = ()) -> ActionResult:
        if quantity < 1:
            return ActionResult(success=False, message=QUANTITY_ERROR)

        try:
            payload = AddCartItemIn(food_id=food_id, quantity=quantity, ingredients=list(ingredients))
        except ValidationError as e:
            logger.warning(f"Rejected add_item({food_id}, {quantity}): {e.error_count()} error(s)")
            return ActionResult(success=False, message="Invalid cart item")

        logger.info(f"Adding food {food_id} x{quantity} to cart")

        with self._keys.hold(("food", food_id)):
            return self._mutate(
                lambda: self.api.add_item(payload),
                "Item added to cart",
                "Failed to add item to cart",
            )

    def update_item_quantity(self, cart_item_id: int, quantity: int) -> ActionResult:
        if quantity < 1:
            # no-op, zadnego requestu
            logger.debug(f"Ignoring quantity {quantity} for cart item {cart_item_id}")
            return ActionResult(success=False, message=QUANTITY_ERROR)

        try:
            payload = UpdateCartItemIn(cart_item_id=cart_item_id, quantity=quantity)
        except ValidationError as e:
            logger.warning(f"Rejected update of cart item {cart_item_id}: {e.error_count()} error(s)")
            return ActionResult(success=False, message="Invalid cart item")

        with self._keys.hold(("item", cart_item_id)):
            return self._mutate(
                lambda: self.api.update_item(payload),
                "Cart updated",
                "Failed to update cart",
            )

    def remove_item(self, cart_item_id: int) -> ActionResult:
        with self._keys.hold(("item", cart_item_id)):
            with self._in_flight():
                try:
                    self.api.remove_item(cart_item_id)
                except BackendError as e:
                    message = e.detail or "Failed to remove item"
                    logger.error(f"Removing cart item {cart_item_id} failed: {e}")
                    self.notifier.error(message)
                    return ActionResult(success=False, message=message)

                # odpowiedz remove nie jest wiarygodna, pelny fetch
                self.fetch()

        self.notifier.success("Item removed from cart")
        return ActionResult(success=True, message="Item removed from cart")

    def clear(self) -> ActionResult:
        seq = self._next_seq()

        with self._in_flight():
            try:
                self.api.clear()
            except BackendError as e:
                message = e.detail or "Failed to clear cart"
                logger.error(f"Clearing cart failed: {e}")
                self.notifier.error(message)
                return ActionResult(success=False, message=message)

        # pusty koszyk jest pewny, bez fetch
        self._apply(Cart.empty(), seq)
        logger.info("Cart cleared")
        return ActionResult(success=True)

    def reset(self) -> None:
        """Wylogowanie - lokalny stan na pusty, bez requestu."""
        self._apply(Cart.empty(), self._next_seq())
