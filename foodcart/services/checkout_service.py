# foodcart/services/checkout_service.py
from pydantic import ValidationError

from foodcart.domain.schemas import ActionResult, Address, OrderIn, OrderOut
from foodcart.services.cart_store import CartStore
from foodcart.services.http_client import BackendError
from foodcart.services.order_api import OrderApi
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Use Case: zlozenie zamowienia z koszyka.

    1. walidacja adresu i niepustego koszyka (bez requestu)
    2. POST /api/order
    3. sukces -> czyszczenie koszyka
    """

    def __init__(self, cart_store: CartStore, order_api: OrderApi):
        self.cart_store = cart_store
        self.order_api = order_api
        self.last_order: OrderOut | None = None

    def place_order(self, address: Address | dict, restaurant_id: int | None = None) -> ActionResult:
        notifier = self.cart_store.notifier

        try:
            address = Address.model_validate(address)
        except ValidationError:
            notifier.error("Please enter a delivery address")
            return ActionResult(success=False, message="Please enter a delivery address")

        if not address.street_address.strip():
            notifier.error("Please enter a delivery address")
            return ActionResult(success=False, message="Please enter a delivery address")

        if not self.cart_store.cart.items:
            return ActionResult(success=False, message="Your cart is empty")

        try:
            order = self.order_api.create(OrderIn(restaurant_id=restaurant_id, delivery_address=address))
        except (BackendError, ValidationError) as e:
            logger.error(f"Checkout failed: {e}")
            notifier.error("Failed to place order. Please try again.")
            return ActionResult(success=False, message="Failed to place order. Please try again.")

        self.last_order = order
        logger.info(f"Order {order.id} placed")
        notifier.success("Order placed successfully!")

        self.cart_store.clear()
        return ActionResult(success=True, message="Order placed successfully!")
