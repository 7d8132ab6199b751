from unittest.mock import Mock

import pytest

from foodcart.domain.schemas import Cart, OrderOut
from foodcart.services.checkout_service import CheckoutService
from foodcart.services.http_client import BackendError
from foodcart.services.order_api import OrderApi
from tests.factories import cart_json, item_json

ADDRESS = {"streetAddress": "ul. Dluga 5", "city": "Gdansk", "postalCode": "80-001", "country": "PL"}


@pytest.fixture
def order_api():
    return Mock(spec=OrderApi)


@pytest.fixture
def checkout(store, order_api):
    return CheckoutService(store, order_api)


@pytest.fixture
def filled_store(store, fake_api):
    fake_api.get.return_value = cart_json(item_json(1, quantity=2))
    store.fetch()
    return store


class TestPlaceOrder:

    def test_success_creates_order_and_clears_cart(self, checkout, filled_store, fake_api, order_api, notifier):
        order_api.create.return_value = OrderOut(id=77, order_status="PENDING")

        result = checkout.place_order(ADDRESS, restaurant_id=1)

        assert result.success is True
        sent = order_api.create.call_args.args[0].model_dump(by_alias=True)
        assert sent["restaurantId"] == 1
        assert sent["deliveryAddress"]["streetAddress"] == "ul. Dluga 5"
        fake_api.clear.assert_called_once_with()
        assert filled_store.cart == Cart.empty()
        assert checkout.last_order.id == 77
        assert "Order placed successfully!" in [n.message for n in notifier.recent()]

    @pytest.mark.parametrize("address", [{"streetAddress": ""}, {"streetAddress": "   "}, {}])
    def test_missing_address_is_rejected_locally(self, checkout, filled_store, order_api, address):
        result = checkout.place_order(address)

        assert result.success is False
        assert result.message == "Please enter a delivery address"
        order_api.create.assert_not_called()

    def test_empty_cart_is_rejected(self, checkout, order_api):
        result = checkout.place_order(ADDRESS)

        assert result.success is False
        order_api.create.assert_not_called()

    def test_failure_keeps_cart(self, checkout, filled_store, fake_api, order_api):
        before = filled_store.cart
        order_api.create.side_effect = BackendError("HTTP 500", 500)

        result = checkout.place_order(ADDRESS)

        assert result.success is False
        assert result.message == "Failed to place order. Please try again."
        fake_api.clear.assert_not_called()
        assert filled_store.cart == before
