"""
Component tests: UserSession -> CartStore -> BackendClient -> dev mock backend.

The mock backend answers like the real one (add/update return a single cart
item, get/remove/clear return the cart entity with an "item" list), so these
tests exercise the reconciliation paths against the actual wire contract.
"""
from decimal import Decimal

import pytest

from foodcart.domain.schemas import Address, Cart
from foodcart.mock_backend import main as mock_backend
from foodcart.services.http_client import BackendError, UnauthorizedError
from foodcart.session import UserSession
from tests.factories import CUSTOMER_EMAIL


class TestSignIn:

    def test_session_starts_with_empty_cart(self, user_session):
        assert user_session.is_authenticated
        assert user_session.auth.user.email == CUSTOMER_EMAIL
        assert user_session.cart.cart == Cart.empty()

    def test_wrong_password_raises(self, mock_backend_client):
        with pytest.raises(UnauthorizedError):
            UserSession.start(
                CUSTOMER_EMAIL,
                "wrong",
                base_url="http://testserver",
                http_session=mock_backend_client,
            )


class TestCartFlow:

    def test_add_update_remove_clear(self, user_session):
        cart = user_session.cart

        assert cart.add_item(1, 2, ["smietana"]).success
        assert cart.add_item(2).success
        assert cart.item_count() == 3
        assert cart.cart.total == Decimal(1299 * 2 + 899)

        pierogi = next(i for i in cart.cart.items if i.food.id == 1)
        assert pierogi.ingredients == frozenset({"smietana"})

        assert cart.update_item_quantity(pierogi.id, 1).success
        assert cart.cart.find(pierogi.id).quantity == 1
        assert cart.subtotal() == Decimal(1299 + 899)
        assert cart.delivery_fee() == 299

        assert cart.remove_item(pierogi.id).success
        assert cart.cart.find(pierogi.id) is None
        assert cart.item_count() == 1

        assert cart.clear().success
        assert cart.cart == Cart.empty()
        assert user_session.cart.fetch() == Cart.empty()

    def test_adding_same_food_merges_quantity(self, user_session):
        user_session.cart.add_item(3, 1)
        user_session.cart.add_item(3, 1)

        assert len(user_session.cart.cart.items) == 1
        assert user_session.cart.item_count() == 2
        assert user_session.cart.delivery_fee() == 0

    def test_unknown_food_keeps_state(self, user_session):
        user_session.cart.add_item(1)
        before = user_session.cart.cart

        result = user_session.cart.add_item(404)

        assert result.success is False
        assert result.message == "Food not found"
        assert user_session.cart.cart == before

    def test_unknown_cart_item_update_fails(self, user_session):
        result = user_session.cart.update_item_quantity(12345, 2)

        assert result.success is False
        assert result.message == "Cart item not found"

    def test_fetch_twice_is_stable(self, user_session):
        user_session.cart.add_item(1, 2)

        assert user_session.cart.fetch() == user_session.cart.fetch()

    def test_invalid_token_clears_session(self, user_session):
        user_session.cart.add_item(1)
        user_session.client.set_token("bogus")

        assert user_session.cart.fetch() == Cart.empty()
        assert user_session.is_authenticated is False


class TestCheckout:

    def test_order_is_placed_and_cart_cleared(self, user_session):
        user_session.cart.add_item(1, 2)

        result = user_session.checkout.place_order({"streetAddress": "ul. Dluga 5", "city": "Gdansk"}, restaurant_id=1)

        assert result.success is True
        assert user_session.cart.cart == Cart.empty()
        orders = user_session.orders.list_for_user()
        assert [o.id for o in orders] == [user_session.checkout.last_order.id]
        assert orders[0].total_amount == Decimal(1299 * 2)
        assert orders[0].total_items == 2


class TestCatalog:

    def test_restaurants_and_menu(self, user_session):
        restaurants = user_session.catalog.restaurants()
        menu = user_session.catalog.menu(restaurants[0].id)

        assert {r.name for r in restaurants} == {"Pierogarnia", "Burger Bar"}
        assert {f.name for f in menu} == {"Pierogi ruskie", "Zurek"}
        assert user_session.catalog.restaurant(2).cuisine_type == "American"
        assert [r.id for r in user_session.catalog.search_restaurants("burger")] == [2]

    def test_restaurants_by_category(self, user_session):
        assert [r.id for r in user_session.catalog.restaurants_by_category("polish")] == [1]
        assert user_session.catalog.restaurants_by_category("thai") == []

    def test_food_search(self, user_session):
        assert {f.id for f in user_session.catalog.search_food("e")} == {1, 2, 3}
        assert {f.id for f in user_session.catalog.search_food("e", restaurant_id=2)} == {3}
        assert user_session.catalog.search_food("pizza") == []


class TestSignUp:

    def test_register_creates_signed_in_session(self, mock_backend_client):
        session = UserSession.register(
            "Ola Nowa",
            "ola@foodcart.dev",
            "haslo",
            base_url="http://testserver",
            http_session=mock_backend_client,
        )

        assert session.is_authenticated
        assert session.auth.user.email == "ola@foodcart.dev"
        assert session.auth.user.full_name == "Ola Nowa"
        assert session.auth.role == "ROLE_CUSTOMER"
        assert session.cart.cart == Cart.empty()
        session.close()

    def test_registered_user_can_sign_in(self, mock_backend_client):
        first = UserSession.register(
            "Ola Nowa", "ola@foodcart.dev", "haslo", base_url="http://testserver", http_session=mock_backend_client
        )
        # close() zamknalby wspolny TestClient
        first.auth.sign_out()

        session = UserSession.start("ola@foodcart.dev", "haslo", base_url="http://testserver", http_session=mock_backend_client)

        assert session.auth.user.full_name == "Ola Nowa"
        session.close()

    def test_duplicate_email_is_rejected(self, mock_backend_client):
        with pytest.raises(BackendError) as exc:
            UserSession.register(
                "Ktos", CUSTOMER_EMAIL, "x", base_url="http://testserver", http_session=mock_backend_client
            )

        assert exc.value.status_code == 400
        assert exc.value.detail == "Email is already used with another account"


class TestUserAccount:

    def test_favorites_add_and_remove(self, user_session):
        assert user_session.users.favorites() == []

        added = user_session.users.add_favorite(2)
        user_session.users.add_favorite(1)
        user_session.users.add_favorite(2)

        assert added.title == "Burger Bar"
        assert [f.id for f in user_session.users.favorites()] == [2, 1]

        user_session.users.remove_favorite(2)

        assert [f.id for f in user_session.users.favorites()] == [1]

    def test_unknown_restaurant_favorite_fails(self, user_session):
        with pytest.raises(BackendError) as exc:
            user_session.users.add_favorite(404)

        assert exc.value.status_code == 404

    def test_add_address(self, user_session):
        address = Address(street_address="ul. Dluga 5", city="Gdansk", country="PL")

        saved = user_session.users.add_address(address)

        assert saved == address
        assert mock_backend.ADDRESSES[user_session.auth.user.id] == [address.model_dump(by_alias=True)]

    def test_favorites_require_sign_in(self, user_session):
        user_session.auth.sign_out()

        with pytest.raises(UnauthorizedError):
            user_session.users.favorites()
