# foodcart/domain/normalize.py
"""
Adapter odpowiedzi backendu koszyka.

Backend (i dwa frontendy) zwracaja koszyk w kilku ksztaltach:

- ``{"item": [...], "total": n}``     (encja Cart z backendu)
- ``[...]``                           (gola lista pozycji)
- ``{"cartItems": [...], "total": n}``
- ``{"items": [...], "total": n}``
- pojedyncza pozycja (add / update zwracaja CartItem, nie Cart)

Kazdy ksztalt koszyka jest mapowany na jeden typ ``Cart``. Nieznany ksztalt
(albo pozycje nieprzechodzace walidacji) daje ParsedCart bez snapshotu;
CartStore zamyka go wtedy do pustego koszyka.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import ValidationError

from foodcart.domain.schemas import Cart, CartItem
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class CartShape(str, Enum):
    ITEM_KEY = "item"
    CART_ITEMS_KEY = "cartItems"
    ITEMS_KEY = "items"
    BARE_LIST = "list"
    SINGLE_ITEM = "single_item"
    UNKNOWN = "unknown"


# kolejnosc ma znaczenie: "item" wygrywa jak w oryginalnym reducerze
_LIST_KEYS = (
    (CartShape.ITEM_KEY, "item"),
    (CartShape.CART_ITEMS_KEY, "cartItems"),
    (CartShape.ITEMS_KEY, "items"),
)


@dataclass(frozen=True)
class ParsedCart:
    shape: CartShape
    cart: Optional[Cart] = None

    @property
    def is_snapshot(self) -> bool:
        return self.cart is not None


def classify(payload: Any) -> CartShape:
    if isinstance(payload, list):
        return CartShape.BARE_LIST

    if not isinstance(payload, dict):
        return CartShape.UNKNOWN

    for shape, key in _LIST_KEYS:
        if isinstance(payload.get(key), list):
            return shape

    if "quantity" in payload and "food" in payload:
        return CartShape.SINGLE_ITEM

    return CartShape.UNKNOWN


def parse_cart(payload: Any) -> ParsedCart:
    """Rozpoznaje ksztalt i buduje snapshot. cart=None gdy to nie jest koszyk."""
    shape = classify(payload)

    if shape in (CartShape.UNKNOWN, CartShape.SINGLE_ITEM):
        return ParsedCart(shape=shape)

    if shape == CartShape.BARE_LIST:
        raw_items, raw_total = payload, None
    else:
        raw_items, raw_total = payload[shape.value], payload.get("total")

    try:
        items = tuple(CartItem.model_validate(raw) for raw in raw_items)
        cart = Cart(items=items, total=raw_total or Decimal("0"))
    except ValidationError as e:
        logger.warning(f"Cart payload with shape '{shape.value}' failed validation: {e.error_count()} error(s)")
        return ParsedCart(shape=CartShape.UNKNOWN)

    return ParsedCart(shape=shape, cart=cart)

