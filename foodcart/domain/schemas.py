# foodcart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import FrozenSet, List, Optional, Tuple
from decimal import Decimal
from enum import Enum


# JSON backendu jest w camelCase (totalPrice, cartItemId, foodId)
_WIRE = ConfigDict(alias_generator=to_camel, populate_by_name=True)
_SNAPSHOT = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RestaurantRef(BaseModel):
    """Referencja restauracji zagniezdzona w Food."""

    model_config = _SNAPSHOT

    id: Optional[int] = None
    name: Optional[str] = None


class Food(BaseModel):
    model_config = _SNAPSHOT

    id: int
    name: str = ""
    price: Decimal = Decimal("0")
    images: Tuple[str, ...] = ()
    restaurant: Optional[RestaurantRef] = None


class CartItem(BaseModel):
    """Pozycja koszyka. total_price moze nie przyjsc z backendu."""

    model_config = _SNAPSHOT

    id: Optional[int] = None
    food: Optional[Food] = None
    quantity: int = Field(..., ge=1, description="Ilosc (musi byc >= 1)")
    ingredients: FrozenSet[str] = frozenset()
    total_price: Optional[Decimal] = None


class Cart(BaseModel):
    """Snapshot koszyka. Niemutowalny, podmieniany w calosci."""

    model_config = _SNAPSHOT

    items: Tuple[CartItem, ...] = ()
    total: Decimal = Decimal("0")

    @classmethod
    def empty(cls) -> "Cart":
        return cls(items=(), total=Decimal("0"))

    def find(self, cart_item_id: int) -> Optional[CartItem]:
        return next((i for i in self.items if i.id == cart_item_id), None)


class CartStatus(str, Enum):
    LOADING = "LOADING"
    READY = "READY"


class AddCartItemIn(BaseModel):
    """Body dla PUT /api/cart/add."""

    model_config = _WIRE

    food_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1)
    ingredients: List[str] = Field(default_factory=list)


class UpdateCartItemIn(BaseModel):
    """Body dla PUT /api/cart-item/update."""

    model_config = _WIRE

    cart_item_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1)


class ActionResult(BaseModel):
    success: bool
    message: Optional[str] = None


class CartSummary(BaseModel):
    """Podsumowanie do wyswietlenia, nie weryfikowane przez backend."""

    item_count: int
    subtotal: Decimal
    delivery_fee: Decimal
    tax: Decimal
    total: Decimal
    amount_to_free_delivery: Decimal


class AuthResponse(BaseModel):
    model_config = _WIRE

    jwt: str
    message: Optional[str] = None
    role: Optional[str] = None


class SignUpIn(BaseModel):
    model_config = _WIRE

    full_name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    role: str = "ROLE_CUSTOMER"


class UserProfile(BaseModel):
    model_config = _WIRE

    id: int
    full_name: Optional[str] = None
    email: str
    role: Optional[str] = None


class Address(BaseModel):
    model_config = _WIRE

    street_address: str = Field(..., min_length=1)
    city: str = ""
    state_province: str = ""
    postal_code: str = ""
    country: str = ""


class OrderIn(BaseModel):
    """Body dla POST /api/order."""

    model_config = _WIRE

    restaurant_id: Optional[int] = None
    delivery_address: Address


class OrderOut(BaseModel):
    model_config = _WIRE

    id: int
    order_status: Optional[str] = None
    total_amount: Optional[Decimal] = None
    total_items: Optional[int] = None
    created_at: Optional[str] = None


class Restaurant(BaseModel):
    model_config = _WIRE

    id: int
    name: str = ""
    description: Optional[str] = None
    cuisine_type: Optional[str] = None
    open: Optional[bool] = None
    images: List[str] = Field(default_factory=list)


class FavoriteRestaurant(BaseModel):
    """Skrot restauracji trzymany w ulubionych uzytkownika."""

    model_config = _WIRE

    id: int
    title: str = ""
    description: Optional[str] = None
    images: List[str] = Field(default_factory=list)
