# foodcart/mock_backend/main.py
import copy
import itertools
from typing import Dict, List

from fastapi import Depends, FastAPI, Header, HTTPException, Query
import uvicorn

from foodcart.domain.schemas import AddCartItemIn, Address, OrderIn, SignUpIn, UpdateCartItemIn
from foodcart.utils.settings import DELIVERY_FEE, FREE_DELIVERY_THRESHOLD, MOCK_BACKEND_PORT
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)

app = FastAPI(title="Food Ordering Backend (dev mock)")


_SEED_USERS = {
    "customer@foodcart.dev": {"id": 1, "fullName": "Jan Klient", "password": "secret", "role": "ROLE_CUSTOMER"},
    "owner@foodcart.dev": {"id": 2, "fullName": "Anna Wlascicielka", "password": "secret", "role": "ROLE_RESTAURANT_OWNER"},
}
USERS = copy.deepcopy(_SEED_USERS)

RESTAURANTS = {
    1: {"id": 1, "name": "Pierogarnia", "description": "Pierogi i zupy", "cuisineType": "Polish", "open": True, "images": []},
    2: {"id": 2, "name": "Burger Bar", "description": "Burgery", "cuisineType": "American", "open": True, "images": []},
}

# ceny w centach
FOODS = {
    1: {"id": 1, "name": "Pierogi ruskie", "price": 1299, "images": [], "restaurant": {"id": 1, "name": "Pierogarnia"}},
    2: {"id": 2, "name": "Zurek", "price": 899, "images": [], "restaurant": {"id": 1, "name": "Pierogarnia"}},
    3: {"id": 3, "name": "Cheeseburger", "price": 1550, "images": [], "restaurant": {"id": 2, "name": "Burger Bar"}},
}

TOKENS: Dict[str, int] = {}
CARTS: Dict[int, List[dict]] = {}
ORDERS: Dict[int, List[dict]] = {}
FAVORITES: Dict[int, List[dict]] = {}
ADDRESSES: Dict[int, List[dict]] = {}
_ids = itertools.count(1)


def reset_state() -> None:
    global _ids
    USERS.clear()
    USERS.update(copy.deepcopy(_SEED_USERS))
    TOKENS.clear()
    CARTS.clear()
    ORDERS.clear()
    FAVORITES.clear()
    ADDRESSES.clear()
    _ids = itertools.count(1)


def current_user_id(authorization: str | None = Header(default=None)) -> int:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    user_id = TOKENS.get(authorization.removeprefix("Bearer "))
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user_id


def _cart_body(user_id: int) -> dict:
    items = CARTS.setdefault(user_id, [])
    return {
        "id": user_id,
        "item": copy.deepcopy(items),
        "total": sum(i["totalPrice"] for i in items),
    }


def _find_item(user_id: int, cart_item_id: int) -> dict:
    for item in CARTS.get(user_id, []):
        if item["id"] == cart_item_id:
            return item
    raise HTTPException(status_code=404, detail="Cart item not found")


# auth
@app.post("/auth/signin")
def sign_in(body: dict):
    user = USERS.get(body.get("email"))
    if not user or user["password"] != body.get("password"):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return _issue_token(user, "Login success")


@app.post("/auth/signup")
def sign_up(payload: SignUpIn):
    if payload.email in USERS:
        raise HTTPException(status_code=400, detail="Email is already used with another account")

    user = {
        "id": max(u["id"] for u in USERS.values()) + 1,
        "fullName": payload.full_name,
        "password": payload.password,
        "role": payload.role,
    }
    USERS[payload.email] = user
    logger.info(f"Mock: registered {payload.email} as user {user['id']}")
    return _issue_token(user, "Register success")


def _issue_token(user: dict, message: str) -> dict:
    token = f"mock-{user['id']}-{next(_ids)}"
    TOKENS[token] = user["id"]
    return {"jwt": token, "message": message, "role": user["role"]}


@app.get("/api/users/profile")
def profile(user_id: int = Depends(current_user_id)):
    for email, user in USERS.items():
        if user["id"] == user_id:
            return {"id": user_id, "fullName": user["fullName"], "email": email, "role": user["role"]}
    raise HTTPException(status_code=404, detail="User not found")


@app.get("/api/users/favorites")
def favorites(user_id: int = Depends(current_user_id)):
    return FAVORITES.get(user_id, [])


@app.post("/api/users/address")
def add_address(address: Address, user_id: int = Depends(current_user_id)):
    body = address.model_dump(by_alias=True)
    ADDRESSES.setdefault(user_id, []).append(body)
    return body


# katalog
@app.get("/api/restaurants")
def list_restaurants():
    return list(RESTAURANTS.values())


@app.get("/api/restaurants/search")
def search_restaurants(keyword: str = ""):
    kw = keyword.lower()
    return [r for r in RESTAURANTS.values() if kw in r["name"].lower() or kw in r["cuisineType"].lower()]


@app.get("/api/restaurants/category/{category}")
def restaurants_by_category(category: str):
    return [r for r in RESTAURANTS.values() if r["cuisineType"].lower() == category.lower()]


@app.get("/api/restaurants/{restaurant_id}")
def get_restaurant(restaurant_id: int):
    return _restaurant_or_404(restaurant_id)


def _restaurant_or_404(restaurant_id: int) -> dict:
    restaurant = RESTAURANTS.get(restaurant_id)
    if not restaurant:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return restaurant


# ulubione - zapisywany jest skrot restauracji (id, title, description, images)
@app.put("/api/restaurants/{restaurant_id}/add-favorites")
def add_favorite(restaurant_id: int, user_id: int = Depends(current_user_id)):
    restaurant = _restaurant_or_404(restaurant_id)
    dto = {
        "id": restaurant["id"],
        "title": restaurant["name"],
        "description": restaurant["description"],
        "images": restaurant["images"],
    }
    favorites = FAVORITES.setdefault(user_id, [])
    if all(f["id"] != restaurant_id for f in favorites):
        favorites.append(dto)
    return dto


@app.delete("/api/restaurants/{restaurant_id}/remove-favorites")
def remove_favorite(restaurant_id: int, user_id: int = Depends(current_user_id)):
    _restaurant_or_404(restaurant_id)
    FAVORITES[user_id] = [f for f in FAVORITES.get(user_id, []) if f["id"] != restaurant_id]
    return FAVORITES[user_id]


@app.get("/api/food/search")
def search_food(keyword: str = "", restaurant_id: int | None = Query(default=None, alias="restaurantId")):
    kw = keyword.lower()
    return [
        f
        for f in FOODS.values()
        if kw in f["name"].lower() and (restaurant_id is None or f["restaurant"]["id"] == restaurant_id)
    ]


@app.get("/api/food/restaurant/{restaurant_id}")
def restaurant_menu(restaurant_id: int):
    return [f for f in FOODS.values() if f["restaurant"]["id"] == restaurant_id]


# koszyk - ksztalty jak w prawdziwym backendzie:
# add/update zwracaja CartItem, get/remove/clear zwracaja Cart
@app.get("/api/cart")
def get_cart(user_id: int = Depends(current_user_id)):
    return _cart_body(user_id)


@app.put("/api/cart/add")
def add_to_cart(payload: AddCartItemIn, user_id: int = Depends(current_user_id)):
    food = FOODS.get(payload.food_id)
    if not food:
        raise HTTPException(status_code=404, detail="Food not found")

    items = CARTS.setdefault(user_id, [])
    for item in items:
        if item["food"]["id"] == food["id"]:
            item["quantity"] += payload.quantity
            item["totalPrice"] = food["price"] * item["quantity"]
            return item

    item = {
        "id": next(_ids),
        "food": food,
        "quantity": payload.quantity,
        "ingredients": payload.ingredients,
        "totalPrice": food["price"] * payload.quantity,
    }
    items.append(item)
    logger.info(f"Mock: user {user_id} added food {food['id']} x{payload.quantity}")
    return item


@app.put("/api/cart-item/update")
def update_cart_item(payload: UpdateCartItemIn, user_id: int = Depends(current_user_id)):
    item = _find_item(user_id, payload.cart_item_id)
    item["quantity"] = payload.quantity
    item["totalPrice"] = item["food"]["price"] * payload.quantity
    return item


@app.delete("/api/cart-item/{cart_item_id}/remove")
def remove_cart_item(cart_item_id: int, user_id: int = Depends(current_user_id)):
    item = _find_item(user_id, cart_item_id)
    CARTS[user_id].remove(item)
    return _cart_body(user_id)


@app.put("/api/cart/clear")
def clear_cart(user_id: int = Depends(current_user_id)):
    CARTS[user_id] = []
    return _cart_body(user_id)


# zamowienia
@app.post("/api/order")
def create_order(payload: OrderIn, user_id: int = Depends(current_user_id)):
    items = CARTS.get(user_id, [])
    if not items:
        raise HTTPException(status_code=400, detail="Cart is empty")

    subtotal = sum(i["totalPrice"] for i in items)
    delivery = 0 if subtotal >= FREE_DELIVERY_THRESHOLD else int(DELIVERY_FEE)
    order = {
        "id": next(_ids),
        "orderStatus": "PENDING",
        "totalAmount": subtotal + delivery,
        "totalItems": sum(i["quantity"] for i in items),
        "restaurantId": payload.restaurant_id,
        "deliveryAddress": payload.delivery_address.model_dump(by_alias=True),
    }
    ORDERS.setdefault(user_id, []).append(order)
    return order


@app.get("/api/order/user")
def user_orders(user_id: int = Depends(current_user_id)):
    return ORDERS.get(user_id, [])


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=MOCK_BACKEND_PORT)
