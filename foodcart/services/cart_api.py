# foodcart/services/cart_api.py
from typing import Any

from foodcart.domain.schemas import AddCartItemIn, UpdateCartItemIn
from foodcart.services.http_client import BackendClient


class CartApi:
    """Cienkie wrappery na endpointy koszyka. Zwracaja surowy JSON."""

    def __init__(self, client: BackendClient):
        self.client = client

    def get(self) -> Any:
        return self.client.get("/api/cart")

    def add_item(self, payload: AddCartItemIn) -> Any:
        return self.client.put("/api/cart/add", json=payload.model_dump(by_alias=True))

    def update_item(self, payload: UpdateCartItemIn) -> Any:
        return self.client.put("/api/cart-item/update", json=payload.model_dump(by_alias=True))

    def remove_item(self, cart_item_id: int) -> Any:
        return self.client.delete(f"/api/cart-item/{cart_item_id}/remove")

    def clear(self) -> Any:
        return self.client.put("/api/cart/clear")
