# foodcart/services/catalog_api.py
from typing import List

from foodcart.domain.schemas import Food, Restaurant
from foodcart.services.http_client import BackendClient


class CatalogApi:
    """Restauracje i menu - tylko odczyt."""

    def __init__(self, client: BackendClient):
        self.client = client

    def restaurants(self) -> List[Restaurant]:
        return [Restaurant.model_validate(r) for r in self.client.get("/api/restaurants") or []]

    def restaurant(self, restaurant_id: int) -> Restaurant:
        return Restaurant.model_validate(self.client.get(f"/api/restaurants/{restaurant_id}"))

    def search_restaurants(self, keyword: str) -> List[Restaurant]:
        data = self.client.get("/api/restaurants/search", params={"keyword": keyword})
        return [Restaurant.model_validate(r) for r in data or []]

    def menu(self, restaurant_id: int) -> List[Food]:
        data = self.client.get(f"/api/food/restaurant/{restaurant_id}")
        return [Food.model_validate(f) for f in data or []]

    def restaurants_by_category(self, category: str) -> List[Restaurant]:
        data = self.client.get(f"/api/restaurants/category/{category}")
        return [Restaurant.model_validate(r) for r in data or []]

    def search_food(self, keyword: str, restaurant_id: int | None = None) -> List[Food]:
        params = {"keyword": keyword}
        if restaurant_id is not None:
            params["restaurantId"] = restaurant_id
        data = self.client.get("/api/food/search", params=params)
        return [Food.model_validate(f) for f in data or []]
