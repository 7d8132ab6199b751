# foodcart/services/user_api.py
from typing import Any, List

from foodcart.domain.schemas import Address, FavoriteRestaurant
from foodcart.services.http_client import BackendClient
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class UserApi:
    """
    Dane konta uzytkownika: ulubione restauracje i adresy dostawy.
    Wszystko wymaga tokenu, 401 obsluguje BackendClient.
    """

    def __init__(self, client: BackendClient):
        self.client = client

    def favorites(self) -> List[FavoriteRestaurant]:
        data = self.client.get("/api/users/favorites") or []
        return [FavoriteRestaurant.model_validate(r) for r in data]

    def add_favorite(self, restaurant_id: int) -> FavoriteRestaurant:
        data = self.client.put(f"/api/restaurants/{restaurant_id}/add-favorites")
        logger.info(f"Restaurant {restaurant_id} added to favorites")
        return FavoriteRestaurant.model_validate(data)

    def remove_favorite(self, restaurant_id: int) -> None:
        self.client.delete(f"/api/restaurants/{restaurant_id}/remove-favorites")
        logger.info(f"Restaurant {restaurant_id} removed from favorites")

    def add_address(self, address: Address | dict[str, Any]) -> Address:
        if not isinstance(address, Address):
            address = Address.model_validate(address)
        data = self.client.post("/api/users/address", json=address.model_dump(by_alias=True))
        return Address.model_validate(data)
