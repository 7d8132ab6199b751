# foodcart/services/order_api.py
from typing import List

from foodcart.domain.schemas import OrderIn, OrderOut
from foodcart.services.http_client import BackendClient


class OrderApi:
    def __init__(self, client: BackendClient):
        self.client = client

    def create(self, payload: OrderIn) -> OrderOut:
        data = self.client.post("/api/order", json=payload.model_dump(by_alias=True))
        return OrderOut.model_validate(data)

    def list_for_user(self) -> List[OrderOut]:
        data = self.client.get("/api/order/user") or []
        return [OrderOut.model_validate(o) for o in data]
