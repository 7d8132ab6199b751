# foodcart/services/notification_service.py
import threading
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List

from pydantic import BaseModel

from foodcart.utils.settings import NOTIFICATION_HISTORY
from foodcart.utils.logging import get_logger

logger = get_logger(__name__)


class Notification(BaseModel):
    level: str
    message: str
    created_at: datetime


class NotificationService:
    """
    Krotkie powiadomienia dla uzytkownika (odpowiednik toastow).
    Trzyma tylko ostatnie N, reszta wypada.
    """

    def __init__(self, history: int = NOTIFICATION_HISTORY):
        self._lock = threading.Lock()
        self._items: Deque[Notification] = deque(maxlen=history)

    def _push(self, level: str, message: str) -> None:
        note = Notification(level=level, message=message, created_at=datetime.now(timezone.utc))
        with self._lock:
            self._items.append(note)
        logger.info(f"[NOTIFICATION:{level}] {message}")

    def success(self, message: str) -> None:
        self._push("success", message)

    def error(self, message: str) -> None:
        self._push("error", message)

    def recent(self) -> List[Notification]:
        with self._lock:
            return list(self._items)

    def drain(self) -> List[Notification]:
        """Zwraca i czysci kolejke (UI pokazal powiadomienia)."""
        with self._lock:
            items = list(self._items)
            self._items.clear()
        return items
