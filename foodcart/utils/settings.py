# foodcart/utils/settings.py
import os
from decimal import Decimal
from dotenv import load_dotenv

load_dotenv()

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8080")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 5))
FETCH_RETRY_ATTEMPTS = int(os.getenv("FETCH_RETRY_ATTEMPTS", 3))

# kwoty w jednostkach backendu (domyslnie centy)
FREE_DELIVERY_THRESHOLD = Decimal(os.getenv("FREE_DELIVERY_THRESHOLD", "2500"))
DELIVERY_FEE = Decimal(os.getenv("DELIVERY_FEE", "299"))
TAX_RATE = Decimal(os.getenv("TAX_RATE", "0"))
MONEY_UNIT = os.getenv("MONEY_UNIT", "cents")

NOTIFICATION_HISTORY = int(os.getenv("NOTIFICATION_HISTORY", 20))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
MOCK_BACKEND_PORT = int(os.getenv("MOCK_BACKEND_PORT", 8080))
