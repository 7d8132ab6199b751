# foodcart/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import requests

from foodcart.utils.settings import FETCH_RETRY_ATTEMPTS


#tylko dla odczytow (GET), mutacje koszyka nie sa ponawiane
def http_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(FETCH_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(requests.RequestException),
    )
