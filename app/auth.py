# app/auth.py
import hmac
from typing import Mapping, Optional

from .errors import AppError
from .result import CONTINUE, Err, Result

API_KEY_HEADERS = ("x-api-key", "api-key")


def extract_api_key(headers: Mapping[str, str]) -> Optional[str]:
    """First non-empty key among the accepted header names."""
    for name in API_KEY_HEADERS:
        value = headers.get(name)
        if value:
            return value
    return None


def authenticate(presented: Optional[str], secret: str) -> Result[None]:
    if not presented or not hmac.compare_digest(presented.encode(), secret.encode()):
        return Err(AppError.unauthorized("Invalid or missing API key"))
    return CONTINUE
