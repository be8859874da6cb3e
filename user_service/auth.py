from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi.responses import JSONResponse

logger = logging.getLogger("user_service.auth")

UNAUTHORIZED_DETAIL = "Unauthorized access. Valid token required."


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and str(authorization).lower().startswith("bearer "):
        return str(authorization).split(" ", 1)[1].strip() or None
    return None


def token_matches(*, token: Optional[str], secret: str) -> bool:
    if not token or not secret:
        return False
    return hmac.compare_digest(token.encode("utf-8"), secret.encode("utf-8"))


def is_authorized(*, authorization: Optional[str], secret: str) -> bool:
    """Return True when the Authorization header carries the configured static bearer token."""
    if token_matches(token=_bearer_token(authorization), secret=secret):
        return True
    # Never log the presented token itself.
    logger.warning("Unauthorized request: missing or invalid token.")
    return False


def unauthorized_response() -> JSONResponse:
    return JSONResponse({"detail": UNAUTHORIZED_DETAIL}, status_code=401, headers={"WWW-Authenticate": "Bearer"})
