from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_service import deps
from user_service.auth import is_authorized, unauthorized_response
from user_service.logging_config import configure_logging
from user_service.routers.users import router as users_router
from user_service.settings import get_settings
from user_service.user_store import InMemoryUserStore

configure_logging(get_settings().log_level)

logger = logging.getLogger("user_service")
http_logger = logging.getLogger("user_service.http")

APP_VERSION = "1.0.0"

app = FastAPI(title="User Service", version=APP_VERSION)
app.include_router(users_router)


# Registered before log_requests so it runs inside it and rejected requests still get logged.
@app.middleware("http")
async def require_token(request: Request, call_next):
    """Reject any request, routed or not, that lacks the static bearer token.

    Runs before routing and body parsing, so an unauthenticated caller always
    gets a 401 whatever the path or payload.
    """
    # Resolved through the dependency table so tests can swap settings the usual way.
    get_settings_dep = app.dependency_overrides.get(deps.get_settings_dep, deps.get_settings_dep)
    if not is_authorized(authorization=request.headers.get("authorization"), secret=get_settings_dep().api_token):
        return unauthorized_response()
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    method, path = request.method, request.url.path
    http_logger.info("Incoming request: %s %s", method, path)
    try:
        response = await call_next(request)
    except Exception:
        http_logger.info("Outgoing response: %s %s -> %s", method, path, 500)
        raise
    http_logger.info("Outgoing response: %s %s -> %s", method, path, response.status_code)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and bad path/query values are plain 400s."""
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        detail = "Invalid JSON format. Please check your request body."
    elif any(e.get("type") == "missing" and tuple(e.get("loc") or ()) == ("body",) for e in errors):
        detail = "Request body is empty or invalid."
    else:
        first = errors[0] if errors else {}
        loc = ".".join(str(p) for p in (first.get("loc") or ()) if p != "body")
        detail = f"Invalid request: {loc or 'body'}: {first.get('msg', 'invalid value')}"
    return JSONResponse({"detail": detail}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception while processing %s %s", request.method, request.url.path)
    # Keep the body generic to avoid leaking internal state.
    return JSONResponse({"detail": "Internal server error."}, status_code=500)


@app.get("/healthz")
def healthz(store: InMemoryUserStore = Depends(deps.get_user_store)):
    return JSONResponse(
        {
            "ok": True,
            "service": "user-service",
            "version": APP_VERSION,
            "users": len(store),
        }
    )
