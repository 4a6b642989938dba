"""
Application-level exception handlers.

Every error response body has the shape ``{"error": "<message>"}``:

- request binding failures (malformed JSON, missing or mistyped fields,
  bad path parameters) become 400 instead of FastAPI's default 422;
- ``HTTPException`` (including the router's 404/405) keeps its status
  and moves ``detail`` under ``error``;
- anything else that escapes a route is logged with its traceback and
  answered with a generic 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_ID_MESSAGE = "invalid ID format; must be a non-negative integer"


def _describe(errors) -> str:
    """Summarise pydantic errors for a request body in one line."""
    parts: list[str] = []
    for err in errors:
        if err.get("type") == "json_invalid":
            return "invalid JSON body"
        field = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts) or "invalid request"


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(err.get("loc", ("",))[0] == "path" for err in errors):
        message = INVALID_ID_MESSAGE
    else:
        message = _describe(errors)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
