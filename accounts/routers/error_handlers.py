"""Exception handlers that turn service errors into the JSON error envelope."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.core.errors import AccountsError, status_for


# baseline headers, also applied to 500s rendered outside the middleware stack
SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


def error_body(message: str, data=None) -> dict:
    body = {"error": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountsError)
    async def accounts_error_handler(request: Request, exc: AccountsError):
        return JSONResponse(status_code=status_for(exc), content=error_body(exc.message, exc.data))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = {
            ".".join(str(loc) for loc in err.get("loc", ())) or "body": {"message": err.get("msg", ""), "kind": "type"}
            for err in exc.errors()
        }
        return JSONResponse(status_code=400, content=error_body("Validation error", details))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled exception on {} {}", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body("Internal server error"), headers=SECURITY_HEADERS)
