"""
Error Handler Middleware

- Domain errors (WhereIsItError) are turned into {"detail": ...} responses
  with the status code each error carries
- Any other exception escaping an endpoint is logged as critical and
  answered with a generic 500 carrying the error log id
"""

from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from whereisit.core.exceptions import WhereIsItError
from whereisit.services.error_logging import error_logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that catches all unhandled exceptions and logs them.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            error_id = error_logger.log_error(
                exc,
                request=request,
                user=getattr(request.state, 'user', None),
                severity="critical",
                context={"unhandled": True}
            )

            # Generic message; details stay in the logs
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "An internal error occurred. Please try again later.",
                    "error_id": str(error_id) if error_id else None
                }
            )


async def domain_error_handler(request: Request, exc: WhereIsItError) -> JSONResponse:
    if exc.status_code >= 500:
        # Server-side failures are worth keeping; 4xx are the caller's problem
        error_logger.log_error(
            exc,
            request=request,
            user=getattr(request.state, 'user', None),
            severity="error",
            context={"status_code": exc.status_code, "detail": exc.detail}
        )

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map every WhereIsItError subclass to its HTTP status."""
    app.add_exception_handler(WhereIsItError, domain_error_handler)
