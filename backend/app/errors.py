"""Exceptions shared across the app and the handlers that turn them into responses."""

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse


class SchemaInitError(RuntimeError):
    """The data store could not be brought to the required schema at startup."""


class LoginRequired(Exception):
    """Raised by the auth gate when a protected route has no valid session."""


async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
    return RedirectResponse(url="/login", status_code=303)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the app's custom exception handlers."""
    app.add_exception_handler(LoginRequired, login_required_handler)
