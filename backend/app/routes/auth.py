"""
Login and logout.

A client is either anonymous (no live session cookie) or authenticated.
Logging in creates a session and sets its token as a cookie; logging out
destroys the session and clears the cookie.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.rendering import render
from app.services.auth import authenticate, current_identity, require_identity, session_token
from app.services.session_store import Identity, SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Usuario o contraseña inválidos"
LOGIN_INTERNAL_ERROR = "Error interno. Intenta de nuevo."


@router.get("/")
def root(identity: Optional[Identity] = Depends(current_identity)):
    return RedirectResponse(url="/dashboard" if identity else "/login", status_code=303)


@router.get("/login")
def login_form(request: Request, identity: Optional[Identity] = Depends(current_identity)):
    """Show the login form, or go straight to the dashboard when already logged in"""
    if identity is not None:
        return RedirectResponse(url="/dashboard", status_code=303)
    return render(request, "login.html", {"error": None})


@router.post("/login")
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    session: Session = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
):
    """Check credentials and start a session"""
    try:
        identity = authenticate(session, username, password)
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        return render(request, "login.html", {"error": LOGIN_INTERNAL_ERROR})

    if identity is None:
        return render(request, "login.html", {"error": INVALID_CREDENTIALS})

    token = store.create(identity)
    logger.info(f"User '{identity.username}' logged in")

    response = RedirectResponse(url="/dashboard", status_code=303)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.post("/logout")
def logout(
    request: Request,
    identity: Identity = Depends(require_identity),
    store: SessionStore = Depends(get_session_store),
):
    """End the current session"""
    store.destroy(session_token(request))
    logger.info(f"User '{identity.username}' logged out")

    response = RedirectResponse(url="/login", status_code=303)
    response.delete_cookie(key=settings.session_cookie_name)
    return response
