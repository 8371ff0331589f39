"""Contact form."""
import logging
from typing import List

from fastapi import APIRouter, Depends, Form, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.database import get_session
from app.models.message import Message
from app.rendering import render
from app.services.auth import require_identity
from app.services.session_store import Identity
from app.utils.topics import join_topics

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_SENT = "Mensaje enviado correctamente."
CONTACT_FAILED = "No se pudo enviar. Intenta nuevamente."


@router.get("/contact")
def contact_form(request: Request, identity: Identity = Depends(require_identity)):
    return render(request, "contact.html", {"user": identity, "ok": None, "form": {}})


@router.post("/contact")
def submit_contact(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    message: str = Form(""),
    topics: List[str] = Form([]),
    identity: Identity = Depends(require_identity),
    session: Session = Depends(get_session),
):
    """
    Store one contact message.

    Email format and empty fields are not validated; the table only requires
    non-null values. On a storage failure nothing is written and the form is
    shown again with what the user typed.
    """
    submitted = {"name": name, "email": email, "message": message, "topics": list(topics)}
    try:
        session.add(Message(name=name, email=email, message=message, topics=join_topics(topics)))
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to save contact message")
        return render(
            request,
            "contact.html",
            {"user": identity, "ok": CONTACT_FAILED, "ok_kind": "error", "form": submitted},
        )

    return render(request, "contact.html", {"user": identity, "ok": CONTACT_SENT, "ok_kind": "success", "form": {}})
