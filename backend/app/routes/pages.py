"""
Dashboard and service catalog pages.

All routes here require a logged-in user. Pages that need no data come from
the STATIC_PAGES table and share a single handler.
"""
import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.database import get_session
from app.models.service import Service
from app.rendering import render
from app.services.auth import require_identity
from app.services.session_store import Identity

logger = logging.getLogger(__name__)

router = APIRouter()

HOSTING_SERVICE_TITLE = "Hosting Web Compartido"

SERVICE_PAGES = ["vps", "dedicados", "dominios", "ssl", "backup", "correo", "seguridad", "monitoreo", "creador"]

# path -> template
STATIC_PAGES: Dict[str, str] = {"/about": "about.html"}
STATIC_PAGES.update({f"/{page}": f"services/{page}.html" for page in SERVICE_PAGES})


@router.get("/dashboard")
def dashboard(
    request: Request,
    identity: Identity = Depends(require_identity),
    session: Session = Depends(get_session),
):
    """List every service"""
    try:
        services = session.exec(select(Service).order_by(Service.id)).all()
    except SQLAlchemyError:
        logger.exception("Failed to load dashboard services")
        return PlainTextResponse("Error cargando dashboard", status_code=500)
    return render(request, "dashboard.html", {"user": identity, "services": services})


@router.get("/hosting")
def hosting(
    request: Request,
    identity: Identity = Depends(require_identity),
    session: Session = Depends(get_session),
):
    """Shared hosting page; ``hosting`` is None when the service row is absent"""
    try:
        service = session.exec(select(Service).where(Service.title == HOSTING_SERVICE_TITLE)).first()
    except SQLAlchemyError:
        logger.exception("Failed to load hosting service")
        return PlainTextResponse("Error cargando hosting", status_code=500)
    return render(request, "hosting.html", {"user": identity, "hosting": service})


def _static_page_handler(template: str):
    def handler(request: Request, identity: Identity = Depends(require_identity)):
        return render(request, template, {"user": identity})

    return handler


for _path, _template in STATIC_PAGES.items():
    router.add_api_route(
        _path,
        _static_page_handler(_template),
        methods=["GET"],
        name=f"page_{_path.strip('/')}",
    )
