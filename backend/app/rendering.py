"""Thin rendering layer: template name + context -> HTML response."""

from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.config import settings

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, template: str, context: Optional[Dict[str, Any]] = None, status_code: int = 200):
    """Render ``template`` with ``context``; ``user`` and ``app_title`` are always present."""
    ctx: Dict[str, Any] = {"user": None, "app_title": settings.app_title}
    if context:
        ctx.update(context)
    return templates.TemplateResponse(request, template, ctx, status_code=status_code)
