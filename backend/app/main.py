import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.database import engine, init_db
from app.errors import setup_exception_handlers
from app.logging_config import setup_logging
from app.routes import auth, contact, pages

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    # Schema errors propagate and abort startup; seed errors are logged only.
    init_db(engine)

    route_count = sum(1 for r in app.routes if getattr(r, "path", None))
    logger.info(f"{settings.app_title} ready with {route_count} routes")
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)

setup_exception_handlers(app)

app.include_router(auth.router, tags=["auth"])
app.include_router(pages.router, tags=["pages"])
app.include_router(contact.router, tags=["contact"])


@app.get("/api/health")
def health_check():
    """Liveness probe"""
    return {"app_name": settings.app_title, "status": "healthy"}


# Stylesheets and images referenced by the templates.
_static_dir = Path(__file__).resolve().parent / "static"
if _static_dir.is_dir():
    app.mount("/public", StaticFiles(directory=str(_static_dir)), name="public")
