import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.core.config import settings
from app.core.logging import configure_logging
from app.db.session import create_db_and_tables

# Import models to ensure they are registered with SQLModel metadata
from app import models  # noqa: F401

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    create_db_and_tables()
    logger.info("%s started", settings.PROJECT_NAME)
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="Public pages and content admin API for the Rapatin marketing site"
)

@app.get("/health")
def health():
    return {"status": "ok"}

from app.routers import auth, admin, admin_content, upload, pages

app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
app.include_router(admin_content.router, prefix="/api/v1/admin", tags=["admin"])
app.include_router(upload.router, prefix="/api/v1/upload", tags=["upload"])
app.include_router(pages.router, tags=["pages"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
