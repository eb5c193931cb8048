import logging
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session
from app.core.config import settings

logger = logging.getLogger(__name__)

# check_same_thread is needed for SQLite, remove for PostgreSQL
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

def get_session():
    with Session(engine) as session:
        yield session

def create_db_and_tables():
    SQLModel.metadata.create_all(engine)

def commit_or_raise(session: Session, action: str, conflict_detail: str = "Data sudah ada"):
    """Commit the session, mapping database errors to HTTP errors.

    The session is rolled back on failure so the request can still report
    the error cleanly.
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Integrity error while trying to %s: %s", action, e.orig)
        raise HTTPException(status_code=400, detail=conflict_detail)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("Database error while trying to %s: %s", action, e)
        raise HTTPException(status_code=500, detail=f"Terjadi kesalahan: gagal {action}")
