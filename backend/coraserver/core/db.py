from contextlib import contextmanager
from typing import Generator

from sqlmodel import Session, SQLModel, create_engine

from coraserver.core.config import settings

# Create database engine
engine = create_engine(settings.SQLALCHEMY_DATABASE_URI)

# make sure all SQLModel models are imported (coraserver.models) before initializing DB
from coraserver.models import TimetableEntry  # noqa: F401, E402


def init_db() -> None:
    """Create any missing tables."""
    SQLModel.metadata.create_all(engine)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Get a database session context manager.

    This is used for scripts and background tasks that need database access
    outside of FastAPI's dependency injection.

    Usage:
        with get_session() as session:
            session.exec(select(TimetableEntry)).all()
    """
    with Session(engine) as session:
        yield session
