import logging
from typing import Generator
from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


class Database:
    """Engine and session factory built from settings."""

    def __init__(self, settings: Settings):
        self.url = settings.database_url
        self.engine = self._create_engine(settings)

        # Session factory
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

        # Database event listeners for monitoring
        @event.listens_for(self.engine, "connect")
        def receive_connect(dbapi_connection, connection_record):
            logger.info("Database connection established")

        @event.listens_for(self.engine, "checkout")
        def receive_checkout(dbapi_connection, connection_record, connection_proxy):
            logger.debug("Database connection checked out from pool")

    @staticmethod
    def _create_engine(settings: Settings):
        url = settings.database_url
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases live inside a single connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, echo=settings.debug, **kwargs)

        return create_engine(
            url,
            poolclass=QueuePool,
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=settings.debug
        )

    def init_db(self) -> None:
        """
        Create tables and verify connectivity.

        Raises:
            SQLAlchemyError: if the database cannot be reached
        """
        # Import all models here to ensure they are registered
        from ..models import task, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database tables created successfully")

    def check_connection(self) -> bool:
        """
        Check database connectivity

        Returns:
            bool: True if connected, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database dependency for FastAPI

    Yields:
        Session: Database session
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
