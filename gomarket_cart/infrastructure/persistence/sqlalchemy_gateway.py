"""
SQLAlchemy Persistence Gateway

Key-value storage in a single ``cart_storage`` table.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import DateTime, String, Text, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapped, Session, declarative_base, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

from gomarket_cart.domain.repositories.persistence_gateway import PersistenceGateway
from gomarket_cart.infrastructure.utilities.constants import StorageSettings

Base = declarative_base()


class StorageEntry(Base):  # pylint: disable=too-few-public-methods
    """Stored key-value pair"""
    __tablename__ = StorageSettings.TABLE_NAME

    key: Mapped[str] = mapped_column(String(StorageSettings.MAX_KEY_LENGTH), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )


class SQLAlchemyPersistenceGateway(PersistenceGateway):
    """SQLAlchemy implementation of the persistence gateway"""

    def __init__(self, database_url: str = StorageSettings.DEFAULT_DATABASE_URL, engine: Engine = None):
        self._engine = engine or self._create_engine(database_url)
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def _create_engine(database_url: str) -> Engine:
        """Create database engine; SQLite shares one connection across sessions"""
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite":
            if url.database and url.database != ":memory:":
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            return create_engine(
                database_url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_engine(database_url, pool_pre_ping=True)

    @contextmanager
    def managed_session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on error"""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            self._logger.error("💥 DATABASE ERROR: %s", e)
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create the storage table if it doesn't exist"""
        Base.metadata.create_all(self._engine)
        self._logger.info("Storage table '%s' ready", StorageSettings.TABLE_NAME)

    def dispose(self) -> None:
        """Release pooled connections"""
        self._engine.dispose()

    async def get(self, key: str) -> Optional[str]:
        with self.managed_session() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None

    async def set(self, key: str, value: str) -> bool:
        try:
            with self.managed_session() as session:
                entry = session.get(StorageEntry, key)
                if entry is None:
                    session.add(StorageEntry(key=key, value=value))
                else:
                    entry.value = value
            return True
        except SQLAlchemyError as e:
            self._logger.error("💥 STORAGE WRITE FAILED for '%s': %s", key, e)
            return False
