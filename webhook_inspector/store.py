"""
Persistence for webhook delivery records.

One table, ``webhooks``, accessed through WebhookStore. Every public
method opens its own session, so a store can be shared across request
threads.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterable, Iterator, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .exceptions import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Webhook(Base):
    """A single webhook delivery."""

    __tablename__ = "webhooks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    method = Column(String(16), nullable=False)
    pathname = Column(Text, nullable=False)
    ip = Column(String(45), nullable=False)
    status_code = Column(Integer, nullable=False, default=200)
    content_type = Column(String(255), nullable=True)
    content_length = Column(Integer, nullable=True)
    query_params = Column(JSON, nullable=True)
    headers = Column(JSON, nullable=False, default=dict)
    body = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    def to_summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "method": self.method,
            "pathname": self.pathname,
            "created_at": _as_utc(self.created_at).isoformat(),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "method": self.method,
            "pathname": self.pathname,
            "ip": self.ip,
            "status_code": self.status_code,
            "content_type": self.content_type,
            "content_length": self.content_length,
            "query_params": self.query_params,
            "headers": self.headers,
            "body": self.body,
            "created_at": _as_utc(self.created_at).isoformat(),
        }


class WebhookStore:
    """Read and write webhook deliveries in a SQLAlchemy database."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        try:
            self.engine = create_engine(database_url)
        except SQLAlchemyError as e:
            raise StorageError(f"invalid database URL: {e}") from e
        self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        session = self._sessions()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database error while trying to %s: %s", action, e)
            raise StorageError(
                f"could not {action} ({self.engine.url.render_as_string(hide_password=True)}): {e}"
            ) from e
        finally:
            session.close()

    def create_schema(self) -> None:
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"could not create the webhooks table: {e}") from e

    def drop_schema(self) -> None:
        try:
            Base.metadata.drop_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"could not drop the webhooks table: {e}") from e

    def insert_many(self, records: Iterable[dict[str, Any]]) -> int:
        """Insert all records in one transaction; nothing is written on failure."""
        rows = [Webhook(**record) for record in records]
        with self._session("insert webhooks") as session:
            session.add_all(rows)
        logger.info("Inserted %d webhook records", len(rows))
        return len(rows)

    def list(self, limit: int = 20, offset: int = 0) -> list[Webhook]:
        """Newest deliveries first."""
        query = (
            select(Webhook)
            .order_by(Webhook.created_at.desc(), Webhook.id)
            .limit(limit)
            .offset(offset)
        )
        with self._session("list webhooks") as session:
            return list(session.scalars(query))

    def count(self) -> int:
        with self._session("count webhooks") as session:
            return session.scalar(select(func.count()).select_from(Webhook))

    def get(self, webhook_id: str) -> Optional[Webhook]:
        with self._session("load webhook") as session:
            return session.get(Webhook, webhook_id)

    def delete(self, webhook_id: str) -> bool:
        with self._session("delete webhook") as session:
            webhook = session.get(Webhook, webhook_id)
            if webhook is None:
                return False
            session.delete(webhook)
        return True

    def clear(self) -> int:
        with self._session("clear webhooks") as session:
            removed = session.query(Webhook).delete()
        logger.info("Cleared %d webhook records", removed)
        return removed
