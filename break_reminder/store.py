"""
Durable key-value store backed by the ``storeentry`` table.

Writes are staged in memory by ``set``/``delete`` and only reach the database
on ``save``, so a ``set`` + ``save`` pair lands in a single transaction.
"""
import json
import logging
from typing import Any, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from break_reminder.errors import StoreError
from break_reminder.models import StoreEntry

logger = logging.getLogger(__name__)

_DELETED = object()


class KeyValueStore:
    def __init__(self, engine: Engine):
        self._engine = engine
        self._pending: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the decoded JSON value for ``key``, or None if it is absent."""
        if key in self._pending:
            value = self._pending[key]
            return None if value is _DELETED else value
        try:
            with Session(self._engine) as session:
                entry = session.get(StoreEntry, key)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read '{key}' from store: {e}") from e
        if entry is None:
            return None
        try:
            return json.loads(entry.value)
        except json.JSONDecodeError as e:
            raise StoreError(f"Failed to decode '{key}' from store: {e}") from e

    def set(self, key: str, value: Any) -> None:
        try:
            json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StoreError(f"Value for '{key}' is not JSON serializable: {e}") from e
        self._pending[key] = value

    def delete(self, key: str) -> None:
        """Stage removal of ``key``. Deleting an absent key is a no-op."""
        self._pending[key] = _DELETED

    def save(self) -> None:
        """Flush staged writes in one transaction. On failure the staged writes are discarded."""
        if not self._pending:
            return
        pending, self._pending = self._pending, {}
        try:
            with Session(self._engine) as session:
                for key, value in pending.items():
                    entry = session.get(StoreEntry, key)
                    if value is _DELETED:
                        if entry is not None:
                            session.delete(entry)
                        continue
                    encoded = json.dumps(value)
                    if entry is None:
                        session.add(StoreEntry(key=key, value=encoded))
                    else:
                        entry.value = encoded
                        session.add(entry)
                session.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to save store: {e}") from e
        logger.debug("Store saved (%d keys)", len(pending))
