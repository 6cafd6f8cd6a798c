"""
Shared persistence helpers for SQLAlchemy repositories.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.exceptions import DataIntegrityException, PersistenceException
from ..logging_config import get_logger

logger = get_logger(__name__)


class SQLAlchemyRepository:
    """Base class holding the session and the commit/rollback policy."""

    entity_name = "entity"

    def __init__(self, db: Session):
        """
        Initialize repository.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """
        Roll back and translate database errors raised inside the block.

        Raises:
            DataIntegrityException: If a constraint was violated
            PersistenceException: If the database failed otherwise
        """
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(
                "Integrity error", entity=self.entity_name, operation=operation, error=str(e.orig)
            )
            raise DataIntegrityException(self.entity_name, str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "Database error", entity=self.entity_name, operation=operation, error=str(e)
            )
            raise PersistenceException(operation, str(e)) from e

    def _commit(self, operation: str, instance: Any = None) -> None:
        """Commit the current unit of work, reloading ``instance`` afterwards."""
        with self._translate_errors(operation):
            self.db.commit()

        if instance is not None:
            self.db.refresh(instance)

    def add(self, instance: Any) -> Any:
        """Persist a new instance and return it with generated fields loaded."""
        self.db.add(instance)
        self._commit("insert", instance)
        return instance

    def update(self, instance: Any, fields: dict) -> Any:
        """Apply field values to an instance and persist them."""
        for name, value in fields.items():
            setattr(instance, name, value)
        self._commit("update", instance)
        return instance

    def delete(self, instance: Any) -> None:
        """Delete an instance."""
        self.db.delete(instance)
        self._commit("delete")
