"""CRUD stores for the student and teacher collections.

``SqlEntityStore`` persists through a SQLAlchemy session; ``MemoryEntityStore``
keeps transient model instances for the lifetime of the application object.
Both enforce uniqueness of the collection's business key.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.core.errors import IntegrationError, ValidationError

logger = logging.getLogger(__name__)

# Primary keys are 64-bit signed integers in every supported database.
MAX_ENTITY_ID = 2**63 - 1


class EntityStore:
    def list(self) -> list[Any]:
        raise NotImplementedError

    def get(self, entity_id: int) -> Any | None:
        raise NotImplementedError

    def create(self, fields: dict[str, Any]) -> Any:
        raise NotImplementedError

    def replace(self, entity_id: int, fields: dict[str, Any]) -> Any | None:
        """Assign ``fields`` onto the stored entity; ``None`` when it does not exist."""
        raise NotImplementedError

    def remove(self, entity_id: int) -> bool:
        raise NotImplementedError


class SqlEntityStore(EntityStore):
    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def list(self) -> list[Any]:
        try:
            return self.db.query(self.model).order_by(self.model.id.asc()).all()
        except SQLAlchemyError as exc:
            raise IntegrationError(str(exc)) from exc

    def get(self, entity_id: int) -> Any | None:
        if not -MAX_ENTITY_ID <= entity_id <= MAX_ENTITY_ID:
            return None
        try:
            return self.db.query(self.model).filter(self.model.id == entity_id).first()
        except SQLAlchemyError as exc:
            raise IntegrationError(str(exc)) from exc

    def create(self, fields: dict[str, Any]) -> Any:
        row = self.model(**fields)
        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        return row

    def replace(self, entity_id: int, fields: dict[str, Any]) -> Any | None:
        row = self.get(entity_id)
        if row is None:
            return None

        for name, value in fields.items():
            setattr(row, name, value)
        self._commit()
        self.db.refresh(row)
        return row

    def remove(self, entity_id: int) -> bool:
        row = self.get(entity_id)
        if row is None:
            return False

        self.db.delete(row)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ValidationError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception('Database write on %s failed', self.model.__tablename__)
            raise IntegrationError(str(exc)) from exc


class MemoryEntityStore(EntityStore):
    def __init__(self, model, unique_field: str):
        self.model = model
        self.unique_field = unique_field
        self._rows: dict[int, Any] = {}
        self._next_id = 1

    def list(self) -> list[Any]:
        return list(self._rows.values())

    def get(self, entity_id: int) -> Any | None:
        return self._rows.get(entity_id)

    def create(self, fields: dict[str, Any]) -> Any:
        self._check_unique(fields.get(self.unique_field))
        row = self.model(id=self._next_id, **fields)
        self._rows[row.id] = row
        self._next_id += 1
        return row

    def replace(self, entity_id: int, fields: dict[str, Any]) -> Any | None:
        row = self._rows.get(entity_id)
        if row is None:
            return None

        if self.unique_field in fields:
            self._check_unique(fields[self.unique_field], exclude_id=entity_id)
        for name, value in fields.items():
            setattr(row, name, value)
        return row

    def remove(self, entity_id: int) -> bool:
        return self._rows.pop(entity_id, None) is not None

    def _check_unique(self, value: Any, exclude_id: int | None = None) -> None:
        for row in self._rows.values():
            if row.id != exclude_id and getattr(row, self.unique_field) == value:
                raise ValidationError(
                    f'UNIQUE constraint failed: {self.model.__tablename__}.{self.unique_field}'
                )
