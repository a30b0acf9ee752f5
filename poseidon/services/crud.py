"""Generic create/read/update/delete for the reference-data models."""

import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from poseidon.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudService(Generic[ModelT]):
    """
    Forward records to the database one-for-one; no business rules beyond what the
    form schema already validated.

    Each write commits on its own; nothing spans more than one call.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def list_all(self, db: Session) -> list[ModelT]:
        return db.query(self.model).order_by(self.model.id).all()

    def find_by_id(self, db: Session, record_id: int) -> ModelT | None:
        return db.get(self.model, record_id)

    def exists_by_id(self, db: Session, record_id: int) -> bool:
        return self.find_by_id(db, record_id) is not None

    def create(self, db: Session, values: Mapping[str, Any]) -> ModelT:
        """Insert a new record and return it with its assigned id."""
        record = self.model(**values)
        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info("Created %s id=%s", self.model.__name__, record.id)
        return record

    def update(self, db: Session, record_id: int, values: Mapping[str, Any]) -> ModelT | None:
        """Overwrite the given fields of an existing record. Returns None if the id is absent."""
        record = self.find_by_id(db, record_id)
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        db.commit()
        db.refresh(record)
        logger.info("Updated %s id=%s", self.model.__name__, record_id)
        return record

    def delete_by_id(self, db: Session, record_id: int) -> bool:
        """Delete a record. Returns False (and changes nothing) if the id is absent."""
        record = self.find_by_id(db, record_id)
        if record is None:
            return False
        db.delete(record)
        db.commit()
        logger.info("Deleted %s id=%s", self.model.__name__, record_id)
        return True
