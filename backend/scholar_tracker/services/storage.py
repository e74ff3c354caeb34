import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scholar_tracker.errors import NotFoundError, TransportError
from scholar_tracker.models.scholarship import Scholarship


logger = logging.getLogger(__name__)

# Largest value a signed 64-bit primary key column can hold
MAX_ID = 2**63 - 1

T = TypeVar("T")


def _valid_id(scholarship_id: int) -> bool:
    return 1 <= scholarship_id <= MAX_ID


class ScholarshipStorage:
    """Record store for scholarship rows. One commit per write, no cross-row coordination."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Scholarship]:
        # Deadline ascending with undated rows last; id keeps ties stable
        return self._query(
            "list",
            lambda: self.db.query(Scholarship)
            .order_by(Scholarship.deadline.is_(None), Scholarship.deadline.asc(), Scholarship.id.asc())
            .all(),
        )

    def get(self, scholarship_id: int) -> Optional[Scholarship]:
        if not _valid_id(scholarship_id):
            return None
        return self._query(
            "get",
            lambda: self.db.query(Scholarship).filter(Scholarship.id == scholarship_id).first(),
        )

    def create(self, fields: Dict[str, Any]) -> Scholarship:
        scholarship = Scholarship(**fields)
        self.db.add(scholarship)
        self._commit("create")
        self._query("create", lambda: self.db.refresh(scholarship))
        logger.info("Created scholarship id=%s name=%r", scholarship.id, scholarship.scholarship_name)
        return scholarship

    def update(self, scholarship_id: int, changes: Dict[str, Any]) -> Scholarship:
        scholarship = self.get(scholarship_id)
        if scholarship is None:
            raise NotFoundError("Scholarship not found")
        for key, value in changes.items():
            setattr(scholarship, key, value)
        self.db.add(scholarship)
        self._commit("update")
        self._query("update", lambda: self.db.refresh(scholarship))
        logger.info("Updated scholarship id=%s fields=%s", scholarship_id, sorted(changes))
        return scholarship

    def delete(self, scholarship_id: int) -> bool:
        """Remove a row. Unknown ids are a no-op; returns whether a row was removed."""
        if not _valid_id(scholarship_id):
            return False
        deleted = self._query(
            "delete",
            lambda: self.db.query(Scholarship).filter(Scholarship.id == scholarship_id).delete(),
        )
        self._commit("delete")
        if deleted:
            logger.info("Deleted scholarship id=%s", scholarship_id)
        return bool(deleted)

    def _query(self, action: str, run: Callable[[], T]) -> T:
        try:
            return run()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Scholarship %s query failed", action)
            raise TransportError(f"Failed to {action} scholarship") from exc

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Scholarship %s failed", action)
            raise TransportError(f"Failed to {action} scholarship") from exc
