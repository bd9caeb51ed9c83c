# ABOUTME: SQLModel base class implementing the presentable-entity contract
# ABOUTME: Pydantic-backed validation, session-aware save, and mass-assignment protection

from collections.abc import Iterable
from typing import ClassVar

from pydantic import ValidationError
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from active_presenter.exceptions import RecordInvalid
from active_presenter.persistence.database import current_session, get_database
from active_presenter.presenter.errors import BASE, ErrorSet
from active_presenter.utils.logging import get_logger

logger = get_logger(__name__)


class Record(SQLModel):
    """Base for table models that presenters compose.

    Table models skip validation on ``__init__``, so :meth:`validation_errors`
    re-validates the current field values through the model's pydantic schema
    and then applies :meth:`validate_record` for cross-field rules.

    Example:
        class User(Record, table=True):
            protected_fields: ClassVar[frozenset[str]] = frozenset({"id", "role"})

            id: int | None = Field(default=None, primary_key=True)
            login: str = Field(default="", min_length=3)
    """

    protected_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    def validate_record(self, errors: ErrorSet) -> None:
        """Hook for rules pydantic can't express. Add messages to ``errors``."""

    def validation_errors(self) -> ErrorSet:
        errors = ErrorSet()
        try:
            type(self).model_validate(self.model_dump())
        except ValidationError as exc:
            for error in exc.errors():
                field = ".".join(str(part) for part in error["loc"]) or BASE
                errors.add(field, error["msg"])
        self.validate_record(errors)
        return errors

    def is_valid(self) -> bool:
        return not self.validation_errors()

    @property
    def is_new_record(self) -> bool:
        return not inspect(self).has_identity

    def protected_attributes(self, fields: Iterable[str]) -> set[str]:
        """Subset of ``fields`` that bulk assignment must leave alone."""
        return set(fields) & self.protected_fields

    def save(self) -> bool:
        """Validate and flush into the active transaction.

        Returns False when invalid or when the database rejects the row; the
        caller's transaction is left for its owner to roll back.
        """
        errors = self.validation_errors()
        if errors:
            logger.debug("Record invalid", record=type(self).__name__, errors=errors.to_dict())
            return False
        try:
            self._persist()
        except SQLAlchemyError as e:
            logger.warning("Record not saved", record=type(self).__name__, error=str(e), error_type=type(e).__name__)
            return False
        return True

    def save_or_raise(self) -> None:
        """Validate and flush into the active transaction, raising RecordInvalid when invalid."""
        errors = self.validation_errors()
        if errors:
            raise RecordInvalid(self, errors)
        self._persist()

    def _persist(self) -> None:
        session = current_session()
        if session is not None:
            session.add(self)
            session.flush()
            return
        with get_database().transaction() as session:
            session.add(self)
            session.flush()
