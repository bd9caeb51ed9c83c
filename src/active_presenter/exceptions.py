# ABOUTME: Exception types raised by presenters and presented records
# ABOUTME: Mirrors the record-invalid / record-not-saved / rollback vocabulary of the save flow

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from active_presenter.utils.inflection import humanize

if TYPE_CHECKING:
    from active_presenter.presenter.errors import ErrorSet


class PresenterError(Exception):
    """Base class for all active_presenter errors."""

    pass


class RecordInvalid(PresenterError):
    """Raised by ``save_or_raise`` when validation fails.

    Carries the failing record (a presenter or a single entity) and the
    error set that was collected for it.
    """

    def __init__(self, record: Any, errors: ErrorSet | None = None):
        self.record = record
        if errors is None:
            errors = getattr(record, "errors", None)
        self.errors = errors

        label = getattr(record, "human_attribute_name", humanize)
        messages = ", ".join(errors.full_messages(label)) if errors else ""
        detail = f": {messages}" if messages else ""
        super().__init__(f"Validation failed for {type(record).__name__}{detail}")


class RecordNotSaved(PresenterError):
    """Raised when a ``before_save`` hook halts ``save_or_raise``."""

    def __init__(self, record: Any, message: str | None = None):
        self.record = record
        super().__init__(message or f"{type(record).__name__} was not saved: before_save halted")


class UnknownAttributeError(PresenterError, AttributeError):
    """Raised when bulk assignment receives a key that is not a presenter attribute."""

    def __init__(self, record: Any, name: str):
        super().__init__(f"unknown attribute {name!r} for {type(record).__name__}")
        self.record = record
        self.name = name


class Rollback(PresenterError):
    """Raised inside a transaction body to roll it back without propagating."""

    pass
