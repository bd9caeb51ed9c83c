# ABOUTME: Collaborator protocols for presented entities and transaction managers
# ABOUTME: Anything satisfying these can be composed by a Presenter

from __future__ import annotations

from collections.abc import Mapping
from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable

from active_presenter.presenter.errors import ErrorSet


@runtime_checkable
class PresentableEntity(Protocol):
    """An independently persisted object a presenter can compose.

    Entities may also expose ``protected_attributes(fields)`` to shield
    fields from bulk assignment, and ``is_new_record``/``id`` so the
    presenter can report its own identity. Both are optional.
    """

    def validation_errors(self) -> ErrorSet | Mapping[str, Any]:
        """Validate the entity and return its errors (empty when valid)."""
        ...

    def save(self) -> bool:
        """Persist the entity, returning ``False`` on failure."""
        ...

    def save_or_raise(self) -> None:
        """Persist the entity, raising on failure."""
        ...


@runtime_checkable
class TransactionManager(Protocol):
    """Provides the atomic boundary a presenter saves inside.

    ``transaction()`` commits when the body returns normally, rolls back and
    swallows :class:`~active_presenter.exceptions.Rollback`, and rolls back
    and re-raises any other exception.
    """

    def transaction(self) -> AbstractContextManager[Any]: ...
