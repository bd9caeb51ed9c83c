# ABOUTME: Multi-entity presenters with qualified attributes and all-or-nothing saves
# ABOUTME: Public API re-exported from the presenter and persistence layers

from .exceptions import PresenterError, RecordInvalid, RecordNotSaved, Rollback, UnknownAttributeError
from .persistence import DatabaseManager, Record
from .presenter import (
    ErrorSet,
    HookStage,
    Presenter,
    after_save,
    before_save,
    before_validation,
    presented_entity,
)
from .utils.logging import configure_logging_from_config

__all__ = [
    "DatabaseManager",
    "ErrorSet",
    "HookStage",
    "Presenter",
    "PresenterError",
    "Record",
    "RecordInvalid",
    "RecordNotSaved",
    "Rollback",
    "UnknownAttributeError",
    "after_save",
    "before_save",
    "before_validation",
    "configure_logging_from_config",
    "presented_entity",
]
