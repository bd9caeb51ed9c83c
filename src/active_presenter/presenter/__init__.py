# ABOUTME: Presenter layer composing several entities behind one form-like object
# ABOUTME: Attribute routing, entity registry, error aggregation, hooks and save coordination

"""
Presenter Layer: One object in front of several persisted entities

This layer handles:
- Routing qualified attributes ("user_login") to the owning entity
- Declaring presented entity types per presenter class
- Merging entity validation errors under qualified names
- Saving every entity in a single transaction, with hooks

Data Flow: form params → Presenter → entities → persistence/
"""

from .base import Presenter
from .callbacks import HookStage, after_save, before_save, before_validation
from .entity import PresentableEntity, TransactionManager
from .errors import ErrorSet
from .registry import EntityDeclaration, EntityRegistry, PresentedEntity, presented_entity
from .routing import Route, resolve

__all__ = [
    "EntityDeclaration",
    "EntityRegistry",
    "ErrorSet",
    "HookStage",
    "PresentableEntity",
    "PresentedEntity",
    "Presenter",
    "Route",
    "TransactionManager",
    "after_save",
    "before_save",
    "before_validation",
    "presented_entity",
    "resolve",
]
