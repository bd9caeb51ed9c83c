# ABOUTME: Entity registry declaring which entity types a presenter composes
# ABOUTME: Built once per presenter class; subclasses extend a copy of the parent's entries

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class PresentedEntity:
    """Registry entry: the entity class for a type name and how to build a default instance."""

    name: str
    entity_class: type
    factory: Callable[[], Any]

    def build(self) -> Any:
        return self.factory()

    def accepts(self, value: Any) -> bool:
        return isinstance(value, self.entity_class)


@dataclass(frozen=True, slots=True)
class EntityDeclaration:
    """An entity class paired with its default constructor, not yet bound to a type name."""

    entity_class: type
    factory: Callable[[], Any]

    def bind(self, name: str) -> PresentedEntity:
        return PresentedEntity(name, self.entity_class, self.factory)


def presented_entity(entity_class: type, factory: Callable[[], Any] | None = None) -> EntityDeclaration:
    """Declare an entity class with an explicit default constructor.

    Usage::

        class SignupPresenter(Presenter):
            presents = {"user": presented_entity(User, factory=lambda: User(role="member"))}
    """
    if not isinstance(entity_class, type):
        raise TypeError(f"presented_entity expects an entity class, got {entity_class!r}")
    return EntityDeclaration(entity_class, factory or entity_class)


class EntityRegistry(Mapping[str, PresentedEntity]):
    """Ordered, read-only view of type name -> :class:`PresentedEntity`."""

    def __init__(self, entries: Mapping[str, PresentedEntity] | None = None):
        self._entries: dict[str, PresentedEntity] = dict(entries or {})

    def extended(self, declarations: Mapping[str, Any]) -> EntityRegistry:
        """Return a new registry with ``declarations`` added after the existing entries."""
        entries = dict(self._entries)
        for name, declaration in declarations.items():
            if not name.isidentifier():
                raise ValueError(f"presented type name must be an identifier, got {name!r}")
            if isinstance(declaration, type):
                entries[name] = PresentedEntity(name, declaration, declaration)
            elif isinstance(declaration, EntityDeclaration):
                entries[name] = declaration.bind(name)
            else:
                raise TypeError(
                    f"cannot present {name!r}: expected an entity class or presented_entity(...), got {declaration!r}"
                )
        return EntityRegistry(entries)

    def __getitem__(self, name: str) -> PresentedEntity:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        classes = ", ".join(f"{name}={entry.entity_class.__name__}" for name, entry in self._entries.items())
        return f"EntityRegistry({classes})"
