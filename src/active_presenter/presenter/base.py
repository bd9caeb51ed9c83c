# ABOUTME: Presenter base class composing several persisted entities behind one object
# ABOUTME: Routes qualified attributes, merges validation errors and saves everything in one transaction

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar

from active_presenter.exceptions import RecordInvalid, RecordNotSaved, Rollback, UnknownAttributeError
from active_presenter.presenter import routing
from active_presenter.presenter.callbacks import HookStage, collect_hooks, run_hook_chain
from active_presenter.presenter.entity import TransactionManager
from active_presenter.presenter.errors import ErrorSet
from active_presenter.presenter.registry import EntityRegistry
from active_presenter.utils.inflection import humanize
from active_presenter.utils.logging import get_logger, with_presenter_context

logger = get_logger(__name__)


def _entity_property(name: str) -> property:
    def fget(self: Presenter) -> Any:
        return self._entities[name]

    def fset(self: Presenter, value: Any) -> None:
        entry = type(self).presented[name]
        if not entry.accepts(value):
            raise TypeError(
                f"{type(self).__name__}.{name} must be a {entry.entity_class.__name__}, got {type(value).__name__}"
            )
        self._entities[name] = value

    return property(fget, fset, doc=f"The presented {name} entity.")


def _errors_property(name: str) -> property:
    def fget(self: Presenter) -> ErrorSet:
        return self._entity_errors.get(name) or ErrorSet()

    return property(fget, doc=f"Errors of the {name} entity from the latest validation pass.")


class Presenter:
    """Base class for presenters.

    Subclasses declare the entities they compose::

        class SignupPresenter(Presenter):
            presents = {"user": User, "account": Account}

    Attributes of each entity are then reachable as ``<type>_<field>``
    (``presenter.user_login``), validation errors are merged under the same
    names, and :meth:`save` persists every entity in a single transaction.

    The initializer accepts a mapping in two forms, which can be mixed:

    1. ``SignupPresenter({"user_login": "james", "account_subdomain": "giraffesoft"})``
       builds fresh entities and assigns the qualified attributes.
    2. ``SignupPresenter({"user": existing_user, "account": existing_account})``
       adopts existing instances, e.g. to edit them through the presenter.

    ``SignupPresenter({"user": existing_user, "user_login": "james"})`` updates
    ``login`` on the adopted user.
    """

    presented: ClassVar[EntityRegistry] = EntityRegistry()
    transaction_manager: ClassVar[TransactionManager | None] = None

    _hooks: ClassVar[dict[HookStage, tuple[str, ...]]] = {stage: () for stage in HookStage}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declarations = cls.__dict__.get("presents")
        if declarations:
            cls.register_presented(**declarations)
        cls._hooks = collect_hooks(cls)

    @classmethod
    def register_presented(cls, **declarations: Any) -> None:
        """Add entity types to this presenter class and define their accessors."""
        cls.presented = cls.presented.extended(declarations)
        for name in declarations:
            setattr(cls, name, _entity_property(name))
            setattr(cls, f"{name}_errors", _errors_property(name))

    @classmethod
    def human_attribute_name(cls, attribute_name: str) -> str:
        """Label for a qualified attribute: ``"user_password_confirmation"`` -> ``"Password confirmation"``."""
        return humanize(routing.strip_prefix(str(attribute_name), cls.presented))

    def __init__(self, attrs: Mapping[str, Any] | None = None):
        attrs = dict(attrs or {})
        self._entities: dict[str, Any] = {}
        self._entity_errors: dict[str, ErrorSet] = {}
        self._errors: ErrorSet | None = None

        for name, entry in self.presented.items():
            if name in attrs and entry.accepts(attrs[name]):
                self._entities[name] = attrs.pop(name)
            else:
                self._entities[name] = entry.build()

        self.assign_attributes(attrs)

    # --- Attribute routing -----------------------------------------------------------
    def _resolve(self, name: str) -> routing.Route | None:
        entities = self.__dict__.get("_entities")
        if not entities:
            return None
        route = routing.resolve(name, self.presented)
        if route is None or not hasattr(entities[route.type], route.field):
            return None
        return route

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("_"):
            route = self._resolve(name)
            if route is not None:
                return getattr(self._entities[route.type], route.field)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and not hasattr(type(self), name):
            route = self._resolve(name)
            if route is not None:
                setattr(self._entities[route.type], route.field, value)
                return
        super().__setattr__(name, value)

    def _qualified_names(self) -> Iterator[tuple[str, str, str]]:
        for type_name, entity in self.__dict__.get("_entities", {}).items():
            fields = (
                getattr(type(entity), "model_fields", None)
                or getattr(entity, "__dict__", None)
                or getattr(type(entity), "__slots__", ())
            )
            for field in fields:
                if not field.startswith("_"):
                    yield f"{routing.attribute_prefix(type_name)}{field}", type_name, field

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        names.update(qualified for qualified, _, _ in self._qualified_names())
        return sorted(names)

    def responds_to(self, name: str) -> bool:
        """True when ``name`` is a routed entity attribute or an attribute of the presenter itself."""
        return self._resolve(name) is not None or hasattr(type(self), name) or name in self.__dict__

    @property
    def attributes(self) -> dict[str, Any]:
        """Snapshot of every entity field under its qualified name."""
        return {
            qualified: getattr(self._entities[type_name], field)
            for qualified, type_name, field in self._qualified_names()
            if routing.resolve(qualified, self.presented) == (type_name, field)
        }

    @attributes.setter
    def attributes(self, attrs: Mapping[str, Any]) -> None:
        self.assign_attributes(attrs)

    def assign_attributes(self, attrs: Mapping[str, Any]) -> None:
        """Bulk-assign qualified attributes, skipping fields the entities protect."""
        for key, value in attrs.items():
            route = self._resolve(key)
            if route is not None:
                if self._attribute_protected(route):
                    logger.debug("Skipping protected attribute", presenter=type(self).__name__, attribute=key)
                    continue
                setattr(self._entities[route.type], route.field, value)
            elif self._settable_on_presenter(key):
                setattr(self, key, value)
            else:
                raise UnknownAttributeError(self, key)

    def _attribute_protected(self, route: routing.Route) -> bool:
        protected_attributes = getattr(self._entities[route.type], "protected_attributes", None)
        if protected_attributes is None:
            return False
        return route.field in protected_attributes({route.field})

    def _settable_on_presenter(self, key: str) -> bool:
        if key.startswith("_"):
            return False
        if key in self.__dict__:
            return True
        descriptor = getattr(type(self), key, None)
        return isinstance(descriptor, property) and descriptor.fset is not None

    # --- Errors and validation -------------------------------------------------------
    @property
    def errors(self) -> ErrorSet:
        """Errors from every presented entity keyed as ``<type>_<field>``."""
        if self._errors is None:
            self._errors = ErrorSet()
        return self._errors

    def should_save(self, name: str, entity: Any) -> bool:
        """Whether the ``name`` entity takes part in validation and save. Override per presenter.

        Called once per presented type by :meth:`is_valid`, :meth:`save` and
        :meth:`save_or_raise`.
        """
        return True

    def _included(self) -> Iterator[tuple[str, Any]]:
        for name in self.presented:
            entity = self._entities[name]
            if self.should_save(name, entity):
                yield name, entity

    def run_hooks(self, stage: HookStage) -> bool:
        """Run the hook chain for ``stage``; ``False`` means a hook halted it."""
        completed = run_hook_chain(self, self._hooks[stage])
        if not completed:
            logger.info("Hook chain halted", presenter=type(self).__name__, stage=stage.value)
        return completed

    def is_valid(self) -> bool:
        """Validate every included entity and merge their errors into :attr:`errors`."""
        self.errors.clear()
        self._entity_errors.clear()
        if not self.run_hooks(HookStage.BEFORE_VALIDATION):
            return False

        for name, entity in self._included():
            entity_errors = ErrorSet.coerce(entity.validation_errors())
            self._entity_errors[name] = entity_errors
            self._merge_errors(name, entity_errors)

        if self.errors:
            logger.debug("Presenter invalid", presenter=type(self).__name__, errors=self.errors.to_dict())
        return not self.errors

    def _merge_errors(self, name: str, entity_errors: ErrorSet) -> None:
        prefix = routing.attribute_prefix(name)
        for field, message in entity_errors.messages():
            self.errors.add(f"{prefix}{field}", message)

    # --- Persistence -----------------------------------------------------------------
    def _transaction_manager(self) -> TransactionManager:
        if self.transaction_manager is not None:
            return self.transaction_manager
        from active_presenter.persistence.database import get_database

        return get_database()

    def save(self) -> bool:
        """Save all included entities in one transaction.

        Returns:
            True on commit; False when validation fails, a ``before_save`` hook
            halts, or any entity fails to save (everything is rolled back).
        """
        if not (self.is_valid() and self.run_hooks(HookStage.BEFORE_SAVE)):
            return False

        included = [entity for _, entity in self._included()]
        saved = False
        with with_presenter_context(self, operation="save") as log:
            with self._transaction_manager().transaction():
                saved = all(entity.save() for entity in included)
                if not saved:
                    log.warning("Entity save failed, rolling back")
                    raise Rollback

            if not saved:
                return False
            log.info("Presenter saved")

        self.run_hooks(HookStage.AFTER_SAVE)
        return True

    def save_or_raise(self) -> bool:
        """Save all included entities in one transaction or raise.

        Raises:
            RecordInvalid: validation failed
            RecordNotSaved: a ``before_save`` hook halted
            Exception: whatever an entity's ``save_or_raise`` raised, after rollback
        """
        if not self.is_valid():
            raise RecordInvalid(self)
        if not self.run_hooks(HookStage.BEFORE_SAVE):
            raise RecordNotSaved(self)

        included = [entity for _, entity in self._included()]
        with with_presenter_context(self, operation="save_or_raise") as log:
            with self._transaction_manager().transaction():
                for entity in included:
                    entity.save_or_raise()
            log.info("Presenter saved")

        self.run_hooks(HookStage.AFTER_SAVE)
        return True

    def update(self, attrs: Mapping[str, Any]) -> bool:
        """Assign ``attrs`` and :meth:`save`."""
        self.assign_attributes(attrs)
        return self.save()

    # --- Identity --------------------------------------------------------------------
    @property
    def is_new_record(self) -> bool:
        return all(getattr(entity, "is_new_record", True) for entity in self._entities.values())

    @property
    def id(self) -> Any:
        """Identity of the first already-persisted entity, or None."""
        for entity in self._entities.values():
            if not getattr(entity, "is_new_record", True):
                return getattr(entity, "id", None)
        return None

    def __repr__(self) -> str:
        entities = ", ".join(f"{name}={entity!r}" for name, entity in self.__dict__.get("_entities", {}).items())
        return f"{type(self).__name__}({entities})"
