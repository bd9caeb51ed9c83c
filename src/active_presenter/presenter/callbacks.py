# ABOUTME: Named hook chains (before_validation, before_save, after_save) for presenters
# ABOUTME: Hooks are decorated methods collected at class-definition time; returning False halts

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

HOOK_ATTRIBUTE = "__presenter_hook__"


class HookStage(str, Enum):
    BEFORE_VALIDATION = "before_validation"
    BEFORE_SAVE = "before_save"
    AFTER_SAVE = "after_save"


def _hook(stage: HookStage) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        setattr(func, HOOK_ATTRIBUTE, stage)
        return func

    return decorator


before_validation = _hook(HookStage.BEFORE_VALIDATION)
before_save = _hook(HookStage.BEFORE_SAVE)
after_save = _hook(HookStage.AFTER_SAVE)


def collect_hooks(cls: type) -> dict[HookStage, tuple[str, ...]]:
    """Collect hook method names per stage, base classes first.

    A subclass that redefines a hook method keeps the base class position;
    redefining it without the decorator removes it from the chain.
    """
    order: dict[str, HookStage | None] = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, (staticmethod, classmethod)):
                member = member.__func__
            if not callable(member):
                continue
            stage = getattr(member, HOOK_ATTRIBUTE, None)
            if stage is not None or name in order:
                order[name] = stage

    chains: dict[HookStage, tuple[str, ...]] = {}
    for stage in HookStage:
        chains[stage] = tuple(name for name, hook_stage in order.items() if hook_stage is stage)
    return chains


def run_hook_chain(instance: Any, names: tuple[str, ...]) -> bool:
    """Call each hook in order; stop and return ``False`` at the first one returning ``False``."""
    for name in names:
        if getattr(instance, name)() is False:
            return False
    return True
