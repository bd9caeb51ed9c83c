# ABOUTME: Unified error set aggregating validation messages across presented entities
# ABOUTME: Maps qualified field names to ordered message lists; empty means valid

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from active_presenter.utils.inflection import humanize

# Field name used for messages that are not tied to a single attribute
BASE = "base"


class ErrorSet:
    """Ordered mapping of field name -> list of validation messages.

    Looking up a field without errors returns an empty list, so callers can
    write ``errors["user_login"]`` without guarding for missing keys.
    """

    def __init__(self, messages: Mapping[str, Iterable[str]] | None = None):
        self._messages: dict[str, list[str]] = {}
        for field, field_messages in (messages or {}).items():
            for message in field_messages:
                self.add(field, message)

    @classmethod
    def coerce(cls, value: Any) -> ErrorSet:
        """Build an ``ErrorSet`` from whatever an entity reported.

        Accepts an ``ErrorSet``, ``None`` or a mapping whose values are a single
        message or a sequence of messages.
        """
        if isinstance(value, ErrorSet):
            return value
        errors = cls()
        if value is None:
            return errors
        for field, messages in value.items():
            if isinstance(messages, str):
                messages = [messages]
            for message in messages:
                errors.add(field, message)
        return errors

    def add(self, field: str, message: str) -> None:
        self._messages.setdefault(str(field), []).append(message)

    def clear(self) -> None:
        self._messages.clear()

    def fields(self) -> list[str]:
        return list(self._messages)

    def messages(self) -> Iterator[tuple[str, str]]:
        """Yield ``(field, message)`` pairs in insertion order."""
        for field, field_messages in self._messages.items():
            for message in field_messages:
                yield field, message

    def full_messages(self, humanize_field: Callable[[str], str] = humanize) -> list[str]:
        """Messages prefixed with their humanized field name (``"Login is too short"``)."""
        full = []
        for field, message in self.messages():
            if field == BASE:
                full.append(message)
            else:
                full.append(f"{humanize_field(field)} {message}")
        return full

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(field_messages) for field, field_messages in self._messages.items()}

    def __getitem__(self, field: str) -> list[str]:
        return list(self._messages.get(field, []))

    def __contains__(self, field: object) -> bool:
        return field in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return sum(len(field_messages) for field_messages in self._messages.values())

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorSet):
            return self._messages == other._messages
        if isinstance(other, Mapping):
            return self._messages == {k: list(v) for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"ErrorSet({self._messages!r})"
