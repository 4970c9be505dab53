"""Field-level error collection for configuration entities."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional


class ConfigErrors:
    """Ordered mapping of field name to the messages recorded against it."""

    def __init__(self):
        self._errors: Dict[str, List[str]] = {}

    def add(self, field_name: str, message: str) -> None:
        """Record a message on a field; repeated messages are kept once."""
        messages = self._errors.setdefault(field_name, [])
        if message not in messages:
            messages.append(message)

    def on(self, field_name: str) -> Optional[str]:
        """Return the first message recorded on a field, if any."""
        messages = self._errors.get(field_name)
        return messages[0] if messages else None

    def get_all_on(self, field_name: str) -> List[str]:
        return list(self._errors.get(field_name, []))

    def fields(self) -> List[str]:
        return list(self._errors.keys())

    def all_messages(self) -> List[str]:
        """Flatten messages across fields in insertion order."""
        return [message for messages in self._errors.values() for message in messages]

    def first_error(self) -> Optional[str]:
        messages = self.all_messages()
        return messages[0] if messages else None

    def as_dict(self) -> Dict[str, List[str]]:
        return {field_name: list(messages) for field_name, messages in self._errors.items()}

    def is_empty(self) -> bool:
        return not self._errors

    def clear(self) -> None:
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._errors

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigErrors):
            return NotImplemented
        return self._errors == other._errors

    def __repr__(self) -> str:
        return f"ConfigErrors({self._errors!r})"
