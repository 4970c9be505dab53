"""Ordered key/value property container used by plugin-backed declarations."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from pipeline_artifacts.domain.errors import ConfigErrors

CONFIGURATION_KEY = "configurationKey"
MASKED_VALUE = "****"


class ConfigurationProperty:
    """A single plugin setting; secure properties are masked when rendered."""

    def __init__(self, key: str, value: Optional[str] = None, secure: bool = False):
        self.key = key
        self.value = value
        self.secure = secure
        self._errors = ConfigErrors()

    def errors(self) -> ConfigErrors:
        return self._errors

    def add_error(self, field_name: str, message: str) -> None:
        self._errors.add(field_name, message)

    def has_errors(self) -> bool:
        return not self._errors.is_empty()

    def display_value(self) -> Optional[str]:
        return MASKED_VALUE if self.secure else self.value

    def validate_key_uniqueness(
        self, seen: Dict[str, "ConfigurationProperty"], entity_label: str
    ) -> None:
        """Flag this property and an earlier one sharing its key (case-insensitive)."""
        normalized = (self.key or "").lower()
        existing = seen.get(normalized)
        if existing is None:
            seen[normalized] = self
            return
        message = f"Duplicate key '{self.key}' found for {entity_label}"
        existing.add_error(CONFIGURATION_KEY, message)
        self.add_error(CONFIGURATION_KEY, message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationProperty):
            return NotImplemented
        return self.key == other.key and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.key, self.value))

    def __repr__(self) -> str:
        return f"ConfigurationProperty{{key='{self.key}', value='{self.display_value()}'}}"


class Configuration:
    """Insertion-ordered collection of configuration properties.

    Two configurations are equal when they have the same size and every
    property of one is contained in the other; order is not significant.
    """

    def __init__(self, properties: Optional[Iterable[ConfigurationProperty]] = None):
        self._properties: List[ConfigurationProperty] = list(properties) if properties is not None else []

    def add(self, prop: ConfigurationProperty) -> None:
        self._properties.append(prop)

    def add_new(self, key: str, value: Optional[str] = None, secure: bool = False) -> ConfigurationProperty:
        prop = ConfigurationProperty(key, value, secure)
        self.add(prop)
        return prop

    def get_property(self, key: str) -> Optional[ConfigurationProperty]:
        for prop in self._properties:
            if prop.key == key:
                return prop
        return None

    def list_of_keys(self) -> List[str]:
        return [prop.key for prop in self._properties]

    def size(self) -> int:
        return len(self._properties)

    def contains_all(self, other: "Configuration") -> bool:
        return all(prop in self._properties for prop in other)

    def as_map(self, resolve_secure: bool = False) -> Dict[str, Optional[str]]:
        """Render as a plain mapping; secure values are masked unless resolved."""
        rendered: Dict[str, Optional[str]] = {}
        for prop in self._properties:
            rendered[prop.key] = prop.value if resolve_secure else prop.display_value()
        return rendered

    def validate_uniqueness(self, entity_label: str) -> None:
        seen: Dict[str, ConfigurationProperty] = {}
        for prop in self._properties:
            prop.validate_key_uniqueness(seen, entity_label)

    def has_errors(self) -> bool:
        return any(prop.has_errors() for prop in self._properties)

    def clear_errors(self) -> None:
        for prop in self._properties:
            prop.errors().clear()

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[ConfigurationProperty]:
        return iter(self._properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Configuration):
            return NotImplemented
        return self.size() == other.size() and self.contains_all(other) and other.contains_all(self)

    def __hash__(self) -> int:
        return hash(frozenset(self._properties))

    def __repr__(self) -> str:
        return f"Configuration({self._properties!r})"
