"""Named per-element attributes attached to mesh elements."""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Iterator, Optional


class VariableAttribute:
    """Values indexed by element, falling back to a default for unset elements."""

    def __init__(self, default: Any) -> None:
        self._default = default
        self._values: Dict[int, Any] = {}

    @property
    def default(self) -> Any:
        return copy.deepcopy(self._default)

    def __len__(self) -> int:
        """Number of elements covered: one past the highest index set."""
        return max(self._values, default=-1) + 1

    def __iter__(self) -> Iterator[Any]:
        return (self.value(index) for index in range(len(self)))

    @staticmethod
    def _check_index(index: int) -> None:
        if index < 0:
            raise IndexError(f"Attribute index {index} cannot be negative")

    def value(self, index: int) -> Any:
        self._check_index(index)
        if index in self._values:
            return self._values[index]
        return copy.deepcopy(self._default)

    def set_value(self, index: int, value: Any) -> None:
        self._check_index(index)
        self._values[index] = value

    def modify_value(self, index: int, modifier: Callable[[Any], Optional[Any]]) -> None:
        """Apply modifier to the stored value; a returned value replaces it."""
        current = self.value(index)
        result = modifier(current)
        self._values[index] = current if result is None else result


class AttributeManager:
    """Holds the named attributes of one kind of mesh element."""

    def __init__(self) -> None:
        self._attributes: Dict[str, VariableAttribute] = {}

    def find_attribute(self, name: str) -> Optional[VariableAttribute]:
        return self._attributes.get(name)

    def find_or_create_attribute(self, name: str, default: Any) -> VariableAttribute:
        attribute = self._attributes.get(name)
        if attribute is None:
            attribute = VariableAttribute(default)
            self._attributes[name] = attribute
        return attribute

    def attribute_names(self) -> list[str]:
        return list(self._attributes)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes