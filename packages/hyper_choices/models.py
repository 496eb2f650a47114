"""Accessors for the domain model a binding reads and writes."""

from collections.abc import Mapping, MutableMapping
from typing import Any, Protocol

__all__ = ["ModelAccessor", "Model", "PropertyModel"]


class ModelAccessor(Protocol):
    def get(self) -> Any:
        ...

    def set(self, value: Any) -> None:
        ...


class Model:
    """Holds a single value."""

    __slots__ = ("value",)

    def __init__(self, value: Any = None):
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value

    def __repr__(self):
        return f"Model({self.value!r})"


class PropertyModel:
    """Reads and writes a property of a target object by dotted path.

    Each segment is looked up as a key on mappings and as an attribute on
    anything else.

    Example:
        >>> order = {"shipping": {"country": "NL"}}
        >>> model = PropertyModel(order, "shipping.country")
        >>> model.get()
        'NL'
        >>> model.set("BE")
        >>> order["shipping"]["country"]
        'BE'
    """

    __slots__ = ("target", "expression", "_path")

    def __init__(self, target: Any, expression: str):
        if not expression or any(not part for part in expression.split('.')):
            raise ValueError(f"Invalid property expression: {expression!r}")
        self.target = target
        self.expression = expression
        self._path = expression.split('.')

    @staticmethod
    def _read(obj: Any, name: str) -> Any:
        if isinstance(obj, Mapping):
            return obj[name]
        return getattr(obj, name)

    def _owner(self) -> Any:
        obj = self.target
        for name in self._path[:-1]:
            obj = self._read(obj, name)
        return obj

    def get(self) -> Any:
        return self._read(self._owner(), self._path[-1])

    def set(self, value: Any) -> None:
        owner = self._owner()
        name = self._path[-1]
        if isinstance(owner, MutableMapping):
            owner[name] = value
        else:
            setattr(owner, name, value)

    def __repr__(self):
        return f"PropertyModel({self.target!r}, {self.expression!r})"
