# map_generator/map2d.py

"""
================================================================================
MAP DATA MODEL
================================================================================
A Map2d is a named collection of attributes sharing one grid geometry. Each
Attribute stores one byte per cell for a specific meaning, e.g. elevation,
rainfall or temperature.

Data Contract:
---------------
- Attribute values are a NumPy uint8 array of exactly size.area elements,
  stored row-major. They are only changed through the Attribute's own
  methods, which reject values outside the byte range, and never resized.
  get_all() returns a read-only view.
- Attribute ids are dense indices in insertion order. Attributes are only
  ever added, never removed or renamed, so an id stays valid for the
  lifetime of the map.
- Attribute names are unique within a map.
================================================================================
"""

from typing import Iterable, Optional, Sequence

import numpy as np

from . import config as DEFAULTS
from .errors import GenerationConfigError, UnknownAttributeError, validate_byte, validate_name
from .size import Size2d


def _to_bytes(values: Sequence[int], name: str) -> np.ndarray:
    values = np.asarray(values)
    if values.size and (values.min() < DEFAULTS.MIN_VALUE or values.max() > DEFAULTS.MAX_VALUE):
        raise GenerationConfigError(f"The values of attribute '{name}' are outside the byte range!")
    return values.astype(np.uint8).ravel()


class Attribute:
    """Represents a value with a specific meaning for each cell of a map."""

    def __init__(self, name: str, size: Size2d, values: Sequence[int]):
        self._name = validate_name(name)
        self._size = size
        values = _to_bytes(values, self._name)
        if values.size != size.area:
            raise GenerationConfigError(
                f"Attribute '{self._name}' needs {size.area} values, but got {values.size}!"
            )
        self._values = values

    @classmethod
    def default_value(cls, name: str, size: Size2d, default: int) -> "Attribute":
        default = validate_byte(default, f"default value of attribute '{name}'")
        return cls(name, size, np.full(size.area, default, dtype=np.uint8))

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> Size2d:
        return self._size

    def get_all(self) -> np.ndarray:
        """Returns a read-only view of the values. Use replace_all() & co. to change them."""
        values = self._values.view()
        values.flags.writeable = False
        return values

    def replace_all(self, values: Sequence[int]) -> None:
        values = _to_bytes(values, self._name)
        if values.size != self._values.size:
            raise GenerationConfigError(
                f"Wrong number of new values for attribute '{self._name}': "
                f"expected {self._values.size}, got {values.size}!"
            )
        self._values = values

    def replace_some(self, indices: Iterable[int], value: int) -> None:
        self._values[list(indices)] = validate_byte(value, f"value of attribute '{self._name}'")

    def __getitem__(self, index: int) -> int:
        return int(self._values[index])

    def __setitem__(self, index: int, value: int) -> None:
        self._values[index] = validate_byte(value, f"value of attribute '{self._name}'")

    def __len__(self) -> int:
        return self._values.size

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return (
            self._name == other._name
            and self._size == other._size
            and np.array_equal(self._values, other._values)
        )

    def __repr__(self):
        return f"Attribute(name={self._name!r}, size={self._size!r})"


class Map2d:
    """Represents a 2d region or world map."""

    def __init__(self, name: str, size: Size2d):
        self._name = name
        self._size = size
        self._attributes: list[Attribute] = []
        self._attribute_lookup: dict[str, int] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> Size2d:
        return self._size

    def get_all(self) -> list[Attribute]:
        return self._attributes

    def create_attribute(self, name: str, default: int) -> int:
        """Adds a new attribute filled with a default value and returns its id."""
        return self._add_attribute(Attribute.default_value(name, self._size, default))

    def create_attribute_from(self, name: str, values: Sequence[int]) -> int:
        """Adds a new attribute with the supplied values and returns its id."""
        return self._add_attribute(Attribute(name, self._size, values))

    def _add_attribute(self, attribute: Attribute) -> int:
        if attribute.name in self._attribute_lookup:
            raise GenerationConfigError(
                f"Map '{self._name}' already has an attribute '{attribute.name}'!"
            )

        attribute_id = len(self._attributes)
        self._attribute_lookup[attribute.name] = attribute_id
        self._attributes.append(attribute)
        return attribute_id

    def get_attribute_id(self, name: str) -> Optional[int]:
        return self._attribute_lookup.get(name)

    def get_attribute(self, attribute_id: int) -> Optional[Attribute]:
        if 0 <= attribute_id < len(self._attributes):
            return self._attributes[attribute_id]
        return None

    def __repr__(self):
        names = [attribute.name for attribute in self._attributes]
        return f"Map2d(name={self._name!r}, size={self._size!r}, attributes={names!r})"


def get_attribute(map2d: Map2d, attribute_id: int) -> Attribute:
    """Returns the attribute or aborts the generation if the id is unknown."""
    attribute = map2d.get_attribute(attribute_id)
    if attribute is None:
        raise UnknownAttributeError(attribute_id, map2d.name)
    return attribute
