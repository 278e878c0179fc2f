# map_generator/errors.py

"""
Exception types of the map generator.

Configuration errors are raised while building values (sizes, gradients,
steps, ...) and can be handled by the caller. An unknown attribute id while
a step runs means the pipeline was assembled incorrectly; it is never caught
inside the library and aborts the whole generation.
"""

import numbers

from . import config as DEFAULTS


class GenerationConfigError(ValueError):
    """A value could not be built because its parameters are invalid."""


class UnknownAttributeError(RuntimeError):
    """A step referenced an attribute id that the map does not contain."""

    def __init__(self, attribute_id: int, map_name: str):
        super().__init__(f"Unknown attribute id {attribute_id} in map '{map_name}'!")
        self.attribute_id = attribute_id
        self.map_name = map_name


def validate_name(name: str) -> str:
    """Returns the trimmed name or raises if nothing is left after trimming."""
    if not isinstance(name, str) or not name.strip():
        raise GenerationConfigError(f"The name '{name}' is invalid!")
    return name.strip()


def validate_byte(value, what: str) -> int:
    """Returns the value or raises if it is not an integer in the byte range."""
    is_integer = isinstance(value, numbers.Integral) and not isinstance(value, bool)
    if not is_integer or not DEFAULTS.MIN_VALUE <= value <= DEFAULTS.MAX_VALUE:
        raise GenerationConfigError(
            f"The {what} must be a byte in [{DEFAULTS.MIN_VALUE}, {DEFAULTS.MAX_VALUE}], "
            f"but is {value!r}!"
        )
    return int(value)
