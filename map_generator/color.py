# map_generator/color.py

"""
================================================================================
COLOR
================================================================================
An RGB color with a byte per channel. Colors are the values of the selectors
that the rendering side uses to turn attribute values into pixels.

It is a pure value type with no dependency on any rendering library.
================================================================================
"""

import string
from dataclasses import dataclass

from .errors import GenerationConfigError
from .interpolation import lerp

HEX_CODE_LENGTH = 7


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    @classmethod
    def gray(cls, value: int) -> "Color":
        return cls(value, value, value)

    @classmethod
    def from_hex(cls, hex_code: str) -> "Color":
        """Parses a color like '#FFA500'. The case of the digits is ignored."""
        if not hex_code.startswith('#'):
            raise GenerationConfigError(f"'{hex_code}' needs to start with # to be a color")
        if len(hex_code) != HEX_CODE_LENGTH:
            raise GenerationConfigError(
                f"'{hex_code}' needs to be {HEX_CODE_LENGTH} characters long to be a color"
            )

        channels = []
        for name, start in (("red", 1), ("green", 3), ("blue", 5)):
            digits = hex_code[start:start + 2]
            if not all(digit in string.hexdigits for digit in digits):
                raise GenerationConfigError(
                    f"Failed to parse the value of {name} from '{hex_code}'"
                )
            channels.append(int(digits, 16))
        return cls(*channels)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_tuple(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def to_float_tuple(self) -> tuple[float, float, float]:
        return self.r / 255.0, self.g / 255.0, self.b / 255.0

    def lerp(self, other: "Color", factor: float) -> "Color":
        return Color(
            lerp(self.r, other.r, factor),
            lerp(self.g, other.g, factor),
            lerp(self.b, other.b, factor),
        )


BLACK = Color(0, 0, 0)
BLUE = Color(0, 0, 255)
CYAN = Color(0, 255, 255)
GREEN = Color(0, 255, 0)
MAGENTA = Color(255, 0, 255)
ORANGE = Color(255, 165, 0)
RED = Color(255, 0, 0)
PINK = Color(255, 0, 128)
WHITE = Color(255, 255, 255)
YELLOW = Color(255, 255, 0)

# Used wherever a color is missing, so gaps stand out.
DEFAULT_COLOR = PINK
