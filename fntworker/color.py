"""
Colors used to paint glyph pixels and the grid around them.
"""

import re
from dataclasses import dataclass, field

from .errors import BadColorError

HEX_COLOR = re.compile(r'[0-9A-Fa-f]{6}')


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for channel in (self.red, self.green, self.blue):
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel out of range: {channel}")

    @classmethod
    def for_name(cls, name: str) -> 'Color':
        """Look up a palette name (any case) or parse 6 hex digits as RGB."""
        found = PALETTE.get(name.lower())
        if found is not None:
            return found
        if HEX_COLOR.fullmatch(name):
            return cls.from_rgb(int(name, 16))
        raise BadColorError(f"No color called {name} is understood by this program.")

    @classmethod
    def from_rgb(cls, packed: int) -> 'Color':
        return cls((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)

    @property
    def packed(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def __str__(self):
        for name, color in PALETTE.items():
            if color == self:
                return name
        return f"RGB({self.red}, {self.green}, {self.blue})"


PALETTE = {
    'red': Color(255, 0, 0),
    'green': Color(0, 255, 0),
    'blue': Color(0, 0, 255),
    'yellow': Color(255, 255, 0),
    'magenta': Color(255, 0, 255),
    'cyan': Color(0, 255, 255),
    'black': Color(0, 0, 0),
    'white': Color(255, 255, 255),
}


@dataclass(frozen=True)
class ColorSet:
    """
    The four color roles of an exported image.

    Glyph pixels are tri-state: foreground (-1), background (0) and
    shadow (1). ``out_of_bounds`` paints the grid lines and the unused
    part of each cell.
    """
    background: Color
    foreground: Color
    shadow: Color
    out_of_bounds: Color
    _table: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        table = (
            self.foreground.as_tuple(),
            self.background.as_tuple(),
            self.shadow.as_tuple(),
        )
        object.__setattr__(self, '_table', table)

    @classmethod
    def from_names(cls, background, foreground, shadow, out_of_bounds):
        return cls(
            Color.for_name(background),
            Color.for_name(foreground),
            Color.for_name(shadow),
            Color.for_name(out_of_bounds),
        )

    def rgb(self, value: int) -> tuple[int, int, int]:
        """RGB tuple for a tri-state pixel value."""
        if value not in (-1, 0, 1):
            raise ValueError(f"Not a glyph pixel value: {value}")
        return self._table[value + 1]
