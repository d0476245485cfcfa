"""
Offsets sidecar: the text file that travels with an exported font image.

Format (17 lines):
  - line 1: the 5 opaque header bytes of the FNT file, in decimal,
    separated by spaces
  - lines 2-17: one row of the 16x16 glyph grid each, 16 tab-separated
    cells of the form "<space before> <space after> <character name>"

Character names are only there to help whoever edits the file by hand.
They are ignored when parsing.
"""

import re
from dataclasses import dataclass

from .errors import BadImageDataError

TOTAL_CHARS = 256
GRID_SIZE = 16
HEADER_BYTES = 5
TOTAL_LINES = GRID_SIZE + 1

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

DECIMAL = re.compile(r'[+-]?[0-9]+')


def _build_char_names():
    names = [f"H-{i:02X}" for i in range(32)]
    names += [chr(i) for i in range(32, 127)]
    names += [f"H-{i:02X} ({chr(i)})" for i in range(127, TOTAL_CHARS)]
    names[0] = "H-00 NULL"
    names[7] = "H-07 BELL"
    names[8] = "H-08 BACKSPACE"
    names[9] = "H-09 TAB"
    names[10] = "H-0A LINE FEED"
    names[11] = "H-0B VERTICAL TAB"
    names[12] = "H-0C FORM FEED"
    names[13] = "H-0D CARRIAGE RETURN"
    names[27] = "H-1B ESCAPE"
    names[32] = "SPACE"
    names[160] = "H-A0 NBSP"
    return tuple(names)


CHAR_NAMES = _build_char_names()


def char_name(index):
    """Display name of a byte value in the offsets file."""
    return CHAR_NAMES[index]


def _split(text, sep):
    # Trailing empty fields are dropped, so a final newline (or a stray
    # trailing separator) does not count as an extra field.
    parts = text.split(sep)
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _parse_int(text):
    if not DECIMAL.fullmatch(text):
        raise ValueError(text)
    value = int(text)
    if not INT32_MIN <= value <= INT32_MAX:
        raise ValueError(text)
    return value


@dataclass(frozen=True)
class ImageOffsets:
    header: tuple[int, ...]
    spaces_before: tuple[int, ...]
    spaces_after: tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, 'header', tuple(self.header))
        object.__setattr__(self, 'spaces_before', tuple(self.spaces_before))
        object.__setattr__(self, 'spaces_after', tuple(self.spaces_after))
        if len(self.header) != HEADER_BYTES:
            raise ValueError(f"Expected {HEADER_BYTES} header bytes, got {len(self.header)}")
        if len(self.spaces_before) != TOTAL_CHARS or len(self.spaces_after) != TOTAL_CHARS:
            raise ValueError(f"Expected {TOTAL_CHARS} spacing pairs")
        if any(not 0 <= b <= 255 for b in self.header):
            raise ValueError(f"Header bytes out of range: {self.header}")
        for value in self.spaces_before + self.spaces_after:
            if not INT32_MIN <= value <= INT32_MAX:
                raise ValueError(f"Spacing value out of range: {value}")

    @classmethod
    def parse(cls, data: str) -> 'ImageOffsets':
        """Parse the text of an offsets file."""
        lines = _split(data.replace('\r', ''), '\n')
        if len(lines) != TOTAL_LINES:
            raise BadImageDataError(
                f"The image offsets file does not have {TOTAL_LINES} lines.")

        fields = _split(lines[0], ' ')
        if len(fields) != HEADER_BYTES:
            raise BadImageDataError(
                f"The first five bytes data must have {HEADER_BYTES} values.")
        header = []
        for text in fields:
            try:
                value = _parse_int(text)
            except ValueError:
                value = -1
            if not 0 <= value <= 255:
                raise BadImageDataError(
                    "The first five bytes must have values between 0 and 255.")
            header.append(value)

        befores = [0] * TOTAL_CHARS
        afters = [0] * TOTAL_CHARS
        for row in range(GRID_SIZE):
            cells = _split(lines[row + 1], '\t')
            if len(cells) != GRID_SIZE:
                raise BadImageDataError(
                    f"The line {row + 1} in the image offsets file does not have "
                    f"{GRID_SIZE} columns.")
            for col, cell in enumerate(cells):
                c = row * GRID_SIZE + col
                first = cell.find(' ')
                second = cell.find(' ', first + 1) if first != -1 else -1
                if second == -1:
                    raise BadImageDataError(
                        f"The image offsets for the character #{c} are malformed.")
                try:
                    befores[c] = _parse_int(cell[:first])
                    afters[c] = _parse_int(cell[first + 1:second])
                except ValueError:
                    raise BadImageDataError(
                        f"The image offsets for the character #{c} features "
                        f"unreadable values.") from None

        return cls(tuple(header), tuple(befores), tuple(afters))

    def header_byte(self, index):
        if not 0 <= index < HEADER_BYTES:
            raise IndexError(index)
        return self.header[index]

    def space_before(self, index):
        if not 0 <= index < TOTAL_CHARS:
            raise IndexError(index)
        return self.spaces_before[index]

    def space_after(self, index):
        if not 0 <= index < TOTAL_CHARS:
            raise IndexError(index)
        return self.spaces_after[index]

    def to_text(self) -> str:
        lines = [' '.join(str(b) for b in self.header)]
        for row in range(GRID_SIZE):
            cells = []
            for col in range(GRID_SIZE):
                i = row * GRID_SIZE + col
                cells.append(f"{self.spaces_before[i]} {self.spaces_after[i]} {CHAR_NAMES[i]}")
            lines.append('\t'.join(cells))
        return '\n'.join(lines)

    def __str__(self):
        return self.to_text()
