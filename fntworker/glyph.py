"""
A single character of an FNT font.

Pixels are stored row-major as tri-state values: -1 foreground,
0 background, 1 shadow. In the FNT file each pixel is one signed byte.
"""

import struct
from dataclasses import dataclass

from .color import Color, ColorSet
from .errors import BadImageDataError
from .offsets import INT32_MAX, INT32_MIN

PIXEL_VALUES = (-1, 0, 1)


@dataclass(frozen=True)
class Glyph:
    pixels: tuple[int, ...]
    width: int
    space_before: int = 0
    space_after: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'pixels', tuple(self.pixels))
        if self.width < 0:
            raise ValueError(f"Negative glyph width: {self.width}")
        size = len(self.pixels)
        if self.width == 0:
            if size != 0:
                raise ValueError("A glyph of width 0 can't have pixels")
        elif size == 0 or size % self.width != 0:
            raise ValueError(f"{size} pixels don't fit a glyph of width {self.width}")
        for value in self.pixels:
            if value not in PIXEL_VALUES:
                raise ValueError(f"Not a glyph pixel value: {value}")
        for value in (self.space_before, self.space_after):
            if not INT32_MIN <= value <= INT32_MAX:
                raise ValueError(f"Spacing value out of range: {value}")

    @property
    def height(self) -> int:
        return len(self.pixels) // self.width if self.width else 0

    @property
    def size(self) -> int:
        return len(self.pixels)

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside a {self.width}x{self.height} glyph")
        return self.pixels[y * self.width + x]

    @classmethod
    def extract(cls, colors: ColorSet, image, sx: int, sy: int, max_width: int, height: int,
                space_before: int, space_after: int) -> 'Glyph':
        """
        Read a glyph from the cell of ``image`` whose interior starts at (sx, sy).

        The glyph width is not stored in the image. It is recovered from the
        out-of-bounds padding on the right of the cell: scanning from the
        rightmost column, every column whose top pixel is out-of-bounds must
        be out-of-bounds all the way down, and the first column whose top
        pixel is anything else is the last column of the glyph.
        """
        if sx < 0 or sy < 0 or max_width < 0 or height < 0:
            raise ValueError("Negative glyph cell geometry")
        if sx + max_width > image.width or sy + height > image.height:
            raise ValueError("Glyph cell outside the image")

        pixels = image.load()
        background = colors.background.as_tuple()
        foreground = colors.foreground.as_tuple()
        shadow = colors.shadow.as_tuple()
        out = colors.out_of_bounds.as_tuple()

        w = max_width - 1
        while w >= 0:
            if pixels[sx + w, sy] != out:
                break
            for j in range(1, height):
                px, py = sx + w, sy + j
                if pixels[px, py] != out:
                    raise BadImageDataError(
                        f"The image features irregularly-shaped or misaligned glyphs "
                        f"(see [{px}, {py}]).")
            w -= 1
        w += 1

        values = []
        for j in range(height):
            for i in range(w):
                px, py = sx + i, sy + j
                d = pixels[px, py]
                if d == out:
                    raise BadImageDataError(
                        f"The image features irregularly-shaped or misaligned glyphs "
                        f"(see [{px}, {py}]).")
                if d == background:
                    values.append(0)
                elif d == foreground:
                    values.append(-1)
                elif d == shadow:
                    values.append(1)
                else:
                    color = Color(*d)
                    raise BadImageDataError(
                        f"The image features unrecognized colors "
                        f"(see {color} at [{px}, {py}]).")
        return cls(tuple(values), w, space_before, space_after)

    def render(self, colors: ColorSet, image, tx: int, ty: int):
        """Paint the glyph onto ``image`` with its top-left corner at (tx, ty)."""
        w, h = self.width, self.height
        if w == 0:
            return
        if tx < 0 or ty < 0 or tx > image.width - w or ty > image.height - h:
            raise ValueError("Glyph rendered outside the image")
        pixels = image.load()
        for y in range(h):
            for x in range(w):
                pixels[tx + x, ty + y] = colors.rgb(self.pixels[y * w + x])

    def serialize_pixels(self) -> bytes:
        return struct.pack(f'<{self.size}b', *self.pixels)
