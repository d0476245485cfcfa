"""
FNT font files: 256 fixed glyphs sharing one height.

FNT format (all integers int32 little-endian):
  Offset 0:    5 opaque header bytes (kept verbatim in the offsets file)
  Offset 5:    glyph height
  Offset 9:    23 reserved bytes, all zero
  Offset 32:   256 x (space before, width, space after)
  Offset 3104: 256 offsets of each glyph in the pixel data
  Offset 4128: pixel data, width * height signed bytes per glyph, glyphs
               packed back to back in character order

Exported images lay the glyphs out on a 16x16 grid. Each cell is one pixel
wider and taller than the widest glyph, and the extra row and column (plus
one more at the right and bottom edge of the image) form the grid lines,
painted with the out-of-bounds color.
"""

import struct
from dataclasses import dataclass

from PIL import Image

from .color import ColorSet
from .errors import BadImageDataError, BadInputDataError
from .glyph import Glyph
from .image import image_format, load_image, save_image
from .offsets import GRID_SIZE, HEADER_BYTES, TOTAL_CHARS, ImageOffsets

INT_SIZE = 4
RESERVED_START = HEADER_BYTES + INT_SIZE
ATTRIBUTES_OFFSET = 32
ATTRIBUTES_PER_CHAR = 3
OFFSETS_OFFSET = ATTRIBUTES_OFFSET + ATTRIBUTES_PER_CHAR * INT_SIZE * TOTAL_CHARS
IMAGE_OFFSET = OFFSETS_OFFSET + INT_SIZE * TOTAL_CHARS

OFFSETS_ENCODING = 'latin-1'


class _Reader:
    """Sequential reader over the bytes of an FNT file."""

    def __init__(self, data):
        self.data = data
        self.pos = 0

    def _need(self, count):
        if self.pos + count > len(self.data):
            raise BadInputDataError(f"Premature end of stream at position {len(self.data)}.")

    def read_bytes(self, count):
        self._need(count)
        chunk = self.data[self.pos:self.pos + count]
        self.pos += count
        return chunk

    def read_int(self):
        self._need(INT_SIZE)
        value = struct.unpack_from('<i', self.data, self.pos)[0]
        self.pos += INT_SIZE
        return value

    def read_pixels(self, count):
        self._need(count)
        values = struct.unpack_from(f'<{count}b', self.data, self.pos)
        for i, value in enumerate(values):
            if value not in (-1, 0, 1):
                raise BadInputDataError(
                    f"Bad pixel value {value & 0xFF} at position {self.pos + i}.")
        self.pos += count
        return values

    def at_end(self):
        return self.pos == len(self.data)


@dataclass(frozen=True)
class Font:
    glyphs: tuple[Glyph, ...]
    glyph_height: int
    offsets: ImageOffsets

    def __post_init__(self):
        object.__setattr__(self, 'glyphs', tuple(self.glyphs))
        if len(self.glyphs) != TOTAL_CHARS:
            raise ValueError(f"A font has {TOTAL_CHARS} glyphs, got {len(self.glyphs)}")
        if self.glyph_height < 0:
            raise ValueError(f"Negative glyph height: {self.glyph_height}")
        for i, glyph in enumerate(self.glyphs):
            if glyph.width and glyph.height != self.glyph_height:
                raise ValueError(
                    f"Glyph {i} is {glyph.height} pixels tall, font height is {self.glyph_height}")
            spacing = (self.offsets.spaces_before[i], self.offsets.spaces_after[i])
            if (glyph.space_before, glyph.space_after) != spacing:
                raise ValueError(
                    f"Glyph {i} spacing {glyph.space_before} {glyph.space_after} "
                    f"disagrees with the offsets {spacing[0]} {spacing[1]}")

    def at(self, index: int) -> Glyph:
        if not 0 <= index < TOTAL_CHARS:
            raise IndexError(index)
        return self.glyphs[index]

    @property
    def max_width(self) -> int:
        return max(g.width for g in self.glyphs)

    # -- binary --

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Font':
        reader = _Reader(data)
        header = tuple(reader.read_bytes(HEADER_BYTES))
        height = reader.read_int()
        for i in range(RESERVED_START, ATTRIBUTES_OFFSET):
            x = reader.read_bytes(1)[0]
            if x != 0:
                raise BadInputDataError(f"Bad stream header (byte {i} is {x}).")
        if height < 0:
            raise BadInputDataError(f"Bad glyph height {height}.")

        spaces_before = []
        widths = []
        spaces_after = []
        for _ in range(TOTAL_CHARS):
            spaces_before.append(reader.read_int())
            widths.append(reader.read_int())
            spaces_after.append(reader.read_int())
        declared = [reader.read_int() for _ in range(TOTAL_CHARS)]

        offsets = ImageOffsets(header, spaces_before, spaces_after)
        glyphs = []
        current = 0
        for i in range(TOTAL_CHARS):
            if declared[i] != current:
                raise BadInputDataError(f"Bad offset data for glyph {i}.")
            width = widths[i]
            if width < 0 or (width and not height):
                raise BadInputDataError(f"Bad width {width} for glyph {i} of height {height}.")
            size = width * height
            pixels = reader.read_pixels(size)
            glyphs.append(Glyph(pixels, width, spaces_before[i], spaces_after[i]))
            current += size
        if not reader.at_end():
            raise BadInputDataError("Unexpected data left at the stream beyond its expected end.")
        return cls(tuple(glyphs), height, offsets)

    @classmethod
    def read(cls, path) -> 'Font':
        with open(path, 'rb') as f:
            data = f.read()
        return cls.from_bytes(data)

    def to_bytes(self) -> bytes:
        out = bytearray(self.offsets.header)
        out += struct.pack('<i', self.glyph_height)
        out += bytes(ATTRIBUTES_OFFSET - RESERVED_START)
        for g in self.glyphs:
            out += struct.pack('<3i', g.space_before, g.width, g.space_after)
        offset = 0
        for g in self.glyphs:
            out += struct.pack('<i', offset)
            offset += g.size
        for g in self.glyphs:
            out += g.serialize_pixels()
        return bytes(out)

    def write(self, path):
        with open(path, 'wb') as f:
            f.write(self.to_bytes())

    # -- image --

    def draw(self, colors: ColorSet) -> Image.Image:
        """Lay the 256 glyphs out on a 16x16 grid."""
        max_w = self.max_width
        gh = self.glyph_height
        iw = GRID_SIZE * (max_w + 1) + 1
        ih = GRID_SIZE * (gh + 1) + 1
        img = Image.new('RGB', (iw, ih), colors.out_of_bounds.as_tuple())
        for gy in range(GRID_SIZE):
            for gx in range(GRID_SIZE):
                glyph = self.glyphs[gy * GRID_SIZE + gx]
                glyph.render(colors, img, gx * (max_w + 1) + 1, gy * (gh + 1) + 1)
        return img

    @classmethod
    def from_image(cls, colors: ColorSet, img: Image.Image, offset_data: str) -> 'Font':
        w, h = img.size
        if w % GRID_SIZE != 1:
            raise BadImageDataError(
                f"The image has an incorrect width ({w} % {GRID_SIZE} != 1).")
        if h % GRID_SIZE != 1:
            raise BadImageDataError(
                f"The image has an incorrect height ({h} % {GRID_SIZE} != 1).")
        if h == 1:
            raise BadImageDataError("The image is too short to hold any glyph row.")
        if img.mode != 'RGB':
            img = img.convert('RGB')

        offsets = ImageOffsets.parse(offset_data)
        gw = (w - 1) // GRID_SIZE
        gh = (h - 1) // GRID_SIZE

        pixels = img.load()
        out = colors.out_of_bounds.as_tuple()
        for i in range(GRID_SIZE + 1):
            px = i * gw
            for py in range(h):
                if pixels[px, py] != out:
                    raise BadImageDataError(
                        f"The image features unexpected data over outlines (see [{px}, {py}]).")
            py = i * gh
            for px in range(w):
                if pixels[px, py] != out:
                    raise BadImageDataError(
                        f"The image features unexpected data over outlines (see [{px}, {py}]).")

        glyphs = []
        for y in range(GRID_SIZE):
            for x in range(GRID_SIZE):
                idx = y * GRID_SIZE + x
                glyphs.append(Glyph.extract(
                    colors, img, x * gw + 1, y * gh + 1, gw, gh - 1,
                    offsets.space_before(idx), offsets.space_after(idx)))
        return cls(tuple(glyphs), gh - 1, offsets)


def export_font(colors: ColorSet, font_file, image_file, offsets_file) -> Font:
    """Convert an FNT file into an image file plus its offsets file."""
    image_format(image_file)
    font = Font.read(font_file)
    img = font.draw(colors)
    save_image(img, image_file)
    with open(offsets_file, 'w', encoding=OFFSETS_ENCODING, newline='') as f:
        f.write(font.offsets.to_text())
    return font


def import_font(colors: ColorSet, font_file, image_file, offsets_file) -> Font:
    """Build an FNT file back from an image file and its offsets file."""
    img = load_image(image_file)
    with open(offsets_file, 'r', encoding=OFFSETS_ENCODING, newline='') as f:
        offset_data = f.read()
    font = Font.from_image(colors, img, offset_data)
    font.write(font_file)
    return font
