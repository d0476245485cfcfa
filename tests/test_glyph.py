"""Glyph validation, width detection and rendering."""

import pytest
from PIL import Image

from fntworker import BadImageDataError, Glyph

BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
RED = (255, 0, 0)
BLACK = (0, 0, 0)


def cell_image(rows):
    """
    Image from rows of characters: '#' fg, '.' bg, 's' shadow, 'o' outline,
    anything else green.
    """
    palette = {'#': RED, '.': WHITE, 's': BLACK, 'o': BLUE}
    img = Image.new('RGB', (len(rows[0]), len(rows)))
    pixels = img.load()
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            pixels[x, y] = palette.get(ch, (0, 255, 0))
    return img


# --------------------------------------------------------------------------- #
# Construction
# --------------------------------------------------------------------------- #
def test_height_from_pixels():
    g = Glyph([0, -1, 1, 0, 0, 0], 3)
    assert (g.width, g.height, g.size) == (3, 2, 6)
    assert g.pixel(1, 0) == -1
    assert g.pixel(2, 0) == 1
    with pytest.raises(IndexError):
        g.pixel(3, 0)


def test_empty_glyph():
    g = Glyph((), 0, 2, 3)
    assert (g.width, g.height, g.size) == (0, 0, 0)
    assert g.serialize_pixels() == b''


@pytest.mark.parametrize("pixels, width", [
    ([0, 0], 0),
    ([], 2),
    ([0, 0, 0], 2),
    ([0, 2], 2),
    ([0], -1),
])
def test_invalid_glyph(pixels, width):
    with pytest.raises(ValueError):
        Glyph(pixels, width)


def test_serialize_pixels():
    g = Glyph([-1, 0, 1, 1], 2)
    assert g.serialize_pixels() == b'\xff\x00\x01\x01'


# --------------------------------------------------------------------------- #
# Extraction
# --------------------------------------------------------------------------- #
def test_extract_detects_width(colors):
    img = cell_image([
        "oooooo",
        "o#s.oo",
        "o.#.oo",
        "oooooo",
    ])
    g = Glyph.extract(colors, img, 1, 1, 5, 2, 3, 4)
    assert g.width == 3
    assert g.pixels == (-1, 1, 0, 0, -1, 0)
    assert (g.space_before, g.space_after) == (3, 4)


def test_extract_full_width(colors):
    img = cell_image(["##", "s."])
    g = Glyph.extract(colors, img, 0, 0, 2, 2, 0, 0)
    assert g.width == 2
    assert g.pixels == (-1, -1, 1, 0)


def test_extract_empty_cell(colors):
    img = cell_image(["ooo", "ooo"])
    g = Glyph.extract(colors, img, 0, 0, 3, 2, 0, 0)
    assert g.width == 0 and g.pixels == ()


def test_extract_irregular_padding(colors):
    img = cell_image([
        "#.oo",
        "#..o",
    ])
    with pytest.raises(BadImageDataError, match=r"irregularly-shaped .*\[2, 1\]"):
        Glyph.extract(colors, img, 0, 0, 4, 2, 0, 0)


def test_extract_outline_inside_glyph(colors):
    # row 0 of the last column is a glyph color, so the scan stops there;
    # the hole further down is caught when reading the pixels
    img = cell_image([
        "#.",
        "#o",
    ])
    with pytest.raises(BadImageDataError, match=r"irregularly-shaped .*\[1, 1\]"):
        Glyph.extract(colors, img, 0, 0, 2, 2, 0, 0)


def test_extract_outline_on_top_row_left_of_width(colors):
    img = cell_image([
        "o.",
        "#.",
    ])
    with pytest.raises(BadImageDataError, match=r"\[0, 0\]"):
        Glyph.extract(colors, img, 0, 0, 2, 2, 0, 0)


def test_extract_unknown_color(colors):
    img = cell_image([
        "#g",
        "..",
    ])
    with pytest.raises(BadImageDataError) as exc:
        Glyph.extract(colors, img, 0, 0, 2, 2, 0, 0)
    assert "unrecognized colors (see green at [1, 0])" in str(exc.value)


def test_extract_outside_image(colors):
    img = cell_image(["..", ".."])
    with pytest.raises(ValueError):
        Glyph.extract(colors, img, 1, 0, 2, 2, 0, 0)
    with pytest.raises(ValueError):
        Glyph.extract(colors, img, 0, 0, 2, -1, 0, 0)


# --------------------------------------------------------------------------- #
# Rendering
# --------------------------------------------------------------------------- #
def test_render(colors):
    img = Image.new('RGB', (4, 3), BLUE)
    Glyph([-1, 0, 1, 1], 2).render(colors, img, 1, 1)
    pixels = img.load()
    assert pixels[1, 1] == RED
    assert pixels[2, 1] == WHITE
    assert pixels[1, 2] == BLACK
    assert pixels[2, 2] == BLACK
    assert pixels[0, 0] == BLUE
    assert pixels[3, 2] == BLUE


def test_render_then_extract(colors):
    g = Glyph([-1, 0, 1, 1, 0, -1], 3, 1, 2)
    img = Image.new('RGB', (6, 4), BLUE)
    g.render(colors, img, 1, 1)
    assert Glyph.extract(colors, img, 1, 1, 5, 2, 1, 2) == g


def test_render_empty_is_noop(colors):
    img = Image.new('RGB', (1, 1), BLUE)
    Glyph((), 0).render(colors, img, 5, 5)
    assert img.load()[0, 0] == BLUE


def test_render_outside_image(colors):
    img = Image.new('RGB', (2, 2), BLUE)
    with pytest.raises(ValueError):
        Glyph([0, 0, 0, 0], 2).render(colors, img, 1, 0)


def test_spacing_out_of_range():
    with pytest.raises(ValueError):
        Glyph((), 0, 2 ** 31, 0)
    with pytest.raises(ValueError):
        Glyph((), 0, 0, -2 ** 31 - 1)
