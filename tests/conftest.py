"""Shared fonts and colors for the tests."""

import random

import pytest

from fntworker import ColorSet, Font, Glyph, ImageOffsets


def make_font(height=5, widths=None, seed=0, header=(1, 2, 3, 4, 5)):
    """
    Build a font with random pixels.

    ``widths`` maps character index to width; the default gives every
    character a width between 0 and 6.
    """
    rng = random.Random(seed)
    if widths is None:
        widths = {i: rng.randrange(7) for i in range(256)}
    befores = [rng.randrange(-2, 5) for _ in range(256)]
    afters = [rng.randrange(0, 5) for _ in range(256)]
    glyphs = []
    for i in range(256):
        w = widths.get(i, 0)
        pixels = [rng.choice((-1, 0, 1)) for _ in range(w * height)]
        glyphs.append(Glyph(pixels, w, befores[i], afters[i]))
    return Font(glyphs, height, ImageOffsets(header, befores, afters))


def empty_font(height=4):
    return make_font(height=height, widths={})


@pytest.fixture
def colors():
    return ColorSet.from_names('white', 'red', 'black', 'blue')


@pytest.fixture
def font():
    return make_font()
