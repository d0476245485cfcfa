"""Convert FNT bitmap fonts to images plus an offsets file, and back."""

from .color import PALETTE, Color, ColorSet
from .errors import BadColorError, BadImageDataError, BadInputDataError, FontWorkerError
from .font import Font, export_font, import_font
from .glyph import Glyph
from .offsets import CHAR_NAMES, ImageOffsets, char_name

__all__ = [
    'PALETTE', 'Color', 'ColorSet',
    'FontWorkerError', 'BadColorError', 'BadInputDataError', 'BadImageDataError',
    'Font', 'export_font', 'import_font',
    'Glyph',
    'CHAR_NAMES', 'ImageOffsets', 'char_name',
]
