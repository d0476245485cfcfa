"""
Image file back end. Pillow picks the codec from the file extension.
"""

import io
from functools import lru_cache
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .errors import BadImageDataError, BadInputDataError

SAVE_ERRORS = (OSError, ValueError, KeyError)


@lru_cache(maxsize=None)
def _can_write_rgb(fmt):
    # Some registered formats only take 1-bit or palette images, and some
    # have a stub save handler when the codec is not installed.
    try:
        Image.new('RGB', (1, 1)).save(io.BytesIO(), format=fmt)
    except Exception:
        return False
    return True


def writable_formats():
    """Map of lowercase extension (with dot) to Pillow format name, for formats that can save an RGB image."""
    extensions = Image.registered_extensions()
    return {ext.lower(): fmt for ext, fmt in extensions.items()
            if fmt in Image.SAVE and _can_write_rgb(fmt)}


def image_format(path):
    suffix = Path(path).suffix
    if not suffix:
        raise BadInputDataError("Unrecognized image type. The image file name has no extension.")
    fmt = writable_formats().get(suffix.lower())
    if fmt is None:
        raise BadInputDataError(f"Unrecognized image type {suffix[1:]}.")
    return fmt


def list_suffixes():
    """Human readable list of image extensions that can be written, e.g. 'bmp, gif and png'."""
    suffixes = sorted({ext[1:] for ext in writable_formats()})
    if not suffixes:
        return "<NONE>"
    if len(suffixes) == 1:
        return suffixes[0]
    return ', '.join(suffixes[:-1]) + ' and ' + suffixes[-1]


def load_image(path):
    """
    Decode an image file into an RGB image held in memory.

    The alpha channel, if any, is dropped: a transparent pixel is read as
    its RGB color.
    """
    try:
        with Image.open(path) as img:
            return img.convert('RGB')
    except UnidentifiedImageError:
        raise BadImageDataError(f"The file {path} is not a readable image.") from None


def save_image(img, path):
    fmt = image_format(path)
    try:
        img.save(path, format=fmt)
    except SAVE_ERRORS as e:
        raise BadInputDataError(f"Unrecognized image type {Path(path).suffix[1:]}.") from e
