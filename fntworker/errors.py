"""
Errors raised when a font, image, offsets file or color name is malformed.

Invalid arguments passed by calling code are not reported through these
classes; they raise the built-in ValueError / IndexError instead.
"""


class FontWorkerError(Exception):
    """Base class for malformed external data."""


class BadColorError(FontWorkerError):
    """A color name is neither in the palette nor 6 hex digits."""


class BadInputDataError(FontWorkerError):
    """The FNT byte stream is structurally invalid, or the image type is unusable."""


class BadImageDataError(FontWorkerError):
    """The image or its offsets file is structurally invalid."""
