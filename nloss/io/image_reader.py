"""Load BMP files into image buffers."""

import logging
from pathlib import Path

from ..buffer import ImageBuffer
from ..errors import MalformedInputError, NlossError
from .bmp import decode_bmp

logger = logging.getLogger(__name__)


def read_image(path: str, buffer: ImageBuffer) -> ImageBuffer:
    """
    Read a 24-bit BMP file into a buffer.

    The buffer is cleared first, so a failed load never leaves it partially
    populated.

    Args:
        path: Path to the .bmp file
        buffer: Target buffer

    Returns:
        The populated buffer

    Raises:
        MalformedInputError: If the file cannot be read or is malformed
        UnsupportedFormatError: If the BMP variant is not supported
    """
    path = Path(path)
    buffer.clear()

    try:
        data = path.read_bytes()
    except OSError as e:
        raise MalformedInputError(f"Cannot open file {path}: {e.strerror or e}") from e

    try:
        width, height, rgb = decode_bmp(data)
        buffer.load_rgb(rgb)
    except NlossError:
        buffer.clear()
        raise

    logger.info("Loaded %s (%dx%d)", path, width, height)
    return buffer
