"""Save image buffers as BMP files."""

import logging
from pathlib import Path

from ..buffer import ImageBuffer
from ..errors import NlossError
from .bmp import encode_bmp

logger = logging.getLogger(__name__)


def write_image(buffer: ImageBuffer, path: str) -> int:
    """
    Write a buffer to a 24-bit BMP file.

    Samples are cast to bytes (real part clamped to [0, 255] and floored).

    Args:
        buffer: Loaded buffer
        path: Output file path

    Returns:
        Number of bytes written

    Raises:
        NoBufferLoadedError: If the buffer is empty
        NlossError: If the file cannot be created or written
    """
    path = Path(path)
    data = encode_bmp(buffer.to_rgb())

    try:
        path.write_bytes(data)
    except OSError as e:
        raise NlossError(f"Cannot create file {path}: {e.strerror or e}") from e

    logger.info("Saved %s (%d bytes)", path, len(data))
    return len(data)
