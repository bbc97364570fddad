"""Per-pixel and block-average operations on image buffers.

Every operation mutates a loaded buffer in place and validates its
parameters before touching any sample.
"""

import logging
from typing import Optional

import numpy as np

from ..buffer import ImageBuffer
from ..constants import GRAYSCALE_WEIGHTS, MAX_SAMPLE
from ..errors import InvalidParameterError
from ..transform.block_utils import partition_grid

logger = logging.getLogger(__name__)


def _require_size(size: Optional[int]) -> int:
    if size is None or size <= 0:
        raise InvalidParameterError(f"Size must be a positive integer, got {size}")
    return size


def invert(buffer: ImageBuffer) -> None:
    """Invert colours around 255. Applying it twice restores the buffer."""
    pixels = buffer.require_loaded()
    np.subtract(MAX_SAMPLE, pixels, out=pixels)


def grayscale(buffer: ImageBuffer) -> None:
    """Replace every channel with the luminance 0.299 R + 0.587 G + 0.114 B."""
    pixels = buffer.require_loaded()
    gray = pixels @ np.asarray(GRAYSCALE_WEIGHTS, dtype=np.complex128)
    pixels[...] = gray[:, :, np.newaxis]


def flip(buffer: ImageBuffer, direction: str = 'horizontal') -> str:
    """
    Mirror the image.

    Args:
        buffer: Loaded buffer
        direction: 'horizontal'/'h' swaps columns, 'vertical'/'v' swaps rows

    Returns:
        Normalised direction name
    """
    pixels = buffer.require_loaded()
    token = direction.lower()

    if token in ('horizontal', 'h'):
        pixels[...] = pixels[:, ::-1].copy()
        return 'horizontal'
    elif token in ('vertical', 'v'):
        pixels[...] = pixels[::-1].copy()
        return 'vertical'

    raise InvalidParameterError(
        f"Invalid direction: {direction!r}. Use 'horizontal' or 'vertical'")


def absolute(buffer: ImageBuffer) -> None:
    """Replace every sample with its magnitude (imaginary part 0)."""
    pixels = buffer.require_loaded()
    pixels[...] = np.abs(pixels)


def quantize(buffer: ImageBuffer, size: int) -> None:
    """
    Round the real part of every sample towards zero to a multiple of size.

        x -> Re(x) - fmod(Re(x), size)

    The imaginary part is dropped.
    """
    size = _require_size(size)
    pixels = buffer.require_loaded()
    real = pixels.real
    pixels[...] = real - np.fmod(real, size)


def cutoff(buffer: ImageBuffer, size: int) -> None:
    """Zero every sample whose magnitude is not greater than size."""
    size = _require_size(size)
    pixels = buffer.require_loaded()
    pixels[np.abs(pixels) <= size] = 0


def level(buffer: ImageBuffer, block_width: Optional[int] = None,
          block_height: Optional[int] = None) -> int:
    """
    Replace each block with its per-channel mean.

    Blocks follow the same partition as the strip applier: full blocks of
    block_width x block_height, then remainder blocks along the right and
    bottom edges.

    Returns:
        Number of blocks averaged
    """
    pixels = buffer.require_loaded()
    sx = buffer.width if block_width is None else _require_size(block_width)
    sy = buffer.height if block_height is None else _require_size(block_height)
    if buffer.width == 0 or buffer.height == 0:
        return 0

    tiles = partition_grid(buffer.width, buffer.height, sx, sy)
    for y, x, h, w in tiles:
        tile = pixels[y:y + h, x:x + w]
        tile[...] = tile.mean(axis=(0, 1))

    logger.debug("Levelled %d blocks (sx=%d, sy=%d)", len(tiles), sx, sy)
    return len(tiles)


def fit(buffer: ImageBuffer) -> None:
    """Snap samples to the byte values they would be saved as."""
    buffer.load_rgb(buffer.to_rgb())
