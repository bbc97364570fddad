"""Apply a 1D transform to an image buffer in blocks along rows and/or columns."""

import logging
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..buffer import ImageBuffer
from ..constants import NUM_CHANNELS
from ..errors import InvalidParameterError
from .block_utils import partition_extent
from .registry import TransformFunc, TransformKind, get_transform

logger = logging.getLogger(__name__)


class Axis(Enum):
    """
    Direction of a transform pass.

    HORIZONTAL walks every column and transforms runs of vertically adjacent
    samples (blocks of height sy). VERTICAL walks every row and transforms runs
    of horizontally adjacent samples (blocks of width sx). BOTH runs the full
    horizontal pass, then the full vertical pass.
    """

    HORIZONTAL = 'h'
    VERTICAL = 'v'
    BOTH = 'd'

    @classmethod
    def parse(cls, token: Union[str, 'Axis']) -> 'Axis':
        """Accept 'h'/'horizontal', 'v'/'vertical', 'd'/'both' (any case)."""
        if isinstance(token, Axis):
            return token
        if isinstance(token, str):
            axis = _AXIS_TOKENS.get(token.strip().lower())
            if axis is not None:
                return axis
        raise InvalidParameterError(
            f"Invalid direction: {token!r}. Use 'd', 'h' or 'v'")


_AXIS_TOKENS = {
    'h': Axis.HORIZONTAL,
    'horizontal': Axis.HORIZONTAL,
    'v': Axis.VERTICAL,
    'vertical': Axis.VERTICAL,
    'd': Axis.BOTH,
    'both': Axis.BOTH,
}


def _resolve_block_size(value: Optional[int], default: int, name: str) -> int:
    if value is None:
        return default
    if value <= 0:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return int(value)


def _describe(transform) -> str:
    if isinstance(transform, TransformKind):
        return transform.value
    return getattr(transform, '__name__', str(transform))


def _transform_strip(func: TransformFunc, strip: np.ndarray) -> np.ndarray:
    result = np.asarray(func(strip), dtype=np.complex128)
    if result.shape != strip.shape:
        raise InvalidParameterError(
            f"Transform returned {result.shape[0] if result.ndim else 0} samples "
            f"for a strip of {strip.shape[0]}")
    return result


def horizontal_pass(pixels: np.ndarray, func: TransformFunc, block_height: int) -> None:
    """
    Transform every column in blocks of block_height rows, per channel.

    Mutates pixels in place.
    """
    height, width = pixels.shape[:2]
    blocks = partition_extent(height, block_height)
    for x in range(width):
        for start, length in blocks:
            for c in range(NUM_CHANNELS):
                strip = pixels[start:start + length, x, c].copy()
                pixels[start:start + length, x, c] = _transform_strip(func, strip)


def vertical_pass(pixels: np.ndarray, func: TransformFunc, block_width: int) -> None:
    """
    Transform every row in blocks of block_width columns, per channel.

    Mutates pixels in place.
    """
    height, width = pixels.shape[:2]
    blocks = partition_extent(width, block_width)
    for y in range(height):
        for start, length in blocks:
            for c in range(NUM_CHANNELS):
                strip = pixels[y, start:start + length, c].copy()
                pixels[y, start:start + length, c] = _transform_strip(func, strip)


def apply_transform(buffer: ImageBuffer,
                    transform: Union[str, TransformKind, TransformFunc],
                    axis: Union[str, Axis] = Axis.HORIZONTAL,
                    block_width: Optional[int] = None,
                    block_height: Optional[int] = None) -> Axis:
    """
    Apply a strip transform to a loaded buffer.

    Args:
        buffer: Target buffer (must be loaded)
        transform: Transform name, TransformKind or strip function
        axis: Axis token or Axis member
        block_width: Block width sx for the vertical pass (default: image width)
        block_height: Block height sy for the horizontal pass (default: image height)

    Returns:
        The parsed Axis

    Raises:
        NoBufferLoadedError: If the buffer is empty
        InvalidParameterError: For a bad axis, block size or transform

    All work is done on a copy of the pixel array which replaces the buffer's
    array only when every strip has been transformed. On error the buffer is
    left unchanged.
    """
    pixels = buffer.require_loaded()
    axis = Axis.parse(axis)
    func = get_transform(transform)
    sx = _resolve_block_size(block_width, max(buffer.width, 1), "Block width")
    sy = _resolve_block_size(block_height, max(buffer.height, 1), "Block height")

    logger.debug("Applying %s along %s (sx=%d, sy=%d) to %dx%d buffer",
                 _describe(transform), axis.name.lower(),
                 sx, sy, buffer.width, buffer.height)

    work = pixels.copy()
    if axis in (Axis.HORIZONTAL, Axis.BOTH):
        horizontal_pass(work, func, sy)
    if axis in (Axis.VERTICAL, Axis.BOTH):
        vertical_pass(work, func, sx)

    buffer.pixels = work
    return axis
