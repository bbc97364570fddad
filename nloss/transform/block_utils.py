"""Block partitioning utilities for the strip applier."""

from typing import List, Tuple

from ..errors import InvalidParameterError


def partition_extent(extent: int, block_size: int) -> List[Tuple[int, int]]:
    """
    Split [0, extent) into consecutive blocks.

    Produces floor(extent / block_size) full blocks followed by one remainder
    block of length extent % block_size when that is non-zero.

    Args:
        extent: Number of positions along one axis
        block_size: Length of a full block (must be > 0)

    Returns:
        List of (start, length) tuples in increasing order of start

    Raises:
        InvalidParameterError: If block_size <= 0 or extent < 0
    """
    if block_size <= 0:
        raise InvalidParameterError(f"Block size must be positive, got {block_size}")
    if extent < 0:
        raise InvalidParameterError(f"Extent must be non-negative, got {extent}")

    n_full = extent // block_size
    remainder = extent % block_size

    blocks = [(i * block_size, block_size) for i in range(n_full)]
    if remainder > 0:
        blocks.append((n_full * block_size, remainder))

    return blocks


def partition_grid(width: int, height: int, block_width: int,
                   block_height: int) -> List[Tuple[int, int, int, int]]:
    """
    Split a width x height area into tiles, row-major.

    Returns:
        List of (y, x, tile_height, tile_width) tuples
    """
    rows = partition_extent(height, block_height)
    cols = partition_extent(width, block_width)
    return [(y, x, h, w) for (y, h) in rows for (x, w) in cols]
