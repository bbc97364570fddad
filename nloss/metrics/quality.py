"""Image statistics and comparison metrics."""

import numpy as np

from ..buffer import ImageBuffer
from ..errors import InvalidParameterError
from ..io.bmp import HEADERS_SIZE, calculate_row_padding, calculate_row_size


def channel_means(buffer: ImageBuffer) -> np.ndarray:
    """
    Average real value of each channel.

    Returns:
        Array of 3 floats (R, G, B); zeros for an empty image
    """
    pixels = buffer.require_loaded()
    if pixels.size == 0:
        return np.zeros(pixels.shape[-1])
    return pixels.real.mean(axis=(0, 1))


def _real_pair(original: ImageBuffer, other: ImageBuffer):
    a = original.require_loaded()
    b = other.require_loaded()
    if a.shape != b.shape:
        raise InvalidParameterError(
            f"Image sizes differ: {original.width}x{original.height} vs {other.width}x{other.height}")
    return a.real, b.real


def calculate_rmse(original: ImageBuffer, reconstructed: ImageBuffer) -> float:
    """
    Calculate Root Mean Squared Error (RMSE) over the real parts of all
    samples.
    """
    a, b = _real_pair(original, reconstructed)
    if a.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((a - b) ** 2)))


def calculate_psnr(original: ImageBuffer, reconstructed: ImageBuffer,
                   bit_depth: int = 8) -> float:
    """
    Calculate Peak Signal-to-Noise Ratio (PSNR).

    PSNR = 10 * log10(MAX^2 / MSE)

    where MAX = 2^bit_depth - 1

    Returns:
        PSNR in dB (inf for identical images)
    """
    a, b = _real_pair(original, reconstructed)
    max_val = (1 << bit_depth) - 1
    mse = np.mean((a - b) ** 2) if a.size else 0.0

    if mse == 0:
        return float('inf')

    return float(10 * np.log10((max_val ** 2) / mse))


def bmp_layout(width: int, height: int) -> dict:
    """
    Sizes of the BMP file a buffer of this size would be saved as.

    Returns:
        Dictionary with 'row_padding', 'row_size', 'image_data_size',
        'file_size' (all in bytes)
    """
    padding = calculate_row_padding(width)
    row_size = calculate_row_size(width)
    image_data_size = row_size * height
    return {
        'row_padding': padding,
        'row_size': row_size,
        'image_data_size': image_data_size,
        'file_size': HEADERS_SIZE + image_data_size,
    }
