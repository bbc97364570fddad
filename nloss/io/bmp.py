"""24-bit uncompressed BMP encoding and decoding."""

import logging
import struct
from typing import Tuple

import numpy as np

from ..constants import (
    FILE_HEADER_FORMAT, FILE_HEADER_SIZE,
    INFO_HEADER_FORMAT, INFO_HEADER_SIZE,
    SIGNATURE, BITS_PER_PIXEL, COMPRESSION_NONE, PIXELS_PER_METER,
    NUM_CHANNELS,
)
from ..errors import MalformedInputError, UnsupportedFormatError

logger = logging.getLogger(__name__)

HEADERS_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE  # 54 bytes


def calculate_row_padding(width: int) -> int:
    """Bytes needed to pad a row of 24-bit pixels to a 4-byte boundary."""
    return (4 - (width * 3) % 4) % 4


def calculate_row_size(width: int) -> int:
    return width * 3 + calculate_row_padding(width)


def pack_headers(width: int, height: int) -> bytes:
    """
    Pack the 14-byte file header and 40-byte info header for a bottom-up
    24-bit image.

    Args:
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        54-byte header as bytes
    """
    image_size = calculate_row_size(width) * height

    file_header = struct.pack(
        FILE_HEADER_FORMAT,
        SIGNATURE,                  # Signature
        HEADERS_SIZE + image_size,  # File size
        0,                          # Reserved1
        0,                          # Reserved2
        HEADERS_SIZE,               # Pixel data offset
    )
    info_header = struct.pack(
        INFO_HEADER_FORMAT,
        INFO_HEADER_SIZE,   # Header size
        width,
        height,             # Positive = bottom-up
        1,                  # Planes
        BITS_PER_PIXEL,
        COMPRESSION_NONE,
        image_size,
        PIXELS_PER_METER,
        PIXELS_PER_METER,
        0,                  # Colors used
        0,                  # Important colors
    )
    return file_header + info_header


def unpack_headers(data: bytes) -> dict:
    """
    Unpack and validate the BMP file and info headers.

    Args:
        data: BMP file contents (at least the 54 header bytes)

    Returns:
        Dictionary with header fields

    Raises:
        MalformedInputError: If the signature is wrong or a header is truncated
        UnsupportedFormatError: If the image is not 24-bit uncompressed
    """
    if len(data) < FILE_HEADER_SIZE:
        raise MalformedInputError(
            f"Failed to read BMP file header: need {FILE_HEADER_SIZE} bytes, got {len(data)}")

    signature, file_size, _, _, data_offset = struct.unpack(
        FILE_HEADER_FORMAT, data[:FILE_HEADER_SIZE])

    if signature != SIGNATURE:
        raise MalformedInputError(f"Invalid BMP file signature: {signature!r}. Expected {SIGNATURE!r}")

    if len(data) < HEADERS_SIZE:
        raise MalformedInputError(
            f"Failed to read BMP info header: need {HEADERS_SIZE} bytes, got {len(data)}")

    (header_size, width, height, planes, bpp, compression, image_size,
     x_ppm, y_ppm, colors_used, colors_important) = struct.unpack(
        INFO_HEADER_FORMAT, data[FILE_HEADER_SIZE:HEADERS_SIZE])

    if bpp != BITS_PER_PIXEL:
        raise UnsupportedFormatError(
            f"Only {BITS_PER_PIXEL}-bit BMP files are supported, got {bpp}-bit")

    if compression != COMPRESSION_NONE:
        raise UnsupportedFormatError(
            f"Compressed BMP files are not supported (compression={compression})")

    if width <= 0 or height == 0:
        raise MalformedInputError(f"Invalid BMP dimensions: {width}x{height}")

    return {
        'width': width,
        'height': abs(height),
        'top_down': height < 0,
        'data_offset': data_offset,
        'file_size': file_size,
        'image_size': image_size,
    }


def decode_bmp(data: bytes) -> Tuple[int, int, np.ndarray]:
    """
    Decode a 24-bit uncompressed BMP.

    Rows are stored bottom-to-top unless the height is negative, pixels as
    BGR triples, each row padded with zeros to a multiple of 4 bytes.

    Args:
        data: BMP file contents

    Returns:
        Tuple of (width, height, rgb) where rgb is a uint8 array of shape
        (height, width, 3) with row 0 at the top, in R, G, B order

    Raises:
        MalformedInputError: Bad signature or truncated data
        UnsupportedFormatError: Bit depth other than 24 or compressed data
    """
    header = unpack_headers(data)
    width = header['width']
    height = header['height']
    offset = header['data_offset']

    row_size = calculate_row_size(width)
    # Padding after the last stored row may be absent
    required = offset + row_size * (height - 1) + width * NUM_CHANNELS
    if len(data) < required:
        raise MalformedInputError(
            f"Failed to read pixel data: expected {required} bytes, got {len(data)}")

    pixel_data = data[offset:offset + row_size * height]
    if len(pixel_data) < row_size * height:
        pixel_data = pixel_data + bytes(row_size * height - len(pixel_data))

    rows = np.frombuffer(pixel_data, dtype=np.uint8).reshape(height, row_size)
    bgr = rows[:, :width * NUM_CHANNELS].reshape(height, width, NUM_CHANNELS)
    rgb = bgr[:, :, ::-1]

    if not header['top_down']:
        rgb = rgb[::-1]

    logger.debug("Decoded %dx%d BMP (%s)", width, height,
                 "top-down" if header['top_down'] else "bottom-up")

    return width, height, np.ascontiguousarray(rgb)


def encode_bmp(rgb: np.ndarray) -> bytes:
    """
    Encode RGB bytes as a bottom-up 24-bit uncompressed BMP.

    Args:
        rgb: uint8 array of shape (height, width, 3), row 0 at the top

    Returns:
        BMP file contents
    """
    if rgb.ndim != 3 or rgb.shape[2] != NUM_CHANNELS:
        raise MalformedInputError(f"Expected (height, width, 3) array, got shape {rgb.shape}")

    height, width = rgb.shape[:2]
    padding = calculate_row_padding(width)

    # Bottom-to-top rows, BGR order
    bgr = np.ascontiguousarray(rgb[::-1, :, ::-1], dtype=np.uint8)
    rows = bgr.reshape(height, width * NUM_CHANNELS)
    if padding > 0:
        rows = np.hstack([rows, np.zeros((height, padding), dtype=np.uint8)])

    logger.debug("Encoded %dx%d BMP (row padding %d)", width, height, padding)

    return pack_headers(width, height) + rows.tobytes()
