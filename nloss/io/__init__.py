"""I/O modules for the nLoss toolkit."""

from .bmp import (
    decode_bmp, encode_bmp, pack_headers, unpack_headers,
    calculate_row_padding, calculate_row_size,
)
from .image_reader import read_image
from .image_writer import write_image

__all__ = [
    'decode_bmp',
    'encode_bmp',
    'pack_headers',
    'unpack_headers',
    'calculate_row_padding',
    'calculate_row_size',
    'read_image',
    'write_image',
]
