"""Constants for the nLoss image transform toolkit."""

import struct

# Number of addressable image slots (handles 0 .. NUM_SLOTS - 1)
NUM_SLOTS = 16

# Channels per pixel (R, G, B)
NUM_CHANNELS = 3

# Byte domain of a saved sample
MAX_SAMPLE = 255

# BMP file header (Little-endian, 14 bytes total)
# 2s: Signature 'BM', I: File size, H: Reserved1, H: Reserved2, I: Pixel data offset
FILE_HEADER_FORMAT = '<2sIHHI'
FILE_HEADER_SIZE = struct.calcsize(FILE_HEADER_FORMAT)  # 14 bytes

# BMP info header (BITMAPINFOHEADER, 40 bytes total)
# I: Header size, i: Width, i: Height (negative = top-down), H: Planes,
# H: Bits per pixel, I: Compression, I: Image size, i: X px/m, i: Y px/m,
# I: Colors used, I: Important colors
INFO_HEADER_FORMAT = '<IiiHHIIiiII'
INFO_HEADER_SIZE = struct.calcsize(INFO_HEADER_FORMAT)  # 40 bytes

SIGNATURE = b'BM'
BITS_PER_PIXEL = 24
COMPRESSION_NONE = 0
PIXELS_PER_METER = 2835  # 72 DPI

# Luminance weights for grayscale conversion (R, G, B)
GRAYSCALE_WEIGHTS = (0.299, 0.587, 0.114)

# Strip lengths whose basis matrices / permutations are kept between calls
MATRIX_CACHE_SIZE = 16
