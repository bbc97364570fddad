"""Transform modules for the nLoss toolkit."""

from .fourier import fft, ifft, dft, idft, next_power_of_two
from .trig import dct2, idct2, dst2, idst2
from .walsh import wht, iwht
from .registry import TransformKind, get_transform
from .block_utils import partition_extent, partition_grid
from .strip_applier import Axis, apply_transform

__all__ = [
    'fft',
    'ifft',
    'dft',
    'idft',
    'dct2',
    'idct2',
    'dst2',
    'idst2',
    'wht',
    'iwht',
    'next_power_of_two',
    'TransformKind',
    'get_transform',
    'partition_extent',
    'partition_grid',
    'Axis',
    'apply_transform',
]
