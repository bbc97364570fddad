"""Named transform kinds and their resolution to strip functions."""

from enum import Enum
from typing import Callable, Union

import numpy as np

from ..errors import InvalidParameterError
from .fourier import fft, ifft, dft, idft
from .trig import dct2, idct2, dst2, idst2
from .walsh import wht, iwht

TransformFunc = Callable[[np.ndarray], np.ndarray]


class TransformKind(Enum):
    """Transform selectable by name; values are the shell command names."""

    FFT = 'fft'
    IFFT = 'ifft'
    DFT = 'dft'
    IDFT = 'idft'
    DCT = 'dct'
    IDCT = 'idct'
    DST = 'dst'
    IDST = 'idst'
    WHT = 'wht'
    IWHT = 'iwht'

    @property
    def func(self) -> TransformFunc:
        return _FUNCTIONS[self]

    @property
    def inverse(self) -> 'TransformKind':
        return _INVERSES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_FUNCTIONS = {
    TransformKind.FFT: fft,
    TransformKind.IFFT: ifft,
    TransformKind.DFT: dft,
    TransformKind.IDFT: idft,
    TransformKind.DCT: dct2,
    TransformKind.IDCT: idct2,
    TransformKind.DST: dst2,
    TransformKind.IDST: idst2,
    TransformKind.WHT: wht,
    TransformKind.IWHT: iwht,
}

_PAIRS = [
    (TransformKind.FFT, TransformKind.IFFT),
    (TransformKind.DFT, TransformKind.IDFT),
    (TransformKind.DCT, TransformKind.IDCT),
    (TransformKind.DST, TransformKind.IDST),
    (TransformKind.WHT, TransformKind.IWHT),
]
_INVERSES = {}
for _forward, _backward in _PAIRS:
    _INVERSES[_forward] = _backward
    _INVERSES[_backward] = _forward

_DESCRIPTIONS = {
    TransformKind.FFT: "Fast Fourier transform (power-of-two padded)",
    TransformKind.IFFT: "Inverse fast Fourier transform",
    TransformKind.DFT: "Fourier transform by direct summation",
    TransformKind.IDFT: "Inverse Fourier transform by direct summation",
    TransformKind.DCT: "Cosine transform (type II) of the real part",
    TransformKind.IDCT: "Inverse cosine transform (type III) of the real part",
    TransformKind.DST: "Sine transform of the real part",
    TransformKind.IDST: "Inverse sine transform of the real part",
    TransformKind.WHT: "Walsh-Hadamard transform (power-of-two padded)",
    TransformKind.IWHT: "Inverse Walsh-Hadamard transform",
}


def get_transform(kind: Union[str, TransformKind, TransformFunc]) -> TransformFunc:
    """
    Resolve a transform name, kind or callable to a strip function.

    Args:
        kind: 'fft', TransformKind.FFT, or any callable mapping a strip to a
              strip of the same length

    Returns:
        Strip transform function

    Raises:
        InvalidParameterError: If the name is not a known transform
    """
    if isinstance(kind, TransformKind):
        return kind.func
    if isinstance(kind, str):
        try:
            return TransformKind(kind.lower()).func
        except ValueError:
            names = ', '.join(k.value for k in TransformKind)
            raise InvalidParameterError(
                f"Unknown transform: {kind!r}. Expected one of: {names}") from None
    if callable(kind):
        return kind
    raise InvalidParameterError(f"Cannot resolve transform from {kind!r}")
