"""Walsh-Hadamard transform on 1D strips."""

from typing import Sequence

import numpy as np

from .fourier import as_strip, next_power_of_two


def wht(a: Sequence[complex]) -> np.ndarray:
    """
    Fast Walsh-Hadamard transform (natural/Hadamard ordering, unnormalised).

    The strip is zero-padded to the next power of two M, run through
    log2(M) stages of (x + y, x - y) butterflies and truncated back to N.
    """
    x = as_strip(a)
    n = x.shape[0]
    m = next_power_of_two(n)
    if m != n:
        x = np.concatenate([x, np.zeros(m - n, dtype=np.complex128)])

    h = 1
    while h < m:
        pairs = x.reshape(-1, 2 * h)
        left = pairs[:, :h].copy()
        right = pairs[:, h:].copy()
        pairs[:, :h] = left + right
        pairs[:, h:] = left - right
        h <<= 1

    if m != n:
        return x[:n].copy()
    return x


def iwht(a: Sequence[complex]) -> np.ndarray:
    """
    Inverse Walsh-Hadamard transform: wht(a) / M.

    M is the padded length of this call's input.
    """
    x = as_strip(a)
    return wht(x) / next_power_of_two(x.shape[0])
