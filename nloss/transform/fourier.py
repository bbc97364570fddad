"""Fourier transforms on 1D strips: radix-2 FFT and direct-summation DFT."""

from functools import lru_cache
from typing import Sequence

import numpy as np

from ..constants import MATRIX_CACHE_SIZE


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    m = 1
    while m < n:
        m <<= 1
    return m


def as_strip(a: Sequence[complex]) -> np.ndarray:
    """Private complex128 working copy of an input sequence."""
    return np.array(a, dtype=np.complex128).reshape(-1)


@lru_cache(maxsize=MATRIX_CACHE_SIZE)
def bit_reversal_permutation(m: int) -> np.ndarray:
    """
    Index table that reorders a length-m array (m a power of two) into
    bit-reversed order.
    """
    bits = m.bit_length() - 1
    indices = np.arange(m)
    reversed_indices = np.zeros(m, dtype=np.intp)
    for b in range(bits):
        reversed_indices |= ((indices >> b) & 1) << (bits - 1 - b)
    reversed_indices.flags.writeable = False
    return reversed_indices


@lru_cache(maxsize=MATRIX_CACHE_SIZE)
def create_dft_matrix(N: int) -> np.ndarray:
    """
    Generate the N x N DFT matrix.

        W[k, n] = exp(-2*pi*i * k * n / N)

    The product k*n is reduced modulo N before scaling, which keeps the
    angles small for large N.
    """
    k = np.arange(N)
    kn = np.outer(k, k) % max(N, 1)
    W = np.exp(-2j * np.pi * kn / max(N, 1))
    W.flags.writeable = False
    return W


def fft(a: Sequence[complex]) -> np.ndarray:
    """
    Iterative radix-2 FFT.

    The input is zero-padded to the next power of two M, permuted into
    bit-reversed order, combined by log2(M) butterfly stages and truncated
    back to the original length N.

    Args:
        a: Sequence of N complex samples

    Returns:
        N complex coefficients (the first N bins of the M-point spectrum)
    """
    x = as_strip(a)
    n = x.shape[0]
    if n <= 1:
        return x

    m = next_power_of_two(n)
    if m != n:
        x = np.concatenate([x, np.zeros(m - n, dtype=np.complex128)])

    x = x[bit_reversal_permutation(m)]

    length = 2
    while length <= m:
        half = length // 2
        twiddles = np.exp(-2j * np.pi * np.arange(half) / length)
        stages = x.reshape(-1, length)
        u = stages[:, :half].copy()
        v = stages[:, half:] * twiddles
        stages[:, :half] = u + v
        stages[:, half:] = u - v
        length <<= 1

    if m != n:
        return x[:n].copy()
    return x


def ifft(a: Sequence[complex]) -> np.ndarray:
    """
    Inverse FFT via conjugation: conj(fft(conj(a))) / N.

    Scaling uses the original length N, not the padded length.
    """
    x = np.conj(as_strip(a))
    n = x.shape[0]
    if n == 0:
        return x
    return np.conj(fft(x)) / n


def dft(a: Sequence[complex]) -> np.ndarray:
    """
    Direct O(N^2) DFT.

        X[k] = sum_n a[n] * exp(-2*pi*i * k * n / N)
    """
    x = as_strip(a)
    n = x.shape[0]
    if n == 0:
        return x
    return create_dft_matrix(n) @ x


def idft(a: Sequence[complex]) -> np.ndarray:
    """Inverse DFT: conj(dft(conj(a))) / N. Exact inverse of dft for every N."""
    x = np.conj(as_strip(a))
    n = x.shape[0]
    if n == 0:
        return x
    return np.conj(dft(x)) / n
