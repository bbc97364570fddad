"""Cosine and sine transforms on 1D strips using cached basis matrices."""

from functools import lru_cache
from typing import Sequence

import numpy as np

from ..constants import MATRIX_CACHE_SIZE
from .fourier import as_strip


@lru_cache(maxsize=MATRIX_CACHE_SIZE)
def create_dct_matrix(N: int) -> np.ndarray:
    """
    Generate the unnormalised DCT-II basis of size N x N.

        C[k, n] = cos(pi * (n + 0.5) * k / N)

    Row 0 is all ones, so the DC term is the plain sum of the input.
    """
    k = np.arange(N).reshape(-1, 1)
    n = np.arange(N).reshape(1, -1)
    C = np.cos(np.pi * (n + 0.5) * k / N)
    C.flags.writeable = False
    return C


@lru_cache(maxsize=MATRIX_CACHE_SIZE)
def create_dst_matrix(N: int) -> np.ndarray:
    """
    Generate the sine basis of size N x N.

        S[k, n] = sin(pi * (n + 1) * (k + 1) / (N + 1))

    S is symmetric and S @ S = (N + 1) / 2 * I, so the same matrix serves
    both directions.
    """
    k = np.arange(1, N + 1).reshape(-1, 1)
    n = np.arange(1, N + 1).reshape(1, -1)
    S = np.sin(np.pi * n * k / (N + 1))
    S.flags.writeable = False
    return S


def _real_result(values: np.ndarray) -> np.ndarray:
    return values.astype(np.complex128)


def dct2(a: Sequence[complex]) -> np.ndarray:
    """
    Type-II DCT of the real part of a strip.

        Y[k] = sum_n Re(a[n]) * cos(pi * (n + 0.5) * k / N)

    The result is real-valued (imaginary parts are 0).
    """
    x = as_strip(a).real
    n = x.shape[0]
    if n == 0:
        return _real_result(x)
    return _real_result(create_dct_matrix(n) @ x)


def idct2(a: Sequence[complex]) -> np.ndarray:
    """
    Type-III DCT, the inverse of dct2, on the real part of a strip.

        y[n] = (2 / N) * (a[0] / 2 + sum_{k>=1} a[k] * cos(pi * (n + 0.5) * k / N))
    """
    x = as_strip(a).real
    n = x.shape[0]
    if n == 0:
        return _real_result(x)
    x[0] *= 0.5
    return _real_result((2.0 / n) * (create_dct_matrix(n).T @ x))


def dst2(a: Sequence[complex]) -> np.ndarray:
    """
    Sine transform of the real part of a strip.

        Y[k] = sum_n Re(a[n]) * sin(pi * (n + 1) * (k + 1) / (N + 1))
    """
    x = as_strip(a).real
    n = x.shape[0]
    if n == 0:
        return _real_result(x)
    return _real_result(create_dst_matrix(n) @ x)


def idst2(a: Sequence[complex]) -> np.ndarray:
    """
    Inverse of dst2 on the real part of a strip.

        y[n] = (2 / (N + 1)) * sum_k a[k] * sin(pi * (n + 1) * (k + 1) / (N + 1))
    """
    x = as_strip(a).real
    n = x.shape[0]
    if n == 0:
        return _real_result(x)
    return _real_result((2.0 / (n + 1)) * (create_dst_matrix(n).T @ x))
