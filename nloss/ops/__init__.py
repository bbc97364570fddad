"""Pixel operations for the nLoss toolkit."""

from .pixel import invert, grayscale, flip, absolute, quantize, cutoff, level, fit

__all__ = [
    'invert',
    'grayscale',
    'flip',
    'absolute',
    'quantize',
    'cutoff',
    'level',
    'fit',
]
