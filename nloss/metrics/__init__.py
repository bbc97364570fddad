"""Quality metrics for the nLoss toolkit."""

from .quality import (
    channel_means,
    calculate_rmse,
    calculate_psnr,
    bmp_layout,
)

__all__ = [
    'channel_means',
    'calculate_rmse',
    'calculate_psnr',
    'bmp_layout',
]
