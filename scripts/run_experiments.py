#!/usr/bin/env python3
"""
Run round-trip experiments for every transform pair.

Applies each forward transform and its inverse over a range of block sizes
and axes, and records reconstruction error and timing in metrics.json.
Log-magnitude spectra are written as PNG previews for the report.
"""

import sys
import os
import json
import time
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from PIL import Image

from nloss.buffer import ImageBuffer
from nloss.io import read_image, write_image
from nloss.metrics import calculate_psnr, calculate_rmse
from nloss.transform import TransformKind, apply_transform

FORWARD_KINDS = [
    TransformKind.FFT,
    TransformKind.DFT,
    TransformKind.DCT,
    TransformKind.DST,
    TransformKind.WHT,
]


def create_test_image(height: int = 64, width: int = 96, seed: int = 42) -> np.ndarray:
    """Synthetic RGB image: gradients, a disc and mild noise."""
    rng = np.random.default_rng(seed)
    y, x = np.mgrid[:height, :width]

    rgb = np.zeros((height, width, 3), dtype=np.float64)
    rgb[..., 0] = 255 * x / max(width - 1, 1)
    rgb[..., 1] = 255 * y / max(height - 1, 1)
    mask = (y - height / 2) ** 2 + (x - width / 2) ** 2 <= (min(height, width) / 4) ** 2
    rgb[..., 2] = np.where(mask, 220, 40)
    rgb += rng.normal(0, 4, rgb.shape)

    return np.clip(rgb, 0, 255).astype(np.uint8)


def save_spectrum_png(buffer: ImageBuffer, path: str) -> None:
    """Save the log-magnitude of channel 0 normalised to 8 bits."""
    magnitude = np.log1p(np.abs(buffer.pixels[..., 0]))
    peak = magnitude.max()
    if peak > 0:
        magnitude = magnitude / peak
    Image.fromarray((magnitude * 255).astype(np.uint8)).save(path)


def run_experiment(original: ImageBuffer, kind: TransformKind, axis: str,
                   block_size: int, spectra_dir: str = None) -> dict:
    """Forward then inverse transform on a copy; measure the error."""
    work = ImageBuffer()
    work.copy_from(original)

    start = time.time()
    apply_transform(work, kind, axis, block_size, block_size)
    forward_time = time.time() - start

    if spectra_dir is not None:
        name = f"{kind.value}_{axis}_{block_size}.png"
        save_spectrum_png(work, os.path.join(spectra_dir, name))

    start = time.time()
    apply_transform(work, kind.inverse, axis, block_size, block_size)
    inverse_time = time.time() - start

    return {
        'transform': kind.value,
        'axis': axis,
        'block_size': block_size,
        'rmse': round(calculate_rmse(original, work), 6),
        'psnr': round(calculate_psnr(original, work), 2),
        'max_imag': float(np.abs(work.pixels.imag).max()),
        'forward_seconds': round(forward_time, 4),
        'inverse_seconds': round(inverse_time, 4),
    }


def main():
    """Run all experiments."""
    print("=" * 60)
    print("NLOSS TRANSFORM ROUND-TRIP EXPERIMENTS")
    print("=" * 60)

    results_dir = "results"
    spectra_dir = os.path.join(results_dir, "spectra")
    os.makedirs(spectra_dir, exist_ok=True)

    original = ImageBuffer()
    if len(sys.argv) > 1:
        print(f"\nLoading BMP: {sys.argv[1]}")
        read_image(sys.argv[1], original)
    else:
        print("\nUsing synthetic test image")
        original.load_rgb(create_test_image())
        write_image(original, os.path.join(results_dir, "original.bmp"))

    print(f"  Size: {original.width}x{original.height}")

    block_sizes = [8, 12, 16]
    axes = ['h', 'v', 'd']
    results = []

    for kind in FORWARD_KINDS:
        print(f"\n{kind.value} / {kind.inverse.value}")
        for block_size in block_sizes:
            for axis in axes:
                save_dir = spectra_dir if axis == 'd' else None
                result = run_experiment(original, kind, axis, block_size, save_dir)
                results.append(result)
                print(f"  axis={axis} block={block_size:3d}: "
                      f"RMSE={result['rmse']:.6f}, PSNR={result['psnr']:.2f} dB")

    metrics = {
        'timestamp': datetime.now().isoformat(),
        'image': {'width': original.width, 'height': original.height},
        'results': results,
    }

    metrics_path = os.path.join(results_dir, "metrics.json")
    with open(metrics_path, 'w') as f:
        json.dump(metrics, f, indent=2)

    print(f"\nMetrics written to: {metrics_path}")
    print(f"Spectra written to: {spectra_dir}/")


if __name__ == '__main__':
    main()
