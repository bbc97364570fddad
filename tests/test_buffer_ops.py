"""Buffer Model and Pixel Operation Verification."""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest
from nloss.buffer import ImageBuffer, BufferBank
from nloss.errors import InvalidParameterError, NoBufferLoadedError
from nloss.io import calculate_row_size, encode_bmp
from nloss.metrics import channel_means, calculate_rmse, calculate_psnr, bmp_layout
from nloss.ops import invert, grayscale, flip, absolute, quantize, cutoff, level, fit


def _buffer_from(rgb):
    buffer = ImageBuffer()
    buffer.load_rgb(np.asarray(rgb, dtype=np.uint8))
    return buffer


def _random_buffer(width=5, height=4, seed=0):
    rng = np.random.default_rng(seed)
    return _buffer_from(rng.integers(0, 256, (height, width, 3)))


def test_buffer_lifecycle():
    """allocate / load / clear keep the loaded flag and shape consistent."""
    print("=" * 60)
    print("Test 1: Buffer Lifecycle")
    print("=" * 60)

    buffer = ImageBuffer()
    assert not buffer.loaded and buffer.info() == "No image loaded"
    with pytest.raises(NoBufferLoadedError):
        buffer.require_loaded()

    buffer.allocate(3, 2)
    assert buffer.loaded and buffer.pixels.shape == (2, 3, 3)
    assert buffer.pixels.dtype == np.complex128
    assert buffer.info() == "Image loaded: 3x2 pixels"

    buffer.clear()
    assert not buffer.loaded and buffer.width == 0 and buffer.height == 0
    print("   ✓ Loaded flag tracks the pixel array")


def test_byte_conversion():
    """Bytes load with imaginary part 0; saving clamps and floors the real part."""
    print("\n" + "=" * 60)
    print("Test 2: Byte <-> Sample Conversion")
    print("=" * 60)

    buffer = _buffer_from([[[0, 128, 255]]])
    assert np.array_equal(buffer.pixels, np.array([[[0, 128, 255]]], dtype=np.complex128))

    buffer.pixels[0, 0] = [-5 + 1j, 3.7 - 2j, 300 + 0j]
    assert buffer.to_rgb().tolist() == [[[0, 3, 255]]]
    buffer.pixels[0, 0] = [255.99, 0.999, 254.5 + 99j]
    assert buffer.to_rgb().tolist() == [[[255, 0, 254]]]
    print("   ✓ Clamp to [0, 255], floor, imaginary part discarded")


def test_buffer_bank_slots():
    """Bank exposes 16 independent slots and rejects bad handles."""
    print("\n" + "=" * 60)
    print("Test 3: Buffer Bank")
    print("=" * 60)

    bank = BufferBank()
    assert len(bank) == 16
    bank[3].allocate(2, 2)
    assert bank[3].loaded and not bank[4].loaded
    assert bank[3] is bank[3]

    for slot in [-1, 16, 100, 'a', 1.5, None, True]:
        with pytest.raises(InvalidParameterError):
            bank[slot]
    print("   ✓ Slots 0-15 valid, others rejected")


def test_copy_is_independent():
    """copy_from produces storage that does not alias the source."""
    print("\n" + "=" * 60)
    print("Test 4: Independent Copies")
    print("=" * 60)

    source = _random_buffer()
    target = ImageBuffer()
    target.copy_from(source)
    target.pixels[0, 0, 0] = 999
    assert source.pixels[0, 0, 0] != 999
    assert not np.shares_memory(source.pixels, target.pixels)
    print("   ✓ No aliasing between buffers")


def test_invert_twice_restores():
    """Invert is an involution."""
    print("\n" + "=" * 60)
    print("Test 5: Invert Twice")
    print("=" * 60)

    buffer = _random_buffer(seed=1)
    original = buffer.pixels.copy()

    invert(buffer)
    assert np.array_equal(buffer.pixels, 255 - original)
    invert(buffer)
    assert np.array_equal(buffer.pixels, original)
    print("   ✓ invert(invert(x)) == x exactly")


def test_grayscale_and_flip():
    """Luminance weights and mirroring."""
    print("\n" + "=" * 60)
    print("Test 6: Grayscale and Flip")
    print("=" * 60)

    buffer = _buffer_from([[[100, 200, 50], [0, 0, 0]]])
    grayscale(buffer)
    expected = 0.299 * 100 + 0.587 * 200 + 0.114 * 50
    assert np.allclose(buffer.pixels[0, 0], expected)
    assert np.allclose(buffer.pixels[0, 1], 0)
    print("   ✓ Grayscale luminance")

    buffer = _random_buffer(width=3, height=2, seed=2)
    original = buffer.pixels.copy()
    assert flip(buffer, 'h') == 'horizontal'
    assert np.array_equal(buffer.pixels, original[:, ::-1])
    assert flip(buffer, 'vertical') == 'vertical'
    assert np.array_equal(buffer.pixels, original[::-1, ::-1])
    with pytest.raises(InvalidParameterError):
        flip(buffer, 'sideways')
    assert np.array_equal(buffer.pixels, original[::-1, ::-1])
    print("   ✓ Flip horizontal and vertical")


def test_absolute_quantize_cutoff():
    """Magnitude, quantisation towards zero and magnitude cutoff."""
    print("\n" + "=" * 60)
    print("Test 7: Abs, Quantize, Cutoff")
    print("=" * 60)

    buffer = ImageBuffer()
    buffer.allocate(3, 1)
    buffer.pixels[0] = [[3 + 4j, -2, 0], [130, -5, 17], [5, 5.5, -10]]

    absolute(buffer)
    assert np.allclose(buffer.pixels[0, 0], [5, 2, 0])
    assert np.all(buffer.pixels.imag == 0)

    buffer.pixels[0] = [[130, -5, 17], [16, 15.5, 0], [33, -33, 1]]
    quantize(buffer, 16)
    assert np.allclose(buffer.pixels[0].real, [[128, 0, 16], [16, 0, 0], [32, -32, 0]])

    buffer.pixels[0] = [[3, 10, 5], [-7, 5 + 0.1j, 4j], [6, -6, 0]]
    cutoff(buffer, 5)
    assert np.allclose(buffer.pixels[0], [[0, 10, 0], [-7, 5 + 0.1j, 0], [6, -6, 0]])

    snapshot = buffer.pixels.copy()
    for size in [0, -3, None]:
        with pytest.raises(InvalidParameterError):
            quantize(buffer, size)
        with pytest.raises(InvalidParameterError):
            cutoff(buffer, size)
    assert np.array_equal(buffer.pixels, snapshot)
    print("   ✓ Values and parameter validation")


def test_level_block_average():
    """Each block, including remainder blocks, becomes its mean."""
    print("\n" + "=" * 60)
    print("Test 8: Level (Block Average)")
    print("=" * 60)

    buffer = ImageBuffer()
    buffer.allocate(3, 3)
    values = np.arange(9, dtype=np.float64).reshape(3, 3)
    buffer.pixels[...] = values[:, :, np.newaxis]

    count = level(buffer, 2, 2)
    assert count == 4
    channel = buffer.pixels[:, :, 0].real
    assert np.allclose(channel[:2, :2], np.mean([0, 1, 3, 4]))
    assert np.allclose(channel[:2, 2], np.mean([2, 5]))
    assert np.allclose(channel[2, :2], np.mean([6, 7]))
    assert np.allclose(channel[2, 2], 8)

    level(buffer)
    assert np.allclose(buffer.pixels, values.mean())
    print("   ✓ Block means with remainder blocks")


def test_fit_and_metrics():
    """fit snaps to saved bytes; metrics compare real parts."""
    print("\n" + "=" * 60)
    print("Test 9: Fit and Metrics")
    print("=" * 60)

    buffer = _buffer_from([[[10, 20, 30], [40, 50, 60]]])
    assert np.allclose(channel_means(buffer), [25, 35, 45])

    other = ImageBuffer()
    other.copy_from(buffer)
    assert calculate_rmse(buffer, other) == 0.0
    assert calculate_psnr(buffer, other) == float('inf')

    other.pixels += 2.6 + 1j
    assert np.isclose(calculate_rmse(buffer, other), 2.6)
    fit(other)
    assert np.all(other.pixels.imag == 0)
    assert np.isclose(calculate_rmse(buffer, other), 2.0)
    assert np.isclose(calculate_psnr(buffer, other), 10 * np.log10(255 ** 2 / 4))

    with pytest.raises(InvalidParameterError):
        calculate_rmse(buffer, _random_buffer(width=1, height=1))

    layout = bmp_layout(5, 3)
    assert layout == {'row_padding': 1, 'row_size': 16, 'image_data_size': 48, 'file_size': 102}
    for width in range(1, 9):
        layout = bmp_layout(width, 2)
        assert layout['row_size'] == calculate_row_size(width)
        assert layout['file_size'] == len(encode_bmp(np.zeros((2, width, 3), dtype=np.uint8)))
    print("   ✓ Means, RMSE, PSNR and BMP layout")


def test_operations_require_loaded_buffer():
    """Every pixel operation rejects an empty buffer."""
    print("\n" + "=" * 60)
    print("Test 10: Empty Buffer Rejected")
    print("=" * 60)

    empty = ImageBuffer()
    for op, args in [(invert, ()), (grayscale, ()), (flip, ('h',)), (absolute, ()),
                     (quantize, (4,)), (cutoff, (4,)), (level, (2, 2)), (fit, ())]:
        with pytest.raises(NoBufferLoadedError):
            op(empty, *args)
    print("   ✓ NoBufferLoadedError for every operation")


def main():
    """Run all buffer and pixel operation tests."""
    print("\n" + "=" * 60)
    print("BUFFER AND PIXEL OPERATION VERIFICATION")
    print("=" * 60 + "\n")

    tests = [
        ("Buffer Lifecycle", test_buffer_lifecycle),
        ("Byte Conversion", test_byte_conversion),
        ("Buffer Bank", test_buffer_bank_slots),
        ("Independent Copies", test_copy_is_independent),
        ("Invert Twice", test_invert_twice_restores),
        ("Grayscale and Flip", test_grayscale_and_flip),
        ("Abs, Quantize, Cutoff", test_absolute_quantize_cutoff),
        ("Level", test_level_block_average),
        ("Fit and Metrics", test_fit_and_metrics),
        ("Empty Buffer", test_operations_require_loaded_buffer),
    ]

    results = []
    for name, test in tests:
        try:
            test()
            results.append((name, True))
        except Exception as e:
            print(f"❌ {name} failed: {e}")
            results.append((name, False))

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"   {name}: {status}")
        if not passed:
            all_passed = False

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
