"""Complex-valued RGB image buffers and the fixed bank of buffer slots."""

import logging
from typing import Optional

import numpy as np

from .constants import NUM_CHANNELS, NUM_SLOTS, MAX_SAMPLE
from .errors import InvalidParameterError, NoBufferLoadedError

logger = logging.getLogger(__name__)


class ImageBuffer:
    """
    Image held as a complex matrix of shape (height, width, 3).

    The real part of each sample is an intensity in the spatial domain or a
    coefficient component after a transform. The imaginary part is 0 until a
    transform produces one. Samples are cast back to bytes only when saving.
    """

    def __init__(self):
        self.width = 0
        self.height = 0
        self.pixels: Optional[np.ndarray] = None

    @property
    def loaded(self) -> bool:
        return self.pixels is not None

    def allocate(self, width: int, height: int) -> None:
        """Allocate a zero-filled buffer of the given size."""
        if width < 0 or height < 0:
            raise InvalidParameterError(
                f"Image dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, NUM_CHANNELS), dtype=np.complex128)

    def clear(self) -> None:
        """Release the pixel array and reset dimensions."""
        self.pixels = None
        self.width = self.height = 0

    def require_loaded(self) -> np.ndarray:
        """Return the pixel array, raising if the buffer is empty."""
        if self.pixels is None:
            raise NoBufferLoadedError()
        return self.pixels

    def load_rgb(self, rgb: np.ndarray) -> None:
        """
        Replace the buffer contents with byte RGB data.

        Args:
            rgb: uint8 array of shape (height, width, 3)

        Each byte becomes a sample with imaginary part 0.
        """
        if rgb.ndim != 3 or rgb.shape[2] != NUM_CHANNELS:
            raise InvalidParameterError(
                f"Expected (height, width, {NUM_CHANNELS}) array, got shape {rgb.shape}")

        height, width = rgb.shape[:2]
        self.allocate(width, height)
        self.pixels.real = rgb.astype(np.float64)
        logger.debug("Loaded %dx%d RGB data into buffer", width, height)

    def to_rgb(self) -> np.ndarray:
        """
        Convert samples to bytes.

        The real part is clamped to [0, 255] and floored; the imaginary part
        is discarded.

        Returns:
            uint8 array of shape (height, width, 3)
        """
        pixels = self.require_loaded()
        clamped = np.clip(pixels.real, 0, MAX_SAMPLE)
        return np.floor(clamped).astype(np.uint8)

    def copy_from(self, other: 'ImageBuffer') -> None:
        """Make this buffer an independent copy of another loaded buffer."""
        pixels = other.require_loaded()
        self.width = other.width
        self.height = other.height
        self.pixels = pixels.copy()

    def info(self) -> str:
        if self.loaded:
            return f"Image loaded: {self.width}x{self.height} pixels"
        return "No image loaded"

    def __repr__(self):
        return f"ImageBuffer(width={self.width}, height={self.height}, loaded={self.loaded})"


class BufferBank:
    """Fixed set of addressable image slots, each owning one ImageBuffer."""

    def __init__(self, num_slots: int = NUM_SLOTS):
        if num_slots <= 0:
            raise InvalidParameterError(f"Number of slots must be positive, got {num_slots}")
        self._slots = [ImageBuffer() for _ in range(num_slots)]

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, slot: int) -> ImageBuffer:
        validate_slot(slot, len(self._slots))
        return self._slots[slot]

    def __iter__(self):
        return iter(self._slots)


def validate_slot(slot, num_slots: int = NUM_SLOTS) -> int:
    """Check that a slot handle is an int in [0, num_slots)."""
    if isinstance(slot, bool) or not isinstance(slot, (int, np.integer)):
        raise InvalidParameterError(f"Slot must be an integer, got {slot!r}")
    if not 0 <= slot < num_slots:
        raise InvalidParameterError(
            f"Slot must be in range [0, {num_slots - 1}], got {slot}")
    return int(slot)
