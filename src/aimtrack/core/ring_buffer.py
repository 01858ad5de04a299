"""
Fixed-capacity ring buffer backed by a preallocated numpy array.

Used for the per-axis speed window of the adaptive filter and for the
motion history. Storage is allocated once; appending past capacity
overwrites the oldest row.
"""

from typing import Sequence, Union

import numpy as np


class RingBuffer:
    """
    FIFO of fixed capacity storing rows of `width` floats.

    Rows are returned oldest-first. When full, each append evicts the
    oldest row.
    """

    def __init__(self, capacity: int, width: int = 1):
        """
        Args:
            capacity: Maximum number of rows kept
            width: Number of floats per row
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if width < 1:
            raise ValueError(f"width must be >= 1, got {width}")

        self.capacity = capacity
        self.width = width
        self._data = np.zeros((capacity, width), dtype=float)
        self._head = 0  # Next write index
        self._size = 0

    def __len__(self) -> int:
        return self._size

    @property
    def full(self) -> bool:
        return self._size == self.capacity

    def append(self, row: Union[float, Sequence[float], np.ndarray]):
        """
        Append one row, evicting the oldest row when full.

        Args:
            row: Scalar (for width 1) or sequence of `width` floats
        """
        self._data[self._head] = np.asarray(row, dtype=float).reshape(self.width)
        self._head = (self._head + 1) % self.capacity
        if self._size < self.capacity:
            self._size += 1

    def values(self) -> np.ndarray:
        """
        Return a copy of the stored rows, oldest first.

        Returns:
            Array of shape (len, width)
        """
        if self._size < self.capacity:
            return self._data[:self._size].copy()
        return np.roll(self._data, -self._head, axis=0)

    def latest(self) -> np.ndarray:
        """Return a copy of the newest row."""
        if self._size == 0:
            raise IndexError("latest() on empty RingBuffer")
        return self._data[(self._head - 1) % self.capacity].copy()

    def mean(self) -> np.ndarray:
        """Column-wise mean of stored rows (zeros when empty)."""
        if self._size == 0:
            return np.zeros(self.width)
        # Rows fill from index 0, so the first _size rows are always the live ones
        return self._data[:self._size].mean(axis=0)

    def clear(self):
        """Drop all rows without reallocating."""
        self._data.fill(0.0)
        self._head = 0
        self._size = 0
