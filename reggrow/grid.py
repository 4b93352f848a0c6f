"""
Mutable state of a segmentation run: the label grid and the frontier stack.
"""

from typing import List, Tuple

import numpy as np

Coord = Tuple[int, int]


class StackUnderflowError(IndexError):
    """Raised when popping from an empty frontier."""


class LabelGrid:
    """
    Grid of region ids with the same shape as the image.

    0 means unassigned, any positive value is a region id. The grid also owns
    the region counter, so opening and dissolving regions are transitions on
    one object instead of on shared counters.
    """

    def __init__(self, height: int, width: int):
        if height <= 0 or width <= 0:
            raise ValueError(f"Grid must be non-empty, got {height}x{width}")
        self.height = height
        self.width = width
        self.current_region = 0
        self._labels = np.zeros((height, width), dtype=np.int32)
        self._assigned = 0

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    @property
    def size(self) -> int:
        return self.height * self.width

    def get(self, row: int, col: int) -> int:
        return int(self._labels[row, col])

    def set(self, row: int, col: int, region_id: int) -> None:
        """Assign ``region_id`` to an unassigned cell."""
        if region_id <= 0:
            raise ValueError(f"Region id must be positive, got {region_id}")
        old = int(self._labels[row, col])
        if old == region_id:
            return
        if old != 0:
            raise ValueError(f"Cell ({row}, {col}) already belongs to region {old}")
        self._labels[row, col] = region_id
        self._assigned += 1

    def count_assigned(self) -> int:
        return self._assigned

    def count_with_id(self, region_id: int) -> int:
        return int(np.count_nonzero(self._labels == region_id))

    def reset_id(self, region_id: int) -> int:
        """Set every cell carrying ``region_id`` back to 0. Returns the number of cells reset."""
        mask = self._labels == region_id
        count = int(np.count_nonzero(mask))
        self._labels[mask] = 0
        self._assigned -= count
        return count

    def is_complete(self) -> bool:
        return self._assigned == self.size

    def open_region(self, row: int, col: int) -> int:
        """Start a new region at (row, col) and return its id."""
        self.current_region += 1
        self.set(row, col, self.current_region)
        return self.current_region

    def dissolve_region(self, region_id: int) -> None:
        """Reset the most recently opened region and give its id back."""
        if region_id != self.current_region or region_id <= 0:
            raise ValueError(
                f"Only the latest region ({self.current_region}) can be dissolved, got {region_id}"
            )
        self.reset_id(region_id)
        self.current_region -= 1

    def to_array(self) -> np.ndarray:
        return self._labels.copy()


class FrontierStack:
    """LIFO work-list of in-bounds pixel coordinates."""

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        self._items: List[Coord] = []

    def push(self, coord: Coord) -> None:
        row, col = coord
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise ValueError(f"Coordinate {coord} outside {self.height}x{self.width} image")
        self._items.append((row, col))

    def pop(self) -> Coord:
        if not self._items:
            raise StackUnderflowError("pop from empty frontier")
        return self._items.pop()

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
