"""
Core functionality for colour region growing segmentation.
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence

import numpy as np
from PIL import Image
from tqdm import tqdm

from .distance import color_distance, color_norm, color_summary
from .grid import Coord, FrontierStack, LabelGrid

DEFAULT_MAX_ITERATION = 200000
DEFAULT_MIN_REGION_SIZE = 8 * 8

# 8-connectivity, scanned row by row around the centre pixel
NEIGHBOR_OFFSETS = [(-1, -1), (-1, 0), (-1, 1), (0, -1), (0, 1), (1, -1), (1, 0), (1, 1)]


class InvalidImageError(ValueError):
    """Raised when a pixel buffer is not a non-empty H x W x 3 array."""


def load_image_rgb(path: str) -> np.ndarray:
    """Return H x W x 3 uint8 RGB."""
    img = Image.open(path).convert("RGB")
    return np.asarray(img, dtype=np.uint8)


def _as_color_array(image) -> np.ndarray:
    arr = np.asarray(image)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise InvalidImageError(f"Expected an H x W x 3 image, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidImageError(f"Image must be non-empty, got shape {arr.shape}")
    if not np.issubdtype(arr.dtype, np.number):
        raise InvalidImageError(f"Image must be numeric, got dtype {arr.dtype}")
    # signed / float samples so channel differences never wrap
    if np.issubdtype(arr.dtype, np.integer):
        return arr.astype(np.int64)
    return arr.astype(np.float64)


def _check_threshold(value) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Threshold must be a finite number, got {value}")
    return value


def expand_seeds(seeds: Iterable[Coord], height: int, width: int) -> List[Coord]:
    """
    Densify sparse seed points: every seed is followed by its in-bounds 8-neighbours.

    Duplicates are kept, the engine skips cells that are already labelled.
    """
    expanded = []
    for seed in seeds:
        row, col = int(seed[0]), int(seed[1])
        if row != seed[0] or col != seed[1]:
            raise ValueError(f"Seed {tuple(seed)} must have integer coordinates")
        if not (0 <= row < height and 0 <= col < width):
            raise ValueError(f"Seed {(row, col)} outside {height}x{width} image")
        expanded.append((row, col))
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < height and 0 <= nc < width:
                expanded.append((nr, nc))
    return expanded


class RunningThreshold:
    """
    Self-widening acceptance threshold of one seeded region.

    Keeps the mean of the colour summaries absorbed so far and never reports
    a value below ``floor``.
    """

    def __init__(self, floor: float):
        self.floor = floor
        self.value = floor
        self._total = 0.0
        self._count = 0

    def reset(self, seed_summary: float) -> None:
        self.value = self.floor
        self._total = seed_summary
        self._count = 1

    def absorb(self, summary: float) -> None:
        self._total += summary
        self._count += 1
        self.value = max(self.mean, self.floor)

    @property
    def mean(self) -> float:
        return self._total / self._count if self._count else 0.0


class RegionGrowEngine:
    """
    Flood-fill region growing over an RGB image.

    Two policies are available:

    - :meth:`segment_all` labels every pixel with a fixed threshold.
    - :meth:`segment_from_seeds` grows regions from user seeds with an
      adaptive threshold, an iteration budget and a minimum region size.

    Each call starts from a fresh label grid and frontier, so an engine can
    be reused sequentially but not from several threads at once.
    """

    def __init__(self, image: np.ndarray):
        arr = _as_color_array(image)
        self.image = arr
        self.height, self.width = arr.shape[:2]
        # per-pixel reads in the grow loops go through nested lists
        self._pixels = arr.tolist()
        self.labels = LabelGrid(self.height, self.width)
        self.frontier = FrontierStack(self.height, self.width)
        self.iterations = 0
        self.dissolved = 0

    @property
    def current_region(self) -> int:
        return self.labels.current_region

    def _start_run(self) -> None:
        self.labels = LabelGrid(self.height, self.width)
        self.frontier = FrontierStack(self.height, self.width)
        self.iterations = 0
        self.dissolved = 0

    def _neighbours(self, row: int, col: int):
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.height and 0 <= nc < self.width:
                yield nr, nc

    def passed_all(self, max_iteration: int = DEFAULT_MAX_ITERATION) -> bool:
        """True once the pop budget is spent or every pixel carries a label."""
        return self.iterations > max_iteration or self.labels.is_complete()

    # ------------------------------------------------------------------ policy A

    def segment_all(self, threshold: float, progress: bool = False) -> LabelGrid:
        """
        Label the whole image, opening a new region at every unlabelled pixel.

        Parameters:
        ----------
        threshold : float
            A neighbour joins the region when its Euclidean RGB distance to
            the pixel being expanded is strictly below this value.
        progress : bool
            Show a tqdm bar over image rows.

        Returns:
        -------
        LabelGrid
            Every cell carries a positive region id.
        """
        threshold = _check_threshold(threshold)
        self._start_run()
        labels = self.labels
        for row in tqdm(range(self.height), desc="Rows", disable=not progress):
            for col in range(self.width):
                if labels.get(row, col) == 0:
                    region_id = labels.open_region(row, col)
                    self.frontier.push((row, col))
                    self._grow_fixed(region_id, threshold)
        logging.debug(f"segment_all: {labels.current_region} regions, {self.iterations} pops")
        return labels

    def _grow_fixed(self, region_id: int, threshold: float) -> None:
        labels, frontier, pixels = self.labels, self.frontier, self._pixels
        while not frontier.is_empty():
            row, col = frontier.pop()
            self.iterations += 1
            here = pixels[row][col]
            for nr, nc in self._neighbours(row, col):
                if labels.get(nr, nc) == 0 and color_distance(here, pixels[nr][nc]) < threshold:
                    labels.set(nr, nc, region_id)
                    frontier.push((nr, nc))

    # ------------------------------------------------------------------ policy B

    def segment_from_seeds(self,
                           seeds: Sequence[Coord],
                           base_threshold: float,
                           max_iteration: int = DEFAULT_MAX_ITERATION,
                           min_region_size: int = DEFAULT_MIN_REGION_SIZE,
                           progress: bool = False) -> LabelGrid:
        """
        Grow regions from seed points with an adaptive threshold.

        Parameters:
        ----------
        seeds : sequence of (row, col)
            Starting points, processed in order after densification with
            their 8-neighbours. Must lie inside the image.
        base_threshold : float
            Initial and minimum acceptance threshold of every region.
        max_iteration : int
            Frontier pop budget for the whole run. Once exceeded no pixel is
            absorbed anymore and the remaining seeds are skipped.
        min_region_size : int
            Regions smaller than this are dissolved back to unassigned.
        progress : bool
            Show a tqdm bar over the expanded seed list.

        Returns:
        -------
        LabelGrid
            Cells never reached, or freed by a dissolve, stay 0.
        """
        base_threshold = _check_threshold(base_threshold)
        self._start_run()
        labels, pixels = self.labels, self._pixels
        candidates = expand_seeds(seeds, self.height, self.width)

        for row, col in tqdm(candidates, desc="Seeds", disable=not progress):
            if labels.get(row, col) != 0 or color_norm(pixels[row][col]) <= 0:
                continue

            region_id = labels.open_region(row, col)
            logging.debug(f"Opening region {region_id} at {(row, col)}")
            self.frontier.push((row, col))
            self._grow_adaptive(region_id, row, col, base_threshold, max_iteration)

            if self.passed_all(max_iteration):
                logging.debug(f"segment_from_seeds: stopping after region {region_id}, "
                              f"{self.iterations} pops, complete={labels.is_complete()}")
                break

            size = labels.count_with_id(region_id)
            if size < min_region_size:
                logging.debug(f"Dissolving region {region_id} at {(row, col)}, size {size} < {min_region_size}")
                labels.dissolve_region(region_id)
                self.dissolved += 1

        return labels

    def _grow_adaptive(self, region_id: int, row0: int, col0: int,
                       base_threshold: float, max_iteration: int) -> None:
        labels, frontier, pixels = self.labels, self.frontier, self._pixels
        threshold = RunningThreshold(base_threshold)
        threshold.reset(color_summary(pixels[row0][col0]))

        while not frontier.is_empty():
            row, col = frontier.pop()
            here = pixels[row][col]
            for nr, nc in self._neighbours(row, col):
                if labels.get(nr, nc) != 0:
                    continue
                if color_distance(pixels[nr][nc], here) >= threshold.value:
                    continue
                if self.passed_all(max_iteration):
                    break
                labels.set(nr, nc, region_id)
                frontier.push((nr, nc))
                threshold.absorb(color_summary(pixels[nr][nc]))
            # counted once the popped pixel has been expanded
            self.iterations += 1


def segment_all(image: np.ndarray, threshold: float, progress: bool = False) -> LabelGrid:
    """Exhaustive fixed-threshold segmentation of ``image``."""
    return RegionGrowEngine(image).segment_all(threshold, progress=progress)


def segment_from_seeds(image: np.ndarray,
                       seeds: Sequence[Coord],
                       base_threshold: float,
                       max_iteration: int = DEFAULT_MAX_ITERATION,
                       min_region_size: int = DEFAULT_MIN_REGION_SIZE,
                       progress: bool = False) -> LabelGrid:
    """Seeded adaptive-threshold segmentation of ``image``."""
    return RegionGrowEngine(image).segment_from_seeds(
        seeds, base_threshold,
        max_iteration=max_iteration,
        min_region_size=min_region_size,
        progress=progress,
    )


def process_image_file(image_path: str, threshold: float,
                       seeds: Optional[Sequence[Coord]] = None) -> np.ndarray:
    """
    Load an image file and segment it.

    Parameters:
    ----------
    image_path : str
        Path to the input image file, decoded as RGB.
    threshold : float
        Fixed threshold, or base threshold when ``seeds`` is given.
    seeds : sequence of (row, col), optional
        When given, run the seeded policy instead of full-image labelling.

    Returns:
    -------
    np.ndarray
        int32 label map of shape (height, width)
    """
    image = load_image_rgb(image_path)
    if seeds is None:
        labels = segment_all(image, threshold)
    else:
        labels = segment_from_seeds(image, seeds, threshold)
    return labels.to_array()
