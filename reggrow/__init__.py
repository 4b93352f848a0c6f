"""
Colour Region Growing Segmentation
----------------------------------
Flood-fill segmentation of RGB images driven by a colour distance threshold.

Example:
    >>> import numpy as np
    >>> from reggrow import segment_all, segment_from_seeds, colorize_labels
    >>>
    >>> # H x W x 3 RGB image
    >>> image = ...  # Your image loading code here
    >>>
    >>> # Label every pixel, neighbours closer than 20 join the region
    >>> labels = segment_all(image, threshold=20)
    >>>
    >>> # Or grow only from chosen (row, col) seeds
    >>> labels = segment_from_seeds(image, [(10, 12), (40, 40)], base_threshold=20)
    >>> preview = colorize_labels(labels)
"""

from .core import (
    DEFAULT_MAX_ITERATION,
    DEFAULT_MIN_REGION_SIZE,
    InvalidImageError,
    RegionGrowEngine,
    RunningThreshold,
    expand_seeds,
    load_image_rgb,
    process_image_file,
    segment_all,
    segment_from_seeds,
)
from .distance import color_distance, color_norm, color_summary
from .grid import FrontierStack, LabelGrid, StackUnderflowError
from .render import colorize_labels, save_label_map, save_preview, show_preview
from .seeds import collect_seeds

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_MAX_ITERATION",
    "DEFAULT_MIN_REGION_SIZE",
    "FrontierStack",
    "InvalidImageError",
    "LabelGrid",
    "RegionGrowEngine",
    "RunningThreshold",
    "StackUnderflowError",
    "collect_seeds",
    "color_distance",
    "color_norm",
    "color_summary",
    "colorize_labels",
    "expand_seeds",
    "load_image_rgb",
    "process_image_file",
    "save_label_map",
    "save_preview",
    "segment_all",
    "segment_from_seeds",
    "show_preview",
]
