"""
False-colour previews and label map export.
"""

from pathlib import Path

import numpy as np
from PIL import Image

UNASSIGNED_COLOR = (255, 255, 255)
# per-channel multipliers applied to the region id (R, G, B)
CHANNEL_SCALE = np.array([30, 90, 35], dtype=np.int64)


def _label_array(labels) -> np.ndarray:
    if hasattr(labels, "to_array"):
        labels = labels.to_array()
    return np.asarray(labels, dtype=np.int64)


def colorize_labels(labels) -> np.ndarray:
    """
    Map a label map to an H x W x 3 uint8 RGB preview.

    Unassigned cells (0) are white. Region ``v`` gets ``(30v, 90v, 35v)``
    wrapped to 8 bits, which keeps small region counts visually distinct
    but repeats colours for large counts.

    Parameters
    ----------
    labels : LabelGrid or np.ndarray of int
    """
    m = _label_array(labels)
    out = (m[..., None] * CHANNEL_SCALE) % 256
    out[m == 0] = UNASSIGNED_COLOR
    return out.astype(np.uint8)


def save_preview(labels, out_path: str) -> np.ndarray:
    """Write the colourised label map as an RGB image and return it."""
    preview = colorize_labels(labels)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(preview).save(out_path)
    return preview


def save_label_map(labels, out_path: str) -> None:
    """Save the raw H x W int32 label map as .npy."""
    m = _label_array(labels).astype(np.int32)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    np.save(out_path, m)


def show_preview(preview: np.ndarray, title: str = "Segmented Image") -> None:
    """Display a preview and block until the window is closed."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(preview)
    ax.set_title(title)
    ax.axis('off')
    plt.tight_layout()
    plt.show()
    plt.close(fig)
