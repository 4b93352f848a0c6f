"""
Interactive seed acquisition for the seeded policy.

Left click adds a seed, right click closes the window and finishes input.
"""

from typing import List, Optional, Tuple

import numpy as np

LEFT_BUTTON = 1
RIGHT_BUTTON = 3


class SeedCollector:
    """Mouse handler that records (row, col) clicks on one axes."""

    def __init__(self, ax, height: int, width: int):
        self.ax = ax
        self.height = height
        self.width = width
        self._points: List[Tuple[int, int]] = []
        self._marks = None

    def on_click(self, event) -> None:
        if event.inaxes is not self.ax:
            return
        if event.button == RIGHT_BUTTON:
            import matplotlib.pyplot as plt
            plt.close(self.ax.figure)
            return
        if event.button != LEFT_BUTTON or event.xdata is None or event.ydata is None:
            return
        row, col = int(round(event.ydata)), int(round(event.xdata))
        if not (0 <= row < self.height and 0 <= col < self.width):
            return
        self._points.append((row, col))
        self._draw()

    def _draw(self) -> None:
        rows = [p[0] for p in self._points]
        cols = [p[1] for p in self._points]
        if self._marks is None:
            (self._marks,) = self.ax.plot(cols, rows, "r+", markersize=8)
        else:
            self._marks.set_data(cols, rows)
        self.ax.figure.canvas.draw_idle()

    @property
    def seeds(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(self._points)


def collect_seeds(image: np.ndarray, title: Optional[str] = None) -> Tuple[Tuple[int, int], ...]:
    """
    Show ``image`` and collect seed clicks until the window is closed.

    Returns:
    -------
    tuple of (row, col)
        Seeds in click order.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(image)
    ax.set_title(title or "Left click: add seed, right click: done")
    ax.axis('off')
    collector = SeedCollector(ax, image.shape[0], image.shape[1])
    fig.canvas.mpl_connect("button_press_event", collector.on_click)
    plt.show()
    return collector.seeds
