"""
Grid Buffer Store

Two same-shaped displacement grids that swap roles every simulation tick.
Grids are indexed grid[y, x] so a row is one horizontal line of water.
"""

import numpy as np


GRID_SIZE = 64  # Resolution of the water simulation grid


class GridBuffers:
    """Ping-pong pair of N x N float grids.

    Only the active index flips on swap(); the arrays themselves are
    allocated once and reused for the lifetime of the store.
    """

    def __init__(self, size=GRID_SIZE, surface_size=(1, 1)):
        if size < 3:
            raise ValueError(f"Grid size must be at least 3, got {size}")
        self.size = size
        self._buffers = (
            np.zeros((size, size), dtype=np.float64),
            np.zeros((size, size), dtype=np.float64),
        )
        self._active = 0
        self.surface_size = (1, 1)
        self.resize(*surface_size)

    def read(self):
        """Current (readable) grid."""
        return self._buffers[self._active]

    def write_target(self):
        """Grid the next tick writes into. Holds the state from two ticks ago."""
        return self._buffers[1 - self._active]

    def swap(self):
        """Promote the write buffer to be the next read buffer."""
        self._active = 1 - self._active

    def resize(self, width, height):
        """Track a new drawing-surface size and flatten the water.

        Content is not resampled: the grid resolution is fixed, only the
        pixel-to-cell mapping changes.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self.surface_size = (int(width), int(height))
        for buf in self._buffers:
            buf[:] = 0.0
        self._active = 0

    def to_grid(self, px, py):
        """Map pixel coordinates to (gx, gy), or None when off the grid."""
        width, height = self.surface_size
        gx = int(np.floor(px / width * self.size))
        gy = int(np.floor(py / height * self.size))
        if 0 <= gx < self.size and 0 <= gy < self.size:
            return gx, gy
        return None

    def clear(self):
        for buf in self._buffers:
            buf[:] = 0.0

    @property
    def stats(self):
        """Return current surface statistics."""
        current = self.read()
        return {
            "energy": float(np.square(current).sum()),
            "max": float(np.abs(current).max()),
            "mean": float(current.mean()),
        }
