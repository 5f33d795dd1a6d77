"""
Wave Propagator

Discrete 2D wave step on a pair of ping-pong grids:

    next = (north + south + east + west) / 2 - next
    next *= damping

The subtracted `next` is the stale value left in the write buffer from two
ticks ago, which gives the ringing, decaying ripple of the web background.
The outermost ring of cells is never written.
"""

import numpy as np


DEFAULT_DAMPING = 0.97


def propagate(current, nxt, damping=DEFAULT_DAMPING):
    """Advance one tick from `current` into `nxt` in place. Returns `nxt`.

    Each interior cell reads only its own stale value from `nxt`, so the
    slice update below matches a cell-by-cell loop exactly.
    """
    neighbors = (
        current[:-2, 1:-1] +   # north
        current[2:, 1:-1] +    # south
        current[1:-1, 2:] +    # east
        current[1:-1, :-2]     # west
    )
    interior = nxt[1:-1, 1:-1]
    np.subtract(neighbors / 2.0, interior, out=interior)
    interior *= damping
    return nxt


class WavePropagator:
    """Runs propagate() against a GridBuffers store and swaps it."""

    def __init__(self, damping=DEFAULT_DAMPING):
        self.damping = damping
        self.generation = 0

    @property
    def damping(self):
        return self._damping

    @damping.setter
    def damping(self, value):
        if not 0.0 < value < 1.0:
            raise ValueError(f"Damping must be in (0, 1), got {value}")
        self._damping = float(value)

    def step(self, buffers):
        """Advance one tick. Returns the new readable grid."""
        propagate(buffers.read(), buffers.write_target(), self._damping)
        buffers.swap()
        self.generation += 1
        return buffers.read()

    def step_n(self, buffers, n):
        """Advance n ticks. Returns final grid."""
        for _ in range(n):
            self.step(buffers)
        return buffers.read()
