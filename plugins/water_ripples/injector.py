"""
Ripple Injector

Turns pointer, click and ambient events into displacement impulses on the
current grid. Every event source goes through RippleInjector.inject().
"""

import numpy as np


FRAME_MS = 16.67  # Approximate milliseconds per frame

IMPACT_SCALE = 50.0   # Displacement written at the impact cell
SPLASH_SCALE = 30.0   # Peak of the secondary splash
SPLASH_RADIUS = 2     # Grid cells


class Ripple:
    """Lifecycle record for one impulse.

    The impulse itself is imprinted into the grid at creation; this record
    only tracks age and an expanding radius for overlay effects.
    """

    __slots__ = ("x", "y", "radius", "strength", "lifetime", "max_lifetime")

    def __init__(self, x, y, strength, lifetime):
        self.x = x
        self.y = y
        self.radius = 1
        self.strength = strength
        self.lifetime = lifetime
        self.max_lifetime = lifetime

    def age(self, elapsed_ms=FRAME_MS):
        """Advance one frame. Returns True while the ripple is still alive."""
        self.radius += 1
        self.lifetime -= elapsed_ms
        return self.alive

    @property
    def alive(self):
        return self.lifetime > 0

    @property
    def remaining(self):
        """Fraction of lifetime left, in [0, 1]."""
        if self.max_lifetime <= 0:
            return 0.0
        return max(0.0, min(1.0, self.lifetime / self.max_lifetime))

    def __repr__(self):
        return (f"Ripple(x={self.x:.1f}, y={self.y:.1f}, radius={self.radius}, "
                f"strength={self.strength:.2f}, lifetime={self.lifetime:.0f})")


class RippleInjector:
    """Writes impulses into a GridBuffers store and keeps the Ripple list."""

    def __init__(self, buffers):
        self.buffers = buffers
        self.ripples = []

        # Precomputed splash stencil: offsets and linear falloff within radius
        r = SPLASH_RADIUS
        dy, dx = np.mgrid[-r:r + 1, -r:r + 1]
        dist = np.sqrt(dx ** 2 + dy ** 2)
        inside = dist <= r
        self._offsets_x = dx[inside]
        self._offsets_y = dy[inside]
        self._falloff = 1.0 - dist[inside] / r

    def inject(self, px, py, strength=3.0, lifetime=1000.0):
        """Drop an impulse at pixel (px, py).

        Args:
            px, py: Position in drawing-surface pixels
            strength: Impulse strength (click = 5, pointer move = 1)
            lifetime: Ripple record lifetime in milliseconds

        Returns:
            The new Ripple, or None when the position is off the grid
        """
        cell = self.buffers.to_grid(px, py)
        if cell is None:
            return None
        gx, gy = cell
        size = self.buffers.size
        current = self.buffers.read()

        current[gy, gx] = strength * IMPACT_SCALE

        nx = gx + self._offsets_x
        ny = gy + self._offsets_y
        ok = (nx >= 0) & (nx < size) & (ny >= 0) & (ny < size)
        # Offsets are unique, so fancy-index += never hits the same cell twice
        current[ny[ok], nx[ok]] += strength * SPLASH_SCALE * self._falloff[ok]

        ripple = Ripple(px, py, strength, lifetime)
        self.ripples.append(ripple)
        return ripple

    def age_ripples(self, elapsed_ms=FRAME_MS):
        """Age every record and drop the expired ones. Returns live count."""
        self.ripples = [r for r in self.ripples if r.age(elapsed_ms)]
        return len(self.ripples)

    def clear(self):
        self.ripples = []
