"""
Renderer

Paints the current displacement grid onto a pygame surface: one
width/N x height/N block per cell, tinted from the base color by the
cell's displacement. Never mutates simulation state.
"""

import numpy as np
import pygame

from .colors import DEFAULT_COLOR, parse_hex, shade


class Renderer:

    def __init__(self, color=DEFAULT_COLOR, smooth=False):
        """
        Args:
            color: Base water color as '#RRGGBB'
            smooth: Bilinear upscale instead of hard-edged cell blocks
        """
        self.smooth = smooth
        self.set_color(color)

    def set_color(self, color):
        """Set the base color.

        Malformed hex fails closed: a color pygame can name is painted as-is
        without brightness modulation, anything else falls back to the
        default color, also unmodulated.
        """
        self.color = color
        rgb = parse_hex(color)
        self.modulate = rgb is not None
        if rgb is None:
            try:
                c = pygame.Color(color)
                rgb = (c.r, c.g, c.b)
            except (ValueError, TypeError):
                rgb = parse_hex(DEFAULT_COLOR)
            print(f"[ripples] Unusable hex color {color!r}, painting flat {rgb}")
        self.rgb = rgb

    def shade(self, grid):
        """Return the (N, N, 3) uint8 image for a grid."""
        if not self.modulate:
            out = np.empty(grid.shape + (3,), dtype=np.uint8)
            out[:] = self.rgb
            return out
        return shade(grid, self.rgb)

    def paint(self, surface, grid):
        """Clear surface and paint the grid over it. Returns False if the
        surface could not be drawn on."""
        try:
            width, height = surface.get_size()
            surface.fill(self.rgb)
            # surfarray is indexed [x, y]; grids are [y, x]
            cells = pygame.surfarray.make_surface(self.shade(grid).swapaxes(0, 1).copy())
            if self.smooth:
                scaled = pygame.transform.smoothscale(cells, (width, height))
            else:
                scaled = pygame.transform.scale(cells, (width, height))
            surface.blit(scaled, (0, 0))
        except pygame.error as e:
            print(f"[ripples] Render skipped: {e}")
            return False
        return True

    def draw_rings(self, surface, ripples, scale=3):
        """Overlay a fading ring for each live Ripple record."""
        if not ripples:
            return
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for ripple in ripples:
            alpha = int(90 * ripple.remaining * min(1.0, ripple.strength / 5.0))
            if alpha <= 0:
                continue
            radius = max(1, int(ripple.radius * scale))
            pygame.draw.circle(overlay, (255, 255, 255, alpha),
                               (int(ripple.x), int(ripple.y)), radius, width=2)
        surface.blit(overlay, (0, 0))


def paint_fallback(surface, color=DEFAULT_COLOR):
    """Static background shown when the simulation is not running.

    Soft vertical gradient from the base color to a slightly darker shade.
    """
    rgb = parse_hex(color) or parse_hex(DEFAULT_COLOR)
    width, height = surface.get_size()
    t = np.linspace(1.0, 0.8, max(height, 1))[:, np.newaxis]
    column = np.clip(np.floor(t * np.asarray(rgb, dtype=np.float64) + 0.5), 0, 255).astype(np.uint8)
    strip = pygame.surfarray.make_surface(column[np.newaxis, :, :].copy())
    surface.blit(pygame.transform.scale(strip, (width, height)), (0, 0))
