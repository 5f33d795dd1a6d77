"""
Color helpers for the water surface

Hex parsing and displacement-driven brightness. Brightness maps a cell's
displacement into a narrow [0.8, 1.0] band around the base color so the
water shimmers without washing out.
"""

import re
import numpy as np


DEFAULT_COLOR = "#1A9EE2"

BRIGHTNESS_MIN = 0.8
BRIGHTNESS_MAX = 1.0
BRIGHTNESS_BASE = 0.9
BRIGHTNESS_GAIN = 0.01

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def parse_hex(color):
    """Parse '#RRGGBB' into an (r, g, b) tuple. Returns None if malformed."""
    if not isinstance(color, str):
        return None
    m = _HEX_RE.match(color.strip())
    if not m:
        return None
    return tuple(int(part, 16) for part in m.groups())


def to_hex(rgb):
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def _round_half_up(x):
    return np.floor(x + 0.5)


def scale_channels(rgb, factor):
    """Scale (r, g, b) by factor, rounded and clamped to [0, 255]."""
    scaled = np.clip(_round_half_up(np.asarray(rgb, dtype=np.float64) * factor), 0, 255)
    return tuple(int(c) for c in scaled)


def adjust_brightness(hex_color, factor):
    """Return hex_color with each channel scaled by factor.

    Fails closed: a malformed color comes back unchanged.
    """
    rgb = parse_hex(hex_color)
    if rgb is None:
        return hex_color
    return to_hex(scale_channels(rgb, factor))


def brightness(values):
    """Map displacement values to brightness factors in [0.8, 1.0].

    NaN counts as flat water; +Inf and -Inf pin to the band edges.
    """
    v = np.nan_to_num(np.asarray(values, dtype=np.float64), nan=0.0,
                      posinf=np.finfo(np.float64).max,
                      neginf=np.finfo(np.float64).min)
    with np.errstate(over="ignore"):
        b = BRIGHTNESS_BASE + v * BRIGHTNESS_GAIN
    return np.clip(b, BRIGHTNESS_MIN, BRIGHTNESS_MAX)


def shade(grid, rgb):
    """Color a displacement grid.

    Args:
        grid: 2D float array indexed [y, x]
        rgb: Base (r, g, b)

    Returns:
        (rows, cols, 3) uint8 array
    """
    factors = brightness(grid)[..., np.newaxis]
    base = np.asarray(rgb, dtype=np.float64)
    out = np.clip(_round_half_up(factors * base), 0, 255)
    return out.astype(np.uint8)
