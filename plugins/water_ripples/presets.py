"""
Water Ripple Background Presets

Each preset defines the base water color and the two knobs of the
simulation: damping (how long waves ring) and the mean interval between
ambient ripples in milliseconds.
"""

PRESETS = {
    "lagoon": {
        "name": "Lagoon",
        "description": "Bright tropical blue, the site default",
        "color": "#1A9EE2", "damping": 0.97, "ambient_frequency": 3000,
    },
    "reef": {
        "name": "Reef",
        "description": "Turquoise shallows over coral",
        "color": "#17B8B0", "damping": 0.975, "ambient_frequency": 2500,
    },
    "deep_sea": {
        "name": "Deep Sea",
        "description": "Dark water, long slow swells",
        "color": "#0B3C6E", "damping": 0.985, "ambient_frequency": 5000,
    },
    "tide_pool": {
        "name": "Tide Pool",
        "description": "Still pool, ripples die quickly",
        "color": "#3F8FA8", "damping": 0.93, "ambient_frequency": 6000,
    },
    "sunset": {
        "name": "Sunset Bay",
        "description": "Warm evening water, frequent drops",
        "color": "#E2774A", "damping": 0.97, "ambient_frequency": 1800,
    },
    "rain": {
        "name": "Rain",
        "description": "Constant drizzle on grey water",
        "color": "#6B7A8F", "damping": 0.96, "ambient_frequency": 600,
    },
}

PRESET_ORDER = ["lagoon", "reef", "deep_sea", "tide_pool", "sunset", "rain"]

DEFAULT_PRESET = "lagoon"


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) in display order."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]
