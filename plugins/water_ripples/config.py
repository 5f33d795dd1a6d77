"""
Animation configuration

Created once when the host starts and handed to every animated component.
Instances are frozen; the setters return a new version so a component that
captured the old one keeps a consistent view.
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Durations:
    """Duration presets in seconds."""

    fast: float = 0.2
    medium: float = 0.4
    slow: float = 0.7


@dataclass(frozen=True)
class Easings:
    """Cubic-bezier control points."""

    ease_out: tuple = (0.0, 0.0, 0.2, 1.0)
    ease_in: tuple = (0.4, 0.0, 1.0, 1.0)
    ease_in_out: tuple = (0.04, 0.62, 0.23, 0.98)
    wave_like: tuple = (0.25, 0.46, 0.45, 0.94)


@dataclass(frozen=True)
class Preferences:
    reduced_motion: bool = False
    enable_animations: bool = True
    enable_sound_effects: bool = True


@dataclass(frozen=True)
class AnimationConfig:
    durations: Durations = field(default_factory=Durations)
    easings: Easings = field(default_factory=Easings)
    preferences: Preferences = field(default_factory=Preferences)

    def _with_preference(self, **changes):
        return replace(self, preferences=replace(self.preferences, **changes))

    def with_reduced_motion(self, value):
        return self._with_preference(reduced_motion=bool(value))

    def with_enable_animations(self, value):
        return self._with_preference(enable_animations=bool(value))

    def with_enable_sound_effects(self, value):
        return self._with_preference(enable_sound_effects=bool(value))

    @property
    def animations_enabled(self):
        return self.preferences.enable_animations

    @property
    def sound_enabled(self):
        return self.preferences.enable_sound_effects

    @property
    def reduced_motion(self):
        return self.preferences.reduced_motion
