"""
Event Scheduler for the water ripple background

Owns the per-frame loop and the ambient ripple timer, and routes pointer
and click events into the Ripple Injector. Lifecycle:

    IDLE --mount()--> RUNNING --dispose()--> DISPOSED

mount() refuses to start when animations are disabled or there is no
surface to draw on; the host then shows a static fallback instead.
Everything runs on the host's single UI loop, so callbacks never overlap.
"""

import enum
import math
import numpy as np
import pygame

from .config import AnimationConfig
from .grid import GridBuffers, GRID_SIZE
from .injector import RippleInjector, FRAME_MS
from .propagator import WavePropagator, DEFAULT_DAMPING
from .renderer import Renderer
from .colors import DEFAULT_COLOR


DEFAULT_AMBIENT_FREQUENCY = 3000  # ms, mean gap between ambient ripples
MOVE_THRESHOLD = 5.0              # px of pointer travel per ripple

MOVE_RIPPLE = (1.0, 800.0)        # (strength, lifetime ms)
CLICK_RIPPLE = (5.0, 1500.0)
AMBIENT_SOUND_CHANCE = 0.3

INTERACTIVE_TAGS = {"BUTTON", "A", "INPUT"}


class State(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    DISPOSED = "disposed"


class Target:
    """Minimal element description for click targets.

    Hosts describe what sits under the pointer: the canvas itself, or one
    of their own controls, optionally nested in a parent.
    """

    def __init__(self, tag, role=None, parent=None):
        self.tag = tag.upper()
        self.role = role
        self.parent = parent

    def closest_role(self, role):
        node = self
        while node is not None:
            if node.role == role:
                return node
            node = node.parent
        return None

    def __repr__(self):
        return f"Target({self.tag!r}, role={self.role!r})"


CANVAS = Target("CANVAS")


def is_interactive(target):
    """True for buttons, links, inputs and anything inside role=button."""
    if target is None:
        return False
    if target.tag in INTERACTIVE_TAGS:
        return True
    return target.closest_role("button") is not None


class RippleScheduler:

    def __init__(self, timers, config=None, sound=None, color=DEFAULT_COLOR,
                 damping=DEFAULT_DAMPING, ambient_frequency=DEFAULT_AMBIENT_FREQUENCY,
                 grid_size=GRID_SIZE, seed=None, show_rings=False):
        """
        Args:
            timers: TimerQueue providing frames and timeouts
            config: AnimationConfig (defaults to everything enabled)
            sound: Collaborator with play(sound_id), or None
            color: Base water color '#RRGGBB'
            damping: Wave damping in (0, 1)
            ambient_frequency: Mean ambient ripple interval in ms
            grid_size: Simulation grid resolution N
            seed: RNG seed for ambient ripples
            show_rings: Overlay expanding rings for live ripples
        """
        self.timers = timers
        self.config = config or AnimationConfig()
        self.sound = sound
        self.ambient_frequency = ambient_frequency
        self.show_rings = show_rings
        self.rng = np.random.default_rng(seed)

        self.buffers = GridBuffers(grid_size)
        self.propagator = WavePropagator(damping)
        self.injector = RippleInjector(self.buffers)
        self.renderer = Renderer(color)

        self.state = State.IDLE
        self.paused = False
        self.surface = None
        self.frames = 0
        self._frame_handle = None
        self._ambient_handle = None
        self._last_pointer = None

    # ── Lifecycle ─────────────────────────────────────────────────────

    @property
    def running(self):
        return self.state is State.RUNNING

    @property
    def disposed(self):
        return self.state is State.DISPOSED

    def mount(self, surface):
        """Start the effect on a surface. Returns True if it is running."""
        if self.state is not State.IDLE:
            return self.running
        if not self.config.animations_enabled or surface is None:
            return False
        try:
            width, height = surface.get_size()
        except pygame.error as e:
            print(f"[ripples] No drawing surface, staying idle: {e}")
            return False
        if width <= 0 or height <= 0:
            return False

        self.surface = surface
        self.buffers.resize(width, height)
        self.state = State.RUNNING
        self._animate()
        if not self.config.reduced_motion:
            self._ambient_ripple()
        return True

    def dispose(self):
        """Stop the frame loop and all pending timers."""
        if self.state is State.DISPOSED:
            return
        self.timers.cancel(self._frame_handle)
        self.timers.cancel(self._ambient_handle)
        self._frame_handle = None
        self._ambient_handle = None
        self.state = State.DISPOSED
        self.injector.clear()
        self.surface = None

    def resize(self, width, height, surface=None):
        """Adopt a new drawing size, optionally on a new surface. The water goes flat."""
        if not self.running or width <= 0 or height <= 0:
            return
        if surface is not None:
            self.surface = surface
        self.buffers.resize(width, height)
        self._last_pointer = None

    def update_config(self, config):
        """Adopt a new AnimationConfig version."""
        self.config = config
        if not self.running:
            return
        if not config.animations_enabled:
            self.dispose()
        elif config.reduced_motion:
            self.timers.cancel(self._ambient_handle)
            self._ambient_handle = None
        elif self._ambient_handle is None:
            self._schedule_ambient()

    # ── Parameters ────────────────────────────────────────────────────

    def set_damping(self, damping):
        self.propagator.damping = damping

    def set_ambient_frequency(self, frequency):
        self.ambient_frequency = max(1.0, float(frequency))

    def set_color(self, color):
        self.renderer.set_color(color)

    def clear(self):
        self.buffers.clear()
        self.injector.clear()

    # ── Frame loop ────────────────────────────────────────────────────

    def _animate(self):
        if not self.running:
            return
        if not self.paused:
            self.propagator.step(self.buffers)
            self.injector.age_ripples(FRAME_MS)
        self.renderer.paint(self.surface, self.buffers.read())
        if self.show_rings:
            self.renderer.draw_rings(self.surface, self.injector.ripples)
        self.frames += 1
        self._frame_handle = self.timers.request_frame(self._animate)

    def _schedule_ambient(self):
        delay = self.ambient_frequency * (0.5 + self.rng.random())
        self._ambient_handle = self.timers.call_later(delay, self._ambient_ripple)

    def _ambient_ripple(self):
        if not self.running:
            return
        width, height = self.buffers.surface_size
        x = self.rng.random() * width
        y = self.rng.random() * height
        strength = 0.5 + self.rng.random() * 1.5
        lifetime = 1500.0 + self.rng.random() * 1000.0
        self.injector.inject(x, y, strength, lifetime)

        if self.rng.random() < AMBIENT_SOUND_CHANCE:
            self._play("hover")

        self._schedule_ambient()

    # ── Input ─────────────────────────────────────────────────────────

    def on_pointer_move(self, x, y):
        """Ripple behind the pointer, one per 5 px of travel."""
        if not self.running:
            return None
        if self._last_pointer is None:
            self._last_pointer = (x, y)
            return None
        lx, ly = self._last_pointer
        if math.hypot(x - lx, y - ly) <= MOVE_THRESHOLD:
            return None
        self._last_pointer = (x, y)
        return self.injector.inject(x, y, *MOVE_RIPPLE)

    def on_click(self, x, y, target=CANVAS):
        """Big splash, unless the click landed on a real control."""
        if not self.running or is_interactive(target):
            return None
        ripple = self.injector.inject(x, y, *CLICK_RIPPLE)
        self._play("buttonClick")
        return ripple

    def _play(self, sound_id):
        if self.sound is None or not self.config.sound_enabled:
            return
        try:
            self.sound.play(sound_id)
        except Exception as e:
            print(f"[ripples] Sound {sound_id} failed: {e}")

    @property
    def stats(self):
        stats = self.buffers.stats
        stats.update({
            "state": self.state.value,
            "frames": self.frames,
            "ripples": len(self.injector.ripples),
        })
        return stats
