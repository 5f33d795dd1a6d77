"""
Interactive Pygame Viewer for the Water Ripple Background

Hosts the ripple effect the way a page hosts its animated background:
mounts the scheduler on a canvas, feeds it pointer and click events, and
shows a static backdrop whenever the effect is not running.

Controls:
  SPACE       Pause / Resume
  C           Calm the water (clear grid)
  TAB         Toggle control panel
  H           Toggle HUD overlay
  M           Mute / unmute sound
  S           Save screenshot
  1-9         Select preset
  Q / ESC     Quit
  Mouse move  Trail of small ripples
  Mouse L     Splash (ignored on panel buttons and sliders)
"""

import os
import time
import numpy as np
import pygame

from .config import AnimationConfig
from .controls import ControlPanel, THEME
from .grid import GRID_SIZE
from .presets import PRESET_ORDER, DEFAULT_PRESET, get_preset
from .renderer import paint_fallback
from .scheduler import RippleScheduler, CANVAS
from .sound import SoundBoard
from .timers import TimerQueue


PANEL_WIDTH = 240
PANEL_MARGIN = 16


class Viewer:
    def __init__(self, width=900, height=600, grid_size=GRID_SIZE,
                 start_preset=DEFAULT_PRESET, config=None, muted=False,
                 timers=None):
        self.canvas_w = width
        self.canvas_h = height
        self.grid_size = grid_size
        self.config = config or AnimationConfig()
        self.start_muted = muted
        self.panel_visible = True
        self.show_hud = True
        self.show_rings = False
        self.running = True
        self.paused = False
        self.fps_history = []

        self.preset_key = start_preset
        preset = get_preset(start_preset) or get_preset(DEFAULT_PRESET)
        self.color = preset["color"]
        self.damping = preset["damping"]
        self.ambient_frequency = preset["ambient_frequency"]

        self.timers = timers if timers is not None else TimerQueue()
        self.sound = None       # Created in run(), after pygame.init
        self.scheduler = None
        self.canvas = None
        self.panel = None

    # ── Scheduler lifecycle ───────────────────────────────────────────

    def _mount(self):
        """Replace the scheduler with a fresh one on the current canvas."""
        if self.scheduler is not None:
            self.scheduler.dispose()
        self.scheduler = RippleScheduler(
            self.timers,
            config=self.config,
            sound=self.sound,
            color=self.color,
            damping=self.damping,
            ambient_frequency=self.ambient_frequency,
            grid_size=self.grid_size,
            show_rings=self.show_rings,
        )
        self.scheduler.paused = self.paused
        if not self.scheduler.mount(self.canvas):
            print("[ripples] Animations off, showing static background")

    def _set_config(self, config):
        was_enabled = self.config.animations_enabled
        self.config = config
        if config.animations_enabled and not was_enabled:
            self._mount()
        else:
            self.scheduler.update_config(config)

    # ── Panel ─────────────────────────────────────────────────────────

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w - PANEL_WIDTH - PANEL_MARGIN,
                             PANEL_MARGIN, PANEL_WIDTH, 0)

        panel.add_section("PRESET")
        labels = [get_preset(k)["name"] for k in PRESET_ORDER]
        selected = PRESET_ORDER.index(self.preset_key) if self.preset_key in PRESET_ORDER else 0
        self.preset_buttons = panel.add_button_row(labels, selected, self._on_preset_select)

        panel.add_section("WATER")
        self.damping_slider = panel.add_slider(
            "Damping", 0.90, 0.995, self.damping, fmt=".3f",
            on_change=self._on_damping_change)
        self.frequency_slider = panel.add_slider(
            "Ambient interval (ms)", 300, 10000, self.ambient_frequency, fmt=".0f",
            step=100, on_change=self._on_frequency_change)

        panel.add_section("PREFERENCES")
        self.anim_button = panel.add_button(
            "Animations", self._on_toggle_animations,
            active=self.config.animations_enabled)
        self.motion_button = panel.add_button(
            "Reduced motion", self._on_toggle_reduced_motion,
            active=self.config.reduced_motion)
        self.sound_button = panel.add_button(
            "Sound effects", self._on_toggle_sound,
            active=self.config.sound_enabled and not self.sound.muted)
        self.rings_button = panel.add_button(
            "Ripple rings", self._on_toggle_rings, active=self.show_rings)

        panel.fit_height()
        self.panel = panel

    def _on_preset_select(self, idx):
        self._apply_preset(PRESET_ORDER[idx])

    def _apply_preset(self, key):
        preset = get_preset(key)
        if not preset:
            return
        self.preset_key = key
        self.color = preset["color"]
        self.damping = preset["damping"]
        self.ambient_frequency = preset["ambient_frequency"]
        if self.panel:
            self.damping_slider.set_value(self.damping)
            self.frequency_slider.set_value(self.ambient_frequency)
            self.preset_buttons.set_selected(PRESET_ORDER.index(key))
        # New color and physics: remount, like the page re-running its effect
        self._mount()

    def _on_damping_change(self, val):
        self.damping = val
        self.scheduler.set_damping(val)

    def _on_frequency_change(self, val):
        self.ambient_frequency = val
        self.scheduler.set_ambient_frequency(val)

    def _on_toggle_animations(self):
        self._set_config(self.config.with_enable_animations(not self.config.animations_enabled))
        self.anim_button.active = self.config.animations_enabled

    def _on_toggle_reduced_motion(self):
        self._set_config(self.config.with_reduced_motion(not self.config.reduced_motion))
        self.motion_button.active = self.config.reduced_motion

    def _on_toggle_sound(self):
        self._set_config(self.config.with_enable_sound_effects(not self.config.sound_enabled))
        if self.config.sound_enabled and self.sound.muted:
            self.sound.toggle_mute()
        self.sound_button.active = self.config.sound_enabled and not self.sound.muted

    def _on_toggle_rings(self):
        self.show_rings = not self.show_rings
        self.scheduler.show_rings = self.show_rings
        self.rings_button.active = self.show_rings

    # ── Drawing ───────────────────────────────────────────────────────

    def _paint_backdrop(self):
        """Static background whenever the effect is not running."""
        if self.scheduler is None or not self.scheduler.running:
            paint_fallback(self.canvas, self.color)

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return

        stats = self.scheduler.stats
        preset = get_preset(self.preset_key)
        line = (f"{preset['name']}  |  {stats['state']}  |  "
                f"Ripples: {stats['ripples']}  |  Peak: {stats['max']:.1f}  |  "
                f"{self.grid_size}x{self.grid_size}  |  FPS: {fps:.0f}")
        if self.paused:
            line = "[PAUSED]  " + line

        bg_surface = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 120))
        screen.blit(bg_surface, (0, self.canvas_h - 24))

        text_surface = self.hud_font.render(line, True, (215, 230, 240))
        screen.blit(text_surface, (10, self.canvas_h - 19))

    def _save_screenshot(self, screen):
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
        os.makedirs(screenshots_dir, exist_ok=True)
        timestamp = time.strftime("%Y%m%d_%H%M%S")
        path = os.path.join(screenshots_dir, f"ripples_{self.preset_key}_{timestamp}.png")
        pygame.image.save(screen, path)
        print(f"Screenshot saved: {path}")

    # ── Events ────────────────────────────────────────────────────────

    def _handle_resize(self, width, height):
        self.canvas_w, self.canvas_h = max(width, 1), max(height, 1)
        screen = pygame.display.set_mode((self.canvas_w, self.canvas_h), pygame.RESIZABLE)
        self.canvas = pygame.Surface((self.canvas_w, self.canvas_h))
        self.scheduler.resize(self.canvas_w, self.canvas_h, self.canvas)
        if self.panel:
            self.panel.x = self.canvas_w - PANEL_WIDTH - PANEL_MARGIN
        return screen

    def _handle_mouse(self, event):
        panel_open = self.panel_visible and self.panel is not None
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            target = (self.panel.element_at(event.pos) if panel_open else None) or CANVAS
            self.scheduler.on_click(event.pos[0], event.pos[1], target)
        elif event.type == pygame.MOUSEMOTION:
            if not (panel_open and self.panel.dragging):
                self.scheduler.on_pointer_move(event.pos[0], event.pos[1])
        if panel_open:
            self.panel.handle_event(event)

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self.paused = not self.paused
            self.scheduler.paused = self.paused

        elif key == pygame.K_c:
            self.scheduler.clear()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible

        elif key == pygame.K_m:
            self.sound.toggle_mute()
            self.sound_button.active = self.config.sound_enabled and not self.sound.muted

        elif key == pygame.K_s:
            self._save_screenshot(screen)

        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self._apply_preset(PRESET_ORDER[idx])

    # ── Main loop ─────────────────────────────────────────────────────

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.canvas_w, self.canvas_h), pygame.RESIZABLE)
        pygame.display.set_caption("Water Ripples")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)

        self.sound = SoundBoard(muted=self.start_muted)
        self.sound.preload()
        self.canvas = pygame.Surface((self.canvas_w, self.canvas_h))
        self._build_panel()
        self._mount()

        try:
            while self.running:
                frame_start = time.time()

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                        continue
                    if event.type == pygame.KEYDOWN:
                        self._handle_keydown(event, screen)
                        continue
                    if event.type == pygame.VIDEORESIZE:
                        screen = self._handle_resize(event.w, event.h)
                        continue
                    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP,
                                      pygame.MOUSEMOTION):
                        self._handle_mouse(event)

                # Timers first so an ambient drop shows up in this frame
                self.timers.run_due()
                self.timers.run_frame()

                self._paint_backdrop()

                screen.fill(THEME["bg"])
                screen.blit(self.canvas, (0, 0))

                frame_time = time.time() - frame_start
                self.fps_history.append(frame_time)
                if len(self.fps_history) > 30:
                    self.fps_history.pop(0)
                avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)

                self._draw_hud(screen, avg_fps)

                if self.panel_visible and self.panel:
                    self.panel.draw(screen, self.panel_font)

                pygame.display.flip()
                clock.tick(60)
        finally:
            self.scheduler.dispose()
            pygame.quit()
