"""
Water Ripple Viewer - Entry Point

Usage:
    python -m water_ripples [preset] [--window WxH] [--grid N] [options]

Examples:
    python -m water_ripples
    python -m water_ripples deep_sea
    python -m water_ripples rain --window 1280x720
    python -m water_ripples reef --snap 240

Options:
    --window WxH       Window size in pixels (default 900x600)
    --grid N           Simulation grid resolution (default 64)
    --snap N           Headless: run N frames, save a PNG, exit
    --no-animations    Start with animations disabled (static background)
    --reduced-motion   No ambient ripples, pointer ripples only
    --mute             Start with sound muted
    --list             List presets

Use --list to see all available presets.
"""

import os
import sys

from .config import AnimationConfig
from .grid import GRID_SIZE
from .presets import PRESET_ORDER, DEFAULT_PRESET, get_preset, list_presets


def snap(preset, width, height, grid_size, frames, config, screenshots_dir=None):
    """Headless mode: run N frames on a manual clock, save screenshot, exit.

    Returns the paths written, one per preset.
    """
    import numpy as np
    import pygame
    from PIL import Image

    from .injector import FRAME_MS
    from .renderer import paint_fallback
    from .scheduler import RippleScheduler
    from .timers import ManualClock, TimerQueue

    if screenshots_dir is None:
        screenshots_dir = os.path.join(
            os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
            "screenshots"
        )
    os.makedirs(screenshots_dir, exist_ok=True)

    paths = []
    presets_to_snap = [preset] if preset != "all" else PRESET_ORDER

    for pkey in presets_to_snap:
        p = get_preset(pkey)
        timers = TimerQueue(ManualClock())
        surface = pygame.Surface((width, height))
        scheduler = RippleScheduler(
            timers, config=config, color=p["color"], damping=p["damping"],
            ambient_frequency=p["ambient_frequency"], grid_size=grid_size, seed=0,
        )

        print(f"  {pkey}: running {frames} frames...", end="", flush=True)
        if scheduler.mount(surface):
            scheduler.on_click(width / 2, height / 2)
            timers.advance(frames * FRAME_MS, frame_ms=FRAME_MS)
            scheduler.dispose()
        else:
            paint_fallback(surface, p["color"])

        rgb = np.ascontiguousarray(pygame.surfarray.array3d(surface).swapaxes(0, 1))
        img = Image.fromarray(rgb)
        path = os.path.join(screenshots_dir, f"ripples_{pkey}.png")
        img.save(path)
        img.save(os.path.join(screenshots_dir, "latest.png"))
        print(f" saved: {path}")
        paths.append(path)

    return paths


def main():
    preset = DEFAULT_PRESET
    grid_size = GRID_SIZE
    win_w, win_h = 900, 600
    snap_frames = 0
    config = AnimationConfig()
    muted = False

    args = sys.argv[1:]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--grid" and i + 1 < len(args):
            grid_size = int(args[i + 1])
            i += 2
        elif arg == "--window" and i + 1 < len(args):
            parts = args[i + 1].split("x")
            win_w, win_h = int(parts[0]), int(parts[1])
            i += 2
        elif arg == "--snap" and i + 1 < len(args):
            snap_frames = int(args[i + 1])
            i += 2
        elif arg == "--no-animations":
            config = config.with_enable_animations(False)
            i += 1
        elif arg == "--reduced-motion":
            config = config.with_reduced_motion(True)
            i += 1
        elif arg == "--mute":
            muted = True
            i += 1
        elif arg == "--list":
            print("\nAvailable presets:\n")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:12s} {desc}")
            print()
            return
        elif arg in ("--help", "-h"):
            print(__doc__)
            return
        elif arg in PRESET_ORDER or arg == "all":
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print(f"Use --list to see available presets")
            return

    if snap_frames > 0:
        print(f"Headless snap mode: {preset} @ {win_w}x{win_h}, {snap_frames} frames")
        snap(preset, win_w, win_h, grid_size, snap_frames, config)
        return

    if preset == "all":
        preset = DEFAULT_PRESET

    from .viewer import Viewer

    print(f"Starting Water Ripple Viewer")
    print(f"  Preset: {preset}")
    print(f"  Grid: {grid_size}x{grid_size}")
    print(f"  Window: {win_w}x{win_h}")
    print()

    viewer = Viewer(
        width=win_w,
        height=win_h,
        grid_size=grid_size,
        start_preset=preset,
        config=config,
        muted=muted,
    )
    viewer.run()


if __name__ == "__main__":
    main()
