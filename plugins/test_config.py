#!/usr/bin/env python3
"""
Tests for configuration, presets and the sound board.
"""

import contextlib
import dataclasses
import io

import numpy as np
import pygame

from water_ripples.config import AnimationConfig
from water_ripples.presets import PRESETS, PRESET_ORDER, get_preset, list_presets
from water_ripples.sound import SoundBoard, SOUND_IDS, synthesize


class FakeSound:
    def __init__(self, fail=False):
        self.fail = fail
        self.volume = None
        self.plays = 0

    def set_volume(self, volume):
        self.volume = volume

    def play(self):
        if self.fail:
            raise pygame.error("device busy")
        self.plays += 1


def test_config_defaults_and_setters():
    print("Testing AnimationConfig...")
    config = AnimationConfig()
    assert config.animations_enabled
    assert config.sound_enabled
    assert not config.reduced_motion
    assert config.durations.fast == 0.2 and config.durations.slow == 0.7
    assert config.easings.ease_in_out == (0.04, 0.62, 0.23, 0.98)

    off = config.with_enable_animations(False)
    assert not off.animations_enabled
    assert config.animations_enabled, "Setters must not mutate the original"
    assert off.durations is config.durations

    calm = off.with_reduced_motion(True).with_enable_sound_effects(False)
    assert calm.reduced_motion and not calm.sound_enabled and not calm.animations_enabled

    try:
        config.preferences.enable_animations = False
    except dataclasses.FrozenInstanceError:
        pass
    else:
        raise AssertionError("Preferences should be frozen")
    print("  ✓ immutable config, setters return new versions")


def test_presets():
    print("Testing presets...")
    assert set(PRESET_ORDER) == set(PRESETS)
    lagoon = get_preset("lagoon")
    assert lagoon["color"] == "#1A9EE2"
    assert lagoon["damping"] == 0.97
    assert lagoon["ambient_frequency"] == 3000
    assert get_preset("nope") is None
    for key, preset in PRESETS.items():
        assert 0.0 < preset["damping"] < 1.0, key
        assert preset["ambient_frequency"] > 0, key
    assert [k for k, _, _ in list_presets()] == PRESET_ORDER
    print("  ✓ presets well-formed")


def test_synthesize():
    for sound_id in SOUND_IDS:
        samples = synthesize(sound_id)
        assert samples.ndim == 1 and len(samples) > 1000
        assert np.all(np.isfinite(samples))
        assert np.abs(samples).max() <= 0.8 + 1e-9
    try:
        synthesize("bell")
    except KeyError:
        pass
    else:
        raise AssertionError("Unknown sound should raise KeyError")


def test_sound_board_without_mixer():
    print("Testing SoundBoard fallback...")
    board = SoundBoard(use_mixer=False)
    assert not board.mixer_ready

    with contextlib.redirect_stdout(io.StringIO()) as out:
        board.play("hover")
        board.play("bell")
        board.toggle_mute()
        board.play("buttonClick")
    text = out.getvalue()
    assert "[Sound Effect] Playing: hover" in text
    assert "Unknown sound id: 'bell'" in text
    assert "buttonClick" not in text
    print("  ✓ logs effects when no mixer, silent when muted")


def test_sound_board_playback_errors():
    print("Testing SoundBoard error handling...")
    board = SoundBoard(volume=2.0, use_mixer=False)
    assert board.volume == 1.0
    board.mixer_ready = True
    good, bad = FakeSound(), FakeSound(fail=True)
    board._sounds = {"hover": good, "buttonClick": bad}

    board.set_volume(0.25)
    assert good.volume == 0.25

    board.play("hover")
    assert good.plays == 1
    with contextlib.redirect_stdout(io.StringIO()) as out:
        board.play("buttonClick")
    assert "Error playing sound buttonClick" in out.getvalue()
    print("  ✓ pygame errors caught and logged")


if __name__ == "__main__":
    print("\n=== Testing Config, Presets and Sound ===\n")

    test_config_defaults_and_setters()
    test_presets()
    test_synthesize()
    test_sound_board_without_mixer()
    test_sound_board_playback_errors()

    print("\n✓ All tests passed!\n")
