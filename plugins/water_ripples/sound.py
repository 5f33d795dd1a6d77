"""
Sound Effects

Named UI sound effects played through pygame.mixer. No asset files: each
effect is synthesized once with numpy and cached. When the mixer can't be
opened (no audio device, CI) the board only logs what it would have played.

Contract for callers: play(sound_id) plays the effect or silently does
nothing; it never raises.
"""

import numpy as np
import pygame


SAMPLE_RATE = 22050

SOUND_IDS = ("buttonClick", "hover", "success", "error", "notification")


def _envelope(n, attack=0.01, decay=6.0):
    t = np.linspace(0.0, 1.0, n, endpoint=False)
    env = np.exp(-decay * t)
    a = max(1, int(n * attack))
    env[:a] *= np.linspace(0.0, 1.0, a)
    return env


def _tone(freqs, seconds, decay=6.0):
    """Sine sweep through freqs (piecewise constant), decaying envelope."""
    n = int(SAMPLE_RATE * seconds)
    seg = n // len(freqs)
    f = np.repeat(np.asarray(freqs, dtype=np.float64), seg)
    f = np.pad(f, (0, n - len(f)), mode="edge")
    phase = 2.0 * np.pi * np.cumsum(f) / SAMPLE_RATE
    return np.sin(phase) * _envelope(n, decay=decay)


def _splash(seconds, rng, decay=9.0):
    """Low-passed noise burst with a short 'plop' underneath."""
    n = int(SAMPLE_RATE * seconds)
    noise = rng.standard_normal(n)
    kernel = np.ones(12) / 12.0
    noise = np.convolve(noise, kernel, mode="same")
    noise /= max(np.abs(noise).max(), 1e-9)
    plop = _tone([180.0, 140.0, 110.0], seconds, decay=14.0)
    return (0.7 * noise * _envelope(n, decay=decay) + 0.5 * plop)


def _swell(seconds, rng):
    """Soft rising and falling wash."""
    n = int(SAMPLE_RATE * seconds)
    noise = np.convolve(rng.standard_normal(n), np.ones(40) / 40.0, mode="same")
    noise /= max(np.abs(noise).max(), 1e-9)
    return noise * np.sin(np.linspace(0.0, np.pi, n)) * 0.5


def synthesize(sound_id, seed=7):
    """Return mono float samples in [-1, 1] for a sound id."""
    rng = np.random.default_rng(seed)
    if sound_id == "buttonClick":
        samples = _splash(0.35, rng)
    elif sound_id == "hover":
        samples = _swell(0.6, rng)
    elif sound_id == "success":
        samples = _tone([660.0, 880.0], 0.3, decay=4.0)
    elif sound_id == "error":
        samples = _tone([330.0, 220.0], 0.35, decay=4.0)
    elif sound_id == "notification":
        samples = _tone([880.0], 0.25, decay=8.0)
    else:
        raise KeyError(sound_id)
    peak = max(np.abs(samples).max(), 1e-9)
    return samples / peak * 0.8


class SoundBoard:
    """Mutable, volume-controlled player for the named effects."""

    def __init__(self, volume=0.5, muted=False, use_mixer=True):
        self.volume = max(0.0, min(1.0, volume))
        self.muted = muted
        self.mixer_ready = False
        self._sounds = {}
        if use_mixer:
            self._init_mixer()

    def _init_mixer(self):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            self.mixer_ready = True
        except pygame.error as e:
            print(f"[sound] Mixer unavailable, logging effects only: {e}")
            self.mixer_ready = False

    def _load(self, sound_id):
        sound = self._sounds.get(sound_id)
        if sound is None:
            freq, _size, channels = pygame.mixer.get_init()
            samples = synthesize(sound_id)
            if freq != SAMPLE_RATE:
                # Resample by index so pitch and length stay right
                idx = np.arange(0, len(samples), SAMPLE_RATE / freq)
                samples = samples[idx.astype(np.int64)]
            pcm = (samples * 32767).astype(np.int16)
            if channels > 1:
                pcm = np.repeat(pcm, channels)
            sound = pygame.mixer.Sound(buffer=pcm.tobytes())
            self._sounds[sound_id] = sound
        return sound

    def play(self, sound_id):
        """Play a named effect. No-op when muted."""
        if self.muted:
            return
        if sound_id not in SOUND_IDS:
            print(f"[sound] Unknown sound id: {sound_id!r}")
            return
        if not self.mixer_ready:
            print(f"[Sound Effect] Playing: {sound_id}")
            return
        try:
            sound = self._load(sound_id)
            sound.set_volume(self.volume)
            sound.play()
        except pygame.error as e:
            print(f"[sound] Error playing sound {sound_id}: {e}")

    def toggle_mute(self):
        self.muted = not self.muted
        if self.muted and self.mixer_ready:
            pygame.mixer.stop()
        return self.muted

    def set_volume(self, volume):
        self.volume = max(0.0, min(1.0, volume))
        for sound in self._sounds.values():
            sound.set_volume(self.volume)

    def preload(self):
        """Synthesize every effect up front so the first play isn't late."""
        if not self.mixer_ready:
            return
        for sound_id in SOUND_IDS:
            try:
                self._load(sound_id)
            except pygame.error as e:
                print(f"[sound] Could not preload {sound_id}: {e}")
