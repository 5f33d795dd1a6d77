"""
Timer queue for the frame loop and ambient timers

Plays the part of requestAnimationFrame / setTimeout for a host that pumps
it from its own loop: run_due() fires expired timers, run_frame() fires the
frame callbacks requested before the call. Time is in milliseconds from an
injectable clock.
"""

import heapq
import itertools
import time


def _monotonic_ms():
    return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to (tests, headless snapshots)."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class Handle:
    __slots__ = ("id", "kind", "callback", "due", "cancelled")

    def __init__(self, id, kind, callback, due=None):
        self.id = id
        self.kind = kind
        self.callback = callback
        self.due = due
        self.cancelled = False


class TimerQueue:

    def __init__(self, clock=None):
        self.clock = clock or _monotonic_ms
        self._ids = itertools.count(1)
        self._timers = []   # heap of (due, id, handle)
        self._frames = []   # handles awaiting the next frame

    def now(self):
        return self.clock()

    def call_later(self, delay_ms, callback):
        """Run callback once, delay_ms from now. Returns a cancellable handle."""
        handle = Handle(next(self._ids), "timer", callback, self.clock() + max(0.0, delay_ms))
        heapq.heappush(self._timers, (handle.due, handle.id, handle))
        return handle

    def request_frame(self, callback):
        """Run callback on the next run_frame(). Returns a cancellable handle."""
        handle = Handle(next(self._ids), "frame", callback)
        self._frames.append(handle)
        return handle

    def cancel(self, handle):
        if handle is not None:
            handle.cancelled = True

    def run_due(self):
        """Fire every timer whose due time has passed. Returns count fired."""
        fired = 0
        now = self.clock()
        while self._timers and self._timers[0][0] <= now:
            _, _, handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
        return fired

    def run_frame(self):
        """Fire the frame callbacks requested so far.

        Callbacks that request another frame are queued for the next call.
        """
        frames, self._frames = self._frames, []
        fired = 0
        for handle in frames:
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
        return fired

    def pending(self):
        """Return (timers, frames) still waiting to fire."""
        timers = sum(1 for _, _, h in self._timers if not h.cancelled)
        frames = sum(1 for h in self._frames if not h.cancelled)
        return timers, frames

    def advance(self, ms, frame_ms=None):
        """Step a ManualClock forward, firing timers and frames on the way.

        Args:
            ms: Total time to advance
            frame_ms: Frame interval; None fires only timers
        """
        if not isinstance(self.clock, ManualClock):
            raise TypeError("advance() needs a ManualClock")
        step = frame_ms or ms
        elapsed = 0.0
        while elapsed < ms:
            dt = min(step, ms - elapsed)
            self.clock.advance(dt)
            elapsed += dt
            self.run_due()
            if frame_ms:
                self.run_frame()
