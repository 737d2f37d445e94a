# Delay and sound timers.
# Both count down by one at 60 Hz of wall-clock time, independent of how fast
# the CPU is being cycled. The gate compares against a monotonic clock and never
# sleeps: cycles that arrive too early simply skip the countdown.

import logging
import time

from .config import TIMER_HZ

logger = logging.getLogger(__name__)


class NullAudio:
    """Audio capability that makes no sound."""

    def start(self):
        pass

    def stop(self):
        pass


class Timers:

    def __init__(self, clock=None, audio=None, hz=TIMER_HZ):
        self.clock = clock or time.monotonic
        self.audio = audio or NullAudio()
        self.period = 1.0 / hz
        self.delay = 0
        self.sound = 0
        self._next_tick = None   # first update always ticks

    def update(self):
        """Count down once if a timer period has elapsed. Returns True if it ticked."""
        now = self.clock()
        if self._next_tick is not None and now < self._next_tick:
            return False
        self._next_tick = now + self.period
        self.tick()
        return True

    def tick(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

        # sound timer state after the countdown drives the tone
        if self.sound > 0:
            self.audio.start()
        else:
            self.audio.stop()
