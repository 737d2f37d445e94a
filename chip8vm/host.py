# pyglet-backed collaborators for a CHIP-8 machine.
# Keypad - handles a window's key events (push it onto the caller's window with
#          window.push_handlers(keypad)) and answers the VM's key reads.
# Beeper - starts and stops a looping sine tone for the sound timer.
# Runner - schedules VM cycles on the pyglet clock.
# The window, its drawing and ROM loading stay with the caller.

import logging

import pyglet

from .config import BEEP_DURATION, BEEP_FREQUENCY, BEEP_SAMPLE_RATE, CPU_HZ
from .errors import Chip8Error

logger = logging.getLogger(__name__)


def default_keymap():
    """Physical keyboard keys to the CHIP-8 hex keypad.

    1 2 3 4      1 2 3 C
    Q W E R  ->  4 5 6 D
    A S D F      7 8 9 E
    Z X C V      A 0 B F
    """
    from pyglet.window import key

    return {
        key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
        key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
        key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
        key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
    }


class Keypad:

    def __init__(self, keymap=None):
        self.keymap = keymap if keymap is not None else default_keymap()
        self.keys = [0] * 16

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol in self.keymap:
            self.keys[self.keymap[symbol]] = 1
            logger.debug(f"Key {self.keymap[symbol]:X} pressed")

    def on_key_release(self, symbol, modifiers):
        if symbol in self.keymap:
            self.keys[self.keymap[symbol]] = 0

    def read(self):
        """Lowest pressed key, or 0 when nothing is pressed."""
        for i, state in enumerate(self.keys):
            if state:
                return i
        return 0

    __call__ = read


def generate_beep(duration=BEEP_DURATION, frequency=BEEP_FREQUENCY, sample_rate=BEEP_SAMPLE_RATE):
    from pyglet.media import synthesis

    wave = synthesis.Sine(duration=duration, frequency=frequency, sample_rate=sample_rate)
    return pyglet.media.StaticSource(wave)


class Beeper:
    """Audio capability: a looping tone while the sound timer is running."""

    def __init__(self, frequency=BEEP_FREQUENCY, duration=BEEP_DURATION):
        self.frequency = frequency
        self.duration = duration
        self.player = None
        self.sound_playing = False

    def _make_player(self):
        player = pyglet.media.Player()
        player.queue(generate_beep(duration=self.duration, frequency=self.frequency))
        player.loop = True
        return player

    def start(self):
        if self.sound_playing:
            return
        if self.player is None:
            self.player = self._make_player()
        self.player.play()
        self.sound_playing = True

    def stop(self):
        if not self.sound_playing:
            return
        self.player.pause()
        self.sound_playing = False

    def close(self):
        if self.player is not None:
            self.player.delete()
            self.player = None
        self.sound_playing = False


class Runner:
    """Cycles a VM from the pyglet clock until stopped or a fatal error.

    Each tick runs as many cycles as `cpu_hz` calls for over the elapsed
    time, at least one.
    """

    def __init__(self, vm, cpu_hz=CPU_HZ):
        self.vm = vm
        self.cpu_hz = cpu_hz
        self.error = None
        self.has_exit = False
        self.cycles_per_second = 0
        self._last_count = 0

    def start(self):
        self.has_exit = False
        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / self.cpu_hz)
        pyglet.clock.schedule_interval(self._update_cps, 1.0)

    def stop(self):
        pyglet.clock.unschedule(self._cpu_tick)
        pyglet.clock.unschedule(self._update_cps)
        self.has_exit = True

    def _cpu_tick(self, dt):
        if self.has_exit:
            return
        try:
            for _ in range(max(1, int(dt * self.cpu_hz))):
                self.vm.cycle()
        except Chip8Error as e:
            logger.error(f"Emulation error: {e}")
            self.error = e
            self.stop()

    def _update_cps(self, dt):
        count = self.vm.cycle_count
        self.cycles_per_second = count - self._last_count
        self._last_count = count
