import random

import pytest

from chip8vm import Chip8


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeAudio:
    def __init__(self):
        self.calls = []

    def start(self):
        self.calls.append("start")

    def stop(self):
        self.calls.append("stop")


class FixedKeypad:
    def __init__(self, key=0):
        self.key = key

    def __call__(self):
        return self.key


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def audio():
    return FakeAudio()


@pytest.fixture
def keypad():
    return FixedKeypad()


@pytest.fixture
def vm(clock, audio, keypad):
    return Chip8(clock=clock, rng=random.Random(1234), keypad=keypad, audio=audio)


def program(*words):
    """Assemble 16-bit words into big-endian bytes."""
    out = bytearray()
    for w in words:
        out += bytes([(w >> 8) & 0xFF, w & 0xFF])
    return bytes(out)
