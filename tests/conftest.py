import os

import pytest

# Run pygame headless
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from chip8.cpu import CPU, PROGRAM_COUNTER_START


class FakeSound(object):
    """Counts make_sound calls."""

    def __init__(self):
        self.count = 0

    def make_sound(self):
        self.count += 1


@pytest.fixture
def sound():
    return FakeSound()


@pytest.fixture
def cpu(sound):
    return CPU(sound)


@pytest.fixture
def load(cpu):
    """Returns a function that writes instruction words at the program start."""
    def _load(*words):
        program = bytearray()
        for word in words:
            program += bytes([word >> 8, word & 0xFF])
        cpu.cpu_load_program(program)
        return PROGRAM_COUNTER_START + len(program)
    return _load
