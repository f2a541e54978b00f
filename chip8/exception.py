class Chip8Exception(Exception):
    """
    Base class for all errors raised by the emulator.
    """


class ProgramTooLargeException(Chip8Exception):
    """
    A class to raise when a program image does not fit in memory.
    """
    def __init__(self, size, offset, limit):
        Chip8Exception.__init__(
            self,
            "Program of {} bytes at {:03X} runs past end of memory ({:03X})".format(
                size, offset, limit - 1))
        self.size = size
        self.offset = offset


class InvalidKeyException(Chip8Exception):
    """
    A class to raise when a key outside of the 16 key keypad is used.
    """
    def __init__(self, key):
        Chip8Exception.__init__(self, "Invalid key: {!r}".format(key))
        self.key = key
