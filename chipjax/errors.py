"""Exceptions raised by the CHIP-8 engine."""


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class RomLoadError(Chip8Error):
    """Program image could not be read."""


class RomTooLargeError(RomLoadError):
    """Program image does not fit between 0x200 and the end of memory."""

    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM of {size} bytes exceeds the {capacity} bytes available from 0x200")
        self.size = size
        self.capacity = capacity


class StackUnderflowError(Chip8Error):
    """00EE executed with an empty call stack."""

    def __init__(self, pc: int):
        super().__init__(f"Return with empty call stack at 0x{pc:03X}")
        self.pc = pc


class StackOverflowError(Chip8Error):
    """2NNN executed with a full call stack."""

    def __init__(self, pc: int, depth: int):
        super().__init__(f"Call stack overflow (depth {depth}) at 0x{pc:03X}")
        self.pc = pc
        self.depth = depth


class MachineHaltedError(Chip8Error):
    """Engine was stepped after a fatal fault without reloading a program."""
