"""CHIP-8 interpreter package."""

from chipjax.state import EmulatorState, create_state, uniform_byte
from chipjax.emulator import execute, fetch, step, tick_timers
from chipjax.decode import DecodedInstruction, decode
from chipjax.memory import read_u8, read_u16, write_u8, write_u16, load_program, load_rom
from chipjax.keypad import press_key, release_key, set_key
from chipjax.instructions.display import signal_frame
from chipjax.engine import Engine, EngineConfig
from chipjax.errors import (
    Chip8Error, RomLoadError, RomTooLargeError, StackUnderflowError, StackOverflowError, MachineHaltedError,
)
from chipjax.constants import *
from chipjax.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "create_state",
    "uniform_byte",
    "fetch",
    "execute",
    "step",
    "tick_timers",
    "signal_frame",
    "load_program",
    "load_rom",
    "read_u8",
    "read_u16",
    "write_u8",
    "write_u16",
    "press_key",
    "release_key",
    "set_key",
    "DecodedInstruction",
    "decode",
    "Engine",
    "EngineConfig",
    "Chip8Error",
    "RomLoadError",
    "RomTooLargeError",
    "StackUnderflowError",
    "StackOverflowError",
    "MachineHaltedError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
