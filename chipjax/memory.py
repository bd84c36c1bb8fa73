"""Byte-addressed memory access and program loading."""

import jax.numpy as jnp
import numpy as np

from chipjax.constants import ADDRESS_MASK, MEMORY_SIZE, PROGRAM_START
from chipjax.errors import RomLoadError, RomTooLargeError
from chipjax.state import EmulatorState

PROGRAM_CAPACITY = MEMORY_SIZE - PROGRAM_START


def read_u8(memory: jnp.ndarray, address) -> jnp.ndarray:
    """Read one byte; the address is masked to 12 bits."""
    return memory[jnp.asarray(address, dtype=jnp.int32) & ADDRESS_MASK]


def read_u16(memory: jnp.ndarray, address) -> jnp.ndarray:
    """Read a big-endian 16-bit word from ``address`` and ``address + 1``."""
    address = jnp.asarray(address, dtype=jnp.int32)
    high = read_u8(memory, address).astype(jnp.uint16)
    low = read_u8(memory, address + 1).astype(jnp.uint16)
    return (high << 8) | low


def write_u8(memory: jnp.ndarray, address, value) -> jnp.ndarray:
    """Write one byte; the address is masked to 12 bits and the value to 8."""
    address = jnp.asarray(address, dtype=jnp.int32) & ADDRESS_MASK
    value = jnp.asarray(value, dtype=jnp.int32) & 0xFF
    return memory.at[address].set(value.astype(jnp.uint8))


def write_u16(memory: jnp.ndarray, address, value) -> jnp.ndarray:
    """Write a 16-bit word as two bytes: low byte at ``address``, then high byte at ``address + 1``.

    This is deliberately not the mirror of :func:`read_u16`, which reads big-endian.
    """
    address = jnp.asarray(address, dtype=jnp.int32)
    value = jnp.asarray(value, dtype=jnp.int32)
    memory = write_u8(memory, address, value & 0xFF)
    return write_u8(memory, address + 1, (value >> 8) & 0xFF)


def as_rom_array(data) -> np.ndarray:
    """Convert a program image to a flat uint8 array, raising RomLoadError on bad input."""
    if isinstance(data, np.ndarray):
        if data.size and (data.min() < 0 or data.max() > 0xFF):
            raise RomLoadError("ROM data contains values outside 0..255")
        return data.astype(np.uint8).ravel()
    try:
        return np.frombuffer(bytes(data), dtype=np.uint8)
    except (TypeError, ValueError) as e:
        raise RomLoadError(f"ROM data is not a byte sequence: {e}") from e


def load_program(state: EmulatorState, data) -> EmulatorState:
    """Write a program image at 0x200 and reset the program counter.

    Args:
        state: Current emulator state
        data: ``bytes``, ``bytearray``, sequence of ints or uint8 array

    Returns:
        State with the image written and ``pc == 0x200``

    Raises:
        RomTooLargeError: If the image does not fit before 0x1000.
        RomLoadError: If ``data`` is not a byte sequence.
    """
    rom = as_rom_array(data)
    if len(rom) > PROGRAM_CAPACITY:
        raise RomTooLargeError(len(rom), PROGRAM_CAPACITY)

    memory = state.memory
    if len(rom):
        memory = memory.at[PROGRAM_START:PROGRAM_START + len(rom)].set(jnp.asarray(rom, dtype=jnp.uint8))
    return state.replace(memory=memory, pc=jnp.array(PROGRAM_START, dtype=jnp.uint16))


def read_rom(filename: str) -> bytes:
    """Read a ROM file, mapping I/O failures to RomLoadError."""
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomLoadError(f"Couldn't read ROM file {filename}: {e}") from e


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return load_program(state, read_rom(filename))
