"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chipjax import create_state, load_program, step


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def gated_state():
    """Provide a fresh state with frame-synchronised drawing enabled."""
    return create_state(frame_synced_draw=True)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def run_program(state, words, steps):
    """Load big-endian instruction words at 0x200 and run ``steps`` instructions."""
    data = b"".join(word.to_bytes(2, "big") for word in words)
    state = load_program(state, data)
    for _ in range(steps):
        state, _ = step(state)
    return state
