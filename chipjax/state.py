"""CHIP-8 emulator state structures."""

from typing import Callable

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chipjax.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE, FAULT_NONE, GATE_IDLE,
)


def uniform_byte(key: jax.Array) -> jnp.ndarray:
    """Draw a uniformly distributed byte from ``key``."""
    return jax.random.randint(key, shape=(), minval=0, maxval=256, dtype=jnp.int32).astype(jnp.uint8)


def _zeros(shape, dtype):
    return field(default_factory=lambda: jnp.zeros(shape, dtype=dtype))


def _scalar(value, dtype):
    return field(default_factory=lambda: jnp.array(value, dtype=dtype))


class StackState(PyTreeNode):
    """Stack state for subroutine calls."""
    data: jnp.ndarray = _zeros(STACK_SIZE, jnp.uint16)
    pointer: jnp.ndarray = _zeros((), jnp.int32)


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` is stored row-major as ``(SCREEN_HEIGHT, SCREEN_WIDTH)`` so that
    ``display.ravel()[y * 64 + x]`` addresses pixel ``(x, y)``.
    """
    rng: jax.Array
    memory: jnp.ndarray = _zeros(MEMORY_SIZE, jnp.uint8)
    pc: jnp.ndarray = _scalar(PROGRAM_START, jnp.uint16)
    display: jnp.ndarray = _zeros((SCREEN_HEIGHT, SCREEN_WIDTH), jnp.bool_)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = _zeros((), jnp.uint8)
    sound_timer: jnp.ndarray = _zeros((), jnp.uint8)
    keypad: jnp.ndarray = _zeros(NUM_KEYS, jnp.bool_)
    V: jnp.ndarray = _zeros(NUM_REGISTERS, jnp.uint8)
    I: jnp.ndarray = _zeros((), jnp.uint16)
    draw_gate: jnp.ndarray = _scalar(GATE_IDLE, jnp.uint8)
    fault: jnp.ndarray = _scalar(FAULT_NONE, jnp.uint8)
    frame_synced_draw: bool = field(pytree_node=False, default=False)
    random_byte: Callable[[jax.Array], jnp.ndarray] = field(pytree_node=False, default=uniform_byte)


def create_state(
    rng: jax.Array = None,
    frame_synced_draw: bool = False,
    random_byte: Callable[[jax.Array], jnp.ndarray] = uniform_byte,
) -> EmulatorState:
    """Create initial emulator state with font data loaded.

    Args:
        rng: JAX random key feeding CXNN (default: ``PRNGKey(0)``)
        frame_synced_draw: Gate DXYN behind the frame-boundary signal
        random_byte: Function mapping a random key to a uint8 value
    """
    if rng is None:
        rng = jax.random.PRNGKey(0)
    state = EmulatorState(rng, frame_synced_draw=frame_synced_draw, random_byte=random_byte)
    return state.replace(memory=state.memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA))


def with_fault(state: EmulatorState, code: int) -> EmulatorState:
    """Record the outcome ``code`` of the current instruction."""
    return state.replace(fault=jnp.array(code, dtype=jnp.uint8))
