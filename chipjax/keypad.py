"""Host key state updates.

By default only one key is tracked at a time: pressing a key replaces the
previous one and releasing any key clears the keypad. Pass
``single_key=False`` to track all sixteen keys independently.
"""

import jax.numpy as jnp
from chipjax.constants import NUM_KEYS
from chipjax.state import EmulatorState


def _check_key(key: int) -> int:
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"CHIP-8 key code must be in 0x0..0xF, got {key!r}")
    return key


def press_key(state: EmulatorState, key: int, single_key: bool = True) -> EmulatorState:
    """Mark ``key`` as pressed."""
    key = _check_key(key)
    keypad = jnp.zeros_like(state.keypad) if single_key else state.keypad
    return state.replace(keypad=keypad.at[key].set(True))


def release_key(state: EmulatorState, key: int, single_key: bool = True) -> EmulatorState:
    """Mark ``key`` as released."""
    key = _check_key(key)
    if single_key:
        return state.replace(keypad=jnp.zeros_like(state.keypad))
    return state.replace(keypad=state.keypad.at[key].set(False))


def set_key(state: EmulatorState, key: int, pressed: bool, single_key: bool = True) -> EmulatorState:
    """Apply a key transition coming from the host."""
    if pressed:
        return press_key(state, key, single_key)
    return release_key(state, key, single_key)


def pressed_key(state: EmulatorState):
    """Lowest pressed key code, or ``None`` when no key is down."""
    if not bool(jnp.any(state.keypad)):
        return None
    return int(jnp.argmax(state.keypad))
