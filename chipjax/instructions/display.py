"""CHIP-8 display operations."""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import (
    ADDRESS_MASK, FLAG_REGISTER, SCREEN_WIDTH, SCREEN_HEIGHT,
    GATE_IDLE, GATE_ARMED_ONCE, GATE_SUPPRESSED,
)

# Pre-computed coordinate grids for display operations, indexed [y, x]
yy, xx = jnp.meshgrid(jnp.arange(SCREEN_HEIGHT), jnp.arange(SCREEN_WIDTH), indexing='ij')


def draw_sprite(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Draw an N-row sprite from memory[I] at (VX mod 64, VY mod 32).

    The origin wraps but the sprite body is clipped at the right and bottom
    edges. VF is set when any lit pixel is switched off.
    """
    sprite_x = jnp.astype(state.V[instruction.x], jnp.int32) % SCREEN_WIDTH
    sprite_y = jnp.astype(state.V[instruction.y], jnp.int32) % SCREEN_HEIGHT
    height = jnp.astype(instruction.n, jnp.int32)

    in_sprite = (xx >= sprite_x) & (xx < sprite_x + 8) & (yy >= sprite_y) & (yy < sprite_y + height)

    row_offset = jnp.clip(yy - sprite_y, 0, 15)
    col_offset = jnp.clip(xx - sprite_x, 0, 7)
    addresses = (jnp.astype(state.I, jnp.int32) + row_offset) & ADDRESS_MASK
    sprite_bytes = jnp.astype(state.memory[addresses], jnp.int32)
    sprite = (((sprite_bytes >> (7 - col_offset)) & 1) == 1) & in_sprite

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8))
    )


def _hold_draw(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    gate = jnp.where(state.draw_gate == GATE_IDLE, GATE_ARMED_ONCE, state.draw_gate)
    return state.replace(pc=state.pc - 2, draw_gate=jnp.astype(gate, jnp.uint8))


def _release_draw(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    state = state.replace(draw_gate=jnp.array(GATE_IDLE, dtype=jnp.uint8))
    return draw_sprite(state, instruction)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    With ``frame_synced_draw`` the instruction is re-fetched (PC rewound) until
    the drive loop has signalled a frame boundary, so at most one sprite is
    drawn per frame.
    """
    if not state.frame_synced_draw:
        return draw_sprite(state, instruction)

    return jax.lax.cond(
        state.draw_gate == GATE_SUPPRESSED,
        _release_draw,
        _hold_draw,
        state, instruction
    )


def signal_frame(state: EmulatorState) -> EmulatorState:
    """Mark a frame boundary: the next DXYN passes the draw gate."""
    return state.replace(draw_gate=jnp.array(GATE_SUPPRESSED, dtype=jnp.uint8))
