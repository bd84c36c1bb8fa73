"""CHIP-8 ALU operations (8xxx).

Every operation receives VX and VY widened to int32 and returns the new VX
(already reduced to 8 bits) with the VF value it defines. Shifts operate on
VY, and the bitwise operations reset VF, matching the original COSMAC VIP
interpreter.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState
from chipjax.decode import DecodedInstruction
from chipjax.constants import FLAG_REGISTER
from chipjax.instructions.system import unknown_instruction


def alu_set(vx, vy, vf):
    """8XY0 - Set: VX = VY. VF is preserved."""
    return vy, vf


def alu_or(vx, vy, vf):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, jnp.zeros((), dtype=jnp.int32)


def alu_and(vx, vy, vf):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, jnp.zeros((), dtype=jnp.int32)


def alu_xor(vx, vy, vf):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, jnp.zeros((), dtype=jnp.int32)


def alu_add(vx, vy, vf):
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = jnp.astype(result > 0xFF, jnp.int32)
    return result & 0xFF, carry


def alu_sub_xy(vx, vy, vf):
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow occurred."""
    no_borrow = jnp.astype(vx >= vy, jnp.int32)
    return (vx - vy) & 0xFF, no_borrow


def alu_shift_right(vx, vy, vf):
    """8XY6 - Shift right: VX = VY >> 1."""
    return vy >> 1, vy & 1


def alu_sub_yx(vx, vy, vf):
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow occurred."""
    no_borrow = jnp.astype(vy >= vx, jnp.int32)
    return (vy - vx) & 0xFF, no_borrow


def alu_shift_left(vx, vy, vf):
    """8XYE - Shift left: VX = VY << 1."""
    return (vy << 1) & 0xFF, (vy >> 7) & 1


def execute_alu(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Apply a defined 8XYN operation."""
    vx = jnp.astype(state.V[instruction.x], jnp.int32)
    vy = jnp.astype(state.V[instruction.y], jnp.int32)
    vf = jnp.astype(state.V[FLAG_REGISTER], jnp.int32)

    result, flag = jax.lax.switch(
        # Map only valid operations: 0,1,2,3,4,5,6,7,14 -> 0,1,2,3,4,5,6,7,8
        jnp.where(instruction.n == 14, 8, instruction.n),
        [alu_set, alu_or, alu_and, alu_xor, alu_add,
         alu_sub_xy, alu_shift_right, alu_sub_yx, alu_shift_left],
        vx, vy, vf
    )

    # VX is written before VF, so VF holds the flag when X == F
    new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
    new_V = jnp.where(instruction.n == 0, new_V, new_V.at[FLAG_REGISTER].set(jnp.astype(flag, jnp.uint8)))
    return state.replace(V=new_V)


# Operations 8, 9, A, B, C, D and F are undefined
VALID_OPS = jnp.array([1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 0], dtype=bool)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    return jax.lax.cond(
        VALID_OPS[instruction.n],
        execute_alu,
        unknown_instruction,
        state, instruction
    )
