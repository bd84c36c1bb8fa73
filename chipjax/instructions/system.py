"""CHIP-8 system instructions (0x0xxx)."""

import jax
import jax.lax
import jax.numpy as jnp
from chipjax.state import EmulatorState, with_fault
from chipjax.decode import DecodedInstruction
from chipjax.constants import FAULT_UNKNOWN_INSTRUCTION, FAULT_STACK_UNDERFLOW
from chipjax.stack import pop


def unknown_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Unrecognised instruction: flag it and otherwise leave the machine alone."""
    return with_fault(state, FAULT_UNKNOWN_INSTRUCTION)


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address, underflow = pop(state.stack)
    return jax.lax.cond(
        underflow,
        lambda s: with_fault(s, FAULT_STACK_UNDERFLOW),
        lambda s: s.replace(stack=stack, pc=address),
        state
    )


def execute_system_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch system instructions. 0NNN machine routines are not supported."""
    return jax.lax.cond(
        0x00E0 == instruction.raw,
        execute_clear_screen,
        lambda state, instruction: jax.lax.cond(
            0x00EE == instruction.raw,
            execute_return,
            unknown_instruction,
            state, instruction
        ),
        state, instruction
    )
