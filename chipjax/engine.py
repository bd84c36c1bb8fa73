"""Stateful interpreter facade driven by a host loop."""

from typing import Callable, Optional

import jax
import jax.numpy as jnp
import numpy as np
from chex import dataclass
from tqdm import tqdm

from chipjax import emulator
from chipjax.constants import FAULT_NONE, FAULT_UNKNOWN_INSTRUCTION, FAULT_STACK_UNDERFLOW, FAULT_STACK_OVERFLOW
from chipjax.errors import MachineHaltedError, StackOverflowError, StackUnderflowError
from chipjax.instructions.display import signal_frame
from chipjax.keypad import set_key
from chipjax.logging import EmulatorLogger
from chipjax.memory import as_rom_array, load_program, read_rom
from chipjax.stack import depth
from chipjax.state import EmulatorState, create_state, uniform_byte


@dataclass(frozen=True)
class EngineConfig:
    """Engine configuration.

    Attributes:
        instruction_frequency: CHIP-8 CPU frequency in Hz (typically 700)
        fps: Frame and timer rate in Hz (typically 60)
        frame_synced_draw: Allow at most one DXYN per frame (see ``Engine.signal_frame``)
        single_key: Track a single pressed key; ``False`` tracks all 16 keys
        seed: Seed of the JAX random key used by CXNN
        log_level: Minimum level printed by the default logger
    """
    instruction_frequency: int = 700
    fps: int = 60
    frame_synced_draw: bool = True
    single_key: bool = True
    seed: int = 0
    log_level: str = "INFO"

    @property
    def instructions_per_frame(self) -> int:
        """Number of instructions executed between two timer ticks."""
        return self.instruction_frequency // self.fps


class Engine:
    """CHIP-8 interpreter owning one machine state.

    A host drive loop feeds key transitions with :meth:`set_key`, calls
    :meth:`step` several times per frame, :meth:`tick_timers` once per frame,
    :meth:`signal_frame` at each frame boundary and reads :attr:`display`.
    :meth:`run_frame` performs one such frame.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        random_byte: Callable[[jax.Array], jnp.ndarray] = uniform_byte,
        logger: Optional[EmulatorLogger] = None,
    ):
        self.config = config if config is not None else EngineConfig()
        self.logger = logger if logger is not None else EmulatorLogger(log_level=self.config.log_level)
        self.state: EmulatorState = create_state(
            jax.random.PRNGKey(self.config.seed),
            frame_synced_draw=self.config.frame_synced_draw,
            random_byte=random_byte,
        )
        self.halt_error: Optional[Exception] = None

    def load(self, data, source: str = "<bytes>") -> None:
        """Load a program image at 0x200 and reset the program counter.

        The image is converted once up front, so a failed load leaves the
        machine untouched.
        """
        rom = as_rom_array(data)
        self.state = load_program(self.state, rom)
        self.halt_error = None
        self.logger.log_program_loaded(rom.size, source=source)

    def load_file(self, filename: str) -> None:
        """Read a ROM file and load it at 0x200."""
        self.load(read_rom(filename), source=filename)

    def step(self) -> None:
        """Execute one instruction (or one gate/key-wait re-fetch).

        Raises:
            StackUnderflowError: On 00EE with an empty stack.
            StackOverflowError: On 2NNN with a full stack.
            MachineHaltedError: If a previous step hit one of the above.
        """
        if self.halt_error is not None:
            raise MachineHaltedError("Engine halted; load a program to continue") from self.halt_error

        pc = int(self.state.pc)
        state, instruction = emulator.step(self.state)
        self.state = state

        fault = int(state.fault)
        if fault == FAULT_NONE:
            return
        if fault == FAULT_UNKNOWN_INSTRUCTION:
            self.logger.log_unknown_instruction(pc, int(instruction))
            return

        if fault == FAULT_STACK_UNDERFLOW:
            error = StackUnderflowError(pc)
        elif fault == FAULT_STACK_OVERFLOW:
            error = StackOverflowError(pc, depth(state.stack))
        else:
            raise ValueError(f"Unexpected fault code {fault}")
        self.halt_error = error
        self.logger.log_halt(error)
        raise error

    def tick_timers(self) -> None:
        """Advance the delay and sound timers by one tick."""
        self.state = emulator.tick_timers(self.state)

    def signal_frame(self) -> None:
        """Mark a frame boundary, releasing the draw gate."""
        self.state = signal_frame(self.state)

    def set_key(self, key: int, pressed: bool) -> None:
        """Apply a host key transition (key code 0x0..0xF)."""
        self.state = set_key(self.state, key, pressed, single_key=self.config.single_key)

    @property
    def display(self) -> np.ndarray:
        """Read-only (32, 64) boolean view of the display, indexed ``[y, x]``."""
        buffer = np.asarray(self.state.display)
        buffer.setflags(write=False)
        return buffer

    @property
    def sound_active(self) -> bool:
        """Whether the sound timer is running."""
        return int(self.state.sound_timer) > 0

    def run_frame(self) -> np.ndarray:
        """Run one frame: N instructions, one timer tick and a frame boundary."""
        for _ in range(self.config.instructions_per_frame):
            self.step()
        self.tick_timers()
        if self.config.frame_synced_draw:
            self.signal_frame()
        return self.display

    def run(self, frames: int, progress: bool = False) -> np.ndarray:
        """Run ``frames`` frames without a host window and return the last display."""
        display = self.display
        for _ in tqdm(range(frames), desc="Frames", unit="frame", disable=not progress):
            display = self.run_frame()
        return display
