"""Console logging utilities for the chipjax engine.

This module provides a small leveled console logger with optional colours and
elapsed-time stamps, plus an emulator-specific logger with helpers for the
events the engine reports.
"""

import time
import sys
from typing import Optional, TextIO

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Leveled console logger.

    Messages go to ``stream`` (``sys.stdout`` at call time when unset).
    """

    def __init__(
        self,
        name: str = "chipjax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        if log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level {log_level!r}, expected one of {LEVELS}")
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = use_colors
        self.show_timestamps = show_timestamps
        self.stream = stream
        self.start_time = time.time()

    def _output(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def _should_log(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str, out: TextIO) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors and hasattr(out, "isatty") and out.isatty():
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self._should_log(level):
            out = self._output()
            print(self._format_message(level, message, out), file=out, flush=True)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for engine events: program loads, unknown instructions and halts."""

    def __init__(self, name: str = "chipjax", **kwargs):
        super().__init__(name, **kwargs)
        self.unknown_instructions = 0

    def log_program_loaded(self, size: int, source: str = "<bytes>"):
        """Log a successful program load."""
        self.info(f"Loaded {size} bytes from {source} at 0x200")

    def log_unknown_instruction(self, pc: int, instruction: int):
        """Log an instruction the engine skipped."""
        self.unknown_instructions += 1
        self.warning(f"Unknown instruction {instruction:04X} at 0x{pc:03X}")

    def log_halt(self, error: Exception):
        """Log the fatal fault that stopped the machine."""
        self.error(f"Machine halted: {error}")
