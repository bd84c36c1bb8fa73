"""Tests for the console loggers."""

import io

import pytest
from chipjax.logging import ConsoleLogger, EmulatorLogger


def test_level_filtering(capsys):
    logger = ConsoleLogger(name="test", log_level="WARNING", use_colors=False, show_timestamps=False)
    logger.info("hidden")
    logger.error("shown")

    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "[   ERROR][test] shown" in out


def test_emulator_logger_counts_unknown_instructions(capsys):
    logger = EmulatorLogger(use_colors=False, show_timestamps=False)
    logger.log_unknown_instruction(0x2A4, 0x5121)
    logger.log_unknown_instruction(0x2A6, 0xF0FF)

    out = capsys.readouterr().out
    assert "Unknown instruction 5121 at 0x2A4" in out
    assert logger.unknown_instructions == 2


def test_explicit_stream_without_tty_has_no_colors():
    stream = io.StringIO()
    logger = ConsoleLogger(log_level="DEBUG", show_timestamps=False, stream=stream)
    logger.log("debug", "tick")
    assert stream.getvalue() == "[   DEBUG][chipjax] tick\n"


def test_unknown_log_level_rejected():
    with pytest.raises(ValueError):
        ConsoleLogger(log_level="VERBOSE")


def test_halt_logged_as_error(capsys):
    logger = EmulatorLogger(use_colors=False, show_timestamps=False)
    logger.log_halt(RuntimeError("boom"))
    assert "[   ERROR][chipjax] Machine halted: boom" in capsys.readouterr().out
