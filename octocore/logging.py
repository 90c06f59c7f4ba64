"""Console logging utilities for emulator runs.

This module provides a small level-filtered console logger plus a
specialised logger that reports run configuration, instruction traces,
fatal errors and end-of-run statistics.
"""

import time
import sys
from typing import Any, Dict

from octocore.decode import DecodedInstruction, disassemble

LOG_LEVELS = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}


class ConsoleLogger:
    """Console logger with level filtering, timestamps and colors."""

    def __init__(
        self,
        name: str = "octocore",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*LOG_LEVELS, "RESET"]}
        )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LOG_LEVELS.get(level.upper(), 1) >= LOG_LEVELS.get(self.log_level, 1)

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for emulator runs."""

    def __init__(self, name: str = "octocore", **kwargs):
        super().__init__(name, **kwargs)

    def log_run_start(self, rom: str, config: Dict[str, Any]):
        """Log the ROM being run and the configuration."""
        self.info("=" * 60)
        self.info(f"Running {rom} with configuration:")
        for key, value in config.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.2f}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_trace(self, address: int, instruction: DecodedInstruction):
        """Log one executed instruction."""
        if self._should_log("DEBUG"):
            self.debug(f"{address:03X}: {instruction.raw:04X}  {disassemble(instruction)}")

    def log_fatal(self, error: Exception, pc: int):
        """Log the error that stopped the run."""
        self.error(f"{type(error).__name__} (PC=0x{pc:03X}): {error}")

    def log_run_end(self, stats: Dict[str, Any]):
        """Log end-of-run statistics."""
        self.info("=" * 60)
        self.info("Run finished:")
        for key, value in stats.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.2f}")
            else:
                self.info(f"  {key}: {value}")
        self.info("=" * 60)
