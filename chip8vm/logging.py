"""Console logging utilities for the CHIP-8 interpreter.

Provides a small level-filtered console logger and an instruction trace logger
for stepping through ROMs, plus a tqdm progress bar for long headless runs.
"""

import sys
import time
from typing import Any, Dict, Optional

from tqdm import tqdm

from chip8vm.decode import Operation


class ConsoleLogger:
    """Flexible console logger with colours and elapsed-time stamps."""

    def __init__(
        self,
        name: str = "chip8vm",
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
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

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
            print(self._format_message(level, message), file=self.stream, flush=True)

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


class TraceLogger(ConsoleLogger):
    """Logger that records executed instructions and run statistics.

    Each instruction is printed at DEBUG as ``PC  WORD  MNEMONIC``; counts per
    operation kind are kept regardless of level for the end-of-run summary.
    """

    def __init__(self, name: str = "trace", **kwargs):
        super().__init__(name, **kwargs)
        self.instruction_count = 0
        self.kind_counts: Dict[str, int] = {}
        self.wait_steps = 0

    def log_instruction(self, pc: int, operation: Operation, waiting: bool = False):
        self.instruction_count += 1
        name = operation.kind.name
        self.kind_counts[name] = self.kind_counts.get(name, 0) + 1
        if waiting:
            self.wait_steps += 1
        if self._should_log("DEBUG"):
            suffix = "  ; waiting for key" if waiting else ""
            self.debug(f"0x{pc:03X}  {operation.raw:04X}  {operation.mnemonic}{suffix}")

    def log_error(self, pc: int, error: Exception):
        self.error(f"0x{pc:03X}  {type(error).__name__}: {error}")

    def log_summary(self, extra: Optional[Dict[str, Any]] = None):
        """Log totals and the most frequent operations."""
        elapsed = time.time() - self.start_time
        self.info("=" * 60)
        self.info(f"Executed {self.instruction_count} instructions in {elapsed:.2f}s")
        if self.wait_steps:
            self.info(f"  steps blocked on key input: {self.wait_steps}")
        for name, count in sorted(self.kind_counts.items(), key=lambda kv: -kv[1])[:10]:
            self.info(f"  {name:<24s} {count}")
        for key, value in (extra or {}).items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)


def build_progress_bar(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """tqdm bar for an ``n``-step headless run."""
    if desc is None:
        desc = f"Running ({n:,} steps)"
    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)
    return tqdm(total=n, desc=desc, unit="step", **kwargs)
