"""
BirthdayBot - Logger
====================

Tree-style logging to the console and to log files.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple


# ANSI colors
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
BLUE = "\033[94m"
CYAN = "\033[96m"
GRAY = "\033[90m"


class Logger:
    """Tree-style logger with colors."""

    def __init__(self, log_dir: Optional[Path] = None) -> None:
        self.log_file: Optional[Path] = None
        self.error_file: Optional[Path] = None
        if log_dir is not None:
            self.set_log_dir(log_dir)

    def set_log_dir(self, log_dir: Path) -> None:
        """Start writing log files into log_dir."""
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = log_dir / "bot.log"
        self.error_file = log_dir / "bot_error.log"

    def _timestamp(self) -> str:
        """Get formatted timestamp."""
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%d %H:%M:%S UTC")

    def _write_file(self, message: str, error: bool = False) -> None:
        """Write to log file."""
        path = self.error_file if error else self.log_file
        if path is None:
            return
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(message + "\n")
        except OSError as e:
            print(f"{RED}Log write failed:{RESET} {e}", file=sys.stderr)

    def _format_tree(self, items: List[Tuple[str, str]]) -> str:
        """Format items as a tree."""
        if not items:
            return ""
        lines = []
        for i, (key, value) in enumerate(items):
            prefix = "└─" if i == len(items) - 1 else "├─"
            lines.append(f"  {prefix} {key}: {value}")
        return "\n".join(lines)

    def tree(
        self,
        title: str,
        items: List[Tuple[str, str]],
        emoji: str = "ℹ️",
        error: bool = False,
    ) -> None:
        """Log with tree format."""
        timestamp = self._timestamp()
        tree_str = self._format_tree(items)

        # Console output with colors
        console_msg = f"{GRAY}[{timestamp}]{RESET} {emoji} {BOLD}{title}{RESET}"
        if tree_str:
            console_msg += f"\n{CYAN}{tree_str}{RESET}"
        print(console_msg, file=sys.stderr if error else sys.stdout)

        # File output without colors
        file_msg = f"[{timestamp}] {emoji} {title}"
        if tree_str:
            file_msg += f"\n{tree_str}"
        self._write_file(file_msg)
        if error:
            self._write_file(file_msg, error=True)

    def error_tree(
        self,
        title: str,
        exc: BaseException,
        items: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        """Log an exception with tree format."""
        details = list(items or [])
        details.append(("Type", type(exc).__name__))
        details.append(("Error", str(exc)[:200]))
        self.tree(title, details, emoji="❌", error=True)

    def info(self, message: str) -> None:
        """Log info message."""
        timestamp = self._timestamp()
        print(f"{GRAY}[{timestamp}]{RESET} {BLUE}ℹ️{RESET} {message}")
        self._write_file(f"[{timestamp}] ℹ️ {message}")

    def success(self, message: str) -> None:
        """Log success message."""
        timestamp = self._timestamp()
        print(f"{GRAY}[{timestamp}]{RESET} {GREEN}✅{RESET} {message}")
        self._write_file(f"[{timestamp}] ✅ {message}")

    def warning(self, message: str) -> None:
        """Log warning message."""
        timestamp = self._timestamp()
        print(f"{GRAY}[{timestamp}]{RESET} {YELLOW}⚠️{RESET} {message}")
        self._write_file(f"[{timestamp}] ⚠️ {message}", error=True)

    def error(self, message: str) -> None:
        """Log error message."""
        timestamp = self._timestamp()
        print(f"{GRAY}[{timestamp}]{RESET} {RED}❌{RESET} {message}", file=sys.stderr)
        self._write_file(f"[{timestamp}] ❌ {message}", error=True)


logger = Logger()
