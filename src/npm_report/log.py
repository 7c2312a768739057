"""Progress and diagnostic output.

Collectors and the report writer never print directly. They receive a
``ProgressLog`` and call ``log()`` on it, so the CLI can route lines to the
terminal and tests can record them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console
from rich.markup import escape

INFO = "info"
WARNING = "warning"
ERROR = "error"


class ProgressLog(Protocol):
    """Anything that accepts one line of progress output."""

    def log(self, message: str, level: str = INFO) -> None: ...


class ConsoleLog:
    """Print progress to stdout and diagnostics to stderr using rich."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def log(self, message: str, level: str = INFO) -> None:
        if level == ERROR:
            self.err_console.print(f"[red]✗ {escape(message)}[/]")
        elif level == WARNING:
            self.err_console.print(f"[yellow]⚠ {escape(message)}[/]")
        else:
            self.console.print(escape(message))


@dataclass
class RecordingLog:
    """Keeps every line in memory for later inspection."""

    lines: list[tuple[str, str]] = field(default_factory=list)

    def log(self, message: str, level: str = INFO) -> None:
        self.lines.append((level, message))

    @property
    def errors(self) -> list[str]:
        return [message for level, message in self.lines if level == ERROR]

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self.lines]
