from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING

from typing_extensions import override

from rich.console import Console
from rich.markup import escape

from ...application.ports.services import LoggerPort

if TYPE_CHECKING:
    from ...application.models import WriterStats


class LogLevel(IntEnum):
    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2


@dataclass(slots=True)
class LogContext:
    document: str = ""
    operation: str = ""
    start_time: datetime = field(default_factory=datetime.now)

    def elapsed_ms(self) -> float:
        return (datetime.now() - self.start_time).total_seconds() * 1000


class ConsoleLogger(LoggerPort):
    pass

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        super().__init__()
        self.console = console or Console(stderr=True)
        self.verbosity = verbosity
        self._context: LogContext | None = None
        self._stats: dict[str, int] = {
            "documents": 0,
            "elements": 0,
            "attributes": 0,
            "warnings": 0,
            "errors": 0,
        }

    def set_context(self, **kwargs: str) -> None:
        if self._context is None:
            self._context = LogContext()
        for key, value in kwargs.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

    def clear_context(self) -> None:
        self._context = None

    @override
    def info(self, message: str, *, level: int = LogLevel.NORMAL) -> None:
        if self.verbosity >= level:
            prefix = self._get_prefix()
            self.console.print(f"{prefix}{escape(message)}")

    @override
    def verbose(self, message: str) -> None:
        if self.verbosity >= LogLevel.VERBOSE:
            prefix = self._get_prefix()
            self.console.print(f"[dim]{prefix}{escape(message)}[/dim]")

    @override
    def debug(self, message: str) -> None:
        if self.verbosity >= LogLevel.DEBUG:
            prefix = self._get_prefix()
            self.console.print(f"[dim cyan]{prefix}{escape(message)}[/dim cyan]")

    @override
    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    @override
    def warning(self, message: str) -> None:
        self._stats["warnings"] += 1
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    @override
    def error(self, message: str) -> None:
        self._stats["errors"] += 1
        self.console.print(f"[red]✗[/red] {escape(message)}")

    @override
    def log_document_start(self, version: str | None, encoding: str | None) -> None:
        if self._context is None:
            self.set_context()
        self.verbose(
            f"Started XML {version or '1.0'} document"
            + (f" ({encoding})" if encoding else "")
        )

    @override
    def log_root_declarations(
        self,
        element: str,
        default_namespace: str | None,
        bindings: list[tuple[str, str]],
    ) -> None:
        self.verbose(f"Root element <{element}> declares {len(bindings)} prefixes")
        if default_namespace is not None:
            self.debug(f"  xmlns={default_namespace}")
        for prefix, uri in bindings:
            self.debug(f"  xmlns:{prefix}={uri}")

    @override
    def log_document_end(self, stats: WriterStats) -> None:
        self._stats["documents"] += 1
        self._stats["elements"] += stats.elements
        self._stats["attributes"] += stats.attributes
        elapsed = f" in {self._context.elapsed_ms():.1f} ms" if self._context else ""
        self.verbose(
            f"Finished document: {stats.elements:,} elements, "
            f"{stats.attributes:,} attributes{elapsed}"
        )
        self.clear_context()

    def get_stats(self) -> dict[str, int]:
        return self._stats.copy()

    def reset_stats(self) -> None:
        self._stats = {
            "documents": 0,
            "elements": 0,
            "attributes": 0,
            "warnings": 0,
            "errors": 0,
        }

    def _get_prefix(self) -> str:
        if self._context is None or self.verbosity < LogLevel.DEBUG:
            return ""
        parts: list[str] = []
        if self._context.document:
            parts.append(self._context.document)
        if self._context.operation:
            parts.append(self._context.operation)
        return escape(f"[{':'.join(parts)}] ") if parts else ""
