from __future__ import annotations

from typing import TYPE_CHECKING

from typing_extensions import override

from .ports.services import LoggerPort

if TYPE_CHECKING:
    from .models import WriterStats


class NullLogger(LoggerPort):
    pass

    @override
    def info(self, message: str) -> None:
        return

    @override
    def success(self, message: str) -> None:
        return

    @override
    def warning(self, message: str) -> None:
        return

    @override
    def error(self, message: str) -> None:
        return

    @override
    def debug(self, message: str) -> None:
        return

    @override
    def verbose(self, message: str) -> None:
        return

    @override
    def log_document_start(self, version: str | None, encoding: str | None) -> None:
        return None

    @override
    def log_root_declarations(
        self,
        element: str,
        default_namespace: str | None,
        bindings: list[tuple[str, str]],
    ) -> None:
        return None

    @override
    def log_document_end(self, stats: WriterStats) -> None:
        return None
