from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..models import WriterStats


@runtime_checkable
class LoggerPort(Protocol):
    pass

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def verbose(self, message: str) -> None: ...

    def log_document_start(self, version: str | None, encoding: str | None) -> None: ...

    def log_root_declarations(
        self,
        element: str,
        default_namespace: str | None,
        bindings: list[tuple[str, str]],
    ) -> None: ...

    def log_document_end(self, stats: "WriterStats") -> None: ...
