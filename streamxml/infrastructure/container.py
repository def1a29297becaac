from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from ..application.element_writer import ElementWriter
from ..application.null_logger import NullLogger
from ..config import ConfigLoader, WriterConfig
from .io.stream_sink import StreamSink
from .logging.console_logger import ConsoleLogger

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path
    from typing import TextIO

    from ..application.ports.services import LoggerPort


class DependencyContainer:
    pass

    def __init__(
        self,
        verbose: int = 0,
        console: Console | None = None,
        use_null_logger: bool = False,
        config: WriterConfig | None = None,
    ) -> None:
        super().__init__()
        self.verbose = verbose
        self.console = console or Console(stderr=True)
        self.use_null_logger = use_null_logger
        self.config = config or WriterConfig()
        self._logger_instance: LoggerPort | None = None

    def create_logger(self) -> LoggerPort:
        if self._logger_instance is None:
            if self.use_null_logger:
                self._logger_instance = NullLogger()
            else:
                self._logger_instance = ConsoleLogger(
                    console=self.console, verbosity=self.verbose
                )
        return self._logger_instance

    def create_sink(self, stream: TextIO) -> StreamSink:
        return StreamSink(stream)

    def create_writer(
        self,
        stream: TextIO,
        namespaces: Mapping[str, str] | None = None,
        *,
        own_stream: bool = True,
    ) -> ElementWriter:
        """Build a writer over ``stream``.

        With ``own_stream`` the writer flushes and closes the stream on
        ``end_doc``; pass ``False`` to keep it open (e.g. a ``StringIO`` the
        caller still wants to read).
        """
        return ElementWriter(
            self.create_sink(stream),
            namespaces,
            config=self.config,
            logger=self.create_logger(),
            owned_stream=stream if own_stream else None,
        )

    def override_logger(self, logger: LoggerPort) -> None:
        self._logger_instance = logger


def create_default_container(
    verbose: int = 0, config_file: Path | None = None
) -> DependencyContainer:
    return DependencyContainer(verbose=verbose, config=ConfigLoader.load(config_file))


def create_stream_writer(
    stream: TextIO,
    namespaces: Mapping[str, str] | None = None,
    *,
    config: WriterConfig | None = None,
    logger: LoggerPort | None = None,
    own_stream: bool = True,
) -> ElementWriter:
    return ElementWriter(
        StreamSink(stream),
        namespaces,
        config=config,
        logger=logger,
        owned_stream=stream if own_stream else None,
    )
