"""Tests for the dependency container and writer factory."""

from io import StringIO
from pathlib import Path

from rich.console import Console

from streamxml import ElementWriter, StreamSink, WriterConfig, create_stream_writer
from streamxml.application.ports import LoggerPort
from streamxml.infrastructure.container import (
    DependencyContainer,
    create_default_container,
)
from streamxml.infrastructure.logging import ConsoleLogger, NullLogger


class TestDependencyContainer:
    def test_create_container_with_defaults(self):
        container = DependencyContainer()

        assert container.verbose == 0
        assert container.console is not None
        assert container.use_null_logger is False
        assert container.config == WriterConfig()

    def test_create_logger_returns_console_logger(self):
        logger = DependencyContainer(verbose=2).create_logger()

        assert isinstance(logger, ConsoleLogger)
        assert isinstance(logger, LoggerPort)
        assert logger.verbosity == 2

    def test_create_logger_returns_null_logger_when_configured(self):
        logger = DependencyContainer(use_null_logger=True).create_logger()

        assert isinstance(logger, NullLogger)

    def test_create_logger_is_singleton(self):
        container = DependencyContainer()

        assert container.create_logger() is container.create_logger()

    def test_override_logger(self):
        container = DependencyContainer()
        replacement = NullLogger()
        container.override_logger(replacement)

        assert container.create_logger() is replacement

    def test_create_writer_uses_config(self):
        config = WriterConfig(namespaces={"foo": "http://x/foo"})
        container = DependencyContainer(
            console=Console(file=StringIO()), config=config
        )
        stream = StringIO()

        writer = container.create_writer(stream, own_stream=False)
        writer.start_doc().start_root_element("root").end_doc()

        assert isinstance(writer, ElementWriter)
        assert isinstance(writer.sink, StreamSink)
        assert not stream.closed
        assert stream.getvalue() == (
            '<?xml version="1.0"?><root xmlns:foo="http://x/foo"></root>'
        )

    def test_create_writer_owns_stream_by_default(self):
        container = DependencyContainer(use_null_logger=True)
        stream = StringIO()

        container.create_writer(stream).start_doc().end_doc()

        assert stream.closed


class TestFactories:
    def test_create_default_container_without_config_file(self):
        container = create_default_container(
            verbose=1, config_file=Path("/nonexistent/streamxml.toml")
        )

        assert container.verbose == 1
        assert container.config == WriterConfig()

    def test_create_stream_writer(self):
        stream = StringIO()

        writer = create_stream_writer(stream, {"foo": "http://x/foo"}, own_stream=False)
        writer.start_doc().start_element("a", "foo").end_doc()

        assert stream.getvalue() == '<?xml version="1.0"?><foo:a></foo:a>'
