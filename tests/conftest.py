from io import StringIO

import pytest

from streamxml import ElementWriter, StreamSink
from streamxml.constants import EnvVars
from streamxml.infrastructure.io import SinkError


@pytest.fixture(autouse=True)
def _clean_writer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep STREAMXML_* variables from the developer shell out of the tests."""
    for name in (EnvVars.XML_VERSION, EnvVars.ENCODING, EnvVars.DEFAULT_NAMESPACE):
        monkeypatch.delenv(name, raising=False)


class RecordingSink:
    """Sink double that records every primitive call.

    Primitives listed in ``fail_on`` raise ``SinkError`` after being recorded.
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, tuple[object, ...]]] = []
        self.fail_on = fail_on or set()

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args: object) -> None:
            self.calls.append((name, args))
            if name in self.fail_on:
                raise SinkError(f"{name} exploded")

        return record

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_to(self, name: str) -> list[tuple[object, ...]]:
        return [args for called, args in self.calls if called == name]


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def buffer() -> StringIO:
    return StringIO()


@pytest.fixture
def writer(buffer: StringIO) -> ElementWriter:
    return ElementWriter(StreamSink(buffer))


@pytest.fixture
def failing_sink():
    def build(*primitives: str) -> RecordingSink:
        return RecordingSink(fail_on=set(primitives))

    return build
