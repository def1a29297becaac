"""Namespace-aware streaming element writer.

``ElementWriter`` sits on top of an ``XmlSinkPort`` and decides, for every
element and attribute, which namespace qualifies it. Callers register
prefixes once, move the current-namespace cursor around, and write the
document top to bottom without building a tree:

    writer = ElementWriter(sink, {"foo": "http://x/foo"})
    writer.set_default_namespace("http://x/quux")
    writer.start_doc()
    writer.start_root_element("inventory")
    writer.set_current_namespace("foo")
    writer.start_element("site").characters("Oklahoma City").end_element()
    writer.end_doc()

Every write operation returns the writer so calls can be chained. Any error
reported by the sink is re-raised as ``WriteFailure``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Final, Protocol

from ..config import WriterConfig
from ..domain.lifecycle import DocumentState
from ..domain.namespaces import NamespaceRegistry
from ..exceptions import LifecycleViolation, WriteFailure
from .models import WriterStats
from .null_logger import NullLogger

if TYPE_CHECKING:
    from .ports.services import LoggerPort
    from .ports.sink import XmlSinkPort


class ClosableStream(Protocol):
    def flush(self) -> None: ...

    def close(self) -> None: ...


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


UNSET: Final = _Unset()


class ElementWriter:
    def __init__(
        self,
        sink: XmlSinkPort,
        namespaces: Mapping[str, str] | None = None,
        *,
        config: WriterConfig | None = None,
        logger: LoggerPort | None = None,
        owned_stream: ClosableStream | None = None,
    ) -> None:
        super().__init__()
        self._sink = sink
        self._config = config or WriterConfig()
        self._logger: LoggerPort = logger or NullLogger()
        self._owned_stream = owned_stream
        self._registry = NamespaceRegistry(self._config.namespaces)
        if namespaces:
            self._registry.bind_all(namespaces)
        if self._config.default_namespace is not None:
            self._registry.set_default(self._config.default_namespace)
        self._current: str | None = None
        self._state = DocumentState.NOT_STARTED
        # prefixes already bound on the sink, with the URI they were bound to
        self._sink_prefixes: dict[str, str] = {}
        # URI -> prefix the sink will pick for it (its most recent binding)
        self._uri_prefixes: dict[str, str] = {}
        # prefixes declared on the root element; None until it is written
        self._root_declarations: dict[str, str] | None = None
        # prefixes declared on the start tag currently being written
        self._tag_declarations: dict[str, str] = {}
        self._stats = WriterStats()

    @property
    def state(self) -> DocumentState:
        return self._state

    @property
    def current_namespace(self) -> str | None:
        return self._current

    @property
    def registry(self) -> NamespaceRegistry:
        return self._registry

    @property
    def stats(self) -> WriterStats:
        return self._stats

    @property
    def sink(self) -> XmlSinkPort:
        return self._sink

    # ---- namespace setup -------------------------------------------------

    def set_default_namespace(self, uri: str | None) -> ElementWriter:
        self._registry.set_default(uri)
        return self

    def map_namespace(self, prefix: str, uri: str) -> ElementWriter:
        self._registry.bind(prefix, uri)
        return self

    def map_namespaces(self, mapping: Mapping[str, str]) -> ElementWriter:
        self._registry.bind_all(mapping)
        return self

    def set_current_namespace(self, prefix: str | None) -> ElementWriter:
        """Point the cursor at ``prefix`` for all following elements.

        ``None`` clears the cursor so elements are written unprefixed. An
        unmapped prefix raises ``UnknownNamespaceError`` and the cursor keeps
        its previous value.
        """
        if prefix is not None:
            self._registry.resolve(prefix)
        self._current = prefix
        return self

    # ---- document lifecycle ----------------------------------------------

    def start_doc(
        self, version: str | None = None, encoding: str | None = None
    ) -> ElementWriter:
        self._require("start_doc", DocumentState.NOT_STARTED)
        version = version or self._config.xml_version
        encoding = encoding or self._config.encoding
        self._call("start_doc", "write_start_document", version, encoding)
        for prefix, uri in self._registry.all_bindings():
            self._bind_on_sink("start_doc", prefix, uri)
        self._state = DocumentState.OPEN
        self._logger.log_document_start(version, encoding)
        return self

    def end_doc(self) -> ElementWriter:
        """Finish the document, then flush and close the sink.

        Elements still open are closed by the sink. When the writer was given
        ownership of the underlying stream, that stream is flushed and closed
        as well.
        """
        self._require("end_doc", DocumentState.OPEN)
        self._call("end_doc", "write_end_document")
        self._call("end_doc", "flush")
        self._call("end_doc", "close")
        if self._owned_stream is not None:
            self._release_stream(self._owned_stream)
        self._state = DocumentState.ENDED
        self._logger.log_document_end(self._stats)
        return self

    # ---- elements --------------------------------------------------------

    def start_root_element(
        self, local_name: str, namespace: str | None | _Unset = UNSET
    ) -> ElementWriter:
        """Open the outermost element and declare every namespace on it.

        The default namespace (if any) and all mapped prefixes are written as
        ``xmlns`` attributes exactly once. Opening the root with
        ``start_element`` instead leaves the document without declarations.
        """
        self._require("start_root_element", DocumentState.OPEN)
        self._open("start_root_element", "write_start_element", local_name, namespace)
        self._write_root_namespaces(local_name)
        return self

    def start_element(
        self, local_name: str, namespace: str | None | _Unset = UNSET
    ) -> ElementWriter:
        """Open an element.

        ``namespace`` overrides the cursor for this element only; passing
        ``None`` explicitly writes it without a namespace.
        """
        self._require("start_element", DocumentState.OPEN)
        self._open("start_element", "write_start_element", local_name, namespace)
        return self

    def empty_element(
        self, local_name: str, namespace: str | None | _Unset = UNSET
    ) -> ElementWriter:
        self._require("empty_element", DocumentState.OPEN)
        self._open("empty_element", "write_empty_element", local_name, namespace)
        return self

    def end_element(self, label: str | None = None) -> ElementWriter:
        # label is only there to make call sites readable; never checked
        self._require("end_element", DocumentState.OPEN)
        self._call("end_element", "write_end_element")
        return self

    # ---- attributes ------------------------------------------------------

    def attribute(self, local_name: str, value: str) -> ElementWriter:
        self._require("attribute", DocumentState.OPEN)
        self._call("attribute", "write_attribute", local_name, value, None)
        self._stats.attributes += 1
        return self

    def prefixed_attribute(
        self, prefix: str, local_name: str, value: str
    ) -> ElementWriter:
        self._require("prefixed_attribute", DocumentState.OPEN)
        uri, declare = self._namespace_uri("prefixed_attribute", prefix)
        if declare:
            self._declare_locally("prefixed_attribute", prefix, uri)
        self._call("prefixed_attribute", "write_attribute", local_name, value, uri)
        self._stats.attributes += 1
        return self

    # ---- content ---------------------------------------------------------

    def characters(
        self, text: str | Iterable[str], start: int = 0, length: int | None = None
    ) -> ElementWriter:
        self._require("characters", DocumentState.OPEN)
        if not isinstance(text, str):
            text = "".join(text)
        if start or length is not None:
            text = _slice(text, start, length)
        self._call("characters", "write_characters", text)
        self._stats.text_nodes += 1
        return self

    def comment(self, text: str) -> ElementWriter:
        self._require("comment", DocumentState.OPEN)
        self._call("comment", "write_comment", text)
        return self

    def processing_instruction(
        self, target: str, data: str | None = None
    ) -> ElementWriter:
        self._require("processing_instruction", DocumentState.OPEN)
        self._call(
            "processing_instruction", "write_processing_instruction", target, data
        )
        return self

    def entity_ref(self, name: str) -> ElementWriter:
        self._require("entity_ref", DocumentState.OPEN)
        self._call("entity_ref", "write_entity_ref", name)
        return self

    def cdata(self, text: str) -> ElementWriter:
        self._require("cdata", DocumentState.OPEN)
        self._call("cdata", "write_cdata", text)
        self._stats.text_nodes += 1
        return self

    def raw_declaration(self, text: str) -> ElementWriter:
        self._require("raw_declaration", DocumentState.OPEN)
        self._call("raw_declaration", "write_dtd", text)
        return self

    # ---- internals -------------------------------------------------------

    def _require(self, operation: str, expected: DocumentState) -> None:
        if self._state is not expected:
            raise LifecycleViolation(operation, self._state.value, expected.value)

    def _call(self, operation: str, primitive: str, *args: object) -> None:
        try:
            getattr(self._sink, primitive)(*args)
        except Exception as e:
            self._logger.error(f"{operation}: sink.{primitive} failed: {e}")
            raise WriteFailure(operation, primitive) from e

    def _open(
        self,
        operation: str,
        primitive: str,
        local_name: str,
        namespace: str | None | _Unset,
    ) -> None:
        prefix = self._current if isinstance(namespace, _Unset) else namespace
        self._tag_declarations = {}
        uri, declare = self._namespace_uri(operation, prefix)
        self._call(operation, primitive, local_name, uri)
        if declare:
            self._declare_locally(operation, prefix, uri)
        self._stats.elements += 1
        qname = local_name if prefix is None else f"{prefix}:{local_name}"
        self._logger.debug(f"{operation} <{qname}>")

    def _namespace_uri(
        self, operation: str, prefix: str | None
    ) -> tuple[str | None, bool]:
        """Resolve ``prefix`` and make sure the sink qualifies with it.

        The flag is true when the start tag being written has to declare
        the prefix itself because the root element does not declare it, or
        declares it with a different URI.
        """
        if prefix is None:
            return None, False
        uri = self._registry.resolve(prefix)
        rebound = self._sink_prefixes.get(prefix) != uri
        if rebound or self._uri_prefixes.get(uri) != prefix:
            # mapped after start_doc, re-mapped since, or sharing its URI
            self._bind_on_sink(operation, prefix, uri)
        declared = self._root_declarations
        declare = (
            declared is not None
            and self._tag_declarations.get(prefix) != uri
            and (rebound or declared.get(prefix) != uri)
        )
        return uri, declare

    def _bind_on_sink(self, operation: str, prefix: str, uri: str) -> None:
        self._call(operation, "set_prefix", prefix, uri)
        self._sink_prefixes[prefix] = uri
        self._uri_prefixes[uri] = prefix

    def _declare_locally(self, operation: str, prefix: str, uri: str) -> None:
        self._call(operation, "write_namespace", prefix, uri)
        self._sink_prefixes[prefix] = uri
        self._uri_prefixes[uri] = prefix
        self._tag_declarations[prefix] = uri
        self._stats.declarations += 1
        self._logger.verbose(f"{operation}: declared xmlns:{prefix} on the element")

    def _write_root_namespaces(self, local_name: str) -> None:
        default = self._registry.default
        bindings = self._registry.all_bindings()
        if default is not None:
            self._call("start_root_element", "write_default_namespace", default)
            self._stats.declarations += 1
        for prefix, uri in bindings:
            self._call("start_root_element", "write_namespace", prefix, uri)
            self._sink_prefixes[prefix] = uri
            self._uri_prefixes[uri] = prefix
            self._stats.declarations += 1
        self._root_declarations = dict(bindings)
        self._logger.log_root_declarations(local_name, default, bindings)

    def _release_stream(self, stream: ClosableStream) -> None:
        """Flush and close an owned stream; close runs even if flush fails."""
        failed: tuple[str, Exception] | None = None
        for name in ("flush", "close"):
            try:
                getattr(stream, name)()
            except Exception as e:
                self._logger.error(f"end_doc: stream.{name} failed: {e}")
                if failed is None:
                    failed = (name, e)
        if failed is not None:
            name, error = failed
            raise WriteFailure("end_doc", f"stream.{name}") from error


def _slice(text: str, start: int, length: int | None) -> str:
    end = len(text) if length is None else start + length
    if start < 0 or end < start or end > len(text):
        raise ValueError(
            f"range start={start} length={length} is outside text of length {len(text)}"
        )
    return text[start:end]
