"""Streaming XML sink over a text stream.

Writes markup directly to any object with a ``write(str)`` method while
keeping only the stack of open element names in memory. The start tag of
the most recently opened element stays pending until content follows, so
attributes and namespace declarations can still be appended to it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from typing_extensions import override
from xml.sax.saxutils import escape

from ...application.ports.sink import XmlSinkPort
from .exceptions import SinkError

if TYPE_CHECKING:
    from collections.abc import Sequence

_ATTR_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


class TextStream(Protocol):
    def write(self, text: str, /) -> object: ...


class StreamSink(XmlSinkPort):
    pass

    def __init__(self, stream: TextStream) -> None:
        super().__init__()
        self._stream = stream
        self._stack: list[str] = []
        self._prefixes: dict[str, str] = {}
        self._start_tag_open = False
        self._pending_empty = False
        self._document_started = False
        self._closed = False

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def open_elements(self) -> Sequence[str]:
        return tuple(self._stack)

    @property
    def closed(self) -> bool:
        return self._closed

    @override
    def write_start_document(
        self, version: str | None = None, encoding: str | None = None
    ) -> None:
        self._ensure_writable()
        if self._document_started:
            raise SinkError("XML declaration has already been written")
        declaration = f'<?xml version="{version or "1.0"}"'
        if encoding:
            declaration += f' encoding="{encoding}"'
        self._write(declaration + "?>")
        self._document_started = True

    @override
    def write_end_document(self) -> None:
        self._ensure_writable()
        self._finish_start_tag()
        while self._stack:
            self._write(f"</{self._stack.pop()}>")

    @override
    def write_start_element(
        self, local_name: str, namespace_uri: str | None = None
    ) -> None:
        qname = self._open_tag(local_name, namespace_uri)
        self._stack.append(qname)

    @override
    def write_empty_element(
        self, local_name: str, namespace_uri: str | None = None
    ) -> None:
        self._open_tag(local_name, namespace_uri)
        self._pending_empty = True

    @override
    def write_end_element(self) -> None:
        self._ensure_writable()
        self._finish_start_tag()
        if not self._stack:
            raise SinkError("No open element to close")
        self._write(f"</{self._stack.pop()}>")

    @override
    def write_attribute(
        self, local_name: str, value: str, namespace_uri: str | None = None
    ) -> None:
        self._ensure_writable()
        if not self._start_tag_open:
            raise SinkError(f"Attribute {local_name} written outside a start tag")
        name = self._qualify(local_name, namespace_uri)
        self._write(f' {name}="{escape(value, _ATTR_ENTITIES)}"')

    @override
    def write_characters(self, text: str) -> None:
        self._ensure_writable()
        self._finish_start_tag()
        self._write(escape(text))

    @override
    def write_comment(self, text: str) -> None:
        self._ensure_writable()
        if "--" in text or text.endswith("-"):
            raise SinkError("Comment text must not contain '--' or end with '-'")
        self._finish_start_tag()
        self._write(f"<!--{text}-->")

    @override
    def write_processing_instruction(
        self, target: str, data: str | None = None
    ) -> None:
        self._ensure_writable()
        if not target or target.lower() == "xml":
            raise SinkError(f"Invalid processing instruction target {target!r}")
        if data is not None and "?>" in data:
            raise SinkError("Processing instruction data must not contain '?>'")
        self._finish_start_tag()
        if data:
            self._write(f"<?{target} {data}?>")
        else:
            self._write(f"<?{target}?>")

    @override
    def write_entity_ref(self, name: str) -> None:
        self._ensure_writable()
        if not name or any(ch in name for ch in "&;<> "):
            raise SinkError(f"Invalid entity name {name!r}")
        self._finish_start_tag()
        self._write(f"&{name};")

    @override
    def write_cdata(self, text: str) -> None:
        self._ensure_writable()
        if "]]>" in text:
            raise SinkError("CDATA section must not contain ']]>'")
        self._finish_start_tag()
        self._write(f"<![CDATA[{text}]]>")

    @override
    def write_dtd(self, text: str) -> None:
        self._ensure_writable()
        self._finish_start_tag()
        self._write(text)

    @override
    def set_prefix(self, prefix: str, uri: str) -> None:
        self._ensure_writable()
        self._bind(prefix, uri)

    @override
    def write_default_namespace(self, uri: str) -> None:
        self._ensure_writable()
        if not self._start_tag_open:
            raise SinkError("Namespace declared outside a start tag")
        self._write(f' xmlns="{escape(uri, _ATTR_ENTITIES)}"')

    @override
    def write_namespace(self, prefix: str, uri: str) -> None:
        self._ensure_writable()
        if not self._start_tag_open:
            raise SinkError("Namespace declared outside a start tag")
        self._bind(prefix, uri)
        self._write(f' xmlns:{prefix}="{escape(uri, _ATTR_ENTITIES)}"')

    @override
    def flush(self) -> None:
        self._ensure_writable()
        self._finish_start_tag()
        flush = getattr(self._stream, "flush", None)
        if flush is not None:
            flush()

    @override
    def close(self) -> None:
        # the underlying stream belongs to whoever handed it in
        self._closed = True

    def _open_tag(self, local_name: str, namespace_uri: str | None) -> str:
        self._ensure_writable()
        if not local_name:
            raise SinkError("Element name must not be empty")
        qname = self._qualify(local_name, namespace_uri)
        self._finish_start_tag()
        self._write(f"<{qname}")
        self._start_tag_open = True
        return qname

    def _qualify(self, local_name: str, namespace_uri: str | None) -> str:
        if namespace_uri is None:
            return local_name
        prefix = self._prefix_for(namespace_uri)
        if prefix is None:
            raise SinkError(f"Namespace URI {namespace_uri} is not bound to a prefix")
        return f"{prefix}:{local_name}"

    def _bind(self, prefix: str, uri: str) -> None:
        if not prefix:
            raise SinkError("Namespace prefix must not be empty")
        self._prefixes.pop(prefix, None)
        self._prefixes[prefix] = uri

    def _prefix_for(self, namespace_uri: str) -> str | None:
        # most recent binding wins when several prefixes share a URI
        for prefix, uri in reversed(self._prefixes.items()):
            if uri == namespace_uri:
                return prefix
        return None

    def _finish_start_tag(self) -> None:
        if not self._start_tag_open:
            return
        self._write("/>" if self._pending_empty else ">")
        self._start_tag_open = False
        self._pending_empty = False

    def _ensure_writable(self) -> None:
        if self._closed:
            raise SinkError("Sink has been closed")

    def _write(self, text: str) -> None:
        self._stream.write(text)
