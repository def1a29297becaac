from typing import Protocol, runtime_checkable


@runtime_checkable
class XmlSinkPort(Protocol):
    """Low-level streaming XML emitter the ElementWriter drives.

    Implementations own escaping, tag serialization and the stack of open
    elements. Any method may raise; the writer wraps the error.
    """

    def write_start_document(
        self, version: str | None = None, encoding: str | None = None
    ) -> None: ...

    def write_end_document(self) -> None: ...

    def write_start_element(
        self, local_name: str, namespace_uri: str | None = None
    ) -> None: ...

    def write_empty_element(
        self, local_name: str, namespace_uri: str | None = None
    ) -> None: ...

    def write_end_element(self) -> None: ...

    def write_attribute(
        self, local_name: str, value: str, namespace_uri: str | None = None
    ) -> None: ...

    def write_characters(self, text: str) -> None: ...

    def write_comment(self, text: str) -> None: ...

    def write_processing_instruction(
        self, target: str, data: str | None = None
    ) -> None: ...

    def write_entity_ref(self, name: str) -> None: ...

    def write_cdata(self, text: str) -> None: ...

    def write_dtd(self, text: str) -> None: ...

    def set_prefix(self, prefix: str, uri: str) -> None: ...

    def write_default_namespace(self, uri: str) -> None: ...

    def write_namespace(self, prefix: str, uri: str) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...
