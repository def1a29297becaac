from collections.abc import Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import Constraints, Namespaces
from ..exceptions import UnknownNamespaceError


class NamespaceBinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefix: str = Field(min_length=1)
    uri: str

    @field_validator("prefix")
    @classmethod
    def _check_prefix(cls, value: str) -> str:
        if ":" in value or any(ch.isspace() for ch in value):
            raise ValueError(f"prefix must be an NCName, got {value!r}")
        return value

    @model_validator(mode="after")
    def _check_reserved(self) -> "NamespaceBinding":
        # 'xml' may only be bound to its own namespace; 'xmlns' never
        if self.prefix == "xml":
            if self.uri != Namespaces.XML:
                raise ValueError(f"prefix 'xml' can only be bound to {Namespaces.XML}")
        elif self.prefix in Constraints.RESERVED_PREFIXES:
            raise ValueError(f"prefix {self.prefix!r} is reserved")
        elif self.uri in (Namespaces.XML, Namespaces.XMLNS):
            raise ValueError(f"{self.uri} cannot be bound to prefix {self.prefix!r}")
        return self


class NamespaceRegistry:
    """Prefix to URI bindings plus an optional default namespace.

    Bindings keep insertion order, which is also the order the root element
    declares them in. Re-binding a prefix replaces its URI in place.
    """

    def __init__(self, bindings: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self._bindings: dict[str, str] = {}
        self._default: str | None = None
        if bindings:
            self.bind_all(bindings)

    @property
    def default(self) -> str | None:
        return self._default

    def bind(self, prefix: str, uri: str) -> None:
        binding = NamespaceBinding(prefix=prefix, uri=uri)
        self._bindings[binding.prefix] = binding.uri

    def bind_all(self, mapping: Mapping[str, str]) -> None:
        for prefix, uri in mapping.items():
            self.bind(prefix, uri)

    def set_default(self, uri: str | None) -> None:
        self._default = uri

    def resolve(self, prefix: str) -> str:
        try:
            return self._bindings[prefix]
        except KeyError:
            raise UnknownNamespaceError(prefix) from None

    def all_bindings(self) -> list[tuple[str, str]]:
        return list(self._bindings.items())

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[NamespaceBinding]:
        for prefix, uri in self._bindings.items():
            yield NamespaceBinding(prefix=prefix, uri=uri)
