from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from pydantic import ValidationError

from .constants import Constraints, Defaults, EnvVars
from .domain.namespaces import NamespaceBinding


@dataclass(frozen=True, slots=True)
class WriterConfig:
    xml_version: str = Defaults.XML_VERSION
    encoding: str | None = Defaults.ENCODING
    default_namespace: str | None = None
    namespaces: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.xml_version not in Constraints.SUPPORTED_XML_VERSIONS:
            raise ValueError(
                f"xml_version must be one of {Constraints.SUPPORTED_XML_VERSIONS}, "
                f"got {self.xml_version!r}"
            )
        if self.encoding is not None and not self.encoding.strip():
            raise ValueError("encoding must not be blank")
        for prefix, uri in self.namespaces.items():
            try:
                NamespaceBinding(prefix=prefix, uri=uri)
            except ValidationError as e:
                raise ValueError(f"invalid namespace binding {prefix!r}: {e}") from e

    @classmethod
    def from_env(cls) -> WriterConfig:
        raw_encoding = os.getenv(EnvVars.ENCODING)
        encoding = raw_encoding.strip() if raw_encoding else None
        raw_default_ns = os.getenv(EnvVars.DEFAULT_NAMESPACE)
        default_namespace = raw_default_ns.strip() if raw_default_ns else None
        return cls(
            xml_version=os.getenv(EnvVars.XML_VERSION, Defaults.XML_VERSION),
            encoding=encoding or None,
            default_namespace=default_namespace or None,
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> WriterConfig:
        config = WriterConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(config_file: Path, base_config: WriterConfig) -> WriterConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        document = _get_table(data, "document")
        namespaces_table = _get_table(data, "namespaces")
        xml_version = base_config.xml_version
        if (value := document.get("xml_version")) is not None:
            xml_version = str(value)
        encoding = base_config.encoding
        if "encoding" in document:
            encoding = _optional_str(document.get("encoding"))
        default_namespace = base_config.default_namespace
        if "default_namespace" in document:
            default_namespace = _optional_str(document.get("default_namespace"))
        namespaces = dict(base_config.namespaces)
        for prefix, uri in namespaces_table.items():
            if not isinstance(uri, str):
                raise ValueError(
                    f"namespaces.{prefix} must be a string, got {type(uri).__name__}"
                )
            namespaces[prefix] = uri
        return WriterConfig(
            xml_version=xml_version,
            encoding=encoding,
            default_namespace=default_namespace,
            namespaces=namespaces,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    cleaned = str(value).strip()
    return cleaned or None
