"""Unit tests for configuration and constants."""

from __future__ import annotations

from pathlib import Path

import pytest

from streamxml.config import ConfigLoader, WriterConfig
from streamxml.constants import Constraints, Defaults, Namespaces


class TestWriterConfig:
    def test_default_config(self):
        config = WriterConfig()

        assert config.xml_version == "1.0"
        assert config.encoding is None
        assert config.default_namespace is None
        assert config.namespaces == {}

    def test_custom_config(self):
        config = WriterConfig(
            xml_version="1.1",
            encoding="UTF-8",
            default_namespace="http://x/quux",
            namespaces={"foo": "http://x/foo"},
        )

        assert config.xml_version == "1.1"
        assert config.encoding == "UTF-8"
        assert config.default_namespace == "http://x/quux"
        assert config.namespaces == {"foo": "http://x/foo"}

    def test_config_is_immutable(self):
        config = WriterConfig()

        with pytest.raises(Exception):  # FrozenInstanceError
            config.xml_version = "1.1"

    @pytest.mark.parametrize("version", ["2.0", "1", ""])
    def test_unsupported_xml_version(self, version):
        with pytest.raises(ValueError, match="xml_version"):
            WriterConfig(xml_version=version)

    def test_blank_encoding(self):
        with pytest.raises(ValueError, match="encoding"):
            WriterConfig(encoding="  ")

    def test_invalid_namespace_prefix(self):
        with pytest.raises(ValueError, match="invalid namespace binding"):
            WriterConfig(namespaces={"a:b": "http://x/ab"})

    def test_config_from_env(self, monkeypatch):
        monkeypatch.setenv("STREAMXML_XML_VERSION", "1.1")
        monkeypatch.setenv("STREAMXML_ENCODING", " UTF-8 ")
        monkeypatch.setenv("STREAMXML_DEFAULT_NAMESPACE", "http://env/ns")

        config = WriterConfig.from_env()

        assert config.xml_version == "1.1"
        assert config.encoding == "UTF-8"
        assert config.default_namespace == "http://env/ns"

    def test_config_from_empty_env(self):
        assert WriterConfig.from_env() == WriterConfig()


class TestConfigLoader:
    def test_load_with_no_toml_file(self):
        config = ConfigLoader.load(config_file=Path("/nonexistent/streamxml.toml"))

        assert config.xml_version == "1.0"
        assert config.namespaces == {}

    def test_load_from_toml(self, tmp_path: Path):
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text(
            """
[document]
xml_version = "1.1"
encoding = "UTF-8"
default_namespace = "http://x/quux"

[namespaces]
foo = "http://x/foo"
bar = "http://x/bar"
"""
        )

        config = ConfigLoader.load(config_file=toml_file)

        assert config.xml_version == "1.1"
        assert config.encoding == "UTF-8"
        assert config.default_namespace == "http://x/quux"
        assert config.namespaces == {"foo": "http://x/foo", "bar": "http://x/bar"}

    def test_toml_overrides_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STREAMXML_ENCODING", "ISO-8859-1")
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text('[document]\nencoding = "UTF-8"\n')

        config = ConfigLoader.load(config_file=toml_file)

        assert config.encoding == "UTF-8"

    def test_toml_can_clear_encoding(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STREAMXML_ENCODING", "ISO-8859-1")
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text('[document]\nencoding = ""\n')

        config = ConfigLoader.load(config_file=toml_file)

        assert config.encoding is None

    def test_load_toml_with_partial_config(self, tmp_path: Path):
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text('[namespaces]\nxsi = "http://www.w3.org/2001/XMLSchema-instance"\n')

        config = ConfigLoader.load(config_file=toml_file)

        assert config.namespaces == {"xsi": Namespaces.XSI}
        assert config.xml_version == "1.0"

    def test_invalid_toml_warns_and_falls_back(self, tmp_path: Path):
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text("[document\nxml_version = ")

        with pytest.warns(UserWarning, match="Failed to load config"):
            config = ConfigLoader.load(config_file=toml_file)

        assert config == WriterConfig()

    def test_non_string_namespace_warns(self, tmp_path: Path):
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text("[namespaces]\nfoo = 3\n")

        with pytest.warns(UserWarning):
            config = ConfigLoader.load(config_file=toml_file)

        assert config.namespaces == {}

    def test_unsupported_version_in_toml_warns(self, tmp_path: Path):
        toml_file = tmp_path / "streamxml.toml"
        toml_file.write_text('[document]\nxml_version = "9.9"\n')

        with pytest.warns(UserWarning):
            config = ConfigLoader.load(config_file=toml_file)

        assert config.xml_version == "1.0"


class TestConstants:
    def test_defaults(self):
        assert Defaults.XML_VERSION == "1.0"
        assert Defaults.ENCODING is None
        assert Defaults.CONFIG_FILE == "streamxml.toml"

    def test_constraints(self):
        assert Constraints.SUPPORTED_XML_VERSIONS == ("1.0", "1.1")
        assert Constraints.RESERVED_PREFIXES == ("xml", "xmlns")
