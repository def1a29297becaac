from typing import ClassVar


class Defaults:
    XML_VERSION = "1.0"
    ENCODING = None
    CONFIG_FILE = "streamxml.toml"


class Constraints:
    SUPPORTED_XML_VERSIONS: ClassVar[tuple[str, ...]] = ("1.0", "1.1")
    RESERVED_PREFIXES: ClassVar[tuple[str, ...]] = ("xml", "xmlns")


class Namespaces:
    XML = "http://www.w3.org/XML/1998/namespace"
    XMLNS = "http://www.w3.org/2000/xmlns/"
    XSI = "http://www.w3.org/2001/XMLSchema-instance"


class EnvVars:
    XML_VERSION = "STREAMXML_XML_VERSION"
    ENCODING = "STREAMXML_ENCODING"
    DEFAULT_NAMESPACE = "STREAMXML_DEFAULT_NAMESPACE"
