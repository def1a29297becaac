from ...exceptions import StreamXmlError


class SinkError(StreamXmlError):
    pass
