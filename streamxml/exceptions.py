"""Errors raised by the streaming writer.

Every failure surfaces immediately. Nothing is retried and output that
already reached the sink stays written.
"""


class StreamXmlError(Exception):
    pass


class LifecycleViolation(StreamXmlError):
    def __init__(self, operation: str, state: str, expected: str) -> None:
        super().__init__(
            f"ElementWriter.{operation} requires document state {expected}, "
            f"current state is {state}"
        )
        self.operation = operation
        self.state = state
        self.expected = expected


class UnknownNamespaceError(StreamXmlError):
    def __init__(self, prefix: str) -> None:
        super().__init__(f"Namespace {prefix} has not been mapped to a uri")
        self.prefix = prefix


class WriteFailure(StreamXmlError):
    """A sink primitive failed while serving a writer operation.

    ``operation`` names the ElementWriter method the caller invoked and
    ``primitive`` the sink (or owned stream) method that raised. The
    underlying error is chained as ``__cause__``.
    """

    def __init__(self, operation: str, primitive: str) -> None:
        super().__init__(
            f"ElementWriter.{operation} failed when calling {primitive}"
        )
        self.operation = operation
        self.primitive = primitive
