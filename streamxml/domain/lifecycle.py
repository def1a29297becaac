from enum import StrEnum


class DocumentState(StrEnum):
    NOT_STARTED = "not_started"
    OPEN = "open"
    ENDED = "ended"
