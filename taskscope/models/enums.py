"""
Enumerations for task events.
"""

from enum import Enum


class EventKind(str, Enum):
    """Span kind of a stored event"""

    INTERNAL = "INTERNAL"
    CLIENT = "CLIENT"
    SERVER = "SERVER"
    CONSUMER = "CONSUMER"
    PRODUCER = "PRODUCER"


class EventLevel(str, Enum):
    """Log level of a stored event; spans are always TRACE"""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class EventStatus(str, Enum):
    """Outcome of the span or log record"""

    OK = "OK"
    ERROR = "ERROR"
    UNSET = "UNSET"
