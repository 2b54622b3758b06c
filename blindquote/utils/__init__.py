"""Utils package."""

from .errors import APIError, ErrorCode, raise_error, log_error
from .events import EventAggregator, EventType

__all__ = [
    "APIError",
    "ErrorCode",
    "raise_error",
    "log_error",
    "EventAggregator",
    "EventType",
]
