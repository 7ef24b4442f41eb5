"""Server-sent event relay for chat classification turns."""

from .encoder import EVENT_DELIMITER, EVENT_PREFIX, encode_event, write_event
from .relay import (
    CLASSIFIER_TOOL_NAME,
    RelayState,
    StreamingRelay,
    build_response_text,
    format_confidence,
    tokenize_response,
)
from .sink import SinkClosedError, StreamSink

__all__ = [
    "EVENT_DELIMITER",
    "EVENT_PREFIX",
    "encode_event",
    "write_event",
    "CLASSIFIER_TOOL_NAME",
    "RelayState",
    "StreamingRelay",
    "build_response_text",
    "format_confidence",
    "tokenize_response",
    "SinkClosedError",
    "StreamSink",
]
