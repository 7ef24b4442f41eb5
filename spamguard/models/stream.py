"""Typed events carried on the chat event stream.

Every stream opens with a single ``connected`` event and ends with exactly one
``done`` or ``error`` event. ``token`` events only appear between ``tool_end``
and ``done``.
"""

from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


class ConnectedEvent(BaseModel):
    type: Literal["connected"] = "connected"


class ToolStartEvent(BaseModel):
    type: Literal["tool_start"] = "tool_start"
    tool: str
    input: Dict[str, Any]


class ToolEndEvent(BaseModel):
    type: Literal["tool_end"] = "tool_end"
    tool: str
    output: Dict[str, Any]


class TokenEvent(BaseModel):
    type: Literal["token"] = "token"
    token: str


class DoneEvent(BaseModel):
    type: Literal["done"] = "done"


class ErrorEvent(BaseModel):
    type: Literal["error"] = "error"
    error: str


StreamMessage = Annotated[
    Union[ConnectedEvent, ToolStartEvent, ToolEndEvent, TokenEvent, DoneEvent, ErrorEvent],
    Field(discriminator="type"),
]

TERMINAL_EVENT_TYPES = frozenset({"done", "error"})

_stream_message_adapter: TypeAdapter = TypeAdapter(StreamMessage)


def parse_stream_message(payload: Any) -> BaseModel:
    """Validate a decoded event payload into its concrete event model."""
    if isinstance(payload, (str, bytes)):
        return _stream_message_adapter.validate_json(payload)
    return _stream_message_adapter.validate_python(payload)
