"""Server-sent event framing for stream messages."""

from pydantic import BaseModel

from .sink import StreamSink

EVENT_PREFIX = "data: "
EVENT_DELIMITER = "\n\n"


def encode_event(message: BaseModel) -> str:
    """Frame a stream message as a single ``data:`` line."""
    return f"{EVENT_PREFIX}{message.model_dump_json()}{EVENT_DELIMITER}"


async def write_event(sink: StreamSink, message: BaseModel) -> None:
    """Append one encoded event to the sink.

    Write failures from the sink propagate to the caller unchanged.
    """
    await sink.write(encode_event(message))
