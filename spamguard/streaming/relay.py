"""Streaming relay: classifies one chat turn and streams the answer as events."""

import asyncio
import re
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Protocol, Set

from ..logging_config import get_logger
from ..models.stream import (
    ConnectedEvent,
    DoneEvent,
    ErrorEvent,
    TokenEvent,
    ToolEndEvent,
    ToolStartEvent,
)
from ..prediction_client import PredictionError, PredictionResult, translate_label
from .encoder import write_event
from .sink import SinkClosedError, StreamSink

logger = get_logger(__name__)

CLASSIFIER_TOOL_NAME = "spam_classifier"
GENERIC_ERROR_MESSAGE = "Failed to classify message"

RESPONSE_TEMPLATE = (
    "I analyzed your message and classified it as {label} "
    "with a confidence of {confidence}. "
    "{advice}"
)

_ADVICE = {
    "Legitimate": "It looks safe, but stay alert for unexpected requests.",
    "SPAM": "Treat it with caution and avoid clicking any links it contains.",
    "PHISHING": "Do not share passwords or personal details, and do not open its links.",
}
_DEFAULT_ADVICE = "Review it carefully before acting on it."

_TOKEN_PATTERN = re.compile(r"\S+\s*")

# Keeps running relay tasks referenced until they finish
_running_relays: Set["asyncio.Task[RelayState]"] = set()


class RelayState(Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    PREDICTING = "predicting"
    TRANSLATING = "translating"
    RESPONDING = "responding"
    PERSISTING = "persisting"
    ERRORED = "errored"
    CLOSED = "closed"


class MessageStore(Protocol):
    async def append_message(self, chat_id: str, role: str, content: str, user_id: str) -> None:
        ...


class Predictor(Protocol):
    async def predict(self, text: str) -> PredictionResult:
        ...


def format_confidence(confidence: float) -> str:
    """0.873 -> '87.30%'"""
    return f"{confidence * 100:.2f}%"


def build_response_text(label: str, confidence: float) -> str:
    """Fixed-template explanation for a translated classification."""
    return RESPONSE_TEMPLATE.format(
        label=label,
        confidence=format_confidence(confidence),
        advice=_ADVICE.get(label, _DEFAULT_ADVICE),
    )


def tokenize_response(text: str) -> List[str]:
    """Split text into word tokens that keep their trailing whitespace."""
    return _TOKEN_PATTERN.findall(text)


class StreamingRelay:
    """Drives one request from ``connected`` to a closed sink."""

    def __init__(
        self,
        store: MessageStore,
        predictor: Predictor,
        token_delay: float = 0.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.store = store
        self.predictor = predictor
        self.token_delay = token_delay
        self.sleep = sleep
        self.state = RelayState.IDLE
        self.response_text: Optional[str] = None

    def start(
        self, chat_id: str, content: str, sink: StreamSink, user_id: str
    ) -> "asyncio.Task[RelayState]":
        """Schedule :meth:`run` on the running loop."""
        task = asyncio.create_task(self.run(chat_id, content, sink, user_id))
        _running_relays.add(task)
        task.add_done_callback(_running_relays.discard)
        return task

    async def run(self, chat_id: str, content: str, sink: StreamSink, user_id: str) -> RelayState:
        """Run the full lifecycle and return the state it ended in before closing.

        Never raises; the sink is always closed.
        """

        try:
            await self._emit(sink, ConnectedEvent(), RelayState.CONNECTED)
            try:
                await self._pipeline(chat_id, content, sink, user_id)
            except SinkClosedError:
                raise
            except PredictionError as e:
                logger.error(f"Prediction failed for chat {chat_id}: {e}")
                await self._emit(sink, ErrorEvent(error=str(e)), RelayState.ERRORED)
            except Exception:
                logger.exception(f"Relay pipeline failed for chat {chat_id}")
                await self._emit(sink, ErrorEvent(error=GENERIC_ERROR_MESSAGE), RelayState.ERRORED)
            else:
                await self._persist_response(chat_id, user_id)
        except SinkClosedError as e:
            logger.warning(f"Stream for chat {chat_id} ended early in state {self.state.value}: {e}")
        finally:
            ended_in = self.state
            try:
                await sink.close()
            except SinkClosedError as e:
                logger.warning(f"Failed to close stream for chat {chat_id}: {e}")
            self.state = RelayState.CLOSED

        return ended_in

    async def _pipeline(self, chat_id: str, content: str, sink: StreamSink, user_id: str) -> None:
        await self.store.append_message(chat_id, "user", content, user_id)

        await self._emit(
            sink,
            ToolStartEvent(tool=CLASSIFIER_TOOL_NAME, input={"text": content}),
            RelayState.PREDICTING,
        )
        prediction = await self.predictor.predict(content)

        self.state = RelayState.TRANSLATING
        label = translate_label(prediction.label)
        logger.info(f"Chat {chat_id} classified as {label} ({format_confidence(prediction.confidence)})")
        await write_event(
            sink,
            ToolEndEvent(
                tool=CLASSIFIER_TOOL_NAME,
                output={"class": label, "confidence": prediction.confidence},
            ),
        )

        self.state = RelayState.RESPONDING
        self.response_text = build_response_text(label, prediction.confidence)
        tokens = tokenize_response(self.response_text)
        for index, token in enumerate(tokens):
            await write_event(sink, TokenEvent(token=token))
            if self.token_delay > 0 and index < len(tokens) - 1:
                await self.sleep(self.token_delay)

        await write_event(sink, DoneEvent())

    async def _persist_response(self, chat_id: str, user_id: str) -> None:
        # Runs after ``done``; failures are logged only
        self.state = RelayState.PERSISTING
        try:
            await self.store.append_message(chat_id, "assistant", self.response_text, user_id)
        except Exception:
            logger.exception(f"Failed to persist response for chat {chat_id}")

    async def _emit(self, sink: StreamSink, event, state: RelayState) -> None:
        self.state = state
        await write_event(sink, event)
