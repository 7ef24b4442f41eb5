"""HTTP client for the external spam classification service."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import httpx

from ..config import get_settings
from ..logging_config import get_logger

logger = get_logger(__name__)


class PredictionError(Exception):
    """Raised when a prediction could not be obtained."""


class UpstreamError(PredictionError):
    """The prediction service answered with a non-success status."""

    def __init__(self, status_code: int, detail: str = ""):
        self.status_code = status_code
        self.detail = detail
        message = f"Prediction service returned HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TransportError(PredictionError):
    """The prediction service could not be reached."""


@dataclass(frozen=True)
class PredictionResult:
    """Raw classifier output."""

    label: str
    confidence: float


class PredictionClient:
    """Issues a single classification request per call. No retries."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def predict_url(self) -> str:
        return f"{self.base_url}/predict"

    async def predict(self, text: str) -> PredictionResult:
        """Classify ``text`` and return the raw label and confidence."""

        logger.debug(f"Requesting prediction for {len(text)} characters")

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.predict_url,
                    json={"text": text},
                    headers={"Content-Type": "application/json"},
                )
            except httpx.TransportError as e:
                logger.error(f"Prediction service unreachable at {self.predict_url}: {e}")
                raise TransportError(f"Could not reach prediction service: {e}") from e

        if response.is_error:
            logger.error(
                f"Prediction service error {response.status_code}: {response.text[:200]}"
            )
            raise UpstreamError(response.status_code, response.reason_phrase)

        try:
            body = response.json()
            result = PredictionResult(
                label=str(body["class"]),
                confidence=float(body["confidence"]),
            )
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to parse prediction response: {e}")
            raise PredictionError("Prediction service returned an invalid response") from e

        logger.debug(f"Prediction received: class={result.label} confidence={result.confidence}")
        return result


@lru_cache(maxsize=1)
def get_prediction_client() -> PredictionClient:
    """Get the prediction client configured from settings."""
    settings = get_settings()
    return PredictionClient(
        base_url=settings.prediction_api_url,
        timeout=settings.prediction_api_timeout,
    )
