"""Client for the external classification service."""

from .client import (
    PredictionClient,
    PredictionError,
    PredictionResult,
    TransportError,
    UpstreamError,
    get_prediction_client,
)
from .labels import LABEL_NAMES, translate_label

__all__ = [
    "PredictionClient",
    "PredictionError",
    "PredictionResult",
    "TransportError",
    "UpstreamError",
    "get_prediction_client",
    "LABEL_NAMES",
    "translate_label",
]
