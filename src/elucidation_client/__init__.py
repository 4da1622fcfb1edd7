"""Reporter-side client for the Elucidation service."""
from src.elucidation_client.client import ElucidationClient
from src.elucidation_client.recorder import ElucidationRecorder
from src.elucidation_client.result import ElucidationResult, RecorderStatus
from src.elucidation_client.tracking import (
    InboundRequestTrackingMiddleware,
    endpoint_identifiers,
    track_app_endpoints,
)

__all__ = [
    "ElucidationClient",
    "ElucidationRecorder",
    "ElucidationResult",
    "InboundRequestTrackingMiddleware",
    "RecorderStatus",
    "endpoint_identifiers",
    "track_app_endpoints",
]
