"""Elucidation engine services."""

from src.elucidation.services.correlation import CorrelationEngine
from src.elucidation.services.relationship_service import RelationshipService
from src.elucidation.services.tracked_identifier_service import (
    TrackedConnectionIdentifierService,
)

__all__ = [
    "CorrelationEngine",
    "RelationshipService",
    "TrackedConnectionIdentifierService",
]
