"""Application layer package."""

from plumage_batch.application.orchestrator import BatchOrchestrator
from plumage_batch.application.worker import RangeWorker, StdoutEmitter
from plumage_batch.application.factories import CollaboratorFactory, create_orchestrator_from_config

__all__ = [
    "BatchOrchestrator",
    "RangeWorker",
    "StdoutEmitter",
    "CollaboratorFactory",
    "create_orchestrator_from_config",
]
