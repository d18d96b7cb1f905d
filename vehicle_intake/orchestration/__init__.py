"""Orchestration layer composing the inspection components."""

from .intents import Creating, Editing, EditorIntent
from .orchestrator import InspectionOrchestrator

__all__ = [
    "Creating",
    "Editing",
    "EditorIntent",
    "InspectionOrchestrator"
]
