"""What the open marker editor will do on save."""

from dataclasses import dataclass
from typing import Union

from ..models.inspection import DiagramView


@dataclass(frozen=True)
class Creating:
    """Save adds a new marker at a pending position."""
    view: DiagramView
    x: float
    y: float


@dataclass(frozen=True)
class Editing:
    """Save updates the descriptive fields of an existing marker."""
    marker_id: str


EditorIntent = Union[Creating, Editing]
