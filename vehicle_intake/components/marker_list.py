"""Damage markers listed by view, with edit/delete actions."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..models.inspection import DamageMarker, DiagramView
from ..models.vocabulary import (
    damage_type_color,
    damage_type_label,
    pluralize,
    severity_color,
    severity_label,
    view_label,
)
from ..stores.markers import DamageMarkerStore

# Section order of the list; differs from the diagram tab order
LIST_VIEW_ORDER: Tuple[DiagramView, ...] = (
    DiagramView.FRONT,
    DiagramView.TOP,
    DiagramView.LEFT,
    DiagramView.RIGHT,
)

EMPTY_MESSAGE = "No se han marcado daños"


@dataclass(frozen=True)
class MarkerRow:
    marker: DamageMarker
    type_label: str
    type_color: str
    severity_label: str
    severity_color: str
    photo_summary: Optional[str]
    can_edit: bool
    can_delete: bool
    
    @property
    def description(self) -> str:
        return self.marker.description


@dataclass(frozen=True)
class ViewGroup:
    view: DiagramView
    label: str
    rows: List[MarkerRow]
    
    @property
    def count_label(self) -> str:
        return pluralize(len(self.rows), "daño")


class DamageMarkerList:
    """
    Read model of all markers grouped by view.
    
    Groups follow ``LIST_VIEW_ORDER``; markers keep insertion order within
    each group and views without markers are left out.
    """
    
    def __init__(
        self,
        markers: Sequence[DamageMarker],
        on_edit: Optional[Callable[[DamageMarker], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        read_only: bool = False
    ):
        self.markers = list(markers)
        self.on_edit = on_edit
        self.on_delete = on_delete
        self.read_only = read_only
    
    @property
    def header_count(self) -> Optional[str]:
        if not self.markers:
            return None
        return pluralize(len(self.markers), "daño")
    
    @property
    def empty_message(self) -> Optional[str]:
        return None if self.markers else EMPTY_MESSAGE
    
    def groups(self) -> List[ViewGroup]:
        grouped = DamageMarkerStore(self.markers).grouped(LIST_VIEW_ORDER)
        return [
            ViewGroup(view=view, label=view_label(view), rows=[self._row(marker) for marker in markers])
            for view, markers in grouped.items()
            if markers
        ]
    
    def edit(self, marker_id: str) -> bool:
        marker = self._find(marker_id)
        if marker is None or self.read_only or self.on_edit is None:
            return False
        self.on_edit(marker)
        return True
    
    def delete(self, marker_id: str) -> bool:
        if self._find(marker_id) is None or self.read_only or self.on_delete is None:
            return False
        self.on_delete(marker_id)
        return True
    
    def _row(self, marker: DamageMarker) -> MarkerRow:
        photo_count = len(marker.photo_urls)
        return MarkerRow(
            marker=marker,
            type_label=damage_type_label(marker.damage_type),
            type_color=damage_type_color(marker.damage_type),
            severity_label=severity_label(marker.severity),
            severity_color=severity_color(marker.severity),
            photo_summary=pluralize(photo_count, "foto") if photo_count else None,
            can_edit=not self.read_only and self.on_edit is not None,
            can_delete=not self.read_only and self.on_delete is not None,
        )
    
    def _find(self, marker_id: str) -> Optional[DamageMarker]:
        for marker in self.markers:
            if marker.id == marker_id:
                return marker
        return None
