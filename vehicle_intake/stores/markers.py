"""In-memory damage marker collection with replace-whole-value emission."""

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.inspection import (
    VIEW_ORDER,
    DamageMarker,
    DiagramView,
    MarkerAttributes,
    VehicleBodyType,
    new_id,
)

logger = logging.getLogger(__name__)

MarkersCallback = Callable[[List[DamageMarker]], None]


class DamageMarkerStore:
    """
    Ordered collection of damage markers.
    
    The store never mutates a list it has handed out: every successful
    operation builds a new list and passes it to ``on_change``. Operations
    on unknown ids, and adds without a selected body type, are silent
    no-ops because they indicate a sequencing bug in the caller rather
    than a user-facing condition.
    
    Attributes:
        body_type: Currently selected body type; ``add`` requires one
    """
    
    def __init__(
        self,
        markers: Sequence[DamageMarker] = (),
        on_change: Optional[MarkersCallback] = None,
        body_type: Optional[VehicleBodyType] = None,
        id_factory: Callable[[], str] = new_id
    ):
        self._markers: List[DamageMarker] = list(markers)
        self._on_change = on_change
        self._id_factory = id_factory
        self.body_type = body_type
    
    @property
    def markers(self) -> List[DamageMarker]:
        return list(self._markers)
    
    def __len__(self) -> int:
        return len(self._markers)
    
    def get(self, marker_id: str) -> Optional[DamageMarker]:
        for marker in self._markers:
            if marker.id == marker_id:
                return marker
        return None
    
    def add(
        self,
        view: DiagramView,
        x: float,
        y: float,
        attributes: MarkerAttributes
    ) -> Optional[DamageMarker]:
        """
        Append a new marker with a freshly generated id.
        
        Args:
            view: Diagram view the marker belongs to
            x: Horizontal percentage, clamped into [0, 100]
            y: Vertical percentage, clamped into [0, 100]
            attributes: Descriptive fields from the marker editor
            
        Returns:
            The created marker, or None when no body type is selected
        """
        if self.body_type is None:
            logger.debug("Ignoring marker add: no body type selected")
            return None
        
        marker = DamageMarker.create(view, x, y, attributes, marker_id=self._id_factory())
        self._replace(self._markers + [marker])
        logger.info(
            f"Added marker {marker.id} on view={marker.view.value} "
            f"at ({marker.x:.1f}, {marker.y:.1f}) type={marker.damage_type.value}"
        )
        return marker
    
    def update(self, marker_id: str, attributes: MarkerAttributes) -> Optional[DamageMarker]:
        """
        Replace the descriptive fields of a marker; id, view, x and y are kept.
        
        Returns:
            The updated marker, or None when the id is unknown
        """
        updated: Optional[DamageMarker] = None
        new_markers: List[DamageMarker] = []
        for marker in self._markers:
            if marker.id == marker_id:
                updated = marker.with_attributes(attributes)
                new_markers.append(updated)
            else:
                new_markers.append(marker)
        
        if updated is None:
            logger.debug(f"Ignoring update for unknown marker {marker_id}")
            return None
        
        self._replace(new_markers)
        logger.info(f"Updated marker {marker_id}: severity={updated.severity.value}")
        return updated
    
    def remove(self, marker_id: str) -> bool:
        """Filter the marker with ``marker_id`` out of the collection."""
        remaining = [marker for marker in self._markers if marker.id != marker_id]
        if len(remaining) == len(self._markers):
            logger.debug(f"Ignoring remove for unknown marker {marker_id}")
            return False
        
        self._replace(remaining)
        logger.info(f"Removed marker {marker_id}")
        return True
    
    def by_view(self, view: DiagramView) -> List[DamageMarker]:
        """Markers on ``view``, in insertion order."""
        view = DiagramView(view)
        return [marker for marker in self._markers if marker.view == view]
    
    def numbered(self, view: DiagramView) -> List[Tuple[int, DamageMarker]]:
        """Markers on ``view`` paired with their visible 1-based number."""
        return list(enumerate(self.by_view(view), start=1))
    
    def grouped(self, order: Sequence[DiagramView]) -> Dict[DiagramView, List[DamageMarker]]:
        """Markers per view, keyed in ``order``; views may map to an empty list."""
        return {view: self.by_view(view) for view in order}
    
    def views_with_markers(self) -> List[DiagramView]:
        """Views holding at least one marker, in diagram tab order."""
        seen = {marker.view for marker in self._markers}
        return [view for view in VIEW_ORDER if view in seen]
    
    def _replace(self, markers: List[DamageMarker]) -> None:
        self._markers = markers
        if self._on_change is not None:
            self._on_change(list(markers))
