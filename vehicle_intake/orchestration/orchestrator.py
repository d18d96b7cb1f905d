"""
Inspection orchestrator.

Composes the body type selector, diagram, marker editor, marker list,
checklist and fuel gauge around a single VehicleInspection value owned by
the parent form. Children never mutate that value: every change is turned
into a complete replacement and handed to ``on_change``.
"""

import logging
from typing import Callable, List, Optional

from ..components.body_type_selector import BodyTypeSelector
from ..components.diagram_view import AddRequested, MarkerSelected, VehicleDiagram
from ..components.fuel_gauge import FuelGauge
from ..components.marker_editor import MarkerEditor
from ..components.marker_list import DamageMarkerList
from ..geometry.hit_testing import CanvasRect, TapEvent
from ..models.inspection import (
    DamageMarker,
    DiagramView,
    InventoryCheckItem,
    VehicleBodyType,
    VehicleInspection,
    build_default_checklist,
    clamp_percent,
)
from ..photos.compression import ImageCompressor
from ..photos.manager import NoticeCallback
from ..photos.storage import PhotoStorage
from ..stores.checklist import ChecklistStore
from ..stores.markers import DamageMarkerStore
from ..utils.config import Config
from .intents import Creating, EditorIntent, Editing

logger = logging.getLogger(__name__)

InspectionCallback = Callable[[VehicleInspection], None]

_UNSET = object()


class InspectionOrchestrator:
    """
    Top-level controller for the vehicle intake inspection.
    
    The parent form supplies six props (value, fuel level and entry mileage,
    each with a change callback; body type with its callback) plus a
    read-only flag. Emitted values are adopted locally, as if the parent had
    re-rendered with them; :meth:`update_props` applies any other change the
    parent makes.
    
    Attributes:
        active_view: Diagram view currently shown
        intent: What the open editor will do on save, None when closed
        editor: Marker editor shared by all create/edit sessions
    """
    
    def __init__(
        self,
        value: Optional[VehicleInspection],
        on_change: InspectionCallback,
        fuel_level: float,
        on_fuel_level_change: Callable[[int], None],
        entry_mileage: str,
        on_entry_mileage_change: Callable[[str], None],
        body_type: Optional[VehicleBodyType],
        on_body_type_change: Callable[[VehicleBodyType], None],
        storage: PhotoStorage,
        compressor: ImageCompressor,
        read_only: bool = False,
        config: Optional[Config] = None,
        notify: Optional[NoticeCallback] = None
    ):
        """
        Initialize InspectionOrchestrator.
        
        Args:
            value: Current inspection record, None before the first change
            on_change: Receives every complete replacement of the record
            fuel_level: Current fuel level, 0-100
            on_fuel_level_change: Receives the selected fuel level
            entry_mileage: Current mileage as typed
            on_entry_mileage_change: Receives the new mileage text
            body_type: Selected body type, None until chosen
            on_body_type_change: Receives a newly selected body type
            storage: Photo storage collaborator
            compressor: Photo compression collaborator
            read_only: Disable every mutation
            config: Configuration; defaults are used when omitted
            notify: Optional callback for user-facing notices
        """
        self.config = config or Config.default()
        self.value = value
        self.on_change = on_change
        self.fuel_level = fuel_level
        self.on_fuel_level_change = on_fuel_level_change
        self.entry_mileage = entry_mileage
        self.on_entry_mileage_change = on_entry_mileage_change
        self.body_type = VehicleBodyType(body_type) if body_type is not None else None
        self.on_body_type_change = on_body_type_change
        self.read_only = read_only
        
        self.active_view = DiagramView.TOP
        self.intent: Optional[EditorIntent] = None
        self.editor = MarkerEditor(
            storage=storage,
            compressor=compressor,
            photo_config=self.config.photos,
            notify=notify,
        )
        self._default_checklist: Optional[List[InventoryCheckItem]] = None
        self._auto_view_done = False
        
        self._auto_select_view()
        logger.info(
            f"Initialized InspectionOrchestrator: "
            f"body_type={self.body_type.value if self.body_type else None}, "
            f"markers={len(self.markers)}, read_only={self.read_only}"
        )
    
    # Parent props
    
    def update_props(
        self,
        value=_UNSET,
        fuel_level=_UNSET,
        entry_mileage=_UNSET,
        body_type=_UNSET,
        read_only=_UNSET
    ) -> None:
        """Apply props changed by the parent form."""
        if value is not _UNSET:
            self.value = value
        if fuel_level is not _UNSET:
            self.fuel_level = fuel_level
        if entry_mileage is not _UNSET:
            self.entry_mileage = entry_mileage
        if body_type is not _UNSET:
            self.body_type = VehicleBodyType(body_type) if body_type is not None else None
        if read_only is not _UNSET:
            self.read_only = read_only
        self._auto_select_view()
    
    # Read views
    
    @property
    def markers(self) -> List[DamageMarker]:
        return list(self.value.markers) if self.value else []
    
    @property
    def checklist(self) -> List[InventoryCheckItem]:
        """Checklist of the record, or a default one created once and reused until emitted."""
        if self.value and self.value.checklist:
            return list(self.value.checklist)
        return list(self._get_default_checklist())
    
    @property
    def editor_open(self) -> bool:
        return self.editor.is_open
    
    @property
    def body_type_selector(self) -> BodyTypeSelector:
        return BodyTypeSelector(self.body_type, self.select_body_type, read_only=self.read_only)
    
    @property
    def diagram(self) -> Optional[VehicleDiagram]:
        """Diagram for the active view; None until a body type is selected."""
        if self.body_type is None:
            return None
        return VehicleDiagram(
            body_type=self.body_type,
            markers=self.markers,
            active_view=self.active_view,
            read_only=self.read_only,
            on_view_change=self.select_view,
        )
    
    @property
    def marker_list(self) -> DamageMarkerList:
        return DamageMarkerList(
            self.markers,
            on_edit=lambda marker: self.begin_edit(marker.id),
            on_delete=self.delete_marker,
            read_only=self.read_only,
        )
    
    @property
    def checklist_store(self) -> ChecklistStore:
        return ChecklistStore(self.checklist, on_change=self._emit_checklist)
    
    @property
    def fuel_gauge(self) -> FuelGauge:
        return FuelGauge(self.fuel_level, self.set_fuel_level, read_only=self.read_only)
    
    # Body type
    
    def select_body_type(self, body_type: VehicleBodyType) -> None:
        """
        Change the body type, keeping existing markers and checklist.
        
        The first selection on an empty record emits a blank inspection.
        """
        if self.read_only:
            return
        
        body_type = VehicleBodyType(body_type)
        self.on_body_type_change(body_type)
        self.body_type = body_type
        
        if self.value is not None:
            inspection = self.value.with_changes(vehicle_type=body_type)
        else:
            inspection = self._blank_inspection(body_type)
        logger.info(f"Body type set to {body_type.value}")
        self._adopt(inspection)
    
    # Diagram
    
    def select_view(self, view: DiagramView) -> None:
        self.active_view = DiagramView(view)
    
    def tap_diagram(self, event: TapEvent, rect: CanvasRect) -> bool:
        """
        Route a tap on the diagram canvas.
        
        A tap on a pin opens that marker for editing; a tap on empty canvas
        opens the editor to create a marker at the tapped position.
        
        Returns:
            True when the editor was opened
        """
        diagram = self.diagram
        if diagram is None or self.read_only:
            return False
        
        action = diagram.handle_tap(event, rect)
        if isinstance(action, MarkerSelected):
            return self.begin_edit(action.marker.id)
        if isinstance(action, AddRequested):
            return self.begin_add(action.view, action.x, action.y)
        return False
    
    def begin_add(self, view: DiagramView, x: float, y: float) -> bool:
        """Hold a pending position and open the editor in create mode."""
        if self.read_only or self.body_type is None:
            return False
        
        self.intent = Creating(view=DiagramView(view), x=clamp_percent(x), y=clamp_percent(y))
        self.editor.open()
        logger.debug(f"Pending marker on {self.intent.view.value} at ({self.intent.x:.1f}, {self.intent.y:.1f})")
        return True
    
    def begin_edit(self, marker_id: str) -> bool:
        """Open the editor on an existing marker."""
        if self.read_only:
            return False
        
        marker = self._marker_store().get(marker_id)
        if marker is None:
            logger.debug(f"Ignoring edit of unknown marker {marker_id}")
            return False
        
        self.intent = Editing(marker_id=marker.id)
        self.editor.open(marker.attributes, group_key=marker.id)
        return True
    
    # Editor
    
    def save_editor(self) -> Optional[DamageMarker]:
        """
        Close the editor and apply its intent.
        
        Returns:
            The created or updated marker, None when nothing changed
        """
        attributes = self.editor.save()
        intent = self.intent
        self.intent = None
        if attributes is None or intent is None or self.body_type is None:
            return None
        
        store = self._marker_store()
        if isinstance(intent, Editing):
            return store.update(intent.marker_id, attributes)
        return store.add(intent.view, intent.x, intent.y, attributes)
    
    def cancel_editor(self) -> None:
        self.editor.cancel()
        self.intent = None
    
    # Markers
    
    def delete_marker(self, marker_id: str) -> bool:
        if self.read_only or self.body_type is None:
            return False
        return self._marker_store().remove(marker_id)
    
    # Checklist
    
    def toggle_checklist_item(self, item_id: str) -> Optional[InventoryCheckItem]:
        if self.read_only or self.body_type is None:
            return None
        return self.checklist_store.toggle(item_id)
    
    def set_checklist_notes(self, item_id: str, text: str) -> Optional[InventoryCheckItem]:
        if self.read_only or self.body_type is None:
            return None
        return self.checklist_store.set_notes(item_id, text)
    
    # Fuel and mileage
    
    def set_fuel_level(self, level: int) -> None:
        if self.read_only:
            return
        self.fuel_level = level
        self.on_fuel_level_change(level)
    
    def select_fuel_segment(self, index: int) -> bool:
        return self.fuel_gauge.select_segment(index)
    
    def set_entry_mileage(self, text: str) -> None:
        """Forward the mileage text verbatim; validation belongs to the form."""
        if self.read_only:
            return
        self.entry_mileage = text
        self.on_entry_mileage_change(text)
    
    # Internals
    
    def _marker_store(self) -> DamageMarkerStore:
        return DamageMarkerStore(self.markers, on_change=self._emit_markers, body_type=self.body_type)
    
    def _emit_markers(self, markers: List[DamageMarker]) -> None:
        self._emit(markers=markers)
    
    def _emit_checklist(self, items: List[InventoryCheckItem]) -> None:
        self._emit(checklist=items)
    
    def _emit(self, markers=None, checklist=None) -> None:
        if self.body_type is None:
            return
        base = self.value or self._blank_inspection(self.body_type)
        self._adopt(base.with_changes(markers=markers, checklist=checklist))
    
    def _adopt(self, inspection: VehicleInspection) -> None:
        self.value = inspection
        if inspection.checklist:
            self._default_checklist = None
        self.on_change(inspection)
    
    def _blank_inspection(self, body_type: VehicleBodyType) -> VehicleInspection:
        return VehicleInspection(
            vehicle_type=body_type,
            markers=(),
            checklist=tuple(self._get_default_checklist()),
        )
    
    def _get_default_checklist(self) -> List[InventoryCheckItem]:
        if self._default_checklist is None:
            self._default_checklist = build_default_checklist(self.config.checklist.items)
        return self._default_checklist
    
    def _auto_select_view(self) -> None:
        """In read-only mode, show the first view holding a marker, once."""
        if self._auto_view_done or not self.read_only:
            return
        
        views = self._marker_store().views_with_markers()
        if views:
            self.active_view = views[0]
            self._auto_view_done = True
            logger.debug(f"Read-only view auto-selected: {self.active_view.value}")
