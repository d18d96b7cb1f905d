"""Inventory presence checklist."""

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence

from ..models.inspection import InventoryCheckItem, build_default_checklist

logger = logging.getLogger(__name__)

ChecklistCallback = Callable[[List[InventoryCheckItem]], None]


class ChecklistStore:
    """
    Fixed set of inventory items, mutated in place by id.
    
    Items are never added or removed individually; the full set is created
    once from the template via :meth:`from_template`.
    """
    
    def __init__(
        self,
        items: Sequence[InventoryCheckItem],
        on_change: Optional[ChecklistCallback] = None
    ):
        self._items: List[InventoryCheckItem] = list(items)
        self._on_change = on_change
    
    @classmethod
    def from_template(
        cls,
        labels: Sequence[str],
        on_change: Optional[ChecklistCallback] = None
    ) -> "ChecklistStore":
        return cls(build_default_checklist(labels), on_change=on_change)
    
    @property
    def items(self) -> List[InventoryCheckItem]:
        return list(self._items)
    
    @property
    def checked_count(self) -> int:
        return sum(1 for item in self._items if item.checked)
    
    def summary(self) -> str:
        """Presence summary, e.g. ``3 / 12 presentes``."""
        count = self.checked_count
        return f"{count} / {len(self._items)} presente{'' if count == 1 else 's'}"
    
    def get(self, item_id: str) -> Optional[InventoryCheckItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None
    
    def toggle(self, item_id: str) -> Optional[InventoryCheckItem]:
        """
        Flip ``checked``; unchecking clears ``notes`` in the same replacement.
        
        Returns:
            The updated item, or None when the id is unknown
        """
        def flip(item: InventoryCheckItem) -> InventoryCheckItem:
            checked = not item.checked
            return replace(item, checked=checked, notes=item.notes if checked else "")
        
        return self._apply(item_id, flip, action="toggle")
    
    def set_notes(self, item_id: str, text: str) -> Optional[InventoryCheckItem]:
        """
        Set the notes of an item. Allowed on unchecked items; the UI only
        offers the notes input while the item is checked.
        """
        return self._apply(item_id, lambda item: replace(item, notes=text), action="set_notes")
    
    def _apply(self, item_id, transform, action: str) -> Optional[InventoryCheckItem]:
        updated: Optional[InventoryCheckItem] = None
        new_items: List[InventoryCheckItem] = []
        for item in self._items:
            if item.id == item_id:
                updated = transform(item)
                new_items.append(updated)
            else:
                new_items.append(item)
        
        if updated is None:
            logger.debug(f"Ignoring checklist {action} for unknown item {item_id}")
            return None
        
        self._items = new_items
        logger.debug(f"Checklist {action}: '{updated.label}' checked={updated.checked}")
        if self._on_change is not None:
            self._on_change(list(new_items))
        return updated
