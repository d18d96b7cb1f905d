"""In-memory stores for damage markers and the inventory checklist."""

from .markers import DamageMarkerStore
from .checklist import ChecklistStore

__all__ = ['DamageMarkerStore', 'ChecklistStore']
