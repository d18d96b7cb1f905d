"""Four-way exclusive body type choice."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models.inspection import VehicleBodyType
from ..models.vocabulary import body_type_label, exhaustive

logger = logging.getLogger(__name__)

# Icon names from the lucide icon set
BODY_TYPE_ICONS = exhaustive(VehicleBodyType, {
    VehicleBodyType.SEDAN: "car",
    VehicleBodyType.PICKUP: "truck",
    VehicleBodyType.SUV: "car-front",
    VehicleBodyType.VAN: "bus",
})


@dataclass(frozen=True)
class BodyTypeOption:
    body_type: VehicleBodyType
    label: str
    icon: str
    selected: bool
    enabled: bool


class BodyTypeSelector:
    """Single-selection radio group over the four body types."""
    
    def __init__(
        self,
        value: Optional[VehicleBodyType],
        on_change: Callable[[VehicleBodyType], None],
        read_only: bool = False
    ):
        self.value = VehicleBodyType(value) if value is not None else None
        self.on_change = on_change
        self.read_only = read_only
    
    def options(self) -> List[BodyTypeOption]:
        return [
            BodyTypeOption(
                body_type=body_type,
                label=body_type_label(body_type),
                icon=BODY_TYPE_ICONS[body_type],
                selected=body_type == self.value,
                enabled=not self.read_only,
            )
            for body_type in VehicleBodyType
        ]
    
    def select(self, body_type: VehicleBodyType) -> bool:
        """Report a new selection; ignored in read-only mode."""
        if self.read_only:
            return False
        self.value = VehicleBodyType(body_type)
        logger.debug(f"Body type selected: {self.value.value}")
        self.on_change(self.value)
        return True
