"""Interactive fuel gauge built on the gauge geometry."""

import logging
from dataclasses import dataclass
from typing import Callable, List

from ..geometry import fuel_gauge as geometry

logger = logging.getLogger(__name__)

QUICK_LABELS = {0: "E", 3: "½", 7: "F"}


@dataclass(frozen=True)
class GaugeSegment:
    index: int
    value: int
    path: str
    hit_path: str
    fill: str
    filled: bool


@dataclass(frozen=True)
class QuickSelectButton:
    index: int
    value: int
    label: str
    filled: bool
    active: bool
    color: str


def format_level(value: float) -> str:
    """Display label: ``E`` when empty, ``F`` when full, otherwise ``N%``."""
    if value <= 0:
        return "E"
    if value >= 100:
        return "F"
    number = int(value) if float(value).is_integer() else value
    return f"{number}%"


class FuelGauge:
    """
    Eight-segment semicircular fuel gauge.
    
    Selecting segment ``i`` reports the threshold ``SEGMENT_VALUES[i + 1]``
    through ``on_change``. The incoming value is clamped before display.
    """
    
    def __init__(
        self,
        value: float,
        on_change: Callable[[int], None],
        read_only: bool = False
    ):
        self.value = geometry.clamp_level(value)
        self.on_change = on_change
        self.read_only = read_only
    
    @property
    def lit_count(self) -> int:
        return geometry.segments_lit(self.value)
    
    @property
    def display_label(self) -> str:
        return format_level(self.value)
    
    @property
    def aria_label(self) -> str:
        return f"Nivel de combustible: {self.display_label}"
    
    @property
    def needle_transform(self) -> str:
        return geometry.needle_transform(self.value)
    
    def segments(self) -> List[GaugeSegment]:
        lit = self.lit_count
        return [
            GaugeSegment(
                index=index,
                value=geometry.segment_value(index),
                path=geometry.segment_path(index),
                hit_path=geometry.hit_target_path(index),
                fill=geometry.segment_fill(index, self.value),
                filled=index < lit,
            )
            for index in range(geometry.SEGMENTS)
        ]
    
    def buttons(self) -> List[QuickSelectButton]:
        """Quick-select row; empty in read-only mode."""
        if self.read_only:
            return []
        
        lit = self.lit_count
        buttons = []
        for index in range(geometry.SEGMENTS):
            value = geometry.segment_value(index)
            active = value == self.value or (
                index == lit - 1 and 0 < self.value <= value
            )
            buttons.append(QuickSelectButton(
                index=index,
                value=value,
                label=QUICK_LABELS.get(index, "·"),
                filled=index < lit,
                active=active,
                color=geometry.segment_color(index),
            ))
        return buttons
    
    def select_segment(self, index: int) -> bool:
        """Report the level of segment ``index``; ignored in read-only mode."""
        if self.read_only:
            return False
        if not 0 <= index < geometry.SEGMENTS:
            logger.debug(f"Ignoring selection of unknown fuel segment {index}")
            return False
        
        value = geometry.segment_value(index)
        self.value = float(value)
        self.on_change(value)
        return True
