"""
Fuel gauge arc geometry.

The gauge is a top half-donut sweeping 180° from the left (value 0) to the
right (value 100), split into 8 equal segments. Angles use the math
convention (0° on the positive x axis, counter-clockwise positive); the SVG y
axis points down, so the sine term is negated when converting to cartesian.

All functions are pure. Callers clamp values into [0, 100] before calling;
out-of-range input saturates instead of raising.
"""

import math
from typing import NamedTuple, Tuple

SEGMENTS = 8
SEGMENT_VALUES: Tuple[int, ...] = (0, 13, 25, 38, 50, 63, 75, 88, 100)

CX = 100.0
CY = 100.0
R_OUTER = 88.0
R_INNER = 60.0
GAP_DEG = 2.5
HIT_PADDING = 8.0

TOTAL_ARC = 180.0
SEGMENT_ARC = TOTAL_ARC / SEGMENTS

TRACK_COLOR = "#E5E7EB"

# red (0) -> amber (2-3) -> lime (4) -> green (7)
SEGMENT_PALETTE: Tuple[str, ...] = (
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#eab308",
    "#84cc16",
    "#22c55e",
    "#16a34a",
    "#15803d",
)


class Point(NamedTuple):
    x: float
    y: float


def clamp_level(value: float) -> float:
    """Clamp a fuel reading into [0, 100]."""
    return min(100.0, max(0.0, float(value)))


def segments_lit(value: float) -> int:
    """
    Number of segments (0..8) lit for a fuel level.
    
    Segment ``i`` is lit once ``value`` reaches ``SEGMENT_VALUES[i + 1]``,
    except that any positive reading lights at least the first segment.
    """
    if value <= 0:
        return 0
    if value >= 100:
        return SEGMENTS
    for index in range(SEGMENTS, 0, -1):
        if value >= SEGMENT_VALUES[index]:
            return index
    return 1


def segment_value(index: int) -> int:
    """Fuel level reported when segment ``index`` is selected."""
    return SEGMENT_VALUES[_clamp_index(index) + 1]


def polar_to_cartesian(angle_deg: float, radius: float) -> Point:
    rad = math.radians(angle_deg)
    return Point(CX + radius * math.cos(rad), CY - radius * math.sin(rad))


def segment_angles(index: int, gap_deg: float = GAP_DEG) -> Tuple[float, float]:
    """Start and end angle of a segment, shrunk by half the gap on each side."""
    index = _clamp_index(index)
    start_deg = 180.0 - index * SEGMENT_ARC - gap_deg / 2
    end_deg = 180.0 - (index + 1) * SEGMENT_ARC + gap_deg / 2
    return start_deg, end_deg


def arc_path(
    start_deg: float,
    end_deg: float,
    r_outer: float = R_OUTER,
    r_inner: float = R_INNER
) -> str:
    """SVG path ``d`` attribute for a donut wedge between two angles."""
    outer_start = polar_to_cartesian(start_deg, r_outer)
    outer_end = polar_to_cartesian(end_deg, r_outer)
    inner_start = polar_to_cartesian(start_deg, r_inner)
    inner_end = polar_to_cartesian(end_deg, r_inner)
    
    # large-arc-flag is 0: every wedge spans less than 180°
    return " ".join([
        f"M {format_number(outer_start.x)} {format_number(outer_start.y)}",
        f"A {format_number(r_outer)} {format_number(r_outer)} 0 0 0 {format_number(outer_end.x)} {format_number(outer_end.y)}",
        f"L {format_number(inner_end.x)} {format_number(inner_end.y)}",
        f"A {format_number(r_inner)} {format_number(r_inner)} 0 0 1 {format_number(inner_start.x)} {format_number(inner_start.y)}",
        "Z",
    ])


def segment_path(index: int) -> str:
    """Outline of one of the 8 visible gauge segments."""
    start_deg, end_deg = segment_angles(index)
    return arc_path(start_deg, end_deg)


def hit_target_path(index: int) -> str:
    """Touch target for a segment: no gap and 8 units wider on both radii."""
    start_deg, end_deg = segment_angles(index, gap_deg=0.0)
    return arc_path(
        start_deg,
        end_deg,
        r_outer=R_OUTER + HIT_PADDING,
        r_inner=R_INNER - HIT_PADDING,
    )


def segment_color(index: int) -> str:
    """Palette colour for a lit segment."""
    return SEGMENT_PALETTE[_clamp_index(index)]


def segment_fill(index: int, value: float) -> str:
    """Fill for a segment at a given level: palette colour when lit, track colour otherwise."""
    if _clamp_index(index) < segments_lit(value):
        return segment_color(index)
    return TRACK_COLOR


def needle_angle(value: float) -> float:
    """Needle orientation in degrees: 180 at empty, 0 at full."""
    return 180.0 - (clamp_level(value) / 100.0) * 180.0


def needle_transform(value: float) -> str:
    """SVG rotate() transform for a needle drawn along the positive x axis."""
    # SVG rotates clockwise, so the math angle is negated
    return f"rotate({format_number(-needle_angle(value))} {format_number(CX)} {format_number(CY)})"


def _clamp_index(index: int) -> int:
    return min(SEGMENTS - 1, max(0, int(index)))


def format_number(number: float) -> str:
    """Compact SVG number: at most 3 decimals, no trailing zeros, no negative zero."""
    rounded = round(number, 3)
    if rounded == 0:
        rounded = 0.0
    text = f"{rounded:.3f}".rstrip("0").rstrip(".")
    return text or "0"
