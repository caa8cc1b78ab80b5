from typing import Sequence

from app.schemas.dashboard import ChartSegment
from app.utilities.utility import format_number

EMPTY_CHART_COLOR = "#dceaf2"


def build_chart_gradient(segments: Sequence[ChartSegment]) -> str:
    """
    Partition a full turn between segments in proportion to their values and
    return it as a CSS conic-gradient. A zero total yields a single
    placeholder colour over 360 degrees.
    """
    total = sum(segment.value for segment in segments)

    if total == 0:
        return f"conic-gradient({EMPTY_CHART_COLOR} 0deg, {EMPTY_CHART_COLOR} 360deg)"

    current = 0.0
    ranges = []
    for segment in segments:
        degree = (segment.value / total) * 360
        start = current
        current += degree
        ranges.append(f"{segment.color} {format_number(start)}deg {format_number(current)}deg")

    return f"conic-gradient({', '.join(ranges)})"


def build_line_path(values: Sequence[float], width: float, height: float, padding: float) -> str:
    """
    Map a series onto an SVG path (`M x y L x y ...`) inside a padded box.
    Values are normalized against the series maximum, never less than 1.
    """
    safe_max = max([*values, 1])
    usable_width = width - padding * 2
    usable_height = height - padding * 2
    steps = (len(values) - 1) or 1

    commands = []
    for index, value in enumerate(values):
        x = padding + (index / steps) * usable_width
        y = padding + ((safe_max - value) / safe_max) * usable_height
        commands.append(f"{'M' if index == 0 else 'L'} {format_number(x)} {format_number(y)}")

    return " ".join(commands)
