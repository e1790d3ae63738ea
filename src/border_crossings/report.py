"""Text rendering of border crossings"""

from email.utils import format_datetime
from typing import Optional, Sequence

from .models import BorderCrossing
from .regions import region_sort_key

INDENT = "    |"


def format_duration(crossing: BorderCrossing, next_crossing: Optional[BorderCrossing]) -> str:
    """Whole days until the next crossing, truncated; unknown for the last one"""
    if next_crossing is None:
        return f"{INDENT} Duration Unknown"
    days = crossing.duration_until(next_crossing).days
    return f"{INDENT} Duration: {days} Days"


def format_crossing(
    crossing: BorderCrossing, next_crossing: Optional[BorderCrossing] = None
) -> str:
    """
    Render one crossing as a block of text.

    The block holds the RFC 2822 timestamp, one line per region newly in
    effect and the time spent there before ``next_crossing``.
    """
    lines = [format_datetime(crossing.timestamp), INDENT]
    lines.extend(
        f"{INDENT} {region.display_name}"
        for region in sorted(crossing.new_regions, key=region_sort_key)
    )
    lines.append(format_duration(crossing, next_crossing))
    lines.append(INDENT)
    return "\n".join(lines) + "\n"


def format_report(crossings: Sequence[BorderCrossing]) -> str:
    """Render every crossing, each followed by its duration until the next"""
    blocks = []
    for i, crossing in enumerate(crossings):
        next_crossing = crossings[i + 1] if i + 1 < len(crossings) else None
        blocks.append(format_crossing(crossing, next_crossing))
    return "".join(blocks)
