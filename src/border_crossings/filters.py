"""Filters applied around crossing detection.

Source exclusion and sorting run on samples before detection. The remaining
stages run on crossings after detection, in this fixed order:

1. drop missing-data crossings (optional)
2. drop crossings that only enter subdivisions (optional)
3. collapse consecutive duplicates (always)

Stages 2 and 3 compare each crossing with the nearest crossing that the same
stage has already kept, not with its neighbour in the unfiltered input, so
the order of the stages changes the result.
"""

from typing import Callable, Collection, Iterable, List, Sequence, TypeVar

from .logging import get_logger
from .models import BorderCrossing, LocationSample, Source

logger = get_logger(__name__)

T = TypeVar("T")


def exclude_sources(
    samples: Iterable[LocationSample], sources: Collection[Source]
) -> List[LocationSample]:
    """Drop every sample produced by one of ``sources``"""
    excluded = set(sources)
    kept = [s for s in samples if s.source not in excluded]
    if excluded:
        logger.info(
            "Excluded samples by source",
            sources=sorted(s.value for s in excluded),
            retained=len(kept),
        )
    return kept


def sort_samples(samples: Iterable[LocationSample]) -> List[LocationSample]:
    """Stable sort by timestamp"""
    return sorted(samples, key=lambda s: s.timestamp)


def retain_against_previous(
    items: Sequence[T], keep: Callable[[T, T], bool]
) -> List[T]:
    """
    Keep items by comparing each one with the last item kept so far.

    The first item is always kept since it has nothing to be compared with.

    Args:
        items: Ordered items
        keep: Predicate called as ``keep(current, last_kept)``

    Returns:
        The retained items, in their original order
    """
    retained: List[T] = []
    for item in items:
        if not retained or keep(item, retained[-1]):
            retained.append(item)
    return retained


def drop_missing_data(crossings: Iterable[BorderCrossing]) -> List[BorderCrossing]:
    """Drop crossings into the missing-data marker"""
    return [c for c in crossings if not c.is_missing_data]


def _enters_a_non_subregion(current: BorderCrossing, previous: BorderCrossing) -> bool:
    entered = current.new_regions - previous.new_regions
    return any(not region.is_subregion for region in entered)


def drop_subregion_crossings(crossings: Sequence[BorderCrossing]) -> List[BorderCrossing]:
    """Drop crossings whose newly entered regions are all subdivisions"""
    return retain_against_previous(crossings, _enters_a_non_subregion)


def _enters_anything(current: BorderCrossing, previous: BorderCrossing) -> bool:
    return bool(current.new_regions - previous.new_regions)


def collapse_consecutive_duplicates(
    crossings: Sequence[BorderCrossing],
) -> List[BorderCrossing]:
    """Drop crossings that enter nothing the last kept crossing did not already cover"""
    return retain_against_previous(crossings, _enters_anything)


def apply_crossing_filters(
    crossings: Sequence[BorderCrossing],
    ignore_missing_data: bool = False,
    ignore_subregions: bool = False,
) -> List[BorderCrossing]:
    """Run the post-detection stages in their fixed order"""
    filtered = list(crossings)
    if ignore_missing_data:
        filtered = drop_missing_data(filtered)
    if ignore_subregions:
        filtered = drop_subregion_crossings(filtered)
    filtered = collapse_consecutive_duplicates(filtered)

    logger.info(
        "Filtered border crossings",
        detected=len(crossings),
        retained=len(filtered),
        ignore_missing_data=ignore_missing_data,
        ignore_subregions=ignore_subregions,
    )
    return filtered
