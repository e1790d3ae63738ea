"""End-to-end border crossing pipeline: raw records in, report out"""

from datetime import timedelta
from typing import Collection, List, Sequence

from .boundaries import BoundaryLookup
from .detector import DEFAULT_GAP, BorderCrossingDetector
from .filters import apply_crossing_filters, exclude_sources, sort_samples
from .models import BorderCrossing, RawRecord, Source, build_samples
from .report import format_report


def find_border_crossings(
    records: Sequence[RawRecord],
    lookup: BoundaryLookup,
    exclude: Collection[Source] = (),
    ignore_subregions: bool = False,
    ignore_missing_data: bool = False,
    gap: timedelta = DEFAULT_GAP,
) -> List[BorderCrossing]:
    """
    Turn raw records into the filtered list of crossings.

    Sources are excluded before sorting and detection, so gaps are measured
    between the samples that remain.
    """
    samples = build_samples(records, lookup)
    samples = exclude_sources(samples, exclude)
    samples = sort_samples(samples)

    crossings = BorderCrossingDetector(gap=gap).detect(samples)
    return apply_crossing_filters(
        crossings,
        ignore_missing_data=ignore_missing_data,
        ignore_subregions=ignore_subregions,
    )


def run_border_crossings(
    records: Sequence[RawRecord],
    lookup: BoundaryLookup,
    exclude: Collection[Source] = (),
    ignore_subregions: bool = False,
    ignore_missing_data: bool = False,
    gap: timedelta = DEFAULT_GAP,
) -> str:
    """Produce the text report for a sequence of raw records"""
    crossings = find_border_crossings(
        records,
        lookup,
        exclude=exclude,
        ignore_subregions=ignore_subregions,
        ignore_missing_data=ignore_missing_data,
        gap=gap,
    )
    return format_report(crossings)
