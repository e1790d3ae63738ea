"""Border crossing detection over a time-ordered sequence of samples"""

from datetime import timedelta
from typing import List, Optional, Sequence

from .logging import get_logger
from .models import BorderCrossing, LocationSample

logger = get_logger(__name__)

DEFAULT_GAP = timedelta(days=1)


class BorderCrossingDetector:
    """Detects when the set of enclosing regions changes between samples.

    A gap of at least ``gap`` between two consecutive samples is reported as a
    missing-data crossing starting ``gap`` after the earlier sample. Data that
    resumes after a gap always produces a crossing back into real regions,
    even when they equal the regions seen before the gap.
    """

    def __init__(self, gap: timedelta = DEFAULT_GAP):
        if gap <= timedelta(0):
            raise ValueError("gap must be positive")
        self.gap = gap

    def detect(self, samples: Sequence[LocationSample]) -> List[BorderCrossing]:
        """
        Turn samples into crossings in a single forward pass.

        Samples must already be sorted by timestamp; they are not re-sorted.

        Args:
            samples: Location samples in non-decreasing timestamp order

        Returns:
            Crossings in non-decreasing timestamp order
        """
        crossings: List[BorderCrossing] = []
        previous: Optional[LocationSample] = None

        for sample in samples:
            if previous is None:
                crossings.append(BorderCrossing.from_sample(sample))
            else:
                crossings.extend(self._step(previous, sample, crossings[-1]))
            previous = sample

        logger.info(
            "Detected border crossings",
            samples=len(samples),
            crossings=len(crossings),
        )
        return crossings

    def _step(
        self,
        previous: LocationSample,
        sample: LocationSample,
        last_crossing: BorderCrossing,
    ) -> List[BorderCrossing]:
        """Crossings produced by moving from ``previous`` to ``sample``"""
        emitted: List[BorderCrossing] = []

        if sample.timestamp - previous.timestamp >= self.gap:
            last_crossing = BorderCrossing.missing_data(previous.timestamp + self.gap)
            emitted.append(last_crossing)

        entered = sample.regions - previous.regions
        if entered or last_crossing.is_missing_data:
            emitted.append(BorderCrossing.from_sample(sample))

        return emitted


def detect_crossings(
    samples: Sequence[LocationSample], gap: timedelta = DEFAULT_GAP
) -> List[BorderCrossing]:
    """Detect crossings with a default detector"""
    return BorderCrossingDetector(gap=gap).detect(samples)
