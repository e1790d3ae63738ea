"""Errors raised while turning a location history into a crossing report.

Every error here is fatal for the run: the CLI prints the message and exits
without emitting a partial report. Records that merely lack coordinates are
not errors; they are dropped while building samples.
"""


class BorderCrossingsError(Exception):
    """Base class for all fatal border crossing errors."""


class InputReadError(BorderCrossingsError):
    """The export could not be opened, extracted or parsed as a Takeout document."""


class RecordParseError(BorderCrossingsError):
    """A location record carried a value that cannot be interpreted (e.g. timestamp)."""


class BoundaryLookupError(BorderCrossingsError):
    """Boundary data could not be loaded or a coordinate could not be resolved."""


class ConfigurationError(BorderCrossingsError):
    """The tool was not given enough configuration to run."""
