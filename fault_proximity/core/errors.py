"""Fault dataset errors.

Only dataset-level failures are exceptional. Malformed individual fault
records are tolerated inline and never raise.
"""


class FaultDataError(Exception):
    """Base class for fault dataset failures."""


class DatasetLoadError(FaultDataError):
    """The fault dataset resource could not be retrieved."""


class DatasetFormatError(FaultDataError):
    """The fault dataset payload is not a feature collection."""
