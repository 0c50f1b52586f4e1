"""Domain errors."""


class EvlensError(Exception):
    """Base class for evlens failures."""

    error_code = "EVLENS_ERROR"


class DatasetError(EvlensError):
    """Raised when an input file cannot be turned into records."""

    error_code = "DATASET_ERROR"


class FilterError(EvlensError, ValueError):
    """Raised by the CLI for a malformed filter argument, such as `filter year 2023 2020`."""

    error_code = "FILTER_ERROR"
