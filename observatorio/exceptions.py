"""
Exceptions raised by the observatorio package.

Only transport failures are errors; data quality problems are absorbed by
the normalization and classification defaults.
"""


class ObservatorioError(Exception):
    """Base class for observatorio errors."""


class DataLoadError(ObservatorioError):
    """
    The source tables could not be read.

    Raised once for the whole load; there are no partial results.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
