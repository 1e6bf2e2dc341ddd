class FlightImportError(Exception):
    """Base class for flight upload/import failures surfaced to callers."""


class NoFlightsError(FlightImportError):
    """The CSV contained no flight with both airports resolvable."""


class UnsupportedUploadError(FlightImportError):
    """The uploaded file is not a CSV."""
