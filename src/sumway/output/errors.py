"""Export failures."""

from sumway.core.errors import SumwayError


class ExportError(SumwayError):
    """Error producing an export file."""
    pass
