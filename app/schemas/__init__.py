# re-export common schemas for simpler imports
from .LinkResponse import LinkResponse
from .LinkCreatedResponse import LinkCreatedResponse
from .CsvExportResponse import CsvExportResponse
from .VisitResponse import VisitResponse

__all__ = [
    "LinkResponse",
    "LinkCreatedResponse",
    "CsvExportResponse",
    "VisitResponse",
]
