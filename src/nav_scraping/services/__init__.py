from .aggregator import NavService
from .export import EXCEL_MEDIA_TYPE, export_filename, export_to_excel, records_to_dataframe

__all__ = [
    "NavService",
    "EXCEL_MEDIA_TYPE",
    "export_filename",
    "export_to_excel",
    "records_to_dataframe",
]
