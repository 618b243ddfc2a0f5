"""Export services."""

from .tabular import EXPORT_HEADERS, export_filename, records_to_csv, records_to_xlsx

__all__ = [
    "EXPORT_HEADERS",
    "export_filename",
    "records_to_csv",
    "records_to_xlsx",
]
