"""Output formatters (JSON, text)."""

from dvdti.export.json_out import catalog_to_dict, export_json
from dvdti.export.text_report import format_runtime, text_report, title_detail
