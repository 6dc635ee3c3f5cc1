from depot_inventory.exporters.export_formatter import (
    ExportFormat, export_csv, export_json, generate_report, render_export, build_export_filename,
)

__all__ = [
    'ExportFormat', 'export_csv', 'export_json', 'generate_report', 'render_export',
    'build_export_filename',
]
