from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from depot_inventory.importers.base_importer import BaseImporter, Candidate
from depot_inventory.importers.csv_importer import CsvProductImporter
from depot_inventory.importers.json_importer import JsonProductImporter
from depot_inventory.models.import_result import ImportResult

UNSUPPORTED_FORMAT_MESSAGE = "Format de fichier non supporté. Utilisez CSV ou JSON."

IMPORTERS = {
    '.csv': CsvProductImporter,
    '.json': JsonProductImporter,
}


def get_importer_for_file(file_path: str, config: Dict[str, Any] = None) -> Optional[BaseImporter]:
    """Pick an importer from the file extension."""
    importer_cls = IMPORTERS.get(Path(file_path).suffix.lower())
    return importer_cls(config) if importer_cls else None


def ingest_csv(payload: str, existing_products: Iterable[Any] = (), config: Dict[str, Any] = None) -> ImportResult:
    return CsvProductImporter(config).run_import(payload, existing_products)


def ingest_json(payload: str, existing_products: Iterable[Any] = (), config: Dict[str, Any] = None) -> ImportResult:
    return JsonProductImporter(config).run_import(payload, existing_products)


def ingest_file(file_path: str, existing_products: Iterable[Any] = (), config: Dict[str, Any] = None) -> ImportResult:
    """
    Ingest a ``.csv`` or ``.json`` file.

    Raises:
        FileProcessingError: if the file cannot be read
    """
    importer = get_importer_for_file(file_path, config)
    if importer is None:
        return ImportResult.failure(UNSUPPORTED_FORMAT_MESSAGE)
    return importer.run_file_import(file_path, existing_products)


__all__ = [
    'BaseImporter', 'Candidate', 'CsvProductImporter', 'JsonProductImporter',
    'get_importer_for_file', 'ingest_csv', 'ingest_json', 'ingest_file',
]
