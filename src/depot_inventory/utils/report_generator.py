from typing import Dict, Any, Optional
from datetime import datetime
from pathlib import Path
from depot_inventory.models.import_result import ImportResult
from depot_inventory.utils.logger import get_logger

logger = get_logger(__name__)

def generate_import_report(
    result: ImportResult, 
    output_path: str,
    source: Optional[str] = None,
    additional_info: Dict[str, Any] = None
) -> None:
    """Write a plain-text summary of an import run."""
    
    logger.info(f"Generating import report: {output_path}")
    
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("DEPOT INVENTORY - IMPORT REPORT\n")
        f.write("=" * 60 + "\n")
        f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if source:
            f.write(f"Source: {source}\n")
        f.write(f"Status: {'SUCCESS' if result.success else 'COMPLETED WITH ERRORS'}\n")
        f.write("\n")

        f.write("SUMMARY\n")
        f.write("-" * 30 + "\n")
        f.write(f"Accepted records: {result.imported:,}\n")
        f.write(f"Duplicates skipped: {result.duplicates:,}\n")
        f.write(f"Errors: {len(result.errors):,}\n")

        if result.preview:
            f.write("\nPREVIEW\n")
            f.write("-" * 30 + "\n")
            for record in result.preview:
                f.write(f"- {record.get('nom')} ({record.get('categorie')}): "
                        f"{record.get('quantite')} x {record.get('prixUnitaire')}\n")

        if result.errors:
            f.write("\nERRORS\n")
            f.write("-" * 20 + "\n")
            for error in result.errors:
                f.write(f"{error}\n")

        if additional_info:
            f.write("\nADDITIONAL INFORMATION\n")
            f.write("-" * 30 + "\n")
            for key, value in additional_info.items():
                f.write(f"{key}: {value}\n")

    logger.info("Report generated successfully")
