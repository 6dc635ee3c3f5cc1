#!/usr/bin/env python3
"""
Depot Inventory - Main Orchestrator Script
Product import, statistics and export
"""

import argparse
import json
import sys
from pathlib import Path
from datetime import datetime
from typing import List, Optional

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from depot_inventory.config.settings import ApplicationConfig, load_config
from depot_inventory.core.exceptions import InventoryError
from depot_inventory.db.core import DB
from depot_inventory.exporters import ExportFormat, build_export_filename, render_export
from depot_inventory.importers import ingest_file
from depot_inventory.models.import_result import ImportResult
from depot_inventory.models.product import Product
from depot_inventory.services.product_service import ProductService
from depot_inventory.utils.logger import setup_logging, get_logger
from depot_inventory.utils.report_generator import generate_import_report
from depot_inventory.utils.seed_data import SAMPLE_PRODUCTS

logger = get_logger(__name__)

class InventoryOrchestrator:
    """Runs CLI actions against one product service."""

    def __init__(self, config: ApplicationConfig, db):
        self.config = config
        self.service = ProductService(
            db,
            collection_name=config.database.get('collection') or 'products',
            config=config.importer.__dict__,
        )
        logger.info("Depot Inventory orchestrator initialized")

    def run_import(self, file_path: str, dry_run: bool = False) -> ImportResult:
        """Validate a file against the current collection and store the accepted records."""
        existing = self.service.get_all_products()
        result = ingest_file(file_path, existing, config=self.config.importer.__dict__)
        result.log_summary()

        report_path = Path(self.config.file_paths.log_dir) / f"import_report_{datetime.now():%Y%m%d_%H%M%S}.txt"
        generate_import_report(result, str(report_path), source=file_path,
                               additional_info={'dry_run': dry_run})

        if dry_run:
            logger.info("Dry run: nothing stored")
        elif result.products:
            self.service.import_products(result)
        else:
            logger.warning("No valid products to import")

        return result

    def run_export(self, fmt: str, search: Optional[str] = None, output_dir: Optional[str] = None) -> Path:
        """Render the (optionally filtered) collection and write it to disk."""
        products: List[Product] = self.service.get_all_products(search)
        export_format = ExportFormat(fmt)

        payload = render_export(products, export_format, search, currency=self.config.export.currency)
        filename = build_export_filename(export_format, search, filtered=bool(search))

        target_dir = Path(output_dir or self.config.file_paths.output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / filename
        target.write_text(payload, encoding='utf-8')

        logger.info(f"Exported {len(products):,} products to {target}")
        return target

    def run_stats(self) -> dict:
        stats = self.service.get_stats().to_dict()
        print(json.dumps(stats, indent=2, ensure_ascii=False))
        return stats

    def run_categories(self) -> List[str]:
        categories = self.service.get_categories()
        for category in categories:
            print(category)
        return categories

    def run_seed(self) -> int:
        """Insert the sample catalogue into an empty collection."""
        if self.service.get_all_products():
            logger.warning("Collection is not empty, skipping seed")
            return 0
        created = self.service.create_many_products(SAMPLE_PRODUCTS)
        logger.info(f"Seeded {len(created)} products")
        return len(created)

def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Depot Inventory - product import, statistics and export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/main.py --action import --file data/input/products.csv
  python scripts/main.py --action import --file data/input/products.json --dry-run
  python scripts/main.py --action export --format report --search chaise
  python scripts/main.py --action stats
        """
    )

    parser.add_argument(
        "--action",
        choices=["import", "export", "stats", "categories", "seed"],
        required=True,
        help="Operation to run"
    )

    parser.add_argument(
        "--file",
        help="Path to a .csv or .json file (import)"
    )

    parser.add_argument(
        "--format",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.CSV.value,
        help="Export encoding"
    )

    parser.add_argument(
        "--search",
        help="Filter products by name or category (export)"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate an import without storing anything"
    )

    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to configuration file"
    )

    parser.add_argument(
        "--output-dir",
        help="Override the export output directory"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (defaults to importer.log_level)"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except InventoryError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(log_level=args.log_level or config.importer.log_level, log_dir=config.file_paths.log_dir)
    logger.info(f"Depot Inventory starting at {datetime.now()}")

    if args.action == "import" and not args.file:
        logger.error("--file argument required for imports")
        sys.exit(1)

    try:
        with DB(config.database) as db:
            orchestrator = InventoryOrchestrator(config, db)

            if args.action == "import":
                result = orchestrator.run_import(args.file, dry_run=args.dry_run)
                if not result.success:
                    sys.exit(2)
            elif args.action == "export":
                orchestrator.run_export(args.format, args.search, args.output_dir)
            elif args.action == "stats":
                orchestrator.run_stats()
            elif args.action == "categories":
                orchestrator.run_categories()
            else:
                orchestrator.run_seed()

        logger.info("Depot Inventory execution completed")

    except InventoryError as e:
        logger.error(f"Critical error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    main()
