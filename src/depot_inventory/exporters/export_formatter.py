"""
Render product collections as CSV, JSON or a plain-text inventory report.

Only the text payload and its filename are produced here; writing the
payload somewhere is up to the caller.
"""
import csv
import datetime
import json
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence
import pandas as pd

from depot_inventory.models.product import Product
from depot_inventory.services.aggregator import compute_stats
from depot_inventory.utils.helpers import (
    DEFAULT_CURRENCY, format_currency, format_date_fr, now, sanitize_filename_term, today_iso,
)
from depot_inventory.utils.logger import get_logger

logger = get_logger(__name__)


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    REPORT = "report"

FILE_EXTENSIONS = {
    ExportFormat.CSV: "csv",
    ExportFormat.JSON: "json",
    ExportFormat.REPORT: "txt",
}

ALERT_STATUS = "ALERTE"
OK_STATUS = "OK"


def _csv_headers(currency: str) -> List[str]:
    return [
        "ID",
        "Nom",
        "Catégorie",
        "Quantité",
        f"Prix Unitaire ({currency})",
        f"Valeur Totale ({currency})",
        "Seuil d'Alerte",
        "Statut",
        "Fournisseur",
        "Référence",
        "Description",
        "Emplacement",
        "Date Création",
        "Date Modification",
    ]


def export_csv(products: Sequence[Product], currency: str = DEFAULT_CURRENCY) -> str:
    """
    One header line plus one line per product.

    Text columns are quoted so embedded commas survive; numbers are not.
    Total value is always recomputed from quantity and unit price.
    """
    rows = [
        [
            p.id or "",
            p.name,
            p.category,
            p.quantity,
            p.unit_price,
            p.total_value,
            p.alert_threshold,
            p.status_label,
            p.metadata.supplier or "",
            p.metadata.reference or "",
            p.metadata.description or "",
            p.metadata.location or "",
            format_date_fr(p.created_at),
            format_date_fr(p.updated_at),
        ]
        for p in products
    ]
    df = pd.DataFrame(rows, columns=_csv_headers(currency))
    logger.debug(f"Rendering {len(df):,} products as CSV")
    return df.to_csv(index=False, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return str(value)


def export_json(products: Sequence[Product], search_term: Optional[str] = None) -> str:
    """Pretty-printed export document with totals and per-product value/status."""
    export_data: Dict[str, Any] = {
        "exportDate": now().isoformat(),
        "totalProducts": len(products),
        "totalValue": sum(p.total_value for p in products),
        "searchTerm": search_term or None,
        "products": [
            {**p.to_dict(), "valeurTotale": p.total_value, "statut": p.status_label}
            for p in products
        ],
    }
    return json.dumps(export_data, indent=2, ensure_ascii=False, default=_json_default)


def generate_report(
    products: Sequence[Product],
    search_term: Optional[str] = None,
    currency: str = DEFAULT_CURRENCY,
    report_date: Optional[datetime.date] = None
) -> str:
    """Plain-text inventory report: statistics, categories, alerts, product details."""
    stats = compute_stats(products)
    alert_products = [p for p in products if p.is_low_stock]
    money = lambda amount: format_currency(amount, currency)

    lines = [
        "RAPPORT D'INVENTAIRE",
        "=" * 20,
        "",
        f"Date du rapport: {format_date_fr(report_date or datetime.date.today())}",
        f'Filtre appliqué: "{search_term}"' if search_term else "Inventaire complet",
        "",
        "STATISTIQUES GÉNÉRALES",
        "-" * 22,
        f"Nombre total de produits: {stats.total_produits}",
        f"Valeur totale du stock: {money(stats.valeur_totale_stock)}",
        f"Produits en alerte: {stats.produits_en_alerte}",
        f"Nombre de catégories: {stats.nombre_categories}",
        "",
        "RÉPARTITION PAR CATÉGORIES",
        "-" * 26,
    ]
    lines.extend(
        f"{c.categorie}: {c.count} produits ({money(c.valeur_totale)})"
        for c in stats.categories_stats
    )

    lines.extend(["", "PRODUITS EN ALERTE DE STOCK", "-" * 27])
    if alert_products:
        lines.extend(
            f"- {p.name} ({p.category}): {p.quantity}/{p.alert_threshold}"
            for p in alert_products
        )
    else:
        lines.append("Aucun produit en alerte")

    lines.extend(["", "DÉTAIL DES PRODUITS", "-" * 19])
    for p in products:
        lines.extend([
            "",
            p.name,
            f"  Catégorie: {p.category}",
            f"  Quantité: {p.quantity}",
            f"  Prix unitaire: {money(p.unit_price)}",
            f"  Valeur totale: {money(p.total_value)}",
            f"  Seuil d'alerte: {p.alert_threshold}",
            f"  Statut: {ALERT_STATUS if p.is_low_stock else OK_STATUS}",
        ])
        if p.metadata.supplier:
            lines.append(f"  Fournisseur: {p.metadata.supplier}")
        if p.metadata.reference:
            lines.append(f"  Référence: {p.metadata.reference}")
        if p.metadata.location:
            lines.append(f"  Emplacement: {p.metadata.location}")

    return "\n".join(lines) + "\n"


def render_export(
    products: Sequence[Product],
    fmt: ExportFormat,
    search_term: Optional[str] = None,
    currency: str = DEFAULT_CURRENCY
) -> str:
    """Render ``products`` in the requested encoding."""
    fmt = ExportFormat(fmt)
    logger.info(f"Exporting {len(products):,} products as {fmt.value}")

    if fmt == ExportFormat.CSV:
        return export_csv(products, currency)
    elif fmt == ExportFormat.JSON:
        return export_json(products, search_term)
    else:
        return generate_report(products, search_term, currency)


def build_export_filename(
    fmt: ExportFormat,
    search_term: Optional[str] = None,
    filtered: bool = False,
    today: Optional[datetime.date] = None
) -> str:
    """
    Timestamped download name for an export.

    Full exports are ``inventaire-complet-<date>``; filtered ones carry the
    sanitised search term (or ``filtre`` when there is none).
    """
    fmt = ExportFormat(fmt)
    date_str = today_iso(today)

    if fmt == ExportFormat.REPORT:
        suffix = f"-{sanitize_filename_term(search_term)}" if filtered and search_term else ""
        return f"rapport-inventaire{suffix}-{date_str}.{FILE_EXTENSIONS[fmt]}"

    if not filtered:
        return f"inventaire-complet-{date_str}.{FILE_EXTENSIONS[fmt]}"

    suffix = sanitize_filename_term(search_term) if search_term else "filtre"
    return f"inventaire-{suffix}-{date_str}.{FILE_EXTENSIONS[fmt]}"
