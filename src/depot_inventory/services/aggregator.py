from typing import Iterable, List
import pandas as pd

from depot_inventory.models.product import Product, ProductStats, CategoryStats
from depot_inventory.utils.logger import get_logger

logger = get_logger(__name__)


def products_to_dataframe(products: Iterable[Product]) -> pd.DataFrame:
    """Tabulate the fields the statistics need, in input order."""
    rows = [
        {
            'categorie': p.category,
            'quantite': p.quantity,
            'prixUnitaire': p.unit_price,
            'seuilAlerte': p.alert_threshold,
        }
        for p in products
    ]
    df = pd.DataFrame(rows, columns=['categorie', 'quantite', 'prixUnitaire', 'seuilAlerte'])
    df['valeurTotale'] = df['quantite'] * df['prixUnitaire']
    return df


def compute_stats(products: Iterable[Product]) -> ProductStats:
    """
    Compute summary statistics over an in-memory product collection.

    The per-category breakdown keeps first-seen category order.
    """
    df = products_to_dataframe(products)

    if df.empty:
        return ProductStats()

    grouped = df.groupby('categorie', sort=False, dropna=False).agg(
        count=('quantite', 'size'),
        valeurTotale=('valeurTotale', 'sum'),
    )

    categories_stats: List[CategoryStats] = [
        CategoryStats(categorie=category, count=int(row['count']), valeur_totale=float(row['valeurTotale']))
        for category, row in grouped.iterrows()
    ]

    stats = ProductStats(
        total_produits=int(len(df)),
        valeur_totale_stock=float(df['valeurTotale'].sum()),
        nombre_categories=len(categories_stats),
        produits_en_alerte=int((df['quantite'] <= df['seuilAlerte']).sum()),
        categories_stats=categories_stats,
    )

    logger.debug(f"Computed stats over {stats.total_produits:,} products "
                 f"in {stats.nombre_categories} categories")
    return stats
