import re
from typing import Any, Dict, Iterable, List, Optional, Union

from tqdm.auto import tqdm

from depot_inventory.core.exceptions import DataValidationError, StoreAccessError
from depot_inventory.core.validator import validate_product, validate_partial
from depot_inventory.models.import_result import ImportResult
from depot_inventory.models.product import (
    Product, ProductStats, CategoryStats, MUTABLE_FIELDS, NAME_FIELD, CATEGORY_FIELD,
    CREATED_FIELD, MODIFIED_FIELD,
)
from depot_inventory.utils.helpers import now
from depot_inventory.utils.logger import get_logger

COLLECTION_NAME = "products"

INVALID_PRODUCT_MESSAGE = (
    "Données manquantes: nom, categorie, quantite, prixUnitaire et seuilAlerte sont requis"
)

# One grouping pass per category; totals are folded from the groups
STATS_PIPELINE = [
    {
        "$group": {
            "_id": "$categorie",
            "count": {"$sum": 1},
            "valeurTotale": {"$sum": {"$multiply": ["$quantite", "$prixUnitaire"]}},
            "enAlerte": {"$sum": {"$cond": [{"$lte": ["$quantite", "$seuilAlerte"]}, 1, 0]}},
        }
    },
]


def build_search_query(search: Optional[str] = None) -> Dict[str, Any]:
    """Case-insensitive match of ``search`` in the product name or category."""
    if not search:
        return {}
    pattern = re.escape(search)
    return {
        "$or": [
            {NAME_FIELD: {"$regex": pattern, "$options": "i"}},
            {CATEGORY_FIELD: {"$regex": pattern, "$options": "i"}},
        ]
    }


class ProductService:
    """
    Product persistence and queries over an injected store.

    The store is any object with the ``DB`` method set; its lifecycle
    belongs to the caller.
    """

    def __init__(self, db, collection_name: str = COLLECTION_NAME, config: Dict[str, Any] = None):
        self.db = db
        self.collection = collection_name
        self.config = config or {}
        self.chunk_size = self.config.get('chunk_size', 500)
        self.logger = get_logger(self.__class__.__name__)

    def _store_failure(self, message: str, error: Exception) -> StoreAccessError:
        self.logger.error(f"{message}: {error}")
        return StoreAccessError(message)

    def _prepare_document(self, data: Dict[str, Any], stamp) -> Dict[str, Any]:
        """Keep caller-settable fields and stamp both timestamps."""
        document = {key: data[key] for key in MUTABLE_FIELDS if key in data}
        document[CREATED_FIELD] = stamp
        document[MODIFIED_FIELD] = stamp
        return document

    def get_all_products(self, search: Optional[str] = None) -> List[Product]:
        """All products matching ``search`` (name or category), newest first."""
        try:
            documents = self.db.listRecords(
                self.collection, build_search_query(search), sort={CREATED_FIELD: -1}
            )
        except StoreAccessError as e:
            raise self._store_failure("Impossible de récupérer les produits", e) from e
        return [Product.from_document(doc) for doc in documents]

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        try:
            document = self.db.findById(self.collection, product_id)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de récupérer le produit", e) from e
        return Product.from_document(document) if document else None

    def create_product(self, data: Dict[str, Any]) -> Product:
        """
        Validate and insert one product.

        Raises:
            DataValidationError: if a required field is missing or invalid
        """
        validation = validate_product(data)
        if not validation.is_valid:
            raise DataValidationError(INVALID_PRODUCT_MESSAGE, validation.errors)

        document = self._prepare_document(data, now())
        try:
            product_id = self.db.insertRecord(self.collection, document)
            created = self.db.findById(self.collection, product_id)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de créer le produit", e) from e

        if not created:
            raise StoreAccessError("Produit créé mais non trouvé")

        self.logger.info(f"Created product '{created.get(NAME_FIELD)}' ({product_id})")
        return Product.from_document(created)

    def create_many_products(self, items: List[Dict[str, Any]]) -> List[Product]:
        """Validate and insert a batch; nothing is written if any item is invalid."""
        errors = []
        for index, item in enumerate(items, start=1):
            validation = validate_product(item)
            if not validation.is_valid:
                errors.append(f"Produit {index}: {', '.join(validation.errors)}")
        if errors:
            raise DataValidationError(
                "Chaque produit doit avoir: nom, categorie, quantite, prixUnitaire et seuilAlerte",
                errors,
            )

        if not items:
            return []

        stamp = now()
        documents = [self._prepare_document(item, stamp) for item in items]

        try:
            inserted_ids = self.db.bulkInsertRecords(self.collection, documents)
            object_ids = [self.db.toObjectId(i) for i in inserted_ids]
            created = self.db.listRecords(self.collection, {"_id": {"$in": object_ids}})
        except StoreAccessError as e:
            raise self._store_failure("Impossible de créer les produits", e) from e

        # Return in insertion order
        by_id = {str(doc["_id"]): doc for doc in created}
        products = [Product.from_document(by_id[i]) for i in inserted_ids if i in by_id]

        self.logger.info(f"Created {len(products):,} products")
        return products

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Optional[Product]:
        """
        Apply a partial update. Only supplied mutable fields change; the
        modification time is always refreshed.

        Returns:
            The updated product, or None when no product has this id
        """
        update = {key: data[key] for key in MUTABLE_FIELDS if key in data}

        validation = validate_partial(update)
        if not validation.is_valid:
            raise DataValidationError("Données invalides", validation.errors)

        update[MODIFIED_FIELD] = now()

        try:
            document = self.db.updateRecord(self.collection, product_id, update)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de mettre à jour le produit", e) from e

        if document is None:
            self.logger.warning(f"Update skipped, product not found: {product_id}")
            return None

        self.logger.info(f"Updated product {product_id}: {sorted(k for k in update if k != MODIFIED_FIELD)}")
        return Product.from_document(document)

    def delete_product(self, product_id: str) -> bool:
        """Permanently delete a product. False means it did not exist."""
        try:
            deleted = self.db.deleteRecord(self.collection, product_id)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de supprimer le produit", e) from e

        if deleted:
            self.logger.info(f"Deleted product {product_id}")
        else:
            self.logger.warning(f"Delete skipped, product not found: {product_id}")
        return deleted

    def get_stats(self) -> ProductStats:
        """Statistics computed by the store's aggregation pipeline."""
        try:
            groups = self.db.aggregate(self.collection, STATS_PIPELINE)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de calculer les statistiques", e) from e

        categories_stats = [
            CategoryStats(categorie=g["_id"], count=int(g["count"]), valeur_totale=float(g["valeurTotale"]))
            for g in groups
        ]

        return ProductStats(
            total_produits=sum(c.count for c in categories_stats),
            valeur_totale_stock=float(sum(c.valeur_totale for c in categories_stats)),
            nombre_categories=len(categories_stats),
            produits_en_alerte=int(sum(g["enAlerte"] for g in groups)),
            categories_stats=categories_stats,
        )

    def get_categories(self) -> List[str]:
        """Distinct categories, sorted."""
        try:
            return self.db.distinct(self.collection, CATEGORY_FIELD)
        except StoreAccessError as e:
            raise self._store_failure("Impossible de récupérer les catégories", e) from e

    def import_products(
        self,
        records: Union[ImportResult, Iterable[Dict[str, Any]]],
        chunk_size: Optional[int] = None
    ) -> List[Product]:
        """
        Persist every accepted record of an import, in chunks.

        Accepts the ImportResult itself (its full ``products`` list, not the
        preview) or a plain list of records.
        """
        if isinstance(records, ImportResult):
            records = records.products
        records = list(records)
        chunk_size = chunk_size or self.chunk_size

        if not records:
            self.logger.info("Nothing to import")
            return []

        self.logger.info(f"Importing {len(records):,} products in chunks of {chunk_size}")

        created: List[Product] = []
        for start in tqdm(range(0, len(records), chunk_size), desc="Importing", unit="batch", disable=None):
            created.extend(self.create_many_products(records[start:start + chunk_size]))

        self.logger.info(f"Import confirmed: {len(created):,} products stored")
        return created
