from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Dict, Any, List

# Wire-level field names of a product document
ID_FIELD = "id"
STORE_ID_FIELD = "_id"
NAME_FIELD = "nom"
CATEGORY_FIELD = "categorie"
QUANTITY_FIELD = "quantite"
PRICE_FIELD = "prixUnitaire"
THRESHOLD_FIELD = "seuilAlerte"
IMAGE_FIELD = "image"
METADATA_FIELD = "metadata"
CREATED_FIELD = "dateCreation"
MODIFIED_FIELD = "dateModification"

METADATA_FIELDS = ("fournisseur", "reference", "description", "emplacement")

# Fields a caller may set; identity and timestamps belong to the store
MUTABLE_FIELDS = (
    NAME_FIELD, CATEGORY_FIELD, QUANTITY_FIELD, PRICE_FIELD,
    THRESHOLD_FIELD, IMAGE_FIELD, METADATA_FIELD,
)
SYSTEM_FIELDS = (ID_FIELD, STORE_ID_FIELD, CREATED_FIELD, MODIFIED_FIELD)

LOW_STOCK_LABEL = "Stock Faible"
IN_STOCK_LABEL = "En Stock"


@dataclass
class ProductMetadata:
    """Optional descriptive fields attached to a product."""

    supplier: Optional[str] = None
    reference: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "ProductMetadata":
        if not isinstance(data, dict):
            return cls()
        return cls(
            supplier=data.get("fournisseur"),
            reference=data.get("reference"),
            description=data.get("description"),
            location=data.get("emplacement"),
        )

    def to_dict(self) -> Dict[str, str]:
        values = {
            "fournisseur": self.supplier,
            "reference": self.reference,
            "description": self.description,
            "emplacement": self.location,
        }
        return {k: v for k, v in values.items() if v is not None}

    def is_empty(self) -> bool:
        return not self.to_dict()


@dataclass
class Product:
    """Inventory line item as read back from the store."""

    name: str
    category: str
    quantity: float
    unit_price: float
    alert_threshold: float
    image: Optional[str] = None
    metadata: ProductMetadata = field(default_factory=ProductMetadata)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def total_value(self) -> float:
        return self.quantity * self.unit_price

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.alert_threshold

    @property
    def status_label(self) -> str:
        return LOW_STOCK_LABEL if self.is_low_stock else IN_STOCK_LABEL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Product":
        """Build from the wire shape or a raw store document (``_id`` is stringified)."""
        raw_id = data.get(ID_FIELD)
        if raw_id is None and data.get(STORE_ID_FIELD) is not None:
            raw_id = data[STORE_ID_FIELD]

        return cls(
            name=data.get(NAME_FIELD, ""),
            category=data.get(CATEGORY_FIELD, ""),
            quantity=data.get(QUANTITY_FIELD, 0),
            unit_price=data.get(PRICE_FIELD, 0),
            alert_threshold=data.get(THRESHOLD_FIELD, 0),
            image=data.get(IMAGE_FIELD),
            metadata=ProductMetadata.from_dict(data.get(METADATA_FIELD)),
            id=str(raw_id) if raw_id is not None else None,
            created_at=data.get(CREATED_FIELD),
            updated_at=data.get(MODIFIED_FIELD),
        )

    from_document = from_dict

    def to_dict(self) -> Dict[str, Any]:
        """Render the exposed product shape."""
        result: Dict[str, Any] = {}
        if self.id is not None:
            result[ID_FIELD] = self.id
        result.update({
            NAME_FIELD: self.name,
            CATEGORY_FIELD: self.category,
            QUANTITY_FIELD: self.quantity,
            PRICE_FIELD: self.unit_price,
            THRESHOLD_FIELD: self.alert_threshold,
        })
        if self.image is not None:
            result[IMAGE_FIELD] = self.image
        if self.created_at is not None:
            result[CREATED_FIELD] = self.created_at
        if self.updated_at is not None:
            result[MODIFIED_FIELD] = self.updated_at
        if not self.metadata.is_empty():
            result[METADATA_FIELD] = self.metadata.to_dict()
        return result


@dataclass
class CategoryStats:
    categorie: str
    count: int
    valeur_totale: float

    def to_dict(self) -> Dict[str, Any]:
        return {"categorie": self.categorie, "count": self.count, "valeurTotale": self.valeur_totale}


@dataclass
class ProductStats:
    """Summary statistics over a product collection."""

    total_produits: int = 0
    valeur_totale_stock: float = 0.0
    nombre_categories: int = 0
    produits_en_alerte: int = 0
    categories_stats: List[CategoryStats] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalProduits": self.total_produits,
            "valeurTotaleStock": self.valeur_totale_stock,
            "nombreCategories": self.nombre_categories,
            "produitsEnAlerte": self.produits_en_alerte,
            "categoriesStats": [c.to_dict() for c in self.categories_stats],
        }
