from typing import Any, Iterable, List

from depot_inventory.models.product import Product, NAME_FIELD


def _name_key(name: Any) -> Any:
    """Comparison key for a product name: case-folded, otherwise untouched."""
    return name.lower() if isinstance(name, str) else name


def is_duplicate(name: str, reference_names: Iterable[str]) -> bool:
    """
    True if ``name`` matches any reference name ignoring case.

    Whitespace and punctuation are compared as-is.
    """
    key = _name_key(name)
    return any(_name_key(existing) == key for existing in reference_names)


def existing_names(products: Iterable[Any]) -> List[str]:
    """Pull product names out of Product objects or wire-shaped dicts."""
    names = []
    for product in products:
        if isinstance(product, Product):
            names.append(product.name)
        elif isinstance(product, dict) and isinstance(product.get(NAME_FIELD), str):
            names.append(product[NAME_FIELD])
    return names
