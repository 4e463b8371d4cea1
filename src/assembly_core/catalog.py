from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping, Optional

from .models import BoxSpec, Fragility, Product


def normalize_box_key(key: str) -> str:
    return str(key or "").strip().lower()


def _parse_box_spec(sku: str, key: str, payload: Mapping[str, Any]) -> BoxSpec:
    try:
        dims = payload["dimensions"]
        length, depth, height = (float(v) for v in dims)
        units = int(payload.get("units") or 0)
        weight = float(payload["weight"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid box data for product '{sku}' ({key}): {e}") from e
    if length <= 0 or depth <= 0 or height <= 0 or weight <= 0:
        raise ValueError(
            f"Invalid box data for product '{sku}' ({key}): "
            "dimensions and weight must be positive"
        )
    orientation = str(payload.get("orientation", "fixed")).strip().lower()
    return BoxSpec(
        units_per_box=units,
        weight_kg=weight,
        length=length,
        depth=depth,
        height=height,
        rotatable=orientation == "both",
    )


class Catalog:
    """Read-only product master data keyed by SKU.

    The engine only ever calls :meth:`lookup` and :meth:`fragility`; the
    caller owns the instance and may share it between independent runs.
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: Dict[str, Product] = {}
        for product in products:
            self._products[product.sku] = product

    @classmethod
    def from_dict(cls, payload: Mapping[str, Mapping[str, Any]]) -> "Catalog":
        """Build a catalog from ``products-detail.json`` shaped data.

        Every key of a product other than ``fragility`` is a box type, e.g.
        ``{"A": {"fragility": "strong", "box1": {"units": 10, "weight": 5,
        "dimensions": [60, 40, 30], "orientation": "both"}}}``.
        """
        products = []
        for sku, entry in payload.items():
            if not isinstance(entry, Mapping):
                raise ValueError(f"Invalid product entry '{sku}'")
            try:
                fragility = Fragility.parse(entry.get("fragility", ""))
            except ValueError as e:
                raise ValueError(f"Invalid product entry '{sku}': {e}") from e
            box_types = {
                normalize_box_key(key): _parse_box_spec(str(sku), key, spec)
                for key, spec in entry.items()
                if key != "fragility" and isinstance(spec, Mapping)
            }
            products.append(Product(str(sku), fragility, box_types))
        return cls(products)

    def __contains__(self, sku: object) -> bool:
        return sku in self._products

    def __iter__(self) -> Iterator[str]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    def product(self, sku: str) -> Optional[Product]:
        return self._products.get(sku)

    def fragility(self, sku: str) -> Optional[Fragility]:
        product = self._products.get(sku)
        return product.fragility if product else None

    def lookup(self, sku: str, box_type_key: str) -> Optional[BoxSpec]:
        product = self._products.get(sku)
        if product is None:
            return None
        return product.box_types.get(normalize_box_key(box_type_key))
