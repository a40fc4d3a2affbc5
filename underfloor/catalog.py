"""Product catalog for the materials budget.

The catalog is a JSON document with two lists:
    productos:  {id, nombre, descripcion, precioUnitario, unidad, categoria}
    colectores: {vias, id, nombre, precioUnitario}
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.json"


class CatalogError(Exception):
    """Catalog file missing, unreadable or malformed."""


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    unit_price: float
    unit: str
    category: str
    description: str = ""


@dataclass(frozen=True)
class Manifold:
    ports: int
    id: str
    name: str
    unit_price: float


@dataclass
class Catalog:
    products: dict[str, Product] = field(default_factory=dict)
    manifolds: list[Manifold] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        try:
            products = {
                p["id"]: Product(
                    id=p["id"],
                    name=p["nombre"],
                    unit_price=float(p["precioUnitario"]),
                    unit=p["unidad"],
                    category=p.get("categoria", ""),
                    description=p.get("descripcion", ""),
                )
                for p in data.get("productos", [])
            }
            manifolds = [
                Manifold(
                    ports=int(m["vias"]),
                    id=m["id"],
                    name=m["nombre"],
                    unit_price=float(m["precioUnitario"]),
                )
                for m in data.get("colectores", [])
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogError(f"Malformed catalog entry: {e}") from e

        manifolds.sort(key=lambda m: m.ports)
        return cls(products=products, manifolds=manifolds)

    @classmethod
    def load(cls, path: str | Path = DEFAULT_CATALOG_PATH) -> "Catalog":
        """Load and parse a catalog JSON file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e

        catalog = cls.from_dict(data)
        logger.info("Loaded catalog %s (%d products, %d manifolds)",
                    path.name, len(catalog.products), len(catalog.manifolds))
        return catalog

    def product(self, product_id: str) -> Product | None:
        return self.products.get(product_id)

    def smallest_manifold(self, circuits: int) -> Manifold | None:
        """Cheapest manifold with at least `circuits` ports (list is sorted by ports)."""
        return next((m for m in self.manifolds if m.ports >= circuits), None)
