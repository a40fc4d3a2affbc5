"""Materials budget from a calculation result.

Quantities are always rounded up to whole units:
    pipe             ceil(total length * 1.05)      5% waste margin
    insulation, mesh ceil(area)
    perimeter band   ceil(sqrt(area) * 4 * 1.2)     square footprint + 20%
    pipe clips       ceil(total length / 100)       one bag per 100 m
    feed pipe + insulation ceil(feed distance), only with a feed run
    manifold         smallest catalog manifold with ports >= circuits,
                     plus one valve pair and one cabinet
"""

import logging
import math
from dataclasses import dataclass, field

from underfloor.calculation import CalculationOutput
from underfloor.catalog import Catalog, Product

logger = logging.getLogger(__name__)

WASTE_MARGIN = 0.05
PERIMETER_MARGIN = 1.2
CLIP_BAG_METERS = 100.0

PIPE_ID = "TUB-PEX-20"
INSULATION_ID = "PLA-AIS-EPS"
PERIMETER_BAND_ID = "BAN-PER-PE"
MESH_ID = "MAL-ELE-42"
CLIPS_ID = "PRE-SUJ-BOL"
FEED_PIPE_ID = "TUB-ALIM-1P"
FEED_INSULATION_ID = "AIS-ALIM-1P"
VALVE_PAIR_ID = "VAL-ESF-PAR"
CABINET_ID = "GAB-MET-COL"


class ManifoldCapacityError(Exception):
    """No catalog manifold has enough ports for the required circuits."""

    def __init__(self, circuits: int, max_ports: int):
        self.circuits = circuits
        self.max_ports = max_ports
        super().__init__(
            f"{circuits} circuits required but the largest manifold in the "
            f"catalog has {max_ports} ports"
        )


@dataclass(frozen=True)
class BudgetItem:
    product_id: str
    name: str
    quantity: int
    unit: str
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class Budget:
    items: list[BudgetItem] = field(default_factory=list)
    estimated_waste: float = 0.0    # m of pipe

    @property
    def materials_total(self) -> float:
        return sum(item.subtotal for item in self.items)

    @property
    def total(self) -> float:
        # No markup or tax at this layer
        return self.materials_total


class BudgetEngine:
    """Build itemized budgets against one catalog."""

    def __init__(self, catalog: Catalog):
        self.catalog = catalog

    def _add(self, items: list[BudgetItem], product_id: str, quantity: int):
        product: Product | None = self.catalog.product(product_id)
        if product is None:
            logger.warning("Product %s not in catalog, skipped", product_id)
            return
        items.append(BudgetItem(
            product_id=product.id,
            name=product.name,
            quantity=quantity,
            unit=product.unit,
            unit_price=product.unit_price,
        ))

    def budget(self, result: CalculationOutput, area: float) -> Budget:
        """Itemize materials for a calculation over `area` m2.

        Raises:
            ManifoldCapacityError: circuit count exceeds every catalog manifold.
        """
        items: list[BudgetItem] = []
        total_length = result.total_length

        self._add(items, PIPE_ID, math.ceil(total_length * (1 + WASTE_MARGIN)))
        self._add(items, INSULATION_ID, math.ceil(area))
        self._add(items, PERIMETER_BAND_ID,
                  math.ceil(math.sqrt(area) * 4 * PERIMETER_MARGIN))
        self._add(items, MESH_ID, math.ceil(area))
        self._add(items, CLIPS_ID, math.ceil(total_length / CLIP_BAG_METERS))

        feed = result.feed_distance or 0.0
        if feed > 0:
            self._add(items, FEED_PIPE_ID, math.ceil(feed))
            self._add(items, FEED_INSULATION_ID, math.ceil(feed))

        manifold = self.catalog.smallest_manifold(result.circuit_count)
        if manifold is None:
            max_ports = self.catalog.manifolds[-1].ports if self.catalog.manifolds else 0
            raise ManifoldCapacityError(result.circuit_count, max_ports)
        items.append(BudgetItem(
            product_id=manifold.id,
            name=manifold.name,
            quantity=1,
            unit="un",
            unit_price=manifold.unit_price,
        ))
        self._add(items, VALVE_PAIR_ID, 1)
        self._add(items, CABINET_ID, 1)

        budget = Budget(items=items, estimated_waste=total_length * WASTE_MARGIN)
        logger.debug("Budget: %d items, total %.2f", len(items), budget.total)
        return budget
