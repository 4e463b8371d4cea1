from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .diagnostics import AssemblyStatus, Diagnostic
from .engine import AssemblyResult
from .metrics import layer_area_utilization, layer_min_support, pallet_volume_utilization
from .models import BoxInstance

UNIT_POLICIES = ("nominal", "actual")
DEFAULT_UNIT_POLICY = "nominal"


@dataclass
class SkuCount:
    """Boxes of one SKU / box type in a layer (or in the unplaced list).

    ``nominal_units`` counts every box as full (``units_per_box * boxes``),
    which overstates an order whose last box is only partly filled;
    ``actual_units`` sums what the boxes really carry.
    """

    sku: str
    display_name: str
    box_type_key: str
    units_per_box: int
    boxes: int = 0
    actual_units: int = 0
    unit_policy: str = DEFAULT_UNIT_POLICY

    @property
    def nominal_units(self) -> int:
        return self.units_per_box * self.boxes

    @property
    def units(self) -> int:
        if self.unit_policy == "actual":
            return self.actual_units
        return self.nominal_units


@dataclass
class LayerSummary:
    index: int
    rows: List[SkuCount]
    height: float
    weight_kg: float
    area_utilization: float
    min_support: Optional[float] = None

    @property
    def boxes(self) -> int:
        return sum(row.boxes for row in self.rows)

    @property
    def units(self) -> int:
        return sum(row.units for row in self.rows)


@dataclass
class PalletSummary:
    index: int
    layers: List[LayerSummary]
    total_height: float
    total_weight_kg: float
    volume_utilization: float

    @property
    def boxes(self) -> int:
        return sum(layer.boxes for layer in self.layers)

    @property
    def units(self) -> int:
        return sum(layer.units for layer in self.layers)


@dataclass
class AssemblySummary:
    status: AssemblyStatus
    unit_policy: str
    pallets: List[PalletSummary] = field(default_factory=list)
    unplaced: List[SkuCount] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def pallet_count(self) -> int:
        return len(self.pallets)

    @property
    def total_boxes(self) -> int:
        return sum(pallet.boxes for pallet in self.pallets)

    @property
    def total_units(self) -> int:
        return sum(pallet.units for pallet in self.pallets)

    @property
    def total_weight_kg(self) -> float:
        return sum(pallet.total_weight_kg for pallet in self.pallets)


def group_by_sku(instances: Iterable[BoxInstance], unit_policy: str) -> List[SkuCount]:
    """Group boxes by (SKU, box type) in first-seen order."""
    groups: Dict[Tuple[str, str], SkuCount] = {}
    for box in instances:
        key = (box.sku, box.box_type_key)
        row = groups.get(key)
        if row is None:
            row = SkuCount(
                sku=box.sku,
                display_name=box.display_name,
                box_type_key=box.box_type_key,
                units_per_box=box.units_per_box,
                unit_policy=unit_policy,
            )
            groups[key] = row
        row.boxes += 1
        row.actual_units += box.fill_units
    return list(groups.values())


def summarize(
    result: AssemblyResult, unit_policy: str = DEFAULT_UNIT_POLICY
) -> AssemblySummary:
    if unit_policy not in UNIT_POLICIES:
        raise ValueError(
            f"unknown unit policy {unit_policy!r} (known: {', '.join(UNIT_POLICIES)})"
        )
    config = result.config
    pallets: List[PalletSummary] = []
    for p_idx, pallet in enumerate(result.pallets, start=1):
        layers: List[LayerSummary] = []
        previous = None
        for l_idx, layer in enumerate(pallet.layers, start=1):
            layers.append(
                LayerSummary(
                    index=l_idx,
                    rows=group_by_sku((p.instance for p in layer.placements), unit_policy),
                    height=layer.height,
                    weight_kg=layer.weight_kg,
                    area_utilization=layer_area_utilization(layer, config),
                    min_support=(
                        layer_min_support(layer, previous) if previous is not None else None
                    ),
                )
            )
            previous = layer
        pallets.append(
            PalletSummary(
                index=p_idx,
                layers=layers,
                total_height=pallet.total_height,
                total_weight_kg=pallet.total_weight_kg,
                volume_utilization=pallet_volume_utilization(pallet, config),
            )
        )

    return AssemblySummary(
        status=result.status,
        unit_policy=unit_policy,
        pallets=pallets,
        unplaced=group_by_sku(result.unplaced, unit_policy),
        diagnostics=list(result.diagnostics),
    )
