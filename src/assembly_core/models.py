from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

from .units import CM, KG


class Fragility(str, Enum):
    STRONG = "strong"
    MEDIUM = "medium"
    FRAGILE = "fragile"

    @property
    def rank(self) -> int:
        return _FRAGILITY_RANK[self]

    @classmethod
    def parse(cls, value: "str | Fragility") -> "Fragility":
        if isinstance(value, Fragility):
            return value
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"unknown fragility {value!r}") from None


_FRAGILITY_RANK = {
    Fragility.STRONG: 0,
    Fragility.MEDIUM: 1,
    Fragility.FRAGILE: 2,
}


def _require_positive(name: str, value: float) -> float:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


@dataclass(frozen=True)
class PalletConfig:
    """Pallet footprint and stacking caps (cm / kg)."""

    length: CM = 120.0
    width: CM = 80.0
    max_height: CM = 170.0
    max_weight: KG = 600.0
    tare_weight: KG = 25.0
    name: str = "EUR"

    def __post_init__(self) -> None:
        for attr in ("length", "width", "max_height", "max_weight", "tare_weight"):
            value = float(_require_positive(attr, getattr(self, attr)))
            object.__setattr__(self, attr, value)
        if self.tare_weight >= self.max_weight:
            raise ValueError("tare_weight must be below max_weight")

    @property
    def payload_limit(self) -> KG:
        return self.max_weight - self.tare_weight

    @property
    def footprint_area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class BoxSpec:
    """One box type of a product as described by the catalog."""

    units_per_box: int
    weight_kg: KG
    length: CM
    depth: CM
    height: CM
    rotatable: bool = False

    @property
    def footprint(self) -> Tuple[CM, CM]:
        return self.length, self.depth


@dataclass(frozen=True)
class Product:
    sku: str
    fragility: Fragility
    box_types: Dict[str, BoxSpec] = field(default_factory=dict)


@dataclass(frozen=True)
class OrderLine:
    sku: str
    display_name: str
    box_type_key: str
    requested_units: int


@dataclass(frozen=True, eq=False)
class BoxInstance:
    """One physical box waiting to be placed.

    Instances compare by identity: two boxes from the same order line share
    every catalog-derived field but are still different boxes.
    """

    sku: str
    display_name: str
    box_type_key: str
    fragility: Fragility
    weight_kg: KG
    length: CM
    depth: CM
    height: CM
    can_rotate: bool
    units_per_box: int
    line_index: int = -1
    fill_units: int = 0

    @property
    def footprint(self) -> Tuple[CM, CM]:
        return self.length, self.depth

    def orientations(self) -> Tuple[Tuple[CM, CM], ...]:
        natural = (self.length, self.depth)
        if self.can_rotate and self.length != self.depth:
            return natural, (self.depth, self.length)
        return (natural,)


@dataclass
class FreeRectangle:
    x: CM
    y: CM
    width: CM
    height: CM

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)


@dataclass(frozen=True)
class Placement:
    instance: BoxInstance
    x: CM
    y: CM
    length: CM
    depth: CM

    @property
    def rotated(self) -> bool:
        return (self.length, self.depth) != self.instance.footprint

    @property
    def height(self) -> CM:
        return self.instance.height

    @property
    def weight_kg(self) -> KG:
        return self.instance.weight_kg

    @property
    def rect(self) -> Tuple[CM, CM, CM, CM]:
        return self.x, self.y, self.length, self.depth


@dataclass(frozen=True)
class Layer:
    placements: Tuple[Placement, ...]
    z: CM = 0.0

    @property
    def height(self) -> CM:
        return max((p.height for p in self.placements), default=0.0)

    @property
    def weight_kg(self) -> KG:
        return sum(p.weight_kg for p in self.placements)

    @property
    def box_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class Pallet:
    layers: Tuple[Layer, ...]
    tare_kg: KG = 0.0

    @property
    def total_height(self) -> CM:
        return sum(layer.height for layer in self.layers)

    @property
    def cargo_weight_kg(self) -> KG:
        return sum(layer.weight_kg for layer in self.layers)

    @property
    def total_weight_kg(self) -> KG:
        return self.tare_kg + self.cargo_weight_kg

    @property
    def box_count(self) -> int:
        return sum(layer.box_count for layer in self.layers)
