from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..models import BoxInstance, Placement
from .base import EPS, LayerPack, LayerPacker
from .guillotine import GuillotineLayerPacker

logger = logging.getLogger(__name__)

Row = Tuple[float, float, int]


def is_homogeneous(pool: Sequence[BoxInstance]) -> bool:
    """All boxes share SKU, box type and natural footprint."""
    if not pool:
        return False
    first = pool[0]
    return all(
        box.sku == first.sku
        and box.box_type_key == first.box_type_key
        and box.footprint == first.footprint
        for box in pool[1:]
    )


def best_row(
    orientations: Sequence[Tuple[float, float]], row_length: float, depth_left: float
) -> Optional[Row]:
    """Orientation giving the most boxes along ``row_length``.

    Ties go to the shallower row, then to the earlier orientation.
    """
    best: Optional[Row] = None
    for length, depth in orientations:
        if length <= 0 or depth > depth_left + EPS:
            continue
        count = int((row_length + EPS) // length)
        if count <= 0:
            continue
        if best is None or count > best[2] or (count == best[2] and depth < best[1] - EPS):
            best = (length, depth, count)
    return best


def two_row_layout(
    orientations: Sequence[Tuple[float, float]], pallet_l: float, pallet_w: float
) -> List[Tuple[float, float, float, float]]:
    """Slots (x, y, length, depth) of a two-row layout, row 1 at y=0."""
    slots: List[Tuple[float, float, float, float]] = []
    first = best_row(orientations, pallet_l, pallet_w)
    if first is None:
        return slots
    length, depth, count = first
    slots.extend((i * length, 0.0, length, depth) for i in range(count))

    second = best_row(orientations, pallet_l, pallet_w - depth)
    if second is not None:
        length2, depth2, count2 = second
        slots.extend((i * length2, depth, length2, depth2) for i in range(count2))
    return slots


class RowLayerPacker(LayerPacker):
    """Two regular rows for a pool of identical boxes.

    Mixed pools are handed to the guillotine packer unchanged.
    """

    name = "rows"

    def __init__(self, config) -> None:
        super().__init__(config)
        self.fallback = GuillotineLayerPacker(config)

    def pack(self, pool: Sequence[BoxInstance]) -> LayerPack:
        if not is_homogeneous(pool):
            return self.fallback.pack(pool)

        slots = two_row_layout(pool[0].orientations(), self.config.length, self.config.width)
        placed = [
            Placement(instance, x, y, length, depth)
            for instance, (x, y, length, depth) in zip(pool, slots)
        ]
        remaining = list(pool[len(placed):])
        logger.debug(
            "Row layer for %s: %d slots, %d placed", pool[0].sku, len(slots), len(placed)
        )
        return LayerPack(placed=placed, remaining=remaining)
