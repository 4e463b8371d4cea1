from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from ..models import BoxInstance, FreeRectangle, Placement
from .base import EPS, LayerPack, LayerPacker

logger = logging.getLogger(__name__)


class FreeRectangleArena:
    """Free space of one layer, scanned in creation order.

    Removed rectangles leave a ``None`` tombstone so the slots of the others
    never move.
    """

    def __init__(self, initial: FreeRectangle) -> None:
        self._slots: List[Optional[FreeRectangle]] = [initial]

    def __iter__(self):
        for index, rect in enumerate(self._slots):
            if rect is not None:
                yield index, rect

    def __len__(self) -> int:
        return sum(1 for rect in self._slots if rect is not None)

    def remove(self, index: int) -> FreeRectangle:
        rect = self._slots[index]
        if rect is None:
            raise KeyError(index)
        self._slots[index] = None
        return rect

    def append(self, rect: FreeRectangle) -> None:
        self._slots.append(rect)

    def live(self) -> List[FreeRectangle]:
        return [rect for _, rect in self]


def _fits(dims: Tuple[float, float], rect: FreeRectangle) -> bool:
    length, depth = dims
    if rect.width <= EPS or rect.height <= EPS:
        return False
    return length <= rect.width + EPS and depth <= rect.height + EPS


def _waste(dims: Tuple[float, float], rect: FreeRectangle) -> float:
    length, depth = dims
    return (rect.width - length) * (rect.height - depth)


def choose_orientation(
    orientations: Sequence[Tuple[float, float]], rect: FreeRectangle
) -> Optional[Tuple[float, float]]:
    """Least-waste orientation that fits ``rect``; natural one wins ties."""
    best = None
    best_waste = 0.0
    for dims in orientations:
        if not _fits(dims, rect):
            continue
        waste = _waste(dims, rect)
        if best is None or waste < best_waste - EPS:
            best = dims
            best_waste = waste
    return best


class GuillotineLayerPacker(LayerPacker):
    """First-fit guillotine packing over the pallet footprint.

    Each box takes the first free rectangle (in creation order) that accepts
    one of its orientations. The rectangle is then cut in two: the strip to
    the right of the box, as deep as the box, and the full-width strip above
    it.
    """

    name = "guillotine"

    def pack(self, pool: Sequence[BoxInstance]) -> LayerPack:
        arena = FreeRectangleArena(
            FreeRectangle(0.0, 0.0, self.config.length, self.config.width)
        )
        placed: List[Placement] = []
        remaining: List[BoxInstance] = []

        for instance in pool:
            orientations = instance.orientations()
            fit = None
            for index, rect in arena:
                dims = choose_orientation(orientations, rect)
                if dims is not None:
                    fit = (index, rect, dims)
                    break
            if fit is None:
                remaining.append(instance)
                continue

            index, rect, (length, depth) = fit
            placed.append(Placement(instance, rect.x, rect.y, length, depth))
            arena.remove(index)
            arena.append(
                FreeRectangle(rect.x + length, rect.y, rect.width - length, depth)
            )
            arena.append(
                FreeRectangle(rect.x, rect.y + depth, rect.width, rect.height - depth)
            )

        logger.debug(
            "Guillotine layer: %d placed, %d left, %d free rectangles",
            len(placed),
            len(remaining),
            len(arena),
        )
        return LayerPack(placed=placed, remaining=remaining)
