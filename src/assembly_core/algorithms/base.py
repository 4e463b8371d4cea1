from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models import BoxInstance, PalletConfig, Placement

EPS = 1e-9


@dataclass(frozen=True)
class LayerPack:
    """Outcome of packing one layer: what went in and what is left over."""

    placed: List[Placement]
    remaining: List[BoxInstance]


class LayerPacker:
    """Fill one pallet-footprint layer from a pool of boxes."""

    name = ""

    def __init__(self, config: PalletConfig) -> None:
        self.config = config

    def pack(self, pool: Sequence[BoxInstance]) -> LayerPack:
        raise NotImplementedError

    def fits_footprint(self, instance: BoxInstance) -> bool:
        """Whether the box fits an empty layer in any permitted orientation."""
        return any(
            length <= self.config.length + EPS and depth <= self.config.width + EPS
            for length, depth in instance.orientations()
        )
