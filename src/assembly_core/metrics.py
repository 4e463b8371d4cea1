from __future__ import annotations

from .models import Layer, Pallet, PalletConfig
from .support import support_fraction


def layer_area_utilization(layer: Layer, config: PalletConfig) -> float:
    if config.footprint_area <= 0:
        return 0.0
    used = sum(p.length * p.depth for p in layer.placements)
    return used / config.footprint_area


def pallet_volume_utilization(pallet: Pallet, config: PalletConfig) -> float:
    capacity = config.footprint_area * config.max_height
    if capacity <= 0:
        return 0.0
    used = sum(
        p.length * p.depth * p.height for layer in pallet.layers for p in layer.placements
    )
    return used / capacity


def layer_min_support(upper: Layer, lower: Layer) -> float:
    """Weakest support of any box in ``upper`` by the boxes of ``lower``."""
    below = [p.rect for p in lower.placements]
    values = [support_fraction(p.rect, below) for p in upper.placements]
    return min(values) if values else 0.0
