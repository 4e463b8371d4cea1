from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Set

from .models import Pallet, PalletConfig, Placement
from .support import rect_within, rects_overlap

if TYPE_CHECKING:  # pragma: no cover
    from .engine import AssemblyResult

EPS = 1e-6


def layer_has_overlap(placements: Iterable[Placement], eps: float = EPS) -> bool:
    rects = [p.rect for p in placements]
    for i, a in enumerate(rects):
        for b in rects[i + 1 :]:
            if rects_overlap(a, b, eps):
                return True
    return False


def layer_out_of_bounds(
    placements: Iterable[Placement], config: PalletConfig, eps: float = EPS
) -> bool:
    return any(not rect_within(p.rect, config.length, config.width, eps) for p in placements)


def has_fragility_inversion(pallet: Pallet) -> bool:
    """A lower layer holds a box more fragile than one stacked above it."""
    worst_below = -1
    for layer in pallet.layers:
        ranks = [p.instance.fragility.rank for p in layer.placements]
        if not ranks:
            continue
        if min(ranks) < worst_below:
            return True
        worst_below = max(worst_below, max(ranks))
    return False


def pallet_flags(pallet: Pallet, config: PalletConfig) -> Set[str]:
    flags: Set[str] = set()
    for layer in pallet.layers:
        if layer_has_overlap(layer.placements):
            flags.add("overlap")
        if layer_out_of_bounds(layer.placements, config):
            flags.add("out_of_bounds")
    if pallet.total_height > config.max_height + EPS:
        flags.add("height_exceeded")
    if pallet.total_weight_kg > config.max_weight + EPS:
        flags.add("weight_exceeded")
    if has_fragility_inversion(pallet):
        flags.add("fragility_inversion")
    return flags


def assembly_flags(
    result: "AssemblyResult", config: Optional[PalletConfig] = None
) -> Set[str]:
    """Collect rule violations found anywhere in an assembly.

    ``fragility_inversion`` is advisory: a large strong box that missed an
    earlier layer may legitimately land above smaller fragile ones.
    """
    config = config or result.config
    flags: Set[str] = set()
    seen: Set[int] = set()
    for pallet in result.pallets:
        if not pallet.layers:
            flags.add("empty_pallet")
        flags |= pallet_flags(pallet, config)
        for layer in pallet.layers:
            for placement in layer.placements:
                key = id(placement.instance)
                if key in seen:
                    flags.add("duplicate_instance")
                seen.add(key)

    accounted = seen | {id(box) for box in result.unplaced}
    expected = {id(box) for box in result.instances}
    if accounted != expected:
        flags.add("conservation")
    return flags


def is_sane(result: "AssemblyResult", config: Optional[PalletConfig] = None) -> bool:
    hard = assembly_flags(result, config) - {"fragility_inversion"}
    return not hard
