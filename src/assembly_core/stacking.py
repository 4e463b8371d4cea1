from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .algorithms import DEFAULT_STRATEGY, LayerPacker, get_layer_packer
from .algorithms.base import EPS
from .diagnostics import Diagnostic, DiagnosticCode
from .models import BoxInstance, Layer, Pallet, PalletConfig, Placement

logger = logging.getLogger(__name__)


@dataclass
class StackResult:
    pallets: List[Pallet] = field(default_factory=list)
    unplaced: List[BoxInstance] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def _layer_height(placed: Sequence[Placement]) -> float:
    return max((p.height for p in placed), default=0.0)


def _layer_weight(placed: Sequence[Placement]) -> float:
    return sum(p.weight_kg for p in placed)


class PalletStacker:
    """Stack packed layers onto pallets until height or weight runs out.

    A candidate layer that breaks a cap is dropped whole and its boxes seed
    the next pallet. On a still-empty pallet the candidate is cut back to the
    longest prefix that fits instead, so every pallet carries at least one
    box and the loop ends after at most one pallet per box.
    """

    def __init__(
        self, config: Optional[PalletConfig] = None, packer: Optional[LayerPacker] = None
    ) -> None:
        self.config = config or PalletConfig()
        self.packer = packer or get_layer_packer(DEFAULT_STRATEGY, self.config)

    def unplaceable_reason(self, instance: BoxInstance) -> str:
        if not self.packer.fits_footprint(instance):
            return (
                f"footprint {instance.length:g}x{instance.depth:g} cm does not fit "
                f"the {self.config.length:g}x{self.config.width:g} cm pallet"
            )
        if instance.height > self.config.max_height + EPS:
            return (
                f"height {instance.height:g} cm exceeds the "
                f"{self.config.max_height:g} cm stack limit"
            )
        if instance.weight_kg > self.config.payload_limit + EPS:
            return (
                f"weight {instance.weight_kg:g} kg exceeds the "
                f"{self.config.payload_limit:g} kg payload limit"
            )
        return ""

    def _reject(self, instance: BoxInstance, reason: str, result: StackResult) -> None:
        result.unplaced.append(instance)
        result.diagnostics.append(
            Diagnostic(
                DiagnosticCode.UNPLACEABLE_INSTANCE,
                f"{instance.sku} could not be packed: {reason}",
                sku=instance.sku,
                box_type_key=instance.box_type_key,
                line_index=instance.line_index,
            )
        )
        logger.warning("%s (%s) could not be packed: %s", instance.sku, instance.box_type_key, reason)

    def _exceeds_caps(self, used_h: float, used_w: float, placed: Sequence[Placement]) -> bool:
        return (
            used_h + _layer_height(placed) > self.config.max_height + EPS
            or used_w + _layer_weight(placed) > self.config.max_weight + EPS
        )

    def _trim_to_caps(self, placed: Sequence[Placement]) -> List[Placement]:
        kept: List[Placement] = []
        for placement in placed:
            if self._exceeds_caps(0.0, self.config.tare_weight, kept + [placement]):
                break
            kept.append(placement)
        return kept

    def assemble(self, instances: Sequence[BoxInstance]) -> StackResult:
        result = StackResult()
        pool: List[BoxInstance] = []
        for instance in instances:
            reason = self.unplaceable_reason(instance)
            if reason:
                self._reject(instance, reason, result)
            else:
                pool.append(instance)

        while pool:
            layers: List[Layer] = []
            used_h = 0.0
            used_w = self.config.tare_weight
            while pool:
                pack = self.packer.pack(pool)
                placed = pack.placed
                remaining = pack.remaining
                if not placed:
                    break
                if self._exceeds_caps(used_h, used_w, placed):
                    if layers:
                        logger.debug(
                            "Pallet %d full at %.1f cm / %.1f kg",
                            len(result.pallets) + 1,
                            used_h,
                            used_w,
                        )
                        break
                    placed = self._trim_to_caps(placed)
                    if not placed:
                        break
                    taken = {p.instance for p in placed}
                    remaining = [box for box in pool if box not in taken]
                    logger.debug("First layer trimmed to %d boxes to respect caps", len(placed))

                layers.append(Layer(tuple(placed), z=used_h))
                used_h += _layer_height(placed)
                used_w += _layer_weight(placed)
                pool = remaining

            if not layers:
                for instance in pool:
                    self._reject(instance, "no room on an empty pallet", result)
                break

            pallet = Pallet(tuple(layers), tare_kg=self.config.tare_weight)
            result.pallets.append(pallet)
            logger.debug(
                "Pallet %d: %d layers, %d boxes, %.1f cm, %.1f kg",
                len(result.pallets),
                len(pallet.layers),
                pallet.box_count,
                pallet.total_height,
                pallet.total_weight_kg,
            )

        return result
