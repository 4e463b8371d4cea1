from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .algorithms import DEFAULT_STRATEGY, get_layer_packer
from .catalog import Catalog
from .diagnostics import AssemblyStatus, Diagnostic
from .expander import expand_order_lines
from .models import BoxInstance, OrderLine, Pallet, PalletConfig
from .sequencer import sequence_by_fragility
from .stacking import PalletStacker

logger = logging.getLogger(__name__)


@dataclass
class AssemblyResult:
    status: AssemblyStatus
    config: PalletConfig
    order_lines: List[OrderLine] = field(default_factory=list)
    instances: List[BoxInstance] = field(default_factory=list)
    pallets: List[Pallet] = field(default_factory=list)
    unplaced: List[BoxInstance] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    strategy: str = DEFAULT_STRATEGY

    @property
    def is_empty(self) -> bool:
        return self.status is not AssemblyStatus.OK

    @property
    def total_weight_kg(self) -> float:
        return sum(pallet.total_weight_kg for pallet in self.pallets)

    @property
    def placed_count(self) -> int:
        return sum(pallet.box_count for pallet in self.pallets)


def plan_assembly(
    order_lines: Sequence[OrderLine],
    catalog: Catalog,
    config: Optional[PalletConfig] = None,
    *,
    strategy: str = DEFAULT_STRATEGY,
) -> AssemblyResult:
    """Expand, sequence and stack an order into pallets.

    Bad lines and boxes that cannot be packed end up in ``diagnostics``; an
    order with nothing to pack comes back with an empty-state ``status``
    instead of raising.
    """
    config = config or PalletConfig()
    packer = get_layer_packer(strategy, config)
    lines = list(order_lines)

    if not lines:
        logger.info("No order lines to assemble")
        return AssemblyResult(
            AssemblyStatus.EMPTY_ORDER_SET, config, strategy=packer.name
        )

    instances, diagnostics = expand_order_lines(lines, catalog)
    if not instances:
        logger.info("Order lines produced no boxes")
        return AssemblyResult(
            AssemblyStatus.EMPTY_INSTANCE_SET,
            config,
            order_lines=lines,
            diagnostics=diagnostics,
            strategy=packer.name,
        )

    sequenced = sequence_by_fragility(instances)
    stacked = PalletStacker(config, packer).assemble(sequenced)
    logger.info(
        "Assembled %d boxes onto %d pallets (%d unplaced)",
        len(instances) - len(stacked.unplaced),
        len(stacked.pallets),
        len(stacked.unplaced),
    )
    return AssemblyResult(
        AssemblyStatus.OK,
        config,
        order_lines=lines,
        instances=instances,
        pallets=stacked.pallets,
        unplaced=stacked.unplaced,
        diagnostics=diagnostics + stacked.diagnostics,
        strategy=packer.name,
    )
