from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple

from .catalog import Catalog, normalize_box_key
from .diagnostics import Diagnostic, DiagnosticCode
from .models import BoxInstance, OrderLine

logger = logging.getLogger(__name__)


def boxes_needed(requested_units: int, units_per_box: int) -> int:
    if units_per_box <= 0:
        raise ValueError("units_per_box must be positive")
    if requested_units <= 0:
        return 0
    return math.ceil(requested_units / units_per_box)


def expand_order_lines(
    lines: Sequence[OrderLine], catalog: Catalog
) -> Tuple[List[BoxInstance], List[Diagnostic]]:
    """Turn order lines into one :class:`BoxInstance` per physical box.

    Lines the catalog cannot resolve are skipped with a diagnostic; they never
    abort the expansion of the other lines.
    """
    instances: List[BoxInstance] = []
    diagnostics: List[Diagnostic] = []

    for index, line in enumerate(lines):
        box_key = normalize_box_key(line.box_type_key)
        if line.requested_units < 0:
            diagnostics.append(
                Diagnostic(
                    DiagnosticCode.INVALID_ORDER_LINE,
                    f"Negative quantity {line.requested_units} for {line.sku}",
                    sku=line.sku,
                    box_type_key=box_key,
                    line_index=index,
                )
            )
            logger.warning("Skipping line %d (%s): negative quantity", index, line.sku)
            continue

        spec = catalog.lookup(line.sku, box_key)
        fragility = catalog.fragility(line.sku)
        if spec is None or fragility is None or spec.units_per_box <= 0:
            if spec is None:
                reason = f"No box type '{box_key}' for {line.sku} in catalog"
            else:
                reason = f"Box type '{box_key}' of {line.sku} has no units per box"
            diagnostics.append(
                Diagnostic(
                    DiagnosticCode.MISSING_CATALOG_ENTRY,
                    reason,
                    sku=line.sku,
                    box_type_key=box_key,
                    line_index=index,
                )
            )
            logger.warning("Skipping line %d: %s", index, reason)
            continue

        count = boxes_needed(line.requested_units, spec.units_per_box)
        for k in range(count):
            if k == count - 1:
                fill = line.requested_units - spec.units_per_box * (count - 1)
            else:
                fill = spec.units_per_box
            instances.append(
                BoxInstance(
                    sku=line.sku,
                    display_name=line.display_name or line.sku,
                    box_type_key=box_key,
                    fragility=fragility,
                    weight_kg=spec.weight_kg,
                    length=spec.length,
                    depth=spec.depth,
                    height=spec.height,
                    can_rotate=spec.rotatable,
                    units_per_box=spec.units_per_box,
                    line_index=index,
                    fill_units=fill,
                )
            )
        logger.debug(
            "Line %d: %s x%d units -> %d boxes (%s)",
            index,
            line.sku,
            line.requested_units,
            count,
            box_key,
        )

    return instances, diagnostics
