from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine import AssemblyResult
from .models import BoxInstance, PalletConfig, Placement
from .summary import AssemblySummary, SkuCount


def iso_utc_now_ms() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def _round(value: float, ndigits: int = 3) -> float:
    return round(float(value), ndigits)


def config_to_dict(config: PalletConfig) -> Dict[str, Any]:
    return {
        "name": config.name,
        "length": config.length,
        "width": config.width,
        "maxHeight": config.max_height,
        "maxWeight": config.max_weight,
        "tareWeight": config.tare_weight,
    }


def placement_to_dict(placement: Placement) -> Dict[str, Any]:
    box = placement.instance
    return {
        "sku": box.sku,
        "boxType": box.box_type_key,
        "x": _round(placement.x),
        "y": _round(placement.y),
        "length": _round(placement.length),
        "depth": _round(placement.depth),
        "height": _round(box.height),
        "weightKg": _round(box.weight_kg),
        "rotated": placement.rotated,
    }


def instance_to_dict(box: BoxInstance) -> Dict[str, Any]:
    return {
        "sku": box.sku,
        "name": box.display_name,
        "boxType": box.box_type_key,
        "fragility": box.fragility.value,
        "dimensions": [box.length, box.depth, box.height],
        "weightKg": box.weight_kg,
    }


def result_to_dict(
    result: AssemblyResult, *, generated_at: Optional[str] = None
) -> Dict[str, Any]:
    """JSON-ready view of an assembly, keys in a stable order."""
    pallets: List[Dict[str, Any]] = []
    for p_idx, pallet in enumerate(result.pallets, start=1):
        pallets.append(
            {
                "index": p_idx,
                "totalHeight": _round(pallet.total_height),
                "totalWeightKg": _round(pallet.total_weight_kg),
                "layers": [
                    {
                        "index": l_idx,
                        "z": _round(layer.z),
                        "height": _round(layer.height),
                        "weightKg": _round(layer.weight_kg),
                        "placements": [placement_to_dict(p) for p in layer.placements],
                    }
                    for l_idx, layer in enumerate(pallet.layers, start=1)
                ],
            }
        )
    return {
        "status": result.status.value,
        "strategy": result.strategy,
        "generatedAt": generated_at or iso_utc_now_ms(),
        "pallet": config_to_dict(result.config),
        "pallets": pallets,
        "unplaced": [instance_to_dict(box) for box in result.unplaced],
        "diagnostics": [d.to_dict() for d in result.diagnostics],
    }


def _row_to_dict(row: SkuCount) -> Dict[str, Any]:
    return {
        "sku": row.sku,
        "name": row.display_name,
        "boxType": row.box_type_key,
        "boxes": row.boxes,
        "units": row.units,
        "nominalUnits": row.nominal_units,
        "actualUnits": row.actual_units,
    }


def summary_to_dict(summary: AssemblySummary) -> Dict[str, Any]:
    return {
        "status": summary.status.value,
        "unitPolicy": summary.unit_policy,
        "pallets": [
            {
                "index": pallet.index,
                "boxes": pallet.boxes,
                "units": pallet.units,
                "totalHeight": _round(pallet.total_height),
                "totalWeightKg": _round(pallet.total_weight_kg),
                "layers": [
                    {
                        "index": layer.index,
                        "height": _round(layer.height),
                        "weightKg": _round(layer.weight_kg),
                        "rows": [_row_to_dict(row) for row in layer.rows],
                    }
                    for layer in pallet.layers
                ],
            }
            for pallet in summary.pallets
        ],
        "totals": {
            "pallets": summary.pallet_count,
            "boxes": summary.total_boxes,
            "units": summary.total_units,
            "weightKg": _round(summary.total_weight_kg),
        },
        "unplaced": [_row_to_dict(row) for row in summary.unplaced],
    }


def save_json(path: "str | Path", payload: Any) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
