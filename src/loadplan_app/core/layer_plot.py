from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from assembly_core.engine import AssemblyResult
from assembly_core.models import Pallet, PalletConfig

logger = logging.getLogger(__name__)

SKU_COLORS = [
    "tab:blue",
    "tab:orange",
    "tab:green",
    "tab:purple",
    "tab:brown",
    "tab:pink",
    "tab:olive",
    "tab:cyan",
]
MARGIN = 10


def _color_map(pallet: Pallet) -> Dict[str, str]:
    colors: Dict[str, str] = {}
    for layer in pallet.layers:
        for placement in layer.placements:
            sku = placement.instance.sku
            if sku not in colors:
                colors[sku] = SKU_COLORS[len(colors) % len(SKU_COLORS)]
    return colors


def plot_pallet(pallet: Pallet, config: PalletConfig, title: str = "") -> Figure:
    """Top view of every layer of a pallet, bottom layer first."""
    count = max(len(pallet.layers), 1)
    fig = Figure(figsize=(4 * count, 3.4))
    colors = _color_map(pallet)
    axes = fig.subplots(1, count, squeeze=False)[0]
    for idx, ax in enumerate(axes):
        ax.add_patch(
            Rectangle(
                (0, 0),
                config.length,
                config.width,
                fill=False,
                edgecolor="black",
                linewidth=2,
            )
        )
        if idx < len(pallet.layers):
            layer = pallet.layers[idx]
            for placement in layer.placements:
                sku = placement.instance.sku
                ax.add_patch(
                    Rectangle(
                        (placement.x, placement.y),
                        placement.length,
                        placement.depth,
                        fill=True,
                        facecolor=colors[sku],
                        alpha=0.5,
                        edgecolor="black",
                    )
                )
                ax.text(
                    placement.x + placement.length / 2,
                    placement.y + placement.depth / 2,
                    sku,
                    ha="center",
                    va="center",
                    fontsize=7,
                    color="black",
                    zorder=10,
                )
            ax.set_title(f"Layer {idx + 1}: {layer.box_count} boxes, {layer.height:g} cm")
        ax.set_xlim(-MARGIN, config.length + MARGIN)
        ax.set_ylim(-MARGIN, config.width + MARGIN)
        ax.set_aspect("equal")
    if title:
        fig.suptitle(title)
    return fig


def save_pallet_plots(
    result: AssemblyResult, out_dir: "str | Path", config: PalletConfig | None = None
) -> List[Path]:
    config = config or result.config
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    paths: List[Path] = []
    for index, pallet in enumerate(result.pallets, start=1):
        path = out_dir / f"pallet_{index}.png"
        fig = plot_pallet(pallet, config, title=f"Pallet {index}")
        fig.savefig(path, dpi=100)
        paths.append(path)
        logger.debug("Wrote %s", path)
    return paths
