from typing import Dict, Type

from ..models import PalletConfig
from .base import LayerPack, LayerPacker
from .guillotine import FreeRectangleArena, GuillotineLayerPacker, choose_orientation
from .rect_packing import RowLayerPacker, is_homogeneous, two_row_layout

DEFAULT_STRATEGY = "guillotine"

PACKERS: Dict[str, Type[LayerPacker]] = {
    GuillotineLayerPacker.name: GuillotineLayerPacker,
    RowLayerPacker.name: RowLayerPacker,
}


def get_layer_packer(name: str, config: PalletConfig) -> LayerPacker:
    key = (name or DEFAULT_STRATEGY).strip().lower()
    try:
        packer_cls = PACKERS[key]
    except KeyError:
        known = ", ".join(sorted(PACKERS))
        raise ValueError(f"unknown packing strategy {name!r} (known: {known})") from None
    return packer_cls(config)


__all__ = [
    "DEFAULT_STRATEGY",
    "PACKERS",
    "LayerPack",
    "LayerPacker",
    "FreeRectangleArena",
    "GuillotineLayerPacker",
    "RowLayerPacker",
    "choose_orientation",
    "get_layer_packer",
    "is_homogeneous",
    "two_row_layout",
]
