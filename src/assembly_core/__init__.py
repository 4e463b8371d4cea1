"""Pallet assembly engine: order lines in, stacked pallets out."""

from .algorithms import GuillotineLayerPacker, LayerPacker, RowLayerPacker, get_layer_packer
from .catalog import Catalog
from .diagnostics import AssemblyStatus, Diagnostic, DiagnosticCode
from .engine import AssemblyResult, plan_assembly
from .expander import expand_order_lines
from .models import (
    BoxInstance,
    BoxSpec,
    Fragility,
    Layer,
    OrderLine,
    Pallet,
    PalletConfig,
    Placement,
    Product,
)
from .sequencer import sequence_by_fragility
from .stacking import PalletStacker, StackResult
from .summary import AssemblySummary, summarize

__all__ = [
    "AssemblyResult",
    "AssemblyStatus",
    "AssemblySummary",
    "BoxInstance",
    "BoxSpec",
    "Catalog",
    "Diagnostic",
    "DiagnosticCode",
    "Fragility",
    "GuillotineLayerPacker",
    "Layer",
    "LayerPacker",
    "OrderLine",
    "Pallet",
    "PalletConfig",
    "PalletStacker",
    "Placement",
    "Product",
    "RowLayerPacker",
    "StackResult",
    "expand_order_lines",
    "get_layer_packer",
    "plan_assembly",
    "sequence_by_fragility",
    "summarize",
]
