from __future__ import annotations

from typing import List, Sequence

from assembly_core.diagnostics import AssemblyStatus, DiagnosticCode
from assembly_core.summary import AssemblySummary, SkuCount
from assembly_core.units import format_float

EMPTY_MESSAGES = {
    AssemblyStatus.EMPTY_ORDER_SET: "No valid order lines found. Check your file.",
    AssemblyStatus.EMPTY_INSTANCE_SET: "No boxes to pack after expansion.",
}

TABLE_HEADER = ("SKU", "Product", "Units", "Box Type", "Boxes Needed")
NUMERIC_COLUMNS = {2, 4}


def format_table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
    widths = [len(h) for h in header]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    def line(cells: Sequence[str]) -> str:
        parts = []
        for i, cell in enumerate(cells):
            parts.append(cell.rjust(widths[i]) if i in NUMERIC_COLUMNS else cell.ljust(widths[i]))
        return "| " + " | ".join(parts) + " |"

    rule = "+-" + "-+-".join("-" * w for w in widths) + "-+"
    out = [rule, line(header), rule]
    out.extend(line(row) for row in rows)
    out.append(rule)
    return out


def _row_cells(row: SkuCount) -> List[str]:
    return [
        row.sku,
        row.display_name,
        str(row.units),
        row.box_type_key.upper(),
        str(row.boxes),
    ]


def _skipped_lines(summary: AssemblySummary) -> List[str]:
    skipped = [
        d for d in summary.diagnostics if d.code is not DiagnosticCode.UNPLACEABLE_INSTANCE
    ]
    if not skipped:
        return []
    return ["", "Skipped order lines:"] + [f"  - {d.message}" for d in skipped]


def render_report(summary: AssemblySummary, customer: str) -> str:
    """Plain-text loading plan: one table per layer, pallet summaries, order resume."""
    out: List[str] = [customer, "=" * max(len(customer), 1), ""]

    if summary.status in EMPTY_MESSAGES:
        out.append(EMPTY_MESSAGES[summary.status])
        out.extend(_skipped_lines(summary))
        return "\n".join(out) + "\n"

    for pallet in summary.pallets:
        out.append(f"PALLET {pallet.index}")
        for layer in pallet.layers:
            out.append(f"LAYER{layer.index}")
            out.extend(format_table(TABLE_HEADER, [_row_cells(r) for r in layer.rows]))
        out.append(
            f"Summary pallet {pallet.index}: "
            f"{pallet.units} units | {pallet.boxes} Boxes | "
            f"Total Weight: {format_float(pallet.total_weight_kg)} Kg | "
            f"Total Height: {pallet.total_height:g} cm"
        )
        out.append("")

    out.append("ORDER RESUME:")
    out.append(f"Total Pallets: {summary.pallet_count}")
    out.append(f"Total Weight: {format_float(summary.total_weight_kg)} Kg")

    if summary.unplaced:
        out.append("")
        out.append("COULD NOT BE PACKED:")
        out.extend(format_table(TABLE_HEADER, [_row_cells(r) for r in summary.unplaced]))

    out.extend(_skipped_lines(summary))
    return "\n".join(out) + "\n"
