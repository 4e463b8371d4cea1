from assembly_core import Catalog, OrderLine, PalletConfig, plan_assembly, summarize
from loadplan_app.core.report_text import format_table, render_report

CATALOG = Catalog.from_dict(
    {
        "A100": {
            "fragility": "strong",
            "box1": {"units": 10, "weight": 5, "dimensions": [60, 40, 30], "orientation": "both"},
        },
        "BIG": {
            "fragility": "strong",
            "box1": {"units": 1, "weight": 10, "dimensions": [200, 40, 30]},
        },
    }
)


def _report(lines, unit_policy="nominal", config=None):
    result = plan_assembly(lines, CATALOG, config)
    return render_report(summarize(result, unit_policy=unit_policy), "ACME")


def test_single_pallet_report():
    text = _report([OrderLine("A100", "Alpha", "box1", 25)])
    lines = text.splitlines()

    assert lines[0] == "ACME"
    assert "PALLET 1" in lines
    assert "LAYER1" in lines
    assert "LAYER2" not in lines
    assert (
        "Summary pallet 1: 30 units | 3 Boxes | Total Weight: 40.0 Kg | Total Height: 30 cm"
        in lines
    )
    assert "Total Pallets: 1" in lines
    assert "Total Weight: 40.0 Kg" in lines
    assert "COULD NOT BE PACKED:" not in lines


def test_actual_unit_policy_counts_partial_boxes():
    text = _report([OrderLine("A100", "Alpha", "box1", 25)], unit_policy="actual")
    assert "Summary pallet 1: 25 units | 3 Boxes" in text


def test_table_row_lists_sku_and_box_type():
    text = _report([OrderLine("A100", "Alpha", "box1", 25)])
    assert "| A100 | Alpha   |    30 | BOX1     |            3 |" in text


def test_unplaced_boxes_are_listed():
    text = _report([OrderLine("BIG", "Long box", "box1", 1)])
    assert "Total Pallets: 0" in text
    assert "COULD NOT BE PACKED:" in text
    assert "| BIG | Long box |     1 | BOX1     |            1 |" in text


def test_empty_order_message():
    text = _report([])
    assert "No valid order lines found. Check your file." in text
    assert "ORDER RESUME:" not in text


def test_skipped_lines_are_reported():
    text = _report([OrderLine("A100", "Alpha", "box9", 5)])
    assert "No boxes to pack after expansion." in text
    assert "Skipped order lines:" in text


def test_format_table_pads_columns():
    out = format_table(("a", "bb", "n"), [("xyz", "1", "7")])
    assert out == [
        "+-----+----+---+",
        "| a   | bb | n |",
        "+-----+----+---+",
        "| xyz | 1  | 7 |",
        "+-----+----+---+",
    ]
