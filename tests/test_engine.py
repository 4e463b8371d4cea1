import pytest

from assembly_core import (
    AssemblyStatus,
    Catalog,
    DiagnosticCode,
    OrderLine,
    PalletConfig,
    plan_assembly,
)
from assembly_core.export import result_to_dict
from assembly_core.sanity import assembly_flags, is_sane

CATALOG = Catalog.from_dict(
    {
        "A": {
            "fragility": "strong",
            "box1": {"units": 10, "weight": 5, "dimensions": [60, 40, 30], "orientation": "both"},
        },
        "B": {
            "fragility": "fragile",
            "box1": {"units": 1, "weight": 50, "dimensions": [100, 70, 50], "orientation": "fixed"},
        },
        "C": {
            "fragility": "strong",
            "box1": {"units": 1, "weight": 50, "dimensions": [100, 70, 50], "orientation": "fixed"},
        },
        "M": {
            "fragility": "medium",
            "box1": {"units": 6, "weight": 8, "dimensions": [40, 30, 25], "orientation": "both"},
            "box2": {"units": 12, "weight": 15, "dimensions": [50, 40, 35], "orientation": "fixed"},
        },
    }
)


def test_single_line_fits_one_layer():
    result = plan_assembly([OrderLine("A", "Alpha", "box1", 25)], CATALOG)

    assert result.status is AssemblyStatus.OK
    assert len(result.instances) == 3
    assert len(result.pallets) == 1
    pallet = result.pallets[0]
    assert len(pallet.layers) == 1
    assert pallet.layers[0].box_count == 3
    assert pallet.layers[0].height == 30
    assert pallet.layers[0].weight_kg == pytest.approx(15.0)
    assert pallet.total_weight_kg == pytest.approx(40.0)
    assert pallet.total_height == 30


def test_fragile_line_is_stacked_above_strong_line():
    lines = [OrderLine("B", "Bravo", "box1", 1), OrderLine("C", "Charlie", "box1", 1)]
    result = plan_assembly(lines, CATALOG)

    pallet = result.pallets[0]
    assert [layer.placements[0].instance.sku for layer in pallet.layers] == ["C", "B"]
    assert pallet.total_height == 100
    assert pallet.total_weight_kg == pytest.approx(125.0)
    assert "fragility_inversion" not in assembly_flags(result)


def test_no_lines_is_an_empty_order_set():
    result = plan_assembly([], CATALOG)
    assert result.status is AssemblyStatus.EMPTY_ORDER_SET
    assert result.is_empty
    assert result.pallets == []


def test_lines_without_boxes_are_an_empty_instance_set():
    lines = [OrderLine("A", "Alpha", "box1", 0), OrderLine("Z", "Zulu", "box1", 4)]
    result = plan_assembly(lines, CATALOG)

    assert result.status is AssemblyStatus.EMPTY_INSTANCE_SET
    assert result.pallets == []
    assert [d.code for d in result.diagnostics] == [DiagnosticCode.MISSING_CATALOG_ENTRY]


def test_bad_line_does_not_stop_the_rest():
    lines = [OrderLine("A", "Alpha", "box7", 10), OrderLine("A", "Alpha", "box1", 10)]
    result = plan_assembly(lines, CATALOG)

    assert result.status is AssemblyStatus.OK
    assert result.placed_count == 1
    assert result.diagnostics[0].code is DiagnosticCode.MISSING_CATALOG_ENTRY


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValueError):
        plan_assembly([OrderLine("A", "Alpha", "box1", 10)], CATALOG, strategy="best")


def test_mixed_order_respects_every_rule():
    lines = [
        OrderLine("M", "Mike", "box1", 200),
        OrderLine("A", "Alpha", "box1", 400),
        OrderLine("B", "Bravo", "box1", 3),
        OrderLine("M", "Mike", "box2", 100),
        OrderLine("C", "Charlie", "box1", 4),
    ]
    config = PalletConfig()
    result = plan_assembly(lines, CATALOG, config)

    assert result.status is AssemblyStatus.OK
    assert result.unplaced == []
    assert result.placed_count == len(result.instances)
    assert is_sane(result)
    for pallet in result.pallets:
        assert pallet.total_height <= config.max_height
        assert pallet.total_weight_kg <= config.max_weight


def test_rows_strategy_on_uniform_order():
    result = plan_assembly([OrderLine("M", "Mike", "box2", 120)], CATALOG, strategy="rows")

    assert result.strategy == "rows"
    assert result.placed_count == 10
    assert is_sane(result)


def test_same_input_gives_same_plan():
    lines = [OrderLine("M", "Mike", "box1", 90), OrderLine("A", "Alpha", "box1", 130)]
    first = result_to_dict(plan_assembly(lines, CATALOG), generated_at="t")
    second = result_to_dict(plan_assembly(lines, CATALOG), generated_at="t")
    assert first == second


def test_custom_pallet_profile_is_used():
    config = PalletConfig(length=80, width=60, max_height=100, max_weight=300, tare_weight=10)
    result = plan_assembly([OrderLine("C", "Charlie", "box1", 1)], CATALOG, config)

    assert result.pallets == []
    assert result.unplaced[0].sku == "C"
    assert result.diagnostics[0].code is DiagnosticCode.UNPLACEABLE_INSTANCE
