from assembly_core.models import BoxInstance, Fragility
from assembly_core.sequencer import sequence_by_fragility


def _box(sku, fragility):
    return BoxInstance(sku, sku, "box1", fragility, 1.0, 10, 10, 10, False, 1)


def test_orders_strong_medium_fragile():
    boxes = [
        _box("F", Fragility.FRAGILE),
        _box("M", Fragility.MEDIUM),
        _box("S", Fragility.STRONG),
    ]
    assert [b.sku for b in sequence_by_fragility(boxes)] == ["S", "M", "F"]


def test_equal_fragility_keeps_input_order():
    boxes = [
        _box("F1", Fragility.FRAGILE),
        _box("S1", Fragility.STRONG),
        _box("F2", Fragility.FRAGILE),
        _box("S2", Fragility.STRONG),
        _box("M1", Fragility.MEDIUM),
    ]
    result = sequence_by_fragility(boxes)
    assert [b.sku for b in result] == ["S1", "S2", "M1", "F1", "F2"]


def test_returns_new_list():
    boxes = [_box("F", Fragility.FRAGILE), _box("S", Fragility.STRONG)]
    result = sequence_by_fragility(boxes)
    assert result is not boxes
    assert [b.sku for b in boxes] == ["F", "S"]
