import pytest

from assembly_core.models import (
    BoxInstance,
    Fragility,
    Layer,
    Pallet,
    PalletConfig,
    Placement,
)


def _box(length=60, depth=40, height=30, weight=5.0, rotate=True):
    return BoxInstance(
        "A", "Alpha", "box1", Fragility.STRONG, weight, length, depth, height, rotate, 10
    )


def test_pallet_config_defaults():
    config = PalletConfig()
    assert (config.length, config.width) == (120.0, 80.0)
    assert config.max_height == 170.0
    assert config.max_weight == 600.0
    assert config.tare_weight == 25.0
    assert config.payload_limit == 575.0


@pytest.mark.parametrize("field", ["length", "width", "max_height", "max_weight", "tare_weight"])
def test_pallet_config_rejects_non_positive(field):
    with pytest.raises(ValueError):
        PalletConfig(**{field: 0})


def test_pallet_config_rejects_tare_above_cap():
    with pytest.raises(ValueError):
        PalletConfig(max_weight=20, tare_weight=25)


def test_fragility_parse_is_lenient_about_case():
    assert Fragility.parse(" Strong ") is Fragility.STRONG
    assert Fragility.parse("FRAGILE") is Fragility.FRAGILE
    assert Fragility.STRONG.rank < Fragility.MEDIUM.rank < Fragility.FRAGILE.rank
    with pytest.raises(ValueError):
        Fragility.parse("glass")


def test_orientations_follow_rotation_policy():
    assert _box(rotate=True).orientations() == ((60, 40), (40, 60))
    assert _box(rotate=False).orientations() == ((60, 40),)
    assert _box(length=40, depth=40, rotate=True).orientations() == ((40, 40),)


def test_instances_compare_by_identity():
    a, b = _box(), _box()
    assert a != b
    assert len({a, b}) == 2


def test_layer_and_pallet_totals():
    low = Layer((Placement(_box(height=30), 0, 0, 60, 40), Placement(_box(height=20), 60, 0, 60, 40)))
    high = Layer((Placement(_box(height=25, weight=7.5), 0, 0, 40, 60),), z=30)
    pallet = Pallet((low, high), tare_kg=25)
    assert low.height == 30
    assert low.weight_kg == pytest.approx(10.0)
    assert pallet.total_height == 55
    assert pallet.total_weight_kg == pytest.approx(42.5)
    assert pallet.box_count == 3
    assert high.placements[0].rotated
    assert not low.placements[0].rotated
