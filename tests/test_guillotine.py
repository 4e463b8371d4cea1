import pytest

from assembly_core.algorithms import FreeRectangleArena, GuillotineLayerPacker, choose_orientation
from assembly_core.models import BoxInstance, FreeRectangle, Fragility, PalletConfig
from assembly_core.support import rect_within, rects_overlap


def _box(length, depth, rotate=False, sku="A", height=30.0):
    return BoxInstance(sku, sku, "box1", Fragility.STRONG, 5.0, length, depth, height, rotate, 10)


def _rects(pack):
    return [(p.x, p.y, p.length, p.depth) for p in pack.placed]


def test_three_rotatable_boxes_share_one_row():
    packer = GuillotineLayerPacker(PalletConfig())
    pack = packer.pack([_box(60, 40, rotate=True) for _ in range(3)])

    assert _rects(pack) == [(0, 0, 40, 60), (40, 0, 40, 60), (80, 0, 40, 60)]
    assert pack.remaining == []


def test_fixed_boxes_fill_a_two_by_two_grid():
    packer = GuillotineLayerPacker(PalletConfig())
    pool = [_box(60, 40) for _ in range(5)]
    pack = packer.pack(pool)

    assert _rects(pack) == [(0, 0, 60, 40), (60, 0, 60, 40), (0, 40, 60, 40), (60, 40, 60, 40)]
    assert pack.remaining == [pool[4]]


def test_oversized_box_is_skipped_and_packing_continues():
    packer = GuillotineLayerPacker(PalletConfig())
    big, small = _box(150, 90, rotate=True), _box(60, 40)
    pack = packer.pack([big, small])

    assert [p.instance for p in pack.placed] == [small]
    assert _rects(pack) == [(0, 0, 60, 40)]
    assert pack.remaining == [big]


def test_fixed_box_does_not_rotate_to_fit():
    packer = GuillotineLayerPacker(PalletConfig())
    pack = packer.pack([_box(70, 100)])
    assert pack.placed == []

    rotatable = _box(70, 100, rotate=True)
    pack = packer.pack([rotatable])
    assert _rects(pack) == [(0, 0, 100, 70)]
    assert pack.placed[0].rotated


def test_remaining_keeps_pool_order():
    packer = GuillotineLayerPacker(PalletConfig())
    pool = [_box(100, 70, sku=f"B{i}") for i in range(4)]
    pack = packer.pack(pool)

    assert [p.instance for p in pack.placed] == [pool[0]]
    assert pack.remaining == pool[1:]


def test_pool_is_left_untouched_and_result_repeats():
    packer = GuillotineLayerPacker(PalletConfig())
    pool = [_box(50, 30, rotate=True), _box(40, 40), _box(70, 20, rotate=True), _box(30, 25)]
    snapshot = list(pool)

    first = packer.pack(pool)
    second = packer.pack(pool)

    assert pool == snapshot
    assert _rects(first) == _rects(second)
    assert [p.instance for p in first.placed] == [p.instance for p in second.placed]


def test_mixed_layer_is_disjoint_and_inside_the_footprint():
    config = PalletConfig()
    packer = GuillotineLayerPacker(config)
    sizes = [(50, 30), (40, 40), (70, 20), (30, 25), (35, 35), (20, 60), (45, 15), (25, 25)] * 3
    pool = [_box(l, d, rotate=i % 2 == 0) for i, (l, d) in enumerate(sizes)]
    pack = packer.pack(pool)
    rects = _rects(pack)

    assert rects
    assert len(pack.placed) + len(pack.remaining) == len(pool)
    for rect in rects:
        assert rect_within(rect, config.length, config.width)
    for i, a in enumerate(rects):
        for b in rects[i + 1 :]:
            assert not rects_overlap(a, b)


def test_choose_orientation_prefers_least_waste():
    rect = FreeRectangle(0, 0, 120, 80)
    assert choose_orientation(((60, 40), (40, 60)), rect) == (40, 60)


def test_choose_orientation_keeps_natural_on_tie():
    rect = FreeRectangle(0, 0, 100, 100)
    assert choose_orientation(((50, 20), (20, 50)), rect) == (50, 20)


def test_degenerate_rectangles_never_fit():
    assert choose_orientation(((0, 0),), FreeRectangle(10, 0, 0, 40)) is None
    assert choose_orientation(((10, 10),), FreeRectangle(0, 40, 120, 0)) is None


def test_arena_tombstones_removed_rectangles():
    arena = FreeRectangleArena(FreeRectangle(0, 0, 120, 80))
    arena.append(FreeRectangle(60, 0, 60, 40))
    arena.remove(0)

    assert [index for index, _ in arena] == [1]
    assert len(arena) == 1
    with pytest.raises(KeyError):
        arena.remove(0)
