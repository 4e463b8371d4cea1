from __future__ import annotations

from typing import Tuple

Rect = Tuple[float, float, float, float]


def rect_area(rect: Rect) -> float:
    _, _, w, l = rect
    return max(0.0, w) * max(0.0, l)


def rect_intersection_area(a: Rect, b: Rect) -> float:
    ax, ay, aw, al = a
    bx, by, bw, bl = b
    overlap_w = max(0.0, min(ax + aw, bx + bw) - max(ax, bx))
    overlap_l = max(0.0, min(ay + al, by + bl) - max(ay, by))
    return overlap_w * overlap_l


def rects_overlap(a: Rect, b: Rect, eps: float = 1e-6) -> bool:
    ax, ay, aw, al = a
    bx, by, bw, bl = b
    return not (
        ax + aw <= bx + eps
        or bx + bw <= ax + eps
        or ay + al <= by + eps
        or by + bl <= ay + eps
    )


def rect_within(rect: Rect, width: float, length: float, eps: float = 1e-6) -> bool:
    x, y, w, l = rect
    return x >= -eps and y >= -eps and x + w <= width + eps and y + l <= length + eps


def support_fraction(box: Rect, below: list[Rect]) -> float:
    """Share of ``box``'s footprint resting on the rectangles of ``below``."""
    area = rect_area(box)
    if area <= 0:
        return 0.0
    supported = sum(rect_intersection_area(box, other) for other in below)
    return min(1.0, supported / area)
