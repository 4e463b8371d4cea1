from __future__ import annotations

from typing import Iterable, List

from .models import BoxInstance


def fragility_key(instance: BoxInstance) -> int:
    return instance.fragility.rank


def sequence_by_fragility(instances: Iterable[BoxInstance]) -> List[BoxInstance]:
    """Order boxes strong -> medium -> fragile.

    ``sorted`` is stable, so boxes of equal fragility keep their input order
    and the packing downstream stays reproducible.

    Examples
    --------
    >>> from assembly_core.models import Fragility
    >>> def box(f):
    ...     return BoxInstance("S", "S", "box1", f, 1.0, 10, 10, 10, False, 1)
    >>> seq = sequence_by_fragility([box(Fragility.FRAGILE), box(Fragility.STRONG)])
    >>> [b.fragility.value for b in seq]
    ['strong', 'fragile']
    """
    return sorted(instances, key=fragility_key)
