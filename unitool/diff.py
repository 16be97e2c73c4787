"""
Positional character diff between a string and its normalized form.

The two strings are walked index by index. This is not an alignment: a
composition or decomposition that shifts later characters shows up as a run
of mismatches, and characters past the end of the shorter string are not
reported at all.
"""

from __future__ import annotations

from typing import List

from .errors import ensure_well_formed
from .models import CharDifference


def diff(original: str, normalized: str) -> List[CharDifference]:
    """Return one ``CharDifference`` per mismatching position, in order.

    Only positions below ``min(len(original), len(normalized))`` are compared,
    so ``diff("ab", "abc")`` is empty.
    """
    ensure_well_formed(original)
    ensure_well_formed(normalized)

    differences: list[CharDifference] = []
    for position, (o, n) in enumerate(zip(original, normalized)):
        if o != n:
            differences.append(
                CharDifference(position=position, original=o, normalized=n)
            )
    return differences
