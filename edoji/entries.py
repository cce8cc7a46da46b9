# edoji/entries.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional

from edoji.ratio import format_fraction

ODD_LIMIT = "odd-limit"
MANUAL = "manual"
OCTAVE_EXTENSION = "octave-extension"
PERIOD_END = "period-end"
AUTO = "auto"

SOURCES = (ODD_LIMIT, MANUAL, OCTAVE_EXTENSION, PERIOD_END, AUTO)

DEDUP_EPSILON = 0.5

@dataclass(frozen=True)
class JIEntry:
    cents: float
    n: Optional[int] = None
    d: Optional[int] = None
    source: str = AUTO

    @property
    def has_fraction(self) -> bool:
        return bool(self.n) and bool(self.d)

    @property
    def label(self) -> str:
        return format_fraction(self.n, self.d) if self.has_fraction else ""

    def to_dict(self): return asdict(self)

def uniq_sorted_by_cents(entries: Iterable[JIEntry], epsilon: float = DEDUP_EPSILON) -> List[JIEntry]:
    """Sort by cents and greedily merge entries within epsilon of the last kept one.

    A fraction-bearing entry replaces a fraction-less one it collides with;
    otherwise the earlier entry stays.
    """
    out: List[JIEntry] = []
    for it in sorted(entries, key=lambda e: e.cents):
        if not out or abs(it.cents - out[-1].cents) > epsilon:
            out.append(it)
        elif it.has_fraction and not out[-1].has_fraction:
            out[-1] = it
    return out
