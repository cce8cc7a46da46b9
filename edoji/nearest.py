# edoji/nearest.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Optional, Sequence, Tuple

from edoji.entries import JIEntry

# Deviation bands (upper bound on |diff| in cents, band name)
EXACT_CENTS = 0.01
BANDS: List[Tuple[float, str]] = [(1.0, "near1"), (5.0, "near5"), (10.0, "near10")]

# Gradient stops: green at 0, yellow at GRADIENT_MID, red from GRADIENT_END on
GREEN = (0, 170, 0)
YELLOW = (230, 200, 0)
RED = (210, 30, 30)
GRADIENT_MID = 5.0
GRADIENT_END = 15.0

def nearest_index(values: Sequence[float], target: float) -> int:
    """Index of the first value closest to target, -1 when empty."""
    if not values:
        return -1
    idx, best = 0, abs(values[0] - target)
    for i in range(1, len(values)):
        dist = abs(values[i] - target)
        if dist < best:
            idx, best = i, dist
    return idx

def nearest_value(values: Sequence[float], target: float) -> Optional[float]:
    i = nearest_index(values, target)
    return values[i] if i >= 0 else None

def sweep_nearest(sources: Sequence[float], targets: Sequence[float]) -> List[int]:
    """For every source value, the index of its nearest target.

    Both sequences must be sorted ascending; the cursor into targets only
    moves forward, advancing while the next target is at least as close.
    """
    out: List[int] = []
    if not targets:
        return out
    j, last = 0, len(targets) - 1
    for c in sources:
        while j < last and abs(targets[j + 1] - c) <= abs(targets[j] - c):
            j += 1
        out.append(j)
    return out

def classify_deviation(diff: float) -> str:
    a = abs(diff)
    if a < EXACT_CENTS:
        return "exact"
    for bound, name in BANDS:
        if a <= bound:
            return name
    return "far"

def _mix(c0, c1, t: float) -> Tuple[int, int, int]:
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(c0, c1))

def deviation_rgb(diff: float) -> Tuple[int, int, int]:
    a = abs(diff)
    if a <= GRADIENT_MID:
        return _mix(GREEN, YELLOW, a / GRADIENT_MID)
    if a <= GRADIENT_END:
        return _mix(YELLOW, RED, (a - GRADIENT_MID) / (GRADIENT_END - GRADIENT_MID))
    return RED

def deviation_color(diff: float) -> str:
    return "#%02x%02x%02x" % deviation_rgb(diff)

@dataclass(frozen=True)
class Match:
    step: int
    edo_cents: float
    ji_index: int
    ji_cents: float
    deviation: float
    band: str
    color: str

    def to_dict(self): return asdict(self)

def match_steps(edo_steps: Sequence[float], ji: Sequence[JIEntry]) -> List[Match]:
    """Match every EDO step to its nearest JI entry (both sorted ascending)."""
    ji_values = [e.cents for e in ji]
    out = []
    for step, (c, j) in enumerate(zip(edo_steps, sweep_nearest(edo_steps, ji_values))):
        diff = c - ji_values[j]
        out.append(Match(step=step, edo_cents=c, ji_index=j, ji_cents=ji_values[j],
                         deviation=diff, band=classify_deviation(diff), color=deviation_color(diff)))
    return out
