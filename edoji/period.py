# edoji/period.py
from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass, asdict
from typing import Optional, Tuple

from edoji.ratio import gcd, ratio_to_cents

log = logging.getLogger(__name__)

OCTAVE_CENTS = 1200.0
MAX_PERIOD_OCTAVES = 10
MAX_PERIOD_CENTS = OCTAVE_CENTS * MAX_PERIOD_OCTAVES

_RATIO_RE = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")
_CENTS_RE = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))\s*(?:c|cents?|¢)?\s*$", re.IGNORECASE)

def _valid_band(num, den) -> bool:
    try:
        return int(num) > 0 and int(den) > 0 and int(num) > int(den)
    except (TypeError, ValueError):
        return False

def normalize_into_band(n: int, d: int, period_num: int = 2, period_den: int = 1) -> Tuple[int, int]:
    """Scale n/d into [1, P) with exact integer arithmetic, P = period_num/period_den.

    An invalid period (non-positive, or not above 1) falls back to the octave.
    """
    if not _valid_band(period_num, period_den):
        period_num, period_den = 2, 1
    pn, pd = int(period_num), int(period_den)
    n, d = abs(int(n)), abs(int(d))
    if n == 0 or d == 0:
        return n or 1, d or 1
    i = 0
    while n < d and i < 32:
        n *= pn
        d *= pd
        i += 1
    i = 0
    while n * pd >= d * pn and i < 64:
        d *= pn
        n *= pd
        i += 1
    g = gcd(n, d)
    return n // g, d // g

@dataclass(frozen=True)
class Period:
    cents: float = OCTAVE_CENTS
    num: Optional[int] = 2
    den: Optional[int] = 1

    @classmethod
    def octave(cls) -> "Period":
        return cls()

    @classmethod
    def from_ratio(cls, num: int, den: int) -> "Period":
        if not _valid_band(num, den):
            return cls.octave()
        g = gcd(num, den)
        num, den = int(num) // g, int(den) // g
        if num > den * 2 ** MAX_PERIOD_OCTAVES:
            log.warning("period %d/%d is wider than %d octaves, using the octave", num, den, MAX_PERIOD_OCTAVES)
            return cls.octave()
        return cls(cents=ratio_to_cents(num / den), num=num, den=den)

    @classmethod
    def from_cents(cls, cents: float) -> "Period":
        if not math.isfinite(cents) or cents <= 0:
            return cls.octave()
        if abs(cents - OCTAVE_CENTS) < 1e-9:
            return cls.octave()
        if cents > MAX_PERIOD_CENTS:
            log.warning("period %.3f cents is wider than %d octaves, using the octave", cents, MAX_PERIOD_OCTAVES)
            return cls.octave()
        return cls(cents=float(cents), num=None, den=None)

    @property
    def has_ratio(self) -> bool:
        return self.num is not None and self.den is not None

    @property
    def is_octave(self) -> bool:
        return abs(self.cents - OCTAVE_CENTS) < 1e-6

    @property
    def band(self) -> Tuple[int, int]:
        """Integer ratio used for fraction normalisation (octave for cents-only periods)."""
        return (self.num, self.den) if self.has_ratio else (2, 1)

    def normalize(self, n: int, d: int) -> Tuple[int, int]:
        return normalize_into_band(n, d, *self.band)

    def to_dict(self): return asdict(self)

def parse_period(text: Optional[str]) -> Period:
    """'n/d' (ratio above 1) or a cents value; anything else is the octave."""
    if text is None:
        return Period.octave()
    m = _RATIO_RE.match(str(text))
    if m:
        return Period.from_ratio(int(m.group(1)), int(m.group(2)))
    m = _CENTS_RE.match(str(text))
    if m:
        return Period.from_cents(float(m.group(1)))
    return Period.octave()
