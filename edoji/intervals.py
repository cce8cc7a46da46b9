# edoji/intervals.py
from __future__ import annotations
import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from edoji.entries import JIEntry, ODD_LIMIT, OCTAVE_EXTENSION
from edoji.period import OCTAVE_CENTS, Period, normalize_into_band
from edoji.ratio import gcd, max_prime_factor, ratio_to_cents

Fraction = Tuple[int, int]

def _as_finite(x) -> Optional[float]:
    try:
        x = float(x)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None

def generate_edo_steps(edo, period_cents=OCTAVE_CENTS) -> List[float]:
    """edo+1 evenly spaced cents values from 0 to period_cents inclusive."""
    e = _as_finite(edo)
    e = int(math.floor(e)) if e is not None else 0
    if e <= 0:
        e = 12
    p = _as_finite(period_cents)
    if p is None or p <= 0:
        p = OCTAVE_CENTS
    return np.linspace(0.0, p, e + 1).tolist()

def generate_odd_limit_fractions(odd_limit=7) -> List[Fraction]:
    lim = _as_finite(odd_limit)
    lim = max(1, int(math.floor(lim))) if lim is not None else 1
    if lim % 2 == 0:
        lim -= 1
    return [(n, d)
            for n in range(1, lim + 1, 2)
            for d in range(1, lim + 1, 2)
            if gcd(n, d) == 1]

def filter_by_prime_limit(fractions: Iterable[Fraction], prime_limit) -> List[Fraction]:
    fractions = list(fractions)
    lim = _as_finite(prime_limit)
    if lim is None or lim <= 0:
        return fractions
    lim = int(math.floor(lim))
    return [(n, d) for n, d in fractions
            if max(max_prime_factor(n), max_prime_factor(d)) <= lim]

def _entry(n: int, d: int, source: str) -> JIEntry:
    return JIEntry(cents=round(ratio_to_cents(n / d), 3), n=n, d=d, source=source)

def fractions_to_cents(fractions: Iterable[Fraction], period: Optional[Period] = None) -> List[JIEntry]:
    """Fractions -> JI entries inside [0, period].

    Periods up to an octave use the period band. Wider periods are filled
    octave by octave: each fraction is octave-reduced and doubled until it
    passes the period. This is a fill heuristic, not a full enumeration of
    the wider band.
    """
    period = period or Period.octave()
    top = period.cents
    out: List[JIEntry] = []
    for raw_n, raw_d in fractions:
        if raw_n <= 0 or raw_d <= 0:
            continue
        if top <= OCTAVE_CENTS:
            e = _entry(*period.normalize(raw_n, raw_d), ODD_LIMIT)
            if 0 <= e.cents <= top:
                out.append(e)
            continue
        on, od = normalize_into_band(raw_n, raw_d)
        for k in range(64):
            g = gcd(on * 2 ** k, od)
            x = _entry(on * 2 ** k // g, od // g, ODD_LIMIT if k == 0 else OCTAVE_EXTENSION)
            if x.cents > top:
                break
            out.append(x)
    out.append(JIEntry(cents=0.0, n=1, d=1, source=ODD_LIMIT))
    return out
