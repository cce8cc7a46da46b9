# edoji/ji.py
from __future__ import annotations
import logging
import math
from typing import Iterable, List, Optional

from edoji.entries import AUTO, PERIOD_END, DEDUP_EPSILON, JIEntry, uniq_sorted_by_cents
from edoji.intervals import filter_by_prime_limit, fractions_to_cents, generate_odd_limit_fractions
from edoji.period import Period
from edoji.ratio import ratio_to_cents

log = logging.getLogger(__name__)

BOUNDARY_EPS = 1e-6

def _ji(n: int, d: int) -> JIEntry:
    return JIEntry(cents=ratio_to_cents(n / d), n=n, d=d, source=AUTO)

def minimal_default_set() -> List[JIEntry]:
    return [_ji(1, 1), _ji(5, 4), _ji(3, 2)]

def empty_fallback_set() -> List[JIEntry]:
    return [_ji(3, 2), _ji(5, 4), _ji(7, 4)]

def period_end_entry(period: Period) -> JIEntry:
    if period.has_ratio:
        return JIEntry(cents=period.cents, n=period.num, d=period.den, source=PERIOD_END)
    if period.is_octave:
        return JIEntry(cents=period.cents, n=2, d=1, source=PERIOD_END)
    return JIEntry(cents=period.cents, source=PERIOD_END)

def build_ji(odd_limit=None, prime_limit=None,
             manual_entries: Optional[Iterable[JIEntry]] = None,
             period: Optional[Period] = None,
             epsilon: float = DEDUP_EPSILON) -> List[JIEntry]:
    """Sorted, deduplicated JI reference set inside [0, period]."""
    period = period or Period.octave()
    try:
        lim = float(odd_limit)
    except (TypeError, ValueError):
        lim = math.nan
    if math.isfinite(lim) and lim > 0:
        fracs = filter_by_prime_limit(generate_odd_limit_fractions(lim), prime_limit)
        entries = fractions_to_cents(fracs, period)
    else:
        log.debug("odd limit %r disabled, using minimal default set", odd_limit)
        entries = minimal_default_set()
    if manual_entries:
        entries.extend(manual_entries)
    entries.append(period_end_entry(period))
    top = period.cents + BOUNDARY_EPS
    entries = [e for e in entries
               if math.isfinite(e.cents) and -BOUNDARY_EPS <= e.cents <= top]
    out = uniq_sorted_by_cents(entries, epsilon)
    if not out:
        log.debug("JI set empty after filtering, using fallback set")
        out = empty_fallback_set()
    return out

def ji_cents(entries: Iterable[JIEntry]) -> List[float]:
    return [e.cents for e in entries]
