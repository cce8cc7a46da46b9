# edoji/manual.py
from __future__ import annotations
import logging
import math
import re
from typing import Callable, List, Optional

from edoji.entries import JIEntry, MANUAL
from edoji.period import Period
from edoji.ratio import ratio_to_cents

log = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[\s,;]+")
_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"
_RATIO_RE = re.compile(r"^(\d+)/(\d+)$")
_CENTS_RE = re.compile(rf"^({_NUMBER})(?:c|cents?|¢)$", re.IGNORECASE)
_BARE_RE = re.compile(rf"^({_NUMBER})$")

Matcher = Callable[[str, Period], Optional[JIEntry]]

def _match_ratio(token: str, period: Period) -> Optional[JIEntry]:
    m = _RATIO_RE.match(token)
    if not m:
        return None
    raw_n, raw_d = int(m.group(1)), int(m.group(2))
    if raw_n == 0 or raw_d == 0:
        return None
    n, d = period.normalize(raw_n, raw_d)
    pn, pd = period.band
    # huge ratios can stay out of band once the normalisation caps run out
    if n < d or n * pd >= d * pn:
        return None
    return JIEntry(cents=ratio_to_cents(n / d), n=n, d=d, source=MANUAL)

def _match_cents(token: str, period: Period) -> Optional[JIEntry]:
    m = _CENTS_RE.match(token)
    return JIEntry(cents=float(m.group(1)), source=MANUAL) if m else None

def _match_bare(token: str, period: Period) -> Optional[JIEntry]:
    m = _BARE_RE.match(token)
    return JIEntry(cents=float(m.group(1)), source=MANUAL) if m else None

# first match wins
MATCHERS: List[Matcher] = [_match_ratio, _match_cents, _match_bare]

def parse_token(token: str, period: Optional[Period] = None) -> Optional[JIEntry]:
    period = period or Period.octave()
    for matcher in MATCHERS:
        entry = matcher(token, period)
        if entry is not None:
            return entry if math.isfinite(entry.cents) else None
    return None

def parse_manual_intervals(text: Optional[str], period: Optional[Period] = None) -> List[JIEntry]:
    """Free text ('3/2, 702c 400') -> manual JI entries; bad tokens are dropped."""
    if not text:
        return []
    out: List[JIEntry] = []
    for token in _SPLIT_RE.split(text.strip()):
        if not token:
            continue
        entry = parse_token(token, period)
        if entry is None:
            log.debug("dropping manual interval token %r", token)
            continue
        out.append(entry)
    return out
