# edoji/detune.py
"""Search for the period detune that best aligns an EDO with a JI reference set.

The score surface has many local optima (bonus thresholds, discrete weights),
so the search is a three-phase grid scan: the whole bound at a coarse step,
then narrower windows around the running best at finer steps.
"""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, asdict
from typing import List, Optional, Sequence

import numpy as np

from edoji.config import SCHEMES, OptimizerConfig, ProximityParams, SchemeParams
from edoji.entries import JIEntry
from edoji.intervals import generate_edo_steps
from edoji.nearest import sweep_nearest
from edoji.period import OCTAVE_CENTS
from edoji.ratio import max_prime_factor, odd_part, tenney_height

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class DetuneResult:
    detune: float
    score: float

    @property
    def ok(self) -> bool:
        """False for the empty-reference sentinel; do not apply its detune."""
        return math.isfinite(self.score)

    def to_dict(self): return asdict(self)

def proximity_score(dist: float, params: Optional[ProximityParams] = None) -> float:
    p = (params or ProximityParams()).checked()
    base = max(0.0, p.within - dist) / p.within
    bonus = (p.bonus5 if dist <= 5 else 0.0) + (p.bonus1 if dist <= 1 else 0.0)
    return base + bonus

def _inverse_power(x: float, power: float) -> float:
    return 1.0 / max(1.0, x ** power)

def make_weights(ji: Sequence[JIEntry], scheme: str = "uniform",
                 params: Optional[SchemeParams] = None) -> List[float]:
    """One weight per JI entry; entries without a fraction keep weight 1."""
    params = params or SchemeParams()
    if scheme not in SCHEMES:
        log.warning("unknown weighting scheme %r, using uniform", scheme)
        scheme = "uniform"
    weights = [1.0] * len(ji)
    if scheme == "uniform":
        return weights
    for j, e in enumerate(ji):
        if not e.has_fraction:
            continue
        n, d = abs(int(e.n)), abs(int(e.d))
        if scheme == "oddLimit":
            weights[j] = _inverse_power(max(odd_part(n), odd_part(d)), params.power)
        elif scheme == "primeLimit":
            weights[j] = _inverse_power(max(max_prime_factor(n), max_prime_factor(d)), params.power)
        elif scheme == "tenney":
            weights[j] = _inverse_power(tenney_height(n, d) or 1.0, params.power)
        elif scheme == "mixed":
            ol = max(odd_part(n), odd_part(d))
            pl = max(max_prime_factor(n), max_prime_factor(d))
            weights[j] = _inverse_power(ol, params.odd_power) * _inverse_power(pl, params.prime_power)
    return weights

def score_detune(detune: float, edo: int, ji_values: Sequence[float], weights: Sequence[float],
                 period_cents: float = OCTAVE_CENTS, proximity: Optional[ProximityParams] = None,
                 symmetric: bool = False) -> float:
    """Weighted alignment score of the EDO regenerated at period_cents + detune.

    ji_values must be sorted ascending.
    """
    proximity = (proximity or ProximityParams()).checked()
    steps = generate_edo_steps(edo, period_cents + detune)
    score = 0.0
    for c, j in zip(steps, sweep_nearest(steps, ji_values)):
        score += weights[j] * proximity_score(abs(c - ji_values[j]), proximity)
    if symmetric:
        for j, (c, i) in enumerate(zip(ji_values, sweep_nearest(ji_values, steps))):
            score += weights[j] * proximity_score(abs(c - steps[i]), proximity)
        score /= 2.0
    return score

def optimize_detune(edo: int, ji: Sequence[JIEntry], period_cents: float = OCTAVE_CENTS,
                    config: Optional[OptimizerConfig] = None) -> DetuneResult:
    config = config or OptimizerConfig()
    if not ji:
        log.info("empty JI reference set, no detune suggested")
        return DetuneResult(detune=0.0, score=-math.inf)
    ji_values = [e.cents for e in ji]
    weights = make_weights(ji, config.scheme, config.weights)
    proximity = config.proximity.checked()
    steps = config.steps.checked()
    lo, hi = config.bounds.lo, config.bounds.hi

    best = {"detune": 0.0, "score": -math.inf}

    def scan(start: float, end: float, step: float):
        for v in np.arange(start, end + 1e-9, step, dtype=float):
            s = score_detune(float(v), edo, ji_values, weights, period_cents, proximity, config.symmetric)
            if s > best["score"]:
                best["detune"], best["score"] = float(v), s

    scan(lo, hi, steps.coarse)
    c = best["detune"]
    scan(max(lo, c - steps.refine_span), min(hi, c + steps.refine_span), steps.refine_step)
    c = best["detune"]
    scan(max(lo, c - steps.fine_span), min(hi, c + steps.fine_span), steps.fine_step)

    result = DetuneResult(detune=config.bounds.clamp(round(best["detune"], 2)), score=best["score"])
    log.info("optimized detune for %s-EDO (%s%s): %+.2f c, score %.4f", edo, config.scheme,
             ", symmetric" if config.symmetric else "", result.detune, result.score)
    return result

def match_detune_to_ji(ji_cents: float, edo: int, period_cents: float = OCTAVE_CENTS) -> float:
    """Detune that puts the nearest EDO step exactly on ji_cents."""
    e = int(edo) if edo and edo > 0 else 12
    step = period_cents / e
    k = round(ji_cents / step)
    if k <= 0:
        k = 1
    return round(ji_cents * e / k - period_cents, 3)
