# edoji/config.py
from __future__ import annotations
import logging
from dataclasses import dataclass, asdict, field, fields

log = logging.getLogger(__name__)

SCHEMES = ("uniform", "oddLimit", "primeLimit", "tenney", "mixed")

def _known(cls, data: dict) -> dict:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in (data or {}).items() if k in names}

@dataclass
class ProximityParams:
    within: float = 15.0
    bonus5: float = 0.5
    bonus1: float = 0.5
    def to_dict(self): return asdict(self)

    def checked(self) -> "ProximityParams":
        if self.within > 0:
            return self
        log.warning("proximity window %r is not positive, using %r", self.within, ProximityParams.within)
        return ProximityParams(within=ProximityParams.within, bonus5=self.bonus5, bonus1=self.bonus1)

@dataclass
class SchemeParams:
    power: float = 1.0
    odd_power: float = 0.6
    prime_power: float = 0.8
    def to_dict(self): return asdict(self)

@dataclass
class SearchSteps:
    coarse: float = 0.5
    refine_span: float = 1.0
    refine_step: float = 0.05
    fine_span: float = 0.25
    fine_step: float = 0.01
    def to_dict(self): return asdict(self)

    def checked(self) -> "SearchSteps":
        if min(self.coarse, self.refine_step, self.fine_step) > 0 and min(self.refine_span, self.fine_span) >= 0:
            return self
        log.warning("invalid search steps %r, using defaults", self)
        return SearchSteps()

@dataclass
class DetuneBounds:
    lo: float = -50.0
    hi: float = 50.0
    def to_dict(self): return asdict(self)

    @classmethod
    def half_step(cls, edo: int, period_cents: float = 1200.0) -> "DetuneBounds":
        """Half an EDO step either side of the nominal period."""
        e = int(edo) if edo and edo > 0 else 12
        half = period_cents / e / 2.0
        return cls(lo=-half, hi=half)

    def clamp(self, value: float) -> float:
        return max(self.lo, min(self.hi, value))

@dataclass
class OptimizerConfig:
    scheme: str = "uniform"
    symmetric: bool = False
    proximity: ProximityParams = field(default_factory=ProximityParams)
    weights: SchemeParams = field(default_factory=SchemeParams)
    bounds: DetuneBounds = field(default_factory=DetuneBounds)
    steps: SearchSteps = field(default_factory=SearchSteps)
    def to_dict(self): return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "OptimizerConfig":
        data = data or {}
        return cls(
            scheme=str(data.get("scheme", "uniform")),
            symmetric=bool(data.get("symmetric", False)),
            proximity=ProximityParams(**_known(ProximityParams, data.get("proximity"))),
            weights=SchemeParams(**_known(SchemeParams, data.get("weights"))),
            bounds=DetuneBounds(**_known(DetuneBounds, data.get("bounds"))),
            steps=SearchSteps(**_known(SearchSteps, data.get("steps"))),
        )

@dataclass
class TuningInputs:
    edo: int = 12
    odd_limit: int = 7
    prime_limit: int = 0
    manual_text: str = ""
    period_text: str = "2/1"
    detune: float = 0.0
    def to_dict(self): return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TuningInputs":
        return cls(**_known(cls, data))
