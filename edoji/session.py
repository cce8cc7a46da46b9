# edoji/session.py
"""Caller-owned state for an interactive EDO/JI comparison.

The core functions are stateless; a UI keeps one SessionState, mutates its
inputs and replaces its Snapshot wholesale on every recompute.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from edoji.config import OptimizerConfig, TuningInputs
from edoji.detune import DetuneResult, match_detune_to_ji, optimize_detune
from edoji.entries import JIEntry
from edoji.intervals import generate_edo_steps
from edoji.ji import build_ji
from edoji.manual import parse_manual_intervals
from edoji.nearest import Match, match_steps, nearest_index
from edoji.period import Period, parse_period
from edoji.ratio import cents_to_fraction, format_fraction

log = logging.getLogger(__name__)

@dataclass(frozen=True)
class Snapshot:
    inputs: TuningInputs
    period: Period
    ji: List[JIEntry]
    edo_steps: List[float]
    edo_nominal: List[float]
    matches: List[Match]

    @property
    def ji_values(self) -> List[float]:
        return [e.cents for e in self.ji]

    @property
    def octave_cents(self) -> float:
        return self.period.cents + self.inputs.detune

    def ji_label(self, index: int) -> str:
        e = self.ji[index]
        return e.label or format_fraction(*cents_to_fraction(e.cents))

    def inspect(self, cents: float) -> Dict:
        """Nearest undetuned EDO step and nearest JI entry around a cents position."""
        info = {"cents": cents}
        k = nearest_index(self.edo_nominal, cents)
        if k < 0:
            return info
        info["edo_cents"] = self.edo_nominal[k]
        info["edo_step"] = k
        info["edo_count"] = len(self.edo_nominal) - 1
        j = nearest_index(self.ji_values, cents)
        if j >= 0:
            info["ji_index"] = j
            info["ji_cents"] = self.ji[j].cents
            info["ji_label"] = self.ji_label(j)
            info["deviation"] = info["edo_cents"] - info["ji_cents"]
        return info

    def to_dict(self) -> Dict:
        return {
            "inputs": self.inputs.to_dict(),
            "period": self.period.to_dict(),
            "octave_cents": self.octave_cents,
            "ji": [e.to_dict() for e in self.ji],
            "edo_steps": list(self.edo_steps),
            "matches": [m.to_dict() for m in self.matches],
        }

def compute_snapshot(inputs: TuningInputs) -> Snapshot:
    period = parse_period(inputs.period_text)
    manual = parse_manual_intervals(inputs.manual_text, period)
    ji = build_ji(inputs.odd_limit, inputs.prime_limit, manual, period)
    edo_steps = generate_edo_steps(inputs.edo, period.cents + inputs.detune)
    edo_nominal = generate_edo_steps(inputs.edo, period.cents)
    return Snapshot(inputs=replace(inputs), period=period, ji=ji, edo_steps=edo_steps,
                    edo_nominal=edo_nominal, matches=match_steps(edo_steps, ji))

@dataclass
class SessionState:
    inputs: TuningInputs = field(default_factory=TuningInputs)
    optimizer: OptimizerConfig = field(default_factory=OptimizerConfig)
    selected_ji_index: Optional[int] = None
    snapshot: Optional[Snapshot] = None

    def recompute(self) -> Snapshot:
        self.snapshot = compute_snapshot(self.inputs)
        if self.selected_ji_index is not None and self.selected_ji_index >= len(self.snapshot.ji):
            self.selected_ji_index = None
        return self.snapshot

    def current(self) -> Snapshot:
        return self.snapshot if self.snapshot is not None else self.recompute()

    def set_edo(self, edo: int) -> Snapshot:
        # a new EDO starts from the nominal period
        if edo != self.inputs.edo:
            self.inputs.edo = edo
            self.inputs.detune = 0.0
        return self.recompute()

    def set_detune(self, detune: float) -> Snapshot:
        self.inputs.detune = float(detune)
        return self.recompute()

    def select_ji(self, cents: float, tolerance: float = 6.0) -> Optional[JIEntry]:
        snap = self.current()
        j = nearest_index(snap.ji_values, cents)
        if j < 0 or abs(snap.ji[j].cents - cents) > tolerance:
            return None
        self.selected_ji_index = j
        return snap.ji[j]

    @property
    def selected(self) -> Optional[JIEntry]:
        if self.selected_ji_index is None:
            return None
        return self.current().ji[self.selected_ji_index]

    def match_selected(self) -> Optional[float]:
        entry = self.selected
        if entry is None:
            return None
        return match_detune_to_ji(entry.cents, self.inputs.edo, self.current().period.cents)

    def optimize(self) -> DetuneResult:
        snap = self.current()
        result = optimize_detune(self.inputs.edo, snap.ji, snap.period.cents, self.optimizer)
        if not result.ok:
            log.warning("optimizer returned no score; detune left at %+.2f", self.inputs.detune)
        return result
