"""Tests for configuration dataclasses."""

import logging
import pytest

from edoji.config import DetuneBounds, OptimizerConfig, SearchSteps, TuningInputs


class TestOptimizerConfig:
    """Tests for OptimizerConfig serialisation."""

    def test_defaults(self):
        c = OptimizerConfig()
        assert c.scheme == "uniform"
        assert not c.symmetric
        assert (c.bounds.lo, c.bounds.hi) == (-50.0, 50.0)
        assert c.steps.coarse == 0.5

    def test_round_trip(self):
        c = OptimizerConfig(scheme="tenney", symmetric=True, bounds=DetuneBounds(-10.0, 5.0))
        assert OptimizerConfig.from_dict(c.to_dict()) == c

    def test_unknown_keys_ignored(self):
        c = OptimizerConfig.from_dict({"scheme": "mixed", "proximity": {"within": 20, "colour": "red"}, "extra": 1})
        assert c.scheme == "mixed"
        assert c.proximity.within == 20

    def test_empty_dict(self):
        assert OptimizerConfig.from_dict({}) == OptimizerConfig()


class TestBounds:
    """Tests for DetuneBounds."""

    def test_half_step(self):
        b = DetuneBounds.half_step(24)
        assert (b.lo, b.hi) == pytest.approx((-25.0, 25.0))

    def test_half_step_bad_edo(self):
        assert DetuneBounds.half_step(0).hi == pytest.approx(50.0)

    def test_clamp(self):
        b = DetuneBounds(-1.0, 1.0)
        assert b.clamp(3.0) == 1.0
        assert b.clamp(-3.0) == -1.0
        assert b.clamp(0.5) == 0.5


class TestSearchSteps:
    """Tests for SearchSteps validation."""

    def test_valid_kept(self):
        s = SearchSteps(coarse=1.0)
        assert s.checked() is s

    def test_negative_step_replaced(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert SearchSteps(fine_step=-0.01).checked() == SearchSteps()
        assert "search steps" in caplog.text


class TestTuningInputs:
    """Tests for TuningInputs."""

    def test_from_dict(self):
        t = TuningInputs.from_dict({"edo": 19, "manual_text": "7/4", "bogus": True})
        assert t.edo == 19
        assert t.manual_text == "7/4"
        assert t.period_text == "2/1"
