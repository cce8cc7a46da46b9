"""Unit tests for JI set assembly and deduplication."""

import pytest

from edoji.entries import AUTO, MANUAL, PERIOD_END, JIEntry, uniq_sorted_by_cents
from edoji.ji import build_ji, empty_fallback_set
from edoji.manual import parse_manual_intervals
from edoji.period import Period
from edoji.ratio import format_fraction


class TestUniqSortedByCents:
    """Tests for uniq_sorted_by_cents."""

    def test_prefers_fraction_bearing_entry(self):
        entries = [JIEntry(cents=700.0), JIEntry(cents=700.2, n=3, d=2)]
        out = uniq_sorted_by_cents(entries, 0.5)
        assert len(out) == 1
        assert (out[0].n, out[0].d) == (3, 2)

    def test_earlier_wins_when_both_have_fractions(self):
        entries = [JIEntry(cents=500.3, n=7, d=5), JIEntry(cents=500.0, n=4, d=3)]
        out = uniq_sorted_by_cents(entries)
        assert [e.label for e in out] == ["4/3"]

    def test_earlier_fraction_not_replaced(self):
        entries = [JIEntry(cents=700.0, n=3, d=2), JIEntry(cents=700.2)]
        assert uniq_sorted_by_cents(entries)[0].label == "3/2"

    def test_greedy_merge_against_last_kept(self):
        """100.9 survives: it is compared with 100.0, not with the merged 100.4."""
        entries = [JIEntry(cents=c) for c in (900.0, 100.0, 100.4, 500.0, 100.9)]
        out = uniq_sorted_by_cents(entries)
        assert [e.cents for e in out] == [100.0, 100.9, 500.0, 900.0]

    def test_label_uses_shared_formatter(self):
        assert JIEntry(cents=701.955, n=3, d=2).label == format_fraction(3, 2) == "3/2"
        assert JIEntry(cents=700.0).label == ""

    def test_does_not_mutate_input(self):
        entries = [JIEntry(cents=2.0), JIEntry(cents=1.0)]
        uniq_sorted_by_cents(entries)
        assert [e.cents for e in entries] == [2.0, 1.0]


class TestBuildJI:
    """Tests for build_ji."""

    def test_five_odd_limit_octave(self):
        """Odd limit 5 gives the 5-limit octave-reduced set plus 2/1."""
        ji = build_ji(5, 0, [])
        assert [e.cents for e in ji] == pytest.approx(
            [0.0, 315.641, 386.314, 498.045, 701.955, 813.686, 884.359, 1200.0])
        assert [e.label for e in ji] == ["1/1", "6/5", "5/4", "4/3", "3/2", "8/5", "5/3", "2/1"]
        assert ji[-1].source == PERIOD_END

    def test_disabled_odd_limit_uses_minimal_set(self):
        for odd in (None, 0, -3, float("nan")):
            ji = build_ji(odd, 0, [])
            assert [e.label for e in ji] == ["1/1", "5/4", "3/2", "2/1"]
            assert ji[1].source == AUTO

    def test_prime_limit_applied(self):
        ji = build_ji(7, 5, [])
        assert all(7 not in (e.n, e.d) for e in ji)
        assert "7/4" in [e.label for e in build_ji(7, 0, [])]

    def test_manual_entries_merged(self):
        ji = build_ji(5, 0, parse_manual_intervals("7/4 702c 1300 -5"))
        labels = [e.label for e in ji]
        assert "7/4" in labels
        fifth = [e for e in ji if 701 < e.cents < 703]
        assert len(fifth) == 1 and fifth[0].label == "3/2"
        assert all(0 <= e.cents <= 1200 for e in ji)
        assert any(e.source == MANUAL for e in ji)

    def test_sorted_and_separated(self):
        ji = build_ji(15, 0, parse_manual_intervals("100 100.3 1199.8"))
        cents = [e.cents for e in ji]
        assert cents == sorted(cents)
        assert all(b - a > 0.5 for a, b in zip(cents, cents[1:]))

    def test_cents_only_period(self):
        ji = build_ji(5, 0, [], Period.from_cents(700.0))
        assert [e.cents for e in ji] == pytest.approx([0.0, 315.641, 386.314, 498.045, 700.0])
        assert ji[-1].source == PERIOD_END
        assert not ji[-1].has_fraction

    def test_ratio_period_end(self):
        ji = build_ji(5, 0, [], Period.from_ratio(3, 1))
        assert ji[-1].label == "3/1"
        assert ji[-1].cents == pytest.approx(1901.955, abs=1e-3)
        assert all(e.cents <= 1901.956 for e in ji)

    def test_tritave_fills_every_octave(self):
        """The first octave of a 3/1 period carries the usual 5-limit intervals."""
        labels = [e.label for e in build_ji(5, 0, [], Period.from_ratio(3, 1))]
        assert labels == ["1/1", "6/5", "5/4", "4/3", "3/2", "8/5", "5/3", "2/1",
                          "12/5", "5/2", "8/3", "3/1"]

    def test_idempotent(self):
        manual = parse_manual_intervals("11/8 950c")
        assert build_ji(9, 7, manual) == build_ji(9, 7, manual)

    def test_empty_fallback_set(self):
        assert [e.label for e in empty_fallback_set()] == ["3/2", "5/4", "7/4"]
