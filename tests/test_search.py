"""
Comprehensive tests for search.py

Tests cover:
- default_probe_budget: values, monotonicity, edge cases
- bisect_iterative / bisect_recursive: present, absent and boundary targets
- Equivalence of the iterative and recursive forms
- bisection_search / linear_search / count_probes wrappers
- ExhaustedSearch: reasons and attributes
"""

import math
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from search import (
    ExhaustedSearch,
    default_probe_budget,
    bisect_iterative,
    bisect_recursive,
    bisection_search,
    linear_search,
    count_probes,
)


def _outcome(fn, seq, target, max_probes=None):
    """(found, index, probes) or (missing, reason, probes) for comparison."""
    try:
        idx, probes = fn(seq, target, max_probes)
        return ("found", idx, probes)
    except ExhaustedSearch as exc:
        return ("missing", exc.reason, exc.probes)


# =====================================================================
# Probe budget
# =====================================================================

class TestDefaultProbeBudget:
    """Test the ceil(log2 n) + 1 budget"""

    def test_small_values(self):
        """Known values for small sequences"""
        assert default_probe_budget(0) == 0
        assert default_probe_budget(1) == 1
        assert default_probe_budget(2) == 2
        assert default_probe_budget(10) == 5
        assert default_probe_budget(16) == 5
        assert default_probe_budget(17) == 6

    def test_matches_log2_formula(self):
        """Budget equals ceil(log2 n) + 1"""
        for n in [3, 7, 100, 1023, 1024, 1025, 10_000_000]:
            assert default_probe_budget(n) == math.ceil(math.log2(n)) + 1

    def test_strictly_below_n_above_four(self):
        """Bisection budget beats a full linear scan for n > 4"""
        for n in range(5, 5000):
            assert default_probe_budget(n) < n

    def test_non_decreasing(self):
        """Budget never shrinks as the sequence grows"""
        budgets = [default_probe_budget(n) for n in range(0, 5000)]
        assert all(b1 <= b2 for b1, b2 in zip(budgets, budgets[1:]))

    def test_tracks_log2(self):
        """Budget stays within [log2 n + 1, log2 n + 2)"""
        for n in [2, 10, 1000, 123_456, 10**9]:
            b = default_probe_budget(n)
            assert math.log2(n) + 1 <= b < math.log2(n) + 2

    def test_negative_length_raises(self):
        """Negative lengths are invalid"""
        with pytest.raises(ValueError):
            default_probe_budget(-1)


# =====================================================================
# Present targets
# =====================================================================

@pytest.mark.parametrize("search_fn", [bisect_iterative, bisect_recursive])
class TestPresentTargets:
    """Every element of a sorted sequence is found"""

    def test_every_element_found(self, search_fn):
        """All keys of 1..100 are located at the right index"""
        seq = list(range(1, 101))
        for i, v in enumerate(seq):
            idx, probes = search_fn(seq, v)
            assert idx == i
            assert 1 <= probes <= default_probe_budget(len(seq))

    def test_non_contiguous_keys(self, search_fn):
        """Gapped, negative and float keys are handled"""
        seq = [-40, -3, 0, 2.5, 7, 19, 20, 64, 1000]
        for i, v in enumerate(seq):
            idx, _ = search_fn(seq, v)
            assert idx == i

    def test_string_keys(self, search_fn):
        """Any comparable keys work, not only numbers"""
        seq = ["ant", "bee", "cat", "dog", "eel", "fox"]
        idx, _ = search_fn(seq, "dog")
        assert idx == 3

    def test_numpy_array_input(self, search_fn):
        """numpy arrays are accepted"""
        seq = np.arange(0, 500, 5)
        idx, _ = search_fn(seq, 245)
        assert idx == 49

    def test_single_element(self, search_fn):
        """One-element sequence resolves in one probe"""
        assert search_fn([42], 42) == (0, 1)

    def test_all_positions_within_budget_for_many_sizes(self, search_fn):
        """Worst case over every target never exceeds ceil(log2 n) + 1"""
        for n in range(1, 130):
            seq = range(1, n + 1)
            worst = max(search_fn(seq, v)[1] for v in seq)
            assert worst <= default_probe_budget(n)


class TestBoundaries:
    """First and last elements resolve without off-by-one loss"""

    @pytest.mark.parametrize("search_fn", [bisect_iterative, bisect_recursive])
    def test_first_element(self, search_fn):
        """S = 1..10, v = 1"""
        seq = list(range(1, 11))
        idx, probes = search_fn(seq, 1)
        assert idx == 0
        assert probes == 4

    @pytest.mark.parametrize("search_fn", [bisect_iterative, bisect_recursive])
    def test_last_element(self, search_fn):
        """S = 1..10, v = 10"""
        seq = list(range(1, 11))
        idx, probes = search_fn(seq, 10)
        assert idx == 9
        assert probes == 4

    def test_bisection_search_returns_value(self):
        """The wrapper returns the element itself"""
        seq = list(range(1, 11))
        assert bisection_search(seq, 1) == 1
        assert bisection_search(seq, 10) == 10
        assert bisection_search(seq, 10, method="recursive") == 10


# =====================================================================
# Absent targets
# =====================================================================

@pytest.mark.parametrize("search_fn", [bisect_iterative, bisect_recursive])
class TestAbsentTargets:
    """Missing values terminate with ExhaustedSearch"""

    def test_below_all_keys_stops_on_budget(self, search_fn):
        """A target below every key leaves a one-element remainder; budget ends it"""
        seq = list(range(1, 11))
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn(seq, 0)
        assert exc_info.value.reason == "budget"
        assert exc_info.value.probes == default_probe_budget(10)

    def test_above_all_keys_empties_remainder(self, search_fn):
        """A target above every key empties the candidate range"""
        seq = list(range(1, 11))
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn(seq, 11)
        assert exc_info.value.reason == "empty"
        assert exc_info.value.probes == 4

    def test_gap_value(self, search_fn):
        """A value between keys is reported missing within the budget"""
        seq = list(range(1, 11))
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn(seq, 5.5)
        assert exc_info.value.probes <= default_probe_budget(10)

    def test_empty_sequence(self, search_fn):
        """No probing on an empty sequence"""
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn([], 3)
        assert exc_info.value.probes == 0
        assert exc_info.value.reason == "empty"

    def test_every_gap_terminates(self, search_fn):
        """All absent half-integers in 1..64 end within the budget"""
        seq = list(range(1, 65))
        budget = default_probe_budget(64)
        for v in np.arange(0.5, 65.0, 1.0):
            with pytest.raises(ExhaustedSearch) as exc_info:
                search_fn(seq, float(v))
            assert exc_info.value.probes <= budget

    def test_explicit_budget(self, search_fn):
        """A tight explicit budget can stop a search before the match"""
        seq = list(range(1, 1001))
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn(seq, 1, 2)
        assert exc_info.value.max_probes == 2
        assert exc_info.value.probes == 2
        assert exc_info.value.reason == "budget"

    def test_zero_budget(self, search_fn):
        """A zero budget never probes"""
        with pytest.raises(ExhaustedSearch) as exc_info:
            search_fn([1, 2, 3], 2, 0)
        assert exc_info.value.probes == 0

    def test_negative_budget_rejected(self, search_fn):
        """Negative budgets are invalid input, not a search outcome"""
        with pytest.raises(ValueError):
            search_fn([1, 2, 3], 2, -1)


class TestExhaustedSearch:
    """Error type behaviour"""

    def test_is_lookup_error(self):
        """Callers can catch it as LookupError"""
        with pytest.raises(LookupError):
            bisection_search([1, 2, 3], 7)

    def test_message_mentions_target(self):
        """Message names the target and the probe count"""
        with pytest.raises(ExhaustedSearch, match="not found"):
            bisection_search([1, 2, 3], 0)

    def test_attributes(self):
        """target/probes/max_probes/reason are exposed"""
        err = ExhaustedSearch(9, 3, 4, "budget")
        assert err.target == 9
        assert err.probes == 3
        assert err.max_probes == 4
        assert err.reason == "budget"


# =====================================================================
# Equivalence of the two forms
# =====================================================================

class TestIterativeRecursiveEquivalence:
    """Both control-flow realizations agree"""

    def test_randomized_pairs(self):
        """100 random (S, v) pairs give identical outcomes and probe counts"""
        rng = np.random.default_rng(2024)
        for _ in range(100):
            n = int(rng.integers(0, 300))
            seq = sorted(rng.choice(2000, size=n, replace=False).tolist())
            if n and rng.random() < 0.5:
                target = seq[int(rng.integers(0, n))]
            else:
                target = int(rng.integers(-10, 2010))
            assert _outcome(bisect_iterative, seq, target) == _outcome(bisect_recursive, seq, target)

    def test_randomized_with_explicit_budgets(self):
        """Agreement also holds under arbitrary budgets"""
        rng = np.random.default_rng(7)
        for _ in range(100):
            n = int(rng.integers(1, 200))
            seq = list(range(0, 3 * n, 3))
            target = int(rng.integers(-5, 3 * n + 5))
            budget = int(rng.integers(0, 12))
            assert (_outcome(bisect_iterative, seq, target, budget)
                    == _outcome(bisect_recursive, seq, target, budget))

    def test_method_switch(self):
        """bisection_search dispatches on method"""
        seq = list(range(100))
        assert bisection_search(seq, 37, method="iterative") == bisection_search(seq, 37, method="recursive")

    def test_unknown_method(self):
        """Unknown method names raise ValueError"""
        with pytest.raises(ValueError, match="method"):
            bisection_search([1, 2], 1, method="ternary")


# =====================================================================
# Linear baseline and cost reporting
# =====================================================================

class TestLinearSearch:
    """Brute-force baseline"""

    def test_comparisons_equal_position(self):
        """Comparisons = index + 1 when found"""
        seq = [3, 8, 13, 21, 34]
        assert linear_search(seq, 3) == (0, 1)
        assert linear_search(seq, 34) == (4, 5)

    def test_absent_scans_everything(self):
        """Absent target costs len(seq) comparisons"""
        seq = list(range(50))
        with pytest.raises(ExhaustedSearch) as exc_info:
            linear_search(seq, 99)
        assert exc_info.value.probes == 50

    def test_works_on_unsorted(self):
        """Linear scan does not need sorted input"""
        assert linear_search([9, 1, 5], 5) == (2, 3)


class TestCountProbes:
    """Non-raising cost report"""

    def test_found(self):
        """Found targets report index and probes"""
        res = count_probes(list(range(1, 11)), 10)
        assert res == {"found": True, "index": 9, "probes": 4}

    def test_not_found(self):
        """Missing targets report found=False and the probes spent"""
        res = count_probes(list(range(1, 11)), 0, method="recursive")
        assert res["found"] is False
        assert res["index"] is None
        assert res["probes"] == 5

    def test_linear(self):
        """method='linear' counts comparisons"""
        res = count_probes(list(range(1, 11)), 7, method="linear")
        assert res == {"found": True, "index": 6, "probes": 7}


class TestClassroomExample:
    """S = 1..10,000,000, v = 9,999,999"""

    def test_bisection_within_24_probes(self):
        """Bisection needs at most ceil(log2 1e7) = 24 probes"""
        seq = range(1, 10_000_001)
        for fn in (bisect_iterative, bisect_recursive):
            idx, probes = fn(seq, 9_999_999)
            assert seq[idx] == 9_999_999
            assert probes <= math.ceil(math.log2(10_000_000))

    def test_linear_needs_millions(self):
        """The linear scan walks almost the whole range"""
        seq = range(1, 10_000_001)
        idx, comparisons = linear_search(seq, 9_999_999)
        assert idx == 9_999_998
        assert comparisons == 9_999_999
