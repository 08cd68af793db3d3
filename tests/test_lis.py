"""Tests for the longest increasing subsequence generator."""

import random

import pytest

from algorithms import generate_steps
from algorithms.lis import lis

CLASSIC = [10, 9, 2, 5, 3, 7, 101, 18]


def run(values, method="dp"):
    return list(lis(values, method=method))


def reference_length(values):
    best = [1] * len(values)
    for i in range(len(values)):
        for j in range(i):
            if values[j] < values[i]:
                best[i] = max(best[i], best[j] + 1)
    return max(best, default=0)


@pytest.fixture(params=["dp", "patience"])
def method(request):
    return request.param


class TestResult:
    def test_classic_example(self, method):
        final = run(CLASSIC, method)[-1]
        assert final.is_final
        assert final.additional_info["length"] == 4

    def test_matches_reference_on_random_input(self, method):
        rng = random.Random(5)
        for _ in range(30):
            values = [rng.randint(0, 20) for _ in range(rng.randint(0, 15))]
            info = run(values, method)[-1].additional_info
            assert info["length"] == reference_length(values)

    def test_reported_subsequence_is_real(self, method):
        rng = random.Random(17)
        for _ in range(30):
            values = [rng.randint(-10, 10) for _ in range(rng.randint(1, 15))]
            info = run(values, method)[-1].additional_info
            idx = info["lis_indices"]
            assert idx == sorted(set(idx))
            assert info["lis"] == [values[k] for k in idx]
            assert all(a < b for a, b in zip(info["lis"], info["lis"][1:]))
            assert len(idx) == info["length"]

    def test_found_flags_mark_the_subsequence(self, method):
        final = run(CLASSIC, method)[-1]
        flagged = [k for k, el in enumerate(final.array) if el.is_found]
        assert flagged == final.additional_info["lis_indices"]

    def test_empty_input(self, method):
        steps = run([], method)
        assert steps[-1].additional_info["length"] == 0
        assert steps[-1].is_final

    def test_counters_never_decrease(self, method):
        steps = run([3, 1, 4, 1, 5, 9, 2, 6], method)
        for prev, nxt in zip(steps, steps[1:]):
            assert prev.comparisons <= nxt.comparisons
            assert prev.swaps <= nxt.swaps


class TestDp:
    def test_final_table(self):
        final = run(CLASSIC)[-1]
        assert final.additional_info["dp"] == [1, 1, 1, 2, 2, 3, 4, 4]
        assert final.additional_info["lis"] == [2, 5, 7, 101]

    def test_outer_and_inner_indices_flagged(self):
        step = next(s for s in run([1, 2, 3]) if s.code_line_index == 4)
        assert step.array[step.i].is_selected
        assert step.array[step.j].is_comparing


class TestPatience:
    def test_piles(self):
        final = run(CLASSIC, "patience")[-1]
        assert final.additional_info["piles"] == [[10, 9, 2], [5, 3], [7], [101, 18]]
        assert final.additional_info["lis"] == [2, 3, 7, 18]

    def test_one_placement_per_element(self):
        steps = run(CLASSIC, "patience")
        assert sum(s.description.startswith("Placed") for s in steps) == len(CLASSIC)


class TestOptions:
    def test_unknown_method(self):
        with pytest.raises(ValueError):
            run([1, 2], "greedy")

    def test_method_through_registry(self):
        steps = generate_steps("lis", [3, 1, 2], method="patience")
        assert steps[-1].additional_info["method"] == "patience"

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            run([1, float("nan")])
