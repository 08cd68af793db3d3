"""Tests for the five sorting generators."""

import math
import random

import pytest

from algorithms.bubble_sort import bubble_sort
from algorithms.counting_sort import counting_sort
from algorithms.merge_sort import merge_sort
from algorithms.radix_sort import radix_sort
from algorithms.selection_sort import selection_sort
from config import Limits

SORTS = {
    "bubble":    bubble_sort,
    "selection": selection_sort,
    "merge":     merge_sort,
    "counting":  counting_sort,
    "radix":     radix_sort,
}


def random_arrays(count=25, non_negative=False, seed=1234):
    rng = random.Random(seed)
    lo = 0 if non_negative else -50
    for _ in range(count):
        size = rng.randint(0, 20)
        yield [rng.randint(lo, 50) for _ in range(size)]


def run(fn, values):
    return list(fn(values))


@pytest.fixture(params=sorted(SORTS))
def sort_fn(request):
    return SORTS[request.param]


class TestCorrectness:
    def test_final_step_is_sorted(self, sort_fn):
        """Final array equals the sorted input for every generator."""
        non_negative = sort_fn is counting_sort
        for values in random_arrays(non_negative=non_negative):
            steps = run(sort_fn, values)
            assert steps[-1].is_final
            assert steps[-1].values() == sorted(values)
            assert all(el.is_sorted for el in steps[-1].array)

    def test_only_last_step_is_final(self, sort_fn):
        steps = run(sort_fn, [3, 1, 2])
        assert [s.is_final for s in steps].count(True) == 1

    def test_empty_input(self, sort_fn):
        steps = run(sort_fn, [])
        assert len(steps) >= 2
        assert steps[-1].values() == []

    def test_single_element(self, sort_fn):
        assert run(sort_fn, [7])[-1].values() == [7]

    def test_step_numbers_are_sequential(self, sort_fn):
        steps = run(sort_fn, [5, 1, 4, 2])
        assert [s.step_number for s in steps] == list(range(len(steps)))


class TestStability:
    def test_equal_values_keep_input_order(self, sort_fn):
        """Elements tagged with their input index stay in input order among equals."""
        rng = random.Random(99)
        for _ in range(20):
            values = [rng.randint(0, 4) for _ in range(rng.randint(2, 15))]
            final = run(sort_fn, values)[-1].array
            for a, b in zip(final, final[1:]):
                if a.value == b.value:
                    assert a.origin < b.origin


class TestCounters:
    def test_counters_never_decrease(self, sort_fn):
        non_negative = sort_fn is counting_sort
        for values in random_arrays(count=10, non_negative=non_negative, seed=7):
            steps = run(sort_fn, values)
            for prev, nxt in zip(steps, steps[1:]):
                assert prev.comparisons <= nxt.comparisons
                assert prev.swaps <= nxt.swaps

    def test_sorted_input_needs_no_swaps_in_bubble_sort(self):
        steps = run(bubble_sort, [1, 2, 3, 4])
        assert steps[-1].swaps == 0
        assert steps[-1].comparisons == 6


class TestSnapshots:
    def test_mutating_a_step_does_not_touch_neighbours(self, sort_fn):
        steps = run(sort_fn, [4, 3, 2, 1])
        before = [s.values() for s in steps]
        mid = len(steps) // 2
        steps[mid].array.clear()
        for k, s in enumerate(steps):
            if k != mid:
                assert s.values() == before[k]

    def test_no_two_steps_share_an_array(self, sort_fn):
        steps = run(sort_fn, [2, 1, 3])
        ids = {id(s.array) for s in steps}
        assert len(ids) == len(steps)

    def test_swapping_step_shows_values_before_the_write(self):
        """Bubble sort: the flagged pair is still out of order; the next step has them exchanged."""
        steps = run(bubble_sort, [2, 1])
        k = next(idx for idx, s in enumerate(steps) if any(el.is_swapping for el in s.array))
        assert steps[k].values() == [2, 1]
        assert steps[k + 1].values() == [1, 2]


class TestDomainErrors:
    def test_non_finite_rejected(self, sort_fn):
        with pytest.raises(ValueError):
            run(sort_fn, [1, math.inf])

    def test_counting_sort_rejects_negatives(self):
        with pytest.raises(ValueError):
            run(counting_sort, [3, -1, 2])

    def test_counting_sort_key_limit(self):
        top = Limits.counting_sort_max_key
        assert run(counting_sort, [top, 0])[-1].values() == [0, top]
        with pytest.raises(ValueError):
            run(counting_sort, [top + 1])

    def test_counting_and_radix_reject_fractions(self):
        with pytest.raises(ValueError):
            run(counting_sort, [1.5, 2])
        with pytest.raises(ValueError):
            run(radix_sort, [1.5, 2])


class TestCountingSort:
    def test_phases_in_order(self):
        steps = run(counting_sort, [4, 2, 2, 8, 3, 3, 1])
        phases = [s.additional_info["phase"] for s in steps]
        order = ["init", "counting", "cumulative", "placing", "complete"]
        seen = [p for k, p in enumerate(phases) if k == 0 or phases[k - 1] != p]
        assert seen == order

    def test_cumulative_counts(self):
        steps = run(counting_sort, [1, 0, 1, 2])
        cumulative = [s for s in steps if s.additional_info["phase"] == "cumulative"][-1]
        assert cumulative.additional_info["count"] == [1, 3, 4]

    def test_one_write_per_element(self):
        values = [4, 2, 2, 8, 3, 3, 1]
        assert run(counting_sort, values)[-1].swaps == len(values)


class TestRadixSort:
    def test_negative_values(self):
        values = [-5, 12, 0, -101, 7, 7]
        assert run(radix_sort, values)[-1].values() == sorted(values)

    def test_pass_count_follows_largest_key(self):
        steps = run(radix_sort, [170, 45, 75, 90, 802, 24, 2, 66])
        assert steps[-1].additional_info["total_passes"] == 3

    def test_duplicates_move_as_distinct_elements(self):
        """Collection moves the element itself, so both 5s keep their origins."""
        final = run(radix_sort, [5, 1, 5])[-1].array
        assert [(el.value, el.origin) for el in final] == [(1, 1), (5, 0), (5, 2)]


class TestSelectionSort:
    def test_minimum_moves_by_rotation(self):
        steps = run(selection_sort, [3, 3, 1])
        final = steps[-1].array
        assert [(el.value, el.origin) for el in final] == [(1, 2), (3, 0), (3, 1)]


class TestShape:
    def test_every_step_keeps_the_input_length(self, sort_fn):
        non_negative = sort_fn is counting_sort
        for values in random_arrays(count=10, non_negative=non_negative, seed=31):
            for step in run(sort_fn, values):
                assert len(step.array) == len(values)


class TestMergeSort:
    def test_every_step_is_a_permutation_of_the_input(self):
        values = [5, 2, 9, 2, 7, 1, 8, 3]
        for step in run(merge_sort, values):
            assert sorted(step.values()) == sorted(values)

    def test_merged_range_is_sorted_and_keeps_its_values(self):
        steps = run(merge_sort, [6, 3, 8, 1, 9, 2, 2, 7, 4])
        merged = [k for k, s in enumerate(steps) if s.description.startswith("Merged into")]
        assert merged
        for k in merged:
            lo, hi = steps[k].additional_info["range"]
            split = max(idx for idx in range(k)
                        if steps[idx].description.startswith("Splitting")
                        and steps[idx].additional_info["range"] == [lo, hi])
            before = steps[split].values()[lo:hi + 1]
            after  = steps[k].values()[lo:hi + 1]
            assert after == sorted(after)
            assert sorted(after) == sorted(before)
