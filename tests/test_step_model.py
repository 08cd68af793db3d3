"""Tests for the Step snapshot model and the shared input checks."""

import math

import pytest

from algorithms.step import (
    ArrayElement,
    StepBuilder,
    elements,
    error_step,
    finalize,
    highlight,
    settle,
    step_to_dict,
)
from algorithms.validation import (
    ensure_finite,
    ensure_integers,
    ensure_length,
    ensure_non_negative,
    leading_int,
)
from config import Limits


class TestArrayHelpers:
    def test_elements_tag_origin(self):
        """Each element remembers its input position."""
        arr = elements([5, 3, 5])
        assert [el.value for el in arr] == [5, 3, 5]
        assert [el.origin for el in arr] == [0, 1, 2]

    def test_highlight_only_flags_given_positions(self):
        arr = elements([1, 2, 3, 4])
        out = highlight(arr, comparing=(0,), swapping=(2, 3))
        assert [el.is_comparing for el in out] == [True, False, False, False]
        assert [el.is_swapping for el in out] == [False, False, True, True]
        # input untouched
        assert not any(el.is_comparing or el.is_swapping for el in arr)

    def test_highlight_clears_stale_flags(self):
        arr = highlight(elements([1, 2]), comparing=(0, 1))
        out = highlight(arr, comparing=(1,))
        assert [el.is_comparing for el in out] == [False, True]

    def test_settle_and_finalize(self):
        arr = highlight(elements([1, 2]), swapping=(0,))
        assert not any(el.is_swapping for el in settle(arr))
        done = finalize(arr)
        assert all(el.is_sorted for el in done)
        assert not any(el.is_swapping for el in done)

    def test_but_returns_new_element(self):
        el = ArrayElement(value=3)
        marked = el.but(is_found=True)
        assert marked.is_found and not el.is_found


class TestStepBuilder:
    def test_counters_and_numbering(self):
        sb = StepBuilder()
        s0 = sb.build([], "first", 0)
        sb.compared()
        sb.compared(2)
        sb.swapped()
        s1 = sb.build([], "second", 1)
        assert (s0.step_number, s1.step_number) == (0, 1)
        assert (s0.comparisons, s0.swaps) == (0, 0)
        assert (s1.comparisons, s1.swaps) == (3, 1)

    def test_build_copies_array(self):
        """Mutating the working list after build() must not change the step."""
        sb = StepBuilder()
        arr = elements([1, 2, 3])
        step = sb.build(arr, "snap", 0)
        arr[0] = ArrayElement(value=99)
        assert step.values() == [1, 2, 3]

    def test_build_detaches_info(self):
        sb = StepBuilder()
        buckets = [[1], [2]]
        step = sb.build([], "snap", 0, buckets=buckets, seen={3, 1, 2})
        buckets[0].append(5)
        assert step.additional_info["buckets"] == [[1], [2]]
        assert step.additional_info["seen"] == [1, 2, 3]

    def test_two_steps_never_share_a_list(self):
        sb = StepBuilder()
        arr = elements([1, 2])
        a = sb.build(arr, "a", 0)
        b = sb.build(arr, "b", 0)
        assert a.array is not b.array

    def test_error_step_shape(self):
        step = error_step("bad input")
        assert step.array == []
        assert step.is_final
        assert step.additional_info == {"error": True}

    def test_step_to_dict(self):
        step = StepBuilder().build(elements([7]), "one", 2, i=0, extra="x")
        d = step_to_dict(step)
        assert d["array"][0]["value"] == 7
        assert d["code_line_index"] == 2
        assert d["additional_info"] == {"extra": "x"}


class TestValidation:
    def test_finite_rejects_nan_and_inf(self):
        with pytest.raises(ValueError):
            ensure_finite([1, math.nan])
        with pytest.raises(ValueError):
            ensure_finite([math.inf])

    def test_finite_rejects_bool_and_strings(self):
        with pytest.raises(ValueError):
            ensure_finite([True])
        with pytest.raises(ValueError):
            ensure_finite(["3"])

    def test_integers(self):
        ensure_integers([1, 2.0, -3])
        with pytest.raises(ValueError):
            ensure_integers([1.5])

    def test_non_negative(self):
        ensure_non_negative([0, 4])
        with pytest.raises(ValueError):
            ensure_non_negative([0, -1])

    def test_length_cap(self):
        ensure_length([0] * Limits.max_array_length)
        with pytest.raises(ValueError):
            ensure_length([0] * (Limits.max_array_length + 1))

    def test_leading_int(self):
        assert leading_int([], 7) == 7
        assert leading_int([4.9], 7) == 4
        assert leading_int([math.nan], 7) == 7
