"""Tests for KMP: the LPS table and the search."""

import random

import pytest

from algorithms.kmp import compute_lps, kmp, kmp_search
from config import Limits


def brute_force(text, pattern):
    return [k for k in range(len(text) - len(pattern) + 1) if text[k:k + len(pattern)] == pattern]


def naive_lps(pattern):
    out = []
    for i in range(len(pattern)):
        prefix = pattern[:i + 1]
        best = 0
        for length in range(1, len(prefix)):
            if prefix[:length] == prefix[-length:]:
                best = length
        out.append(best)
    return out


class TestLps:
    def test_textbook_table(self):
        lps, steps = compute_lps("AABAACAABAA")
        assert lps == [0, 1, 0, 1, 2, 0, 1, 2, 3, 4, 5]
        assert steps[-1].is_final
        assert steps[-1].values() == lps

    @pytest.mark.parametrize("pattern", ["A", "AAAA", "ABAB", "ABCDE", "AAACAAAA", "abababca"])
    def test_matches_definition(self, pattern):
        assert compute_lps(pattern)[0] == naive_lps(pattern)

    def test_empty_pattern(self):
        assert compute_lps("") == ([], [])


class TestSearch:
    def test_textbook_matches(self):
        matches, steps = kmp_search("AABAACAADAABAABA", "AABA")
        assert matches == [0, 9, 12]
        assert steps[-1].additional_info["matches"] == [0, 9, 12]

    def test_agrees_with_brute_force(self):
        rng = random.Random(5)
        for _ in range(50):
            text = "".join(rng.choice("ab") for _ in range(rng.randint(0, 30)))
            pattern = "".join(rng.choice("ab") for _ in range(rng.randint(1, 4)))
            assert kmp_search(text, pattern)[0] == brute_force(text, pattern)

    def test_text_pointer_never_moves_back(self):
        _, steps = kmp_search("AAAAABAAABA", "AAAA")
        positions = [s.additional_info["text_index"] for s in steps]
        assert positions == sorted(positions)

    def test_pattern_longer_than_text(self):
        assert kmp_search("AB", "ABC")[0] == []

    def test_empty_pattern_is_an_error_step(self):
        matches, steps = kmp_search("abc", "")
        assert matches == []
        assert len(steps) == 1 and steps[0].additional_info.get("error")

    def test_text_too_long(self):
        with pytest.raises(ValueError):
            kmp_search("a" * (Limits.max_text_length + 1), "a")


class TestRegistryEntry:
    def test_lps_then_search_share_counters(self):
        steps = list(kmp({"text": "AABAACAADAABAABA", "pattern": "AABA"}))
        phases = [s.additional_info["phase"] for s in steps]
        assert phases[0] == "lps" and phases[-1] == "search"
        assert phases.index("search") > phases.index("lps")
        assert [s.step_number for s in steps] == list(range(len(steps)))
        assert steps[-1].is_final
        assert [s.is_final for s in steps].count(True) == 1

    def test_pair_input(self):
        steps = list(kmp(["abcabc", "abc"]))
        assert steps[-1].additional_info["matches"] == [0, 3]

    def test_default_input(self):
        assert list(kmp())[-1].additional_info["matches"] == [0, 9, 12]

    def test_empty_pattern(self):
        steps = list(kmp({"text": "abc", "pattern": ""}))
        assert len(steps) == 1 and steps[0].additional_info.get("error")
