"""Tests for the registry, the playback engine and the recorder."""

import inspect

import pytest

from algorithms import (
    REGISTRY,
    algorithms_by_category,
    algorithms_by_tag,
    generate_steps,
    get_algorithm,
    list_algorithms,
)
from algorithms.step import ArrayElement, Step
from config import Limits
from engine import (
    SPEED_PRESETS,
    Playback,
    Recorder,
    Stepper,
    StepperState,
    advance,
    compare,
    retreat,
    seek,
)


def make_steps(n):
    return [Step(array=[ArrayElement(value=k)], step_number=k, is_final=k == n - 1) for k in range(n)]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
class TestRegistry:
    def test_every_entry_runs_on_its_default_input(self):
        for key, info in REGISTRY.items():
            options = {"seed": 1} if "seed" in inspect.signature(info.fn).parameters else {}
            steps = generate_steps(key, **options)
            assert steps, key
            assert [s.step_number for s in steps] == list(range(len(steps))), key
            assert sum(s.is_final for s in steps) <= 1, key

    def test_keys_match_entries(self):
        assert all(info.key == key for key, info in REGISTRY.items())
        assert [a.key for a in list_algorithms()] == list(REGISTRY)

    def test_lookup(self):
        assert get_algorithm("merge_sort").label == "Merge Sort"
        assert get_algorithm("nope") is None

    def test_filters(self):
        sorting = {a.key for a in algorithms_by_category("Sorting")}
        assert sorting == {"bubble_sort", "selection_sort", "merge_sort", "counting_sort", "radix_sort"}
        assert {a.key for a in algorithms_by_tag("stable")} == sorting

    def test_to_dict_is_plain(self):
        data = get_algorithm("gcd").to_dict()
        assert "fn" not in data
        assert data["complexity"]["space"] == "O(1)"
        assert data["pseudocode"]

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            generate_steps("quantum_sort", [1, 2])

    def test_unknown_option(self):
        with pytest.raises(ValueError):
            generate_steps("bubble_sort", [2, 1], source=3)

    def test_input_name_is_not_an_option(self):
        with pytest.raises(ValueError):
            generate_steps("bubble_sort", [3, 1], values=[1])

    def test_option_passed_through(self):
        steps = generate_steps("dijkstra", source=2)
        assert steps[-1].additional_info["source"] == 2

    def test_input_too_long(self):
        with pytest.raises(ValueError):
            generate_steps("bubble_sort", [1] * (Limits.max_array_length + 1))


# ---------------------------------------------------------------------------
# Pure playback transitions
# ---------------------------------------------------------------------------
class TestPlayback:
    def test_advance(self):
        assert advance(Playback(0, 3)).index == 1

    def test_advance_at_end_stops_playing(self):
        pb = advance(Playback(2, 3, playing=True))
        assert pb.index == 2 and not pb.playing

    def test_reaching_last_step_stops_playing(self):
        pb = advance(Playback(1, 3, playing=True))
        assert pb.index == 2 and not pb.playing

    def test_retreat_floor(self):
        assert retreat(Playback(0, 3)).index == 0
        assert retreat(Playback(2, 3)).index == 1

    def test_seek_clamps(self):
        assert seek(Playback(0, 5), 99).index == 4
        assert seek(Playback(3, 5), -4).index == 0
        assert seek(Playback(), 3).index == 0

    def test_empty_run_is_at_both_ends(self):
        pb = Playback()
        assert pb.at_start and pb.at_end


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class TestStepper:
    def test_start_shows_first_step(self):
        seen = []
        st = Stepper(on_step=seen.append)
        st.start(make_steps(3))
        assert st.state == StepperState.PAUSED
        assert st.current_idx == 0
        assert seen == [st.steps[0]]

    def test_single_step_run_is_finished(self):
        st = Stepper()
        st.start(make_steps(1))
        assert st.is_finished

    def test_next_and_prev(self):
        st = Stepper()
        st.start(make_steps(3))
        assert st.next_step() and st.next_step()
        assert st.is_finished
        assert not st.next_step()
        assert st.prev_step()
        assert st.state == StepperState.PAUSED
        assert st.prev_step()
        assert not st.prev_step()

    def test_goto(self):
        st = Stepper()
        st.start(make_steps(5))
        assert st.goto_step(3)
        assert st.current_step.step_number == 3
        assert not st.goto_step(5)
        assert not st.goto_step(-1)
        assert st.current_idx == 3

    def test_rewind_and_jump_to_end(self):
        st = Stepper()
        st.start(make_steps(4))
        st.jump_to_end()
        assert st.current_idx == 3 and st.is_finished
        st.rewind()
        assert st.current_idx == 0 and st.state == StepperState.PAUSED

    def test_tick_respects_speed(self):
        st = Stepper()
        st.start(make_steps(3))
        st.set_speed_value(1.0)
        st.play()
        base = st._last_tick
        assert not st.tick(base + 0.5)
        assert st.tick(base + 1.5)
        assert st.current_idx == 1

    def test_playing_stops_on_last_step(self):
        st = Stepper()
        st.start(make_steps(3))
        st.set_speed_value(0.0)
        st.play()
        now = st._last_tick
        while st.tick(now):
            now += 1
        assert st.current_idx == 2
        assert st.is_finished and not st.is_playing

    def test_play_ignored_when_idle_or_finished(self):
        st = Stepper()
        st.play()
        assert st.state == StepperState.IDLE
        st.start(make_steps(1))
        st.play()
        assert st.state == StepperState.FINISHED

    def test_toggle(self):
        st = Stepper()
        st.start(make_steps(3))
        st.toggle_play()
        assert st.is_playing
        st.toggle_play()
        assert st.state == StepperState.PAUSED

    def test_speed_presets(self):
        st = Stepper()
        st.set_speed("fast")
        assert st.speed == SPEED_PRESETS["fast"]
        st.set_speed("ludicrous")
        assert st.speed == SPEED_PRESETS["medium"]

    def test_reset(self):
        st = Stepper()
        st.start(make_steps(2))
        st.reset()
        assert st.state == StepperState.IDLE
        assert st.current_step is None and st.current_idx == -1


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class TestRecorder:
    def test_metrics(self):
        rec = Recorder()
        rec.start("bubble_sort", [3, 2, 1])
        metrics = rec.run_to_completion()
        assert metrics.algo_label == "Bubble Sort"
        assert metrics.input_size == 3
        assert metrics.total_steps == len(rec.steps)
        assert metrics.comparisons == 3 and metrics.swaps == 3
        assert metrics.completed and metrics.error == ""
        assert rec.stepper.total_steps == metrics.total_steps

    def test_default_input(self):
        rec = Recorder()
        rec.start("gcd")
        rec.run_to_completion()
        assert rec.steps[-1].additional_info["gcd"] == 6

    def test_error_step_is_reported(self):
        rec = Recorder()
        rec.start("gcd", [1, 2, 3])
        metrics = rec.run_to_completion()
        assert "exactly two" in metrics.error

    def test_must_start_first(self):
        with pytest.raises(RuntimeError):
            Recorder().run_to_completion()

    def test_unknown_key(self):
        with pytest.raises(KeyError):
            Recorder().start("nope")

    def test_export(self):
        rec = Recorder()
        rec.start("dijkstra", source=0)
        rec.run_to_completion()
        data = rec.export()
        assert data["algo_key"] == "dijkstra"
        assert data["options"] == {"source": 0}
        assert len(data["steps"]) == data["metrics"]["total_steps"]
        assert isinstance(data["steps"][0]["array"][0], dict)

    def test_compare(self):
        left, right = Recorder(), Recorder()
        values = [5, 4, 3, 2, 1, 0]
        left.start("bubble_sort", values)
        right.start("merge_sort", values)
        left.run_to_completion()
        right.run_to_completion()
        result = compare(left, right)
        assert result.winner_comparisons == "Merge Sort"
        assert result.left.algo_key == "bubble_sort"

    def test_compare_tie(self):
        a, b = Recorder(), Recorder()
        a.start("gcd", [48, 18])
        b.start("gcd", [48, 18])
        a.run_to_completion()
        b.run_to_completion()
        assert compare(a, b).winner_steps == "tie"
