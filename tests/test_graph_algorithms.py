"""Tests for Dijkstra and Tarjan's SCC."""

import json

import pytest

from algorithms.dijkstra import DEFAULT_GRAPH, INFINITY, dijkstra, parse_matrix
from algorithms.tarjan_scc import DEFAULT_GRAPHS, load_graph, tarjan_scc
from config import Limits


class TestDijkstra:
    def test_default_graph_distances(self):
        final = list(dijkstra())[-1]
        assert final.is_final
        assert final.additional_info["distances"] == [0, 4, 12, 19, 21, 11, 9, 8, 14]

    def test_paths_follow_parents(self):
        final = list(dijkstra(DEFAULT_GRAPH))[-1]
        paths = final.additional_info["paths"]
        assert paths[8] == [0, 1, 2, 8]
        assert paths[4] == [0, 7, 6, 5, 4]
        assert paths[0] == [0]

    def test_accepts_json_text(self):
        steps = list(dijkstra(json.dumps([[0, 2], [2, 0]])))
        assert steps[-1].additional_info["distances"] == [0, 2]

    def test_custom_source(self):
        final = list(dijkstra(DEFAULT_GRAPH, source=8))[-1]
        assert final.additional_info["distances"][8] == 0
        assert final.additional_info["source"] == 8

    def test_unreachable_node(self):
        final = list(dijkstra([[0, 1, 0], [1, 0, 0], [0, 0, 0]]))[-1]
        assert final.additional_info["distances"] == [0, 1, None]
        assert final.array[2].value == INFINITY

    def test_only_improving_relaxations_emit_steps(self):
        """Every update step is preceded by its compare step, one pair per improvement."""
        steps = list(dijkstra())
        updates = [k for k, s in enumerate(steps) if s.code_line_index == 10]
        assert len(updates) == steps[-1].swaps
        for k in updates:
            assert steps[k - 1].code_line_index == 9

    def test_every_node_visited_once(self):
        steps = list(dijkstra())
        visits = [s.i for s in steps if s.code_line_index == 6]
        assert sorted(visits) == list(range(len(DEFAULT_GRAPH)))

    @pytest.mark.parametrize("bad", [
        "{not json",
        [[0, 1], [1]],
        [[0, 1, 2], [1, 0, 2]],
        [[0, -1], [-1, 0]],
        [],
        "[]",
    ])
    def test_malformed_matrix_yields_nothing(self, bad):
        assert list(dijkstra(bad)) == []

    def test_source_out_of_range_yields_nothing(self):
        assert list(dijkstra(DEFAULT_GRAPH, source=42)) == []

    def test_parse_matrix_copies_rows(self):
        raw = [[0, 1], [1, 0]]
        parsed = parse_matrix(raw)
        raw[0][1] = 5
        assert parsed[0][1] == 1


class TestTarjan:
    @pytest.mark.parametrize("preset", sorted(DEFAULT_GRAPHS))
    def test_presets_are_one_component(self, preset):
        final = list(tarjan_scc(preset))[-1]
        sccs = final.additional_info["sccs"]
        assert len(sccs) == 1
        assert sorted(sccs[0]) == list(range(len(DEFAULT_GRAPHS[preset]["nodes"])))

    def test_custom_graph_components_in_completion_order(self):
        graph = {"nodes": ["A", "B", "C"], "edges": [[0, 1]]}
        final = list(tarjan_scc(graph))[-1]
        assert final.additional_info["sccs"] == [[1], [0], [2]]

    def test_edge_classification(self):
        final = list(tarjan_scc("simple"))[-1]
        kinds = [(e["from"], e["to"], e["kind"]) for e in final.additional_info["edges"]]
        assert kinds == [(0, 1, "tree"), (1, 2, "tree"), (2, 0, "back")]

    def test_cross_edge_into_finished_component(self):
        graph = {"nodes": ["A", "B"], "edges": [[1, 0]]}
        final = list(tarjan_scc(graph))[-1]
        assert final.additional_info["edges"][0]["kind"] == "cross"
        assert final.additional_info["sccs"] == [[0], [1]]

    def test_low_links_settle_to_root(self):
        final = list(tarjan_scc("simple"))[-1]
        assert final.additional_info["low_link"] == [0, 0, 0]
        assert final.values() == [0, 0, 0]
        assert all(el.is_sorted for el in final.array)

    def test_low_link_update_records_before_and_after(self):
        steps = list(tarjan_scc("simple"))
        updates = [s.additional_info["low_link_update"] for s in steps if "low_link_update" in s.additional_info]
        assert {"node": 2, "old": 2, "new": 0} in updates

    def test_stack_empty_at_end(self):
        final = list(tarjan_scc("complex"))[-1]
        assert final.additional_info["stack"] == []
        assert final.additional_info["phase"] == "complete"

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            load_graph("nope")

    def test_edge_out_of_range(self):
        with pytest.raises(ValueError):
            load_graph({"nodes": ["A"], "edges": [[0, 3]]})

    def test_too_many_nodes(self):
        nodes = [str(k) for k in range(Limits.scc_max_nodes + 1)]
        with pytest.raises(ValueError):
            load_graph({"nodes": nodes, "edges": []})
