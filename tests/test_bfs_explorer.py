"""Tests for the editable graph and the interactive BFS explorer."""

import pytest

from config import Limits
from engine import BfsExplorer, NoticeKind
from graph import Graph, NodeStatus


@pytest.fixture
def explorer():
    return BfsExplorer()


class TestGraph:
    def test_sample_shape(self):
        g = Graph.sample()
        assert len(g) == 7
        assert g.edges() == [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (4, 6)]

    def test_toggle_edge(self):
        g = Graph.sample()
        assert g.toggle_edge(3, 6) is True
        assert g.has_edge(6, 3)
        assert g.toggle_edge(6, 3) is False
        assert not g.has_edge(3, 6)

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError):
            Graph.sample().add_edge(2, 2)

    def test_node_cap(self):
        g = Graph()
        for _ in range(Limits.bfs_max_nodes):
            g.add_node()
        with pytest.raises(ValueError):
            g.add_node()

    def test_freed_id_is_reused(self):
        g = Graph.sample()
        g.remove_node(3)
        assert g.add_node().id == 3
        assert not g.has_edge(1, 3)

    def test_dict_round_trip(self):
        g = Graph.sample()
        again = Graph.from_dict(g.to_dict())
        assert again.edges() == g.edges()
        assert sorted(again.nodes) == sorted(g.nodes)


class TestTraversal:
    def test_first_step_seeds_queue(self, explorer):
        notice = explorer.step()
        assert notice.kind == NoticeKind.INFO
        assert list(explorer.queue) == [0]
        assert explorer.graph.nodes[0].status == NodeStatus.QUEUED
        assert explorer.running and not explorer.finished

    def test_expand_enqueues_sorted_neighbours(self, explorer):
        explorer.step()
        explorer.step()
        assert list(explorer.queue) == [1, 2]
        assert explorer.graph.nodes[0].status == NodeStatus.VISITED
        assert explorer.graph.nodes[2].distance == 1

    def test_run_to_completion(self, explorer):
        notice = explorer.run_to_completion()
        assert notice.kind == NoticeKind.SUCCESS
        assert explorer.finished and not explorer.running
        assert explorer.distance_to(6) == 3
        assert explorer.path_to(6) == [0, 1, 4, 6]
        assert all(n.status == NodeStatus.VISITED for n in explorer.graph.nodes.values())

    def test_step_after_finish(self, explorer):
        explorer.run_to_completion()
        assert explorer.step().text == "BFS already completed"

    def test_unreachable_node_has_no_path(self, explorer):
        explorer.add_node(90, 90)
        explorer.run_to_completion()
        assert explorer.path_to(7) == []
        assert explorer.distance_to(7) is None

    def test_stats(self, explorer):
        explorer.run_to_completion()
        assert explorer.stats.visited_count == 7
        assert explorer.stats.max_queue_length == 3
        # start + 6 enqueues + 7 visits + complete
        assert explorer.stats.steps == 15
        assert [t.kind for t in explorer.trace][-1] == "complete"

    def test_no_start_node(self):
        explorer = BfsExplorer(start=None)
        notice = explorer.step()
        assert not notice.ok
        assert notice.text == "Select a start node first"
        assert not explorer.can_undo


class TestUndo:
    def test_undo_restores_previous_state(self, explorer):
        explorer.step()
        explorer.step()
        before = explorer.to_dict()
        explorer.step()
        explorer.undo()
        assert explorer.to_dict()["queue"] == before["queue"]
        assert explorer.to_dict()["graph"] == before["graph"]
        assert explorer.stats.visited_count == 1

    def test_undo_all_the_way_back(self, explorer):
        explorer.run_to_completion()
        while explorer.can_undo:
            assert explorer.undo().ok
        assert not explorer.running and not explorer.finished
        assert all(n.status == NodeStatus.UNVISITED for n in explorer.graph.nodes.values())

    def test_nothing_to_undo(self, explorer):
        assert explorer.undo().kind == NoticeKind.ERROR

    def test_undo_keeps_moved_positions(self, explorer):
        explorer.step()
        explorer.step()
        explorer.move_node(0, 10, 10)
        assert explorer.undo().ok
        node = explorer.graph.nodes[0]
        assert (node.x, node.y) == (10, 10)


class TestEditing:
    def test_edit_resets_traversal(self, explorer):
        explorer.step()
        explorer.step()
        notice = explorer.toggle_edge(3, 6)
        assert notice.text == "Added edge 3-6"
        assert not explorer.running and not explorer.can_undo
        assert list(explorer.queue) == []
        assert all(n.status == NodeStatus.UNVISITED for n in explorer.graph.nodes.values())

    def test_move_does_not_reset(self, explorer):
        explorer.step()
        assert explorer.move_node(0, 10, 10).ok
        assert explorer.running and explorer.can_undo

    def test_add_node_over_cap(self, explorer):
        for _ in range(Limits.bfs_max_nodes - 7):
            assert explorer.add_node().ok
        notice = explorer.add_node()
        assert notice.kind == NoticeKind.ERROR
        assert len(explorer.graph) == Limits.bfs_max_nodes

    def test_removing_start_picks_another(self, explorer):
        explorer.remove_node(0)
        assert explorer.start == 1

    def test_unknown_node_edits(self, explorer):
        assert not explorer.remove_node(42).ok
        assert not explorer.toggle_edge(0, 42).ok
        assert not explorer.set_start(42).ok
        assert explorer.start == 0

    def test_set_start(self, explorer):
        explorer.set_start(6)
        explorer.run_to_completion()
        assert explorer.path_to(0) == [6, 4, 1, 0]

    def test_add_node_sets_start_when_missing(self):
        explorer = BfsExplorer(graph=Graph(), start=None)
        explorer.add_node()
        assert explorer.start == 0


class TestSerialisation:
    def test_parent_keys_are_strings(self, explorer):
        explorer.step()
        explorer.step()
        data = explorer.to_dict()
        assert data["parent"] == {"0": None, "1": 0, "2": 0}
        assert data["can_undo"] is True
        assert data["trace"][0]["kind"] == "start"
