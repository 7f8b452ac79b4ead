"""Tests for the Dijkstra step generator and the materialised Trace."""

import random

import pytest

from graph import Graph, generate_random_graph, parse_graph
from algorithms import (
    PSEUDOCODE,
    UNREACHABLE,
    StepKind,
    dijkstra,
    generate_trace,
    is_finite,
    is_shorter,
)

K = StepKind


def _random_graphs(n=25):
    for seed in range(n):
        yield parse_graph(*generate_random_graph(random.Random(seed)))


def _as_number(d):
    return float("inf") if d is UNREACHABLE else d


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------
def test_scenario_a_final_distances(trace_a):
    final = trace_a.final

    assert final.kind is K.COMPLETE
    assert dict(final.distances) == {"A": 0, "B": 1, "C": 3}
    assert dict(final.previous) == {"A": None, "B": "A", "C": "B"}
    assert trace_a.path_to("C") == ["A", "B", "C"]


def test_scenario_a_step_sequence(trace_a):
    assert trace_a.kinds() == [
        K.INITIALIZE,
        K.SELECT_NODE,                                  # A
        K.CHECK_NEIGHBOR, K.UPDATE_DISTANCE,            # A→B  ∞ → 1
        K.CHECK_NEIGHBOR, K.UPDATE_DISTANCE,            # A→C  ∞ → 10
        K.SELECT_NODE,                                  # B
        K.CHECK_NEIGHBOR, K.UPDATE_DISTANCE,            # B→C  10 → 3
        K.SELECT_NODE,                                  # C
        K.NO_NEIGHBORS,
        K.COMPLETE,
    ]
    assert [s.step_number for s in trace_a] == list(range(len(trace_a)))


def test_scenario_b_single_node():
    trace = generate_trace(parse_graph("A", ""), "A")

    assert trace.kinds() == [K.INITIALIZE, K.SELECT_NODE, K.NO_NEIGHBORS, K.COMPLETE]
    assert trace[1].current_node == "A"
    assert trace[2].current_node == "A"
    assert dict(trace.final.distances) == {"A": 0}


def test_scenario_c_unreachable_node():
    trace = generate_trace(parse_graph("A, B, C", "A-B:1"), "A")

    assert K.UNREACHABLE in trace.kinds()
    assert trace.kinds()[-2:] == [K.UNREACHABLE, K.COMPLETE]
    assert trace.final.distances["C"] is UNREACHABLE
    assert trace.final.previous["C"] is None
    assert trace.path_to("C") == []

    unreachable = trace[-2]
    assert unreachable.current_node is None
    assert unreachable.visited == ("A", "B")


# ---------------------------------------------------------------------------
# Step contents
# ---------------------------------------------------------------------------
def test_initialize_step(trace_a):
    init = trace_a[0]

    assert init.current_node is None
    assert init.visited == ()
    assert init.processing_edges == ()
    assert dict(init.distances) == {"A": 0, "B": UNREACHABLE, "C": UNREACHABLE}
    assert dict(init.previous) == {"A": None, "B": None, "C": None}


def test_select_step_visited_excludes_selected_node(trace_a):
    select_b = trace_a[6]
    assert select_b.kind is K.SELECT_NODE
    assert select_b.current_node == "B"
    assert select_b.visited == ("A",)

    check_b_c = trace_a[7]
    assert check_b_c.visited == ("A", "B")
    assert check_b_c.processing_edges == (("B", "C"),)
    assert check_b_c.processing_edge == ("B", "C")


def test_update_step_carries_new_distance_and_explanation(trace_a):
    check, update = trace_a[7], trace_a[8]

    assert check.distances["C"] == 10
    assert update.distances["C"] == 3
    assert update.previous["C"] == "B"
    assert "10" in update.explanation and "3" in update.explanation


def test_no_update_on_equal_candidate():
    # A→B→C costs 3, same as direct A→C; ties must not update
    trace = generate_trace(parse_graph("A, B, C", "A-C:3, A-B:1, B-C:2"), "A")

    no_updates = [s for s in trace if s.kind is K.NO_UPDATE]
    assert len(no_updates) == 1
    assert no_updates[0].processing_edges == (("B", "C"),)
    assert "3" in no_updates[0].explanation
    assert trace.final.previous["C"] == "A"


def test_complete_step_lists_every_node(diamond):
    trace = generate_trace(diamond, "A")
    final = trace.final

    assert final.visited == diamond.nodes
    assert final.current_node is None
    assert final.processing_edges == ()
    assert final.is_final


def test_pseudocode_line_is_in_range(trace_a):
    for step in trace_a:
        assert 0 <= step.pseudocode_line < len(PSEUDOCODE)


def test_processing_edges_only_on_edge_steps(diamond):
    edge_kinds = {K.CHECK_NEIGHBOR, K.UPDATE_DISTANCE, K.NO_UPDATE}
    for step in generate_trace(diamond, "A"):
        if step.kind in edge_kinds:
            assert len(step.processing_edges) == 1
        else:
            assert step.processing_edges == ()


# ---------------------------------------------------------------------------
# Tie-breaks and special edges
# ---------------------------------------------------------------------------
def test_ties_go_to_first_node_in_graph_order():
    trace = generate_trace(parse_graph("S, X, Y", "S-Y:4, S-X:4"), "S")

    selected = [s.current_node for s in trace if s.kind is K.SELECT_NODE]
    assert selected == ["S", "X", "Y"]


def test_neighbours_are_checked_in_edge_order():
    trace = generate_trace(parse_graph("S, X, Y", "S-Y:4, S-X:1"), "S")

    checked = [s.processing_edge for s in trace if s.kind is K.CHECK_NEIGHBOR]
    assert checked == [("S", "Y"), ("S", "X")]


def test_self_loop_is_skipped_without_steps():
    trace = generate_trace(parse_graph("A, B", "A-A:5, A-B:2"), "A")

    assert trace.kinds() == [
        K.INITIALIZE,
        K.SELECT_NODE, K.CHECK_NEIGHBOR, K.UPDATE_DISTANCE,
        K.SELECT_NODE, K.NO_NEIGHBORS,
        K.COMPLETE,
    ]
    assert trace.final.distances["A"] == 0
    assert trace.final.previous["A"] is None


def test_only_self_loop_is_not_no_neighbors():
    trace = generate_trace(parse_graph("A", "A-A:1"), "A")
    assert trace.kinds() == [K.INITIALIZE, K.SELECT_NODE, K.COMPLETE]


def test_edges_back_to_visited_nodes_are_skipped(diamond):
    trace = generate_trace(diamond, "A")
    checked = [s.processing_edge for s in trace if s.kind is K.CHECK_NEIGHBOR]
    assert ("D", "A") not in checked


def test_unknown_start_node_is_a_programming_error(scenario_a):
    with pytest.raises(AssertionError):
        generate_trace(scenario_a, "Z")
    with pytest.raises(AssertionError):
        list(dijkstra(scenario_a, "Z"))


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------
def test_determinism():
    for g in _random_graphs():
        start = g.nodes[-1]
        assert generate_trace(g, start) == generate_trace(g, start)


def test_distances_never_increase():
    for g in _random_graphs():
        trace = generate_trace(g, g.nodes[0])
        for before, after in zip(trace.steps, trace.steps[1:]):
            for node in g.nodes:
                assert _as_number(after.distances[node]) <= _as_number(before.distances[node])


def test_visited_only_grows():
    for g in _random_graphs():
        trace = generate_trace(g, g.nodes[0])
        for before, after in zip(trace.steps, trace.steps[1:]):
            assert set(before.visited) <= set(after.visited)


def test_strict_improvement_rule():
    for g in _random_graphs():
        trace = generate_trace(g, g.nodes[0])
        for check, result in zip(trace.steps, trace.steps[1:]):
            if check.kind is not K.CHECK_NEIGHBOR:
                continue
            src, dst = check.processing_edge
            candidate = check.distances[src] + g.weight(src, dst)
            if result.kind is K.UPDATE_DISTANCE:
                assert is_shorter(candidate, check.distances[dst])
                assert result.distances[dst] == candidate
            else:
                assert result.kind is K.NO_UPDATE
                assert candidate >= _as_number(check.distances[dst])


def test_termination_shape():
    for g in _random_graphs():
        for start in g.nodes:
            trace = generate_trace(g, start)
            kinds = trace.kinds()
            assert kinds.count(K.COMPLETE) == 1
            assert kinds[-1] is K.COMPLETE
            assert kinds.count(K.UNREACHABLE) <= 1
            has_unreachable_node = any(d is UNREACHABLE for d in trace.final.distances.values())
            assert trace.has_unreachable == has_unreachable_node
            if trace.has_unreachable:
                assert kinds[-2] is K.UNREACHABLE


def test_path_reconstruction_sums_to_distance():
    for g in _random_graphs():
        for start in g.nodes:
            trace = generate_trace(g, start)
            for node, dist in trace.final.distances.items():
                if not is_finite(dist):
                    continue
                path = trace.path_to(node)
                assert path[0] == start and path[-1] == node
                assert sum(g.weight(a, b) for a, b in zip(path, path[1:])) == dist


def test_distances_are_exact_ints():
    for g in _random_graphs(5):
        for step in generate_trace(g, g.nodes[0]):
            for d in step.distances.values():
                assert d is UNREACHABLE or (isinstance(d, int) and d >= 0)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------
def test_emitted_steps_are_independent_snapshots(scenario_a):
    gen = dijkstra(scenario_a, "A")
    init = next(gen)
    rest = list(gen)

    # the generator kept mutating its working maps after INITIALIZE was emitted
    assert rest[-1].distances["C"] == 3
    assert init.distances["C"] is UNREACHABLE
    assert init.previous["C"] is None
    assert init.visited == ()


def test_steps_are_read_only(trace_a):
    step = trace_a[0]
    with pytest.raises(TypeError):
        step.distances["A"] = 99
    with pytest.raises(AttributeError):
        step.kind = K.COMPLETE


def test_step_to_dict_renders_unreachable_as_none(trace_a):
    data = trace_a[0].to_dict()

    assert data["kind"] == "INITIALIZE"
    assert data["distances"] == {"A": 0, "B": None, "C": None}
    assert data["processing_edges"] == []

    check = trace_a[2].to_dict()
    assert check["processing_edges"] == [{"from": "A", "to": "B"}]


def test_trace_export(trace_a):
    data = trace_a.to_dict()

    assert data["start_node"] == "A"
    assert data["total_steps"] == len(trace_a)
    assert Graph.from_dict(data["graph"]) == trace_a.graph
    assert data["steps"][-1]["is_final"] is True
