import pytest

from dungeonforge.layout import LayoutConfig, generate
from dungeonforge.layout.connectivity import Connection, ConnectivityGraph, first_enabled_node, is_connected, reachable
from dungeonforge.layout.geometry import Rect
from dungeonforge.layout.model import DoorAxis
from dungeonforge.layout.pruning import prune_doors, prune_rooms, room_prune_order, room_target
from layout_test_utils import make_linked_state, result_is_connected

GRID_2X2 = [Rect(0, 0, 12, 12), Rect(11, 0, 12, 12), Rect(0, 11, 12, 12), Rect(11, 11, 12, 12)]
LINE_3 = [Rect(0, 0, 12, 10), Rect(11, 0, 8, 10), Rect(18, 0, 12, 10)]


def test_graph_insertion_order_and_lookup():
    g = ConnectivityGraph(3)
    g.add_node(2)
    g.add_node(0)
    g.add_node(2)
    g.add_edge(2, Connection(0, 5))
    assert g.nodes() == [2, 0]
    assert len(g) == 2
    assert 1 not in g and -1 not in g
    assert g.neighbors(1) == []
    assert list(g.edges()) == [(2, 5, 0)]


def test_graph_grows_past_initial_size():
    g = ConnectivityGraph()
    g.add_edge(4, Connection(1, 0))
    assert 4 in g
    assert g.nodes() == [4]


def test_build_graph_is_bidirectional():
    state = make_linked_state(GRID_2X2, (23, 23))
    assert len(state.doors) == 4
    assert state.graph.nodes() == [0, 1, 2, 3]
    assert state.graph.neighbors(0) == [Connection(1, 0), Connection(2, 1)]
    assert state.graph.neighbors(3) == [Connection(1, 2), Connection(2, 3)]
    corners = [w for w in state.walls if not w.is_boundary and w.door_axis is DoorAxis.NONE]
    assert len(corners) == 2
    assert is_connected(state)


def test_reachable_ignores_disabled_doors():
    state = make_linked_state(LINE_3, (30, 10))
    assert reachable(state, 0)
    state.doors[1].enabled = False
    assert not reachable(state, 0)
    state.rooms[2].enabled = False
    assert reachable(state, 0)


def test_reachable_from_disabled_room_fails():
    state = make_linked_state(LINE_3, (30, 10))
    state.rooms[0].enabled = False
    assert not reachable(state, 0)
    assert first_enabled_node(state) == 1


def test_prune_order_and_target():
    state = make_linked_state(LINE_3, (30, 10))
    assert room_prune_order(state) == [1, 0, 2]
    assert room_target(3, 34) == 2
    assert room_target(10, 10) == 9
    assert room_target(7, 0) == 7
    assert room_target(7, 100) == 0


@pytest.mark.parametrize("percent", [34, 67])
def test_bridge_room_is_never_removed(percent):
    state = make_linked_state(LINE_3, (30, 10), subtracted_percent=percent)
    assert prune_rooms(state) == 0
    assert all(r.enabled for r in state.rooms)
    assert state.metrics["room_prune_refused"] == 1
    # refusal restores the doors the disable closed
    assert all(d.enabled for d in state.doors)
    assert all(state.walls[i].door_axis is DoorAxis.ACROSS_X for i in state.rooms[1].walls)


def test_room_pruning_smallest_first():
    state = make_linked_state(GRID_2X2, (23, 23), subtracted_percent=50)
    assert prune_rooms(state) == 2
    assert [r.enabled for r in state.rooms] == [False, False, True, True]
    assert [d.enabled for d in state.doors] == [False, False, False, True]
    assert is_connected(state)


def test_door_pruning_breaks_the_cycle():
    state = make_linked_state(GRID_2X2, (23, 23), subtracted_percent=0)
    prune_rooms(state)
    assert prune_doors(state) == 1
    assert [d.enabled for d in state.doors] == [False, True, True, True]
    assert is_connected(state)


def test_door_pruning_leaves_tree_alone():
    state = make_linked_state(LINE_3, (30, 10), subtracted_percent=0)
    assert prune_doors(state) == 0
    assert all(d.enabled for d in state.doors)


def test_pruning_everything_keeps_one_room(scenario_a):
    cfg = LayoutConfig.from_mapping({"subtracted_percent": 100}, base=scenario_a)
    result = generate(5, cfg)
    m = result.metrics
    assert len(result.rooms) == 1
    assert m["rooms_pruned"] == 1
    assert m["room_prune_refused"] == 1
    assert m["doors_pruned"] == 0
    assert result.doors == ()
    assert len(result.walls) == 5


def test_no_pruning_keeps_all_rooms(scenario_a):
    result = generate(5, scenario_a)
    assert len(result.rooms) == 2
    assert len(result.doors) == 1
    assert result.metrics["rooms_pruned"] == 0


@pytest.mark.structure
@pytest.mark.parametrize("seed", [3, 11, 2024, 31337, 8675309])
def test_pruned_layouts_stay_connected(seed):
    cfg = LayoutConfig(dungeon_size=(80, 60), size_constrain=8, endless_divisions=True, subtracted_percent=30)
    result = generate(seed, cfg)
    m = result.metrics
    assert len(result.rooms) == m["regions_final"] - m["rooms_pruned"]
    if m["rooms_pruned"] or m["doors_pruned"]:
        assert result_is_connected(result)
    # every reported edge runs through an open door between live rooms
    live = {r.index for r in result.rooms}
    open_doors = {d.index for d in result.doors}
    for src, via, dst in result.edges:
        assert src in live and dst in live and via in open_doors
