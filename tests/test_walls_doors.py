import pytest

from dungeonforge.layout.config import LayoutConfig
from dungeonforge.layout.doors import door_span, place_doors
from dungeonforge.layout.geometry import Box, Rect, contains
from dungeonforge.layout.metrics import init_metrics
from dungeonforge.layout.model import DoorAxis, GenerationState, classify_door_axis
from dungeonforge.layout.partition import partition
from dungeonforge.layout.walls import boundary_walls, build_walls, is_seam
from layout_test_utils import make_state


def _walled(cfg, seed):
    state = GenerationState(seed=seed, config=cfg.validate(), metrics=init_metrics())
    partition(state)
    build_walls(state)
    place_doors(state)
    return state


def test_is_seam():
    assert is_seam(Box(0, 0, 0, 1, 5, 12), 1)
    assert is_seam(Box(0, 0, 0, 12, 5, 2), 1)
    assert not is_seam(Box(0, 0, 0, 3, 5, 10), 1)


def test_classify_door_axis_first_axis_wins():
    assert classify_door_axis(Box(0, 0, 0, 20, 5, 1), 3, 1) is DoorAxis.ACROSS_Z
    assert classify_door_axis(Box(0, 0, 0, 1, 5, 20), 3, 1) is DoorAxis.ACROSS_X
    assert classify_door_axis(Box(0, 0, 0, 6, 5, 6), 3, 1) is DoorAxis.ACROSS_Z
    # span must exceed door plus clearance strictly
    assert classify_door_axis(Box(0, 0, 0, 5, 5, 1), 3, 1) is DoorAxis.NONE


def test_boundary_walls_follow_start_point():
    walls = boundary_walls(Rect(5, 7, 30, 20), 2, 4)
    assert walls == [
        Box(5, 0, 7, 2, 4, 20),
        Box(5, 0, 25, 30, 4, 2),
        Box(33, 0, 7, 2, 4, 20),
        Box(5, 0, 7, 30, 4, 2),
    ]


def test_scenario_a_walls(scenario_a):
    state = _walled(scenario_a, seed=1)
    interior = [w for w in state.walls if not w.is_boundary]
    boundary = [w for w in state.walls if w.is_boundary]
    assert len(interior) == 1 and len(boundary) == 4
    wall = interior[0]
    assert wall.box.size_x == 20 and wall.box.size_z == 1
    assert wall.door_axis is DoorAxis.ACROSS_Z
    assert sorted(wall.rooms) == [0, 1]
    assert all(wall.index in state.rooms[r].walls for r in wall.rooms)
    assert len(state.doors) == 1 and wall.door is state.doors[0]
    assert all(w.door is None and w.door_axis is DoorAxis.NONE for w in boundary)


def test_thick_overlap_is_discarded():
    state = make_state([Rect(0, 0, 10, 10), Rect(7, 0, 10, 10)], (20, 10))
    walls = build_walls(state)
    assert len(walls) == 4
    assert state.metrics["walls_discarded"] == 1
    assert state.rooms[0].walls == [] and state.rooms[1].walls == []


def test_double_width_seam_is_kept():
    state = make_state([Rect(0, 0, 10, 10), Rect(8, 0, 10, 10)], (18, 10))
    walls = build_walls(state)
    assert len(walls) == 5
    assert walls[0].box.size_x == 2


@pytest.mark.structure
@pytest.mark.parametrize("seed", [1, 7, 42, 1234, 99999])
def test_seams_and_door_exclusivity(seed):
    cfg = LayoutConfig(dungeon_size=(90, 60), size_constrain=8, endless_divisions=True)
    state = _walled(cfg, seed)
    ww = cfg.wall_width
    for wall in state.walls:
        assert contains(cfg.bounds, wall.box.footprint())
        if wall.is_boundary:
            continue
        assert len(wall.rooms) == 2
        assert is_seam(wall.box, ww)
        if wall.door_axis is DoorAxis.NONE:
            assert wall.door is None
            continue
        door = wall.door.box
        span = door_span(wall, cfg)
        if wall.door_axis is DoorAxis.ACROSS_Z:
            assert door.size_x == cfg.door_width
            assert span.start <= door.x < span.stop
            assert door.z == wall.box.z - cfg.door_offset
        else:
            assert door.size_z == cfg.door_width
            assert span.start <= door.z < span.stop
            assert door.x == wall.box.x - cfg.door_offset
    assert [d.index for d in state.doors] == list(range(len(state.doors)))
