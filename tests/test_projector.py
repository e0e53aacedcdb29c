import pytest

from glyphcast.player import Pose
from glyphcast.projector import ColumnProjector, compute_slice
from glyphcast.ray_caster import RayResult, SurfaceAxis


class ScriptedCaster:
    """Caster stub returning queued results, one per call."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    def cast_safe(self, origin, direction, max_distance):
        self.calls.append((origin, direction, max_distance))
        return self.results.pop(0)


def test_compute_slice_at_zero_distance_fills_screen():
    sl = compute_slice(0.0, 32, 1.3)
    assert sl.height == 32
    assert sl.vertical_offset == 0
    assert sl.depth == 1.0


def test_compute_slice_known_distance():
    sl = compute_slice(16.5, 32, 1.3)
    assert sl.height == pytest.approx(10.55)
    # (32 - 10.55) / 2 = 10.725
    assert sl.vertical_offset == 11
    assert sl.depth == pytest.approx(10.55 / 32)


def test_compute_slice_rounds_half_to_even():
    # (32 - (32 - 15 * 1.0)) / 2 = 7.5 -> 8 ; 6.5 -> 6
    assert compute_slice(15.0, 32, 1.0).vertical_offset == 8
    assert compute_slice(13.0, 32, 1.0).vertical_offset == 6


def test_compute_slice_far_wall_goes_negative():
    sl = compute_slice(30.0, 32, 1.3)
    assert sl.height < 0
    assert sl.vertical_offset > 16


def test_nearer_walls_are_taller():
    distances = [0.0, 0.5, 1.0, 2.0, 4.0, 8.0, 16.0, 29.0]
    slices = [compute_slice(d, 32, 1.3) for d in distances]
    heights = [s.height for s in slices]
    offsets = [s.vertical_offset for s in slices]
    assert all(a > b for a, b in zip(heights, heights[1:]))
    assert all(a <= b for a, b in zip(offsets, offsets[1:]))


def test_column_offsets_are_linear():
    proj = ColumnProjector(ScriptedCaster([]), screen_width=64, spread=0.2)
    assert proj.offset(32) == 0.0
    assert proj.offset(0) == pytest.approx(-6.4)
    assert proj.offset(63) == pytest.approx(6.2)
    steps = [proj.offset(i + 1) - proj.offset(i) for i in range(63)]
    assert all(s == pytest.approx(0.2) for s in steps)


@pytest.mark.parametrize(
    "heading,expected",
    [
        (0.0, (0.0, 10.0)),
        (90.0, (-10.0, 0.0)),
        (180.0, (0.0, -10.0)),
        (270.0, (10.0, 0.0)),
    ],
)
def test_center_column_direction_follows_heading(heading, expected):
    proj = ColumnProjector(ScriptedCaster([]), screen_width=64, ray_length=10.0)
    dx, dy = proj.direction(32, heading)
    assert dx == pytest.approx(expected[0], abs=1e-9)
    assert dy == pytest.approx(expected[1], abs=1e-9)


def test_directions_one_per_column():
    proj = ColumnProjector(ScriptedCaster([]), screen_width=8, spread=0.5)
    dirs = proj.directions(Pose(1.0, 1.0, 0.0))
    assert len(dirs) == 8
    assert dirs[0] == pytest.approx((-2.0, 10.0))


def test_project_stores_hits():
    caster = ScriptedCaster(
        [
            RayResult(2.0, True, SurfaceAxis.VERTICAL),
            RayResult(3.0, True, SurfaceAxis.HORIZONTAL),
        ]
    )
    proj = ColumnProjector(caster, screen_width=2, max_distance=30.0)
    proj.project(Pose(1.5, 1.5, 0.0))
    assert list(proj.distances) == [2.0, 3.0]
    assert proj.surface_axis(0) == SurfaceAxis.VERTICAL
    assert proj.surface_axis(1) == SurfaceAxis.HORIZONTAL
    assert all(call[0] == (1.5, 1.5) for call in caster.calls)
    assert all(call[2] == 30.0 for call in caster.calls)


def test_initial_cache_is_max_distance():
    proj = ColumnProjector(ScriptedCaster([]), screen_width=3, max_distance=12.0)
    assert list(proj.distances) == [12.0, 12.0, 12.0]
    assert proj.surface_axis(1) == SurfaceAxis.NONE


@pytest.mark.parametrize("retain,expected", [(True, 5.0), (False, 30.0)])
def test_miss_retains_or_resets_previous_distance(retain, expected):
    caster = ScriptedCaster(
        [RayResult(5.0, True, SurfaceAxis.VERTICAL), RayResult.miss(30.0)]
    )
    proj = ColumnProjector(
        caster, screen_width=1, max_distance=30.0, retain_on_miss=retain
    )
    pose = Pose(1.5, 1.5, 0.0)
    proj.project(pose)
    proj.project(pose)
    assert proj.distances[0] == expected
