import math

import pytest

from glyphcast.grid_map import load
from glyphcast.ray_caster import GeometryError, RayCaster, RayResult, SurfaceAxis


BOX = "\n".join(
    [
        "#####",
        "#...#",
        "#...#",
        "#...#",
        "#####",
    ]
)


@pytest.fixture
def caster():
    return RayCaster(load(BOX).colliders())


@pytest.mark.parametrize(
    "origin,direction,expected,axis",
    [
        ((1.5, 2.5), (1.0, 0.0), 2.5, SurfaceAxis.VERTICAL),
        ((1.5, 2.5), (-1.0, 0.0), 0.5, SurfaceAxis.VERTICAL),
        ((2.5, 1.5), (0.0, 1.0), 2.5, SurfaceAxis.HORIZONTAL),
        ((2.5, 3.5), (0.0, -1.0), 2.5, SurfaceAxis.HORIZONTAL),
        ((1.0, 2.5), (1.0, 0.0), 3.0, SurfaceAxis.VERTICAL),
        ((1.5, 2.5), (5.0, 0.0), 2.5, SurfaceAxis.VERTICAL),  # not normalized
    ],
)
def test_axis_aligned_hits(caster, origin, direction, expected, axis):
    result = caster.cast(origin, direction, 30.0)
    assert result.hit
    assert result.distance == pytest.approx(expected, abs=1e-3)
    assert result.surface_axis == axis


def test_oblique_hit_is_exact(caster):
    # From (1.5, 1.5) along (1, 0.5) the ray reaches x=4 at y=2.75
    result = caster.cast((1.5, 1.5), (1.0, 0.5), 30.0)
    assert result.hit
    assert result.distance == pytest.approx(2.5 * math.sqrt(1.25), abs=1e-6)
    assert result.surface_axis == SurfaceAxis.VERTICAL


def test_ray_through_wall_corner_does_not_slip_through():
    grid = load("\n".join(["....", "..#.", ".#..", "...."]))
    caster = RayCaster(grid.colliders())
    result = caster.cast((1.5, 1.5), (1.0, 1.0), 30.0)
    assert result.hit
    assert result.distance == pytest.approx(math.sqrt(0.5), abs=1e-6)


def test_ray_leaving_open_map_misses():
    caster = RayCaster(load("....\n....\n....").colliders())
    result = caster.cast((1.5, 1.5), (1.0, 0.0), 30.0)
    assert result == RayResult(30.0, False, SurfaceAxis.NONE)


def test_wall_beyond_max_distance_misses(caster):
    result = caster.cast((1.5, 2.5), (1.0, 0.0), 1.0)
    assert not result.hit
    assert result.distance == 1.0
    assert result.surface_axis == SurfaceAxis.NONE


def test_origin_inside_wall_hits_at_zero(caster):
    result = caster.cast((0.5, 0.5), (1.0, 0.0), 30.0)
    assert result.hit
    assert result.distance == 0.0


@pytest.mark.parametrize(
    "origin,direction,max_distance",
    [
        ((-1.0, 2.0), (1.0, 0.0), 30.0),
        ((10.0, 10.0), (1.0, 0.0), 30.0),
        ((2.5, 2.5), (0.0, 0.0), 30.0),
        ((2.5, 2.5), (float("nan"), 1.0), 30.0),
        ((float("inf"), 2.5), (1.0, 0.0), 30.0),
        ((2.5, 2.5), (1.0, 0.0), -1.0),
    ],
)
def test_invalid_geometry_raises(caster, origin, direction, max_distance):
    with pytest.raises(GeometryError):
        caster.cast(origin, direction, max_distance)


def test_cast_safe_reports_geometry_error_as_miss(caster):
    result = caster.cast_safe((-1.0, 2.0), (1.0, 0.0), 30.0)
    assert result == RayResult.miss(30.0)
