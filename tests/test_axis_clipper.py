import random

import pytest

from modules.clipping.axis_clipper import clip_axis, trunc_div, two_axis_polygon_clip
from modules.clipping.geometry import Axis, ClipRegion, Vertex


def _vertices(*points: tuple[int, int]) -> list[Vertex]:
    return [Vertex(x, y) for x, y in points]


def _clip(polygon: list[Vertex], region: ClipRegion) -> list[Vertex]:
    """Run the unchecked two-pass clipper with buffers sized by hand."""
    scratch = [Vertex(0, 0)] * (2 * len(polygon))
    out = [Vertex(0, 0)] * max(2 * len(polygon), len(polygon) + 4)
    count = two_axis_polygon_clip(polygon, len(polygon), region, scratch, out)
    return out[:count]


SQUARE = _vertices((0, 0), (10, 0), (10, 10), (0, 10))
TRIANGLE = _vertices((0, 0), (20, 0), (10, 20))
DIAMOND = _vertices((10, 0), (20, 10), (10, 20), (0, 10))


def test_trunc_div_rounds_toward_zero():
    """Interpolation division should truncate like C integer division, not floor."""
    assert trunc_div(7, 2) == 3
    assert trunc_div(-7, 2) == -3
    assert trunc_div(7, -2) == -3
    assert trunc_div(-7, -2) == 3
    assert trunc_div(128, -23) == -5


def test_square_clipped_on_left_edge():
    """A square crossing the left bound becomes the rectangle right of x=5."""
    region = ClipRegion(left=5, right=15, top=-5, bottom=15)
    clipped = _clip(SQUARE, region)

    assert len(clipped) == 4
    assert clipped == _vertices((5, 10), (5, 0), (10, 0), (10, 10))


def test_triangle_clipped_to_pentagon():
    """A triangle wider than the region keeps its apex and gains boundary vertices."""
    region = ClipRegion(left=5, right=15, top=0, bottom=20)
    clipped = _clip(TRIANGLE, region)

    assert len(clipped) == 5
    assert clipped == _vertices((5, 10), (5, 0), (15, 0), (15, 10), (10, 20))
    assert all(5 <= v.x <= 15 for v in clipped)


def test_diamond_clipped_on_both_y_bounds():
    """The Y pass should cut both the top and bottom corners of a diamond."""
    region = ClipRegion(left=-100, right=100, top=5, bottom=15)
    clipped = _clip(DIAMOND, region)

    assert clipped == _vertices((15, 5), (20, 10), (15, 15), (5, 15), (0, 10), (5, 5))


def test_single_x_pass_reverses_traversal():
    """One pass emits the anchor first, then walks the remaining vertices backwards."""
    out = [Vertex(0, 0)] * 8
    count = clip_axis(SQUARE, 4, 5, 15, Axis.X, out)

    assert count == 4
    assert out[:count] == _vertices((5, 10), (10, 10), (10, 0), (5, 0))


def test_triangle_left_of_region_is_invisible():
    """A polygon entirely left of the region returns zero vertices."""
    region = ClipRegion(left=100, right=200, top=0, bottom=100)
    scratch = [Vertex(0, 0)] * 6
    out = [Vertex(0, 0)] * 6

    assert two_axis_polygon_clip(TRIANGLE, 3, region, scratch, out) == 0


@pytest.mark.parametrize(
    "region",
    [
        ClipRegion(left=100, right=200, top=-50, bottom=50),  # polygon is left
        ClipRegion(left=-200, right=-100, top=-50, bottom=50),  # polygon is right
        ClipRegion(left=-50, right=50, top=100, bottom=200),  # polygon is above
        ClipRegion(left=-50, right=50, top=-200, bottom=-100),  # polygon is below
    ],
)
def test_total_exclusion_on_each_side(region: ClipRegion):
    """A polygon outside any single side of the region is not visible."""
    polygon = _vertices((-10, -10), (10, -10), (10, 10), (-10, 10))
    assert len(_clip(polygon, region)) < 3


def test_fully_inside_polygon_is_unchanged():
    """Two passes reverse the traversal twice, so contained polygons come back as given."""
    region = ClipRegion(left=-100, right=100, top=-100, bottom=100)
    for polygon in (SQUARE, TRIANGLE, DIAMOND):
        assert _clip(polygon, region) == polygon


def test_polygon_touching_bounds_is_unchanged():
    """Edges lying exactly on the clip bounds are inside."""
    region = ClipRegion(left=0, right=10, top=0, bottom=10)
    assert _clip(SQUARE, region) == SQUARE


def test_shared_edge_yields_identical_boundary_vertices():
    """Adjacent polygons traverse their shared edge in opposite directions but agree exactly."""
    region = ClipRegion(left=5, right=15, top=-100, bottom=100)
    upper = _vertices((0, 1), (23, 17), (0, 30))
    lower = _vertices((0, 1), (23, 1), (23, 17))

    clipped_upper = set(_clip(upper, region))
    clipped_lower = set(_clip(lower, region))

    # 1 + 80 / 23 truncates to 4; 17 + 128 / -23 truncates to 12 (flooring would give 11).
    shared = {Vertex(5, 4), Vertex(15, 12)}
    assert shared <= clipped_upper
    assert shared <= clipped_lower


@pytest.mark.parametrize(
    ("polygon", "region"),
    [
        (SQUARE, ClipRegion(left=5, right=15, top=-5, bottom=15)),
        (TRIANGLE, ClipRegion(left=5, right=15, top=0, bottom=20)),
        (DIAMOND, ClipRegion(left=-100, right=100, top=5, bottom=15)),
        (DIAMOND, ClipRegion(left=3, right=17, top=2, bottom=18)),
    ],
)
def test_orientation_invariance(polygon: list[Vertex], region: ClipRegion):
    """Reversing the winding order yields the same set of clipped vertices."""
    reversed_polygon = [polygon[0], *reversed(polygon[1:])]

    forward = _clip(polygon, region)
    backward = _clip(reversed_polygon, region)

    assert len(forward) == len(backward)
    assert set(forward) == set(backward)


@pytest.mark.parametrize(
    ("polygon", "region"),
    [
        (SQUARE, ClipRegion(left=5, right=15, top=-5, bottom=15)),
        (TRIANGLE, ClipRegion(left=5, right=15, top=0, bottom=20)),
        (DIAMOND, ClipRegion(left=-100, right=100, top=5, bottom=15)),
    ],
)
def test_reclipping_is_idempotent(polygon: list[Vertex], region: ClipRegion):
    """Clipping an already clipped polygon against the same region changes nothing."""
    once = _clip(polygon, region)
    twice = _clip(once, region)

    assert twice == once


def test_x_pass_exit_leaves_output_untouched():
    """When the X pass removes the polygon the Y pass never writes its buffer."""
    region = ClipRegion(left=100, right=200, top=0, bottom=100)
    sentinel = Vertex(-1, -1)
    scratch = [Vertex(0, 0)] * 6
    out = [sentinel] * 6

    two_axis_polygon_clip(TRIANGLE, 3, region, scratch, out)

    assert out == [sentinel] * 6


def test_undersized_buffer_is_not_checked():
    """The fast path trusts its caller; an undersized list surfaces as IndexError."""
    region = ClipRegion(left=5, right=15, top=0, bottom=20)
    with pytest.raises(IndexError):
        two_axis_polygon_clip(TRIANGLE, 3, region, [], [])


def test_shared_edge_crossing_both_x_bounds():
    """An edge spanning the whole X interval gets the same crossings from either side."""
    region = ClipRegion(left=-50, right=50, top=-300, bottom=300)
    # Both triangles share the edge (-90, 16) <-> (171, -186) and walk it in opposite directions.
    above = _vertices((-90, 16), (171, -186), (171, 16))
    below = _vertices((-90, 16), (-90, -186), (171, -186))

    clipped_above = set(_clip(above, region))
    clipped_below = set(_clip(below, region))

    # 16 - 8080 / 261 truncates to -14; -186 + 24442 / 261 truncates to -93.
    shared = {Vertex(-50, -14), Vertex(50, -93)}
    assert shared <= clipped_above
    assert shared <= clipped_below


def test_shared_edge_crossing_both_y_bounds():
    """The Y pass interpolates a shared edge identically in both directions."""
    region = ClipRegion(left=-300, right=300, top=-50, bottom=50)
    left = _vertices((16, -90), (-186, 171), (16, 171))
    right = _vertices((16, -90), (-186, -90), (-186, 171))

    shared = {Vertex(-14, -50), Vertex(-93, 50)}
    assert shared <= set(_clip(left, region))
    assert shared <= set(_clip(right, region))


def test_triangle_can_gain_four_vertices():
    """A triangle cut by all four bounds comes back with seven vertices."""
    region = ClipRegion(left=-50, right=50, top=-40, bottom=40)
    clipped = _clip(_vertices((1, 52), (-150, 9), (130, -116)), region)

    assert clipped == _vertices(
        (-39, 40), (-50, 37), (-50, -35), (-39, -40), (50, -40), (50, -12), (10, 40)
    )


def _random_triangles(seed: int, count: int) -> list[list[Vertex]]:
    rng = random.Random(seed)
    triangles = []
    while len(triangles) < count:
        a, b, c = (Vertex(rng.randint(-200, 200), rng.randint(-200, 200)) for _ in range(3))
        # Skip collinear points.
        if (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x) != 0:
            triangles.append([a, b, c])
    return triangles


def test_random_triangles_are_orientation_invariant():
    """Reversing the winding never changes the vertex count or the clipped vertices."""
    region = ClipRegion(left=-50, right=50, top=-40, bottom=40)

    for triangle in _random_triangles(seed=7, count=500):
        reversed_triangle = [triangle[0], triangle[2], triangle[1]]
        forward_out = [Vertex(0, 0)] * 7
        backward_out = [Vertex(0, 0)] * 7

        forward = two_axis_polygon_clip(triangle, 3, region, [Vertex(0, 0)] * 6, forward_out)
        backward = two_axis_polygon_clip(
            reversed_triangle, 3, region, [Vertex(0, 0)] * 6, backward_out
        )

        assert forward == backward, triangle
        if forward >= 3:
            assert sorted(v.to_tuple() for v in forward_out[:forward]) == sorted(
                v.to_tuple() for v in backward_out[:backward]
            ), triangle


def test_random_triangles_reclip_unchanged():
    """Every visible clip result lies inside the region and survives a second clip as is."""
    region = ClipRegion(left=-50, right=50, top=-40, bottom=40)

    for triangle in _random_triangles(seed=11, count=500):
        once = _clip(triangle, region)
        if len(once) < 3:
            continue

        assert all(region.left <= v.x <= region.right for v in once), triangle
        assert all(region.top <= v.y <= region.bottom for v in once), triangle
        assert _clip(once, region) == once, triangle
