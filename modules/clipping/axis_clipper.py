"""Two-pass, two-axis convex polygon clipper.

Clips a convex polygon in either winding order to an axis-aligned rectangle by running the
same Sutherland-Hodgman reduction twice: once against the left/right bounds and once against
the top/bottom bounds. Axis alignment gives cheap visibility tests, and a boundary crossing is
interpolated from the same endpoint whichever way the edge is traversed, so polygons sharing an
edge get bit-identical boundary vertices under integer arithmetic.

Preconditions are not checked here:
    - `n_vertices >= 1` and `source` holds at least `n_vertices` entries.
    - `scratch` holds at least `2 * n_vertices` entries and `out` at least
      `max(2 * n_vertices, n_vertices + 4)`. Each pass adds at most two vertices to a
      convex polygon, so the Y pass can outgrow `2 * n_vertices` for triangles.
    - `region.left <= region.right` and `region.top <= region.bottom`.

See `modules.clipping.checked` for a validating layer over the same routine.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

from modules.clipping.geometry import Axis, ClipRegion, Vertex

MIN_VISIBLE_VERTICES = 3


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


def clip_axis(
    source: Sequence[Vertex],
    n_vertices: int,
    low: int,
    high: int,
    axis: Axis,
    out: MutableSequence[Vertex],
) -> int:
    """Clip a closed polygon against `low <= coord <= high` on one axis.

    Edges are walked from the fixed anchor `source[0]` through the vertices in reverse index
    order. Each edge emits its (possibly clamped) start point, plus a boundary point when it
    leaves the interval at its far end. Both crossings are interpolated from the unclamped
    endpoints, anchored at the endpoint beyond the bound, so an edge crossing both bounds
    yields the same vertices in either traversal direction.

    Args:
        source: Polygon vertices.
        n_vertices: Number of vertices of `source` to use.
        low: Lower bound on `axis`.
        high: Upper bound on `axis`.
        axis: Axis to clip.
        out: Destination buffer, written from index 0.

    Returns:
        Number of vertices written to `out`.
    """
    other = axis.other
    written = 0

    a1 = source[0].coord(axis)
    b1 = source[0].coord(other)

    for index in range(n_vertices - 1, -1, -1):
        end = source[index]
        a2 = end.coord(axis)
        b2 = end.coord(other)

        if a1 > a2:
            # Decreasing: the start is the high end of the edge.
            if a1 < low or a2 > high:
                a1, b1 = a2, b2
                continue

            if a1 > high:
                out[written] = Vertex.on_axis(
                    axis, high, b1 + trunc_div((b2 - b1) * (high - a1), a2 - a1)
                )
            else:
                out[written] = Vertex.on_axis(axis, a1, b1)
            written += 1

            if a2 < low:
                out[written] = Vertex.on_axis(
                    axis, low, b2 + trunc_div((b1 - b2) * (low - a2), a1 - a2)
                )
                written += 1
        else:
            if a2 < low or a1 > high:
                a1, b1 = a2, b2
                continue

            if a1 < low:
                out[written] = Vertex.on_axis(
                    axis, low, b1 + trunc_div((b2 - b1) * (low - a1), a2 - a1)
                )
            else:
                out[written] = Vertex.on_axis(axis, a1, b1)
            written += 1

            if a2 > high:
                out[written] = Vertex.on_axis(
                    axis, high, b2 + trunc_div((b1 - b2) * (high - a2), a1 - a2)
                )
                written += 1

        a1, b1 = a2, b2

    return written


def two_axis_polygon_clip(
    source: Sequence[Vertex],
    n_vertices: int,
    region: ClipRegion,
    scratch: MutableSequence[Vertex],
    out: MutableSequence[Vertex],
) -> int:
    """Clip a convex polygon to `region`, X bounds first, then Y bounds.

    The X pass writes into `scratch`; the Y pass reads it back and writes into `out`.

    Returns:
        Number of vertices in `out`. Anything below 3 means the polygon is not visible, and
        when the X pass already clips the polygon away `out` is left untouched.
    """
    count = clip_axis(source, n_vertices, *region.bounds(Axis.X), Axis.X, scratch)
    if count < MIN_VISIBLE_VERTICES:
        return count

    return clip_axis(scratch, count, *region.bounds(Axis.Y), Axis.Y, out)
