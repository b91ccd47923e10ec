"""Validating entry points over the unchecked two-axis clipper.

The fast path in `axis_clipper` trusts its caller. The functions here enforce the same
preconditions up front, allocate correctly sized buffers, and bridge to numpy arrays and the
pydantic request/response schemas. The clipping arithmetic itself is never altered.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

import numpy as np

from config.settings import settings
from modules.clipping.axis_clipper import MIN_VISIBLE_VERTICES, two_axis_polygon_clip
from modules.clipping.errors import (
    BufferCapacityError,
    ClipError,
    CoordinateRangeError,
    InvalidClipRegionError,
    VertexCountError,
)
from modules.clipping.geometry import ClipRegion, Vertex, coordinate_dtype, coordinate_range
from schemas.clip_models import ClipRequest, ClipResponse
from utils.logger import get_logger

log = get_logger()

BUFFER_FACTOR = 2
# Each pass clips a convex polygon against two half-planes, adding at most one vertex each.
MAX_ADDED_PER_PASS = 2


def is_visible(count: int) -> bool:
    """Whether a vertex count returned by the clipper describes a visible polygon."""
    return count >= MIN_VISIBLE_VERTICES


def required_capacity(n_vertices: int) -> int:
    return BUFFER_FACTOR * n_vertices


def required_output_capacity(n_vertices: int) -> int:
    """Output size after both passes: the X pass result plus two more vertices."""
    return max(required_capacity(n_vertices), n_vertices + 2 * MAX_ADDED_PER_PASS)


def allocate_buffer(n_vertices: int) -> list[Vertex]:
    """Allocate a scratch buffer large enough for the X pass over `n_vertices`."""
    return [Vertex(0, 0)] * required_capacity(n_vertices)


def allocate_output_buffer(n_vertices: int) -> list[Vertex]:
    """Allocate an output buffer large enough for both passes over `n_vertices`."""
    return [Vertex(0, 0)] * required_output_capacity(n_vertices)


def _check_coordinate(value: int, label: str, bits: int) -> None:
    lowest, highest = coordinate_range(bits)
    if not lowest <= value <= highest:
        raise CoordinateRangeError(
            f"{label} = {value} does not fit a signed {bits}-bit coordinate "
            f"[{lowest}, {highest}]."
        )


def validate_clip_inputs(
    source: Sequence[Vertex],
    n_vertices: int,
    region: ClipRegion,
    scratch: Sequence[Vertex],
    out: Sequence[Vertex],
    coordinate_bits: int | None = None,
) -> None:
    """Raise a `ClipError` subclass if any precondition of the fast path is violated."""
    bits = settings.COORDINATE_BITS if coordinate_bits is None else coordinate_bits

    if n_vertices < 1:
        raise VertexCountError(f"A polygon needs at least one vertex, got n_vertices={n_vertices}.")
    if n_vertices > len(source):
        raise VertexCountError(
            f"n_vertices={n_vertices} exceeds the {len(source)} vertices in the source polygon."
        )

    if not region.is_normalized:
        raise InvalidClipRegionError(
            f"Clip region is inverted: left={region.left}, right={region.right}, "
            f"top={region.top}, bottom={region.bottom}."
        )

    capacities = (
        ("Scratch", scratch, required_capacity(n_vertices)),
        ("Output", out, required_output_capacity(n_vertices)),
    )
    for buffer_name, buffer, required in capacities:
        if len(buffer) < required:
            raise BufferCapacityError(buffer_name, len(buffer), required)

    for name in ("left", "right", "top", "bottom"):
        _check_coordinate(getattr(region, name), f"region.{name}", bits)
    for index in range(n_vertices):
        vertex = source[index]
        _check_coordinate(vertex.x, f"source[{index}].x", bits)
        _check_coordinate(vertex.y, f"source[{index}].y", bits)


def checked_polygon_clip(
    source: Sequence[Vertex],
    n_vertices: int,
    region: ClipRegion,
    scratch: MutableSequence[Vertex],
    out: MutableSequence[Vertex],
    coordinate_bits: int | None = None,
) -> int:
    """Validate the inputs, then run `two_axis_polygon_clip` unchanged.

    Raises:
        VertexCountError: `n_vertices` is below 1 or larger than `source`.
        InvalidClipRegionError: The region has `left > right` or `top > bottom`.
        BufferCapacityError: `scratch` holds fewer than `2 * n_vertices` entries, or `out`
            fewer than `max(2 * n_vertices, n_vertices + 4)`.
        CoordinateRangeError: A coordinate does not fit the configured width.
    """
    try:
        validate_clip_inputs(source, n_vertices, region, scratch, out, coordinate_bits)
    except ClipError as exc:
        log.warning(f"Rejected clip input: {exc}")
        raise

    count = two_axis_polygon_clip(source, n_vertices, region, scratch, out)
    log.debug(f"Clipped {n_vertices} vertices to {count} against {region}.")
    return count


def clip_polygon(
    vertices: Sequence[Vertex], region: ClipRegion, coordinate_bits: int | None = None
) -> list[Vertex]:
    """Clip a polygon without caller-managed buffers.

    Returns:
        The clipped polygon, or an empty list when nothing is visible. Below 3 vertices the
        X pass may have exited early without touching the output buffer, so a partial
        result is not meaningful.
    """
    n_vertices = len(vertices)
    scratch = allocate_buffer(n_vertices)
    out = allocate_output_buffer(n_vertices)

    count = checked_polygon_clip(vertices, n_vertices, region, scratch, out, coordinate_bits)
    if not is_visible(count):
        return []
    return out[:count]


def clip_polygon_array(
    points: np.ndarray, region: ClipRegion, coordinate_bits: int | None = None
) -> np.ndarray:
    """Clip an `(n, 2)` integer array of vertices, returning an `(m, 2)` array.

    The result uses the signed integer dtype of the configured coordinate width.
    """
    bits = settings.COORDINATE_BITS if coordinate_bits is None else coordinate_bits
    array = np.asarray(points)

    if array.ndim != 2 or array.shape[1] != 2:
        raise ClipError(f"Expected an (n, 2) vertex array, got shape {array.shape}.")
    if not np.issubdtype(array.dtype, np.integer):
        raise ClipError(f"Vertex coordinates must be integers, got dtype {array.dtype}.")

    vertices = [Vertex(int(x), int(y)) for x, y in array.tolist()]
    clipped = clip_polygon(vertices, region, coordinate_bits=bits)

    result = np.empty((len(clipped), 2), dtype=coordinate_dtype(bits))
    for row, vertex in enumerate(clipped):
        result[row] = vertex.to_tuple()
    return result


def run_clip_request(request: ClipRequest) -> ClipResponse:
    """Clip a validated schema request and wrap the result in a response model."""
    clipped = clip_polygon(request.to_vertices(), request.region.to_region())
    response = ClipResponse.from_vertices(clipped)
    if response.visible:
        log.success(f"Clipped polygon has {response.count} vertices.")
    else:
        log.info("Clipped polygon is not visible.")
    return response
