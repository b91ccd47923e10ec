from .axis_clipper import MIN_VISIBLE_VERTICES, clip_axis, two_axis_polygon_clip
from .geometry import Axis, ClipRegion, Vertex

__all__ = [
    "MIN_VISIBLE_VERTICES",
    "Axis",
    "ClipRegion",
    "Vertex",
    "clip_axis",
    "two_axis_polygon_clip",
]
