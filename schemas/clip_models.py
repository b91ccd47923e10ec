from pydantic import BaseModel, Field, conlist, model_validator

from modules.clipping.axis_clipper import MIN_VISIBLE_VERTICES
from modules.clipping.geometry import ClipRegion, Vertex


class VertexModel(BaseModel):
    """A polygon vertex with integer coordinates."""

    x: int = Field(..., description="Horizontal coordinate")
    y: int = Field(..., description="Vertical coordinate, growing downwards")

    def to_vertex(self) -> Vertex:
        return Vertex(self.x, self.y)

    @classmethod
    def from_vertex(cls, vertex: Vertex) -> "VertexModel":
        return cls(x=vertex.x, y=vertex.y)


class ClipRegionModel(BaseModel):
    """Axis-aligned clip rectangle.

    `top` is the smaller Y bound and `bottom` the larger one.
    """

    left: int = Field(..., description="Smallest visible X")
    right: int = Field(..., description="Largest visible X")
    top: int = Field(..., description="Smallest visible Y")
    bottom: int = Field(..., description="Largest visible Y")

    @model_validator(mode="after")
    def check_bounds_order(self) -> "ClipRegionModel":
        """Reject inverted rectangles."""
        if self.left > self.right:
            raise ValueError(f"left ({self.left}) must not exceed right ({self.right})")
        if self.top > self.bottom:
            raise ValueError(f"top ({self.top}) must not exceed bottom ({self.bottom})")
        return self

    def to_region(self) -> ClipRegion:
        return ClipRegion(left=self.left, right=self.right, top=self.top, bottom=self.bottom)


class ClipRequest(BaseModel):
    """A convex polygon, in either winding order, and the region to clip it to."""

    polygon: conlist(item_type=VertexModel, min_length=1) = Field(
        ..., description="Polygon vertices, implicitly closed"
    )
    region: ClipRegionModel = Field(..., description="The clip rectangle")

    def to_vertices(self) -> list[Vertex]:
        return [vertex.to_vertex() for vertex in self.polygon]


class ClipResponse(BaseModel):
    """The clipped polygon in traversal order."""

    vertices: list[VertexModel] = Field(default_factory=list, description="Clipped vertices")
    count: int = Field(..., ge=0, description="Number of vertices produced by the clipper")
    visible: bool = Field(..., description="Whether the clipped polygon has any visible area")

    @classmethod
    def from_vertices(cls, vertices: list[Vertex]) -> "ClipResponse":
        return cls(
            vertices=[VertexModel.from_vertex(vertex) for vertex in vertices],
            count=len(vertices),
            visible=len(vertices) >= MIN_VISIBLE_VERTICES,
        )
