class ClipError(ValueError):
    """Base exception for rejected clip inputs."""


class VertexCountError(ClipError):
    """Raised when the vertex count is below 1 or exceeds the source polygon."""


class InvalidClipRegionError(ClipError):
    """Raised when a clip region has `left > right` or `top > bottom`."""


class BufferCapacityError(ClipError):
    """Raised when a scratch or output buffer cannot hold `2 * n_vertices` entries."""

    def __init__(self, buffer_name: str, capacity: int, required: int) -> None:
        self.buffer_name = buffer_name
        self.capacity = capacity
        self.required = required
        super().__init__(
            f"{buffer_name} buffer holds {capacity} vertices but {required} are required."
        )


class CoordinateRangeError(ClipError):
    """Raised when a coordinate does not fit the configured signed integer width."""
