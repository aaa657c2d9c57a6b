"""Public API for Julia set rendering."""

from .colors import (
    DEFAULT_POLICY,
    Color,
    ColorPolicy,
    color_for_escape,
    color_for_in_set,
)
from .coordinates import PlaneWindow, RasterDimensions, map_x, map_y, pixel_to_complex
from .engine import RenderParameters, WorkUnit, fill_region, partition_columns, render
from .errors import BufferAllocationError, FillError, WorkerStartError
from .escape import DEFAULT_ITERATIONS, ESCAPE_RADIUS, IN_SET, EscapeResult, escape_stages, is_in_set

__all__ = [
    "BufferAllocationError",
    "Color",
    "ColorPolicy",
    "DEFAULT_ITERATIONS",
    "DEFAULT_POLICY",
    "ESCAPE_RADIUS",
    "EscapeResult",
    "FillError",
    "IN_SET",
    "PlaneWindow",
    "RasterDimensions",
    "RenderParameters",
    "WorkUnit",
    "WorkerStartError",
    "color_for_escape",
    "color_for_in_set",
    "escape_stages",
    "fill_region",
    "is_in_set",
    "map_x",
    "map_y",
    "partition_columns",
    "pixel_to_complex",
    "render",
]
