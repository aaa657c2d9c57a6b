"""Pixel to complex-plane coordinate transforms."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class PlaneWindow:
    """Rectangular region of the complex plane mapped onto the raster."""

    center_x: float
    center_y: float
    plane_width: float
    plane_height: float


@dataclass(frozen=True)
class RasterDimensions:
    """Size of the pixel raster."""

    width: int
    height: int


def map_x(pixel_x, center_x: float, plane_width: float, raster_width: int):
    """Real coordinate of pixel column ``pixel_x``.

    Accepts a scalar or a numpy array of column indices.
    """

    return plane_width * ((pixel_x / raster_width) - 0.5) + center_x


def map_y(pixel_y, center_y: float, plane_height: float, raster_height: int):
    """Imaginary coordinate of pixel row ``pixel_y``.

    Row 0 is the top of the raster, so it maps to the largest imaginary value.
    """

    return plane_height * (0.5 - (pixel_y / raster_height)) + center_y


def pixel_to_complex(window: PlaneWindow, raster: RasterDimensions, pixel_x: int, pixel_y: int) -> complex:
    x = map_x(np.float64(pixel_x), window.center_x, window.plane_width, raster.width)
    y = map_y(np.float64(pixel_y), window.center_y, window.plane_height, raster.height)
    return complex(float(x), float(y))
