"""Mapping between output pixels and points of the complex plane."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Integral, Real

import numpy as np

from .errors import ConfigurationError


@dataclass(frozen=True)
class ImageDescriptor:
    """Pixel size of the output image and the plane distance covered per pixel."""

    width: int
    height: int
    xres: float
    yres: float

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}.")
        for name in ("xres", "yres"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}.")


@dataclass(frozen=True)
class PlaneWindow:
    """Region of the complex plane sampled by a render.

    ``x_min``/``y_max`` are the coordinates of the top-left pixel; x grows by
    ``x_step`` per column and y shrinks by ``y_step`` per row.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float
    x_step: float
    y_step: float
    width: int
    height: int


def _offsets(descriptor: ImageDescriptor) -> tuple[float, float]:
    xoffset = descriptor.width * descriptor.xres / 2.0
    yoffset = descriptor.height * descriptor.yres / 2.0
    return xoffset, yoffset


def compute_window(descriptor: ImageDescriptor) -> PlaneWindow:
    xoffset, yoffset = _offsets(descriptor)
    return PlaneWindow(
        x_min=-xoffset,
        x_max=(descriptor.width - 1) * descriptor.xres - xoffset,
        y_min=yoffset - (descriptor.height - 1) * descriptor.yres,
        y_max=yoffset,
        x_step=float(descriptor.xres),
        y_step=float(descriptor.yres),
        width=descriptor.width,
        height=descriptor.height,
    )


def pixel_to_complex(descriptor: ImageDescriptor, x: int, y: int) -> complex:
    """Plane coordinate of pixel column ``x``, row ``y`` (row 0 at the top)."""

    xoffset, yoffset = _offsets(descriptor)
    return complex(x * descriptor.xres - xoffset, yoffset - y * descriptor.yres)


def plane_coordinates(descriptor: ImageDescriptor, rows: slice = slice(None)) -> np.ndarray:
    """Complex coordinates of every pixel, shape ``(height, width)``.

    ``rows`` restricts the result to a band of rows.
    """

    xoffset, yoffset = _offsets(descriptor)
    xs = np.arange(descriptor.width, dtype=np.float64) * descriptor.xres - xoffset
    ys = yoffset - np.arange(descriptor.height, dtype=np.float64)[rows] * descriptor.yres

    grid = np.empty((ys.size, xs.size), dtype=np.complex128)
    grid.real = xs[np.newaxis, :]
    grid.imag = ys[:, np.newaxis]
    return grid
