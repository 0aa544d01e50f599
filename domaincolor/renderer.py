"""Rendering complex functions onto RGB pixel grids."""

from __future__ import annotations

import os
from multiprocessing.pool import ThreadPool
from numbers import Integral
from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from .errors import ConfigurationError
from .functions import ComplexFunctionSpec, ComplexMap, as_transform
from .lightness import LightnessAlgorithm, RepeatFunction, complex_color, resolve_algorithm
from .plane import ImageDescriptor, plane_coordinates
from .sink import resolve_format, write_image


def _render_band(
    descriptor: ImageDescriptor,
    transform: Callable[[np.ndarray], np.ndarray],
    rows: slice,
    algorithm: LightnessAlgorithm,
    repeat: Optional[RepeatFunction],
    clamp_threshold: Optional[float],
    vectorized: bool,
) -> np.ndarray:
    z = plane_coordinates(descriptor, rows)
    with np.errstate(all="ignore"):
        w = np.asarray(transform(z), dtype=np.complex128)
    if w.shape != z.shape:
        w = np.broadcast_to(w, z.shape)
    return complex_color(w, algorithm, repeat, clamp_threshold=clamp_threshold, vectorized=vectorized)


def _row_bands(height: int, workers: int) -> list[slice]:
    bounds = np.linspace(0, height, min(int(workers), height) + 1).astype(int)
    return [slice(int(start), int(stop)) for start, stop in zip(bounds[:-1], bounds[1:])]


def render_pixels(
    descriptor: ImageDescriptor,
    function: Union[ComplexFunctionSpec, ComplexMap],
    lightness: Union[LightnessAlgorithm, str] = LightnessAlgorithm.EXP2,
    repeat: Optional[RepeatFunction] = None,
    *,
    clamp_threshold: Optional[float] = None,
    workers: int = 1,
    vectorized: bool = False,
) -> np.ndarray:
    """Colour every pixel of ``descriptor`` by the value of ``function`` there.

    Returns a ``(height, width, 3)`` uint8 array, row 0 at the top. ``repeat`` is
    evaluated on the function's value, not on the pixel coordinate. With
    ``workers > 1`` horizontal bands of rows are rendered concurrently, each
    into its own rows of the buffer.

    Plain callables and ``repeat`` are called once per point. Pass
    ``vectorized=True`` when both accept whole numpy arrays instead.
    """

    if isinstance(workers, bool) or not isinstance(workers, Integral) or workers < 1:
        raise ConfigurationError(f"workers must be a positive integer, got {workers!r}.")
    algorithm = resolve_algorithm(lightness)
    transform = as_transform(function, vectorized)

    pixels = np.empty((descriptor.height, descriptor.width, 3), dtype=np.uint8)

    def draw(rows: slice) -> None:
        pixels[rows] = _render_band(descriptor, transform, rows, algorithm, repeat, clamp_threshold, vectorized)

    bands = _row_bands(descriptor.height, workers)
    if len(bands) == 1:
        draw(bands[0])
    else:
        with ThreadPool(processes=len(bands)) as pool:
            pool.map(draw, bands)
    return pixels


def render(
    descriptor: ImageDescriptor,
    function: Union[ComplexFunctionSpec, ComplexMap],
    output_path: Union[str, os.PathLike],
    lightness: Union[LightnessAlgorithm, str] = LightnessAlgorithm.EXP2,
    repeat: Optional[RepeatFunction] = None,
    *,
    clamp_threshold: Optional[float] = None,
    workers: int = 1,
    vectorized: bool = False,
    image_format: Optional[str] = None,
) -> Path:
    """Render ``function`` and write the image to ``output_path``.

    Raises :class:`~domaincolor.errors.ImageWriteError` if the file cannot be written.
    """

    resolve_format(Path(output_path).expanduser(), image_format)
    pixels = render_pixels(
        descriptor,
        function,
        lightness,
        repeat,
        clamp_threshold=clamp_threshold,
        workers=workers,
        vectorized=vectorized,
    )
    return write_image(pixels, output_path, image_format)


def complex_spectrum(
    descriptor: ImageDescriptor,
    function: Union[ComplexFunctionSpec, ComplexMap],
    output_path: Union[str, os.PathLike],
) -> Path:
    """Render with the default ``Exp2`` lightness and no repeat overlay."""

    return render(descriptor, function, output_path)
