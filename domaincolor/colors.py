"""Hue/saturation/lightness to 8-bit RGB conversion."""

from __future__ import annotations

import numpy as np

MAX_FRACTION = 0.999

# Order in which (c0 + m, c1 + m, m) land in the R, G and B channels, per hextant.
_HEXTANT_ORDER = (
    (2, 1, 0),
    (1, 2, 0),
    (0, 2, 1),
    (0, 1, 2),
    (1, 0, 2),
    (2, 0, 1),
)


def hsl_to_rgb_array(h, s, lum) -> np.ndarray:
    """Convert HSL values to RGB bytes.

    ``h`` is a hue in ``[0, 6)`` (other values are reduced modulo 6), ``s`` a
    saturation in ``[0, 1]`` and ``lum`` a lightness. Inputs broadcast against each
    other; the result has their common shape plus a trailing axis of 3 ``uint8``
    channels.
    """

    h, s, lum = np.broadcast_arrays(
        np.asarray(h, dtype=np.float64),
        np.asarray(s, dtype=np.float64),
        np.asarray(lum, dtype=np.float64),
    )

    with np.errstate(invalid="ignore", over="ignore"):
        lum = np.minimum(lum, MAX_FRACTION)
        c0 = (1.0 - np.abs(2.0 * lum - 1.0)) * s
        m = lum - c0 / 2.0
        c1 = c0 * np.abs(np.mod(h, 2.0) - 1.0)
        components = (c0 + m, c1 + m, m)
        hextant = np.mod(np.floor(h), 6.0)

    conditions = [hextant == index for index in range(len(_HEXTANT_ORDER))]
    channels = []
    for channel in range(3):
        choices = [components[order[channel]] for order in _HEXTANT_ORDER]
        channels.append(np.select(conditions, choices, default=0.0))

    values = np.stack(channels, axis=-1)
    values = np.nan_to_num(values, nan=0.0, posinf=MAX_FRACTION, neginf=0.0)
    values = np.clip(values, 0.0, MAX_FRACTION)
    return (256.0 * values).astype(np.uint8)


def hsl_to_rgb(h: float, s: float, lum: float) -> tuple[int, int, int]:
    """Convert a single HSL triple to an ``(R, G, B)`` tuple of ints."""

    r, g, b = hsl_to_rgb_array(h, s, lum)
    return int(r), int(g), int(b)
