"""Lightness strategies and the polar colour scheme built on them."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional, Union

import numpy as np

from .colors import hsl_to_rgb_array
from .errors import ConfigurationError
from .functions import pointwise

CLAMPED_LIGHTNESS = 255.875 / 256.0

RepeatFunction = Callable[[complex], float]


class LightnessAlgorithm(str, Enum):
    """Mapping from squared modulus to a lightness in ``[0, 1)``."""

    EXP = "exp"
    EXP2 = "exp2"
    MODSQ = "modsq"
    FLAT = "flat"


def _exp(r2: np.ndarray) -> np.ndarray:
    return 1.0 - np.exp(-np.sqrt(r2))


def _exp2(r2: np.ndarray) -> np.ndarray:
    return 1.0 - np.exp2(-np.sqrt(r2))


def _modsq(r2: np.ndarray) -> np.ndarray:
    return r2 / (r2 + 1.0)


def _flat(r2: np.ndarray) -> np.ndarray:
    return np.full_like(r2, 0.5)


_BASE_LIGHTNESS = {
    LightnessAlgorithm.EXP: _exp,
    LightnessAlgorithm.EXP2: _exp2,
    LightnessAlgorithm.MODSQ: _modsq,
    LightnessAlgorithm.FLAT: _flat,
}


def resolve_algorithm(algorithm: Union[LightnessAlgorithm, str]) -> LightnessAlgorithm:
    """Accept an algorithm member or its name (``"exp"``, ``"exp2"``, ...)."""

    if isinstance(algorithm, LightnessAlgorithm):
        return algorithm
    try:
        return LightnessAlgorithm(str(algorithm).lower())
    except ValueError as exc:
        valid = ", ".join(member.value for member in LightnessAlgorithm)
        raise ConfigurationError(f"Unknown lightness algorithm {algorithm!r}. Valid choices: {valid}.") from exc


def squared_modulus(z) -> np.ndarray:
    z = np.asarray(z, dtype=np.complex128)
    return z.real * z.real + z.imag * z.imag


def hue(theta):
    """Map a principal argument in ``(-PI, PI]`` onto the hue range ``[0, 6]``."""

    return 3.0 + theta * 3.0 / np.pi


def lightness(
    algorithm: Union[LightnessAlgorithm, str],
    z,
    repeat: Optional[RepeatFunction] = None,
    *,
    clamp_threshold: Optional[float] = None,
    vectorized: bool = False,
) -> np.ndarray:
    """Lightness of ``z`` under ``algorithm``, optionally banded by ``repeat``.

    When ``repeat`` is given its signed fractional part is blended in at 20%,
    negative remainders being folded up by 0.2 so the overlay stays bounded.
    With ``clamp_threshold`` set, points whose squared modulus exceeds it get
    the fixed lightness :data:`CLAMPED_LIGHTNESS` before blending.

    ``repeat`` is called once per point unless ``vectorized`` is set, in which
    case it receives the whole array of points.
    """

    base = _BASE_LIGHTNESS[resolve_algorithm(algorithm)]
    z = np.asarray(z, dtype=np.complex128)
    r2 = squared_modulus(z)

    with np.errstate(all="ignore"):
        l1 = base(r2)
        if clamp_threshold is not None:
            l1 = np.where(r2 > clamp_threshold, CLAMPED_LIGHTNESS, l1)

        if repeat is None:
            return l1

        if not vectorized:
            repeat = pointwise(repeat, otype=np.float64)
        ring = np.asarray(repeat(z), dtype=np.float64)
        l2 = ring - np.trunc(ring)
        return np.where(l2 > 0, 0.8 * l1 + 0.2 * l2, 0.8 * l1 + 0.2 + 0.2 * l2)


def complex_color(
    z,
    algorithm: Union[LightnessAlgorithm, str] = LightnessAlgorithm.EXP2,
    repeat: Optional[RepeatFunction] = None,
    *,
    clamp_threshold: Optional[float] = None,
    vectorized: bool = False,
) -> np.ndarray:
    """Colour ``z``: hue from its argument, lightness from its modulus."""

    z = np.asarray(z, dtype=np.complex128)
    lum = lightness(algorithm, z, repeat, clamp_threshold=clamp_threshold, vectorized=vectorized)
    return hsl_to_rgb_array(hue(np.angle(z)), 1.0, lum)


def modulus_rings(z):
    """Rings at integer moduli."""
    return np.abs(z)


def log_modulus_rings(z):
    """Rings at every power of two of the modulus."""
    return np.log2(np.abs(z))


def phase_rays(z):
    """Twelve rays, one every 30 degrees of argument."""
    return np.angle(z) * 6.0 / np.pi


REPEAT_FUNCTIONS: dict[str, RepeatFunction] = {
    "modulus": modulus_rings,
    "log-modulus": log_modulus_rings,
    "phase": phase_rays,
}
