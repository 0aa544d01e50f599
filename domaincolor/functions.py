"""Ways of specifying the complex function to visualise."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from numbers import Integral
from typing import Callable, Sequence, Union

import numpy as np

from .errors import ConfigurationError

ComplexMap = Callable[[complex], complex]


@dataclass(frozen=True)
class Coefficients:
    """Polynomial ``sum(c[i] * z**i)``, coefficients in ascending power."""

    values: tuple[complex, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _as_complex_tuple(self.values, "coefficient"))


@dataclass(frozen=True)
class Roots:
    """Polynomial ``prod(z - r)`` over the given roots."""

    values: tuple[complex, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _as_complex_tuple(self.values, "root"))


@dataclass(frozen=True)
class RootsOfUnity:
    """``z**n - 1``."""

    n: int

    def __post_init__(self) -> None:
        if isinstance(self.n, bool) or not isinstance(self.n, Integral) or self.n < 0:
            raise ConfigurationError(f"RootsOfUnity expects a non-negative integer, got {self.n!r}.")


@dataclass(frozen=True)
class Arbitrary:
    """Any caller-supplied complex map.

    The callable is applied one point at a time, so functions written against
    :mod:`cmath` or with per-point branches work unchanged. With
    ``vectorized=True`` it is called once with the whole array of points.
    """

    fn: ComplexMap
    vectorized: bool = False

    def __post_init__(self) -> None:
        if not callable(self.fn):
            raise ConfigurationError(f"Arbitrary expects a callable, got {type(self.fn).__name__}.")


ComplexFunctionSpec = Union[Coefficients, Roots, RootsOfUnity, Arbitrary]


def _as_complex_tuple(values: Sequence[complex], label: str) -> tuple[complex, ...]:
    try:
        return tuple(complex(value) for value in values)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Every {label} must be a complex number: {exc}") from exc


def pointwise(fn: Callable, otype=np.complex128) -> Callable[[np.ndarray], np.ndarray]:
    """Wrap a function of one point so it accepts arrays, returning ``otype`` values."""

    return np.vectorize(fn, otypes=[otype])


def _from_polar(r: np.ndarray, theta: np.ndarray) -> np.ndarray:
    out = np.empty(np.shape(r), dtype=np.complex128)
    out.real = r * np.cos(theta)
    out.imag = r * np.sin(theta)
    return out


def _eval_coefficients(values: tuple[complex, ...], z: np.ndarray) -> np.ndarray:
    total = np.zeros_like(z)
    power = np.ones_like(z)
    for coefficient in values:
        total = total + coefficient * power
        power = power * z
    return total


def _eval_roots(values: tuple[complex, ...], z: np.ndarray) -> np.ndarray:
    product = np.ones_like(z)
    for root in values:
        product = product * (z - root)
    return product


def _eval_roots_of_unity(n: int, z: np.ndarray) -> np.ndarray:
    # Real-exponent power through the polar form, so 0**n is well defined.
    exponent = np.float64(n)
    return _from_polar(np.power(np.abs(z), exponent), np.angle(z) * exponent) - 1.0


def eval_at(spec: ComplexFunctionSpec, z):
    """Evaluate ``spec`` at ``z`` (a complex scalar or array of them).

    Scalars come back as ``numpy.complex128``, arrays keep their shape.
    Coefficients and roots are consumed in the order given.
    """

    z = np.asarray(z, dtype=np.complex128)

    with np.errstate(all="ignore"):
        if isinstance(spec, Coefficients):
            result = _eval_coefficients(spec.values, z)
        elif isinstance(spec, Roots):
            result = _eval_roots(spec.values, z)
        elif isinstance(spec, RootsOfUnity):
            result = _eval_roots_of_unity(spec.n, z)
        elif isinstance(spec, Arbitrary):
            fn = spec.fn if spec.vectorized else pointwise(spec.fn)
            result = np.asarray(fn(z), dtype=np.complex128)
            if result.shape != z.shape:
                result = np.broadcast_to(result, z.shape).copy()
        else:
            raise TypeError(f"Cannot evaluate {type(spec).__name__}; expected one of Coefficients, Roots, RootsOfUnity or Arbitrary.")

    return result[()]


def as_transform(
    function: Union[ComplexFunctionSpec, ComplexMap],
    vectorized: bool = False,
) -> Callable[[np.ndarray], np.ndarray]:
    """Turn a function spec or a plain callable into a map over arrays of points.

    Plain callables are applied one point at a time unless ``vectorized`` is set.
    """

    if isinstance(function, (Coefficients, Roots, RootsOfUnity, Arbitrary)):
        return partial(eval_at, function)
    if callable(function):
        return function if vectorized else pointwise(function)
    raise ConfigurationError(f"Expected a complex function spec or callable, got {type(function).__name__}.")
