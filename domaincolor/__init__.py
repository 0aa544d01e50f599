"""Public API for domain coloring of complex functions."""

from .colors import hsl_to_rgb, hsl_to_rgb_array
from .errors import ConfigurationError, DomainColoringError, ImageWriteError
from .functions import (
    Arbitrary,
    Coefficients,
    ComplexFunctionSpec,
    Roots,
    RootsOfUnity,
    as_transform,
    eval_at,
    pointwise,
)
from .lightness import (
    REPEAT_FUNCTIONS,
    LightnessAlgorithm,
    complex_color,
    hue,
    lightness,
    log_modulus_rings,
    modulus_rings,
    phase_rays,
)
from .plane import ImageDescriptor, PlaneWindow, compute_window, pixel_to_complex, plane_coordinates
from .renderer import complex_spectrum, render, render_pixels
from .sink import write_image

__all__ = [
    "Arbitrary",
    "Coefficients",
    "ComplexFunctionSpec",
    "ConfigurationError",
    "DomainColoringError",
    "ImageDescriptor",
    "ImageWriteError",
    "LightnessAlgorithm",
    "PlaneWindow",
    "REPEAT_FUNCTIONS",
    "Roots",
    "RootsOfUnity",
    "as_transform",
    "complex_color",
    "complex_spectrum",
    "compute_window",
    "eval_at",
    "hsl_to_rgb",
    "hsl_to_rgb_array",
    "hue",
    "lightness",
    "log_modulus_rings",
    "modulus_rings",
    "phase_rays",
    "pixel_to_complex",
    "plane_coordinates",
    "pointwise",
    "render",
    "render_pixels",
    "write_image",
]
