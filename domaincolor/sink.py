"""Persisting rendered pixel grids with Pillow."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image

from .errors import ConfigurationError, ImageWriteError

LOSSLESS_FORMATS = ("png", "bmp", "tiff", "tif", "ppm")


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_format(output_path: Path, image_format: Optional[str]) -> str:
    fmt = (image_format or output_path.suffix or "png").lower().lstrip(".")
    if fmt not in LOSSLESS_FORMATS:
        raise ConfigurationError(
            f"Unsupported image format '{fmt}'. Lossless choices: {', '.join(LOSSLESS_FORMATS)}."
        )
    return fmt


def write_image(
    pixels: np.ndarray,
    output_path: Union[str, os.PathLike],
    image_format: Optional[str] = None,
) -> Path:
    """Encode an ``(height, width, 3)`` uint8 grid and write it to ``output_path``.

    The image is written to a temporary file next to the destination and moved
    into place once complete, so a failed write leaves nothing behind.
    """

    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.dtype != np.uint8:
        raise ConfigurationError(f"Expected a (height, width, 3) uint8 grid, got {pixels.shape} {pixels.dtype}.")

    output_path = Path(output_path).expanduser()
    fmt = resolve_format(output_path, image_format)
    image = PIL.Image.fromarray(pixels)

    tmp_name = None
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{output_path.name}.", dir=output_path.parent)
        with os.fdopen(fd, "wb") as handle:
            image.save(handle, format=_pil_format_name(fmt))
        # mkstemp creates the file 0600; give it the mode a plain open() would.
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, output_path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ImageWriteError(f"Could not write image to {output_path}: {exc}") from exc

    return output_path
