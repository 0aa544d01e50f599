import cmath
import math

import numpy as np
import PIL.Image
import pytest

from domaincolor import (
    Arbitrary,
    Coefficients,
    ConfigurationError,
    ImageDescriptor,
    ImageWriteError,
    LightnessAlgorithm,
    RootsOfUnity,
    complex_color,
    complex_spectrum,
    compute_window,
    pixel_to_complex,
    plane_coordinates,
    render,
    render_pixels,
)


def test_pixel_to_complex():
    descriptor = ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0)
    assert pixel_to_complex(descriptor, 0, 0) == -1 + 1j
    assert pixel_to_complex(descriptor, 1, 1) == 0j
    assert pixel_to_complex(descriptor, 1, 0) == 1j
    assert pixel_to_complex(descriptor, 0, 1) == -1 + 0j


def test_plane_coordinates_match_pixel_map():
    descriptor = ImageDescriptor(width=5, height=3, xres=0.25, yres=0.5)
    grid = plane_coordinates(descriptor)
    assert grid.shape == (3, 5)
    for y in range(3):
        for x in range(5):
            assert grid[y, x] == pixel_to_complex(descriptor, x, y)


def test_plane_coordinates_band():
    descriptor = ImageDescriptor(width=4, height=6, xres=1.0, yres=1.0)
    band = plane_coordinates(descriptor, slice(2, 4))
    assert np.array_equal(band, plane_coordinates(descriptor)[2:4])


def test_compute_window():
    window = compute_window(ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0))
    assert (window.x_min, window.x_max) == (-1.0, 0.0)
    assert (window.y_min, window.y_max) == (0.0, 1.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(width=0, height=2, xres=1.0, yres=1.0),
        dict(width=2, height=-1, xres=1.0, yres=1.0),
        dict(width=2.5, height=2, xres=1.0, yres=1.0),
        dict(width=2, height=2, xres=0.0, yres=1.0),
        dict(width=2, height=2, xres=1.0, yres=-0.1),
        dict(width=2, height=2, xres=float("nan"), yres=1.0),
        dict(width=2, height=2, xres=1.0, yres=float("inf")),
    ],
)
def test_descriptor_validation(kwargs):
    with pytest.raises(ConfigurationError):
        ImageDescriptor(**kwargs)


def test_identity_render_matches_direct_colouring():
    descriptor = ImageDescriptor(width=7, height=5, xres=0.4, yres=0.3)
    pixels = render_pixels(descriptor, Coefficients([0, 1]))
    assert pixels.shape == (5, 7, 3)
    assert pixels.dtype == np.uint8
    for y in range(descriptor.height):
        for x in range(descriptor.width):
            expected = complex_color(pixel_to_complex(descriptor, x, y), LightnessAlgorithm.EXP2)
            assert pixels[y, x].tolist() == expected.tolist()


def test_two_by_two_render():
    descriptor = ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0)
    pixels = render_pixels(descriptor, Coefficients([0, 1]))
    assert pixels[1, 1].tolist() == [0, 0, 0]
    assert pixels[0, 0].tolist() == complex_color(-1 + 1j).tolist()


def test_plain_callable_and_constant_function():
    descriptor = ImageDescriptor(width=3, height=2, xres=1.0, yres=1.0)
    pixels = render_pixels(descriptor, lambda z: 1.0)
    assert np.all(pixels == np.array([255, 0, 0], dtype=np.uint8))


def test_repeat_evaluated_on_function_value():
    seen = []

    def repeat(z):
        seen.append(z)
        return z.real

    descriptor = ImageDescriptor(width=3, height=2, xres=1.0, yres=1.0)
    render_pixels(descriptor, Coefficients([5]), LightnessAlgorithm.FLAT, repeat)
    assert seen == [5 + 0j] * 6


def test_scalar_functions_render_per_pixel():
    descriptor = ImageDescriptor(width=6, height=5, xres=0.5, yres=0.5)

    def fold(z):
        return z if abs(z) < 1 else 1 / z

    def rings(z):
        return math.log2(abs(z) + 1)

    for function, repeat in [(cmath.sin, None), (fold, None), (cmath.exp, rings)]:
        pixels = render_pixels(descriptor, function, "exp", repeat)
        for y in range(descriptor.height):
            for x in range(descriptor.width):
                value = function(pixel_to_complex(descriptor, x, y))
                expected = complex_color(value, "exp", repeat)
                assert pixels[y, x].tolist() == expected.tolist()


def test_vectorized_callables():
    descriptor = ImageDescriptor(width=6, height=4, xres=0.5, yres=0.5)
    fast = render_pixels(descriptor, np.sin, "modsq", np.abs, vectorized=True)
    slow = render_pixels(descriptor, Arbitrary(np.sin, vectorized=True), "modsq", abs)
    assert np.array_equal(fast, slow)


@pytest.mark.parametrize("workers", [2, 3, 8])
def test_parallel_render_is_identical(workers):
    descriptor = ImageDescriptor(width=16, height=6, xres=0.2, yres=0.2)
    serial = render_pixels(descriptor, RootsOfUnity(5), "modsq")
    parallel = render_pixels(descriptor, RootsOfUnity(5), "modsq", workers=workers)
    assert np.array_equal(serial, parallel)


def test_bad_worker_count():
    descriptor = ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0)
    with pytest.raises(ConfigurationError):
        render_pixels(descriptor, Coefficients([0, 1]), workers=0)


def test_misbehaving_function_does_not_raise():
    descriptor = ImageDescriptor(width=3, height=3, xres=1.0, yres=1.0)
    pixels = render_pixels(descriptor, lambda z: 1.0 / z, vectorized=True)
    assert pixels.shape == (3, 3, 3)


def test_render_writes_png(tmp_path):
    descriptor = ImageDescriptor(width=9, height=4, xres=0.5, yres=0.5)
    output = render(descriptor, RootsOfUnity(3), tmp_path / "unity.png", "exp", clamp_threshold=256)
    with PIL.Image.open(output) as image:
        assert image.size == (9, 4)
        assert image.mode == "RGB"
        written = np.asarray(image)
    expected = render_pixels(descriptor, RootsOfUnity(3), "exp", clamp_threshold=256)
    assert np.array_equal(written, expected)


def test_complex_spectrum(tmp_path):
    descriptor = ImageDescriptor(width=4, height=4, xres=0.5, yres=0.5)
    output = complex_spectrum(descriptor, Coefficients([0, 0, 1]), tmp_path / "square.png")
    with PIL.Image.open(output) as image:
        written = np.asarray(image)
    assert np.array_equal(written, render_pixels(descriptor, Coefficients([0, 0, 1])))


def test_render_rejects_lossy_format_before_rendering(tmp_path):
    calls = []

    def function(z):
        calls.append(z)
        return z

    descriptor = ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0)
    with pytest.raises(ConfigurationError):
        render(descriptor, function, tmp_path / "out.jpg")
    assert calls == []
    assert not (tmp_path / "out.jpg").exists()


def test_render_reports_write_failure(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")
    descriptor = ImageDescriptor(width=2, height=2, xres=1.0, yres=1.0)
    with pytest.raises(ImageWriteError):
        render(descriptor, Coefficients([0, 1]), blocker / "out.png")
