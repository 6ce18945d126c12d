# tests/test_gradient.py

import numpy as np
import pytest

from qr_styling.gradient import (
    DARK_THRESHOLD,
    apply_gradient,
    dark_pixel_mask,
    gradient_positions,
    interpolate_colors,
)
from qr_styling.models import GradientSpec, GradientType
from qr_styling.raster import RasterImage

BLACK = (0, 0, 0, 255)


def test_two_stop_endpoints_are_exact() -> None:
    stops = [(12, 200, 40), (240, 10, 99)]
    assert interpolate_colors(stops, 0.0) == (12, 200, 40)
    assert interpolate_colors(stops, 1.0) == (240, 10, 99)


def test_two_stop_interpolation_is_monotonic_per_channel() -> None:
    stops = [(12, 200, 40), (240, 10, 99)]
    samples = [interpolate_colors(stops, i / 100) for i in range(101)]
    for channel, rising in ((0, True), (1, False), (2, True)):
        values = [s[channel] for s in samples]
        pairs = zip(values, values[1:])
        if rising:
            assert all(a <= b for a, b in pairs)
        else:
            assert all(a >= b for a, b in pairs)


@pytest.mark.parametrize(
    "position, expected",
    [
        (-0.5, (255, 0, 0)),
        (0.0, (255, 0, 0)),
        (0.25, (128, 128, 0)),
        (0.5, (0, 255, 0)),
        (0.75, (0, 128, 128)),
        (1.0, (0, 0, 255)),
        (3.0, (0, 0, 255)),
    ],
)
def test_three_stop_interpolation(position: float, expected) -> None:
    stops = [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
    assert interpolate_colors(stops, position) == expected


def test_single_stop_is_flat() -> None:
    for p in (0.0, 0.3, 1.0):
        assert interpolate_colors([(10, 20, 30, 255)], p) == (10, 20, 30)


def test_vertical_gradient_on_dark_column() -> None:
    column = RasterImage.blank(1, 100, BLACK)
    out = apply_gradient(column, GradientSpec('linear-vertical', ['#000000', '#FFFFFF']))

    assert out.size == (1, 100)
    top = out.pixel(0, 0)
    bottom = out.pixel(0, 99)
    assert all(abs(a - b) <= 1 for a, b in zip(top[:3], (0, 0, 0)))
    assert all(abs(a - b) <= 1 for a, b in zip(bottom[:3], (255, 255, 255)))


def test_horizontal_gradient_runs_left_to_right() -> None:
    row = RasterImage.blank(50, 1, BLACK)
    out = apply_gradient(row, GradientSpec(GradientType.LINEAR_HORIZONTAL, [(0, 0, 0), (0, 0, 200)]))
    assert out.pixel(0, 0)[:3] == (0, 0, 0)
    assert out.pixel(49, 0)[:3] == (0, 0, 200)
    blues = [out.pixel(x, 0)[2] for x in range(50)]
    assert blues == sorted(blues)


def test_radial_gradient_center_and_corner() -> None:
    square = RasterImage.blank(11, 11, BLACK)
    out = apply_gradient(square, GradientSpec('radial', ['#102030', '#405060']))
    assert out.pixel(5, 5)[:3] == (0x10, 0x20, 0x30)
    for x, y in ((0, 0), (10, 0), (0, 10), (10, 10)):
        assert out.pixel(x, y)[:3] == (0x40, 0x50, 0x60)


def test_radial_positions_span_zero_to_one() -> None:
    positions = gradient_positions(GradientType.RADIAL, 21, 21)
    assert positions[10, 10] == 0.0
    assert positions.max() == pytest.approx(1.0)


def test_light_pixels_and_alpha_pass_through() -> None:
    pixels = np.zeros((2, 2, 4), dtype=np.uint8)
    pixels[0, 0] = (255, 255, 255, 255)
    pixels[0, 1] = (200, 200, 200, 128)
    pixels[1, 0] = (0, 0, 0, 77)
    pixels[1, 1] = (20, 20, 20, 255)
    raster = RasterImage(pixels)

    out = apply_gradient(raster, GradientSpec('linear-vertical', ['#FF0000']))

    assert out.pixel(0, 0) == (255, 255, 255, 255)
    assert out.pixel(1, 0) == (200, 200, 200, 128)
    assert out.pixel(0, 1) == (255, 0, 0, 77)
    assert out.pixel(1, 1) == (255, 0, 0, 255)


def test_gradient_does_not_mutate_input(base_raster: RasterImage) -> None:
    before = base_raster.copy()
    out = apply_gradient(base_raster, GradientSpec('radial', ['#000000', '#3a0ca3']))
    assert base_raster == before
    assert out is not base_raster
    assert out != base_raster


def test_none_gradient_returns_input(base_raster: RasterImage) -> None:
    assert apply_gradient(base_raster, GradientSpec()) is base_raster


def test_dark_threshold() -> None:
    pixels = np.array([[[DARK_THRESHOLD - 8] * 3 + [255], [DARK_THRESHOLD + 8] * 3 + [255]]], dtype=np.uint8)
    assert dark_pixel_mask(pixels).tolist() == [[True, False]]
