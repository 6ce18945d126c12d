# -*- coding: utf-8 -*-
"""
Gradient Mapper Module

Recolors the dark pixels of a raster with a positional color gradient.
Light pixels are left untouched so the quiet zone and light modules keep
their contrast.

Functions:
    interpolate_colors: Piecewise-linear color at a position in [0, 1]
    gradient_positions: Per-pixel gradient position for a gradient type
    dark_pixel_mask: Pixels whose luminance is below DARK_THRESHOLD
    apply_gradient: Gradient stage entry point
"""

from typing import Sequence, Tuple

import numpy as np

from .models import GradientSpec, GradientType
from .raster import RasterImage


# Luminance below which a pixel counts as a dark module
DARK_THRESHOLD = 128


def interpolate_colors(stops: Sequence[Tuple[int, ...]], position: float) -> Tuple[int, int, int]:
    """
    Return the RGB color at ``position`` along an ordered list of stops.

    Positions at or below 0 clamp to the first stop and positions at or above
    1 clamp to the last. In between, the position is scaled by
    ``len(stops) - 1``; the integer part selects the lower stop and the
    fractional part blends each channel towards the next one.

    Args:
        stops (Sequence[Tuple[int, ...]]): One or more RGB(A) colors
        position (float): Gradient position

    Returns:
        Tuple[int, int, int]: Interpolated RGB color

    Example:
        >>> interpolate_colors([(0, 0, 0), (255, 255, 255)], 0.5)
        (128, 128, 128)
    """
    if not stops:
        raise ValueError("At least one color stop is required")
    if position <= 0 or len(stops) == 1:
        return tuple(int(c) for c in stops[0][:3])
    if position >= 1:
        return tuple(int(c) for c in stops[-1][:3])

    scaled = position * (len(stops) - 1)
    index = int(scaled)
    fraction = scaled - index
    lower = stops[index]
    upper = stops[min(index + 1, len(stops) - 1)]

    # round-half-up, matching the vectorised path
    return tuple(int(np.floor(a + (b - a) * fraction + 0.5)) for a, b in zip(lower[:3], upper[:3]))


def _interpolate_array(stops: Sequence[Tuple[int, ...]], positions: np.ndarray) -> np.ndarray:
    """Vectorised interpolate_colors over an array of positions; returns (..., 3) uint8."""
    palette = np.array([s[:3] for s in stops], dtype=np.float64)
    if len(palette) == 1:
        return np.broadcast_to(palette[0], positions.shape + (3,)).astype(np.uint8)

    p = np.clip(positions, 0.0, 1.0)
    scaled = p * (len(palette) - 1)
    index = np.minimum(np.floor(scaled).astype(np.intp), len(palette) - 1)
    fraction = (scaled - index)[..., None]
    upper = np.minimum(index + 1, len(palette) - 1)

    lower_c = palette[index]
    upper_c = palette[upper]
    return np.floor(lower_c + (upper_c - lower_c) * fraction + 0.5).astype(np.uint8)


def gradient_positions(gradient_type: GradientType, width: int, height: int) -> np.ndarray:
    """
    Compute the gradient position of every pixel.

    Vertical runs from the first row (0) to the last row (1), horizontal from
    the first column to the last. Radial is the distance from the image
    center divided by the distance to the farthest corner.

    Returns:
        np.ndarray: Float array shaped (height, width)
    """
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)

    if gradient_type is GradientType.LINEAR_VERTICAL:
        return ys / max(height - 1, 1)
    if gradient_type is GradientType.LINEAR_HORIZONTAL:
        return xs / max(width - 1, 1)
    if gradient_type is GradientType.RADIAL:
        cx = (width - 1) / 2.0
        cy = (height - 1) / 2.0
        max_distance = np.hypot(cx, cy)
        if max_distance == 0:
            return np.zeros((height, width))
        return np.hypot(xs - cx, ys - cy) / max_distance

    raise ValueError(f"No positions for gradient type {gradient_type!r}")


def dark_pixel_mask(pixels: np.ndarray, threshold: int = DARK_THRESHOLD) -> np.ndarray:
    """Boolean (height, width) mask of pixels with ITU-R 601 luminance below threshold."""
    rgb = pixels[..., :3].astype(np.float64)
    luminance = 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]
    return luminance < threshold


def apply_gradient(raster: RasterImage, spec: GradientSpec) -> RasterImage:
    """
    Gradient stage: recolor dark pixels by position.

    Args:
        raster (RasterImage): Input raster, left unmodified
        spec (GradientSpec): Gradient type and color stops

    Returns:
        RasterImage: New raster of the same size (the input itself when the
        gradient type is 'none')
    """
    if not spec.enabled:
        return raster

    out = raster.copy()
    dark = dark_pixel_mask(out.pixels)
    if not dark.any():
        return out

    positions = gradient_positions(spec.type, out.width, out.height)
    colors = _interpolate_array(spec.colors, positions[dark])
    out.pixels[..., :3][dark] = colors
    return out
