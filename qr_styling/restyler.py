# -*- coding: utf-8 -*-
"""
Module Restyler

Redraws every dark module of a QR raster with a selected shape (dots,
rounded squares...). Pixels inside the shape keep their source color, so a
gradient applied earlier survives restyling; the rest of the module box is
reset to the background color.

The module grid comes from a BitMatrix when one is available. Otherwise it
is inferred from the raster: the top row of the top-left finder pattern is a
solid run of 7 modules, which gives the module pitch.

Functions:
    shape_mask: Boolean pixel mask of one module for a shape
    infer_matrix: Recover the module grid from a raster
    restyle_modules: Restyling stage entry point
"""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from .errors import StageFailure
from .functional_areas import FINDER_SIZE, build_finder_mask
from .gradient import dark_pixel_mask
from .models import BitMatrix, DEFAULT_QUIET_ZONE, ModuleShape, StyleSpec
from .raster import RasterImage

logger = logging.getLogger(__name__)

# Corner radius ratios for the shapes that do not use StyleSpec.corner_radius
EXTRA_ROUNDED_RATIO = 0.5
CLASSY_RATIO = 0.15


def _corner_ratio(shape: ModuleShape, corner_radius: float) -> float:
    if shape is ModuleShape.EXTRA_ROUNDED:
        return EXTRA_ROUNDED_RATIO
    if shape is ModuleShape.CLASSY:
        return CLASSY_RATIO
    return corner_radius


def shape_mask(shape: ModuleShape, module_size: int, corner_radius: float = 0.3) -> np.ndarray:
    """
    Compute which pixels of a module box belong to the shape.

    Pixels are tested at their centers. 'dots' keeps the inscribed circle;
    the rounded family keeps the box minus the corner areas lying outside a
    rounding circle of radius ``ratio * module_size`` tucked into each corner.

    Args:
        shape (ModuleShape): Module shape
        module_size (int): Module edge in pixels
        corner_radius (float): Ratio for 'rounded' and 'classy-rounded'

    Returns:
        np.ndarray: (module_size, module_size) bool array

    Example:
        >>> shape_mask(ModuleShape.DOTS, 4).astype(int)
        array([[0, 1, 1, 0],
               [1, 1, 1, 1],
               [1, 1, 1, 1],
               [0, 1, 1, 0]])
    """
    s = module_size
    if shape is ModuleShape.SQUARE:
        return np.ones((s, s), dtype=bool)

    centers = np.arange(s, dtype=np.float64) + 0.5
    xs, ys = np.meshgrid(centers, centers)

    if shape is ModuleShape.DOTS:
        half = s / 2.0
        return (xs - half) ** 2 + (ys - half) ** 2 <= half ** 2

    radius = _corner_ratio(shape, corner_radius) * s
    # Distance past the rounding circle center, per axis; zero outside corner areas
    dx = np.maximum(np.maximum(radius - xs, xs - (s - radius)), 0.0)
    dy = np.maximum(np.maximum(radius - ys, ys - (s - radius)), 0.0)
    return dx ** 2 + dy ** 2 <= radius ** 2


def _measure_pitch(dark: np.ndarray, top: int, left: int) -> float:
    run = 0
    row = dark[top]
    while left + run < row.shape[0] and row[left + run]:
        run += 1
    return run / float(FINDER_SIZE)


def _infer_geometry(
    raster: RasterImage,
    module_count: Optional[int] = None
) -> Tuple[BitMatrix, int, int, int]:
    dark = dark_pixel_mask(raster.pixels)
    rows = np.flatnonzero(dark.any(axis=1))
    cols = np.flatnonzero(dark.any(axis=0))
    if rows.size == 0:
        raise StageFailure("No dark modules found in raster", stage='restyle')

    top, bottom = int(rows[0]), int(rows[-1])
    left, right = int(cols[0]), int(cols[-1])
    extent = max(bottom - top, right - left) + 1

    if module_count:
        pitch = extent / float(module_count)
    else:
        pitch = _measure_pitch(dark, top, left)
        if pitch <= 0:
            raise StageFailure("Could not measure the finder pattern", stage='restyle')
        module_count = int(round(extent / pitch))
        if module_count % 2 == 0:
            # Sizes are always odd; take the neighbour closest to the measured extent
            below, above = module_count - 1, module_count + 1
            module_count = below if abs(extent / below - pitch) <= abs(extent / above - pitch) else above

    module_size = int(round(pitch))
    if module_size < 1 or left + module_count * module_size > raster.width \
            or top + module_count * module_size > raster.height:
        raise StageFailure(
            f"Inferred grid ({module_count} modules at {pitch:.2f}px) does not fit the raster",
            stage='restyle',
        )

    # Sample each module at its center
    centers = np.arange(module_count) * module_size + module_size // 2
    grid = dark[np.ix_(top + centers, left + centers)]

    try:
        matrix = BitMatrix.from_rows(grid.tolist(), quiet_zone=int(round(left / float(module_size))))
    except ValueError as ex:
        raise StageFailure(f"Inferred module grid is invalid: {ex}", stage='restyle')

    logger.debug("Inferred %dx%d modules at %dpx from raster", module_count, module_count, module_size)
    return matrix, left, top, module_size


def infer_matrix(raster: RasterImage, module_count: Optional[int] = None) -> BitMatrix:
    """
    Recover the module grid of an unstyled QR raster.

    Args:
        raster (RasterImage): Raster with square modules on a light background
        module_count (Optional[int]): Known modules per side; measured from
            the top-left finder pattern when omitted

    Returns:
        BitMatrix: Sampled grid, quiet zone estimated from the left margin

    Raises:
        StageFailure: If no consistent grid can be found
    """
    return _infer_geometry(raster, module_count)[0]


def _matrix_geometry(raster: RasterImage, matrix: BitMatrix) -> Tuple[int, int, int]:
    total = matrix.size + 2 * matrix.quiet_zone
    if raster.width != raster.height or raster.width % total:
        raise StageFailure(
            f"Raster {raster.width}x{raster.height} does not match a {matrix.size}-module grid "
            f"with a {matrix.quiet_zone}-module quiet zone",
            stage='restyle',
        )
    module_size = raster.width // total
    origin = matrix.quiet_zone * module_size
    return origin, origin, module_size


def restyle_modules(
    raster: RasterImage,
    spec: StyleSpec,
    matrix: Optional[BitMatrix] = None,
    module_count: Optional[int] = None
) -> RasterImage:
    """
    Restyling stage: redraw each dark module with the configured shape.

    Args:
        raster (RasterImage): Input raster, left unmodified
        spec (StyleSpec): Shape, finder shape (square unless set), corner
            radius and background color
        matrix (Optional[BitMatrix]): Module grid matching the raster geometry
        module_count (Optional[int]): Modules per side, used only when no
            matrix is given

    Returns:
        RasterImage: Restyled raster of the same size

    Raises:
        StageFailure: If the grid cannot be aligned with the raster
    """
    if not spec.enabled:
        return raster

    if matrix is not None:
        x0, y0, module_size = _matrix_geometry(raster, matrix)
    else:
        matrix, x0, y0, module_size = _infer_geometry(raster, module_count)

    n = matrix.size
    dark = np.array(matrix.modules, dtype=bool)
    finder_shape = spec.finder_shape
    finders = build_finder_mask(n)

    # Pixels to reset to background, one layer per shape in use
    clear = np.zeros((n * module_size, n * module_size), dtype=bool)
    masks: Dict[ModuleShape, np.ndarray] = {}
    for shape, selected in ((spec.shape, dark & ~finders), (finder_shape, dark & finders)):
        if not selected.any():
            continue
        if shape not in masks:
            masks[shape] = shape_mask(shape, module_size, spec.corner_radius)
        clear |= np.kron(selected, ~masks[shape]).astype(bool)

    out = raster.copy()
    region = out.pixels[y0:y0 + n * module_size, x0:x0 + n * module_size]
    region[clear] = spec.background
    return out
