# -*- coding: utf-8 -*-
"""
Matrix Source Module

Thin adapter around the external matrix generator (segno). Encoding, error
correction and mask selection all stay inside segno; this module only turns a
symbol into a BitMatrix and draws the plain monochrome raster the styling
stages start from.

Functions:
    make_qr: Generate a QR symbol with segno
    matrix_from_symbol: Convert a segno symbol into a BitMatrix
    render_base_raster: Draw a BitMatrix as a flat two-color raster
"""

from typing import Optional, Union

import segno
from PIL import Image, ImageDraw

from .colors import ColorLike, parse_color
from .models import BitMatrix, DEFAULT_MODULE_SIZE, DEFAULT_QUIET_ZONE
from .raster import RasterImage


def make_qr(
    text: str,
    ecc: str = 'M',
    version: Optional[Union[int, str]] = None,
    mode: Optional[str] = None,
    encoding: Optional[str] = None,
    mask: Union[str, int] = 'auto',
    boost_error: bool = False
) -> segno.QRCode:
    """
    Generate a standard (non-micro) QR code symbol.

    Args:
        text (str): The data to encode
        ecc (str): Error correction level ('L', 'M', 'Q', 'H'). Use 'H' when a
            logo will be overlaid, since the overlay hides modules.
        version (Optional[Union[int, str]]): 1-40, or None/'auto' for the smallest fit
        mode (Optional[str]): 'byte', 'alphanumeric', 'numeric', 'kanji' or None (auto)
        encoding (Optional[str]): Character encoding for byte mode
        mask (Union[str, int]): 'auto' or a fixed mask pattern 0-7
        boost_error (bool): Let segno raise the ECC level if space allows

    Returns:
        segno.QRCode: Generated symbol

    Raises:
        segno.DataOverflowError: If the data does not fit the requested version

    Example:
        >>> qr = make_qr("https://example.com", ecc='H')
        >>> qr.version
        3
    """
    # Convert mask parameter: 'auto' -> None, otherwise int
    mask_arg = None if mask == 'auto' else int(mask)

    # Convert version parameter: 'auto' or None -> None, otherwise int
    ver_arg = None if (version in (None, 'auto')) else int(version)

    return segno.make(
        text,
        error=ecc,
        version=ver_arg,
        mode=mode,
        encoding=encoding,
        mask=mask_arg,
        boost_error=bool(boost_error),
        micro=False
    )


def matrix_from_symbol(symbol: segno.QRCode, quiet_zone: int = DEFAULT_QUIET_ZONE) -> BitMatrix:
    """
    Convert a segno symbol to a BitMatrix.

    segno's ``matrix`` carries no quiet zone; the quiet zone is tracked
    separately so the raster geometry can be derived from it.
    """
    return BitMatrix.from_rows(symbol.matrix, quiet_zone=quiet_zone)


def render_base_raster(
    matrix: BitMatrix,
    module_size: int = DEFAULT_MODULE_SIZE,
    dark: ColorLike = '#000000',
    light: ColorLike = '#FFFFFF'
) -> RasterImage:
    """
    Render the module grid as a flat two-color raster.

    Args:
        matrix (BitMatrix): Module grid
        module_size (int): Pixel size per module
        dark (ColorLike): Color of dark modules
        light (ColorLike): Color of light modules and the quiet zone

    Returns:
        RasterImage: Square raster of edge (size + 2 * quiet_zone) * module_size
    """
    border = matrix.quiet_zone
    img_px = matrix.raster_size(module_size)
    dark_rgba = parse_color(dark)

    img = Image.new('RGBA', (img_px, img_px), parse_color(light))
    draw = ImageDraw.Draw(img)

    for r, row in enumerate(matrix.modules):
        for c, is_dark in enumerate(row):
            if not is_dark:
                continue
            x0 = (c + border) * module_size
            y0 = (r + border) * module_size
            draw.rectangle([x0, y0, x0 + module_size - 1, y0 + module_size - 1], fill=dark_rgba)

    return RasterImage.from_pil(img)
