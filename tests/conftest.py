# tests/conftest.py

from io import BytesIO

import pytest
from PIL import Image

from qr_styling.matrix_source import make_qr, matrix_from_symbol, render_base_raster
from qr_styling.models import BitMatrix
from qr_styling.raster import RasterImage

MODULE_SIZE = 10


@pytest.fixture
def matrix() -> BitMatrix:
    # version 2 at ECC M: 25x25 modules
    return matrix_from_symbol(make_qr("https://example.com/menu", ecc='M'), quiet_zone=4)


@pytest.fixture
def base_raster(matrix: BitMatrix) -> RasterImage:
    return render_base_raster(matrix, module_size=MODULE_SIZE)


@pytest.fixture
def logo_image() -> Image.Image:
    # 2:1 red logo, handy for checking aspect-preserving fits
    return Image.new('RGBA', (40, 20), (255, 0, 0, 255))


@pytest.fixture
def logo_png(logo_image: Image.Image) -> bytes:
    buf = BytesIO()
    logo_image.save(buf, format='PNG')
    return buf.getvalue()


def dark_module_centers(matrix: BitMatrix, module_size: int = MODULE_SIZE):
    """Pixel (x, y) of the center of every dark module."""
    offset = matrix.quiet_zone * module_size
    for r, row in enumerate(matrix.modules):
        for c, is_dark in enumerate(row):
            if is_dark:
                yield (offset + c * module_size + module_size // 2,
                       offset + r * module_size + module_size // 2)


def luminance(pixel) -> float:
    r, g, b = pixel[:3]
    return 0.299 * r + 0.587 * g + 0.114 * b
