# -*- coding: utf-8 -*-
"""
QR Decodability Validator

Checks that a styled raster still scans. Decoding is attempted with zbar
(pyzbar) first and OpenCV's QRCodeDetector second. The detected corner
polygon is used for a rough quality grade.

Dependencies:
    pip install pyzbar opencv-python   (pyzbar also needs the zbar shared library)

Functions:
    verify_decodable: Decode a raster and compare it with the expected payload
    assess_quality: Grade a detected corner polygon
    decode_rate: Fraction of rasters that decode to their payloads
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import cv2
import numpy as np
from PIL import Image
from pyzbar.pyzbar import decode

from .raster import RasterImage

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass
class DecodeReport:
    readable: bool
    decoded: Optional[str] = None
    content_matches: Optional[bool] = None
    quality: str = 'unknown'
    decoder: Optional[str] = None
    message: str = ''

    @property
    def valid(self) -> bool:
        return self.readable and self.content_matches is not False


def assess_quality(polygon: Sequence[Point]) -> str:
    """
    Grade the detected code outline by how far it is from a parallelogram.

    Opposite sides of an undistorted code have equal length; the mean
    relative difference maps to excellent (<5%), good (<15%), fair (<30%)
    or poor.
    """
    if not polygon or len(polygon) != 4:
        return 'poor'

    sides = [math.dist(polygon[i], polygon[(i + 1) % 4]) for i in range(4)]
    if min(sides) == 0:
        return 'poor'
    diff_a = abs(sides[0] - sides[2]) / max(sides[0], sides[2])
    diff_b = abs(sides[1] - sides[3]) / max(sides[1], sides[3])
    distortion = (diff_a + diff_b) / 2

    if distortion < 0.05:
        return 'excellent'
    elif distortion < 0.15:
        return 'good'
    elif distortion < 0.30:
        return 'fair'
    return 'poor'


def _flatten(raster: RasterImage) -> Image.Image:
    # Transparent areas (circular frames) read as white paper
    background = Image.new('RGBA', raster.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, raster.to_pil()).convert('L')


def _decode_zbar(gray: Image.Image) -> Optional[Tuple[str, List[Point]]]:
    for symbol in decode(gray):
        if symbol.type != 'QRCODE':
            continue
        data = symbol.data.decode('utf-8', errors='ignore')
        return data, [(float(p.x), float(p.y)) for p in symbol.polygon]
    return None


def _decode_opencv(gray: Image.Image) -> Optional[Tuple[str, List[Point]]]:
    detector = cv2.QRCodeDetector()
    data, points, _ = detector.detectAndDecode(np.array(gray))
    if not data:
        return None
    polygon = [] if points is None else [(float(x), float(y)) for x, y in points.reshape(-1, 2)]
    return data, polygon


def verify_decodable(raster: RasterImage, expected: Optional[str] = None) -> DecodeReport:
    """
    Decode a raster and optionally compare it with the expected payload.

    Args:
        raster (RasterImage): Styled QR raster
        expected (Optional[str]): Payload the code should carry

    Returns:
        DecodeReport: readable flag, decoded text, match flag and quality

    Example:
        >>> report = verify_decodable(result.image, expected="https://example.com")
        >>> report.valid, report.quality
        (True, 'excellent')
    """
    gray = _flatten(raster)

    for name, decoder in (('zbar', _decode_zbar), ('opencv', _decode_opencv)):
        try:
            found = decoder(gray)
        except Exception as ex:
            logger.warning("%s decoder failed: %s", name, ex)
            continue
        if found is None:
            continue

        data, polygon = found
        report = DecodeReport(readable=True, decoded=data, quality=assess_quality(polygon), decoder=name)
        if expected is not None:
            report.content_matches = data == expected
            if not report.content_matches:
                report.message = 'Decoded content does not match expected content'
        return report

    return DecodeReport(readable=False, quality='poor', message='QR code could not be read')


def decode_rate(items: Iterable[Tuple[RasterImage, str]]) -> float:
    """Fraction of (raster, payload) pairs that decode to their payload."""
    total = 0
    ok = 0
    for raster, payload in items:
        total += 1
        if verify_decodable(raster, expected=payload).valid:
            ok += 1
    return ok / total if total else 0.0
