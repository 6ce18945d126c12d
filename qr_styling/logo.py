# -*- coding: utf-8 -*-
"""
Logo Overlay Module

Fetches a logo and composites it at the center of the code. The overlay
hides modules, so callers should generate the matrix with a high error
correction level ('Q' or 'H') upstream; this stage does not check the
result for decodability.

Functions:
    fetch_logo: Load a logo from a URL, path, bytes or PIL image
    fit_logo: Resize a logo to fit a square box, preserving aspect ratio
    apply_logo: Logo stage entry point
"""

import logging
import os
from io import BytesIO
from typing import Any, Callable

import requests
from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import ResourceFetchError
from .models import LogoSpec, DEFAULT_LOGO_TIMEOUT
from .raster import RasterImage

logger = logging.getLogger(__name__)


def _describe(source: Any) -> str:
    if isinstance(source, (str, os.PathLike)):
        return str(source)
    return type(source).__name__


def fetch_logo(source: Any, timeout: float = DEFAULT_LOGO_TIMEOUT) -> Image.Image:
    """
    Load a logo image.

    HTTP(S) URLs are fetched with a single GET bounded by ``timeout``; there
    are no retries. Paths, raw bytes and PIL images are opened directly.

    Args:
        source (Any): URL, filesystem path, bytes or PIL image
        timeout (float): Request timeout in seconds

    Returns:
        Image.Image: RGBA logo

    Raises:
        ResourceFetchError: On network errors, HTTP errors or undecodable data
    """
    label = _describe(source)
    try:
        if isinstance(source, Image.Image):
            return source.convert('RGBA')
        if isinstance(source, (bytes, bytearray)):
            data = bytes(source)
        elif isinstance(source, str) and source.lower().startswith(('http://', 'https://')):
            resp = requests.get(source, timeout=timeout)
            resp.raise_for_status()
            data = resp.content
        else:
            with open(source, 'rb') as fh:
                data = fh.read()
        with Image.open(BytesIO(data)) as img:
            return img.convert('RGBA')
    except requests.RequestException as ex:
        raise ResourceFetchError(f"Failed to download logo from {label}: {ex}", source=label)
    except (OSError, UnidentifiedImageError, TypeError) as ex:
        raise ResourceFetchError(f"Failed to load logo from {label}: {ex}", source=label)


def fit_logo(logo: Image.Image, box: int) -> Image.Image:
    """Scale the logo to fit inside a box x box square without distortion."""
    return ImageOps.contain(logo, (box, box), method=Image.LANCZOS)


def apply_logo(
    raster: RasterImage,
    spec: LogoSpec,
    fetcher: Callable[[Any, float], Image.Image] = fetch_logo
) -> RasterImage:
    """
    Logo stage: composite the logo over the center of the code.

    The logo box is ``floor(edge * size / 100)`` pixels square, where edge is
    the shorter side of the raster. The logo is centered horizontally and on
    the top edge x edge square vertically, which is the code center both for
    a plain code and for a frame with a caption strip below it.

    For a raster taller than it is wide, this is not the raster's own
    center: the logo sits over the code, not halfway down the caption strip.
    Square rasters are unaffected.

    Args:
        raster (RasterImage): Input raster, left unmodified
        spec (LogoSpec): Logo source and size percentage
        fetcher (Callable): Loader used to obtain the logo image

    Returns:
        RasterImage: Raster of the same size with the logo composited

    Raises:
        ResourceFetchError: If the logo cannot be loaded
    """
    edge = min(raster.width, raster.height)
    box = int(edge * spec.size // 100)
    if box < 1:
        logger.debug("Logo box for %dpx edge at %s%% is empty, skipping", edge, spec.size)
        return raster

    logo = fit_logo(fetcher(spec.source, spec.timeout), box)
    x = (raster.width - logo.width) // 2
    y = (edge - logo.height) // 2

    canvas = raster.to_pil()
    canvas.alpha_composite(logo, (x, y))
    return RasterImage.from_pil(canvas)
