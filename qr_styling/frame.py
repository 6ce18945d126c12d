# -*- coding: utf-8 -*-
"""
Frame Compositor Module

Embeds a QR raster in a larger canvas filled with the frame color, with an
optional caption strip below it.

Canvas geometry for an input of width W and height H:

    +----------------------------+
    |          border fw         |
    |    +------------------+    |
    | fw |   input raster   | fw |    fw = 0.1 * W, halves round up
    |    +------------------+    |
    |          border fw         |
    +----------------------------+
    |    caption (60px strip)    |    only when a caption is set
    +----------------------------+

Functions:
    frame_geometry: Border width, canvas size and caption strip height
    apply_frame: Frame stage entry point
"""

import logging
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .colors import RGBA, pick_text_color
from .errors import StageFailure
from .models import FrameSpec, FrameStyle
from .raster import RasterImage

logger = logging.getLogger(__name__)

# Border is a tenth of the input width
FRAME_DIVISOR = 10
CAPTION_SPACE = 60


def frame_geometry(width: int, height: int, text: str = '') -> Tuple[int, int, int, int]:
    """
    Compute the framed canvas layout.

    Returns:
        Tuple[int, int, int, int]: (frame_width, canvas_width, canvas_height, text_space)

    Example:
        >>> frame_geometry(290, 290, 'Scan me')
        (29, 348, 408, 60)
    """
    # Half-up in integers; round() sends 2.5 to 2 but 3.5 to 4
    frame_width = (width + FRAME_DIVISOR // 2) // FRAME_DIVISOR
    text_space = CAPTION_SPACE if text else 0
    return (frame_width, width + 2 * frame_width,
            height + 2 * frame_width + text_space, text_space)


def _load_font(spec: FrameSpec):
    try:
        if spec.font_path:
            return ImageFont.truetype(spec.font_path, spec.text_size)
        return ImageFont.load_default(size=spec.text_size)
    except OSError as ex:
        raise StageFailure(f"Could not load caption font: {ex}", stage='frame')


def _draw_edge_brackets(draw: ImageDraw.ImageDraw, frame_width: int, box_w: int, box_h: int,
                        color: RGBA) -> None:
    """Corner brackets confined to the border band."""
    inset = frame_width // 4
    thickness = max(1, frame_width // 4)
    length = box_w // 4
    far_x = box_w - 1 - inset
    far_y = box_h - 1 - inset

    for (cx, cy, sx, sy) in ((inset, inset, 1, 1), (far_x, inset, -1, 1),
                             (inset, far_y, 1, -1), (far_x, far_y, -1, -1)):
        # horizontal arm, stays within the top/bottom band
        x_end = cx + sx * (length - 1)
        y_end = cy + sy * (thickness - 1)
        draw.rectangle([min(cx, x_end), min(cy, y_end), max(cx, x_end), max(cy, y_end)], fill=color)
        # vertical arm, stays within the left/right band
        x_end = cx + sx * (thickness - 1)
        y_end = cy + sy * (length - 1)
        draw.rectangle([min(cx, x_end), min(cy, y_end), max(cx, x_end), max(cy, y_end)], fill=color)


def _draw_banner(draw: ImageDraw.ImageDraw, frame_width: int, box_w: int, box_h: int,
                 canvas_h: int, color: RGBA) -> None:
    """Notched ribbon across the bottom border band and the caption strip."""
    y0 = box_h - frame_width + frame_width // 3
    y1 = canvas_h - 1
    if y1 <= y0:
        return
    notch = max(1, frame_width // 2)
    mid = (y0 + y1) // 2
    draw.polygon([(0, y0), (box_w - 1, y0), (box_w - 1 - notch, mid), (box_w - 1, y1),
                  (0, y1), (notch, mid)], fill=color)


def _circular_mask(canvas: Image.Image, diameter: int) -> Image.Image:
    pixels = np.array(canvas)
    radius = diameter / 2.0
    centers_y = np.arange(pixels.shape[0]) + 0.5
    centers_x = np.arange(pixels.shape[1]) + 0.5
    xs, ys = np.meshgrid(centers_x, centers_y)
    outside = (xs - radius) ** 2 + (ys - radius) ** 2 > radius ** 2
    pixels[..., 3][outside] = 0
    return Image.fromarray(pixels)


def apply_frame(raster: RasterImage, spec: FrameSpec) -> RasterImage:
    """
    Frame stage: border, style effects and caption.

    Styles:
        basic: border only
        circular: canvas clipped to a circle of diameter W + 2 * fw
        edge: corner brackets drawn in the border band
        banner: ribbon across the bottom band and caption strip

    Args:
        raster (RasterImage): Input raster, left unmodified
        spec (FrameSpec): Frame style, colors and caption

    Returns:
        RasterImage: (W + 2fw) x (H + 2fw + text_space) raster

    Raises:
        StageFailure: If the caption font cannot be loaded
    """
    if not spec.enabled:
        return raster

    frame_width, canvas_w, canvas_h, text_space = frame_geometry(raster.width, raster.height, spec.text)
    box_h = canvas_h - text_space
    accent = pick_text_color(spec.color)
    # Text sits on the ribbon for banners, on the frame color otherwise
    text_color = spec.text_color or accent
    if spec.style is FrameStyle.BANNER:
        text_color = spec.text_color or pick_text_color(accent)

    canvas = Image.new('RGBA', (canvas_w, canvas_h), spec.color)
    canvas.alpha_composite(raster.to_pil(), (frame_width, frame_width))
    draw = ImageDraw.Draw(canvas)

    if spec.style is FrameStyle.EDGE and frame_width > 0:
        _draw_edge_brackets(draw, frame_width, canvas_w, box_h, spec.text_color or accent)
    elif spec.style is FrameStyle.BANNER and frame_width > 0:
        _draw_banner(draw, frame_width, canvas_w, box_h, canvas_h, accent)
    elif spec.style is FrameStyle.CIRCULAR:
        canvas = _circular_mask(canvas, canvas_w)
        draw = ImageDraw.Draw(canvas)

    if spec.text:
        font = _load_font(spec)
        left, top, right, bottom = draw.textbbox((0, 0), spec.text, font=font)
        x = (canvas_w - (right - left)) // 2 - left
        y = box_h + (text_space - (bottom - top)) // 2 - top
        draw.text((x, y), spec.text, font=font, fill=text_color)
        if right - left > canvas_w:
            logger.debug("Caption %r is wider than the frame and will be clipped", spec.text)

    return RasterImage.from_pil(canvas)
