# -*- coding: utf-8 -*-
"""
Color Helpers Module

Parsing and contrast checks for the colors accepted by the styling options.
Colors may be given as hex strings (#RGB, #RRGGBB, #RRGGBBAA), CSS color
names, or RGB/RGBA tuples.

Functions:
    parse_color: Normalize any accepted color to an RGBA tuple
    relative_luminance: WCAG relative luminance of a color
    contrast_ratio: WCAG contrast ratio between two colors
    check_contrast: Contrast report for a foreground/background pair
    pick_text_color: Black or white, whichever reads better on a background
"""

from typing import Dict, Any, Tuple, Union, Sequence
from PIL import ImageColor

from .errors import ConfigurationError


RGBA = Tuple[int, int, int, int]
ColorLike = Union[str, Sequence[int]]

# WCAG 2.x thresholds for normal text
CONTRAST_AA = 4.5
CONTRAST_AAA = 7.0


def parse_color(value: ColorLike) -> RGBA:
    """
    Convert a color value to an (R, G, B, A) tuple.

    Args:
        value (ColorLike): '#000', '#1a1a1a', '#1a1a1aff', 'white' or a 3/4 tuple

    Returns:
        RGBA: Color with an explicit alpha channel

    Raises:
        ConfigurationError: If the value cannot be interpreted as a color

    Example:
        >>> parse_color('#FF6B35')
        (255, 107, 53, 255)
    """
    if isinstance(value, str):
        try:
            rgb = ImageColor.getrgb(value.strip())
        except ValueError:
            raise ConfigurationError(f"Unrecognized color: {value!r}", field='color')
        if len(rgb) == 3:
            return (rgb[0], rgb[1], rgb[2], 255)
        return tuple(rgb)

    try:
        channels = [int(c) for c in value]
    except (TypeError, ValueError):
        raise ConfigurationError(f"Unrecognized color: {value!r}", field='color')
    if len(channels) not in (3, 4) or any(c < 0 or c > 255 for c in channels):
        raise ConfigurationError(f"Unrecognized color: {value!r}", field='color')
    if len(channels) == 3:
        channels.append(255)
    return tuple(channels)


def relative_luminance(color: ColorLike) -> float:
    """WCAG relative luminance in [0, 1]."""
    r, g, b, _ = parse_color(color)

    def _linear(channel: int) -> float:
        v = channel / 255.0
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    return 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)


def contrast_ratio(color1: ColorLike, color2: ColorLike) -> float:
    """
    Calculate the WCAG contrast ratio between two colors.

    Returns:
        float: Ratio between 1.0 (identical) and 21.0 (black on white)
    """
    lum1 = relative_luminance(color1)
    lum2 = relative_luminance(color2)
    lighter, darker = max(lum1, lum2), min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def check_contrast(foreground: ColorLike, background: ColorLike) -> Dict[str, Any]:
    """
    Build a contrast report for a foreground/background pair.

    Args:
        foreground (ColorLike): Dark module color
        background (ColorLike): Light module color

    Returns:
        Dict[str, Any]: ratio, pass_aa, pass_aaa and a recommendation string
    """
    ratio = contrast_ratio(foreground, background)
    return {
        'ratio': ratio,
        'pass_aa': ratio >= CONTRAST_AA,
        'pass_aaa': ratio >= CONTRAST_AAA,
        'recommendation': (
            'Colors have poor contrast. Consider using darker foreground or lighter background.'
            if ratio < CONTRAST_AA else 'Color contrast is good'
        ),
    }


def pick_text_color(background: ColorLike) -> RGBA:
    """Return black or white, whichever contrasts more with the background."""
    black = (0, 0, 0, 255)
    white = (255, 255, 255, 255)
    if contrast_ratio(black, background) >= contrast_ratio(white, background):
        return black
    return white
