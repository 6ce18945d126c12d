# -*- coding: utf-8 -*-
"""
Styling Data Model

Option enums, the module grid and the per-stage configuration objects.
Every option object normalizes itself on construction, so an unrecognized
value raises ConfigurationError before any stage runs.

Classes:
    GradientType, ModuleShape, FrameStyle: Enumerated option sets
    BitMatrix: Square dark/light module grid plus quiet zone
    GradientSpec, StyleSpec, FrameSpec, LogoSpec: Per-stage options
    StylingOptions: Bundle of all options for one render
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .colors import RGBA, ColorLike, parse_color
from .errors import ConfigurationError


MIN_MODULE_COUNT = 21
DEFAULT_QUIET_ZONE = 4
DEFAULT_MODULE_SIZE = 10
DEFAULT_CORNER_RADIUS = 0.3
DEFAULT_LOGO_SIZE = 20
DEFAULT_LOGO_TIMEOUT = 10.0
DEFAULT_TEXT_SIZE = 16
ECC_LEVELS = ('L', 'M', 'Q', 'H')


class _OptionEnum(str, Enum):

    @classmethod
    def parse(cls, value: Any, field_name: str):
        """Accept an enum member or its string value ('Linear_Vertical' works too)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace('_', '-')
            for member in cls:
                if member.value == key:
                    return member
        allowed = ', '.join(m.value for m in cls)
        raise ConfigurationError(
            f"Unrecognized {field_name} {value!r} (expected one of: {allowed})",
            field=field_name,
        )


class GradientType(_OptionEnum):
    NONE = 'none'
    LINEAR_VERTICAL = 'linear-vertical'
    LINEAR_HORIZONTAL = 'linear-horizontal'
    RADIAL = 'radial'


class ModuleShape(_OptionEnum):
    SQUARE = 'square'
    DOTS = 'dots'
    ROUNDED = 'rounded'
    EXTRA_ROUNDED = 'extra-rounded'
    CLASSY = 'classy'
    CLASSY_ROUNDED = 'classy-rounded'


class FrameStyle(_OptionEnum):
    NONE = 'none'
    BASIC = 'basic'
    CIRCULAR = 'circular'
    EDGE = 'edge'
    BANNER = 'banner'


@dataclass(frozen=True)
class BitMatrix:
    """
    Square grid of modules (True = dark) plus the quiet zone width in modules.

    Raises:
        ValueError: If the grid is not square, or its size is even or below 21
    """
    modules: Tuple[Tuple[bool, ...], ...]
    quiet_zone: int = DEFAULT_QUIET_ZONE

    def __post_init__(self):
        rows = tuple(tuple(bool(v) for v in row) for row in self.modules)
        object.__setattr__(self, 'modules', rows)
        n = len(rows)
        if any(len(row) != n for row in rows):
            raise ValueError("Module grid must be square")
        if n < MIN_MODULE_COUNT or n % 2 == 0:
            raise ValueError(f"Module count must be odd and >= {MIN_MODULE_COUNT}, got {n}")
        if self.quiet_zone < 0:
            raise ValueError("Quiet zone cannot be negative")

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], quiet_zone: int = DEFAULT_QUIET_ZONE) -> 'BitMatrix':
        return cls(tuple(tuple(bool(v) for v in row) for row in rows), quiet_zone)

    @property
    def size(self) -> int:
        return len(self.modules)

    @property
    def version(self) -> int:
        return (self.size - 17) // 4

    @property
    def dark_count(self) -> int:
        return sum(sum(row) for row in self.modules)

    def is_dark(self, row: int, col: int) -> bool:
        return self.modules[row][col]

    def raster_size(self, module_size: int) -> int:
        """Edge length in pixels of a raster drawn at module_size px per module."""
        return (self.size + 2 * self.quiet_zone) * module_size


@dataclass
class GradientSpec:
    type: Union[GradientType, str] = GradientType.NONE
    colors: Sequence[ColorLike] = ()

    def __post_init__(self):
        self.type = GradientType.parse(self.type, 'gradient type')
        self.colors = tuple(parse_color(c) for c in (self.colors or ()))
        if self.type is not GradientType.NONE and not self.colors:
            raise ConfigurationError("Gradient needs at least one color stop", field='gradient colors')

    @property
    def enabled(self) -> bool:
        return self.type is not GradientType.NONE


@dataclass
class StyleSpec:
    shape: Union[ModuleShape, str] = ModuleShape.SQUARE
    corner_radius: float = DEFAULT_CORNER_RADIUS
    background: ColorLike = (255, 255, 255, 255)
    finder_shape: Union[ModuleShape, str] = ModuleShape.SQUARE

    def __post_init__(self):
        self.shape = ModuleShape.parse(self.shape, 'module shape')
        self.finder_shape = ModuleShape.parse(self.finder_shape, 'finder shape')
        try:
            self.corner_radius = float(self.corner_radius)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid corner radius {self.corner_radius!r}", field='corner radius')
        if not 0.0 <= self.corner_radius <= 0.5:
            raise ConfigurationError("Corner radius ratio must be within [0, 0.5]", field='corner radius')
        self.background = parse_color(self.background)

    @property
    def enabled(self) -> bool:
        # Square modules with square finders reproduce the input exactly
        return not (self.shape is ModuleShape.SQUARE and self.finder_shape is ModuleShape.SQUARE)


@dataclass
class FrameSpec:
    style: Union[FrameStyle, str] = FrameStyle.NONE
    color: ColorLike = (0, 0, 0, 255)
    text: str = ''
    text_color: Optional[ColorLike] = None
    text_size: int = DEFAULT_TEXT_SIZE
    font_path: Optional[str] = None

    def __post_init__(self):
        self.style = FrameStyle.parse(self.style, 'frame style')
        self.color = parse_color(self.color)
        # Any non-empty caption, blank or not, reserves the caption strip
        self.text = self.text or ''
        if self.text_color is not None:
            self.text_color = parse_color(self.text_color)
        try:
            self.text_size = int(self.text_size)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid text size {self.text_size!r}", field='frame text size')
        if self.text_size <= 0:
            raise ConfigurationError("Frame text size must be positive", field='frame text size')

    @property
    def enabled(self) -> bool:
        return self.style is not FrameStyle.NONE


@dataclass
class LogoSpec:
    """Logo source (URL, path, bytes or PIL image) and its size as % of the code edge."""
    source: Any
    size: float = DEFAULT_LOGO_SIZE
    timeout: float = DEFAULT_LOGO_TIMEOUT

    def __post_init__(self):
        if self.source is None or (isinstance(self.source, str) and not self.source.strip()):
            raise ConfigurationError("Logo source is empty", field='logo source')
        try:
            self.size = float(self.size)
            self.timeout = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError("Logo size and timeout must be numbers", field='logo size')
        if not 0 < self.size <= 100:
            raise ConfigurationError("Logo size must be a percentage in (0, 100]", field='logo size')
        if self.timeout <= 0:
            raise ConfigurationError("Logo timeout must be positive", field='logo timeout')


def _first(values: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in values and values[key] is not None:
            return values[key]
    return default


@dataclass
class StylingOptions:
    """
    All options for a single render.

    ``from_dict`` accepts the camelCase keys of the public API
    (``gradientType``, ``frameText``, ``logoUrl``...) as well as snake_case.
    """
    gradient: GradientSpec = field(default_factory=GradientSpec)
    style: StyleSpec = field(default_factory=StyleSpec)
    frame: FrameSpec = field(default_factory=FrameSpec)
    logo: Optional[LogoSpec] = None
    foreground: ColorLike = (0, 0, 0, 255)
    background: ColorLike = (255, 255, 255, 255)
    error_correction: str = 'M'
    margin: int = DEFAULT_QUIET_ZONE
    module_size: int = DEFAULT_MODULE_SIZE

    def __post_init__(self):
        self.foreground = parse_color(self.foreground)
        self.background = parse_color(self.background)
        ecc = str(self.error_correction or 'M').strip().upper()
        if ecc not in ECC_LEVELS:
            raise ConfigurationError(f"Unrecognized error correction level {self.error_correction!r}",
                                     field='error correction')
        self.error_correction = ecc
        try:
            self.margin = int(self.margin)
            self.module_size = int(self.module_size)
        except (TypeError, ValueError):
            raise ConfigurationError("Margin and module size must be integers", field='margin')
        if self.margin < 0 or self.module_size < 1:
            raise ConfigurationError("Margin must be >= 0 and module size >= 1", field='margin')

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> 'StylingOptions':
        """
        Parse a plain mapping of options.

        Args:
            values (Mapping[str, Any]): Option values, e.g. decoded JSON or form fields

        Returns:
            StylingOptions: Normalized options

        Raises:
            ConfigurationError: If any value is outside its allowed set

        Example:
            >>> opts = StylingOptions.from_dict({'style': 'dots', 'gradientType': 'radial',
            ...                                  'gradientColors': ['#000000', '#3a0ca3']})
            >>> opts.style.shape
            <ModuleShape.DOTS: 'dots'>
        """
        values = dict(values or {})
        background = _first(values, 'backgroundColor', 'background_color', 'background',
                            default=(255, 255, 255, 255))

        gradient = GradientSpec(
            type=_first(values, 'gradientType', 'gradient_type', default=GradientType.NONE),
            colors=_first(values, 'gradientColors', 'gradient_colors', default=()),
        )
        style = StyleSpec(
            shape=_first(values, 'style', 'shape', default=ModuleShape.SQUARE),
            corner_radius=_first(values, 'cornerRadius', 'corner_radius', default=DEFAULT_CORNER_RADIUS),
            background=background,
            finder_shape=_first(values, 'finderShape', 'finder_shape', 'cornersSquareStyle',
                                default=ModuleShape.SQUARE),
        )
        frame = FrameSpec(
            style=_first(values, 'frame', 'frame_style', default=FrameStyle.NONE),
            color=_first(values, 'frameColor', 'frame_color', default=(0, 0, 0, 255)),
            text=_first(values, 'frameText', 'frame_text', default=''),
            text_color=_first(values, 'frameTextColor', 'frame_text_color'),
            text_size=_first(values, 'frameTextSize', 'frame_text_size', default=DEFAULT_TEXT_SIZE),
            font_path=_first(values, 'frameFont', 'frame_font'),
        )

        logo = None
        logo_source = _first(values, 'logoUrl', 'logo_url', 'logo')
        if logo_source not in (None, ''):
            logo = LogoSpec(
                source=logo_source,
                size=_first(values, 'logoSize', 'logo_size', default=DEFAULT_LOGO_SIZE),
                timeout=_first(values, 'logoTimeout', 'logo_timeout', default=DEFAULT_LOGO_TIMEOUT),
            )

        return cls(
            gradient=gradient,
            style=style,
            frame=frame,
            logo=logo,
            foreground=_first(values, 'foregroundColor', 'foreground_color', 'foreground',
                              default=(0, 0, 0, 255)),
            background=background,
            error_correction=_first(values, 'errorCorrectionLevel', 'error_correction', default='M'),
            margin=_first(values, 'margin', default=DEFAULT_QUIET_ZONE),
            module_size=_first(values, 'moduleSize', 'module_size', default=DEFAULT_MODULE_SIZE),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Summary of the options, in the shape of the public API keys."""
        return {
            'style': self.style.shape.value,
            'gradientType': self.gradient.type.value,
            'frame': self.frame.style.value,
            'hasGradient': self.gradient.enabled,
            'hasFrame': self.frame.enabled,
            'hasLogo': self.logo is not None,
            'errorCorrectionLevel': self.error_correction,
            'margin': self.margin,
            'moduleSize': self.module_size,
        }
