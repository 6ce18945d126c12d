# -*- coding: utf-8 -*-
"""
Styling Pipeline Module

Runs the styling stages in order: gradient, module restyling, frame, logo.
Stages without configuration are skipped. A failing stage does not stop
the render: its input buffer is passed on unchanged and the failure is
recorded as a diagnostic event on the result. Only configuration errors
stop a render, and they do so before any stage runs.

Classes:
    DiagnosticEvent: One recorded problem
    StageResult: Outcome of a single stage
    RenderResult: Outcome of a whole render

Functions:
    run_stage: Run one stage, turning failures into pass-through results
    render_styled: Style a module grid or base raster
    render_content: Build the matrix for a payload with segno, then style it
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Union

from PIL import Image

from .colors import check_contrast
from .errors import ConfigurationError, ResourceFetchError, StageFailure
from .frame import apply_frame
from .gradient import apply_gradient
from .logo import apply_logo, fetch_logo
from .matrix_source import make_qr, matrix_from_symbol, render_base_raster
from .models import BitMatrix, StylingOptions
from .raster import RasterImage
from .restyler import restyle_modules

logger = logging.getLogger(__name__)

OptionsLike = Union[StylingOptions, Mapping[str, Any], None]


@dataclass
class DiagnosticEvent:
    stage: str
    kind: str
    message: str
    level: str = 'warning'

    def to_dict(self) -> dict:
        return {'stage': self.stage, 'kind': self.kind, 'message': self.message, 'level': self.level}


@dataclass
class StageResult:
    image: RasterImage
    ok: bool = True
    event: Optional[DiagnosticEvent] = None

    @classmethod
    def success(cls, image: RasterImage) -> 'StageResult':
        return cls(image=image)

    @classmethod
    def failure(cls, image: RasterImage, event: DiagnosticEvent) -> 'StageResult':
        return cls(image=image, ok=False, event=event)


@dataclass
class RenderResult:
    success: bool
    image: Optional[RasterImage] = None
    message: str = ''
    diagnostics: List[DiagnosticEvent] = field(default_factory=list)
    stages_applied: List[str] = field(default_factory=list)
    item_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Serializable summary, without the pixel buffer."""
        return {
            'id': self.item_id,
            'success': self.success,
            'message': self.message,
            'width': self.image.width if self.image else None,
            'height': self.image.height if self.image else None,
            'stagesApplied': list(self.stages_applied),
            'diagnostics': [e.to_dict() for e in self.diagnostics],
        }


def run_stage(name: str, func: Callable[..., RasterImage], raster: RasterImage,
              *args, **kwargs) -> StageResult:
    """
    Run one stage over a raster.

    Any exception raised by the stage is caught and turned into a failed
    StageResult that carries the stage's input raster and a diagnostic event.

    Args:
        name (str): Stage name used in diagnostics
        func (Callable): Stage function, called as func(raster, *args, **kwargs)
        raster (RasterImage): Stage input

    Returns:
        StageResult: Output raster, or the input raster plus a diagnostic
    """
    try:
        return StageResult.success(func(raster, *args, **kwargs))
    except ResourceFetchError as ex:
        event = DiagnosticEvent(stage=name, kind='resource_fetch_error', message=str(ex))
    except StageFailure as ex:
        event = DiagnosticEvent(stage=name, kind='stage_failure', message=str(ex))
    except Exception as ex:
        event = DiagnosticEvent(stage=name, kind='stage_failure', message=f"{type(ex).__name__}: {ex}")

    logger.warning("Stage %s failed, keeping its input: %s", name, event.message)
    return StageResult.failure(raster, event)


def _parse_options(options: OptionsLike) -> StylingOptions:
    if isinstance(options, StylingOptions):
        return options
    return StylingOptions.from_dict(options)


def _config_failure(ex: ConfigurationError, item_id: Optional[str]) -> RenderResult:
    logger.error("Invalid styling options for %s: %s", item_id or 'item', ex)
    return RenderResult(
        success=False,
        message=f"Configuration error: {ex}",
        diagnostics=[DiagnosticEvent(stage='config', kind='configuration_error', message=str(ex), level='error')],
        item_id=item_id,
    )


def render_styled(
    matrix: Optional[BitMatrix] = None,
    options: OptionsLike = None,
    base: Optional[RasterImage] = None,
    module_count: Optional[int] = None,
    item_id: Optional[str] = None,
    fetcher: Callable[[Any, float], Image.Image] = fetch_logo
) -> RenderResult:
    """
    Style a QR code.

    The starting raster is ``base`` when given, otherwise the matrix drawn at
    ``options.module_size`` pixels per module in the foreground/background
    colors. With every option left at its default the output equals that
    starting raster pixel for pixel.

    Args:
        matrix (Optional[BitMatrix]): Module grid; the restyler infers one
            from the raster when omitted
        options (OptionsLike): StylingOptions or a mapping for StylingOptions.from_dict
        base (Optional[RasterImage]): Pre-rendered raster of the matrix
        module_count (Optional[int]): Modules per side, for grid inference only
        item_id (Optional[str]): Identifier copied onto the result
        fetcher (Callable): Logo loader

    Returns:
        RenderResult: success flag, final raster and diagnostics

    Example:
        >>> symbol = make_qr("https://example.com", ecc='H')
        >>> result = render_styled(matrix_from_symbol(symbol),
        ...                        {'style': 'dots', 'gradientType': 'radial',
        ...                         'gradientColors': ['#000000', '#3a0ca3']})
        >>> result.success, result.stages_applied
        (True, ['gradient', 'restyle'])
    """
    try:
        opts = _parse_options(options)
        if base is None and matrix is None:
            raise ConfigurationError("Either a matrix or a base raster is required", field='matrix')
    except ConfigurationError as ex:
        return _config_failure(ex, item_id)

    diagnostics: List[DiagnosticEvent] = []

    if base is None:
        base = render_base_raster(matrix, opts.module_size, opts.foreground, opts.background)
        contrast = check_contrast(opts.foreground, opts.background)
        if not contrast['pass_aa']:
            diagnostics.append(DiagnosticEvent(
                stage='source', kind='low_contrast',
                message=f"Contrast ratio {contrast['ratio']:.2f} is below 4.5; the code may not scan",
            ))

    stages = []
    if opts.gradient.enabled:
        stages.append(('gradient', apply_gradient, (opts.gradient,), {}))
    if opts.style.enabled:
        stages.append(('restyle', restyle_modules, (opts.style,),
                       {'matrix': matrix, 'module_count': module_count}))
    if opts.frame.enabled:
        stages.append(('frame', apply_frame, (opts.frame,), {}))
    if opts.logo is not None:
        stages.append(('logo', apply_logo, (opts.logo,), {'fetcher': fetcher}))

    image = base
    applied = []
    for name, func, args, kwargs in stages:
        result = run_stage(name, func, image, *args, **kwargs)
        image = result.image
        if result.ok:
            applied.append(name)
        else:
            diagnostics.append(result.event)

    failed = len(stages) - len(applied)
    message = 'ok' if not failed else f"{failed} stage(s) skipped after errors"
    logger.debug("Rendered %s: stages=%s, diagnostics=%d", item_id or 'item', applied, len(diagnostics))
    return RenderResult(success=True, image=image, message=message, diagnostics=diagnostics,
                        stages_applied=applied, item_id=item_id)


def render_content(
    text: str,
    options: OptionsLike = None,
    item_id: Optional[str] = None,
    fetcher: Callable[[Any, float], Image.Image] = fetch_logo
) -> RenderResult:
    """
    Generate the matrix for ``text`` with segno and style it.

    The error correction level and quiet zone come from the options
    (``errorCorrectionLevel`` and ``margin``).

    Returns:
        RenderResult: As render_styled; generation errors yield success=False
    """
    try:
        opts = _parse_options(options)
    except ConfigurationError as ex:
        return _config_failure(ex, item_id)

    try:
        symbol = make_qr(text, ecc=opts.error_correction)
        matrix = matrix_from_symbol(symbol, quiet_zone=opts.margin)
    except Exception as ex:
        logger.error("QR generation failed for %s: %s", item_id or 'item', ex)
        return RenderResult(
            success=False,
            message=f"QR generation failed: {ex}",
            diagnostics=[DiagnosticEvent(stage='source', kind='generation_error', message=str(ex), level='error')],
            item_id=item_id,
        )

    return render_styled(matrix, opts, item_id=item_id, fetcher=fetcher)
