# -*- coding: utf-8 -*-
"""
QR Styler - Core Module

This package renders branded QR codes from a module grid while keeping them
scannable. The styling pipeline is a chain of raster transforms, each one
skipped when it is not configured.

Modules:
    matrix_source: segno adapter producing the module grid and base raster
    gradient: Positional color gradients over dark pixels
    restyler: Module shapes (dots, rounded, classy...)
    frame: Borders, circular masks, decorations and captions
    logo: Centered logo overlay
    pipeline: Stage composition with per-stage diagnostics
    templates: Named style presets
    validator: Decodability checks (imported on demand, needs zbar)
"""

__version__ = "1.0.0"
__author__ = "QR Styler Team"

from .errors import StylingError, ConfigurationError, StageFailure, ResourceFetchError
from .models import (
    BitMatrix, GradientSpec, GradientType, StyleSpec, ModuleShape,
    FrameSpec, FrameStyle, LogoSpec, StylingOptions
)
from .raster import RasterImage
from .matrix_source import make_qr, matrix_from_symbol, render_base_raster
from .gradient import apply_gradient, interpolate_colors
from .restyler import restyle_modules, infer_matrix, shape_mask
from .frame import apply_frame
from .logo import apply_logo, fetch_logo
from .pipeline import render_styled, render_content, RenderResult, DiagnosticEvent
from .templates import apply_template, get_template, list_templates

__all__ = [
    'StylingError', 'ConfigurationError', 'StageFailure', 'ResourceFetchError',
    'BitMatrix', 'GradientSpec', 'GradientType', 'StyleSpec', 'ModuleShape',
    'FrameSpec', 'FrameStyle', 'LogoSpec', 'StylingOptions',
    'RasterImage',
    'make_qr', 'matrix_from_symbol', 'render_base_raster',
    'apply_gradient', 'interpolate_colors',
    'restyle_modules', 'infer_matrix', 'shape_mask',
    'apply_frame',
    'apply_logo', 'fetch_logo',
    'render_styled', 'render_content', 'RenderResult', 'DiagnosticEvent',
    'apply_template', 'get_template', 'list_templates',
]
