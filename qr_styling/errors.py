# -*- coding: utf-8 -*-
"""
QR Styling Errors

Exception taxonomy shared by every styling stage.

Classes:
    StylingError: Base class for all styling errors
    ConfigurationError: Unrecognized option value, fails before any stage runs
    StageFailure: Recoverable failure inside a single stage
    ResourceFetchError: Logo retrieval failure or timeout
"""

from typing import Optional


class StylingError(Exception):
    """Base class for every error raised by the styling pipeline."""


class ConfigurationError(StylingError, ValueError):
    """
    Raised when an option carries a value outside its enumerated set.

    This is the only error class that aborts a render: it is raised while the
    options are parsed, before any raster is touched.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StageFailure(StylingError):
    """A stage could not complete; the pipeline keeps the stage's input buffer."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class ResourceFetchError(StageFailure):
    """The logo could not be fetched or opened as an image."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message, stage='logo')
        self.source = source
