#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception types raised by the radar frame processor.
"""


class RadarProcessingError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(RadarProcessingError, ValueError):
    """
    Raised when clustering parameters are invalid.

    Configuration is checked before any frame is processed, so this error
    never surfaces as a per-frame failure.
    """


class SpatialIndexError(RadarProcessingError):
    """Raised when the spatial index cannot be built or queried."""


class FrameProcessingError(RadarProcessingError):
    """
    Raised when a single frame could not be processed.

    The original cause is available through ``__cause__``.
    """
