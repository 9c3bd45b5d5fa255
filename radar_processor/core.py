#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core imports for the radar frame processor.

This module provides a convenient import point for the core functionality
of the radar frame processor.
"""

# Re-export the frame processor and the types it consumes and produces
from .frame_processor import RadarFrameProcessor
from .radar_params import (
    ClusteringParams,
    RadarFrame,
    ProcessedRadarFrame,
    ClusterSummary
)
