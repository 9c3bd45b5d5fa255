"""
Radar frame processor package.

This package turns frames of raw radar returns into object detections by
filtering, density-based clustering and per-cluster aggregation.
"""

# Import the main class for easy access
from radar_processor.core import (
    RadarFrameProcessor,
    ClusteringParams,
    RadarFrame,
    ProcessedRadarFrame,
    ClusterSummary
)
from radar_processor.exceptions import (
    RadarProcessingError,
    ConfigurationError,
    SpatialIndexError,
    FrameProcessingError
)

# Import key submodules
from radar_processor import processing

__version__ = "1.0.0"

# Define what gets exported with "from radar_processor import *"
__all__ = [
    'RadarFrameProcessor',
    'ClusteringParams',
    'RadarFrame',
    'ProcessedRadarFrame',
    'ClusterSummary',
    'RadarProcessingError',
    'ConfigurationError',
    'SpatialIndexError',
    'FrameProcessingError'
]
