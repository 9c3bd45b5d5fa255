"""
Utilities package for processed radar frames.

This package contains utility modules for tabulating and saving the
results of frame processing.
"""

from .report_generator import (
    cluster_summaries_to_dataframe,
    frame_statistics_to_dataframe,
    save_cluster_report
)

__all__ = [
    'cluster_summaries_to_dataframe',
    'frame_statistics_to_dataframe',
    'save_cluster_report'
]
