"""
Visualization package for processed radar frames.

This package contains modules for drawing clustered radar returns and
saving the plots to image files.
"""

from .visualizer import (
    plot_processed_frame,
    save_cluster_visualization,
    cluster_extent
)

__all__ = [
    'plot_processed_frame',
    'save_cluster_visualization',
    'cluster_extent'
]
