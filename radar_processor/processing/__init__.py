"""
Processing package for radar point cloud data.

This package contains modules for processing radar returns, including
spatial indexing, density-based clustering, aggregation of clusters into
objects, and conversion of beam grids into point clouds.
"""

from .spatial_index import SpatialIndex

from .dbscan import (
    DBSCAN,
    ClusterResult,
    NOISE
)

from .aggregation import (
    filter_valid_returns,
    label_clustered_returns,
    compute_cluster_means,
    build_cluster_summaries
)

from .geometry import (
    beam_angles,
    spherical_to_cartesian,
    pointcloud_from_beam_grid
)

__all__ = [
    'SpatialIndex',
    'DBSCAN',
    'ClusterResult',
    'NOISE',
    'filter_valid_returns',
    'label_clustered_returns',
    'compute_cluster_means',
    'build_cluster_summaries',
    'beam_angles',
    'spherical_to_cartesian',
    'pointcloud_from_beam_grid'
]
