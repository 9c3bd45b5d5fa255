#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Filtering and per-cluster aggregation of radar returns.

These functions are the building blocks of the frame processor: they pick
the returns worth clustering, and turn a clustering result into labelled
returns and per-object centroids and velocities.
"""

from typing import List, Tuple

import numpy as np

from radar_processor.radar_params import ClusterSummary


def filter_valid_returns(returns: np.ndarray, intensity_threshold: float = 0.0) -> Tuple[np.ndarray, int]:
    """
    Keep returns whose intensity exceeds the threshold.

    Args:
        returns: Return buffer of RADAR_RETURN_DTYPE.
        intensity_threshold: Returns with intensity at or below this value are
            rejected.

    Returns:
        A tuple (valid_returns, invalid_count). ``valid_returns`` is a new
        array; the input buffer is not modified.
    """
    if len(returns) == 0:
        return returns.copy(), 0

    mask = returns['intensity'] > intensity_threshold
    valid = returns[mask]
    return valid, int(len(returns) - len(valid))


def label_clustered_returns(returns: np.ndarray, clusters: List[List[int]]) -> np.ndarray:
    """
    Gather clustered returns and stamp them with their external cluster id.

    Records are ordered cluster by cluster, in member order. Cluster ``i``
    gets external id ``i + 1`` so that 0 stays free for "no cluster".

    Args:
        returns: Valid returns that were clustered.
        clusters: Member indices per cluster.

    Returns:
        A new array holding only the clustered returns.
    """
    if not clusters:
        return returns[:0].copy()

    order = np.concatenate([np.asarray(members, dtype=np.intp) for members in clusters])
    object_ids = np.repeat(np.arange(1, len(clusters) + 1, dtype=np.int32),
                           [len(members) for members in clusters])

    labelled = returns[order]
    labelled['object_id'] = object_ids
    return labelled


def compute_cluster_means(labelled: np.ndarray, num_clusters: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute centroid and average velocity of each cluster.

    Args:
        labelled: Returns carrying external cluster ids in ``object_id``.
        num_clusters: Number of clusters K.

    Returns:
        A tuple (centroids, avg_velocities, counts) with shapes (K, 3),
        (K, 3) and (K,).
    """
    centroids = np.zeros((num_clusters, 3), dtype=np.float64)
    velocities = np.zeros((num_clusters, 3), dtype=np.float64)
    if num_clusters == 0:
        return centroids, velocities, np.zeros(0, dtype=np.int64)

    cluster_index = labelled['object_id'].astype(np.intp) - 1
    counts = np.bincount(cluster_index, minlength=num_clusters)

    np.add.at(centroids, cluster_index, labelled['xyz'].astype(np.float64))
    np.add.at(velocities, cluster_index, labelled['vel'].astype(np.float64))

    # Every cluster has at least one member, min_points >= 1
    centroids /= counts[:, np.newaxis]
    velocities /= counts[:, np.newaxis]
    return centroids, velocities, counts


def build_cluster_summaries(
    centroids: np.ndarray,
    velocities: np.ndarray,
    counts: np.ndarray
) -> List[ClusterSummary]:
    """Wrap per-cluster arrays into ClusterSummary records."""
    return [
        ClusterSummary(
            cluster_id=i + 1,
            num_points=int(counts[i]),
            centroid=centroids[i].copy(),
            avg_velocity=velocities[i].copy()
        )
        for i in range(len(counts))
    ]
