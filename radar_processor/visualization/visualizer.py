#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Visualization utilities for clustered radar frames.

This module contains functions for drawing a processed frame as a top-down
scatter plot, with returns coloured by object and cluster centroids and
velocities overlaid.
"""

import os
from typing import Optional

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from radar_processor.radar_params import ProcessedRadarFrame


def plot_processed_frame(frame: ProcessedRadarFrame, ax: Optional[Axes] = None, colormap: str = 'tab10') -> Axes:
    """
    Draw a processed frame in the x-y plane.

    Args:
        frame: Processed frame to draw.
        ax: Axes to draw into. A new figure is created if omitted.
        colormap: Name of the matplotlib colormap used for object ids.

    Returns:
        The Axes that was drawn into.
    """
    if ax is None:
        fig = Figure(figsize=(8, 8))
        ax = fig.add_subplot(111)

    ax.set_facecolor('#000040')
    ax.set_xlabel('X (m)')
    ax.set_ylabel('Y (m)')
    ax.set_title(f"Scan {frame.launched_count}: {frame.num_clusters} clusters, "
                 f"{frame.beam_return_count} returns")
    ax.grid(True, alpha=0.3)

    if frame.beam_return_count > 0:
        xyz = frame.returns['xyz']
        ax.scatter(xyz[:, 0], xyz[:, 1], c=frame.returns['object_id'], cmap=colormap,
                   s=8, alpha=0.8, label='Returns')

    if frame.num_clusters > 0:
        centroids = frame.centroids
        velocities = frame.avg_velocities
        ax.scatter(centroids[:, 0], centroids[:, 1], marker='x', c='white', s=60, label='Centroids')
        ax.quiver(centroids[:, 0], centroids[:, 1], velocities[:, 0], velocities[:, 1],
                  color='yellow', angles='xy', scale_units='xy', scale=1.0, width=0.004)
        for summary in frame.clusters:
            ax.annotate(str(summary.cluster_id), (summary.centroid[0], summary.centroid[1]),
                        color='white', fontsize=8, xytext=(4, 4), textcoords='offset points')

    ax.set_aspect('equal', adjustable='datalim')
    return ax


def save_cluster_visualization(frame: ProcessedRadarFrame, file_path: str, dpi: int = 150) -> str:
    """
    Save a PNG visualization of a processed frame.

    Args:
        frame: Processed frame to draw.
        file_path: Path where to save the image.
        dpi: Output resolution.

    Returns:
        The path of the saved file.
    """
    file_path = os.path.expanduser(file_path)
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig = Figure(figsize=(10, 10), dpi=dpi)
    fig.patch.set_facecolor('#000040')
    ax = fig.add_subplot(111)
    plot_processed_frame(frame, ax=ax)
    if frame.num_clusters > 0 or frame.beam_return_count > 0:
        ax.legend(loc='upper right')
    fig.savefig(file_path, dpi=dpi, facecolor=fig.get_facecolor())
    return file_path


def cluster_extent(frame: ProcessedRadarFrame) -> np.ndarray:
    """
    Axis-aligned size of each cluster.

    Returns:
        Array of shape (K, 3) with max minus min coordinate per cluster.
    """
    extents = np.zeros((frame.num_clusters, 3), dtype=np.float64)
    for i in range(frame.num_clusters):
        members = frame.returns['xyz'][frame.returns['object_id'] == i + 1]
        extents[i] = members.max(axis=0) - members.min(axis=0)
    return extents
