#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Report generator utilities for processed radar frames.

This module contains functions for tabulating cluster summaries and frame
statistics and saving them as CSV files.
"""

import logging
import os
from datetime import datetime
from typing import Iterable, Dict, List, Optional

import pandas as pd

from radar_processor.radar_params import ProcessedRadarFrame

logger = logging.getLogger(__name__)

CLUSTER_COLUMNS = [
    'launched_count', 'timestamp', 'cluster_id', 'num_points',
    'centroid_x', 'centroid_y', 'centroid_z',
    'avg_velocity_x', 'avg_velocity_y', 'avg_velocity_z'
]

FRAME_COLUMNS = [
    'launched_count', 'timestamp', 'total_returns', 'valid_returns',
    'invalid_returns', 'clustered_returns', 'noise_returns', 'num_clusters'
]


def cluster_summaries_to_dataframe(frames: Iterable[ProcessedRadarFrame]) -> pd.DataFrame:
    """
    Tabulate the cluster summaries of several frames.

    Args:
        frames: Processed frames.

    Returns:
        DataFrame with one row per cluster per frame.
    """
    rows = []
    for frame in frames:
        for summary in frame.clusters:
            rows.append({
                'launched_count': frame.launched_count,
                'timestamp': frame.timestamp,
                'cluster_id': summary.cluster_id,
                'num_points': summary.num_points,
                'centroid_x': float(summary.centroid[0]),
                'centroid_y': float(summary.centroid[1]),
                'centroid_z': float(summary.centroid[2]),
                'avg_velocity_x': float(summary.avg_velocity[0]),
                'avg_velocity_y': float(summary.avg_velocity[1]),
                'avg_velocity_z': float(summary.avg_velocity[2]),
            })
    return pd.DataFrame(rows, columns=CLUSTER_COLUMNS)


def frame_statistics_to_dataframe(frames: Iterable[ProcessedRadarFrame]) -> pd.DataFrame:
    """
    Tabulate per-frame return and cluster counts.

    Args:
        frames: Processed frames.

    Returns:
        DataFrame with one row per frame.
    """
    rows = [{
        'launched_count': frame.launched_count,
        'timestamp': frame.timestamp,
        'total_returns': frame.valid_returns + frame.invalid_returns,
        'valid_returns': frame.valid_returns,
        'invalid_returns': frame.invalid_returns,
        'clustered_returns': frame.beam_return_count,
        'noise_returns': frame.noise_returns,
        'num_clusters': frame.num_clusters,
    } for frame in frames]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def save_cluster_report(
    frames: List[ProcessedRadarFrame],
    output_dir: str,
    prefix: Optional[str] = None
) -> Dict[str, str]:
    """
    Save cluster and frame tables as CSV files.

    Args:
        frames: Processed frames to report on.
        output_dir: Directory in which to save the files. Created if missing.
        prefix: File name prefix. Defaults to a timestamp.

    Returns:
        Dictionary with the paths of the 'clusters' and 'frames' files.
    """
    output_dir = os.path.expanduser(output_dir)
    os.makedirs(output_dir, exist_ok=True)
    if prefix is None:
        prefix = datetime.now().strftime("%Y%m%d_%H%M%S")

    paths = {
        'clusters': os.path.join(output_dir, f"{prefix}_clusters.csv"),
        'frames': os.path.join(output_dir, f"{prefix}_frames.csv"),
    }
    cluster_summaries_to_dataframe(frames).to_csv(paths['clusters'], index=False)
    frame_statistics_to_dataframe(frames).to_csv(paths['frames'], index=False)

    logger.info(f"Saved cluster report for {len(frames)} frames to {output_dir}")
    return paths
