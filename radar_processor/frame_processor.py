#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Per-frame radar processing.

This module contains the RadarFrameProcessor class which turns one frame of
raw radar returns into object detections: it filters out returns without a
usable echo, clusters the remaining points with DBSCAN, and aggregates each
cluster into a centroid and average velocity.
"""

import logging
import time
from typing import Iterable, Iterator, Optional

import numpy as np

from radar_processor.exceptions import FrameProcessingError, SpatialIndexError
from radar_processor.radar_params import ClusteringParams, RadarFrame, ProcessedRadarFrame
from radar_processor.processing.dbscan import DBSCAN
from radar_processor.processing.aggregation import (
    filter_valid_returns,
    label_clustered_returns,
    compute_cluster_means,
    build_cluster_summaries
)


class RadarFrameProcessor:
    """
    Stateless transform from a raw radar frame to a processed frame.

    Only the configuration is kept between calls. The spatial index and all
    clustering state are created for each frame and dropped when
    :meth:`process` returns, and the returned frame owns freshly allocated
    arrays.

    Attributes:
        params: Clustering parameters, validated at construction.
        clusterer: DBSCAN instance configured from ``params``.
    """

    def __init__(self, params: Optional[ClusteringParams] = None, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize the processor.

        Args:
            params: Clustering parameters. Defaults to ClusteringParams().
            logger: Logger to report through. Defaults to the module logger.

        Raises:
            ConfigurationError: If the parameters are invalid.
        """
        self.params = params if params is not None else ClusteringParams()
        self.params.validate()
        self._logger = logger if logger is not None else logging.getLogger(__name__)

        self.clusterer = DBSCAN(
            epsilon=self.params.epsilon,
            min_points=self.params.min_points,
            expand_border_points=self.params.expand_border_points,
            leafsize=self.params.leafsize
        )

    def get_logger(self) -> logging.Logger:
        return self._logger

    def process(self, frame: RadarFrame) -> ProcessedRadarFrame:
        """
        Process one frame of radar returns.

        Args:
            frame: Input frame. Its return buffer is not modified.

        Returns:
            ProcessedRadarFrame holding only the clustered returns, the
            per-cluster summaries and the frame counters.

        Raises:
            FrameProcessingError: If clustering failed for this frame.
        """
        valid, invalid_count = filter_valid_returns(frame.returns, self.params.intensity_threshold)
        points = valid['xyz'].astype(np.float64)

        start = time.perf_counter()
        try:
            result = self.clusterer.run(points)
        except SpatialIndexError as e:
            self.get_logger().error(f"Frame {frame.launched_count}: clustering failed: {e}")
            raise FrameProcessingError(f"Failed to cluster frame {frame.launched_count}") from e
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        labelled = label_clustered_returns(valid, result.clusters)
        centroids, velocities, counts = compute_cluster_means(labelled, result.num_clusters)

        processed = ProcessedRadarFrame(
            returns=labelled,
            centroids=centroids,
            avg_velocities=velocities,
            clusters=build_cluster_summaries(centroids, velocities, counts),
            invalid_returns=invalid_count,
            noise_returns=len(result.noise),
            timestamp=frame.timestamp,
            launched_count=frame.launched_count
        )

        if self.params.profile:
            self._log_profile(processed, len(frame.returns), elapsed_ms)
        else:
            self.get_logger().debug(
                f"Frame {frame.launched_count}: {len(frame.returns)} returns, "
                f"{len(valid)} valid, {processed.num_clusters} clusters"
            )
        return processed

    def process_returns(self, returns: np.ndarray, timestamp: float = 0.0, launched_count: int = 0) -> ProcessedRadarFrame:
        """Process a bare return buffer, wrapping it in a RadarFrame."""
        return self.process(RadarFrame(returns=returns, timestamp=timestamp, launched_count=launched_count))

    def process_frames(self, frames: Iterable[RadarFrame]) -> Iterator[ProcessedRadarFrame]:
        """
        Process a stream of frames one at a time.

        Frames are independent; a failing frame raises and leaves nothing
        behind that would affect the next one.
        """
        for frame in frames:
            yield self.process(frame)

    def _log_profile(self, processed: ProcessedRadarFrame, total_returns: int, elapsed_ms: float) -> None:
        logger = self.get_logger()
        logger.info(f"Scan {processed.launched_count}: DBSCAN time = {elapsed_ms:.2f} ms")
        logger.info(
            f"Number of returns: {total_returns} | Number of valid returns: {processed.valid_returns} | "
            f"Number of clusters: {processed.num_clusters}"
        )
        for summary in processed.clusters:
            vel = summary.avg_velocity
            cen = summary.centroid
            logger.info(
                f"Cluster {summary.cluster_id}: {summary.num_points} returns, "
                f"velocity ({vel[0]:.3f}, {vel[1]:.3f}, {vel[2]:.3f}), "
                f"centroid ({cen[0]:.3f}, {cen[1]:.3f}, {cen[2]:.3f})"
            )
