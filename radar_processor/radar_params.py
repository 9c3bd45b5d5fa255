#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data classes for radar clustering parameters and frame data.

This module provides the data structure definitions for the frame processor,
including the clustering configuration, the record layout of a radar return
buffer, and containers for input and processed frames.
"""

import math
from dataclasses import dataclass, field, fields
from typing import List, Dict, Any, Optional

import numpy as np

from radar_processor.exceptions import ConfigurationError


# Record layout of a single radar return (one beam).
RADAR_RETURN_DTYPE = np.dtype([
    ('xyz', np.float32, (3,)),
    ('vel', np.float32, (3,)),
    ('intensity', np.float32),
    ('range', np.float32),
    ('azimuth', np.float32),
    ('elevation', np.float32),
    ('object_id', np.int32),
])


def make_return_buffer(size: int) -> np.ndarray:
    """
    Allocate a zeroed radar return buffer.

    Args:
        size: Number of return records.

    Returns:
        A 1-D structured array of RADAR_RETURN_DTYPE.
    """
    return np.zeros(int(size), dtype=RADAR_RETURN_DTYPE)


def returns_from_arrays(
    xyz,
    vel=None,
    intensity=None,
    ranges=None,
    azimuth=None,
    elevation=None
) -> np.ndarray:
    """
    Build a radar return buffer from column arrays.

    Missing velocity defaults to zero, missing intensity to one and missing
    range to the Euclidean norm of the position.

    Args:
        xyz: Positions, shape (N, 3).
        vel: Velocities, shape (N, 3).
        intensity: Reflected intensity per return, shape (N,).
        ranges: Range per return in meters.
        azimuth: Azimuth angle per return in radians.
        elevation: Elevation angle per return in radians.

    Returns:
        A 1-D structured array of RADAR_RETURN_DTYPE.
    """
    xyz = np.asarray(xyz, dtype=np.float32).reshape(-1, 3)
    buffer = make_return_buffer(len(xyz))
    buffer['xyz'] = xyz
    if vel is not None:
        buffer['vel'] = np.asarray(vel, dtype=np.float32).reshape(-1, 3)
    buffer['intensity'] = 1.0 if intensity is None else np.asarray(intensity, dtype=np.float32)
    if ranges is None:
        buffer['range'] = np.linalg.norm(xyz, axis=1) if len(xyz) > 0 else 0.0
    else:
        buffer['range'] = np.asarray(ranges, dtype=np.float32)
    if azimuth is not None:
        buffer['azimuth'] = np.asarray(azimuth, dtype=np.float32)
    if elevation is not None:
        buffer['elevation'] = np.asarray(elevation, dtype=np.float32)
    return buffer


@dataclass
class ClusteringParams:
    """
    Parameters for per-frame clustering.

    Attributes:
        epsilon: Neighborhood radius in meters.
        min_points: Minimum neighborhood size (the point itself included)
            for a point to be a core point.
        intensity_threshold: Returns with intensity at or below this value
            are discarded before clustering.
        expand_border_points: Whether non-core points reachable from a core
            point join its cluster (canonical DBSCAN). When False only core
            points are added during expansion.
        leafsize: Leaf size of the k-d tree used for neighbor queries.
        profile: Log clustering time and per-cluster details at INFO level.
    """

    epsilon: float = 1.0
    min_points: int = 5
    intensity_threshold: float = 0.0
    expand_border_points: bool = False
    leafsize: int = 16
    profile: bool = False

    def validate(self) -> None:
        """
        Check the parameters before any frame is processed.

        Raises:
            ConfigurationError: If a parameter is out of range.
        """
        if not math.isfinite(self.epsilon) or self.epsilon <= 0:
            raise ConfigurationError(f"epsilon must be a positive finite number, got {self.epsilon}")
        if int(self.min_points) != self.min_points or self.min_points < 1:
            raise ConfigurationError(f"min_points must be an integer >= 1, got {self.min_points}")
        if int(self.leafsize) != self.leafsize or self.leafsize < 1:
            raise ConfigurationError(f"leafsize must be an integer >= 1, got {self.leafsize}")
        if not math.isfinite(self.intensity_threshold):
            raise ConfigurationError("intensity_threshold must be finite")

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "ClusteringParams":
        """
        Create parameters from a configuration mapping.

        Unknown keys are ignored so that a full configuration section can be
        passed in directly. Numeric values given as strings (e.g. from a
        hand-edited YAML file) are converted to the field's type.

        Args:
            values: Mapping of parameter names to values.

        Returns:
            A new ClusteringParams instance.

        Raises:
            ConfigurationError: If a value cannot be converted.
        """
        values = values or {}
        kwargs = {}
        for f in fields(cls):
            if f.name in values:
                kwargs[f.name] = _coerce_param(f.name, values[f.name], f.type)
        return cls(**kwargs)


def _coerce_param(name: str, value: Any, kind: type) -> Any:
    if kind is bool:
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        raise ConfigurationError(f"{name} must be true or false, got {value!r}")

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None

    if kind is int:
        if not number.is_integer():
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        return int(number)
    return number


@dataclass
class RadarFrame:
    """
    One frame of raw radar returns.

    Attributes:
        returns: Return buffer of RADAR_RETURN_DTYPE.
        timestamp: Capture time in seconds.
        launched_count: Sequence count of the frame.
    """

    returns: np.ndarray
    timestamp: float = 0.0
    launched_count: int = 0

    def __len__(self) -> int:
        return len(self.returns)


@dataclass(frozen=True)
class ClusterSummary:
    """
    Aggregated description of one detected object.

    Attributes:
        cluster_id: External (1-based) cluster id.
        num_points: Number of member returns.
        centroid: Mean position of the members.
        avg_velocity: Mean velocity of the members.
    """

    cluster_id: int
    num_points: int
    centroid: np.ndarray
    avg_velocity: np.ndarray


@dataclass
class ProcessedRadarFrame:
    """
    Result of processing one radar frame.

    Only clustered returns are kept in ``returns``; each carries its
    external cluster id in ``object_id`` (0 is never used for a kept return).

    Attributes:
        returns: Clustered returns of RADAR_RETURN_DTYPE.
        centroids: Cluster centroids, shape (K, 3).
        avg_velocities: Mean cluster velocities, shape (K, 3).
        clusters: Per-cluster summaries, indexed by external id minus one.
        invalid_returns: Number of returns rejected by the intensity filter.
        noise_returns: Number of valid returns not assigned to any cluster.
        timestamp: Capture time passed through from the input frame.
        launched_count: Sequence count passed through from the input frame.
    """

    returns: np.ndarray
    centroids: np.ndarray
    avg_velocities: np.ndarray
    clusters: List[ClusterSummary] = field(default_factory=list)
    invalid_returns: int = 0
    noise_returns: int = 0
    timestamp: float = 0.0
    launched_count: int = 0

    @property
    def num_clusters(self) -> int:
        return len(self.clusters)

    @property
    def beam_return_count(self) -> int:
        return len(self.returns)

    @property
    def valid_returns(self) -> int:
        return self.beam_return_count + self.noise_returns

    def summary(self, cluster_id: int) -> ClusterSummary:
        """
        Look up a cluster summary by its external id.

        Args:
            cluster_id: External (1-based) cluster id.

        Returns:
            The matching ClusterSummary.
        """
        if not 1 <= cluster_id <= len(self.clusters):
            raise KeyError(f"No cluster with id {cluster_id}")
        return self.clusters[cluster_id - 1]
