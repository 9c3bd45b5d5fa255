#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared pytest fixtures for the radar frame processor tests.
"""

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from radar_processor.radar_params import returns_from_arrays, RadarFrame


# Five points well within 1 m of each other
TIGHT_GROUP = [
    (0.0, 0.0, 0.0),
    (0.1, 0.0, 0.0),
    (0.0, 0.1, 0.0),
    (0.0, 0.0, 0.1),
    (0.1, 0.1, 0.0),
]


@pytest.fixture
def tight_group():
    return np.array(TIGHT_GROUP, dtype=np.float64)


@pytest.fixture
def group_with_outlier():
    """The tight group plus one point 100 m away."""
    return np.array(TIGHT_GROUP + [(100.0, 0.0, 0.0)], dtype=np.float64)


@pytest.fixture
def two_blobs():
    """Two well separated Gaussian blobs of 40 points each and 10 scattered points."""
    rng = np.random.default_rng(42)
    blob_a = rng.normal(loc=(10.0, 0.0, 0.0), scale=0.2, size=(40, 3))
    blob_b = rng.normal(loc=(-10.0, 5.0, 1.0), scale=0.2, size=(40, 3))
    scattered = rng.uniform(low=-50.0, high=50.0, size=(10, 3)) + np.array([0.0, 100.0, 0.0])
    return np.vstack((blob_a, blob_b, scattered))


@pytest.fixture
def blob_frame(two_blobs):
    """A frame built from two_blobs, with every other extra return carrying no echo."""
    silent = np.zeros((20, 3))
    xyz = np.vstack((two_blobs, silent))
    vel = np.zeros_like(xyz)
    vel[:40] = (1.0, 0.0, 0.0)
    vel[40:80] = (0.0, -2.0, 0.0)
    intensity = np.concatenate((np.full(len(two_blobs), 5.0), np.zeros(len(silent))))
    return RadarFrame(returns=returns_from_arrays(xyz, vel, intensity), timestamp=12.5, launched_count=7)
