#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion of a radar beam grid into Cartesian returns.

A scanning radar reports one range, radial velocity and intensity per beam.
Beams are laid out on a regular (height, width) grid covering the horizontal
field of view and the vertical angle span. The functions here turn such a
grid into a return buffer that the frame processor can cluster.
"""

from typing import Tuple

import numpy as np

from radar_processor.radar_params import make_return_buffer


def beam_angles(
    width: int,
    height: int,
    hfov: float,
    max_vert_angle: float,
    min_vert_angle: float
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Calculate the azimuth and elevation of every beam centre.

    Args:
        width: Number of beams horizontally.
        height: Number of beams vertically.
        hfov: Horizontal field of view in radians, centred on the x axis.
        max_vert_angle: Upper elevation limit in radians.
        min_vert_angle: Lower elevation limit in radians.

    Returns:
        A tuple (azimuth, elevation) of arrays with shape (height, width).
    """
    if width < 1 or height < 1:
        raise ValueError(f"Beam grid must be at least 1x1, got {width}x{height}")

    azimuth = -hfov / 2.0 + (np.arange(width) + 0.5) * (hfov / width)
    elevation = min_vert_angle + (np.arange(height) + 0.5) * ((max_vert_angle - min_vert_angle) / height)
    return np.meshgrid(azimuth, elevation)


def spherical_to_cartesian(ranges, azimuth, elevation) -> np.ndarray:
    """
    Convert range/azimuth/elevation to x, y, z.

    Args:
        ranges: Range values in meters.
        azimuth: Azimuth angles in radians (0 along +x, positive towards +y).
        elevation: Elevation angles in radians (positive towards +z).

    Returns:
        Array of shape (N, 3).
    """
    r = np.ravel(np.asarray(ranges, dtype=np.float64))
    az = np.ravel(np.asarray(azimuth, dtype=np.float64))
    el = np.ravel(np.asarray(elevation, dtype=np.float64))

    cos_el = np.cos(el)
    return np.column_stack((r * cos_el * np.cos(az), r * cos_el * np.sin(az), r * np.sin(el)))


def pointcloud_from_beam_grid(
    ranges: np.ndarray,
    radial_velocities: np.ndarray,
    intensities: np.ndarray,
    hfov: float,
    max_vert_angle: float,
    min_vert_angle: float
) -> np.ndarray:
    """
    Build a return buffer from a beam grid.

    The velocity of each return is its radial velocity projected along the
    beam direction. Beams with no echo should carry zero intensity so that
    the frame processor rejects them.

    Args:
        ranges: Range per beam, shape (height, width).
        radial_velocities: Radial velocity per beam, shape (height, width).
        intensities: Intensity per beam, shape (height, width).
        hfov: Horizontal field of view in radians.
        max_vert_angle: Upper elevation limit in radians.
        min_vert_angle: Lower elevation limit in radians.

    Returns:
        A flat return buffer with height * width records in row-major order.
    """
    ranges = np.asarray(ranges, dtype=np.float64)
    if ranges.ndim != 2:
        raise ValueError(f"Expected a 2-D beam grid, got shape {ranges.shape}")
    radial_velocities = np.asarray(radial_velocities, dtype=np.float64)
    intensities = np.asarray(intensities, dtype=np.float64)
    if radial_velocities.shape != ranges.shape or intensities.shape != ranges.shape:
        raise ValueError("ranges, radial_velocities and intensities must have the same shape")

    height, width = ranges.shape
    azimuth, elevation = beam_angles(width, height, hfov, max_vert_angle, min_vert_angle)

    directions = spherical_to_cartesian(np.ones(ranges.size), azimuth, elevation)

    buffer = make_return_buffer(ranges.size)
    buffer['xyz'] = directions * ranges.reshape(-1, 1)
    buffer['vel'] = directions * radial_velocities.reshape(-1, 1)
    buffer['intensity'] = intensities.ravel()
    buffer['range'] = ranges.ravel()
    buffer['azimuth'] = azimuth.ravel()
    buffer['elevation'] = elevation.ravel()
    return buffer
