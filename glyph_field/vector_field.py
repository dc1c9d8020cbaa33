# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Vector field primitives shared by all glyph field effects

import numpy as np


def offsets(points: np.ndarray, target) -> np.ndarray:
    """
    Displacement from each point to a target.

    Args:
        points: Array of shape (N, 2) with [x, y] positions
        target: (x, y) target position

    Returns:
        Array of shape (N, 2) with target - points
    """
    return np.asarray(target, dtype=np.float64) - points


def distances(displacement: np.ndarray) -> np.ndarray:
    """Euclidean length of each row of an (N, 2) displacement array."""
    return np.sqrt(np.sum(displacement * displacement, axis=1))


def linear_falloff(distance: np.ndarray, radius: float) -> np.ndarray:
    """
    Linear falloff weight (radius - d) / radius inside a radius.

    Weight is 1 at the center, decays to 0 at the edge and is 0 outside.
    A non-positive radius has no interior, so every weight is 0 (never a
    division by zero).

    Args:
        distance: Array of shape (N,) with distances from the effect center
        radius: Effect radius

    Returns:
        Array of shape (N,) with weights in [0, 1]
    """
    weight = np.zeros_like(distance, dtype=np.float64)
    if radius <= 0.0:
        return weight

    inside = distance < radius
    weight[inside] = (radius - distance[inside]) / radius
    return weight


def unit_vectors(displacement: np.ndarray, distance: np.ndarray) -> np.ndarray:
    """
    Normalize displacement rows.

    Rows with zero length have no direction and stay zero.
    """
    unit = np.zeros_like(displacement, dtype=np.float64)
    nonzero = distance > 0.0
    unit[nonzero] = displacement[nonzero] / distance[nonzero, None]
    return unit
