"""
Sampling Routines
=================

Deterministic discretisation of a Gaussian into point sequences for display:

- :func:`curve_points`: evenly spaced curve samples including both ends;
- :func:`fill_polygon`: a closed area under the curve with zero-height
  corners and strictly interior curve vertices;
- :func:`std_markers` and :func:`visible_std_markers`: standard-deviation
  marker positions.

Notes
-----
The interior of :func:`fill_polygon` is spaced by ``i/(n+1)`` while
:func:`curve_points` is spaced by ``i/(n-1)``, so polygon vertices never
coincide with the corners.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_fusion.distributions.distribution import STD_MARKER_OFFSETS
from pysatl_fusion.errors import InvalidSampleCountError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pysatl_fusion.distributions.distribution import GaussianDistribution
    from pysatl_fusion.types import FloatArray


class PointSample:
    """
    Array-backed sequence of 2D points.

    Stores points as a floating-point array of shape ``(n, 2)`` where the
    first column holds x and the second holds y.

    Parameters
    ----------
    data : numpy.ndarray
        2D floating-point array of shape (n, 2).

    Raises
    ------
    ValueError
        If data is not of shape (n, 2).
    """

    data: FloatArray

    def __init__(self, data: FloatArray) -> None:
        if data.ndim != 2 or data.shape[1] != 2:
            raise ValueError("PointSample expects 2D array of shape (n, 2).")
        self.data = data

    @classmethod
    def from_xy(cls, xs: FloatArray, ys: FloatArray) -> PointSample:
        return cls(np.column_stack((xs, ys)).astype(float, copy=False))

    def __len__(self) -> int:
        """Return the number of points."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[tuple[float, float]]:
        """Iterate over ``(x, y)`` pairs."""
        for x, y in self.data:
            yield float(x), float(y)

    def __getitem__(self, index: int) -> tuple[float, float]:
        x, y = self.data[index]
        return float(x), float(y)

    @property
    def array(self) -> FloatArray:
        """Return the backing array."""
        return self.data

    @property
    def xs(self) -> FloatArray:
        return self.data[:, 0]

    @property
    def ys(self) -> FloatArray:
        return self.data[:, 1]

    @property
    def shape(self) -> tuple[int, int]:
        n, d = self.data.shape
        return int(n), int(d)

    def to_list(self) -> list[list[float]]:
        """Plain ``[[x, y], ...]`` representation for renderers."""
        return [[x, y] for x, y in self]


@dataclass(frozen=True, slots=True)
class StdMarker:
    """
    A standard-deviation marker.

    Parameters
    ----------
    position : float
        x coordinate ``μ + offset·σ``.
    offset : int
        Number of standard deviations from the mean (-3..3).
    """

    position: float
    offset: int

    @property
    def is_mean(self) -> bool:
        return self.offset == 0


def curve_points(
    distribution: GaussianDistribution, x_min: float, x_max: float, n: int
) -> PointSample:
    """
    Sample the density at ``n`` evenly spaced points of ``[x_min, x_max]``.

    Parameters
    ----------
    distribution : GaussianDistribution
        Distribution to sample.
    x_min, x_max : float
        Range ends, both included.
    n : int
        Number of points, at least 2.

    Returns
    -------
    PointSample
        Points ``x_i = x_min + (x_max - x_min)·i/(n-1)``, ``i = 0..n-1``.

    Raises
    ------
    InvalidSampleCountError
        If ``n < 2``.
    """
    if n < 2:
        raise InvalidSampleCountError(f"Curve sampling needs at least 2 points, got {n}.")

    i = np.arange(n, dtype=float)
    xs = x_min + (x_max - x_min) * i / (n - 1)
    # x_min + (x_max - x_min) is not always exactly x_max in floating point
    xs[-1] = x_max
    return PointSample.from_xy(xs, distribution.evaluate(xs))


def fill_polygon(
    distribution: GaussianDistribution, x_min: float, x_max: float, n: int
) -> PointSample:
    """
    Build a polygon covering the area under the density on ``[x_min, x_max]``.

    The polygon is ``(x_min, 0)``, the interior curve vertices, ``(x_max, 0)``;
    a renderer closes it from the last vertex back to the first.

    Parameters
    ----------
    distribution : GaussianDistribution
        Distribution to sample.
    x_min, x_max : float
        Range ends.
    n : int
        Number of interior vertices. ``0`` gives the two corners only, ``1``
        the midpoint, otherwise ``x_i = x_min + (x_max - x_min)·i/(n+1)``
        for ``i = 1..n``.

    Returns
    -------
    PointSample
        ``n + 2`` vertices.

    Raises
    ------
    InvalidSampleCountError
        If ``n`` is negative.
    """
    if n < 0:
        raise InvalidSampleCountError(f"Polygon vertex count must be non-negative, got {n}.")

    if n == 1:
        xs = np.array([(x_min + x_max) / 2.0])
    else:
        i = np.arange(1, n + 1, dtype=float)
        xs = x_min + (x_max - x_min) * i / (n + 1)

    interior = (
        np.column_stack((xs, distribution.evaluate(xs))) if n else np.empty((0, 2), dtype=float)
    )
    corners_left = np.array([[x_min, 0.0]])
    corners_right = np.array([[x_max, 0.0]])
    return PointSample(np.vstack((corners_left, interior, corners_right)).astype(float))


def std_markers(distribution: GaussianDistribution) -> list[float]:
    """Return the seven standard-deviation marker positions of a distribution."""
    return distribution.standard_deviation_markers()


def visible_std_markers(
    distribution: GaussianDistribution, x_min: float, x_max: float
) -> list[StdMarker]:
    """
    Markers whose position lies inside the closed range ``[x_min, x_max]``.

    Returns
    -------
    list of StdMarker
        Visible markers in ascending order.
    """
    return [
        StdMarker(position=position, offset=offset)
        for offset, position in zip(STD_MARKER_OFFSETS, std_markers(distribution), strict=True)
        if x_min <= position <= x_max
    ]


__all__ = [
    "PointSample",
    "StdMarker",
    "curve_points",
    "fill_polygon",
    "std_markers",
    "visible_std_markers",
]
