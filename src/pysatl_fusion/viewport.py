"""
Viewport Fitter
===============

Computes a display window that contains the mass of every node.

Notes
-----
By default the vertical bound is sized from the *widest* node, whose peak is
the lowest, so narrower nodes may rise above it. Pass
``peak_from=PeakReference.NARROWEST`` to size it from the tallest peak.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_fusion.config import DEFAULT_CONFIG
from pysatl_fusion.distributions.distribution import SQRT_2PI
from pysatl_fusion.types import PeakReference

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_fusion.distributions.distribution import GaussianDistribution

DEFAULT_X_RANGE: tuple[float, float] = DEFAULT_CONFIG.default_x_range
"""Horizontal range used when no bounds have been fitted."""


@dataclass(frozen=True, slots=True)
class Bounds:
    """
    Axis-aligned display window.

    Parameters
    ----------
    x_min, x_max : float
        Horizontal extent.
    y_min, y_max : float
        Vertical extent.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_range(self) -> tuple[float, float]:
        return self.x_min, self.x_max

    @property
    def y_range(self) -> tuple[float, float]:
        return self.y_min, self.y_max


def peak(std_dev: float) -> float:
    """Height of a Gaussian density at its mean."""
    return 1.0 / (std_dev * SQRT_2PI)


def auto_fit(
    nodes: Iterable[GaussianDistribution],
    *,
    peak_from: PeakReference | str = PeakReference.WIDEST,
    margin_sigmas: float = DEFAULT_CONFIG.fit_margin_sigmas,
    headroom: float = DEFAULT_CONFIG.fit_headroom,
) -> Bounds | None:
    """
    Fit a window around the given nodes.

    Parameters
    ----------
    nodes : Iterable[GaussianDistribution]
        Nodes to show.
    peak_from : PeakReference or str, default "widest"
        Node whose peak height sizes the vertical bound.
    margin_sigmas : float, default 4.0
        Horizontal margin in multiples of the largest σ.
    headroom : float, default 1.1
        Factor applied to the reference peak height.

    Returns
    -------
    Bounds or None
        ``None`` when there are no nodes, otherwise
        ``x = [min μ - m, max μ + m]`` with ``m = margin_sigmas · max σ`` and
        ``y = [0, peak(σ_ref) · headroom]``.
    """
    nodes = list(nodes)
    if not nodes:
        return None

    reference = PeakReference(peak_from)
    min_mean = min(node.mean for node in nodes)
    max_mean = max(node.mean for node in nodes)
    max_std = max(node.std_dev for node in nodes)
    ref_std = max_std if reference is PeakReference.WIDEST else min(n.std_dev for n in nodes)

    margin = margin_sigmas * max_std
    return Bounds(
        x_min=min_mean - margin,
        x_max=max_mean + margin,
        y_min=0.0,
        y_max=peak(ref_std) * headroom,
    )


def plot_range(
    bounds: Bounds | None, default: tuple[float, float] = DEFAULT_X_RANGE
) -> tuple[float, float]:
    """Horizontal range of ``bounds``, or ``default`` when nothing is fitted."""
    if bounds is None:
        return default
    return bounds.x_range


__all__ = [
    "Bounds",
    "DEFAULT_X_RANGE",
    "auto_fit",
    "peak",
    "plot_range",
]
