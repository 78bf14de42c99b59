"""
Engine configuration.

:class:`FusionConfig` gathers the tunables of the engine: editing bounds for
leaf parameters, default leaf parameters, sample counts used for display,
viewport defaults and default node names. The module-level
:data:`DEFAULT_CONFIG` holds the stock values.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FusionConfig:
    """
    Engine settings.

    Parameters
    ----------
    mean_bounds : tuple[float, float]
        Closed range leaf means are clamped to when edited.
    std_dev_bounds : tuple[float, float]
        Closed range leaf standard deviations are clamped to when edited.
    default_mean, default_std_dev : float
        Parameters of a newly added leaf.
    curve_points : int
        Number of samples per displayed curve.
    fill_points : int
        Number of interior vertices of a displayed fill polygon.
    default_x_range : tuple[float, float]
        Horizontal range shown when no bounds have been fitted.
    fit_margin_sigmas : float
        Auto-fit margin, in multiples of the largest σ.
    fit_headroom : float
        Auto-fit factor applied to the reference peak height.
    leaf_name_template, product_name_template : str
        ``str.format`` templates for default names; ``{number}`` is ``id + 1``.

    Raises
    ------
    ValueError
        If any setting is inconsistent.
    """

    mean_bounds: tuple[float, float] = (-10.0, 10.0)
    std_dev_bounds: tuple[float, float] = (0.1, 5.0)
    default_mean: float = 0.0
    default_std_dev: float = 1.0
    curve_points: int = 300
    fill_points: int = 300
    default_x_range: tuple[float, float] = (-6.0, 6.0)
    fit_margin_sigmas: float = 4.0
    fit_headroom: float = 1.1
    leaf_name_template: str = "Gaussian {number}"
    product_name_template: str = "Product {number}"

    def __post_init__(self) -> None:
        lo, hi = self.mean_bounds
        if not lo <= hi:
            raise ValueError(f"Invalid mean bounds {self.mean_bounds}")
        lo, hi = self.std_dev_bounds
        if not 0 < lo <= hi:
            raise ValueError(f"Standard deviation bounds must satisfy 0 < lo <= hi, got {lo, hi}")
        if not self.default_std_dev > 0 or not math.isfinite(self.default_std_dev):
            raise ValueError("Default standard deviation must be positive")
        if self.curve_points < 2:
            raise ValueError("At least 2 curve points are required")
        if self.fill_points < 0:
            raise ValueError("Fill point count must be non-negative")
        x_lo, x_hi = self.default_x_range
        if not x_lo < x_hi:
            raise ValueError(f"Invalid default x range {self.default_x_range}")
        if self.fit_margin_sigmas < 0 or self.fit_headroom <= 0:
            raise ValueError("Auto-fit margin must be >= 0 and headroom > 0")

    def clamp_mean(self, mean: float) -> float:
        lo, hi = self.mean_bounds
        return min(max(mean, lo), hi)

    def clamp_std_dev(self, std_dev: float) -> float:
        lo, hi = self.std_dev_bounds
        return min(max(std_dev, lo), hi)

    def leaf_name(self, node_id: int) -> str:
        return self.leaf_name_template.format(number=node_id + 1)

    def product_name(self, node_id: int) -> str:
        return self.product_name_template.format(number=node_id + 1)


DEFAULT_CONFIG = FusionConfig()
"""Configuration used when none is supplied."""


__all__ = [
    "FusionConfig",
    "DEFAULT_CONFIG",
]
