"""
Distributions subpackage

Gaussian nodes and the computations performed on them:

- Gaussian node value type (:mod:`.distribution`);
- mean/std and mean/precision parametrizations (:mod:`.parametrizations`);
- precision-weighted fusion (:mod:`.fusion`);
- curve, polygon and marker sampling (:mod:`.sampling`).
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .distribution import SQRT_2PI, STD_MARKER_OFFSETS, GaussianDistribution
from .fusion import EMPTY_FUSION, FusionResult, fuse, make_product
from .parametrizations import (
    MeanPrec,
    MeanStd,
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .sampling import (
    PointSample,
    StdMarker,
    curve_points,
    fill_polygon,
    std_markers,
    visible_std_markers,
)

__all__ = [
    # distribution
    "GaussianDistribution",
    "SQRT_2PI",
    "STD_MARKER_OFFSETS",
    # parametrizations
    "Parametrization",
    "ParametrizationConstraint",
    "MeanStd",
    "MeanPrec",
    "constraint",
    "parametrization",
    # fusion
    "FusionResult",
    "EMPTY_FUSION",
    "fuse",
    "make_product",
    # sampling
    "PointSample",
    "StdMarker",
    "curve_points",
    "fill_polygon",
    "std_markers",
    "visible_std_markers",
]
