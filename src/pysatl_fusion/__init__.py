"""
PySATL Fusion
=============

Gaussian fusion engine: precision-weighted multiplication of Gaussian
densities, a dependency graph of product distributions kept consistent with
their inputs, deterministic curve/polygon sampling for display, viewport
fitting and JSON snapshots.
"""

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from importlib.metadata import version

from .codec import DisplaySettings, Snapshot, decode, encode
from .config import DEFAULT_CONFIG, FusionConfig
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .graph import DistributionGraph, topological_order
from .session import PlotLayer, Session
from .types import *
from .types import __all__ as _types_all
from .viewport import DEFAULT_X_RANGE, Bounds, auto_fit, plot_range

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = version("pysatl-fusion")
__all__ = [
    "__version__",
    *_distr_all,
    *_errors_all,
    *_types_all,
    "DistributionGraph",
    "topological_order",
    "Bounds",
    "DEFAULT_X_RANGE",
    "auto_fit",
    "plot_range",
    "DisplaySettings",
    "Snapshot",
    "encode",
    "decode",
    "FusionConfig",
    "DEFAULT_CONFIG",
    "PlotLayer",
    "Session",
]

del _distr_all
del _errors_all
del _types_all
