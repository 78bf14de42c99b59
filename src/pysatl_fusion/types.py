"""
Core Type Definitions
=====================

Fundamental types and aliases used throughout PySATL Fusion.
"""

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from enum import StrEnum
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray


class NodeKind(StrEnum):
    """
    Enumeration of node kinds in a distribution graph.

    Attributes
    ----------
    LEAF : str
        Distribution whose parameters are set directly by a caller.
    PRODUCT : str
        Distribution derived from its parents by precision-weighted fusion.
    """

    LEAF = "leaf"
    PRODUCT = "product"


class PeakReference(StrEnum):
    """
    Which node height the viewport fitter sizes the vertical bound from.

    Attributes
    ----------
    WIDEST : str
        Peak of the node with the largest standard deviation (lowest peak).
    NARROWEST : str
        Peak of the node with the smallest standard deviation (tallest peak).
    """

    WIDEST = "widest"
    NARROWEST = "narrowest"


NodeId: TypeAlias = int
"""Type alias for node identifiers."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for double precision arrays."""


__all__ = [
    "NodeKind",
    "PeakReference",
    "NodeId",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "FloatArray",
]
