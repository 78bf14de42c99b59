"""
Distribution graph package.

Exports
-------
DistributionGraph
rank_nodes, topological_order
"""

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .graph import DistributionGraph
from .ordering import rank_nodes, topological_order

__all__ = [
    "DistributionGraph",
    "rank_nodes",
    "topological_order",
]
