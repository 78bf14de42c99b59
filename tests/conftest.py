from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_fusion.graph import DistributionGraph
from pysatl_fusion.session import Session


@pytest.fixture
def graph() -> DistributionGraph:
    return DistributionGraph()


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def fused_graph() -> DistributionGraph:
    """Leaves N(0, 1) and N(2, 1) (ids 0, 1) with their product (id 2)."""
    g = DistributionGraph()
    a = g.add_leaf("A", 0.0, 1.0)
    b = g.add_leaf("B", 2.0, 1.0)
    g.fuse([a, b], "A*B")
    return g
