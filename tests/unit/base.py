from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_fusion.distributions.distribution import GaussianDistribution
from pysatl_fusion.graph import DistributionGraph


class FusionTestBase:
    @staticmethod
    def make_normal(mean: float, std_dev: float, node_id: int = 0) -> GaussianDistribution:
        return GaussianDistribution.leaf(
            id=node_id, name=f"N({mean}, {std_dev})", mean=mean, std_dev=std_dev
        )

    @staticmethod
    def make_chain_graph(depth: int) -> DistributionGraph:
        """
        Two leaves and a chain of ``depth`` products.

        The first product fuses both leaves, every following one fuses the
        previous product with the second leaf.
        """
        g = DistributionGraph()
        a = g.add_leaf("a", 0.0, 1.0)
        b = g.add_leaf("b", 4.0, 2.0)
        prev = g.fuse([a, b])
        for _ in range(depth - 1):
            prev = g.fuse([prev, b])
        return g
