"""
Depth ranking of distribution graph nodes.

Leaves have rank 0. A product's rank is one more than the largest rank among
its parents that are present in the graph. Sorting by ``(rank, id)`` yields a
deterministic topological order: every parent precedes its dependents.

Notes
-----
Cycles are not rejected. A parent that is still being ranked when it is
reached again contributes rank 0, which keeps the walk finite.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from pysatl_fusion.distributions.distribution import GaussianDistribution
    from pysatl_fusion.types import NodeId


def _edges(node: GaussianDistribution) -> tuple[NodeId, ...]:
    """Edges followed during ranking; only products depend on their parents."""
    return node.parent_ids if node.is_product else ()


def rank_nodes(nodes: Mapping[NodeId, GaussianDistribution]) -> dict[NodeId, int]:
    """
    Compute the parent-chain depth of every node.

    Parameters
    ----------
    nodes
        Graph nodes keyed by identifier.

    Returns
    -------
    dict[NodeId, int]
        Rank for every identifier in ``nodes``.
    """
    ranks: dict[NodeId, int] = {}
    on_stack: set[NodeId] = set()

    for root in sorted(nodes):
        if root in ranks:
            continue
        # iterative DFS so long product chains do not hit the recursion limit
        stack: list[tuple[NodeId, Iterator[NodeId]]] = [(root, iter(_edges(nodes[root])))]
        on_stack.add(root)
        while stack:
            v, parents = stack[-1]
            descended = False
            for w in parents:
                if w not in nodes or w in ranks or w in on_stack:
                    continue
                stack.append((w, iter(_edges(nodes[w]))))
                on_stack.add(w)
                descended = True
                break
            if descended:
                continue

            stack.pop()
            on_stack.discard(v)
            edges = _edges(nodes[v])
            if not edges:
                ranks[v] = 0
            else:
                ranks[v] = 1 + max((ranks.get(w, 0) for w in edges if w in nodes), default=0)
    return ranks


def topological_order(nodes: Mapping[NodeId, GaussianDistribution]) -> list[NodeId]:
    """
    Identifiers ordered ancestors-first.

    Returns
    -------
    list[NodeId]
        All identifiers sorted by ``(rank, id)``.
    """
    ranks = rank_nodes(nodes)
    return sorted(ranks, key=lambda node_id: (ranks[node_id], node_id))


__all__ = [
    "rank_nodes",
    "topological_order",
]
