"""
Distribution Graph
==================

A store of Gaussian nodes keyed by identifier, where *product* nodes depend on
their parents through ``parent_ids``.

Rules
-----
* Identifiers come from a monotonically increasing counter and are never
  reused, even after deletion.
* Deleting a node does not cascade: dependents keep the removed id in their
  ``parent_ids`` (a *dangling edge*).
* Product parameters are only written by :meth:`DistributionGraph.recompute_products`.
  It processes nodes ancestors-first, so a chain of products converges in a
  single call.
* A product with a dangling edge keeps its last computed values.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from pysatl_fusion.config import DEFAULT_CONFIG
from pysatl_fusion.distributions.distribution import GaussianDistribution
from pysatl_fusion.distributions.fusion import make_product
from pysatl_fusion.errors import DerivedNodeError, InsufficientParentsError
from pysatl_fusion.graph.ordering import topological_order

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from pysatl_fusion.config import FusionConfig
    from pysatl_fusion.types import NodeId

logger = logging.getLogger(__name__)


class DistributionGraph:
    """
    Graph of leaf and product Gaussians.

    Parameters
    ----------
    nodes : Iterable[GaussianDistribution], optional
        Initial nodes. Stored as given, products are not recomputed.
    next_id : NodeId, optional
        Next identifier to allocate. Defaults to one past the largest id.
    config : FusionConfig, optional
        Configuration used for default names and parameters.

    Raises
    ------
    ValueError
        If node ids repeat or ``next_id`` would reuse an existing id.
    """

    def __init__(
        self,
        nodes: Iterable[GaussianDistribution] = (),
        next_id: NodeId | None = None,
        *,
        config: FusionConfig = DEFAULT_CONFIG,
    ) -> None:
        self._config = config
        self._nodes: dict[NodeId, GaussianDistribution] = {}
        for node in nodes:
            if node.id in self._nodes:
                raise ValueError(f"Duplicate node id {node.id}")
            self._nodes[node.id] = node

        floor = max(self._nodes, default=-1) + 1
        if next_id is None:
            next_id = floor
        elif next_id < floor:
            raise ValueError(f"next_id {next_id} would reuse an existing id (largest is {floor - 1})")
        self._next_id: NodeId = next_id

    # --------------------------------------------------------------------- #
    # Container protocol
    # --------------------------------------------------------------------- #

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[GaussianDistribution]:
        return iter(list(self._nodes.values()))

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __getitem__(self, node_id: NodeId) -> GaussianDistribution:
        return self._nodes[node_id]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DistributionGraph):
            return NotImplemented
        return self._next_id == other._next_id and self._nodes == other._nodes

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={len(self._nodes)}, next_id={self._next_id})"

    def copy(self) -> DistributionGraph:
        """Shallow copy; nodes are immutable and shared."""
        return DistributionGraph(self._nodes.values(), self._next_id, config=self._config)

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    @property
    def next_id(self) -> NodeId:
        return self._next_id

    @property
    def config(self) -> FusionConfig:
        return self._config

    @property
    def nodes(self) -> Mapping[NodeId, GaussianDistribution]:
        """Read-only view of the nodes keyed by id."""
        return MappingProxyType(self._nodes)

    def get(self, node_id: NodeId) -> GaussianDistribution | None:
        return self._nodes.get(node_id)

    def ids(self) -> list[NodeId]:
        return list(self._nodes)

    def leaves(self) -> list[GaussianDistribution]:
        return [node for node in self._nodes.values() if not node.is_product]

    def products(self) -> list[GaussianDistribution]:
        return [node for node in self._nodes.values() if node.is_product]

    def dependents(self, node_id: NodeId) -> list[NodeId]:
        """Products listing ``node_id`` among their parents."""
        return [
            node.id
            for node in self._nodes.values()
            if node.is_product and node_id in node.parent_ids
        ]

    def dangling_parents(self, node_id: NodeId) -> list[NodeId]:
        """Parent ids of ``node_id`` that are no longer in the graph."""
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return [pid for pid in node.parent_ids if pid not in self._nodes]

    def topological_order(self) -> list[NodeId]:
        """Node ids ordered so that parents precede their dependents."""
        return topological_order(self._nodes)

    # --------------------------------------------------------------------- #
    # Mutation
    # --------------------------------------------------------------------- #

    def _allocate_id(self) -> NodeId:
        node_id = self._next_id
        self._next_id += 1
        return node_id

    def add_leaf(
        self,
        name: str | None = None,
        mean: float | None = None,
        std_dev: float | None = None,
    ) -> NodeId:
        """
        Insert a new leaf and return its id.

        Parameters
        ----------
        name : str, optional
            Display label. Defaults to the configured leaf name.
        mean, std_dev : float, optional
            Parameters. Default to the configured defaults.

        Raises
        ------
        InvalidParameterError
            If ``std_dev`` is not positive. No id is consumed.
        """
        node_id = self._next_id
        node = GaussianDistribution.leaf(
            id=node_id,
            name=self._config.leaf_name(node_id) if name is None else name,
            mean=self._config.default_mean if mean is None else mean,
            std_dev=self._config.default_std_dev if std_dev is None else std_dev,
        )
        self._allocate_id()
        self._nodes[node_id] = node
        logger.debug("Added leaf %d N(%g, %g²)", node_id, node.mean, node.std_dev)
        return node_id

    def fuse(self, ids: Iterable[NodeId], name: str | None = None) -> NodeId:
        """
        Insert a product of the given nodes and return its id.

        Parameters
        ----------
        ids : Iterable[NodeId]
            Parent identifiers. Stored verbatim on the product.
        name : str, optional
            Display label. Defaults to the configured product name.

        Raises
        ------
        InsufficientParentsError
            If fewer than two ids resolve to existing nodes. The graph is
            left unchanged.
        """
        parent_ids = tuple(ids)
        parents = [self._nodes[pid] for pid in parent_ids if pid in self._nodes]
        if len(parents) < 2:
            raise InsufficientParentsError(
                f"Fusion needs at least 2 existing parents, {len(parents)} of "
                f"{list(parent_ids)} resolved"
            )

        node_id = self._next_id
        product = make_product(
            id=node_id,
            name=self._config.product_name(node_id) if name is None else name,
            parent_ids=parent_ids,
            parent_values=parents,
        )
        self._allocate_id()
        self._nodes[node_id] = product
        logger.debug(
            "Fused %s into product %d N(%g, %g²)",
            list(parent_ids),
            node_id,
            product.mean,
            product.std_dev,
        )
        return node_id

    def delete(self, node_id: NodeId) -> bool:
        """
        Remove a node if present.

        Returns
        -------
        bool
            Whether a node was removed. Unknown ids are a no-op.
        """
        removed = self._nodes.pop(node_id, None)
        if removed is None:
            return False
        logger.debug("Deleted node %d (%s)", node_id, removed.name)
        return True

    def set_leaf_parameters(
        self,
        node_id: NodeId,
        *,
        mean: float | None = None,
        std_dev: float | None = None,
    ) -> GaussianDistribution | None:
        """
        Update the parameters of a leaf.

        Returns
        -------
        GaussianDistribution or None
            The updated node, or ``None`` if ``node_id`` is unknown.

        Raises
        ------
        DerivedNodeError
            If the node is a product.
        InvalidParameterError
            If the new standard deviation is not positive.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return None
        if node.is_product:
            raise DerivedNodeError(f"Node {node_id} is a product; its parameters are derived")

        updated = node.with_parameters(mean=mean, std_dev=std_dev)
        self._nodes[node_id] = updated
        return updated

    def rename(self, node_id: NodeId, name: str) -> GaussianDistribution | None:
        node = self._nodes.get(node_id)
        if node is None:
            return None
        renamed = node.with_name(name)
        self._nodes[node_id] = renamed
        return renamed

    # --------------------------------------------------------------------- #
    # Recomputation
    # --------------------------------------------------------------------- #

    def recompute_products(self) -> list[NodeId]:
        """
        Refresh every product from its parents' current values.

        Products are processed in topological order, so chains of products
        converge in one call. A product with a dangling parent is left
        untouched, as is a product without parents.

        Returns
        -------
        list[NodeId]
            Ids of the products whose values were recomputed, in processing
            order.
        """
        recomputed: list[NodeId] = []
        for node_id in topological_order(self._nodes):
            node = self._nodes[node_id]
            if not node.is_product or not node.parent_ids:
                continue

            missing = [pid for pid in node.parent_ids if pid not in self._nodes]
            if missing:
                logger.debug("Product %d keeps stale values: missing parents %s", node_id, missing)
                continue

            self._nodes[node_id] = make_product(
                id=node_id,
                name=node.name,
                parent_ids=node.parent_ids,
                parent_values=[self._nodes[pid] for pid in node.parent_ids],
            )
            recomputed.append(node_id)
        return recomputed


__all__ = [
    "DistributionGraph",
]
