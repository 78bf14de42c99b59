"""
Gaussian distribution nodes.

A :class:`GaussianDistribution` is an immutable value describing one node of a
distribution graph: either a *leaf*, whose parameters are set by a caller, or
a *product*, whose parameters are derived from its parents by fusion and
stored as the last computed value.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, cast, overload

import numpy as np

from pysatl_fusion.distributions.parametrizations import MeanPrec, MeanStd
from pysatl_fusion.types import NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_fusion.types import FloatArray, NodeId, Number, NumericArray

SQRT_2PI = math.sqrt(2.0 * math.pi)
"""Normalisation constant of the Gaussian density."""

STD_MARKER_OFFSETS: tuple[int, ...] = (-3, -2, -1, 0, 1, 2, 3)
"""Offsets (in standard deviations) of the standard-deviation markers."""


@dataclass(frozen=True, slots=True)
class GaussianDistribution:
    """
    A single Gaussian node of a distribution graph.

    Parameters
    ----------
    id : NodeId
        Identifier of the node, unique within its graph.
    name : str
        Display label, not required to be unique.
    mean : float
        Mean (μ). For products this is the last computed value.
    std_dev : float
        Standard deviation (σ). For products this is the last computed value.
    parent_ids : tuple of NodeId
        Ordered parent identifiers. Duplicates are kept.
    kind : NodeKind
        Whether the node is a leaf or a product.

    Notes
    -----
    ``kind`` and ``parent_ids`` are stored independently: ``kind`` decides
    whether the node is editable, ``parent_ids`` are the edges consulted
    during recomputation.
    """

    id: NodeId
    name: str
    mean: float
    std_dev: float
    parent_ids: tuple[NodeId, ...] = field(default=())
    kind: NodeKind = NodeKind.LEAF

    @classmethod
    def leaf(cls, id: NodeId, name: str, mean: float, std_dev: float) -> GaussianDistribution:
        """Create a validated leaf node."""
        node = cls(id=id, name=name, mean=float(mean), std_dev=float(std_dev))
        node.validate()
        return node

    @classmethod
    def product(
        cls,
        id: NodeId,
        name: str,
        parent_ids: Iterable[NodeId],
        mean: float,
        std_dev: float,
    ) -> GaussianDistribution:
        """Create a product node with already computed parameters."""
        return cls(
            id=id,
            name=name,
            mean=float(mean),
            std_dev=float(std_dev),
            parent_ids=tuple(parent_ids),
            kind=NodeKind.PRODUCT,
        )

    @property
    def is_product(self) -> bool:
        return self.kind is NodeKind.PRODUCT

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def parameters(self) -> MeanStd:
        """Mean/standard deviation view of the node."""
        return MeanStd(mu=self.mean, sigma=self.std_dev)

    @property
    def variance(self) -> float:
        return self.std_dev * self.std_dev

    @property
    def precision(self) -> float:
        """Reciprocal of the variance; ``inf`` once ``1/σ²`` overflows."""
        return self.to_precision().tau

    @property
    def peak_density(self) -> float:
        """Density at the mean, ``1 / (σ√(2π))``."""
        self.validate()
        return 1.0 / (self.std_dev * SQRT_2PI)

    def to_precision(self, scale: float = 1.0) -> MeanPrec:
        return self.parameters.to_precision(scale)

    def validate(self) -> None:
        """
        Check the node parameters.

        Raises
        ------
        InvalidParameterError
            If σ is not a positive finite number or μ is not finite.
        """
        self.parameters.validate()

    def with_parameters(
        self, *, mean: float | None = None, std_dev: float | None = None
    ) -> GaussianDistribution:
        """
        Return a copy with updated mean and/or standard deviation.

        The copy is validated; the kind and edges are kept.
        """
        node = replace(
            self,
            mean=self.mean if mean is None else float(mean),
            std_dev=self.std_dev if std_dev is None else float(std_dev),
        )
        node.validate()
        return node

    def with_name(self, name: str) -> GaussianDistribution:
        return replace(self, name=name)

    @overload
    def evaluate(self, x: Number) -> float: ...
    @overload
    def evaluate(self, x: NumericArray) -> FloatArray: ...

    def evaluate(self, x: Number | NumericArray) -> float | FloatArray:
        """
        Probability density function.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) at which to evaluate the density.

        Returns
        -------
        float or FloatArray
            ``1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))`` for each point.

        Raises
        ------
        InvalidParameterError
            If σ ≤ 0.
        """
        self.validate()
        sigma = self.std_dev
        arr = np.asarray(x, dtype=float)

        coefficient = 1.0 / (sigma * SQRT_2PI)
        exponent = -((arr - self.mean) ** 2) / (2 * sigma**2)
        result = coefficient * np.exp(exponent)

        if np.ndim(arr) == 0:
            return float(result)
        return cast("FloatArray", result)

    def standard_deviation_markers(self) -> list[float]:
        """
        Positions ``μ + kσ`` for ``k = -3..3``.

        Returns
        -------
        list of float
            Seven ascending values; index 3 is the mean.
        """
        return [self.mean + k * self.std_dev for k in STD_MARKER_OFFSETS]


__all__ = [
    "GaussianDistribution",
    "SQRT_2PI",
    "STD_MARKER_OFFSETS",
]
