"""
Fusion Algebra
==============

Precision-weighted combination of independent Gaussian beliefs.

The product of Gaussian densities ``N(μ_i, σ_i²)``, renormalised, is again a
Gaussian with

    precision  τ = Σ 1/σ_i²
    mean       μ = Σ μ_i/σ_i² / τ
    variance   σ² = 1/τ

A parent with a small σ (high precision) dominates the fused mean.

Precisions are accumulated relative to the smallest parent σ, so the fusion
stays finite for any positive σ, including ones whose ``1/σ²`` overflows.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, NamedTuple

from pysatl_fusion.distributions.distribution import GaussianDistribution
from pysatl_fusion.distributions.parametrizations import MeanPrec, MeanStd

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pysatl_fusion.types import NodeId


class FusionResult(NamedTuple):
    """
    Mean and variance of a fused Gaussian.

    Compares equal to a plain ``(mean, variance)`` tuple.
    """

    mean: float
    variance: float

    @property
    def std_dev(self) -> float:
        return math.sqrt(self.variance)


EMPTY_FUSION = FusionResult(mean=0.0, variance=1.0)
"""Result returned for an empty parent list (compatibility convention)."""


def _fused_parameters(parents: Sequence[GaussianDistribution]) -> tuple[MeanStd, float]:
    """Fused mean/std and variance of a non-empty parent list."""
    for parent in parents:
        parent.validate()

    reference = min(parent.std_dev for parent in parents)
    precision_sum = 0.0
    weighted_mean_sum = 0.0
    for parent in parents:
        belief = parent.to_precision(scale=reference)
        precision_sum += belief.tau
        weighted_mean_sum += belief.mu * belief.tau

    fused = MeanPrec(mu=weighted_mean_sum / precision_sum, tau=precision_sum)
    fused.validate()
    variance = reference * reference / precision_sum
    return fused.transform_to_base_parametrization(scale=reference), variance


def fuse(parents: Sequence[GaussianDistribution]) -> FusionResult:
    """
    Fuse independent Gaussians by multiplying their densities.

    Parameters
    ----------
    parents : Sequence[GaussianDistribution]
        Distributions to combine. Repeated entries are counted repeatedly.

    Returns
    -------
    FusionResult
        ``(mean, variance)`` of the renormalised product. An empty input
        yields ``(0.0, 1.0)``.

    Raises
    ------
    InvalidParameterError
        If any parent has a non-positive standard deviation.
    """
    if not parents:
        return EMPTY_FUSION

    fused, variance = _fused_parameters(parents)
    return FusionResult(mean=fused.mu, variance=variance)


def make_product(
    id: NodeId,
    name: str,
    parent_ids: Iterable[NodeId],
    parent_values: Sequence[GaussianDistribution],
) -> GaussianDistribution:
    """
    Build a product node from its parents' current values.

    Parameters
    ----------
    id : NodeId
        Identifier of the new node.
    name : str
        Display label.
    parent_ids : Iterable[NodeId]
        Parent identifiers, stored verbatim (order and duplicates kept).
    parent_values : Sequence[GaussianDistribution]
        Parent distributions used for the fusion.

    Returns
    -------
    GaussianDistribution
        Node of kind ``PRODUCT``. An empty ``parent_values`` gives ``N(0, 1)``.
    """
    if parent_values:
        fused, _ = _fused_parameters(parent_values)
    else:
        fused = MeanStd(mu=EMPTY_FUSION.mean, sigma=EMPTY_FUSION.std_dev)
    return GaussianDistribution.product(
        id=id,
        name=name,
        parent_ids=parent_ids,
        mean=fused.mu,
        std_dev=fused.sigma,
    )


__all__ = [
    "FusionResult",
    "EMPTY_FUSION",
    "fuse",
    "make_product",
]
