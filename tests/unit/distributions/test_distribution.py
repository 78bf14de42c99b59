"""
Tests for Gaussian distribution nodes.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm

from pysatl_fusion.distributions.distribution import GaussianDistribution
from pysatl_fusion.errors import InvalidParameterError
from pysatl_fusion.types import NodeKind
from tests.unit.base import FusionTestBase


class TestGaussianDistribution(FusionTestBase):
    def test_leaf_defaults(self) -> None:
        node = self.make_normal(1.5, 0.5, node_id=7)

        assert node.id == 7
        assert node.kind is NodeKind.LEAF
        assert not node.is_product
        assert node.parent_ids == ()

    def test_product_constructor_keeps_parent_order(self) -> None:
        node = GaussianDistribution.product(
            id=3, name="p", parent_ids=[2, 0, 2], mean=1.0, std_dev=0.5
        )

        assert node.is_product
        assert node.parent_ids == (2, 0, 2)

    @pytest.mark.parametrize(
        "mean, std_dev, x",
        [(0.0, 1.0, 0.0), (0.0, 1.0, 1.3), (2.0, 0.5, 1.7), (-3.0, 4.0, 5.0)],
    )
    def test_evaluate_matches_scipy(self, mean: float, std_dev: float, x: float) -> None:
        node = self.make_normal(mean, std_dev)

        assert node.evaluate(x) == pytest.approx(norm.pdf(x, loc=mean, scale=std_dev), rel=1e-12)

    def test_evaluate_standard_normal_peak(self) -> None:
        node = self.make_normal(0.0, 1.0)

        assert node.evaluate(0.0) == pytest.approx(1.0 / math.sqrt(2.0 * math.pi), abs=1e-15)
        assert node.peak_density == pytest.approx(node.evaluate(0.0), rel=1e-15)

    @pytest.mark.parametrize("mean, std_dev", [(0.0, 1.0), (3.2, 0.1), (-7.0, 4.5)])
    @pytest.mark.parametrize("d", [0.0, 0.25, 1.0, 3.7])
    def test_evaluate_symmetric_around_mean(self, mean: float, std_dev: float, d: float) -> None:
        node = self.make_normal(mean, std_dev)

        assert node.evaluate(mean - d) == pytest.approx(node.evaluate(mean + d), rel=1e-12)

    def test_evaluate_vectorized(self) -> None:
        node = self.make_normal(1.0, 2.0)
        xs = np.linspace(-5.0, 5.0, 11)

        values = node.evaluate(xs)

        assert isinstance(values, np.ndarray)
        assert values.shape == xs.shape
        np.testing.assert_allclose(values, norm.pdf(xs, loc=1.0, scale=2.0), rtol=1e-12)

    def test_evaluate_scalar_returns_float(self) -> None:
        assert isinstance(self.make_normal(0.0, 1.0).evaluate(0.3), float)

    @pytest.mark.parametrize("std_dev", [0.0, -1.0, math.nan, math.inf])
    def test_evaluate_rejects_invalid_sigma(self, std_dev: float) -> None:
        node = GaussianDistribution(id=0, name="bad", mean=0.0, std_dev=std_dev)

        with pytest.raises(InvalidParameterError):
            node.evaluate(0.0)

    def test_leaf_constructor_rejects_non_positive_sigma(self) -> None:
        with pytest.raises(InvalidParameterError, match="sigma > 0"):
            GaussianDistribution.leaf(id=0, name="bad", mean=0.0, std_dev=0.0)

    def test_invalid_parameter_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            GaussianDistribution.leaf(id=0, name="bad", mean=0.0, std_dev=-2.0)

    def test_standard_deviation_markers(self) -> None:
        node = self.make_normal(5.0, 2.0)

        assert node.standard_deviation_markers() == [-1.0, 1.0, 3.0, 5.0, 7.0, 9.0, 11.0]

    def test_markers_evenly_spaced_with_mean_in_middle(self) -> None:
        node = self.make_normal(-1.25, 0.3)
        markers = node.standard_deviation_markers()

        assert len(markers) == 7
        assert markers[3] == node.mean
        np.testing.assert_allclose(np.diff(markers), 0.3, rtol=1e-12)

    def test_with_parameters_returns_validated_copy(self) -> None:
        node = self.make_normal(0.0, 1.0)

        updated = node.with_parameters(std_dev=2.0)

        assert updated.std_dev == 2.0
        assert updated.mean == 0.0
        assert node.std_dev == 1.0
        with pytest.raises(InvalidParameterError):
            node.with_parameters(std_dev=-0.5)

    def test_variance_and_precision(self) -> None:
        node = self.make_normal(0.0, 0.5)

        assert node.variance == pytest.approx(0.25)
        assert node.precision == pytest.approx(4.0)
        assert node.to_precision().tau == pytest.approx(4.0)
