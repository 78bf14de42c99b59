from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses

import pytest

from pysatl_fusion.config import DEFAULT_CONFIG, FusionConfig


class TestFusionConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.mean_bounds == (-10.0, 10.0)
        assert DEFAULT_CONFIG.std_dev_bounds == (0.1, 5.0)
        assert DEFAULT_CONFIG.default_x_range == (-6.0, 6.0)
        assert (DEFAULT_CONFIG.curve_points, DEFAULT_CONFIG.fill_points) == (300, 300)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.curve_points = 10  # type: ignore[misc]

    @pytest.mark.parametrize(
        "value, expected", [(-11.0, -10.0), (10.5, 10.0), (3.25, 3.25), (-10.0, -10.0)]
    )
    def test_clamp_mean(self, value: float, expected: float) -> None:
        assert DEFAULT_CONFIG.clamp_mean(value) == expected

    @pytest.mark.parametrize("value, expected", [(0.0, 0.1), (-2.0, 0.1), (7.0, 5.0), (1.5, 1.5)])
    def test_clamp_std_dev(self, value: float, expected: float) -> None:
        assert DEFAULT_CONFIG.clamp_std_dev(value) == expected

    def test_names_are_one_based(self) -> None:
        assert DEFAULT_CONFIG.leaf_name(0) == "Gaussian 1"
        assert DEFAULT_CONFIG.product_name(6) == "Product 7"

    @pytest.mark.parametrize(
        "changes",
        [
            {"mean_bounds": (1.0, -1.0)},
            {"std_dev_bounds": (0.0, 5.0)},
            {"std_dev_bounds": (2.0, 1.0)},
            {"default_std_dev": 0.0},
            {"default_std_dev": float("inf")},
            {"curve_points": 1},
            {"fill_points": -1},
            {"default_x_range": (3.0, 3.0)},
            {"fit_margin_sigmas": -1.0},
            {"fit_headroom": 0.0},
        ],
    )
    def test_rejects_inconsistent_settings(self, changes: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            FusionConfig(**changes)  # type: ignore[arg-type]
