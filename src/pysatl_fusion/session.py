"""
Session facade.

:class:`Session` is the entry point for a rendering or UI layer. It owns a
:class:`~pysatl_fusion.graph.DistributionGraph`, the display flags, the
pending fusion selection and the current viewport, and it recomputes products
after every mutation so that any sample it hands out is consistent.
"""

from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from pysatl_fusion import codec
from pysatl_fusion.codec import DisplaySettings, Snapshot
from pysatl_fusion.config import DEFAULT_CONFIG
from pysatl_fusion.distributions.sampling import (
    curve_points,
    fill_polygon,
    std_markers,
    visible_std_markers,
)
from pysatl_fusion.graph.graph import DistributionGraph
from pysatl_fusion.types import PeakReference
from pysatl_fusion.viewport import auto_fit, plot_range

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_fusion.config import FusionConfig
    from pysatl_fusion.distributions.distribution import GaussianDistribution
    from pysatl_fusion.distributions.sampling import PointSample, StdMarker
    from pysatl_fusion.types import NodeId
    from pysatl_fusion.viewport import Bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PlotLayer:
    """
    Everything a renderer needs to draw one node.

    Parameters
    ----------
    node_id : NodeId
        Identifier of the node.
    name : str
        Display label.
    is_product : bool
        Whether the node is derived.
    curve : PointSample
        Density curve over the current plot range.
    fill : PointSample or None
        Area polygon, ``None`` when shading is disabled.
    markers : list of StdMarker
        Visible standard-deviation markers, empty when markers are disabled.
    """

    node_id: NodeId
    name: str
    is_product: bool
    curve: PointSample
    fill: PointSample | None
    markers: list[StdMarker]


class Session:
    """
    Distribution graph plus the state a viewer keeps around it.

    Parameters
    ----------
    config : FusionConfig, optional
        Engine configuration.
    graph : DistributionGraph, optional
        Initial graph. A new empty graph is created by default.
    display : DisplaySettings, optional
        Initial display flags.
    """

    def __init__(
        self,
        config: FusionConfig = DEFAULT_CONFIG,
        *,
        graph: DistributionGraph | None = None,
        display: DisplaySettings | None = None,
    ) -> None:
        self.config = config
        self.graph = graph if graph is not None else DistributionGraph(config=config)
        self.display = display or DisplaySettings()
        self.bounds: Bounds | None = None
        self._selection: list[NodeId] = []

    # --------------------------------------------------------------------- #
    # Graph operations
    # --------------------------------------------------------------------- #

    def recompute(self) -> list[NodeId]:
        return self.graph.recompute_products()

    def ensure_default_leaf(self) -> NodeId | None:
        """Add a default leaf if the graph is empty; return its id."""
        if len(self.graph):
            return None
        return self.add_leaf()

    def add_leaf(
        self,
        name: str | None = None,
        mean: float | None = None,
        std_dev: float | None = None,
    ) -> NodeId:
        node_id = self.graph.add_leaf(name, mean, std_dev)
        self.recompute()
        return node_id

    def edit_leaf(
        self,
        node_id: NodeId,
        *,
        mean: float | None = None,
        std_dev: float | None = None,
    ) -> GaussianDistribution | None:
        """
        Change the parameters of a leaf, clamped to the configured bounds.

        A value outside the bounds is clamped and reported with a
        :class:`UserWarning`. Unknown ids are a no-op.

        Raises
        ------
        DerivedNodeError
            If the node is a product.
        """
        node = self.graph.get(node_id)
        if node is None:
            return None

        # products are rejected by the graph below, without clamping
        if node.is_leaf:
            if mean is not None:
                mean = self._clamped(mean, self.config.clamp_mean(mean), "mean")
            if std_dev is not None:
                std_dev = self._clamped(std_dev, self.config.clamp_std_dev(std_dev), "std_dev")

        updated = self.graph.set_leaf_parameters(node_id, mean=mean, std_dev=std_dev)
        if updated is not None:
            self.recompute()
        return updated

    @staticmethod
    def _clamped(value: float, clamped: float, what: str) -> float:
        if clamped != value:
            warnings.warn(
                f"{what} {value} is outside the allowed range and was clamped to {clamped}",
                UserWarning,
                stacklevel=3,
            )
        return clamped

    def rename(self, node_id: NodeId, name: str) -> GaussianDistribution | None:
        return self.graph.rename(node_id, name)

    def fuse(self, ids: Iterable[NodeId], name: str | None = None) -> NodeId:
        """
        Create a product of ``ids``.

        Raises
        ------
        InsufficientParentsError
            If fewer than two ids resolve.
        """
        node_id = self.graph.fuse(ids, name)
        self.recompute()
        return node_id

    def delete(self, node_id: NodeId) -> bool:
        """Delete a node and drop it from the fusion selection."""
        self._selection = [selected for selected in self._selection if selected != node_id]
        removed = self.graph.delete(node_id)
        if removed:
            self.recompute()
        return removed

    # --------------------------------------------------------------------- #
    # Fusion selection
    # --------------------------------------------------------------------- #

    @property
    def selection(self) -> tuple[NodeId, ...]:
        """Ids selected for fusion, in selection order."""
        return tuple(self._selection)

    def toggle_selection(self, node_id: NodeId, selected: bool | None = None) -> bool:
        """
        Add or remove a node from the fusion selection.

        Parameters
        ----------
        node_id : NodeId
            Node to (de)select. Unknown ids are ignored.
        selected : bool, optional
            Desired state; flips the current state when omitted.

        Returns
        -------
        bool
            Whether the node is selected afterwards.
        """
        if node_id not in self.graph:
            return False
        is_selected = node_id in self._selection
        want = not is_selected if selected is None else selected
        if want and not is_selected:
            self._selection.append(node_id)
        elif not want and is_selected:
            self._selection.remove(node_id)
        return want

    def clear_selection(self) -> None:
        self._selection.clear()

    def fuse_selection(self, name: str | None = None) -> NodeId:
        """
        Fuse the selected nodes and clear the selection.

        Raises
        ------
        InsufficientParentsError
            If fewer than two selected ids resolve; the selection is kept.
        """
        node_id = self.fuse(self._selection, name)
        self._selection.clear()
        return node_id

    # --------------------------------------------------------------------- #
    # Display
    # --------------------------------------------------------------------- #

    def update_display(self, **changes: Any) -> DisplaySettings:
        """
        Change display flags.

        ``shading_opacity`` is clamped to ``[0, 1]``.
        """
        if "shading_opacity" in changes:
            changes["shading_opacity"] = min(max(float(changes["shading_opacity"]), 0.0), 1.0)
        self.display = replace(self.display, **changes)
        return self.display

    def auto_fit(self, peak_from: PeakReference | str = PeakReference.WIDEST) -> Bounds | None:
        """Fit the viewport to all nodes; keeps the current bounds if there are none."""
        bounds = auto_fit(
            self.graph,
            peak_from=peak_from,
            margin_sigmas=self.config.fit_margin_sigmas,
            headroom=self.config.fit_headroom,
        )
        if bounds is not None:
            self.bounds = bounds
        return bounds

    def reset_view(self) -> None:
        self.bounds = None

    def plot_range(self) -> tuple[float, float]:
        return plot_range(self.bounds, self.config.default_x_range)

    # --------------------------------------------------------------------- #
    # Sampling
    # --------------------------------------------------------------------- #

    def curve_points(self, node_id: NodeId, n: int | None = None) -> PointSample:
        """
        Curve samples of a node over the current plot range.

        Raises
        ------
        KeyError
            If ``node_id`` is unknown.
        """
        x_min, x_max = self.plot_range()
        count = self.config.curve_points if n is None else n
        return curve_points(self.graph[node_id], x_min, x_max, count)

    def fill_polygon(self, node_id: NodeId, n: int | None = None) -> PointSample:
        x_min, x_max = self.plot_range()
        count = self.config.fill_points if n is None else n
        return fill_polygon(self.graph[node_id], x_min, x_max, count)

    def std_markers(self, node_id: NodeId) -> list[float]:
        return std_markers(self.graph[node_id])

    def layers(self) -> list[PlotLayer]:
        """Render data for every node, honouring the display flags."""
        x_min, x_max = self.plot_range()
        result: list[PlotLayer] = []
        for node in self.graph:
            result.append(
                PlotLayer(
                    node_id=node.id,
                    name=node.name,
                    is_product=node.is_product,
                    curve=curve_points(node, x_min, x_max, self.config.curve_points),
                    fill=(
                        fill_polygon(node, x_min, x_max, self.config.fill_points)
                        if self.display.show_shading
                        else None
                    ),
                    markers=(
                        visible_std_markers(node, x_min, x_max)
                        if self.display.show_std_markers
                        else []
                    ),
                )
            )
        return result

    # --------------------------------------------------------------------- #
    # Persistence
    # --------------------------------------------------------------------- #

    def snapshot(self) -> Snapshot:
        return Snapshot.from_graph(self.graph, self.display)

    def save(self) -> str:
        """Serialize the session to JSON text."""
        return codec.encode(self.snapshot())

    def restore(self, snapshot: Snapshot) -> None:
        """Replace graph and display flags; clears the fusion selection."""
        self.graph = snapshot.to_graph(self.config)
        self.display = snapshot.display
        self._selection.clear()
        logger.debug("Restored session with %d distributions", len(self.graph))

    def load(self, text: str | bytes) -> None:
        """
        Replace the session state with a saved one.

        Raises
        ------
        DecodeError
            If ``text`` is malformed. The session is left unchanged.
        """
        self.restore(codec.decode(text))


__all__ = [
    "PlotLayer",
    "Session",
]
