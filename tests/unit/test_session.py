from __future__ import annotations

__author__ = "PySATL Fusion contributors"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings

import pytest

from pysatl_fusion.codec import DisplaySettings
from pysatl_fusion.config import FusionConfig
from pysatl_fusion.errors import DecodeError, DerivedNodeError, InsufficientParentsError
from pysatl_fusion.session import Session
from pysatl_fusion.types import PeakReference


@pytest.fixture
def populated() -> Session:
    s = Session()
    s.add_leaf("A", 0.0, 1.0)
    s.add_leaf("B", 2.0, 1.0)
    s.fuse([0, 1], "A*B")
    return s


class TestSessionGraph:
    def test_ensure_default_leaf(self, session: Session) -> None:
        assert session.ensure_default_leaf() == 0
        assert session.ensure_default_leaf() is None

        node = session.graph[0]
        assert (node.name, node.mean, node.std_dev) == ("Gaussian 1", 0.0, 1.0)

    def test_edit_leaf_recomputes_products(self, populated: Session) -> None:
        populated.edit_leaf(1, mean=4.0)

        assert populated.graph[2].mean == pytest.approx(2.0)

    def test_edit_leaf_clamps_with_warning(self, populated: Session) -> None:
        with pytest.warns(UserWarning, match="clamped"):
            node = populated.edit_leaf(0, mean=25.0, std_dev=0.01)

        assert node is not None
        assert (node.mean, node.std_dev) == (10.0, 0.1)

    def test_edit_product_rejected(self, populated: Session) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(DerivedNodeError):
                populated.edit_leaf(2, mean=50.0)

    def test_edit_unknown_is_silent_noop(self, populated: Session) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert populated.edit_leaf(42, mean=25.0, std_dev=0.0) is None

        assert populated.graph[0].mean == 0.0

    def test_delete_keeps_product_stale(self, populated: Session) -> None:
        populated.edit_leaf(0, mean=-2.0)
        before = populated.graph[2]

        assert populated.delete(0)
        assert populated.graph[2] == before
        assert populated.delete(0) is False

    def test_custom_config_names_and_bounds(self) -> None:
        config = FusionConfig(
            mean_bounds=(-1.0, 1.0),
            leaf_name_template="L{number}",
            product_name_template="P{number}",
        )
        s = Session(config)
        a = s.add_leaf()
        b = s.add_leaf()
        p = s.fuse([a, b])

        assert [s.graph[i].name for i in (a, b, p)] == ["L1", "L2", "P3"]
        with pytest.warns(UserWarning):
            s.edit_leaf(a, mean=3.0)
        assert s.graph[a].mean == 1.0


class TestSelection:
    def test_toggle_and_fuse(self, populated: Session) -> None:
        assert populated.toggle_selection(0)
        assert populated.toggle_selection(2)
        assert populated.selection == (0, 2)

        p = populated.fuse_selection()

        assert populated.graph[p].parent_ids == (0, 2)
        assert populated.graph[p].name == "Product 4"
        assert populated.selection == ()

    def test_toggle_off_and_explicit_state(self, populated: Session) -> None:
        populated.toggle_selection(1)
        assert populated.toggle_selection(1) is False
        assert populated.toggle_selection(1, selected=True) is True
        assert populated.toggle_selection(1, selected=True) is True
        assert populated.selection == (1,)

    def test_unknown_ids_not_selectable(self, populated: Session) -> None:
        assert populated.toggle_selection(99) is False
        assert populated.selection == ()

    def test_fuse_selection_needs_two(self, populated: Session) -> None:
        populated.toggle_selection(0)

        with pytest.raises(InsufficientParentsError):
            populated.fuse_selection()

        assert populated.selection == (0,)
        assert len(populated.graph) == 3

    def test_delete_prunes_selection(self, populated: Session) -> None:
        populated.toggle_selection(0)
        populated.toggle_selection(1)

        populated.delete(0)

        assert populated.selection == (1,)

    def test_clear_selection(self, populated: Session) -> None:
        populated.toggle_selection(0)
        populated.clear_selection()

        assert populated.selection == ()


class TestViewAndSampling:
    def test_default_plot_range(self, populated: Session) -> None:
        assert populated.plot_range() == (-6.0, 6.0)

    def test_auto_fit_and_reset(self, populated: Session) -> None:
        bounds = populated.auto_fit()

        assert bounds is not None
        assert populated.plot_range() == (-4.0, 6.0)

        populated.reset_view()
        assert populated.plot_range() == (-6.0, 6.0)

    def test_auto_fit_empty_keeps_bounds(self, session: Session) -> None:
        assert session.auto_fit() is None
        assert session.bounds is None

    def test_auto_fit_narrowest(self, populated: Session) -> None:
        bounds = populated.auto_fit(PeakReference.NARROWEST)

        assert bounds is not None
        assert bounds.y_max == pytest.approx(populated.graph[2].peak_density * 1.1)

    def test_curve_and_fill_use_plot_range(self, populated: Session) -> None:
        curve = populated.curve_points(0)
        fill = populated.fill_polygon(0, n=10)

        assert len(curve) == 300
        assert curve[0][0] == -6.0
        assert curve[-1][0] == 6.0
        assert len(fill) == 12
        assert populated.std_markers(2)[3] == populated.graph[2].mean

    def test_unknown_node_sampling(self, populated: Session) -> None:
        with pytest.raises(KeyError):
            populated.curve_points(99)

    def test_layers_follow_display_flags(self, populated: Session) -> None:
        layers = populated.layers()

        assert [layer.node_id for layer in layers] == [0, 1, 2]
        assert all(layer.fill is not None for layer in layers)
        assert [m.position for m in layers[1].markers] == [-1.0, 0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
        assert layers[2].is_product

        populated.update_display(show_shading=False, show_std_markers=False)
        layers = populated.layers()

        assert all(layer.fill is None and layer.markers == [] for layer in layers)

    def test_opacity_clamped(self, session: Session) -> None:
        assert session.update_display(shading_opacity=3.0).shading_opacity == 1.0
        assert session.update_display(shading_opacity=-1).shading_opacity == 0.0


class TestPersistence:
    def test_save_load_round_trip(self, populated: Session) -> None:
        populated.update_display(shading_opacity=0.5, show_std_markers=False)
        text = populated.save()

        other = Session()
        other.load(text)

        assert other.graph == populated.graph
        assert other.display == DisplaySettings(
            show_shading=True, shading_opacity=0.5, show_std_markers=False
        )
        assert other.add_leaf() == 3

    def test_load_clears_selection(self, populated: Session) -> None:
        text = populated.save()
        populated.toggle_selection(0)

        populated.load(text)

        assert populated.selection == ()

    def test_load_does_not_recompute(self, populated: Session) -> None:
        populated.graph.set_leaf_parameters(0, mean=5.0)
        stale = populated.graph[2]

        populated.load(populated.save())

        assert populated.graph[2] == stale

    def test_failed_load_leaves_state(self, populated: Session) -> None:
        populated.toggle_selection(1)
        graph_before = populated.graph.copy()
        display_before = populated.display

        with pytest.raises(DecodeError):
            populated.load('{"distributions": {}, "next_id": "x"}')

        assert populated.graph == graph_before
        assert populated.display == display_before
        assert populated.selection == (1,)
