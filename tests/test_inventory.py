"""
Tests for the Species, TreeStatus, Tree, Plot and ForestInventory types.
"""
import dataclasses

import pytest

from forestinv.exceptions import InvalidDataError
from forestinv.inventory import ForestInventory, Plot
from forestinv.species import Species, TreeStatus
from forestinv.tree import Tree


STATUS_CASES = [
    pytest.param("Live", TreeStatus.LIVE, id="live_name"),
    pytest.param("l", TreeStatus.LIVE, id="live_letter"),
    pytest.param("DEAD", TreeStatus.DEAD, id="dead_upper"),
    pytest.param(" cut ", TreeStatus.CUT, id="cut_padded"),
    pytest.param("I", TreeStatus.INGROWTH, id="ingrowth_letter"),
]


class TestSpecies:

    def test_equality_by_code(self):
        assert Species("DF", "Douglas Fir") == Species("DF", "Doug-fir")
        assert hash(Species("DF", "a")) == hash(Species("DF", "b"))

    def test_str(self):
        assert str(Species("WH", "Western Hemlock")) == "Western Hemlock (WH)"


class TestTreeStatus:

    @pytest.mark.parametrize("text,expected", STATUS_CASES)
    def test_from_string(self, text, expected):
        assert TreeStatus.from_string(text) is expected

    def test_unknown_status(self):
        with pytest.raises(InvalidDataError, match="tree status"):
            TreeStatus.from_string("missing")

    def test_str_is_value(self):
        assert str(TreeStatus.DEAD) == "Dead"


class TestTree:

    def test_only_live_trees_are_live(self, douglas_fir):
        statuses = {s: Tree(1, 1, douglas_fir, dbh=10.0, status=s).is_live for s in TreeStatus}
        assert statuses == {
            TreeStatus.LIVE: True,
            TreeStatus.DEAD: False,
            TreeStatus.CUT: False,
            TreeStatus.INGROWTH: False,
        }

    def test_tree_is_immutable(self, douglas_fir):
        tree = Tree(1, 1, douglas_fir, dbh=10.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            tree.dbh = 11.0

    def test_to_dict(self, douglas_fir):
        data = Tree(3, 9, douglas_fir, dbh=10.0, height=60.0).to_dict()
        assert data['species_code'] == "DF"
        assert data['status'] == "Live"
        assert data['expansion_factor'] == 1.0


class TestPlot:

    def test_per_acre_weight(self, douglas_fir_inventory):
        plot = douglas_fir_inventory.plots[0]
        assert plot.per_acre_weight(plot.trees[0]) == pytest.approx(25.0)

    def test_totals_match_single_metric_helpers(self, mixed_inventory):
        for plot in mixed_inventory.plots:
            totals = plot.totals()
            assert totals.tpa == pytest.approx(plot.trees_per_acre())
            assert totals.basal_area == pytest.approx(plot.basal_area_per_acre())
            assert totals.volume_cuft == pytest.approx(plot.volume_cuft_per_acre())

    def test_dead_trees_excluded(self, mixed_inventory):
        plot1 = mixed_inventory.plots[0]
        # DF 14", WH 10" at 10 TPA each and RC 5.3" at 20 TPA
        assert plot1.trees_per_acre() == pytest.approx(40.0)
        assert len(plot1.live_trees()) == 3

    def test_quadratic_mean_diameter(self, douglas_fir_inventory):
        assert douglas_fir_inventory.plots[0].quadratic_mean_diameter() == pytest.approx(12.0)

    def test_empty_plot(self):
        plot = Plot(plot_id="A", size_acres=0.1)
        assert plot.totals() == (0.0, 0.0, 0.0, 0.0)
        assert plot.quadratic_mean_diameter() == 0.0

    def test_trees_stored_as_tuple(self, douglas_fir):
        plot = Plot(plot_id=1, size_acres=0.1, trees=[Tree(1, 1, douglas_fir, dbh=5.0)])
        assert isinstance(plot.trees, tuple)


class TestForestInventory:

    def test_counts(self, mixed_inventory):
        assert mixed_inventory.num_plots == 3
        assert mixed_inventory.num_trees == 10
        assert mixed_inventory.num_live_trees == 7

    def test_species_list_sorted_by_code(self, mixed_inventory):
        codes = [s.code for s in mixed_inventory.species_list()]
        assert codes == ["DF", "RC", "WH"]

    def test_iter_live_trees(self, mixed_inventory):
        pairs = list(mixed_inventory.iter_live_trees())
        assert len(pairs) == 7
        assert all(tree.is_live and tree.plot_id == plot.plot_id for plot, tree in pairs)

    def test_means(self, douglas_fir_inventory):
        assert douglas_fir_inventory.mean_tpa() == pytest.approx(25.0)
        assert douglas_fir_inventory.mean_basal_area() == pytest.approx(19.635, abs=1e-3)

    def test_empty_means_are_zero(self, empty_inventory):
        assert empty_inventory.mean_tpa() == 0.0
        assert empty_inventory.mean_volume_bdft() == 0.0
        assert empty_inventory.plot_totals() == []

    def test_to_dict(self, mixed_inventory):
        data = mixed_inventory.to_dict()
        assert data['name'] == "Mixed Conifer"
        assert len(data['plots']) == 3
        assert len(data['plots'][0]['trees']) == 4

    def test_inventory_is_immutable(self, mixed_inventory):
        assert isinstance(mixed_inventory.plots, tuple)
        with pytest.raises(dataclasses.FrozenInstanceError):
            mixed_inventory.name = "Other"

    def test_string_plot_ids(self, douglas_fir):
        inv = ForestInventory("ids", plots=[Plot("P-1", 0.05, [Tree("P-1", "T1", douglas_fir, 8.0)])])
        assert inv.plots[0].trees_per_acre() == pytest.approx(20.0)
