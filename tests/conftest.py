"""
Shared pytest fixtures for forestinv tests.

This module provides the sample inventories used across the calculator,
growth and facade tests.
"""
import pytest

from forestinv.inventory import ForestInventory, Plot
from forestinv.species import Species, TreeStatus
from forestinv.tree import Tree


# =============================================================================
# Species Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def douglas_fir():
    return Species(code="DF", common_name="Douglas Fir")


@pytest.fixture(scope="session")
def western_hemlock():
    return Species(code="WH", common_name="Western Hemlock")


@pytest.fixture(scope="session")
def red_cedar():
    return Species(code="RC", common_name="Western Redcedar")


# =============================================================================
# Inventory Fixtures
# =============================================================================

@pytest.fixture
def douglas_fir_inventory(douglas_fir):
    """Two identical 0.2 acre plots, one live Douglas Fir on each.

    Each tree: DBH 12", height 80', expansion factor 5, so every plot
    carries 25 TPA and about 19.635 sq ft/acre of basal area.
    """
    plots = [
        Plot(plot_id=plot_id, size_acres=0.2, trees=[
            Tree(plot_id=plot_id, tree_id=1, species=douglas_fir,
                 dbh=12.0, height=80.0, expansion_factor=5.0)
        ])
        for plot_id in (1, 2)
    ]
    return ForestInventory(name="Douglas Fir Test Stand", plots=plots)


@pytest.fixture
def mixed_inventory(douglas_fir, western_hemlock, red_cedar):
    """Three 0.1 acre plots with three species, a dead tree and a tree
    without a measured height.
    """
    plot1 = Plot(plot_id=1, size_acres=0.1, trees=[
        Tree(1, 1, douglas_fir, dbh=14.0, height=90.0, expansion_factor=1.0),
        Tree(1, 2, western_hemlock, dbh=10.0, height=70.0, expansion_factor=1.0),
        Tree(1, 3, douglas_fir, dbh=8.0, height=50.0, status=TreeStatus.DEAD),
        Tree(1, 4, red_cedar, dbh=5.3, height=30.0, expansion_factor=2.0),
    ])
    plot2 = Plot(plot_id=2, size_acres=0.1, trees=[
        Tree(2, 1, douglas_fir, dbh=16.0, height=100.0, expansion_factor=1.0,
             defect_fraction=0.1),
        Tree(2, 2, red_cedar, dbh=6.0, expansion_factor=1.0),
        Tree(2, 3, western_hemlock, dbh=9.5, height=65.0, status=TreeStatus.CUT),
    ])
    plot3 = Plot(plot_id=3, size_acres=0.1, trees=[
        Tree(3, 1, western_hemlock, dbh=12.0, height=80.0, expansion_factor=1.0),
        Tree(3, 2, douglas_fir, dbh=4.0, height=30.0, expansion_factor=1.0),
        Tree(3, 3, douglas_fir, dbh=2.0, height=12.0, status=TreeStatus.INGROWTH),
    ])
    return ForestInventory(name="Mixed Conifer", plots=[plot1, plot2, plot3],
                           total_acres=40.0)


@pytest.fixture
def single_plot_inventory(douglas_fir):
    """One 0.2 acre plot, too few for sampling statistics."""
    plot = Plot(plot_id=1, size_acres=0.2, trees=[
        Tree(1, 1, douglas_fir, dbh=12.0, height=80.0, expansion_factor=5.0)
    ])
    return ForestInventory(name="Single Plot", plots=[plot])


@pytest.fixture
def empty_inventory():
    """Inventory with no plots."""
    return ForestInventory(name="Empty")


@pytest.fixture
def no_live_trees_inventory(douglas_fir):
    """Two plots whose only trees are dead."""
    plots = [
        Plot(plot_id=i, size_acres=0.2, trees=[
            Tree(i, 1, douglas_fir, dbh=10.0, height=60.0, status=TreeStatus.DEAD)
        ])
        for i in (1, 2)
    ]
    return ForestInventory(name="Dead Stand", plots=plots)
