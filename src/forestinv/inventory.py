"""
Plot and inventory containers.

A ForestInventory owns its plots and a Plot owns its trees. Both are frozen
once constructed, so an inventory can be shared read-only by several
analyses running at the same time.

Per-acre conversion: each live tree contributes with weight
``expansion_factor / plot.size_acres``. Stand values are the arithmetic mean
of the per-plot values.
"""
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

from .species import Species
from .tree import Tree
from .volume_library import calculate_tree_volume

__all__ = [
    'PlotTotals',
    'Plot',
    'ForestInventory',
]

PlotId = Union[int, str]


class PlotTotals(NamedTuple):
    """Per-acre totals of the live trees on one plot."""
    tpa: float
    basal_area: float
    volume_cuft: float
    volume_bdft: float


@dataclass(frozen=True)
class Plot:
    """A sample plot.

    Attributes:
        plot_id: Plot identifier
        size_acres: Plot area in acres
        trees: Trees measured on this plot, in field order
        slope_percent: Ground slope in percent
        aspect_degrees: Aspect in degrees (0-360)
        elevation_ft: Elevation in feet
    """
    plot_id: PlotId
    size_acres: float
    trees: Tuple[Tree, ...] = ()
    slope_percent: Optional[float] = None
    aspect_degrees: Optional[float] = None
    elevation_ft: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'trees', tuple(self.trees))

    def live_trees(self) -> List[Tree]:
        """Get only live trees on this plot."""
        return [t for t in self.trees if t.is_live]

    def per_acre_weight(self, tree: Tree) -> float:
        """Trees per acre represented by one sample tree on this plot."""
        return tree.expansion_factor / self.size_acres

    def totals(self) -> PlotTotals:
        """Calculate all per-acre totals for this plot in a single pass."""
        tpa = 0.0
        ba = 0.0
        cuft = 0.0
        bdft = 0.0
        for tree in self.live_trees():
            weight = self.per_acre_weight(tree)
            volume = calculate_tree_volume(tree)
            tpa += weight
            ba += tree.basal_area_sqft * weight
            cuft += volume.cubic_feet * weight
            bdft += volume.board_feet * weight
        return PlotTotals(tpa, ba, cuft, bdft)

    def trees_per_acre(self) -> float:
        """Calculate live trees per acre for this plot."""
        return sum(self.per_acre_weight(t) for t in self.live_trees())

    def basal_area_per_acre(self) -> float:
        """Calculate live basal area per acre for this plot (sq ft/acre)."""
        return sum(t.basal_area_sqft * self.per_acre_weight(t) for t in self.live_trees())

    def volume_cuft_per_acre(self) -> float:
        """Calculate cubic foot volume per acre for this plot."""
        return self.totals().volume_cuft

    def volume_bdft_per_acre(self) -> float:
        """Calculate board foot volume per acre for this plot."""
        return self.totals().volume_bdft

    def quadratic_mean_diameter(self) -> float:
        """Calculate quadratic mean diameter (QMD) of live trees.

        QMD = sqrt(Σ(DBH² × w) / Σ w)

        Returns:
            QMD in inches, 0 if the plot has no live trees
        """
        live = self.live_trees()
        if not live:
            return 0.0
        weights = np.array([self.per_acre_weight(t) for t in live])
        dbh = np.array([t.dbh for t in live])
        return float(np.sqrt(np.sum(dbh ** 2 * weights) / np.sum(weights)))


@dataclass(frozen=True)
class ForestInventory:
    """A complete forest inventory dataset.

    Attributes:
        name: Name or identifier for this inventory
        plots: All plots in the inventory
        total_acres: Total tract area in acres, if known
    """
    name: str
    plots: Tuple[Plot, ...] = ()
    total_acres: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'plots', tuple(self.plots))

    @property
    def num_plots(self) -> int:
        """Total number of plots."""
        return len(self.plots)

    @property
    def num_trees(self) -> int:
        """Total number of measured trees, any status."""
        return sum(len(p.trees) for p in self.plots)

    @property
    def num_live_trees(self) -> int:
        """Total number of measured live trees."""
        return sum(len(p.live_trees()) for p in self.plots)

    def iter_live_trees(self) -> Iterator[Tuple[Plot, Tree]]:
        """Iterate over (plot, tree) pairs for every live tree."""
        for plot in self.plots:
            for tree in plot.live_trees():
                yield plot, tree

    def species_list(self) -> List[Species]:
        """Get all unique species across the inventory, sorted by code.

        Trees of every status are included.
        """
        unique: Dict[str, Species] = {}
        for plot in self.plots:
            for tree in plot.trees:
                unique.setdefault(tree.species.code, tree.species)
        return [unique[code] for code in sorted(unique)]

    def plot_totals(self) -> List[PlotTotals]:
        """Per-acre totals for every plot, in plot order."""
        return [p.totals() for p in self.plots]

    def _mean_of(self, values: Sequence[float]) -> float:
        if not self.plots:
            return 0.0
        return float(np.mean(values))

    def mean_tpa(self) -> float:
        """Mean trees per acre across all plots."""
        return self._mean_of([p.trees_per_acre() for p in self.plots])

    def mean_basal_area(self) -> float:
        """Mean basal area per acre across all plots (sq ft/acre)."""
        return self._mean_of([p.basal_area_per_acre() for p in self.plots])

    def mean_volume_cuft(self) -> float:
        """Mean cubic foot volume per acre across all plots."""
        return self._mean_of([p.volume_cuft_per_acre() for p in self.plots])

    def mean_volume_bdft(self) -> float:
        """Mean board foot volume per acre across all plots."""
        return self._mean_of([p.volume_bdft_per_acre() for p in self.plots])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to nested plain dictionaries."""
        return {
            'name': self.name,
            'total_acres': self.total_acres,
            'plots': [
                {
                    'plot_id': p.plot_id,
                    'size_acres': p.size_acres,
                    'slope_percent': p.slope_percent,
                    'aspect_degrees': p.aspect_degrees,
                    'elevation_ft': p.elevation_ft,
                    'trees': [t.to_dict() for t in p.trees],
                }
                for p in self.plots
            ],
        }
