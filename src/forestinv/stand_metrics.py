"""
Stand metrics calculator for forestinv.

Aggregates the live trees of a ForestInventory into per-acre stand totals
and species composition.

Metrics include:
- Trees per acre (TPA)
- Basal Area (BA)
- Cubic and board foot volume per acre
- Quadratic Mean Diameter (QMD)
- Species composition by TPA and basal area

Each live tree contributes with weight expansion_factor / plot size; values
are summed over all plots and divided by the number of plots, i.e. the mean
of the per-plot densities. Dead, cut and ingrowth trees are excluded.
"""
import math
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional, Tuple

import pandas as pd

from .exceptions import InsufficientDataError
from .inventory import ForestInventory
from .logging_config import get_logger
from .species import Species
from .volume_library import calculate_tree_volume

__all__ = [
    'SpeciesComposition',
    'StandMetrics',
    'StandMetricsCalculator',
    'get_metrics_calculator',
    'compute_stand_metrics',
]

logger = get_logger(__name__)


@dataclass(frozen=True)
class SpeciesComposition:
    """Per-species share of the stand.

    Attributes:
        species: Species
        tpa: Trees per acre of this species
        basal_area: Basal area of this species (sq ft/acre)
        percent_of_total: Share of total stand basal area (percent)
        percent_tpa: Share of total stand TPA (percent)
        mean_dbh: TPA-weighted mean DBH (inches)
        mean_height: Mean measured height (feet), None if no heights
    """
    species: Species
    tpa: float
    basal_area: float
    percent_of_total: float
    percent_tpa: float = 0.0
    mean_dbh: float = 0.0
    mean_height: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['species'] = {'code': self.species.code, 'common_name': self.species.common_name}
        return data


@dataclass(frozen=True)
class StandMetrics:
    """Stand-level per-acre snapshot.

    Attributes:
        total_tpa: Live trees per acre
        total_basal_area: Basal area (sq ft/acre)
        total_volume_cuft: Net cubic foot volume per acre
        total_volume_bdft: Net Scribner board foot volume per acre
        quadratic_mean_diameter: QMD of live trees (inches)
        species_composition: Per-species entries, largest basal area first
        mean_height: Mean height of live trees with a height (feet)
    """
    total_tpa: float
    total_basal_area: float
    total_volume_cuft: float
    total_volume_bdft: float
    quadratic_mean_diameter: float
    species_composition: Tuple[SpeciesComposition, ...] = ()
    mean_height: Optional[float] = None

    def __post_init__(self):
        object.__setattr__(self, 'species_composition', tuple(self.species_composition))

    @property
    def num_species(self) -> int:
        """Number of species with live trees."""
        return len(self.species_composition)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            'total_tpa': self.total_tpa,
            'total_basal_area': self.total_basal_area,
            'total_volume_cuft': self.total_volume_cuft,
            'total_volume_bdft': self.total_volume_bdft,
            'quadratic_mean_diameter': self.quadratic_mean_diameter,
            'mean_height': self.mean_height,
            'num_species': self.num_species,
            'species_composition': [s.to_dict() for s in self.species_composition],
        }

    def species_dataframe(self) -> pd.DataFrame:
        """Species composition as a pandas DataFrame."""
        columns = ['species_code', 'common_name', 'tpa', 'basal_area',
                   'percent_of_total', 'percent_tpa', 'mean_dbh', 'mean_height']
        rows = [
            {
                'species_code': s.species.code,
                'common_name': s.species.common_name,
                'tpa': s.tpa,
                'basal_area': s.basal_area,
                'percent_of_total': s.percent_of_total,
                'percent_tpa': s.percent_tpa,
                'mean_dbh': s.mean_dbh,
                'mean_height': s.mean_height,
            }
            for s in self.species_composition
        ]
        return pd.DataFrame(rows, columns=columns)


class _SpeciesAccumulator:
    """Running sums for one species."""

    __slots__ = ('species', 'tpa', 'ba', 'dbh_weighted', 'height_sum', 'height_count')

    def __init__(self, species: Species):
        self.species = species
        self.tpa = 0.0
        self.ba = 0.0
        self.dbh_weighted = 0.0
        self.height_sum = 0.0
        self.height_count = 0


class StandMetricsCalculator:
    """Calculator for stand-level metrics.

    Stateless: the same instance can be used for any number of inventories,
    including from several threads at once.
    """

    def calculate(self, inventory: ForestInventory) -> StandMetrics:
        """Calculate all stand metrics in a single pass over the live trees.

        Args:
            inventory: Validated forest inventory

        Returns:
            StandMetrics snapshot

        Raises:
            InsufficientDataError: If the inventory has no plots
        """
        n_plots = inventory.num_plots
        if n_plots == 0:
            raise InsufficientDataError('stand metrics', required=1, available=0)

        sum_tpa = 0.0
        sum_ba = 0.0
        sum_cuft = 0.0
        sum_bdft = 0.0
        sum_dbh_sq_weighted = 0.0
        height_sum = 0.0
        height_count = 0
        by_species: Dict[str, _SpeciesAccumulator] = {}

        for plot, tree in inventory.iter_live_trees():
            weight = plot.per_acre_weight(tree)
            ba = tree.basal_area_sqft * weight
            volume = calculate_tree_volume(tree)

            sum_tpa += weight
            sum_ba += ba
            sum_cuft += volume.cubic_feet * weight
            sum_bdft += volume.board_feet * weight
            sum_dbh_sq_weighted += tree.dbh ** 2 * weight

            acc = by_species.get(tree.species.code)
            if acc is None:
                acc = by_species[tree.species.code] = _SpeciesAccumulator(tree.species)
            acc.tpa += weight
            acc.ba += ba
            acc.dbh_weighted += tree.dbh * weight
            if tree.height is not None:
                acc.height_sum += tree.height
                acc.height_count += 1
                height_sum += tree.height
                height_count += 1

        total_tpa = sum_tpa / n_plots
        total_ba = sum_ba / n_plots

        qmd = math.sqrt(sum_dbh_sq_weighted / sum_tpa) if sum_tpa > 0 else 0.0
        mean_height = height_sum / height_count if height_count else None

        composition = self._build_composition(by_species, n_plots, total_tpa, total_ba)

        logger.debug(
            "Stand metrics for '%s': %d plots, TPA %.1f, BA %.2f, QMD %.2f",
            inventory.name, n_plots, total_tpa, total_ba, qmd
        )

        return StandMetrics(
            total_tpa=total_tpa,
            total_basal_area=total_ba,
            total_volume_cuft=sum_cuft / n_plots,
            total_volume_bdft=sum_bdft / n_plots,
            quadratic_mean_diameter=qmd,
            species_composition=composition,
            mean_height=mean_height,
        )

    @staticmethod
    def _build_composition(
        by_species: Dict[str, _SpeciesAccumulator],
        n_plots: int,
        total_tpa: float,
        total_ba: float
    ) -> List[SpeciesComposition]:
        """Convert per-species running sums to composition entries.

        Args:
            by_species: Accumulators keyed by species code
            n_plots: Number of plots in the inventory
            total_tpa: Stand TPA
            total_ba: Stand basal area

        Returns:
            Entries sorted by basal area (descending), then species code
        """
        composition = []
        for acc in by_species.values():
            tpa = acc.tpa / n_plots
            ba = acc.ba / n_plots
            composition.append(SpeciesComposition(
                species=acc.species,
                tpa=tpa,
                basal_area=ba,
                percent_of_total=(ba / total_ba) * 100.0 if total_ba > 0 else 0.0,
                percent_tpa=(tpa / total_tpa) * 100.0 if total_tpa > 0 else 0.0,
                mean_dbh=acc.dbh_weighted / acc.tpa if acc.tpa > 0 else 0.0,
                mean_height=acc.height_sum / acc.height_count if acc.height_count else None,
            ))
        composition.sort(key=lambda s: (-s.basal_area, s.species.code))
        return composition


# Module-level convenience functions
_default_calculator: Optional[StandMetricsCalculator] = None


def get_metrics_calculator() -> StandMetricsCalculator:
    """Get or create the shared metrics calculator instance."""
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = StandMetricsCalculator()
    return _default_calculator


def compute_stand_metrics(inventory: ForestInventory) -> StandMetrics:
    """Calculate stand metrics for an inventory.

    Convenience function that uses the default calculator.

    Args:
        inventory: Validated forest inventory

    Returns:
        StandMetrics snapshot
    """
    return get_metrics_calculator().calculate(inventory)
