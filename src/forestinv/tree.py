"""
Tree class representing an individual sample tree measurement.

Trees arrive already validated by the data readers; the analysis engine
trusts the field invariants (dbh > 0, expansion_factor > 0, height > 0 when
present, crown_ratio and defect_fraction within [0, 1]) and does not
re-check them.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .species import Species, TreeStatus
from .tree_utils import calculate_tree_basal_area
from .volume_library import VolumeEquation, DEFAULT_VOLUME_EQUATION, calculate_tree_volume

__all__ = ['Tree']

PlotId = Union[int, str]


@dataclass(frozen=True)
class Tree:
    """A single sample tree.

    Attributes:
        plot_id: Plot this tree belongs to
        tree_id: Tree identifier within the plot
        species: Species of the tree
        dbh: Diameter at breast height (inches)
        height: Total height (feet), None if not measured
        crown_ratio: Live crown ratio (0-1), None if not measured
        status: Live, Dead, Cut or Ingrowth
        expansion_factor: Number of trees per acre this sample tree
            represents before plot-size scaling
        age: Breast height age (years), None if not cored
        defect_fraction: Proportion of volume lost to defect (0-1)
        volume_equation: Volume coefficients for this tree
    """
    plot_id: PlotId
    tree_id: PlotId
    species: Species
    dbh: float
    height: Optional[float] = None
    crown_ratio: Optional[float] = None
    status: TreeStatus = TreeStatus.LIVE
    expansion_factor: float = 1.0
    age: Optional[int] = None
    defect_fraction: Optional[float] = None
    volume_equation: VolumeEquation = field(default=DEFAULT_VOLUME_EQUATION, repr=False)

    @property
    def is_live(self) -> bool:
        """Check if the tree is alive."""
        return self.status == TreeStatus.LIVE

    @property
    def basal_area_sqft(self) -> float:
        """Basal area of this single stem in square feet."""
        return calculate_tree_basal_area(self.dbh)

    def volume_cuft(self) -> float:
        """Net cubic foot volume of this single stem."""
        return calculate_tree_volume(self).cubic_feet

    def volume_bdft(self) -> float:
        """Net Scribner board foot volume of this single stem."""
        return calculate_tree_volume(self).board_feet

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            'plot_id': self.plot_id,
            'tree_id': self.tree_id,
            'species_code': self.species.code,
            'species_name': self.species.common_name,
            'dbh': self.dbh,
            'height': self.height,
            'crown_ratio': self.crown_ratio,
            'status': self.status.value,
            'expansion_factor': self.expansion_factor,
            'age': self.age,
            'defect_fraction': self.defect_fraction,
        }
