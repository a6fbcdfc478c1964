"""
Volume calculation module for forestinv.

Implements the combined-variable volume equations used for stand totals:
- Cubic feet:  V = b1 × D²H
- Board feet (Scribner approximation): V = b1 × D²H - b2 × D, zero below the
  merchantability diameter

where D = DBH (inches) and H = total height (feet). Coefficients are pure data
(VolumeEquation) attached to each tree or looked up by species code from the
packaged coefficient table.
"""
from dataclasses import dataclass
from typing import Dict, Any, Optional, List, TYPE_CHECKING

from .config_loader import load_volume_equations
from .logging_config import get_logger, log_data_quality

if TYPE_CHECKING:
    from .tree import Tree

__all__ = [
    'VolumeEquation',
    'VolumeResult',
    'VolumeCalculator',
    'VolumeLibrary',
    'DEFAULT_VOLUME_EQUATION',
    'calculate_tree_volume',
    'get_volume_library',
    'get_volume_equation',
]

logger = get_logger(__name__)

# Merchantability threshold for sawlog (board foot) volume
MIN_SAWLOG_DBH = 6.0  # inches


@dataclass(frozen=True)
class VolumeEquation:
    """Volume equation coefficients.

    Attributes:
        cuft_coefficient: Form factor b1 for cubic feet, V = b1 × D²H
        bdft_coefficient: b1 for board feet, V = b1 × D²H - b2 × D
        bdft_min_dbh: Minimum DBH (inches) for board foot merchantability
        bdft_dbh_coefficient: Linear Scribner correction b2 (0 disables it)
    """
    cuft_coefficient: float = 0.002454
    bdft_coefficient: float = 0.01159
    bdft_min_dbh: float = MIN_SAWLOG_DBH
    bdft_dbh_coefficient: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional['VolumeEquation'] = None) -> 'VolumeEquation':
        """Build an equation from a mapping, filling missing keys from ``base``."""
        base = base or cls()
        return cls(
            cuft_coefficient=float(data.get('cuft_coefficient', base.cuft_coefficient)),
            bdft_coefficient=float(data.get('bdft_coefficient', base.bdft_coefficient)),
            bdft_min_dbh=float(data.get('bdft_min_dbh', base.bdft_min_dbh)),
            bdft_dbh_coefficient=float(data.get('bdft_dbh_coefficient', base.bdft_dbh_coefficient)),
        )

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary."""
        return {
            'cuft_coefficient': self.cuft_coefficient,
            'bdft_coefficient': self.bdft_coefficient,
            'bdft_min_dbh': self.bdft_min_dbh,
            'bdft_dbh_coefficient': self.bdft_dbh_coefficient,
        }


DEFAULT_VOLUME_EQUATION = VolumeEquation()


@dataclass(frozen=True)
class VolumeResult:
    """Container for per-tree volume results.

    Attributes:
        cubic_feet: Net cubic foot volume of one tree
        board_feet: Net Scribner board foot volume of one tree
        height_available: False when the tree had no height and volume
            could not be computed
    """
    cubic_feet: float
    board_feet: float
    height_available: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for easy access."""
        return {
            'cubic_feet': self.cubic_feet,
            'board_feet': self.board_feet,
            'height_available': self.height_available,
        }


class VolumeCalculator:
    """Calculate tree volumes from one set of volume equation coefficients.

    Degenerate inputs (missing or non-positive height, sub-merchantable DBH)
    produce zero volume, never an error.
    """

    def __init__(self, equation: Optional[VolumeEquation] = None):
        """Initialize the calculator.

        Args:
            equation: Coefficients to use. Defaults to the general-purpose
                default equation.
        """
        self.equation = equation or DEFAULT_VOLUME_EQUATION

    @staticmethod
    def _defect_factor(defect_fraction: Optional[float]) -> float:
        if defect_fraction is None:
            return 1.0
        return 1.0 - defect_fraction

    def cubic_feet(self, dbh: float, height: Optional[float],
                   defect_fraction: Optional[float] = None) -> float:
        """Calculate net cubic foot volume.

        Args:
            dbh: Diameter at breast height (inches)
            height: Total height (feet), or None if not measured
            defect_fraction: Proportion of volume lost to defect (0-1)

        Returns:
            Cubic foot volume (0 if height is missing)
        """
        if height is None or height <= 0 or dbh <= 0:
            return 0.0
        gross = self.equation.cuft_coefficient * dbh * dbh * height
        return max(gross, 0.0) * self._defect_factor(defect_fraction)

    def board_feet(self, dbh: float, height: Optional[float],
                   defect_fraction: Optional[float] = None) -> float:
        """Calculate net Scribner board foot volume.

        Board foot volume is undefined for sub-merchantable stems and is
        reported as 0 below ``bdft_min_dbh``.

        Args:
            dbh: Diameter at breast height (inches)
            height: Total height (feet), or None if not measured
            defect_fraction: Proportion of volume lost to defect (0-1)

        Returns:
            Board foot volume (0 if height is missing or DBH is sub-merchantable)
        """
        eq = self.equation
        if height is None or height <= 0 or dbh < eq.bdft_min_dbh:
            return 0.0
        gross = eq.bdft_coefficient * dbh * dbh * height - eq.bdft_dbh_coefficient * dbh
        return max(gross, 0.0) * self._defect_factor(defect_fraction)

    def calculate(self, dbh: float, height: Optional[float],
                  defect_fraction: Optional[float] = None) -> VolumeResult:
        """Calculate both volumes for one stem."""
        return VolumeResult(
            cubic_feet=self.cubic_feet(dbh, height, defect_fraction),
            board_feet=self.board_feet(dbh, height, defect_fraction),
            height_available=height is not None,
        )


def calculate_tree_volume(tree: 'Tree') -> VolumeResult:
    """Calculate volumes for a tree using its own volume equation.

    A tree without a height is reported with zero volume and logged as a
    data-quality limitation.

    Args:
        tree: Tree record

    Returns:
        VolumeResult for one tree (not expanded to per-acre)
    """
    if tree.height is None:
        log_data_quality(logger, tree.plot_id, tree.tree_id,
                         "no height measured, volume reported as 0")
    calculator = VolumeCalculator(tree.volume_equation)
    return calculator.calculate(tree.dbh, tree.height, tree.defect_fraction)


class VolumeLibrary:
    """Species-specific volume equations loaded from configuration.

    Species entries in volume_equations.yaml inherit any coefficient they do
    not set from the default entry.

    Attributes:
        default_equation: Equation used for unknown species
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize the library.

        Args:
            config: Parsed coefficient table. Loaded from the packaged
                volume_equations.yaml if None.
        """
        if config is None:
            config = load_volume_equations()
        self.default_equation = VolumeEquation.from_dict(config.get('default', {}))
        self._equations: Dict[str, VolumeEquation] = {
            code.upper(): VolumeEquation.from_dict(values or {}, self.default_equation)
            for code, values in (config.get('species') or {}).items()
        }

    def get_equation(self, species_code: str) -> VolumeEquation:
        """Get the equation for a species, or the default equation."""
        return self._equations.get(species_code.strip().upper(), self.default_equation)

    def has_species(self, species_code: str) -> bool:
        """Check whether a species has its own coefficients."""
        return species_code.strip().upper() in self._equations

    def species_codes(self) -> List[str]:
        """Get a sorted list of species with their own coefficients."""
        return sorted(self._equations)


# Module-level convenience functions
_default_library: Optional[VolumeLibrary] = None


def get_volume_library() -> VolumeLibrary:
    """Get or create the volume library for the packaged coefficient table."""
    global _default_library
    if _default_library is None:
        _default_library = VolumeLibrary()
    return _default_library


def get_volume_equation(species_code: str) -> VolumeEquation:
    """Look up the volume equation for a species code.

    Args:
        species_code: Species code (case-insensitive)

    Returns:
        Species-specific VolumeEquation, or the default equation
    """
    return get_volume_library().get_equation(species_code)
