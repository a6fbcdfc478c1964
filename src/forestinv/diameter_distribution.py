"""
Diameter distribution (stand table by diameter class).

Each live tree falls in exactly one class [k·w, (k+1)·w) with
k = floor(DBH / w). Class TPA and basal area use the same per-acre weighting
as the stand metrics, so the class totals add up to the stand totals.
"""
import math
from collections import defaultdict
from dataclasses import dataclass, asdict
from typing import Dict, Tuple, Any

import pandas as pd

from .exceptions import validate_positive
from .inventory import ForestInventory

__all__ = [
    'DiameterClass',
    'DiameterDistribution',
    'build_diameter_distribution',
]


@dataclass(frozen=True)
class DiameterClass:
    """A single diameter class.

    Attributes:
        lower_bound: Lower bound of the class (inclusive, inches)
        midpoint: Class midpoint (inches)
        upper_bound: Upper bound of the class (exclusive, inches)
        tpa: Trees per acre in this class
        basal_area: Basal area in this class (sq ft/acre)
        tree_count: Number of measured live trees in this class
    """
    lower_bound: float
    midpoint: float
    upper_bound: float
    tpa: float
    basal_area: float
    tree_count: int

    def contains(self, dbh: float) -> bool:
        return self.lower_bound <= dbh < self.upper_bound


@dataclass(frozen=True)
class DiameterDistribution:
    """Diameter classes in ascending order.

    Attributes:
        class_width: Width of each class (inches)
        classes: The diameter classes
    """
    class_width: float
    classes: Tuple[DiameterClass, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'classes', tuple(self.classes))

    @property
    def total_tree_count(self) -> int:
        return sum(c.tree_count for c in self.classes)

    @property
    def total_tpa(self) -> float:
        return sum(c.tpa for c in self.classes)

    @property
    def total_basal_area(self) -> float:
        return sum(c.basal_area for c in self.classes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'class_width': self.class_width,
            'classes': [asdict(c) for c in self.classes],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Stand table as a pandas DataFrame, one row per class."""
        columns = ['lower_bound', 'midpoint', 'upper_bound', 'tpa', 'basal_area', 'tree_count']
        return pd.DataFrame([asdict(c) for c in self.classes], columns=columns)


def _class_bound(k: int, class_width: float) -> float:
    # snaps k·w to the decimal it stands for, so 6 * 0.1 reads as 0.6
    return round(k * class_width, 10)


def _class_index(dbh: float, class_width: float) -> int:
    """Index k of the class [k·w, (k+1)·w) holding dbh.

    floor(dbh / w) can land one class off when the quotient rounds across
    an integer, so k is corrected against the same bounds the classes report.
    """
    k = math.floor(dbh / class_width)
    if _class_bound(k + 1, class_width) <= dbh:
        k += 1
    elif _class_bound(k, class_width) > dbh:
        k -= 1
    return k


def build_diameter_distribution(
    inventory: ForestInventory,
    class_width: float = 2.0,
    include_empty: bool = False
) -> DiameterDistribution:
    """Build a diameter distribution from the live trees of an inventory.

    Args:
        inventory: Validated forest inventory
        class_width: Width of each diameter class in inches (commonly 2)
        include_empty: If True, zero-filled classes are emitted for gaps
            between the smallest and largest occupied class. By default
            only classes containing at least one tree are returned.

    Returns:
        DiameterDistribution sorted ascending by lower bound

    Raises:
        InvalidArgumentError: If class_width is not a positive finite number
    """
    validate_positive(class_width, 'class_width')

    n_plots = inventory.num_plots
    if n_plots == 0:
        return DiameterDistribution(class_width=class_width)

    tpa_sums: Dict[int, float] = defaultdict(float)
    ba_sums: Dict[int, float] = defaultdict(float)
    counts: Dict[int, int] = defaultdict(int)

    for plot, tree in inventory.iter_live_trees():
        k = _class_index(tree.dbh, class_width)
        weight = plot.per_acre_weight(tree)
        tpa_sums[k] += weight
        ba_sums[k] += tree.basal_area_sqft * weight
        counts[k] += 1

    if not counts:
        return DiameterDistribution(class_width=class_width)

    if include_empty:
        indices = range(min(counts), max(counts) + 1)
    else:
        indices = sorted(counts)

    classes = []
    for k in indices:
        lower = _class_bound(k, class_width)
        classes.append(DiameterClass(
            lower_bound=lower,
            midpoint=lower + class_width / 2.0,
            upper_bound=_class_bound(k + 1, class_width),
            tpa=tpa_sums.get(k, 0.0) / n_plots,
            basal_area=ba_sums.get(k, 0.0) / n_plots,
            tree_count=counts.get(k, 0),
        ))

    return DiameterDistribution(class_width=class_width, classes=classes)
