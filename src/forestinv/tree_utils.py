"""
Tree utility functions for forestinv.

Provides the basal area calculation shared by the stand metrics, sampling
statistics and diameter distribution modules so all three produce the same
totals from the same trees.
"""
import math

__all__ = [
    'BASAL_AREA_FACTOR',
    'calculate_tree_basal_area',
]


# Basal area constant: pi / 576 (converts DBH in inches to BA in square feet)
# Formula: BA = pi * (DBH/24)^2 = pi * DBH^2 / 576
BASAL_AREA_FACTOR = math.pi / 576.0  # Approximately 0.005454


def calculate_tree_basal_area(dbh: float) -> float:
    """Calculate basal area for a single tree.

    Basal area is the cross-sectional area of a tree at breast height (4.5 feet).
    Formula: BA = pi * (DBH/24)^2 = pi * DBH^2 / 576

    Args:
        dbh: Diameter at breast height in inches

    Returns:
        Basal area in square feet
    """
    return BASAL_AREA_FACTOR * dbh * dbh
