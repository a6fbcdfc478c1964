"""
Sampling statistics for forestinv.

Treats each plot as one sample of the stand and reports, for TPA, basal
area and both volumes, the mean of the per-plot values with a two-tailed
Student-t confidence interval:

    SE = s / sqrt(n)                     (s with n - 1 degrees of freedom)
    t  = t_{1 - alpha/2, n - 1}          (alpha = 1 - confidence level)
    CI = mean ± t × SE
    Sampling error % = t × SE / mean × 100

Per-plot values use the same per-acre weighting as the stand metrics, so
the interval means equal the stand totals.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from .exceptions import InsufficientDataError, validate_open_unit_interval
from .inventory import ForestInventory
from .logging_config import get_logger

__all__ = [
    'ConfidenceInterval',
    'SamplingStatistics',
    'compute_confidence_interval',
    'compute_sampling_statistics',
]

logger = get_logger(__name__)

MIN_PLOTS = 2


@dataclass(frozen=True)
class ConfidenceInterval:
    """Confidence interval for the mean of one metric.

    Attributes:
        mean: Mean of the per-plot values
        std_error: Standard error of the mean
        lower: Lower confidence limit
        upper: Upper confidence limit
        sampling_error_percent: Half-width as a percent of the mean
        confidence_level: Confidence level used (e.g. 0.95)
        sample_size: Number of plots
        t_value: Student-t critical value
    """
    mean: float
    std_error: float
    lower: float
    upper: float
    sampling_error_percent: float
    confidence_level: float
    sample_size: int
    t_value: float

    @property
    def margin(self) -> float:
        """Half-width of the interval (t × SE)."""
        return self.t_value * self.std_error

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SamplingStatistics:
    """Confidence intervals for the four stand metrics."""
    tpa: ConfidenceInterval
    basal_area: ConfidenceInterval
    volume_cuft: ConfidenceInterval
    volume_bdft: ConfidenceInterval

    def items(self):
        """(metric name, interval) pairs in reporting order."""
        return [
            ('tpa', self.tpa),
            ('basal_area', self.basal_area),
            ('volume_cuft', self.volume_cuft),
            ('volume_bdft', self.volume_bdft),
        ]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert to a JSON-serializable dictionary keyed by metric."""
        return {name: ci.to_dict() for name, ci in self.items()}

    def to_dataframe(self) -> pd.DataFrame:
        """One row per metric, indexed by metric name."""
        frame = pd.DataFrame([ci.to_dict() for _, ci in self.items()],
                             index=[name for name, _ in self.items()])
        frame.index.name = 'metric'
        return frame


def compute_confidence_interval(values: Sequence[float], confidence_level: float) -> ConfidenceInterval:
    """Compute a Student-t confidence interval for the mean of a sample.

    Args:
        values: Sample values (one per plot)
        confidence_level: Confidence level strictly between 0 and 1

    Returns:
        ConfidenceInterval

    Raises:
        InvalidArgumentError: If confidence_level is not in (0, 1)
        InsufficientDataError: If fewer than two values are given
    """
    validate_open_unit_interval(confidence_level, 'confidence_level')

    data = np.asarray(values, dtype=float)
    n = data.size
    if n < MIN_PLOTS:
        raise InsufficientDataError('confidence interval', required=MIN_PLOTS, available=n)

    mean = float(np.mean(data))
    std_error = float(np.std(data, ddof=1) / np.sqrt(n))

    alpha = 1.0 - confidence_level
    t_value = float(stats.t.ppf(1.0 - alpha / 2.0, df=n - 1))
    margin = t_value * std_error

    sampling_error = (margin / mean) * 100.0 if mean != 0 else 0.0

    return ConfidenceInterval(
        mean=mean,
        std_error=std_error,
        lower=mean - margin,
        upper=mean + margin,
        sampling_error_percent=abs(sampling_error),
        confidence_level=confidence_level,
        sample_size=n,
        t_value=t_value,
    )


def compute_sampling_statistics(inventory: ForestInventory, confidence_level: float = 0.95) -> SamplingStatistics:
    """Compute sampling statistics across the plots of an inventory.

    Args:
        inventory: Validated forest inventory
        confidence_level: Confidence level strictly between 0 and 1

    Returns:
        SamplingStatistics with one interval per metric

    Raises:
        InvalidArgumentError: If confidence_level is not in (0, 1)
        InsufficientDataError: If the inventory has fewer than two plots
    """
    validate_open_unit_interval(confidence_level, 'confidence_level')

    n = inventory.num_plots
    if n < MIN_PLOTS:
        raise InsufficientDataError('sampling statistics', required=MIN_PLOTS, available=n)

    # rows = plots, columns = tpa, basal_area, volume_cuft, volume_bdft
    per_plot = np.array(inventory.plot_totals(), dtype=float)

    result = SamplingStatistics(
        tpa=compute_confidence_interval(per_plot[:, 0], confidence_level),
        basal_area=compute_confidence_interval(per_plot[:, 1], confidence_level),
        volume_cuft=compute_confidence_interval(per_plot[:, 2], confidence_level),
        volume_bdft=compute_confidence_interval(per_plot[:, 3], confidence_level),
    )

    logger.debug(
        "Sampling statistics for '%s' (n=%d, %.0f%%): BA %.2f ± %.2f (SE%% %.1f)",
        inventory.name, n, confidence_level * 100,
        result.basal_area.mean, result.basal_area.margin,
        result.basal_area.sampling_error_percent
    )
    return result
