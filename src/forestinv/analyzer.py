"""
Analyzer facade for forestinv.

Holds one immutable AnalysisConfig and dispatches to the stand metrics,
sampling statistics, diameter distribution and growth projection modules,
filling in configured defaults for any argument the caller omits.

Usage:
    >>> from forestinv import Analyzer
    >>> analyzer = Analyzer.from_config()
    >>> metrics = analyzer.stand_metrics(inventory)
    >>> projection = analyzer.project_growth(inventory, years=20)
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config_loader import load_analysis_defaults
from .diameter_distribution import DiameterDistribution, build_diameter_distribution
from .exceptions import (
    InvalidArgumentError,
    validate_open_unit_interval,
    validate_positive,
)
from .growth import (
    ExponentialGrowth,
    GrowthModel,
    GrowthProjection,
    YearPoint,
    create_growth_model,
    project_growth,
)
from .inventory import ForestInventory
from .logging_config import get_logger
from .sampling_statistics import SamplingStatistics, compute_sampling_statistics
from .stand_metrics import StandMetrics, compute_stand_metrics

__all__ = ['AnalysisConfig', 'AnalysisReport', 'Analyzer']

logger = get_logger(__name__)


@dataclass(frozen=True)
class AnalysisConfig:
    """Default settings for an analysis session.

    Attributes:
        confidence_level: Confidence level for sampling statistics, in (0, 1)
        diameter_class_width: Diameter class width in inches, > 0
        default_growth_model: Model used when a projection names none
        projection_years: Horizon used when a projection gives no years
    """
    confidence_level: float = 0.95
    diameter_class_width: float = 2.0
    default_growth_model: GrowthModel = field(
        default_factory=lambda: ExponentialGrowth(annual_rate=0.03, mortality_rate=0.005)
    )
    projection_years: int = 10

    def __post_init__(self):
        validate_open_unit_interval(self.confidence_level, 'confidence_level')
        validate_positive(self.diameter_class_width, 'diameter_class_width')
        if not isinstance(self.default_growth_model, GrowthModel):
            raise InvalidArgumentError('default_growth_model', self.default_growth_model,
                                       "must be a GrowthModel")
        if isinstance(self.projection_years, bool) or not isinstance(self.projection_years, int) \
                or self.projection_years < 0:
            raise InvalidArgumentError('projection_years', self.projection_years,
                                       "must be a non-negative integer")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisConfig':
        """Build a configuration from the parsed analysis_defaults layout.

        Args:
            data: Mapping with an 'analysis' section and an optional
                'growth_model' section ('type' plus model parameters)

        Returns:
            AnalysisConfig
        """
        analysis = data.get('analysis', {}) or {}
        kwargs: Dict[str, Any] = {}
        if 'confidence_level' in analysis:
            kwargs['confidence_level'] = float(analysis['confidence_level'])
        if 'diameter_class_width' in analysis:
            kwargs['diameter_class_width'] = float(analysis['diameter_class_width'])
        if 'projection_years' in analysis:
            kwargs['projection_years'] = analysis['projection_years']

        model_data = dict(data.get('growth_model') or {})
        if model_data:
            kind = model_data.pop('type', 'exponential')
            kwargs['default_growth_model'] = create_growth_model(kind, **model_data)

        return cls(**kwargs)


@dataclass(frozen=True)
class AnalysisReport:
    """All four analysis results for one inventory."""
    inventory_name: str
    metrics: StandMetrics
    statistics: SamplingStatistics
    distribution: DiameterDistribution
    projection: GrowthProjection

    def to_dict(self) -> Dict[str, Any]:
        return {
            'inventory_name': self.inventory_name,
            'metrics': self.metrics.to_dict(),
            'statistics': self.statistics.to_dict(),
            'distribution': self.distribution.to_dict(),
            'projection': self.projection.to_dict(),
        }


class Analyzer:
    """Unified analysis API with session-wide defaults.

    Attributes:
        config: The immutable configuration of this analyzer
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """Initialize the analyzer.

        Args:
            config: Session configuration. Uses built-in defaults if None.
        """
        self.config = config or AnalysisConfig()

    @classmethod
    def from_config(cls, path: Union[str, Path, None] = None) -> 'Analyzer':
        """Create an analyzer from YAML configuration.

        Args:
            path: Optional user YAML file overriding the packaged
                analysis_defaults.yaml

        Returns:
            Analyzer
        """
        config = AnalysisConfig.from_dict(load_analysis_defaults(path))
        logger.debug("Analyzer configured: %s", config)
        return cls(config)

    def stand_metrics(self, inventory: ForestInventory) -> StandMetrics:
        """Compute stand-level metrics (TPA, BA, volume, QMD, species composition)."""
        return compute_stand_metrics(inventory)

    def sampling_statistics(
        self,
        inventory: ForestInventory,
        confidence_level: Optional[float] = None
    ) -> SamplingStatistics:
        """Compute sampling statistics, at the configured confidence by default."""
        if confidence_level is None:
            confidence_level = self.config.confidence_level
        return compute_sampling_statistics(inventory, confidence_level)

    def diameter_distribution(
        self,
        inventory: ForestInventory,
        class_width: Optional[float] = None,
        include_empty: bool = False
    ) -> DiameterDistribution:
        """Build a diameter distribution, at the configured class width by default."""
        if class_width is None:
            class_width = self.config.diameter_class_width
        return build_diameter_distribution(inventory, class_width, include_empty)

    def project_growth(
        self,
        start: Union[ForestInventory, StandMetrics, YearPoint],
        model: Optional[GrowthModel] = None,
        years: Optional[int] = None
    ) -> GrowthProjection:
        """Project stand growth.

        Args:
            start: An inventory (its stand metrics are the year-0 state),
                a StandMetrics snapshot or a YearPoint
            model: Growth model, the configured default if None
            years: Projection horizon, the configured default if None

        Returns:
            GrowthProjection
        """
        if model is None:
            model = self.config.default_growth_model
        if years is None:
            years = self.config.projection_years
        if isinstance(start, ForestInventory):
            start = compute_stand_metrics(start)
        return project_growth(start, model, years)

    def summarize(self, inventory: ForestInventory, years: Optional[int] = None) -> AnalysisReport:
        """Run all four analyses with the configured defaults.

        Raises:
            InsufficientDataError: If the inventory has fewer than two plots
        """
        metrics = self.stand_metrics(inventory)
        return AnalysisReport(
            inventory_name=inventory.name,
            metrics=metrics,
            statistics=self.sampling_statistics(inventory),
            distribution=self.diameter_distribution(inventory),
            projection=self.project_growth(metrics, years=years),
        )
