"""
forestinv: Forest inventory analysis for Python

Turns measured sample-plot trees into per-acre stand metrics, Student-t
sampling statistics, diameter distributions and multi-year growth
projections.

Quick Start:
    >>> from forestinv import Analyzer, ForestInventory, Plot, Tree, Species
    >>> df = Species(code='DF', common_name='Douglas Fir')
    >>> plots = [
    ...     Plot(plot_id=i, size_acres=0.2, trees=[
    ...         Tree(plot_id=i, tree_id=1, species=df, dbh=12.0, height=80.0,
    ...              expansion_factor=5.0)])
    ...     for i in (1, 2)
    ... ]
    >>> inventory = ForestInventory(name='Example', plots=plots)
    >>> Analyzer().stand_metrics(inventory).total_basal_area
    19.63...
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "forestinv Development Team"

# =============================================================================
# Domain Model
# =============================================================================
from .species import Species, TreeStatus
from .tree import Tree
from .inventory import Plot, PlotTotals, ForestInventory

# =============================================================================
# Volume Calculations
# =============================================================================
from .volume_library import (
    VolumeEquation,
    VolumeResult,
    VolumeCalculator,
    VolumeLibrary,
    DEFAULT_VOLUME_EQUATION,
    calculate_tree_volume,
    get_volume_library,
    get_volume_equation,
)
from .tree_utils import BASAL_AREA_FACTOR, calculate_tree_basal_area

# =============================================================================
# Analysis
# =============================================================================
from .stand_metrics import (
    SpeciesComposition,
    StandMetrics,
    StandMetricsCalculator,
    compute_stand_metrics,
)
from .sampling_statistics import (
    ConfidenceInterval,
    SamplingStatistics,
    compute_confidence_interval,
    compute_sampling_statistics,
)
from .diameter_distribution import (
    DiameterClass,
    DiameterDistribution,
    build_diameter_distribution,
)
from .growth import (
    GrowthModel,
    ExponentialGrowth,
    LogisticGrowth,
    LinearGrowth,
    YearPoint,
    GrowthProjection,
    create_growth_model,
    project_growth,
    project_inventory_growth,
)
from .analyzer import AnalysisConfig, AnalysisReport, Analyzer

# =============================================================================
# Configuration and Logging
# =============================================================================
from .config_loader import (
    ConfigLoader,
    get_config_loader,
    load_analysis_defaults,
    load_volume_equations,
)
from .logging_config import get_logger, setup_logging

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    ForestAnalysisError,
    ConfigurationError,
    InsufficientDataError,
    ParameterError,
    InvalidArgumentError,
    DataError,
    InvalidDataError,
)

# =============================================================================
# Public API Definition
# =============================================================================
__all__ = [
    # Package Metadata
    "__version__",
    "__author__",
    # Domain Model
    "Species",
    "TreeStatus",
    "Tree",
    "Plot",
    "PlotTotals",
    "ForestInventory",
    # Volume Calculations
    "VolumeEquation",
    "VolumeResult",
    "VolumeCalculator",
    "VolumeLibrary",
    "DEFAULT_VOLUME_EQUATION",
    "calculate_tree_volume",
    "get_volume_library",
    "get_volume_equation",
    "BASAL_AREA_FACTOR",
    "calculate_tree_basal_area",
    # Stand Metrics
    "SpeciesComposition",
    "StandMetrics",
    "StandMetricsCalculator",
    "compute_stand_metrics",
    # Sampling Statistics
    "ConfidenceInterval",
    "SamplingStatistics",
    "compute_confidence_interval",
    "compute_sampling_statistics",
    # Diameter Distribution
    "DiameterClass",
    "DiameterDistribution",
    "build_diameter_distribution",
    # Growth Projection
    "GrowthModel",
    "ExponentialGrowth",
    "LogisticGrowth",
    "LinearGrowth",
    "YearPoint",
    "GrowthProjection",
    "create_growth_model",
    "project_growth",
    "project_inventory_growth",
    # Facade
    "AnalysisConfig",
    "AnalysisReport",
    "Analyzer",
    # Configuration and Logging
    "ConfigLoader",
    "get_config_loader",
    "load_analysis_defaults",
    "load_volume_equations",
    "get_logger",
    "setup_logging",
    # Exceptions
    "ForestAnalysisError",
    "ConfigurationError",
    "InsufficientDataError",
    "ParameterError",
    "InvalidArgumentError",
    "DataError",
    "InvalidDataError",
]
