"""
Growth projection engine for forestinv.

Simulates year-by-year development of stand totals under one of three
growth models:
- ExponentialGrowth: every value grows by (1 + annual_rate)
- LogisticGrowth: basal area follows a discrete logistic curve toward
  carrying_capacity; volumes scale with the basal area ratio
- LinearGrowth: basal area increases by annual_increment; volumes scale with
  the basal area ratio (volume per unit basal area is preserved)

Each simulated year applies growth first, then removes a constant fraction
(mortality_rate) of TPA, basal area and both volumes, then clamps all values
at zero. The model set is closed; the transition handles each model type
explicitly.
"""
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterator, Tuple

import pandas as pd

from .exceptions import InvalidArgumentError, validate_finite, validate_positive
from .inventory import ForestInventory
from .logging_config import get_logger, log_projection_summary
from .stand_metrics import compute_stand_metrics

__all__ = [
    'GrowthModel',
    'ExponentialGrowth',
    'LogisticGrowth',
    'LinearGrowth',
    'YearPoint',
    'GrowthProjection',
    'create_growth_model',
    'project_growth',
    'project_inventory_growth',
]

logger = get_logger(__name__)


def _validate_mortality_rate(value: float) -> float:
    validate_finite(value, 'mortality_rate')
    if not 0 <= value < 1:
        raise InvalidArgumentError('mortality_rate', value, "must be in [0, 1)")
    return value


class GrowthModel:
    """Base class for growth models. Use one of the concrete models.

    Every concrete model declares its own parameters first and
    ``mortality_rate`` last, so positional construction reads as
    ``ExponentialGrowth(annual_rate, mortality_rate)``.
    """
    name = 'base'
    mortality_rate: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['type'] = self.name
        return data


@dataclass(frozen=True)
class ExponentialGrowth(GrowthModel):
    """Compound growth: value' = value × (1 + annual_rate).

    Attributes:
        annual_rate: Proportional growth per year (e.g. 0.03 = 3%)
        mortality_rate: Fraction of stand removed per year, in [0, 1)
    """
    annual_rate: float
    mortality_rate: float = 0.0

    name = 'exponential'

    def __post_init__(self):
        _validate_mortality_rate(self.mortality_rate)
        validate_finite(self.annual_rate, 'annual_rate')


@dataclass(frozen=True)
class LogisticGrowth(GrowthModel):
    """Discrete logistic growth of basal area.

    ba' = ba + annual_rate × ba × (1 - ba / carrying_capacity)

    Attributes:
        annual_rate: Intrinsic growth rate per year
        carrying_capacity: Asymptotic basal area (sq ft/acre)
        mortality_rate: Fraction of stand removed per year, in [0, 1)
    """
    annual_rate: float
    carrying_capacity: float
    mortality_rate: float = 0.0

    name = 'logistic'

    def __post_init__(self):
        _validate_mortality_rate(self.mortality_rate)
        validate_finite(self.annual_rate, 'annual_rate')
        validate_positive(self.carrying_capacity, 'carrying_capacity')


@dataclass(frozen=True)
class LinearGrowth(GrowthModel):
    """Constant basal area increment: ba' = ba + annual_increment.

    Attributes:
        annual_increment: Basal area added per year (sq ft/acre)
        mortality_rate: Fraction of stand removed per year, in [0, 1)
    """
    annual_increment: float
    mortality_rate: float = 0.0

    name = 'linear'

    def __post_init__(self):
        _validate_mortality_rate(self.mortality_rate)
        validate_finite(self.annual_increment, 'annual_increment')


_MODEL_TYPES = {
    ExponentialGrowth.name: ExponentialGrowth,
    LogisticGrowth.name: LogisticGrowth,
    LinearGrowth.name: LinearGrowth,
}


def create_growth_model(kind: str, **params: float) -> GrowthModel:
    """Factory function to create a growth model by name.

    Args:
        kind: 'exponential', 'logistic' or 'linear' (case-insensitive)
        **params: Model parameters (annual_rate, carrying_capacity,
            annual_increment, mortality_rate)

    Returns:
        Growth model instance

    Raises:
        InvalidArgumentError: If the kind is unknown, a parameter does not
            belong to the model, or a value is out of range
    """
    model_cls = _MODEL_TYPES.get(str(kind).strip().lower())
    if model_cls is None:
        raise InvalidArgumentError('growth_model', kind,
                                   f"must be one of {sorted(_MODEL_TYPES)}")
    try:
        return model_cls(**{k: float(v) for k, v in params.items()})
    except TypeError as e:
        raise InvalidArgumentError('growth_model', params, str(e)) from e
    except ValueError as e:
        raise InvalidArgumentError('growth_model', params, "parameters must be numeric") from e


@dataclass(frozen=True)
class YearPoint:
    """Stand totals in one projection year."""
    year: int
    tpa: float
    basal_area: float
    volume_cuft: float
    volume_bdft: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class GrowthProjection:
    """Projected stand totals, one point per year starting at year 0.

    Attributes:
        model: Growth model used
        points: Year points, year 0 first
    """
    model: GrowthModel
    points: Tuple[YearPoint, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(self.points))

    @property
    def years(self) -> int:
        """Number of simulated years."""
        return len(self.points) - 1

    @property
    def initial(self) -> YearPoint:
        return self.points[0]

    @property
    def final(self) -> YearPoint:
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[YearPoint]:
        return iter(self.points)

    def __getitem__(self, index: int) -> YearPoint:
        return self.points[index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'model': self.model.to_dict(),
            'points': [p.to_dict() for p in self.points],
        }

    def to_dataframe(self) -> pd.DataFrame:
        """Yield table as a pandas DataFrame indexed by year."""
        columns = ['year', 'tpa', 'basal_area', 'volume_cuft', 'volume_bdft']
        frame = pd.DataFrame([p.to_dict() for p in self.points], columns=columns)
        return frame.set_index('year')


# (tpa, basal_area, volume_cuft, volume_bdft)
_State = Tuple[float, float, float, float]


def _initial_state(start: Any) -> _State:
    """Read starting totals from StandMetrics (total_*) or a YearPoint."""
    if isinstance(start, YearPoint):
        return (start.tpa, start.basal_area, start.volume_cuft, start.volume_bdft)
    try:
        return (float(start.total_tpa), float(start.total_basal_area),
                float(start.total_volume_cuft), float(start.total_volume_bdft))
    except AttributeError as e:
        raise InvalidArgumentError('start', type(start).__name__,
                                   "must be StandMetrics or YearPoint") from e


def _grow_basal_area(model: GrowthModel, ba: float) -> float:
    """Apply one year of the model's basal area growth (before mortality)."""
    if isinstance(model, ExponentialGrowth):
        return ba * (1.0 + model.annual_rate)
    if isinstance(model, LogisticGrowth):
        return ba + model.annual_rate * ba * (1.0 - ba / model.carrying_capacity)
    if isinstance(model, LinearGrowth):
        return ba + model.annual_increment
    raise InvalidArgumentError('model', type(model).__name__,
                               f"must be one of {sorted(_MODEL_TYPES)}")


def _step(model: GrowthModel, state: _State) -> _State:
    """Advance the stand one year: growth, then mortality, then clamp."""
    tpa, ba, cuft, bdft = state

    new_ba = _grow_basal_area(model, ba)
    if isinstance(model, ExponentialGrowth):
        ratio = 1.0 + model.annual_rate
    else:
        ratio = new_ba / ba if ba > 0 else 1.0
    cuft *= ratio
    bdft *= ratio

    survival = 1.0 - model.mortality_rate
    return (
        max(tpa * survival, 0.0),
        max(new_ba * survival, 0.0),
        max(cuft * survival, 0.0),
        max(bdft * survival, 0.0),
    )


def project_growth(start: Any, model: GrowthModel, years: int) -> GrowthProjection:
    """Project stand totals forward year by year.

    Args:
        start: Starting totals, a StandMetrics or a YearPoint
        model: Growth model
        years: Number of years to simulate (>= 0)

    Returns:
        GrowthProjection with years + 1 points; point 0 is the start unchanged

    Raises:
        InvalidArgumentError: If years is negative or not an integer, the
            model is not a known growth model, or the simulation produces a
            non-finite value
    """
    if isinstance(years, bool) or not isinstance(years, int):
        raise InvalidArgumentError('years', years, "must be an integer")
    if years < 0:
        raise InvalidArgumentError('years', years, "must be >= 0")
    if not isinstance(model, tuple(_MODEL_TYPES.values())):
        raise InvalidArgumentError('model', type(model).__name__,
                                   f"must be one of {sorted(_MODEL_TYPES)}")

    state = _initial_state(start)
    points = [YearPoint(0, *state)]

    for year in range(1, years + 1):
        state = _step(model, state)
        if not all(math.isfinite(v) for v in state):
            raise InvalidArgumentError(
                'growth_model', model.to_dict(),
                f"parameters produced a non-finite value in year {year}"
            )
        points.append(YearPoint(year, *state))

    projection = GrowthProjection(model=model, points=points)
    log_projection_summary(
        logger, model.name, years,
        projection.initial.basal_area, projection.final.basal_area,
        projection.initial.tpa, projection.final.tpa
    )
    return projection


def project_inventory_growth(inventory: ForestInventory, model: GrowthModel, years: int) -> GrowthProjection:
    """Project growth starting from the stand metrics of an inventory.

    Args:
        inventory: Validated forest inventory
        model: Growth model
        years: Number of years to simulate

    Returns:
        GrowthProjection

    Raises:
        InsufficientDataError: If the inventory has no plots
    """
    return project_growth(compute_stand_metrics(inventory), model, years)
