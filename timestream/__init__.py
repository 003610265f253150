from .core import (
    Boundary,
    RangeConfig,
    TimeStream,
    from_now,
    from_today,
    produce,
    stream_from,
)
from .errors import InvalidArgument, InvalidStepMagnitude, MissingRequiredValue
from .step import DurationStep, Step, UnitStep
from .util import Unit

__all__ = [
    "TimeStream",
    "RangeConfig",
    "Boundary",
    "Step",
    "UnitStep",
    "DurationStep",
    "Unit",
    "stream_from",
    "from_now",
    "from_today",
    "produce",
    "InvalidArgument",
    "MissingRequiredValue",
    "InvalidStepMagnitude",
]
