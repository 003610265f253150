"""Unit vocabulary and stepping helpers for timestream.

Unit names map onto ``dateutil.relativedelta`` keywords, so "months" and
"years" step by calendar months and years the way relativedelta defines them.
"""

from datetime import date, datetime
from typing import Literal, TypeAlias, TypeVar

from dateutil.relativedelta import relativedelta

from timestream.errors import InvalidArgument, MissingRequiredValue

Instant = TypeVar("Instant", date, datetime)

Unit: TypeAlias = Literal[
    "seconds", "minutes", "hours", "days", "weeks", "months", "years"
]

# Units a plain date cannot represent
SUB_DAY_UNITS: frozenset[str] = frozenset({"seconds", "minutes", "hours"})

_UNITS: tuple[Unit, ...] = (
    "seconds",
    "minutes",
    "hours",
    "days",
    "weeks",
    "months",
    "years",
)


# Raised when stepping leaves date.min..date.max: timedelta arithmetic raises
# OverflowError, relativedelta raises ValueError from date.replace() once the
# year leaves 1..9999
OUT_OF_RANGE: tuple[type[Exception], ...] = (OverflowError, ValueError)


def is_datetime(instant: date) -> bool:
    return isinstance(instant, datetime)


def normalize_unit(unit: str | None, instant: date) -> Unit:
    """Validate a unit name against the kind of instant it will step.

    Raises:
        MissingRequiredValue: If unit is None
        InvalidArgument: If the unit is unknown, or is a sub-day unit used
            with a plain date
    """
    if unit is None:
        raise MissingRequiredValue(
            "A unit is required when stepping by an integer amount.\n"
            "Hint: Pass one of: " + ", ".join(_UNITS)
        )
    if not isinstance(unit, str):
        raise InvalidArgument(
            f"Unit must be a string.\nGot {type(unit).__name__!r}: {unit!r}"
        )
    unit_lower = unit.lower()
    if unit_lower not in _UNITS:
        valid = ", ".join(_UNITS)
        raise InvalidArgument(f"Invalid unit: '{unit}'\nValid units: {valid}\n")
    if unit_lower in SUB_DAY_UNITS and not is_datetime(instant):
        raise InvalidArgument(
            f"Unit '{unit_lower}' cannot step a date.\n"
            f"Got date: {instant!r}\n"
            f"Hint: Use 'days' or larger, or start from a datetime"
        )
    return unit_lower  # type: ignore[return-value]


def advance(instant: Instant, amount: int, unit: Unit) -> Instant:
    """Return instant moved by a signed amount of unit."""
    return instant + relativedelta(**{unit: amount})
