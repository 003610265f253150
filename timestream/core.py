import logging
import operator as op
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from numbers import Integral
from typing import Any, Generic, Literal, TypeAlias, overload
from zoneinfo import ZoneInfo

from timestream.errors import (
    InvalidArgument,
    InvalidStepMagnitude,
    MissingRequiredValue,
)
from timestream.step import DurationStep, Sign, Step, UnitStep
from timestream.util import (
    OUT_OF_RANGE,
    Instant,
    Unit,
    advance,
    is_datetime,
    normalize_unit,
)

log = logging.getLogger(__name__)

Policy: TypeAlias = Literal["inclusive", "exclusive"]

# (policy, sign) -> test a point must pass to be emitted
_ADMITS: dict[tuple[Policy, Sign], Callable[[Any, Any], bool]] = {
    ("inclusive", 1): op.le,
    ("inclusive", -1): op.ge,
    ("exclusive", 1): op.lt,
    ("exclusive", -1): op.gt,
}

_DAY = timedelta(days=1)


@dataclass(frozen=True, kw_only=True)
class Boundary(Generic[Instant]):
    end: Instant
    policy: Policy

    def admits(self, point: Instant, sign: Sign) -> bool:
        """True if point has not yet passed the end when moving in sign's direction."""
        return _ADMITS[(self.policy, sign)](point, self.end)


@dataclass(frozen=True, kw_only=True)
class RangeConfig(Generic[Instant]):
    """Finalized stream configuration; consumed by :func:`produce`."""

    start: Instant
    boundary: Boundary[Instant] | None
    step: Step

    @property
    def sign(self) -> Sign:
        """Direction of travel: +1 forward, -1 backward.

        Unbounded streams always go forward. Bounded streams go toward their
        end, whatever the sign the step was configured with.
        """
        if self.boundary is None or self.boundary.end >= self.start:
            return 1
        return -1


def default_step(start: date) -> Step:
    """One second for datetimes, one day for dates."""
    if is_datetime(start):
        return UnitStep(amount=1, unit="seconds")
    return UnitStep(amount=1, unit="days")


def produce(config: RangeConfig[Instant]) -> Iterator[Instant]:
    """Lazily yield the points described by config.

    The stream also ends when the next point would fall outside the range
    datetime/date can represent.
    """
    sign = config.sign
    boundary = config.boundary
    current = config.start
    while boundary is None or boundary.admits(current, sign):
        yield current
        try:
            current = config.step.advance(current, sign)
        except OUT_OF_RANGE:
            log.debug("Stopping stream at %r: next step is out of range", current)
            return


@dataclass(frozen=True)
class TimeStream(Generic[Instant]):
    """Immutable builder for a lazy sequence of dates or datetimes.

    Each configuration method returns a new builder; the receiver is left
    untouched, so a partially configured builder can be shared and extended.

    Example:
        >>> from datetime import datetime
        >>> from timestream import stream_from
        >>>
        >>> t0 = datetime(2025, 1, 1, 9, 0)
        >>> list(stream_from(t0).to(2, "seconds"))  # 09:00:00, :01, :02
        >>> list(stream_from(t0).until(1, "hours").every(15, "minutes"))
        >>> list(stream_from(t0).to(-2, "days"))  # backward in time
    """

    start: Instant
    boundary: Boundary[Instant] | None = None
    step: Step | None = None

    def __post_init__(self) -> None:
        if self.start is None:
            raise MissingRequiredValue(
                "A time stream needs a start.\n"
                "Hint: stream_from(datetime.now()) or from_now()"
            )
        if not isinstance(self.start, date):
            raise InvalidArgument(
                f"Time stream start must be a date or datetime.\n"
                f"Got {type(self.start).__name__!r}: {self.start!r}"
            )

    @overload
    def to(self, end: Instant) -> "TimeStream[Instant]": ...

    @overload
    def to(self, end: int, unit: Unit | str) -> "TimeStream[Instant]": ...

    def to(self, end: Any, unit: Any = None) -> "TimeStream[Instant]":
        """End the stream at end, inclusive.

        end is either an instant of the same kind as the start, or a signed
        amount of unit relative to the start.
        """
        return replace(self, boundary=self._boundary(end, unit, "inclusive"))

    @overload
    def until(self, end: Instant) -> "TimeStream[Instant]": ...

    @overload
    def until(self, end: int, unit: Unit | str) -> "TimeStream[Instant]": ...

    def until(self, end: Any, unit: Any = None) -> "TimeStream[Instant]":
        """End the stream just before end. Same arguments as :meth:`to`."""
        return replace(self, boundary=self._boundary(end, unit, "exclusive"))

    @overload
    def every(self, amount: timedelta) -> "TimeStream[Instant]": ...

    @overload
    def every(self, amount: int, unit: Unit | str) -> "TimeStream[Instant]": ...

    def every(self, amount: Any, unit: Any = None) -> "TimeStream[Instant]":
        """Set the distance between consecutive points.

        Only the magnitude is used: ``every(-2, "seconds")`` and
        ``every(2, "seconds")`` configure the same step.
        """
        if amount is None:
            raise MissingRequiredValue(
                "every() needs an amount and unit, or a timedelta.\n"
                "Hint: every(2, 'seconds') or every(timedelta(seconds=2))"
            )
        if isinstance(amount, timedelta):
            return replace(self, step=self._duration_step(amount, unit))
        if isinstance(amount, bool) or not isinstance(amount, Integral):
            raise InvalidArgument(
                f"Step amount must be an integer or timedelta.\n"
                f"Got {type(amount).__name__!r}: {amount!r}"
            )
        amount = op.index(amount)
        unit = normalize_unit(unit, self.start)
        if amount == 0:
            raise InvalidStepMagnitude(f"Step amount must be non-zero, got 0 {unit}")
        return replace(self, step=UnitStep(amount=abs(amount), unit=unit))

    @property
    def config(self) -> RangeConfig[Instant]:
        step = self.step if self.step is not None else default_step(self.start)
        return RangeConfig(start=self.start, boundary=self.boundary, step=step)

    def stream(self) -> Iterator[Instant]:
        """Return a fresh lazy iterator over the configured points."""
        config = self.config
        if config.boundary is None:
            log.debug(
                "Streaming from %r every %s, unbounded", config.start, config.step
            )
        else:
            log.debug(
                "Streaming from %r to %r (%s, %s) every %s",
                config.start,
                config.boundary.end,
                config.boundary.policy,
                "forward" if config.sign > 0 else "backward",
                config.step,
            )
        return produce(config)

    def __iter__(self) -> Iterator[Instant]:
        return self.stream()

    def _boundary(self, end: Any, unit: Any, policy: Policy) -> Boundary[Instant]:
        if end is None:
            raise MissingRequiredValue(
                f"An end is required for an {policy} boundary.\n"
                f"Hint: Pass an instant, or an amount and unit like (2, 'seconds')"
            )
        if isinstance(end, date):
            if unit is not None:
                raise InvalidArgument(
                    f"A unit only applies to an integer amount, not to an instant.\n"
                    f"Got: {end!r}, {unit!r}"
                )
            self._check_comparable(end)
            return Boundary(end=end, policy=policy)
        if isinstance(end, bool) or not isinstance(end, Integral):
            raise InvalidArgument(
                f"Boundary must be an instant or an integer amount.\n"
                f"Got {type(end).__name__!r}: {end!r}"
            )
        end = op.index(end)
        unit = normalize_unit(unit, self.start)
        try:
            end_instant = advance(self.start, end, unit)
        except OUT_OF_RANGE as err:
            raise InvalidArgument(
                f"Boundary {end} {unit} from {self.start!r} is out of range"
            ) from err
        return Boundary(end=end_instant, policy=policy)

    def _duration_step(self, duration: timedelta, unit: Any) -> DurationStep:
        if unit is not None:
            raise InvalidArgument(
                f"A unit only applies to an integer amount, not to a timedelta.\n"
                f"Got: {duration!r}, {unit!r}"
            )
        if not duration:
            raise InvalidStepMagnitude(
                "Step duration must be non-zero, got timedelta(0)"
            )
        magnitude = abs(duration)
        if not is_datetime(self.start) and magnitude % _DAY:
            raise InvalidArgument(
                f"A date can only step by whole days.\n"
                f"Got duration: {duration!r}\n"
                f"Hint: Start from a datetime to step by {magnitude}"
            )
        return DurationStep(duration=magnitude)

    def _check_comparable(self, end: date) -> None:
        """Reject an end that cannot be ordered against the start."""
        if is_datetime(self.start) != is_datetime(end):
            raise InvalidArgument(
                f"Boundary must be the same kind of instant as the start.\n"
                f"Got start {type(self.start).__name__!r}, "
                f"end {type(end).__name__!r}: {end!r}"
            )
        if is_datetime(self.start):
            start_aware = self.start.tzinfo is not None
            if start_aware != (end.tzinfo is not None):  # type: ignore[attr-defined]
                raise InvalidArgument(
                    f"Cannot mix naive and timezone-aware datetimes.\n"
                    f"Got start: {self.start!r}\n"
                    f"Got end: {end!r}\n"
                    f"Hint: Add timezone info to both, or to neither"
                )


def stream_from(start: Instant) -> TimeStream[Instant]:
    """Begin a time stream at start (a date or datetime)."""
    return TimeStream(start)


def from_now(tz: str | None = None) -> TimeStream[datetime]:
    """Begin a time stream at the current time.

    Args:
        tz: IANA timezone name (e.g., "UTC", "US/Pacific"); naive local time
            when omitted
    """
    if tz is None:
        return TimeStream(datetime.now())
    return TimeStream(datetime.now(ZoneInfo(tz)))


def from_today(tz: str | None = None) -> TimeStream[date]:
    """Begin a time stream at today's date, stepping by days by default."""
    if tz is None:
        return TimeStream(date.today())
    return TimeStream(datetime.now(ZoneInfo(tz)).date())
