"""Step definitions: how far apart consecutive points of a stream are.

A step only carries a positive magnitude. The direction it is applied in is
decided by the stream's endpoints and passed to :meth:`Step.advance`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Literal

from typing_extensions import override

from timestream.errors import InvalidStepMagnitude
from timestream.util import Instant, Unit, advance

Sign = Literal[1, -1]


class Step(ABC):

    @abstractmethod
    def advance(self, instant: Instant, sign: Sign) -> Instant:
        """Move instant by this step's magnitude in the direction of sign."""
        pass


@dataclass(frozen=True, kw_only=True)
class UnitStep(Step):
    amount: int
    unit: Unit

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidStepMagnitude(
                f"Step amount must be a positive magnitude, got {self.amount}"
            )

    @override
    def advance(self, instant: Instant, sign: Sign) -> Instant:
        return advance(instant, sign * self.amount, self.unit)

    def __str__(self) -> str:
        return f"{self.amount} {self.unit}"


@dataclass(frozen=True, kw_only=True)
class DurationStep(Step):
    duration: timedelta

    def __post_init__(self) -> None:
        if self.duration <= timedelta(0):
            raise InvalidStepMagnitude(
                f"Step duration must be a positive magnitude, got {self.duration!r}"
            )

    @override
    def advance(self, instant: Instant, sign: Sign) -> Instant:
        return instant + sign * self.duration

    def __str__(self) -> str:
        return str(self.duration)
