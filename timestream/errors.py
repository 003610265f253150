"""Errors raised while configuring a time stream.

All of them are raised synchronously by the builder call that received the
bad value. Producing a stream never raises.
"""


class InvalidArgument(ValueError):
    """A configuration call received a value it cannot use."""


class MissingRequiredValue(InvalidArgument, TypeError):
    """A required start, end, unit or duration was None."""


class InvalidStepMagnitude(InvalidArgument):
    """A step was given a zero amount or a zero-length duration."""
