"""Exceptions raised by the numeric engine."""


class NetworkConfigError(ValueError):
    """A layer or network was constructed with an invalid configuration."""


class UnknownActivationError(NetworkConfigError):
    """The requested activation function name is not registered."""


class DimensionMismatchError(ValueError):
    """A vector does not match the size a layer or network was built with."""
