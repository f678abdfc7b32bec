"""npzd exception types"""


class NPZDError(Exception):
    """Base class for all errors raised by npzd."""


class ConfigurationError(NPZDError, ValueError):
    """Invalid model configuration, raised while the model is being built."""


class InvalidParameterError(ConfigurationError):
    """A kinetic parameter or sinking speed is out of its valid range."""


class UnknownTracerError(ConfigurationError):
    """A tracer name that the model does not know about."""


class NumericAnomaly(NPZDError, RuntimeError):
    """Unphysical model state produced by the host's numerics."""


class NegativeTracerError(NumericAnomaly):
    """A tracer concentration was driven below zero."""
