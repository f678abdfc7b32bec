import contextlib
import math

from npzd import logger
from npzd.exceptions import ConfigurationError, InvalidParameterError
from npzd.settings import PARAMETERS, STRICTLY_POSITIVE_PARAMETERS, FRACTION_PARAMETERS


class Lockable:
    __locked__ = True

    @contextlib.contextmanager
    def unlock(self):
        lock_state = self.__locked__
        try:
            self.__locked__ = False
            yield
        finally:
            self.__locked__ = lock_state

    def __setattr__(self, key, val):
        if not key.startswith("_") and self.__locked__:
            clsname = self.__class__.__qualname__
            raise RuntimeError(f"{clsname} is immutable, create a new instance (e.g. via {clsname}.replace()) instead")
        return super().__setattr__(key, val)


class StrictContainer:
    """A container with a fixed set of fields."""

    __fields__ = ()

    def __init__(self, fields):
        self.__fields__ = tuple(fields)

    def __setattr__(self, key, val):
        if not key.startswith("_") and key not in self.__fields__:
            raise AttributeError(f"Unknown attribute {key}")

        return super().__setattr__(key, val)

    def __contains__(self, val):
        return val in self.__fields__

    def fields(self):
        return self.__fields__

    def values(self):
        return (getattr(self, k) for k in self.__fields__)

    def items(self):
        return ((k, getattr(self, k)) for k in self.__fields__)

    def __repr__(self):
        attr_str = ",\n".join(f"    {key} = {val!r}" for key, val in self.items())
        return f"{self.__class__.__qualname__}(\n{attr_str}\n)"


def validate_parameter(name, value):
    meta = PARAMETERS[name]

    try:
        value = meta.type(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(f"Parameter {name} must be a real number (got {value!r})") from None

    if not math.isfinite(value):
        raise InvalidParameterError(f"Parameter {name} must be finite (got {value})")

    if name in STRICTLY_POSITIVE_PARAMETERS:
        if value <= 0:
            raise InvalidParameterError(f"Parameter {name} must be positive (got {value})")
    elif value < 0:
        raise InvalidParameterError(f"Parameter {name} must be non-negative (got {value})")

    if name in FRACTION_PARAMETERS and value > 1:
        raise InvalidParameterError(f"Parameter {name} must lie in [0, 1] (got {value})")

    return value


class ModelParameters(Lockable, StrictContainer):
    """Immutable set of NPZD rate constants.

    Every parameter defaults to the value listed in :data:`npzd.settings.PARAMETERS`.
    Invalid values raise :class:`~npzd.exceptions.InvalidParameterError`, unknown
    names raise :class:`~npzd.exceptions.ConfigurationError`.

    Example:
        >>> from npzd.time import day
        >>> params = ModelParameters(base_maximum_growth=0.8 / day)
        >>> params.assimilation_efficiency
        0.9116

    """

    def __init__(self, **parameters):
        unknown = set(parameters) - set(PARAMETERS)
        if unknown:
            raise ConfigurationError(f"Unknown model parameter(s): {', '.join(sorted(unknown))}")

        super().__init__(fields=PARAMETERS.keys())

        with self.unlock():
            for name, meta in PARAMETERS.items():
                setattr(self, name, validate_parameter(name, parameters.get(name, meta.default)))

        logger.trace("Created {!r}", self)

    def replace(self, **changes):
        """Return a copy with some parameters changed"""
        new_parameters = dict(self.items())
        new_parameters.update(changes)
        return self.__class__(**new_parameters)

    def as_dict(self):
        return dict(self.items())

    def __eq__(self, other):
        if not isinstance(other, ModelParameters):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash(tuple(self.values()))
