import os
from collections import namedtuple

from npzd.backend import BACKENDS
from npzd.logs import LOGLEVELS


# validators


def parse_choice(choices, preserve_case=False):
    def validate(choice):
        if isinstance(choice, str) and not preserve_case:
            choice = choice.lower()

        if choice not in choices:
            raise ValueError(f"must be one of {choices}")

        return choice

    return validate


def set_loglevel(val):
    from npzd import logs

    loglevel = parse_choice(LOGLEVELS)(val)
    logs.setup_logging(loglevel=loglevel)
    return loglevel


DEVICES = ("cpu", "gpu", "tpu")
FLOAT_TYPES = ("float64", "float32")


# settings

RuntimeSetting = namedtuple("RuntimeSetting", ("type", "default", "read_from_env"))
RuntimeSetting.__new__.__defaults__ = (None, None, True)

AVAILABLE_SETTINGS = {
    "backend": RuntimeSetting(parse_choice(BACKENDS), "numpy"),
    "device": RuntimeSetting(parse_choice(DEVICES), "cpu"),
    "float_type": RuntimeSetting(parse_choice(FLOAT_TYPES), "float64"),
    "loglevel": RuntimeSetting(set_loglevel, "info"),
}


class RuntimeSettings:
    """Process-wide settings, read from keyword arguments, ``NPZD_*`` environment
    variables, or defaults (in that order of precedence)."""

    __slots__ = ["__locked__", "__setting_types__", "__settings__", *AVAILABLE_SETTINGS.keys()]

    def __init__(self, **kwargs):
        self.__locked__ = False
        self.__setting_types__ = {}

        for name, setting in AVAILABLE_SETTINGS.items():
            setting_envvar = f"NPZD_{name.upper()}"

            if name in kwargs:
                val = kwargs[name]
            elif setting.read_from_env:
                val = os.environ.get(setting_envvar, setting.default)
            else:
                val = setting.default

            self.__setting_types__[name] = setting.type
            self.__setattr__(name, val)

        self.__settings__ = set(self.__setting_types__.keys())

    def update(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)

        return self

    def __setattr__(self, attr, val):
        if getattr(self, "__locked__", False):
            raise RuntimeError("Runtime settings cannot be modified after import of core modules")

        if attr.startswith("_"):
            return super().__setattr__(attr, val)

        # coerce type
        stype = self.__setting_types__.get(attr)
        if stype is not None:
            try:
                val = stype(val)
            except (TypeError, ValueError) as e:
                raise ValueError(f'Got invalid value for runtime setting "{attr}": {e!s}') from None

        return super().__setattr__(attr, val)

    def __repr__(self):
        setval = ", ".join(f"{key}={repr(getattr(self, key))}" for key in sorted(self.__settings__))
        return f"{self.__class__.__name__}({setval})"


# state


class RuntimeState:
    """Read-only view on derived runtime attributes"""

    __slots__ = ()

    @property
    def backend_module(self):
        from npzd import backend, runtime_settings

        return backend.get_backend_module(runtime_settings.backend)

    @property
    def float_type(self):
        from npzd import runtime_settings

        return getattr(self.backend_module, runtime_settings.float_type)

    def __setattr__(self, attr, val):
        raise TypeError(f"Cannot modify {self.__class__.__name__} objects")
