"""npzd, the Nutrient-Phytoplankton-Zooplankton-Detritus reaction kernel"""

import sys
import types

# ensure lazy imports for public API by overriding module.__class__


def _reraise_exceptions(func):
    import functools

    @functools.wraps(func)
    def reraise_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            raise ImportError("Critical error during initial import") from e

    return reraise_wrapper


class _PublicAPI(types.ModuleType):
    @property
    @_reraise_exceptions
    def __version__(self):
        from npzd._version import __version__

        return __version__

    @property
    @_reraise_exceptions
    def logger(self):
        if not hasattr(self, "_logger"):
            from npzd.logs import setup_logging

            self._logger = setup_logging()
        return self._logger

    @property
    @_reraise_exceptions
    def runtime_settings(self):
        if not hasattr(self, "_runtime_settings"):
            from npzd.runtime import RuntimeSettings

            self._runtime_settings = RuntimeSettings()
        return self._runtime_settings

    @property
    @_reraise_exceptions
    def runtime_state(self):
        if not hasattr(self, "_runtime_state"):
            from npzd.runtime import RuntimeState

            self._runtime_state = RuntimeState()
        return self._runtime_state

    @property
    @_reraise_exceptions
    def npzd_kernel(self):
        from npzd.routines import npzd_kernel

        return npzd_kernel

    @property
    @_reraise_exceptions
    def NPZDModel(self):
        from npzd.model import NPZDModel

        return NPZDModel

    @property
    @_reraise_exceptions
    def ModelParameters(self):
        from npzd.parameters import ModelParameters

        return ModelParameters

    @property
    @_reraise_exceptions
    def Tracer(self):
        from npzd.tracers import Tracer

        return Tracer

    @property
    @_reraise_exceptions
    def VerticalGrid(self):
        from npzd.grid import VerticalGrid

        return VerticalGrid

    @property
    @_reraise_exceptions
    def BoxModel(self):
        from npzd.box import BoxModel

        return BoxModel


sys.modules[__name__].__class__ = _PublicAPI

del sys
del types
del _PublicAPI
del _reraise_exceptions
