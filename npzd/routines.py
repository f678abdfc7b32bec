import functools
import inspect

from npzd import logger


def _get_func_name(function):
    return f"{inspect.getmodule(function).__name__}:{function.__qualname__}"


def npzd_kernel(function=None, *, static_args=()):
    """Decorator that marks a pure function as a kernel that can be JIT compiled if
    supported by the backend.

    Kernels must not have side effects. All results have to be returned explicitly.

    Parameters:
        static_args (Tuple[str]): Names of kernel arguments that should be static.

    Example:
        >>> from npzd import npzd_kernel
        >>>
        >>> @npzd_kernel
        >>> def remineralization(D, rate):
        >>>     return rate * D

    """

    def inner_decorator(function):
        kernel = NPZDKernel(function, static_args=static_args)
        kernel = functools.wraps(function)(kernel)
        return kernel

    if function is not None:
        return inner_decorator(function)

    return inner_decorator


class NPZDKernel:
    """Do not instantiate directly!"""

    def __init__(self, function, static_args=()):
        self.name = _get_func_name(function)
        self.func_sig = inspect.signature(function)

        func_params = self.func_sig.parameters

        allowed_param_types = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

        if any(p.kind not in allowed_param_types for p in func_params.values()):
            raise ValueError(f"npzd kernels do not support *args, **kwargs, or keyword-only parameters ({self.name})")

        if isinstance(static_args, str):
            static_args = (static_args,)

        func_argnames = list(func_params.keys())

        self.static_argnums = []
        for static_arg in static_args:
            try:
                arg_index = func_argnames.index(static_arg)
            except ValueError:
                raise ValueError(
                    f'npzd kernel {self.name} has no argument "{static_arg}", but it is given in static_args'
                ) from None

            self.static_argnums.append(arg_index)

        self.function = function
        self._compiled = None

    def _get_callable(self):
        from npzd import runtime_settings

        if runtime_settings.backend != "jax":
            return self.function

        if self._compiled is None:
            import jax

            self._compiled = jax.jit(self.function, static_argnums=self.static_argnums)

        return self._compiled

    def __call__(self, *args, **kwargs):
        # JAX only accepts positional args when using static_argnums
        # so convert everything to positional for consistency
        bound_args = self.func_sig.bind(*args, **kwargs)
        bound_args.apply_defaults()

        logger.trace("> {}", self.name)
        out = self._get_callable()(*bound_args.arguments.values())
        logger.trace("< {}", self.name)
        return out

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.name} at {hex(id(self))}>"
