import numpy as onp

from npzd.exceptions import ConfigurationError


class VerticalGrid:
    """Vertical geometry of a water column.

    Index 0 is the bottom-most cell, the last index is at the surface (same
    ordering as the ``zt`` / ``zw`` axes of the host ocean model). Heights are
    negative below the surface.

    Parameters:
        dzt: Thickness of each cell in m, ordered from the floor to the surface.

    Attributes:
        nz: Number of cells.
        dzt: Cell thickness in m.
        zw: Heights of the ``nz + 1`` cell faces in m, from ``-depth`` to ``0``.
        zt: Heights of the cell centres in m.
        depth: Total depth of the column in m.
    """

    def __init__(self, dzt):
        dzt = onp.asarray(dzt, dtype="float64")

        if dzt.ndim != 1 or dzt.size == 0:
            raise ConfigurationError("dzt must be a non-empty 1D sequence of cell thicknesses")

        if not onp.all(onp.isfinite(dzt)) or onp.any(dzt <= 0):
            raise ConfigurationError("all cell thicknesses must be positive and finite")

        self.dzt = dzt
        self.nz = dzt.size
        self.depth = float(dzt.sum())

        zw = onp.concatenate(([0.0], onp.cumsum(dzt))) - self.depth
        # guard against round-off at the surface
        zw[-1] = 0.0
        self.zw = zw
        self.zt = 0.5 * (zw[1:] + zw[:-1])

        for arr in (self.dzt, self.zw, self.zt):
            arr.flags.writeable = False

    @classmethod
    def uniform(cls, nz, depth):
        nz = int(nz)
        if nz < 1:
            raise ConfigurationError("nz must be at least 1")
        if not depth > 0:
            raise ConfigurationError("depth must be positive")
        return cls(onp.full(nz, float(depth) / nz))

    def __repr__(self):
        return f"{self.__class__.__qualname__}(nz={self.nz}, depth={self.depth:g} m)"
