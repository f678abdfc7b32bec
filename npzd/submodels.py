"""
Optional slots for sediment and particle submodels.

A model without sediment or particles is a legal configuration, in which case
the no-op implementations below are used.
"""


class SedimentModel:
    """Capability interface of sediment models"""

    def update_state(self, host):
        pass

    def summary(self):
        return self.__class__.__qualname__


class BiogeochemicalParticles:
    """Capability interface of Lagrangian particle submodels"""

    def update_state(self, host):
        pass

    def summary(self):
        return self.__class__.__qualname__


class NoSediment(SedimentModel):
    def summary(self):
        return "none"


class NoParticles(BiogeochemicalParticles):
    def summary(self):
        return "none"
