from .simulated import SimulatedNanoModel

__all__ = ["SimulatedNanoModel"]
