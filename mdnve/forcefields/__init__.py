"""Force model implementations."""

from .base import ForceBundle, ForceModel
from .lj import LennardJonesModel

__all__ = ["ForceBundle", "ForceModel", "LennardJonesModel"]
