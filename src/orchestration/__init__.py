"""Orchestration — мутирующие операции над vault-ами и public allocator."""

from .facility import FacilityConfigurator
from .reallocator import Reallocator, compute_target

__all__ = [
    "FacilityConfigurator",
    "Reallocator",
    "compute_target",
]
