"""Services layer - Application orchestration.

Available services:
- DispatchMatcher: Nearest-candidate matching over repeated path searches
- CallSimulator: Per-call dispatch, decision, reporting and pricing
- TariffBook / fare: Company pricing
"""

from .fare import TariffBook, fare
from .matcher import DispatchMatcher, is_shop
from .simulator import CallSimulator, route_line

__all__ = [
    "DispatchMatcher",
    "is_shop",
    "CallSimulator",
    "route_line",
    "TariffBook",
    "fare",
]
