"""Trip pricing.

A client pays the company's booking fee, a share of what it cost the taxi
to reach them, and the full cost of the drop-off trip. Tariffs are looked
up by company in a TariffBook, so new companies only need configuration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

from ..config import DispatchConfig, get_config
from ..domain.errors import UnknownCompanyError
from ..domain.models import Tariff
from ..graph.model import company_key


def fare(pickup_cost: float, dropoff_cost: float, tariff: Tariff) -> float:
    """Amount due for one trip.

    Args:
        pickup_cost: Cost of the taxi's trip to the client.
        dropoff_cost: Cost of the trip from the client to the shop.
        tariff: The company's pricing.

    Returns:
        booking_fee + pickup_rate * pickup_cost + dropoff_cost

    Raises:
        ValueError: If either cost is negative or not finite.
    """
    for label, value in (("Pickup", pickup_cost), ("Drop-off", dropoff_cost)):
        if value < 0 or not math.isfinite(value):
            raise ValueError(f"{label} cost must be finite and non-negative, got {value}")
    return tariff.booking_fee + tariff.pickup_rate * pickup_cost + dropoff_cost


@dataclass(frozen=True)
class TariffBook:
    """Tariffs keyed by company, compared case-insensitively.

    Attributes:
        tariffs: Company identifier to tariff
    """

    tariffs: Mapping[str, Tariff] = field(default_factory=dict)
    _index: Dict[str, Tuple[str, Tariff]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {company_key(name): (name, tariff) for name, tariff in self.tariffs.items()}
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_config(cls, config: Optional[DispatchConfig] = None) -> TariffBook:
        config = config or get_config().dispatch
        return cls(
            tariffs={name: settings.to_tariff() for name, settings in config.tariffs.items()}
        )

    def __contains__(self, company: object) -> bool:
        return isinstance(company, str) and company_key(company) in self._index

    @property
    def companies(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self._index.values())

    def get(self, company: str) -> Tariff:
        """Return the tariff for ``company``.

        Raises:
            UnknownCompanyError: If the company has no tariff.
        """
        try:
            return self._index[company_key(company)][1]
        except KeyError:
            raise UnknownCompanyError(
                f"No tariff configured for company: {company}", company=company
            ) from None
