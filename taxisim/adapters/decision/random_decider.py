"""Random accept/decline decisions.

Drivers decline a configurable share of calls. The generator is owned by
the adapter and can be seeded, so a run with a seed is reproducible.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from ...config import DispatchConfig, get_config
from ...domain.models import Call


@dataclass
class RandomCallDecider:
    """Decider that declines with probability ``decline_probability``.

    Attributes:
        decline_probability: Chance in [0, 1] that a call is declined
        seed: Seed for the private generator, None for OS entropy
    """

    decline_probability: float = 0.3
    seed: Optional[int] = None

    _rng: random.Random = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 <= self.decline_probability <= 1.0:
            raise ValueError(
                f"Decline probability must be between 0 and 1, got {self.decline_probability}"
            )
        self._rng = random.Random(self.seed)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Optional[DispatchConfig] = None) -> RandomCallDecider:
        config = config or get_config().dispatch
        return cls(decline_probability=config.decline_probability, seed=config.seed)

    def accepts(self, call: Call) -> bool:
        accepted = self._rng.random() >= self.decline_probability
        self._logger.debug(
            "Driver decision",
            extra={"client": call.client, "accepted": accepted},
        )
        return accepted
