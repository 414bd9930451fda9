"""Decision port - Whether a driver takes a call.

Real drivers sometimes decline. The simulator asks this port once per
call so tests can replace chance with a fixed or scripted answer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Call


class CallDeciderPort(Protocol):
    """Port for the accept/decline decision.

    Implementations: adapters/decision/
    """

    def accepts(self, call: Call) -> bool:
        """Decide whether the matched driver accepts ``call``.

        Args:
            call: The call being dispatched.

        Returns:
            True if the driver accepts.
        """
        ...
