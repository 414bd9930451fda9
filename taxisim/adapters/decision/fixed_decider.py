"""Deterministic deciders for tests and demo runs.

Example:
    simulator = CallSimulator(plan, decider=FixedCallDecider(accept=False))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from ...domain.models import Call


@dataclass
class FixedCallDecider:
    """Always returns the same decision."""

    accept: bool = True

    def accepts(self, call: Call) -> bool:
        return self.accept


@dataclass
class ScriptedCallDecider:
    """Returns the given decisions in order.

    Raises IndexError once the script runs out, so a test that places more
    calls than it scripted fails instead of silently accepting.

    Attributes:
        decisions: Answers to give, one per call
    """

    decisions: Iterable[bool] = ()
    asked: List[Call] = field(default_factory=list, init=False)

    _remaining: List[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._remaining = list(self.decisions)

    def accepts(self, call: Call) -> bool:
        if not self._remaining:
            raise IndexError(f"No scripted decision left for call from {call.client}")
        self.asked.append(call)
        return self._remaining.pop(0)
