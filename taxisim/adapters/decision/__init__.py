"""Decision adapters - Implementations of the CallDeciderPort.

Available implementations:
- RandomCallDecider: Declines with a configured probability
- FixedCallDecider: Always gives the same answer
- ScriptedCallDecider: Replays a list of answers, for tests
"""

from .fixed_decider import FixedCallDecider, ScriptedCallDecider
from .random_decider import RandomCallDecider

__all__ = ["RandomCallDecider", "FixedCallDecider", "ScriptedCallDecider"]
