"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the dispatch core and the adapters
that feed it scenarios and decisions.
"""

from .decision import CallDeciderPort
from .graph import ScenarioRepositoryPort, ShortestPathEnginePort

__all__ = [
    "ScenarioRepositoryPort",
    "ShortestPathEnginePort",
    "CallDeciderPort",
]
