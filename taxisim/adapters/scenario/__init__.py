"""Scenario adapters - Implementations of ScenarioRepositoryPort.

Available implementations:
- TextScenarioRepository: Loads the plain-text scenario format
"""

from .text_repository import TextScenarioRepository, parse_scenario

__all__ = ["TextScenarioRepository", "parse_scenario"]
