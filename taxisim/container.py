"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        simulator = container.resolve(CallSimulator)

        # Testing
        container = Container()
        container.register(CallDeciderPort, lambda: FixedCallDecider(accept=True))
        decider = container.resolve(CallDeciderPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(
        cls,
        config: Optional[AppConfig] = None,
        scenario_path: Optional[Path] = None,
    ) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.
            scenario_path: Scenario file overriding the configured one.

        Returns:
            A configured Container instance.
        """
        from .adapters.decision import RandomCallDecider
        from .adapters.scenario import TextScenarioRepository
        from .graph.dijkstra import DijkstraEngine
        from .ports.decision import CallDeciderPort
        from .ports.graph import ScenarioRepositoryPort, ShortestPathEnginePort
        from .services import CallSimulator

        config = config or get_config()
        container = cls(config=config)

        container.register(
            ScenarioRepositoryPort,
            lambda: TextScenarioRepository(config.scenario, path=scenario_path),
        )
        container.register(
            ShortestPathEnginePort,
            lambda: DijkstraEngine(timeout_seconds=config.dispatch.search_timeout_seconds),
        )
        container.register(
            CallDeciderPort,
            lambda: RandomCallDecider.from_config(config.dispatch),
        )

        def create_simulator() -> CallSimulator:
            plan = container.resolve(ScenarioRepositoryPort).load()
            return CallSimulator.from_config(
                plan,
                decider=container.resolve(CallDeciderPort),
                config=config.dispatch,
                engine=container.resolve(ShortestPathEnginePort),
            )

        container.register(CallSimulator, create_simulator)

        return container
