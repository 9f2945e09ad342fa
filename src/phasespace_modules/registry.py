from __future__ import annotations

import logging
from typing import Callable

from .breit_wigner import BreitWignerGenerator
from .config import ParameterSet
from .errors import DuplicateModule, UnknownModule
from .module import Module
from .pool import Pool

logger = logging.getLogger(__name__)

ModuleFactory = Callable[[Pool, ParameterSet], Module]


class ModuleRegistry:
    """Maps a module type name, as written in run configs, to its factory."""

    def __init__(self) -> None:
        self._factories: dict[str, ModuleFactory] = {}

    def register(self, name: str, factory: ModuleFactory) -> None:
        if name in self._factories:
            raise DuplicateModule(f"Module type already registered: {name}")
        self._factories[name] = factory

    def create(self, type_name: str, pool: Pool, parameters: ParameterSet) -> Module:
        factory = self._factories.get(type_name)
        if factory is None:
            known = ", ".join(sorted(self._factories)) or "<none>"
            raise UnknownModule(f"Unknown module type: {type_name} (known: {known})")
        module = factory(pool, parameters)
        logger.debug("Created %s '%s' (%d dimension(s))", type_name, module.name, module.dimensions())
        return module

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories


def default_registry() -> ModuleRegistry:
    registry = ModuleRegistry()
    registry.register("BreitWignerGenerator", BreitWignerGenerator)
    return registry
