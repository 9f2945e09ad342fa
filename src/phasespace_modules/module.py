"""Base class for the computational units of a phase-space pipeline.

A module is built once from ``(pool, parameters)``: it binds its parameters,
resolves every input and registers every output before ``__init__`` returns.
After that, ``work()`` is called once per phase-space point and must write all
of its outputs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .config import ParameterSet
from .pool import OutputHandle, Pool


class Module(ABC):
    def __init__(self, pool: Pool, parameters: ParameterSet) -> None:
        self._pool = pool
        self._name = parameters.module_name

    @property
    def name(self) -> str:
        return self._name

    @property
    def pool(self) -> Pool:
        return self._pool

    def produce(self, name: str, type_: type = float) -> OutputHandle:
        return self._pool.produce(self._name, name, type_)

    def dimensions(self) -> int:
        """Number of uniform coordinates this module takes from the sampler for one point."""
        return 0

    @abstractmethod
    def work(self) -> None:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r})"
