"""Shared value store exchanged between modules for one phase-space point.

Slots live in an index-addressed arena owned by the pool. Producers get an
``OutputHandle`` (slot index + pool) and consumers turn an unresolved
``InputTag`` into a ``ResolvedInput`` exactly once, before the first point is
evaluated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from .errors import DuplicateOutput, InvalidIndex, InvalidInputTag, TypeMismatch, UnresolvedReference

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"^(?P<module>[A-Za-z_][\w.-]*)::(?P<name>[A-Za-z_][\w.-]*)(?:/(?P<index>\d+))?$")


def _check_element(value: Any, type_: type, what: str) -> Any:
    if type_ is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, type_):
        raise TypeMismatch(what, type_, type(value))
    return value


@dataclass(frozen=True, slots=True)
class InputTag:
    """Consumer-side reference to ``module::name`` (optionally ``/index``), not yet bound to a slot."""

    module: str
    name: str
    index: int | None = None

    @classmethod
    def parse(cls, text: str) -> "InputTag":
        match = _TAG_RE.match(text.strip())
        if match is None:
            raise InvalidInputTag(f"Invalid input tag: {text!r} (expected 'module::name' or 'module::name/index')")
        index = match.group("index")
        return cls(match.group("module"), match.group("name"), int(index) if index is not None else None)

    @staticmethod
    def is_tag(text: str) -> bool:
        return _TAG_RE.match(text.strip()) is not None

    def resolve(self, pool: "Pool", type_: type = float) -> "ResolvedInput":
        return pool.resolve(self, type_)

    def __str__(self) -> str:
        if self.index is None:
            return f"{self.module}::{self.name}"
        return f"{self.module}::{self.name}/{self.index}"


@dataclass(frozen=True, slots=True)
class ResolvedInput:
    tag: InputTag
    type_: type
    pool: "Pool"
    slot: int

    def get(self) -> Any:
        value = self.pool._read(self.slot)
        if self.tag.index is None:
            return value
        try:
            element = value[self.tag.index]
        except IndexError as exc:
            raise UnresolvedReference(f"Input '{self.tag}' is out of range") from exc
        return _check_element(element, self.type_, str(self.tag))


@dataclass(frozen=True, slots=True)
class OutputHandle:
    owner: str
    name: str
    type_: type
    pool: "Pool"
    slot: int

    def set(self, value: Any) -> None:
        self.pool._write(self.slot, value)

    def get(self) -> Any:
        return self.pool._read(self.slot)


class Pool:
    def __init__(self) -> None:
        self._values: list[Any] = []
        self._types: list[type] = []
        self._keys: list[tuple[str, str]] = []
        self._index: dict[tuple[str, str], int] = {}
        self._max_index: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: tuple[str, str]) -> bool:
        return key in self._index

    def produce(self, owner: str, name: str, type_: type = float) -> OutputHandle:
        key = (owner, name)
        if key in self._index:
            raise DuplicateOutput(f"Output '{owner}::{name}' is already produced")
        slot = len(self._values)
        self._values.append(None)
        self._types.append(type_)
        self._keys.append(key)
        self._index[key] = slot
        logger.debug("Registered slot %d: %s::%s (%s)", slot, owner, name, type_.__name__)
        return OutputHandle(owner, name, type_, self, slot)

    def input_reference(self, module: str, name: str, index: int | None = None) -> InputTag:
        return InputTag(module, name, index)

    def resolve(self, tag: InputTag, type_: type = float) -> ResolvedInput:
        slot = self._index.get((tag.module, tag.name))
        if slot is None:
            raise UnresolvedReference(f"Input '{tag}' does not refer to any produced output")

        declared = self._types[slot]
        if tag.index is not None:
            if declared is not list:
                raise InvalidIndex(f"Input '{tag}' is indexed but '{tag.module}::{tag.name}' is a {declared.__name__}")
            self._max_index[slot] = max(tag.index, self._max_index.get(slot, -1))
        elif declared is not type_:
            raise TypeMismatch(f"input '{tag}'", type_, declared)

        logger.debug("Resolved %s -> slot %d", tag, slot)
        return ResolvedInput(tag, type_, self, slot)

    def max_index(self, owner: str, name: str) -> int | None:
        """Highest element index any resolved input requested from a list slot."""
        slot = self._index.get((owner, name))
        if slot is None:
            return None
        return self._max_index.get(slot)

    def value(self, owner: str, name: str) -> Any:
        slot = self._index.get((owner, name))
        if slot is None:
            raise UnresolvedReference(f"No output named '{owner}::{name}'")
        return self._values[slot]

    def slots(self) -> list[tuple[str, str, type]]:
        return [(owner, name, type_) for (owner, name), type_ in zip(self._keys, self._types)]

    def _read(self, slot: int) -> Any:
        return self._values[slot]

    def _write(self, slot: int, value: Any) -> None:
        self._values[slot] = value
