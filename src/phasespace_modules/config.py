from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, Field, field_validator

from .errors import MissingParameter, TypeMismatch
from .pool import InputTag

SAMPLER_NAME = "cuba"
SAMPLER_OUTPUT = "ps_points"

_MISSING = object()


class ParameterSet:
    """Read-only parameters of one module instance.

    String values written as ``module::name`` or ``module::name/index`` are
    stored as ``InputTag`` so that they can only be fetched as input tags.
    """

    __slots__ = ("_module_name", "_module_type", "_values")

    def __init__(self, module_name: str, values: Mapping[str, Any], module_type: str | None = None) -> None:
        self._module_name = module_name
        self._module_type = module_type
        self._values = MappingProxyType(dict(values))

    @classmethod
    def from_mapping(cls, module_name: str, values: Mapping[str, Any], module_type: str | None = None) -> "ParameterSet":
        parsed = {
            key: InputTag.parse(value) if isinstance(value, str) and InputTag.is_tag(value) else value
            for key, value in values.items()
        }
        return cls(module_name, parsed, module_type)

    @property
    def module_name(self) -> str:
        return self._module_name

    @property
    def module_type(self) -> str | None:
        return self._module_type

    def get(self, name: str, type_: type, default: Any = _MISSING) -> Any:
        if name not in self._values:
            if default is _MISSING:
                raise MissingParameter(name, self._module_name)
            return default

        value = self._values[name]
        if type_ is float and isinstance(value, int) and not isinstance(value, bool):
            return float(value)
        if type(value) is not type_:
            raise TypeMismatch(f"parameter '{self._module_name}.{name}'", type_, type(value))
        return value

    def names(self) -> list[str]:
        return list(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ParameterSet({self._module_name!r}, {dict(self._values)!r})"


class ModuleConfig(BaseModel):
    type: str = Field(..., min_length=1)
    name: str = Field(..., pattern=r"^[A-Za-z_][\w.-]*$")
    parameters: dict[str, Any] = Field(default_factory=dict)

    def parameter_set(self) -> ParameterSet:
        return ParameterSet.from_mapping(self.name, self.parameters, self.type)


class RunConfig(BaseModel):
    modules: list[ModuleConfig] = Field(..., min_length=1)

    @field_validator("modules")
    @classmethod
    def _validate_module_names(cls, v: list[ModuleConfig]) -> list[ModuleConfig]:
        seen: set[str] = set()
        for module in v:
            if module.name == SAMPLER_NAME:
                raise ValueError(f"module name '{SAMPLER_NAME}' is reserved for the sampler")
            if module.name in seen:
                raise ValueError(f"duplicate module name: {module.name}")
            seen.add(module.name)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RunConfig":
        data = _load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid run config: {path}\n{exc}") from exc


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:  # pragma: no cover
        raise ValueError(f"Failed to parse YAML: {p}") from exc


class InputPaths(BaseModel):
    config: str
    points: str | None = None
