from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Sequence

from .config import SAMPLER_NAME, SAMPLER_OUTPUT, InputPaths, RunConfig
from .errors import UnresolvedReference
from .module import Module
from .points import PointSet
from .pool import OutputHandle, Pool
from .registry import ModuleRegistry, default_registry
from .report import EvaluationReport, ModuleSummary, PointRecord

logger = logging.getLogger(__name__)


class Pipeline:
    """Modules built against one pool, evaluated in configuration order.

    The sampler coordinates are exposed as ``cuba::ps_points`` (a list of
    floats), so modules reference them as ``cuba::ps_points/<i>``. Ordering is
    taken as listed: a module whose producer comes later fails to resolve.
    """

    def __init__(self, pool: Pool, sampler: OutputHandle, modules: Sequence[Module], types: Sequence[str]) -> None:
        self.pool = pool
        self.modules = list(modules)
        self.module_types = list(types)
        self._sampler = sampler
        self.dimensions = sum(module.dimensions() for module in self.modules)

    @classmethod
    def build(cls, config: RunConfig, registry: ModuleRegistry | None = None) -> "Pipeline":
        registry = registry or default_registry()
        pool = Pool()
        sampler = pool.produce(SAMPLER_NAME, SAMPLER_OUTPUT, list)

        modules: list[Module] = []
        for entry in config.modules:
            modules.append(registry.create(entry.type, pool, entry.parameter_set()))

        pipeline = cls(pool, sampler, modules, [entry.type for entry in config.modules])
        highest = pool.max_index(SAMPLER_NAME, SAMPLER_OUTPUT)
        if highest is not None and highest >= pipeline.dimensions:
            raise UnresolvedReference(
                f"Input '{SAMPLER_NAME}::{SAMPLER_OUTPUT}/{highest}' is out of range ({pipeline.dimensions} dimension(s))"
            )
        logger.info(
            "Built pipeline with %d module(s), %d dimension(s), %d pool slot(s)",
            len(pipeline.modules),
            pipeline.dimensions,
            len(pool),
        )
        return pipeline

    def outputs(self) -> list[tuple[str, str]]:
        return [(owner, name) for owner, name, _ in self.pool.slots() if owner != SAMPLER_NAME]

    def evaluate(self, point: Sequence[float]) -> dict[str, Any]:
        if len(point) != self.dimensions:
            raise ValueError(f"Expected a point with {self.dimensions} coordinate(s), got {len(point)}")

        self._sampler.set([float(x) for x in point])
        for module in self.modules:
            module.work()
        return {f"{owner}::{name}": self.pool.value(owner, name) for owner, name in self.outputs()}


def evaluate_points(
    pipeline: Pipeline,
    points: PointSet,
    paths: dict[str, str | None] | None = None,
) -> EvaluationReport:
    if points.dimensions != pipeline.dimensions:
        raise ValueError(
            f"Points have {points.dimensions} coordinate(s) but the pipeline consumes {pipeline.dimensions}"
        )

    records = [PointRecord(ps_point=point, outputs=pipeline.evaluate(point)) for point in points.points]

    outputs = pipeline.outputs()
    modules = [
        ModuleSummary(
            name=module.name,
            type=type_name,
            dimensions=module.dimensions(),
            outputs=[name for owner, name in outputs if owner == module.name],
        )
        for module, type_name in zip(pipeline.modules, pipeline.module_types)
    ]

    notes: list[str] = []
    if pipeline.dimensions == 0:
        notes.append("Pipeline consumes no sampler dimensions; every point evaluates identically.")

    return EvaluationReport(
        generated_at=datetime.now(timezone.utc).isoformat(),
        dimensions=pipeline.dimensions,
        paths=InputPaths.model_validate(paths) if paths is not None else None,
        modules=modules,
        points=records,
        notes=notes,
    )
