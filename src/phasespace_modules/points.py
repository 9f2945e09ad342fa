from __future__ import annotations

import itertools

import numpy as np
from pydantic import BaseModel, Field, field_validator


class PointSet(BaseModel):
    points: list[list[float]] = Field(..., min_length=1)

    @field_validator("points")
    @classmethod
    def _validate_points(cls, v: list[list[float]]) -> list[list[float]]:
        width = len(v[0])
        for i, point in enumerate(v):
            if len(point) != width:
                raise ValueError(f"point {i} has {len(point)} coordinate(s), expected {width}")
            for x in point:
                if not 0.0 <= x <= 1.0:
                    raise ValueError(f"point {i} has a coordinate outside [0, 1]: {x}")
        return v

    @property
    def dimensions(self) -> int:
        return len(self.points[0])


def midpoint_grid(n: int, dimensions: int) -> PointSet:
    """Centres of the ``n**dimensions`` equal cells of the unit hypercube."""
    if n < 1:
        raise ValueError("grid size must be >= 1")
    if dimensions < 0:
        raise ValueError("dimensions must be >= 0")
    axis = (np.arange(n, dtype=np.float64) + 0.5) / n
    points = [list(p) for p in itertools.product(axis.tolist(), repeat=dimensions)]
    return PointSet(points=points)
