"""Stage registry — every compositing stage is a standalone function registered via decorator.

Usage:
    @stage(id="S3", layer=Stage.SPARKLE, dependencies=["S2"])
    def sparkle(ctx: RenderContext) -> None:
        ctx.surface = composite(ctx.surface, ...)

Adding a new stage = creating one module under ``engine/stages`` with the decorator.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from hypno.engine.context import RenderContext

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    """Paint order. Lower values are drawn first (further back)."""

    BACKGROUND = 1
    PATTERN = 2
    SPARKLE = 3
    TEXT = 4
    GUIDE = 5


@dataclass
class StageSpec:
    id: str
    layer: Stage
    fn: Callable[["RenderContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    """Registry of compositing stages."""

    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def resolve_order(self) -> list[StageSpec]:
        """Paint order: topological over dependencies, ties broken by (layer, id)."""
        pool = self._stages
        in_degree: dict[str, int] = {sid: 0 for sid in pool}
        for sid, spec in pool.items():
            for dep in spec.dependencies:
                if dep in pool:
                    in_degree[sid] += 1

        def _key(sid: str) -> tuple[int, str]:
            return (int(pool[sid].layer), sid)

        queue = sorted([sid for sid, d in in_degree.items() if d == 0], key=_key)
        ordered: list[StageSpec] = []

        while queue:
            sid = queue.pop(0)
            ordered.append(pool[sid])
            for other_id, other_spec in pool.items():
                if sid in other_spec.dependencies:
                    in_degree[other_id] -= 1
                    if in_degree[other_id] == 0:
                        queue.append(other_id)
                        queue.sort(key=_key)

        if len(ordered) != len(pool):
            missing = set(pool.keys()) - {s.id for s in ordered}
            raise ValueError(f"Circular dependency detected among: {missing}")

        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


# Module-level singleton
_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    layer: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a compositing stage."""

    def decorator(fn: Callable[["RenderContext"], None]):
        spec = StageSpec(
            id=id,
            layer=layer,
            fn=fn,
            dependencies=dependencies or [],
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
