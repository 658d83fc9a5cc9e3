"""Transform registry — every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T2.01", layer=Layer.FITTING, dependencies=["T1.01"])
    def chebyshev_sampling(ctx: FrameContext) -> None:
        for poly in ctx.polygons:
            ...

Transforms run layer by layer: every scheduled transform of a layer finishes
before the next layer starts. Dependencies only order transforms inside one
layer and pull required transforms into a schedule. A dependency on a later
layer is an error.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from islandfit.engine.context import FrameContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    BINARIZATION = 0
    TRACING = 1
    FITTING = 2
    VALIDATION = 3


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["FrameContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline transforms. Holds functions only, never frame state."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        return self._order_layer([s for s in self._transforms.values() if s.layer == layer])

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: (s.layer, s.id))

    def schedule(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Run order for the requested transforms plus everything they depend on.

        Layers run in ascending order. Inside a layer, dependencies come first
        and ties break by ID.
        """
        selected = self._with_dependencies(requested_ids)
        for spec in selected:
            for dep in spec.dependencies:
                dep_spec = self._transforms.get(dep)
                if dep_spec is not None and dep_spec.layer > spec.layer:
                    raise ValueError(
                        f"{spec.id} ({spec.layer.name}) depends on later-layer {dep} ({dep_spec.layer.name})"
                    )

        ordered: list[TransformSpec] = []
        for layer in Layer:
            ordered.extend(self._order_layer([s for s in selected if s.layer == layer]))
        return ordered

    def _with_dependencies(self, requested_ids: set[str] | None) -> list[TransformSpec]:
        if requested_ids is None:
            return list(self._transforms.values())
        selected: dict[str, TransformSpec] = {}
        pending = list(requested_ids)
        while pending:
            tid = pending.pop()
            spec = self._transforms.get(tid)
            if spec is None or tid in selected:
                continue
            selected[tid] = spec
            pending.extend(spec.dependencies)
        return list(selected.values())

    @staticmethod
    def _order_layer(specs: list[TransformSpec]) -> list[TransformSpec]:
        by_id = {s.id: s for s in specs}
        ordered: list[TransformSpec] = []
        done: set[str] = set()
        active: set[str] = set()

        def visit(spec: TransformSpec) -> None:
            if spec.id in done:
                return
            if spec.id in active:
                raise ValueError(f"Circular dependency detected among: {sorted(active)}")
            active.add(spec.id)
            for dep in sorted(spec.dependencies):
                if dep in by_id:
                    visit(by_id[dep])
            active.discard(spec.id)
            done.add(spec.id)
            ordered.append(spec)

        for tid in sorted(by_id):
            visit(by_id[tid])
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["FrameContext"], None]):
        _registry.register(
            TransformSpec(
                id=id,
                layer=layer,
                fn=fn,
                dependencies=dependencies or [],
                description=description,
            )
        )
        return fn

    return decorator
