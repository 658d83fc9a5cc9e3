"""Tests for the transform registry."""

import pytest

from islandfit.engine.context import FrameContext
from islandfit.engine.registry import Layer, TransformRegistry, TransformSpec


def _noop(ctx: FrameContext) -> None:
    pass


def test_register_and_get():
    reg = TransformRegistry()
    spec = TransformSpec(id="T0.01", layer=Layer.BINARIZATION, fn=_noop)
    reg.register(spec)
    assert reg.get("T0.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.BINARIZATION, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(TransformSpec(id="T0.01", layer=Layer.BINARIZATION, fn=_noop))


def test_get_layer():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T0.01", layer=Layer.BINARIZATION, fn=_noop))
    reg.register(TransformSpec(id="T1.01", layer=Layer.TRACING, fn=_noop))
    layer1 = reg.get_layer(Layer.TRACING)
    assert [s.id for s in layer1] == ["T1.01"]


def test_schedule_with_deps():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T2.02", layer=Layer.FITTING, fn=_noop, dependencies=["T2.01"]))
    reg.register(TransformSpec(id="T2.01", layer=Layer.FITTING, fn=_noop, dependencies=["T1.01"]))
    reg.register(TransformSpec(id="T1.01", layer=Layer.TRACING, fn=_noop))
    order = [s.id for s in reg.schedule({"T2.02"})]
    assert order == ["T1.01", "T2.01", "T2.02"]


def test_schedule_detects_cycles():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="A", layer=Layer.TRACING, fn=_noop, dependencies=["B"]))
    reg.register(TransformSpec(id="B", layer=Layer.TRACING, fn=_noop, dependencies=["A"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.schedule(None)


def test_schedule_runs_whole_layer_before_next():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.01", layer=Layer.TRACING, fn=_noop))
    reg.register(TransformSpec(id="T1.99", layer=Layer.TRACING, fn=_noop, dependencies=["T1.01"]))
    reg.register(TransformSpec(id="T0.50", layer=Layer.FITTING, fn=_noop, dependencies=["T1.01"]))
    order = [s.id for s in reg.schedule(None)]
    assert order == ["T1.01", "T1.99", "T0.50"]


def test_schedule_orders_dependencies_within_layer():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="A", layer=Layer.FITTING, fn=_noop, dependencies=["B"]))
    reg.register(TransformSpec(id="B", layer=Layer.FITTING, fn=_noop))
    assert [s.id for s in reg.schedule(None)] == ["B", "A"]
    assert [s.id for s in reg.get_layer(Layer.FITTING)] == ["B", "A"]


def test_schedule_rejects_later_layer_dependency():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.01", layer=Layer.TRACING, fn=_noop, dependencies=["T2.01"]))
    reg.register(TransformSpec(id="T2.01", layer=Layer.FITTING, fn=_noop))
    with pytest.raises(ValueError, match="later-layer"):
        reg.schedule(None)


def test_schedule_skips_unrequested_transforms():
    reg = TransformRegistry()
    reg.register(TransformSpec(id="T1.01", layer=Layer.TRACING, fn=_noop))
    reg.register(TransformSpec(id="T1.02", layer=Layer.TRACING, fn=_noop, dependencies=["T1.01"]))
    reg.register(TransformSpec(id="T2.01", layer=Layer.FITTING, fn=_noop, dependencies=["T1.01"]))
    assert [s.id for s in reg.schedule({"T2.01"})] == ["T1.01", "T2.01"]


def test_builtin_transforms_registered():
    from islandfit.engine.pipeline import register_transforms
    from islandfit.engine.registry import get_registry

    register_transforms()
    ids = {s.id for s in get_registry().all()}
    assert ids == {"T0.01", "T1.01", "T1.02", "T2.01", "T2.02", "T3.01"}


def test_merge_runs_before_sampling():
    from islandfit.engine.pipeline import register_transforms
    from islandfit.engine.registry import get_registry

    register_transforms()
    order = [s.id for s in get_registry().schedule(None)]
    assert order.index("T1.02") < order.index("T2.01")
    assert order == sorted(order, key=lambda tid: get_registry().get(tid).layer)
