import dataclasses

import pytest

from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput


def test_from_camelcase_form_fields():
    """Form field names map onto the snake_case fields."""
    sizing_input = SizingInput.from_dict(
        {
            "heapSizeMb": 384,
            "threadCount": 85,
            "loadedClassCount": 30000,
            "stackSizePerThreadMb": 1,
            "codeCacheMb": 64,
            "directMemoryMb": 10,
            "gcStrategy": "ZGC",
            "targetUtilizationPercent": 80,
        }
    )

    assert sizing_input.heap_size_mb == 384
    assert sizing_input.stack_size_per_thread_mb == 1
    assert sizing_input.gc_strategy is GCStrategy.ZGC
    assert sizing_input.target_utilization_percent == 80


def test_defaults():
    sizing_input = SizingInput(heap_size_mb=512, thread_count=50, loaded_class_count=1)

    assert sizing_input.stack_size_per_thread_mb == 1
    assert sizing_input.code_cache_mb == 64
    assert sizing_input.direct_memory_mb == 10
    assert sizing_input.gc_strategy is GCStrategy.G1
    assert sizing_input.target_utilization_percent is None


def test_positional_arguments_rejected():
    with pytest.raises(TypeError):
        SizingInput(384, 85, 30000)


def test_is_immutable(g1_input):
    with pytest.raises(dataclasses.FrozenInstanceError):
        g1_input.heap_size_mb = 1024


def test_to_dict_round_trips(g1_input):
    data = g1_input.to_dict()

    assert data["gc_strategy"] == "G1"
    assert SizingInput.from_dict(data) == g1_input


@pytest.mark.parametrize(
    "label, expected",
    [
        ("G1", GCStrategy.G1),
        ("g1", GCStrategy.G1),
        ("RegionBased", GCStrategy.G1),
        ("region-based", GCStrategy.G1),
        ("ZGC", GCStrategy.ZGC),
        ("LowLatency", GCStrategy.ZGC),
        (GCStrategy.LOW_LATENCY, GCStrategy.ZGC),
    ],
)
def test_gc_strategy_labels(label, expected):
    assert GCStrategy.parse(label) is expected


def test_unknown_gc_strategy():
    with pytest.raises(ValueError, match="Unknown GC strategy"):
        SizingInput(
            heap_size_mb=512, thread_count=1, loaded_class_count=1, gc_strategy="CMS"
        )


def test_gc_aliases_are_the_same_member():
    assert GCStrategy.REGION_BASED is GCStrategy.G1
    assert GCStrategy.LOW_LATENCY is GCStrategy.ZGC
    assert [strategy.value for strategy in GCStrategy] == ["G1", "ZGC"]
