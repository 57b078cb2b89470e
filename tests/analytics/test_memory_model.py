"""Tests for the JVM memory breakdown."""

import math

import pytest

from jvm_memory_calculator.analytics.memory import ProfileMemoryStrategy
from jvm_memory_calculator.analytics.memory import compute_breakdown
from jvm_memory_calculator.config.sizing_profiles import JAVA21_PROFILE
from jvm_memory_calculator.config.sizing_profiles import LEGACY_PROFILE
from jvm_memory_calculator.config.sizing_profiles import MarginPolicy
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput

SIZING_CASES = [
    dict(heap_size_mb=384, thread_count=85, loaded_class_count=30000),
    dict(heap_size_mb=512, thread_count=50, loaded_class_count=10000),
    dict(heap_size_mb=1, thread_count=1, loaded_class_count=0),
    dict(heap_size_mb=777, thread_count=13, loaded_class_count=12345, code_cache_mb=240),
    dict(heap_size_mb=8192, thread_count=400, loaded_class_count=75000, direct_memory_mb=0),
    dict(heap_size_mb=2000, thread_count=30, loaded_class_count=999, stack_size_per_thread_mb=0.5),
]


@pytest.fixture(params=SIZING_CASES)
def sizing_input(request) -> SizingInput:
    return SizingInput(**request.param)


def test_scenario_a_g1(g1_input):
    """Default Java 21 form values with G1."""
    breakdown = compute_breakdown(g1_input)

    assert breakdown.young_gen_mb == 154
    assert breakdown.old_gen_mb == 230
    assert breakdown.metaspace_mb == 150
    assert breakdown.compressed_class_space_mb == 45
    assert breakdown.thread_stacks_mb == 85
    assert breakdown.total_non_heap_mb == 344
    assert breakdown.native_memory_mb == 22
    assert breakdown.jvm_overhead_mb == 12
    assert breakdown.total_other_mb == 44
    assert breakdown.subtotal_mb == 772
    assert breakdown.total_mb == 776
    assert breakdown.safety_margin_mb == 4
    assert breakdown.safety_margin_percent == 0.52
    assert breakdown.margin_policy is MarginPolicy.ALIGNMENT


def test_scenario_b_zgc(zgc_input):
    """ZGC gives a quarter of the heap to the young generation."""
    breakdown = compute_breakdown(zgc_input)

    assert breakdown.young_gen_mb == 96
    assert breakdown.old_gen_mb == 288


def test_scenario_c_class_metadata():
    breakdown = compute_breakdown(
        SizingInput(heap_size_mb=512, thread_count=50, loaded_class_count=10000)
    )

    assert breakdown.metaspace_mb == 50
    assert breakdown.compressed_class_space_mb == 15


def test_legacy_profile_matches_original_calculator():
    """Pre Java 21 calculator defaults: 512MB heap, 50 threads, 10000 classes."""
    legacy_input = SizingInput(
        heap_size_mb=512,
        thread_count=50,
        loaded_class_count=10000,
        code_cache_mb=240,
    )
    breakdown = compute_breakdown(legacy_input, LEGACY_PROFILE)

    assert breakdown.young_gen_mb == 169
    assert breakdown.old_gen_mb == 343
    assert breakdown.metaspace_mb == 70
    assert breakdown.compressed_class_space_mb == 20
    assert breakdown.total_non_heap_mb == 380
    assert breakdown.direct_memory_mb == 52
    assert breakdown.native_memory_mb == 45
    assert breakdown.jvm_overhead_mb == 26
    assert breakdown.subtotal_mb == 1015
    assert breakdown.safety_margin_mb == 102
    assert breakdown.total_mb == 1117
    assert breakdown.margin_policy is MarginPolicy.FIXED_PERCENTAGE


def test_direct_memory_input_ignored_when_profile_derives_it(g1_input):
    """The legacy profile sizes direct buffers at 10% of heap, whatever the input."""
    sizing_input = SizingInput(**{**g1_input.to_dict(), "direct_memory_mb": 500})

    assert compute_breakdown(sizing_input, LEGACY_PROFILE).direct_memory_mb == 39
    assert compute_breakdown(sizing_input, JAVA21_PROFILE).direct_memory_mb == 500


def test_fixed_percentage_policy_on_java21_ratios(g1_input):
    profile = JAVA21_PROFILE.with_margin_policy(MarginPolicy.FIXED_PERCENTAGE)
    breakdown = compute_breakdown(g1_input, profile)

    assert breakdown.subtotal_mb == 772
    assert breakdown.safety_margin_mb == 78
    assert breakdown.total_mb == 850
    assert breakdown.safety_margin_percent == 10.1


def test_region_sums_hold(sizing_input):
    breakdown = compute_breakdown(sizing_input)

    assert breakdown.young_gen_mb + breakdown.old_gen_mb == sizing_input.heap_size_mb
    assert breakdown.total_non_heap_mb == (
        breakdown.metaspace_mb
        + breakdown.code_cache_mb
        + breakdown.thread_stacks_mb
        + breakdown.compressed_class_space_mb
    )
    assert breakdown.total_other_mb == (
        breakdown.direct_memory_mb
        + breakdown.native_memory_mb
        + breakdown.jvm_overhead_mb
    )
    assert breakdown.subtotal_mb == (
        breakdown.heap_size_mb + breakdown.total_non_heap_mb + breakdown.total_other_mb
    )
    assert breakdown.total_mb == breakdown.subtotal_mb + breakdown.safety_margin_mb


def test_regions_are_whole_megabytes(sizing_input):
    breakdown = compute_breakdown(sizing_input)

    for name, value in breakdown.to_dict().items():
        if name.endswith("_mb"):
            assert isinstance(value, int), name
            assert value >= 0, name


def test_alignment_policy_total_is_multiple_of_eight(sizing_input):
    breakdown = compute_breakdown(sizing_input, JAVA21_PROFILE)

    assert breakdown.total_mb % 8 == 0
    assert breakdown.total_mb >= breakdown.subtotal_mb
    assert breakdown.safety_margin_mb < 8


def test_fixed_percentage_policy_adds_ten_percent(sizing_input):
    breakdown = compute_breakdown(sizing_input, LEGACY_PROFILE)

    assert breakdown.total_mb == breakdown.subtotal_mb + math.ceil(
        breakdown.subtotal_mb / 10
    )


def test_switching_gc_only_changes_generations(g1_input, zgc_input):
    g1 = compute_breakdown(g1_input).to_dict()
    zgc = compute_breakdown(zgc_input).to_dict()

    changed = {name for name in g1 if g1[name] != zgc[name]}
    assert changed == {"young_gen_mb", "old_gen_mb"}


def test_fractional_stack_size_rounds_thread_stacks_up():
    breakdown = compute_breakdown(
        SizingInput(
            heap_size_mb=256,
            thread_count=85,
            loaded_class_count=1000,
            stack_size_per_thread_mb=0.5,
        )
    )

    assert breakdown.thread_stacks_mb == 43


def test_zero_heap_propagates_without_error():
    breakdown = compute_breakdown(
        SizingInput(heap_size_mb=0, thread_count=1, loaded_class_count=0)
    )

    assert breakdown.young_gen_mb == 0
    assert breakdown.old_gen_mb == 0
    assert breakdown.total_mb % 8 == 0


def test_breakdown_is_idempotent(g1_input):
    strategy = ProfileMemoryStrategy()

    assert strategy.compute_breakdown(g1_input) == strategy.compute_breakdown(g1_input)


def test_chart_slices_order_and_values(g1_input):
    slices = compute_breakdown(g1_input).chart_slices()

    assert list(slices) == ["Heap", "Non-Heap", "Other", "Safety Margin"]
    assert list(slices.values()) == [384, 344, 44, 4]


@pytest.mark.parametrize(
    "gc_strategy, young_gen_mb",
    [(GCStrategy.REGION_BASED, 154), (GCStrategy.LOW_LATENCY, 96)],
)
def test_young_ratio_follows_gc_strategy(g1_input, gc_strategy, young_gen_mb):
    sizing_input = SizingInput(**{**g1_input.to_dict(), "gc_strategy": gc_strategy})

    assert compute_breakdown(sizing_input).young_gen_mb == young_gen_mb
