"""Memory footprint model for a JVM process.

Turns the sizing inputs into heap, non-heap and other memory regions and adds a
safety margin on top of the subtotal:
- Heap split into young and old generation (ratio depends on the collector)
- Metaspace and compressed class space proportional to the loaded classes
- Thread stacks, code cache and direct memory from the inputs (direct memory
  from the heap when the profile sets a direct memory ratio)
- Native memory and JVM overhead as a share of heap (and non-heap)
- Safety margin from the profile's margin policy
"""
import logging
from typing import Callable
from typing import Dict
from typing import Optional
from typing import Tuple

from jvm_memory_calculator.config.sizing_profiles import DEFAULT_PROFILE
from jvm_memory_calculator.config.sizing_profiles import MarginPolicy
from jvm_memory_calculator.config.sizing_profiles import SizingProfile
from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput
from jvm_memory_calculator.utils.conversions import ceil_mb
from jvm_memory_calculator.utils.conversions import round_up_to_multiple

from .base import BaseMemoryStrategy

logger = logging.getLogger(__name__)


def _aligned_margin(subtotal: int, profile: SizingProfile) -> Tuple[int, int]:
    total = round_up_to_multiple(subtotal, profile.alignment_mb)
    return total - subtotal, total


def _fixed_percentage_margin(subtotal: int, profile: SizingProfile) -> Tuple[int, int]:
    margin = ceil_mb(subtotal, profile.margin_ratio)
    return margin, subtotal + margin


MARGIN_POLICIES: Dict[MarginPolicy, Callable[[int, SizingProfile], Tuple[int, int]]] = {
    MarginPolicy.ALIGNMENT: _aligned_margin,
    MarginPolicy.FIXED_PERCENTAGE: _fixed_percentage_margin,
}


def young_ratio(profile: SizingProfile, gc_strategy: GCStrategy) -> float:
    """Share of the heap given to the young generation for a collector."""
    if gc_strategy is GCStrategy.G1:
        return profile.young_ratio_g1
    return profile.young_ratio_low_latency


class ProfileMemoryStrategy(BaseMemoryStrategy):
    """
    Estimates the JVM footprint with the ratios of a sizing profile.
    """

    def __init__(self, profile: Optional[SizingProfile] = None):
        self.profile = profile or DEFAULT_PROFILE

    def compute_breakdown(self, sizing_input: SizingInput) -> MemoryBreakdown:
        profile = self.profile
        heap = sizing_input.heap_size_mb

        young_gen = ceil_mb(heap, young_ratio(profile, sizing_input.gc_strategy))
        old_gen = heap - young_gen

        metaspace = ceil_mb(sizing_input.loaded_class_count, profile.metaspace_ratio)
        # Exact for whole-MB stacks, a fractional product is rounded up
        thread_stacks = ceil_mb(
            sizing_input.thread_count, sizing_input.stack_size_per_thread_mb
        )
        compressed_class_space = ceil_mb(
            sizing_input.loaded_class_count, profile.compressed_class_ratio
        )
        total_non_heap = (
            metaspace
            + sizing_input.code_cache_mb
            + thread_stacks
            + compressed_class_space
        )

        if profile.direct_memory_ratio is None:
            direct_memory = sizing_input.direct_memory_mb
        else:
            direct_memory = ceil_mb(heap, profile.direct_memory_ratio)
        native_memory = ceil_mb(heap + total_non_heap, profile.native_ratio)
        jvm_overhead = ceil_mb(heap, profile.jvm_overhead_ratio)
        total_other = direct_memory + native_memory + jvm_overhead

        subtotal = heap + total_non_heap + total_other
        safety_margin, total = MARGIN_POLICIES[profile.margin_policy](
            subtotal, profile
        )
        logger.debug(
            f"[{profile.name}] subtotal={subtotal}MB margin={safety_margin}MB "
            f"total={total}MB ({profile.margin_policy.value})"
        )

        return MemoryBreakdown(
            heap_size_mb=heap,
            young_gen_mb=young_gen,
            old_gen_mb=old_gen,
            metaspace_mb=metaspace,
            code_cache_mb=sizing_input.code_cache_mb,
            thread_stacks_mb=thread_stacks,
            compressed_class_space_mb=compressed_class_space,
            total_non_heap_mb=total_non_heap,
            direct_memory_mb=direct_memory,
            native_memory_mb=native_memory,
            jvm_overhead_mb=jvm_overhead,
            total_other_mb=total_other,
            subtotal_mb=subtotal,
            safety_margin_mb=safety_margin,
            total_mb=total,
            margin_policy=profile.margin_policy,
        )


def compute_breakdown(
    sizing_input: SizingInput, profile: Optional[SizingProfile] = None
) -> MemoryBreakdown:
    """Estimate the memory breakdown of a JVM process."""
    return ProfileMemoryStrategy(profile).compute_breakdown(sizing_input)
