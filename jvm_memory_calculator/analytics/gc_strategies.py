from typing import Dict
from typing import List

from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.recommendation import ParameterRecommendation
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput

from .base import BaseGCStrategy

MAX_GC_PAUSE_MILLIS = 200
Z_ALLOCATION_SPIKE_TOLERANCE = 2
# One G1 region per 2 GB of heap, never below 1 MB
G1_REGION_DIVISOR_MB = 2048


class G1Strategy(BaseGCStrategy):
    """
    Flags for the region-based G1 collector: pause time goal, plus optional
    young generation and region size hints.
    """

    gc_strategy = GCStrategy.G1

    def _young_size_percent(self, breakdown: MemoryBreakdown) -> int:
        if not breakdown.heap_size_mb:
            return 0
        return breakdown.young_gen_mb * 100 // breakdown.heap_size_mb

    def _region_size_mb(self, heap_size_mb: int) -> int:
        return max(1, heap_size_mb // G1_REGION_DIVISOR_MB)

    def recommend(
        self,
        sizing_input: SizingInput,
        breakdown: MemoryBreakdown,
        tuning_hints: bool = False,
    ) -> List[ParameterRecommendation]:
        recommendations = [
            ParameterRecommendation(
                flag="-XX:+UseG1GC",
                value="",
                rationale=(
                    "The G1 is the default garbage collector in Java 21. It divides "
                    "the heap into regions, ideal for heaps larger than 4GB and "
                    "applications requiring predictable pause times."
                ),
            )
        ]
        if tuning_hints:
            recommendations.append(
                ParameterRecommendation(
                    flag="-XX:G1NewSizePercent",
                    value=str(self._young_size_percent(breakdown)),
                    rationale=(
                        "Lower bound of the young generation as a percentage of the "
                        "heap, matching the estimated young generation size."
                    ),
                )
            )
        recommendations.append(
            ParameterRecommendation(
                flag="-XX:MaxGCPauseMillis",
                value=str(MAX_GC_PAUSE_MILLIS),
                rationale=(
                    "Sets the maximum pause time goal for G1 collections in "
                    "milliseconds. G1 will attempt to adjust its behavior to keep "
                    "pauses below this value. A lower value results in shorter pauses "
                    "but may reduce throughput."
                ),
            )
        )
        if tuning_hints:
            recommendations.append(
                ParameterRecommendation(
                    flag="-XX:G1HeapRegionSize",
                    value=f"{self._region_size_mb(sizing_input.heap_size_mb)}m",
                    rationale=(
                        "Size of a G1 region. Larger regions reduce the number of "
                        "humongous allocations on big heaps."
                    ),
                )
            )
        return recommendations


class ZGCStrategy(BaseGCStrategy):
    """
    Flags for the low-latency ZGC collector.
    """

    gc_strategy = GCStrategy.ZGC

    def recommend(
        self,
        sizing_input: SizingInput,
        breakdown: MemoryBreakdown,
        tuning_hints: bool = False,
    ) -> List[ParameterRecommendation]:
        return [
            ParameterRecommendation(
                flag="-XX:+UseZGC",
                value="",
                rationale=(
                    "ZGC is a scalable, low-latency garbage collector that keeps "
                    "pauses below 1ms regardless of heap size. It is ideal for "
                    "applications that need consistent response times and can "
                    "utilize more CPU and memory."
                ),
            ),
            ParameterRecommendation(
                flag="-XX:ZAllocationSpikeTolerance",
                value=str(Z_ALLOCATION_SPIKE_TOLERANCE),
                rationale=(
                    "Controls how much extra space ZGC reserves for allocation "
                    "spikes. A higher value increases tolerance for spikes but uses "
                    "more memory. A value of 2 is a good balance for most "
                    "applications."
                ),
            ),
        ]


GC_STRATEGIES: Dict[GCStrategy, BaseGCStrategy] = {
    strategy.gc_strategy: strategy for strategy in (G1Strategy(), ZGCStrategy())
}


def get_gc_strategy(gc_strategy: GCStrategy) -> BaseGCStrategy:
    """Return the flag generator registered for a collector."""
    return GC_STRATEGIES[GCStrategy.parse(gc_strategy)]
