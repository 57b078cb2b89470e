"""JVM parameter recommendations.

Builds the ordered list of JVM flags for a set of sizing inputs:
- Initial and maximum heap
- The collector block of the selected GC strategy
- Thread stack size (and optional metaspace / class space flags)
- Reserved code cache and direct memory limits
- A fixed tail of diagnostic and safety flags
"""
from typing import List
from typing import Optional
from typing import Sequence

from jvm_memory_calculator.config.sizing_profiles import DEFAULT_PROFILE
from jvm_memory_calculator.config.sizing_profiles import SizingProfile
from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.recommendation import ParameterRecommendation
from jvm_memory_calculator.models.sizing_input import SizingInput
from jvm_memory_calculator.utils.conversions import floor_mb
from jvm_memory_calculator.utils.conversions import format_mb

from .base import BaseParameterStrategy
from .gc_strategies import get_gc_strategy

HEAP_RATIONALE = (
    "Sets the minimum and maximum heap sizes. Making them equal reduces memory "
    "reallocations. Xms is set to a fraction of Xmx (70% in the Java 21 profile) to "
    "allow dynamic adjustments without wasting initial memory."
)

DIAGNOSTIC_FLAGS = (
    ParameterRecommendation(
        flag="-XX:+ExitOnOutOfMemoryError",
        value="",
        rationale=(
            "Exit the JVM when an OutOfMemoryError is encountered. This can help "
            "avoid a situation where the JVM keeps running and consuming more memory "
            "without being able to recover."
        ),
    ),
    ParameterRecommendation(
        flag="-XX:+UnlockDiagnosticVMOptions",
        value="",
        rationale=(
            "Unlocks additional diagnostic options for JVM, enabling more advanced "
            "configuration and debugging options."
        ),
    ),
    ParameterRecommendation(
        flag="-XX:NativeMemoryTracking",
        value="summary",
        rationale=(
            "Enables Native Memory Tracking (NMT) and provides a summary of native "
            "memory usage. Useful for diagnosing memory issues related to native "
            "memory allocations."
        ),
    ),
    ParameterRecommendation(
        flag="-XX:+PrintNMTStatistics",
        value="",
        rationale=(
            "Prints statistics about native memory usage. Helps in debugging and "
            "understanding the memory consumption of native code."
        ),
    ),
)


class JvmParameterStrategy(BaseParameterStrategy):
    """
    Recommends JVM flags from the sizing inputs and the estimated breakdown.

    ``g1_tuning_hints`` adds the G1 young size and region size hints,
    ``class_space_flags`` adds explicit metaspace and class space sizes.
    """

    def __init__(
        self,
        profile: Optional[SizingProfile] = None,
        g1_tuning_hints: bool = False,
        class_space_flags: bool = False,
    ):
        self.profile = profile or DEFAULT_PROFILE
        self.g1_tuning_hints = g1_tuning_hints
        self.class_space_flags = class_space_flags

    def _heap_flags(self, sizing_input: SizingInput) -> List[ParameterRecommendation]:
        heap = sizing_input.heap_size_mb
        initial_heap = floor_mb(heap, self.profile.initial_heap_ratio)
        return [
            ParameterRecommendation(
                flag="-Xms",
                value=f"{initial_heap}m",
                rationale=HEAP_RATIONALE,
                separator="",
            ),
            ParameterRecommendation(
                flag="-Xmx", value=f"{heap}m", rationale=HEAP_RATIONALE, separator=""
            ),
        ]

    def _class_space_flags(
        self, breakdown: MemoryBreakdown
    ) -> List[ParameterRecommendation]:
        metaspace = f"{breakdown.metaspace_mb}m"
        return [
            ParameterRecommendation(
                flag="-XX:MetaspaceSize",
                value=metaspace,
                rationale="Initial metaspace size, the threshold for the first class unloading GC.",
            ),
            ParameterRecommendation(
                flag="-XX:MaxMetaspaceSize",
                value=metaspace,
                rationale="Maximum metaspace size, estimated from the number of loaded classes.",
            ),
            ParameterRecommendation(
                flag="-XX:CompressedClassSpaceSize",
                value=f"{breakdown.compressed_class_space_mb}m",
                rationale="Space reserved for compressed class pointers.",
            ),
        ]

    def recommend_parameters(
        self, sizing_input: SizingInput, breakdown: MemoryBreakdown
    ) -> List[ParameterRecommendation]:
        recommendations = self._heap_flags(sizing_input)

        gc_strategy = get_gc_strategy(sizing_input.gc_strategy)
        recommendations.extend(
            gc_strategy.recommend(sizing_input, breakdown, self.g1_tuning_hints)
        )

        recommendations.append(
            ParameterRecommendation(
                flag="-Xss",
                value=format_mb(sizing_input.stack_size_per_thread_mb, suffix="M"),
                rationale=(
                    "Sets the stack size for each thread. The default value is "
                    "usually sufficient. Increase it if you encounter "
                    "StackOverflowError exceptions or deep recursion."
                ),
                separator="",
            )
        )
        if self.class_space_flags:
            recommendations.extend(self._class_space_flags(breakdown))

        recommendations.append(
            ParameterRecommendation(
                flag="-XX:ReservedCodeCacheSize",
                value=f"{sizing_input.code_cache_mb}m",
                rationale=(
                    "Space reserved for JIT-compiled code. Important for applications "
                    "that use a lot of dynamic code or have many classes. Increase it "
                    "if you see messages about a full code cache. You can check the "
                    "current value with the parameter -XX:+PrintFlagsFinal."
                ),
            )
        )
        recommendations.append(
            ParameterRecommendation(
                flag="-XX:MaxDirectMemorySize",
                value=f"{breakdown.direct_memory_mb}m",
                rationale=(
                    "Maximum limit for direct memory (NIO). Important for "
                    "applications that use a lot of NIO or Netty. A value that is "
                    "too high can cause native OOM issues."
                ),
            )
        )
        recommendations.extend(DIAGNOSTIC_FLAGS)
        return recommendations


def recommend_parameters(
    sizing_input: SizingInput,
    breakdown: MemoryBreakdown,
    profile: Optional[SizingProfile] = None,
    g1_tuning_hints: bool = False,
    class_space_flags: bool = False,
) -> List[ParameterRecommendation]:
    """Ordered JVM flag recommendations for the sizing inputs."""
    strategy = JvmParameterStrategy(
        profile=profile,
        g1_tuning_hints=g1_tuning_hints,
        class_space_flags=class_space_flags,
    )
    return strategy.recommend_parameters(sizing_input, breakdown)


def format_command_line(recommendations: Sequence[ParameterRecommendation]) -> str:
    """Space-joined flag tokens, ready to paste after ``java``."""
    return " ".join(rec.token for rec in recommendations).strip()
