import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from jvm_memory_calculator.api import calculate_memory
from jvm_memory_calculator.config.sizing_profiles import PROFILES
from jvm_memory_calculator.models.sizing_input import SizingInput

# Initialize FastMCP server
mcp = FastMCP("jvm-memory-calculator")


def _sizing_input(
    heap_size_mb: int,
    thread_count: int,
    loaded_class_count: int,
    stack_size_per_thread_mb: float,
    code_cache_mb: int,
    direct_memory_mb: int,
    gc_strategy: str,
    target_utilization_percent: Optional[float],
) -> SizingInput:
    """Helper to build a SizingInput from tool arguments."""
    return SizingInput(
        heap_size_mb=heap_size_mb,
        thread_count=thread_count,
        loaded_class_count=loaded_class_count,
        stack_size_per_thread_mb=stack_size_per_thread_mb,
        code_cache_mb=code_cache_mb,
        direct_memory_mb=direct_memory_mb,
        gc_strategy=gc_strategy,
        target_utilization_percent=target_utilization_percent,
    )


@mcp.tool()
def estimate_jvm_memory(
    heap_size_mb: int,
    thread_count: int,
    loaded_class_count: int,
    stack_size_per_thread_mb: float = 1,
    code_cache_mb: int = 64,
    direct_memory_mb: int = 10,
    gc_strategy: str = "G1",
    target_utilization_percent: Optional[float] = None,
    profile: str = "java21",
) -> str:
    """
    Estimate the memory footprint of a JVM process and recommend JVM parameters.

    Args:
        heap_size_mb: Desired maximum heap in MB.
        thread_count: Number of threads.
        loaded_class_count: Number of loaded classes.
        stack_size_per_thread_mb: Stack size per thread in MB.
        code_cache_mb: Reserved code cache in MB.
        direct_memory_mb: Max direct memory in MB.
        gc_strategy: 'G1' (region-based) or 'ZGC' (low latency).
        target_utilization_percent: Optional share of the container limit the JVM should fill
            (0 < target <= 100, anything else is ignored).
        profile: Sizing profile, 'java21' (default) or 'legacy'.
    """
    try:
        sizing_input = _sizing_input(
            heap_size_mb,
            thread_count,
            loaded_class_count,
            stack_size_per_thread_mb,
            code_cache_mb,
            direct_memory_mb,
            gc_strategy,
            target_utilization_percent,
        )
        results = calculate_memory(sizing_input, profile=profile)
        return json.dumps(results.to_dict(), indent=2)
    except Exception as e:
        return f"Error estimating JVM memory: {str(e)}"


@mcp.tool()
def recommend_jvm_parameters(
    heap_size_mb: int,
    thread_count: int,
    loaded_class_count: int,
    stack_size_per_thread_mb: float = 1,
    code_cache_mb: int = 64,
    direct_memory_mb: int = 10,
    gc_strategy: str = "G1",
    profile: str = "java21",
    g1_tuning_hints: bool = False,
) -> str:
    """
    Recommend JVM parameters as a single command line string.

    Args:
        heap_size_mb: Desired maximum heap in MB.
        thread_count: Number of threads.
        loaded_class_count: Number of loaded classes.
        stack_size_per_thread_mb: Stack size per thread in MB.
        code_cache_mb: Reserved code cache in MB.
        direct_memory_mb: Max direct memory in MB.
        gc_strategy: 'G1' (region-based) or 'ZGC' (low latency).
        profile: Sizing profile, 'java21' (default) or 'legacy'.
        g1_tuning_hints: Add G1 young generation and region size hints.
    """
    try:
        sizing_input = _sizing_input(
            heap_size_mb,
            thread_count,
            loaded_class_count,
            stack_size_per_thread_mb,
            code_cache_mb,
            direct_memory_mb,
            gc_strategy,
            None,
        )
        results = calculate_memory(
            sizing_input, profile=profile, g1_tuning_hints=g1_tuning_hints
        )
        return results.command_line
    except Exception as e:
        return f"Error recommending JVM parameters: {str(e)}"


@mcp.tool()
def list_sizing_profiles() -> str:
    """
    List the available sizing profiles and their ratios.
    """
    profiles = [
        {
            "name": profile.name,
            "description": profile.description,
            "young_ratio_g1": profile.young_ratio_g1,
            "young_ratio_low_latency": profile.young_ratio_low_latency,
            "metaspace_ratio": profile.metaspace_ratio,
            "compressed_class_ratio": profile.compressed_class_ratio,
            "direct_memory_ratio": profile.direct_memory_ratio,
            "margin_policy": profile.margin_policy.value,
        }
        for profile in PROFILES.values()
    ]
    return json.dumps(profiles, indent=2)


def main():
    mcp.run()


if __name__ == "__main__":
    main()
