from typing import Optional
from typing import Union

from jvm_memory_calculator.analytics.containers import KubernetesContainerStrategy
from jvm_memory_calculator.analytics.memory import ProfileMemoryStrategy
from jvm_memory_calculator.analytics.parameters import JvmParameterStrategy
from jvm_memory_calculator.calculator_service import CalculatorService
from jvm_memory_calculator.config.sizing_profiles import MarginPolicy
from jvm_memory_calculator.config.sizing_profiles import SizingProfile
from jvm_memory_calculator.config.sizing_profiles import get_profile
from jvm_memory_calculator.models.recommendation import SizingResults
from jvm_memory_calculator.models.sizing_input import SizingInput
from jvm_memory_calculator.storage.arrow_io import ParquetSink


def build_service(
    profile: Union[str, SizingProfile, None] = None,
    margin_policy: Union[str, MarginPolicy, None] = None,
    g1_tuning_hints: bool = False,
    class_space_flags: bool = False,
) -> CalculatorService:
    """Wire the default strategies for a sizing profile into a CalculatorService."""
    sizing_profile = get_profile(profile)
    if margin_policy:
        sizing_profile = sizing_profile.with_margin_policy(margin_policy)

    return CalculatorService(
        memory_strategy=ProfileMemoryStrategy(sizing_profile),
        parameter_strategy=JvmParameterStrategy(
            profile=sizing_profile,
            g1_tuning_hints=g1_tuning_hints,
            class_space_flags=class_space_flags,
        ),
        container_strategy=KubernetesContainerStrategy(),
        profile_name=sizing_profile.name,
    )


def calculate_memory(
    sizing_input: SizingInput,
    profile: Union[str, SizingProfile, None] = None,
    margin_policy: Union[str, MarginPolicy, None] = None,
    g1_tuning_hints: bool = False,
    class_space_flags: bool = False,
    sink_path: Optional[str] = None,
) -> SizingResults:
    """
    A high-level function to estimate JVM memory and recommend JVM flags.

    :param sizing_input: The sizing inputs (heap, threads, classes, ...).
    :param profile: Name of the sizing profile ("java21" by default, or "legacy").
    :param margin_policy: Optional override of the profile's safety margin policy
                    ("alignment" or "fixed_percentage").
    :param g1_tuning_hints: Add G1 young size and region size hints.
    :param class_space_flags: Add explicit metaspace and class space sizes.
    :param sink_path: Optional path to save the results as a parquet dataset.
    :return: A SizingResults object with breakdown, flags and container sizing.
    """
    service = build_service(
        profile=profile,
        margin_policy=margin_policy,
        g1_tuning_hints=g1_tuning_hints,
        class_space_flags=class_space_flags,
    )
    results = service.calculate(sizing_input)

    if sink_path:
        sink = ParquetSink(sink_path)
        sink.save(results)

    return results
