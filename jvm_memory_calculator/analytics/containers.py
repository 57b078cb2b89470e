import math

from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.recommendation import ContainerRecommendation
from jvm_memory_calculator.models.sizing_input import SizingInput
from jvm_memory_calculator.utils.conversions import ceil_mb
from jvm_memory_calculator.utils.conversions import to_decimal

from .base import BaseContainerStrategy

MEMORY_REQUEST_RATIO = 0.75
CPU_REQUEST_PER_THREAD = 0.1
CPU_LIMIT_PER_THREAD = 0.2


class KubernetesContainerStrategy(BaseContainerStrategy):
    """
    Recommends Kubernetes requests and limits for the container running the JVM.

    Without a target utilization the memory limit is the recommended total. With
    one in (0, 100], the limit is raised so the JVM fills only that share of the
    container. Any other target is ignored.
    """

    def _memory_limit(self, total_mb: int, target_utilization_percent) -> int:
        if target_utilization_percent is None:
            return total_mb
        return math.ceil(
            to_decimal(total_mb * 100) / to_decimal(target_utilization_percent)
        )

    def generate_recommendation(
        self, sizing_input: SizingInput, breakdown: MemoryBreakdown
    ) -> ContainerRecommendation:
        target = sizing_input.target_utilization_percent
        # Outside (0, 100] the limit would not leave room for the total
        if target is not None and not 0 < target <= 100:
            target = None
        memory_limit = self._memory_limit(breakdown.total_mb, target)
        return ContainerRecommendation(
            memory_request_mi=ceil_mb(memory_limit, MEMORY_REQUEST_RATIO),
            memory_limit_mi=memory_limit,
            cpu_request_cores=ceil_mb(sizing_input.thread_count, CPU_REQUEST_PER_THREAD),
            cpu_limit_cores=ceil_mb(sizing_input.thread_count, CPU_LIMIT_PER_THREAD),
            target_utilization_percent=target,
        )


def recommend_container_resources(
    sizing_input: SizingInput, breakdown: MemoryBreakdown
) -> ContainerRecommendation:
    """Kubernetes requests and limits for the estimated breakdown."""
    return KubernetesContainerStrategy().generate_recommendation(sizing_input, breakdown)
