import logging
from typing import Optional

from jvm_memory_calculator.analytics.base import BaseContainerStrategy
from jvm_memory_calculator.analytics.base import BaseMemoryStrategy
from jvm_memory_calculator.analytics.base import BaseParameterStrategy
from jvm_memory_calculator.analytics.parameters import format_command_line
from jvm_memory_calculator.models.recommendation import SizingResults
from jvm_memory_calculator.models.sizing_input import SizingInput

logger = logging.getLogger(__name__)


class CalculatorService:
    """Orchestrates the memory estimate and the JVM / container recommendations."""

    def __init__(
        self,
        memory_strategy: BaseMemoryStrategy,
        parameter_strategy: BaseParameterStrategy,
        container_strategy: BaseContainerStrategy,
        profile_name: Optional[str] = None,
    ):
        self.memory_strategy = memory_strategy
        self.parameter_strategy = parameter_strategy
        self.container_strategy = container_strategy
        self.profile_name = profile_name

    def calculate(self, sizing_input: SizingInput) -> SizingResults:
        """
        Runs the memory model, then the parameter and container strategies on the
        same inputs. Every call recomputes everything from scratch.
        """
        # 1. Memory breakdown
        breakdown = self.memory_strategy.compute_breakdown(sizing_input)

        # 2. JVM flags, reusing the breakdown values
        parameters = self.parameter_strategy.recommend_parameters(
            sizing_input, breakdown
        )

        # 3. Container requests and limits
        containers = self.container_strategy.generate_recommendation(
            sizing_input, breakdown
        )

        logger.info(
            f"Recommended total memory {breakdown.total_mb}MB for "
            f"{sizing_input.heap_size_mb}MB heap ({sizing_input.gc_strategy.value})"
        )

        return SizingResults(
            sizing_input=sizing_input,
            profile_name=self.profile_name or "custom",
            breakdown=breakdown,
            parameters=parameters,
            containers=containers,
            command_line=format_command_line(parameters),
        )
