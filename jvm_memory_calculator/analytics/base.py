from abc import ABC
from abc import abstractmethod
from typing import List

from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.recommendation import ContainerRecommendation
from jvm_memory_calculator.models.recommendation import ParameterRecommendation
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput


class BaseMemoryStrategy(ABC):
    """Abstract base class for all memory footprint models."""

    @abstractmethod
    def compute_breakdown(self, sizing_input: SizingInput) -> MemoryBreakdown:
        """Estimates the memory breakdown for the given sizing inputs."""
        pass


class BaseGCStrategy(ABC):
    """Abstract base class for the per-collector block of JVM flags."""

    gc_strategy: GCStrategy

    @abstractmethod
    def recommend(
        self,
        sizing_input: SizingInput,
        breakdown: MemoryBreakdown,
        tuning_hints: bool = False,
    ) -> List[ParameterRecommendation]:
        """Returns the collector flags, in display order."""
        pass


class BaseParameterStrategy(ABC):
    """Abstract base class for JVM parameter recommendation strategies."""

    @abstractmethod
    def recommend_parameters(
        self, sizing_input: SizingInput, breakdown: MemoryBreakdown
    ) -> List[ParameterRecommendation]:
        """Generates the ordered list of JVM flags for the sizing inputs."""
        pass


class BaseContainerStrategy(ABC):
    """Abstract base class for container resource recommendation strategies."""

    @abstractmethod
    def generate_recommendation(
        self, sizing_input: SizingInput, breakdown: MemoryBreakdown
    ) -> ContainerRecommendation:
        """Generates container requests and limits from the memory breakdown."""
        pass
