"""JVM Memory Calculator: JVM footprint estimates and JVM flag recommendations."""

from jvm_memory_calculator.analytics.memory import compute_breakdown
from jvm_memory_calculator.analytics.parameters import format_command_line
from jvm_memory_calculator.analytics.parameters import recommend_parameters
from jvm_memory_calculator.api import calculate_memory
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput

__version__ = "0.1.0"

__all__ = [
    "GCStrategy",
    "SizingInput",
    "calculate_memory",
    "compute_breakdown",
    "format_command_line",
    "recommend_parameters",
]
