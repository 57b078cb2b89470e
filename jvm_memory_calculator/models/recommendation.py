from dataclasses import dataclass
from dataclasses import field
from datetime import date
from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from jvm_memory_calculator.models.memory_breakdown import MemoryBreakdown
from jvm_memory_calculator.models.sizing_input import SizingInput


@dataclass(frozen=True)
class ParameterRecommendation:
    """A single JVM flag with its value and a help text explaining it."""

    flag: str
    value: str
    rationale: str
    # "-Xmx" takes its value inline, "-XX:" options use "="
    separator: str = "="

    @property
    def token(self) -> str:
        """The flag as it appears on a java command line."""
        if not self.value:
            return self.flag
        return f"{self.flag}{self.separator}{self.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flag": self.flag,
            "value": self.value,
            "token": self.token,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class ContainerRecommendation:
    """Kubernetes requests and limits for a container running the JVM."""

    memory_request_mi: int
    memory_limit_mi: int
    cpu_request_cores: int
    cpu_limit_cores: int
    target_utilization_percent: Optional[float] = field(default=None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memory_request_mi": self.memory_request_mi,
            "memory_limit_mi": self.memory_limit_mi,
            "cpu_request_cores": self.cpu_request_cores,
            "cpu_limit_cores": self.cpu_limit_cores,
            "target_utilization_percent": self.target_utilization_percent,
        }


@dataclass
class SizingResults:
    """
    Data class to hold the full calculation output for one set of sizing inputs.
    """

    sizing_input: SizingInput
    profile_name: str
    breakdown: MemoryBreakdown
    parameters: List[ParameterRecommendation]
    containers: ContainerRecommendation
    command_line: str
    calculation_dt: date = field(default_factory=date.today)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "sizing_input": self.sizing_input.to_dict(),
            "profile_name": self.profile_name,
            "breakdown": self.breakdown.to_dict(),
            "parameters": [p.to_dict() for p in self.parameters],
            "containers": self.containers.to_dict(),
            "command_line": self.command_line,
            "calculation_dt": self.calculation_dt.isoformat(),
        }
