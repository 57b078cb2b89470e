"""Data models for the user-supplied sizing inputs.

This module contains:
- GCStrategy: the garbage collector the process will run with
- SizingInput: the immutable record every calculation starts from
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

from jvm_memory_calculator.utils.conversions import camelcase


class GCStrategy(str, Enum):
    """Garbage collector choice. G1 is region-based, ZGC is low-latency."""

    G1 = "G1"
    ZGC = "ZGC"
    REGION_BASED = "G1"
    LOW_LATENCY = "ZGC"

    @classmethod
    def parse(cls, value: Union[str, "GCStrategy"]) -> "GCStrategy":
        """Resolve a GC label (G1, ZGC, RegionBased, LowLatency, any case)."""
        if isinstance(value, cls):
            return value
        label = str(value).strip().replace("-", "_").upper()
        aliases = {
            "G1": cls.G1,
            "G1GC": cls.G1,
            "REGIONBASED": cls.G1,
            "REGION_BASED": cls.G1,
            "ZGC": cls.ZGC,
            "Z": cls.ZGC,
            "LOWLATENCY": cls.ZGC,
            "LOW_LATENCY": cls.ZGC,
        }
        if label not in aliases:
            raise ValueError(
                f"Unknown GC strategy '{value}'. Expected one of: G1, ZGC"
            )
        return aliases[label]


@camelcase
@dataclass(frozen=True)
class SizingInput:
    """Sizing inputs for one calculation. All memory amounts are in MB."""

    heap_size_mb: int
    thread_count: int
    loaded_class_count: int
    stack_size_per_thread_mb: float = 1
    code_cache_mb: int = 64
    direct_memory_mb: int = 10
    gc_strategy: GCStrategy = GCStrategy.G1
    # Share of the container limit the JVM is expected to fill
    target_utilization_percent: Optional[float] = field(default=None)

    def __post_init__(self):
        object.__setattr__(self, "gc_strategy", GCStrategy.parse(self.gc_strategy))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SizingInput":
        """Create SizingInput from dictionary with camelCase or snake_case keys."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["gc_strategy"] = self.gc_strategy.value
        return data
