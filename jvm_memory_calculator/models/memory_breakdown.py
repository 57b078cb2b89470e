from dataclasses import asdict
from dataclasses import dataclass
from typing import Any
from typing import Dict

from jvm_memory_calculator.config.sizing_profiles import MarginPolicy


@dataclass(frozen=True)
class MemoryBreakdown:
    """
    Estimated JVM process footprint, split into heap, non-heap and other memory.
    All values are whole megabytes.
    """

    # Heap
    heap_size_mb: int
    young_gen_mb: int
    old_gen_mb: int

    # Non-heap
    metaspace_mb: int
    code_cache_mb: int
    thread_stacks_mb: int
    compressed_class_space_mb: int
    total_non_heap_mb: int

    # Other
    direct_memory_mb: int
    native_memory_mb: int
    jvm_overhead_mb: int
    total_other_mb: int

    # Totals
    subtotal_mb: int
    safety_margin_mb: int
    total_mb: int
    margin_policy: MarginPolicy

    @property
    def safety_margin_percent(self) -> float:
        """Safety margin as a percentage of the subtotal, two decimals."""
        if not self.subtotal_mb:
            return 0.0
        return round(self.safety_margin_mb / self.subtotal_mb * 100, 2)

    def chart_slices(self) -> Dict[str, int]:
        """Proportional slices for a distribution chart, in display order."""
        return {
            "Heap": self.heap_size_mb,
            "Non-Heap": self.total_non_heap_mb,
            "Other": self.total_other_mb,
            "Safety Margin": self.safety_margin_mb,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["margin_policy"] = self.margin_policy.value
        data["safety_margin_percent"] = self.safety_margin_percent
        return data
