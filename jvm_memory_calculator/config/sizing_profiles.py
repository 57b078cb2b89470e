"""Sizing profile configuration.

This module holds the ratio sets and safety margin policies used by the
memory model and the parameter advisor:
- MarginPolicy: how the subtotal is turned into a recommended total
- SizingProfile: a named, versioned set of ratios plus a margin policy
- JAVA21_PROFILE (default) and LEGACY_PROFILE
- Profile lookup by name
"""

from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Dict
from typing import Optional
from typing import Union


class MarginPolicy(str, Enum):
    """Safety margin policy applied on top of the estimated subtotal."""

    # Round the subtotal up to the next multiple of ``alignment_mb``
    ALIGNMENT = "alignment"
    # Add ``ceil(subtotal * margin_ratio)``
    FIXED_PERCENTAGE = "fixed_percentage"

    @classmethod
    def parse(cls, value: Union[str, "MarginPolicy"]) -> "MarginPolicy":
        if isinstance(value, cls):
            return value
        label = str(value).strip().lower().replace("-", "_")
        for policy in cls:
            if policy.value == label:
                return policy
        raise ValueError(
            f"Unknown margin policy '{value}'. "
            f"Expected one of: {', '.join(p.value for p in cls)}"
        )


@dataclass(frozen=True)
class SizingProfile:
    """Ratios and margin policy for one generation of the sizing formulas."""

    name: str
    description: str
    young_ratio_g1: float
    young_ratio_low_latency: float
    metaspace_ratio: float
    compressed_class_ratio: float
    native_ratio: float
    jvm_overhead_ratio: float
    initial_heap_ratio: float
    margin_policy: MarginPolicy
    alignment_mb: int = 8
    margin_ratio: float = 0.10
    # When set, direct buffers are derived from the heap instead of the input
    direct_memory_ratio: Optional[float] = None

    def with_margin_policy(
        self, margin_policy: Union[str, MarginPolicy]
    ) -> "SizingProfile":
        """Copy of this profile using another margin policy."""
        return replace(self, margin_policy=MarginPolicy.parse(margin_policy))


JAVA21_PROFILE = SizingProfile(
    name="java21",
    description="Java 21 ratios (G1 / ZGC aware), total aligned to 8 MB",
    young_ratio_g1=0.40,
    young_ratio_low_latency=0.25,
    metaspace_ratio=0.005,
    compressed_class_ratio=0.0015,
    native_ratio=0.03,
    jvm_overhead_ratio=0.03,
    initial_heap_ratio=0.7,
    margin_policy=MarginPolicy.ALIGNMENT,
)

LEGACY_PROFILE = SizingProfile(
    name="legacy",
    description=(
        "Pre Java 21 ratios, direct buffers at 10% of heap, flat 10% safety margin"
    ),
    young_ratio_g1=0.33,
    young_ratio_low_latency=0.33,
    metaspace_ratio=0.007,
    compressed_class_ratio=0.002,
    native_ratio=0.05,
    jvm_overhead_ratio=0.05,
    initial_heap_ratio=0.5,
    direct_memory_ratio=0.10,
    margin_policy=MarginPolicy.FIXED_PERCENTAGE,
)

DEFAULT_PROFILE = JAVA21_PROFILE

PROFILES: Dict[str, SizingProfile] = {
    profile.name: profile for profile in (JAVA21_PROFILE, LEGACY_PROFILE)
}


def get_profile(name: Union[str, SizingProfile, None] = None) -> SizingProfile:
    """Look up a sizing profile by name. None returns the default profile."""
    if name is None:
        return DEFAULT_PROFILE
    if isinstance(name, SizingProfile):
        return name
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown sizing profile '{name}'. Available: {', '.join(PROFILES)}"
        ) from None
