import pytest

from jvm_memory_calculator.config.sizing_profiles import DEFAULT_PROFILE
from jvm_memory_calculator.config.sizing_profiles import JAVA21_PROFILE
from jvm_memory_calculator.config.sizing_profiles import LEGACY_PROFILE
from jvm_memory_calculator.config.sizing_profiles import PROFILES
from jvm_memory_calculator.config.sizing_profiles import MarginPolicy
from jvm_memory_calculator.config.sizing_profiles import get_profile


def test_default_profile_is_java21():
    assert DEFAULT_PROFILE is JAVA21_PROFILE
    assert get_profile() is JAVA21_PROFILE
    assert JAVA21_PROFILE.margin_policy is MarginPolicy.ALIGNMENT


def test_profile_ratio_sets():
    assert (
        JAVA21_PROFILE.young_ratio_g1,
        JAVA21_PROFILE.young_ratio_low_latency,
        JAVA21_PROFILE.metaspace_ratio,
        JAVA21_PROFILE.compressed_class_ratio,
    ) == (0.40, 0.25, 0.005, 0.0015)
    assert (
        LEGACY_PROFILE.young_ratio_g1,
        LEGACY_PROFILE.metaspace_ratio,
        LEGACY_PROFILE.compressed_class_ratio,
        LEGACY_PROFILE.margin_policy,
    ) == (0.33, 0.007, 0.002, MarginPolicy.FIXED_PERCENTAGE)
    assert JAVA21_PROFILE.direct_memory_ratio is None
    assert LEGACY_PROFILE.direct_memory_ratio == 0.10


@pytest.mark.parametrize("name", ["java21", "JAVA21", " legacy "])
def test_get_profile_by_name(name):
    assert get_profile(name) is PROFILES[name.strip().lower()]


def test_get_profile_passes_profiles_through():
    assert get_profile(LEGACY_PROFILE) is LEGACY_PROFILE


def test_unknown_profile():
    with pytest.raises(ValueError, match="Unknown sizing profile"):
        get_profile("java8")


def test_with_margin_policy_returns_copy():
    profile = JAVA21_PROFILE.with_margin_policy("fixed-percentage")

    assert profile.margin_policy is MarginPolicy.FIXED_PERCENTAGE
    assert profile.metaspace_ratio == JAVA21_PROFILE.metaspace_ratio
    assert JAVA21_PROFILE.margin_policy is MarginPolicy.ALIGNMENT


def test_unknown_margin_policy():
    with pytest.raises(ValueError, match="Unknown margin policy"):
        MarginPolicy.parse("round-to-16")
