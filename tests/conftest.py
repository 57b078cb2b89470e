import pytest

from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput


@pytest.fixture
def g1_input() -> SizingInput:
    """Default form values of the Java 21 calculator."""
    return SizingInput(
        heap_size_mb=384,
        thread_count=85,
        loaded_class_count=30000,
        stack_size_per_thread_mb=1,
        code_cache_mb=64,
        direct_memory_mb=10,
        gc_strategy=GCStrategy.G1,
    )


@pytest.fixture
def zgc_input(g1_input: SizingInput) -> SizingInput:
    return SizingInput(**{**g1_input.to_dict(), "gc_strategy": GCStrategy.ZGC})
