from jvm_memory_calculator import calculate_memory
from jvm_memory_calculator.models.recommendation import SizingResults
from jvm_memory_calculator.models.sizing_input import SizingInput

# --- Example 1: Form fields with camelCase keys ---
form_state = {
    "heapSizeMb": 384,
    "threadCount": 85,
    "loadedClassCount": 30000,
    "stackSizePerThreadMb": 1,
    "codeCacheMb": 64,
    "directMemoryMb": 10,
    "gcStrategy": "G1",
}

print("--- Estimating JVM memory for a G1 service ---")
results: SizingResults = calculate_memory(SizingInput.from_dict(form_state))

print(f"Young / Old: {results.breakdown.young_gen_mb} / {results.breakdown.old_gen_mb} MB")
print(f"Non-heap: {results.breakdown.total_non_heap_mb} MB")
print(f"Recommended Total Memory: {results.breakdown.total_mb} MB")
print(f"JVM options: {results.command_line}")

# --- Example 2: Same service on ZGC, with the legacy profile ---
zgc_results = calculate_memory(
    SizingInput.from_dict({**form_state, "gcStrategy": "ZGC"}), profile="legacy"
)
print(f"Recommended Total Memory (legacy, ZGC): {zgc_results.breakdown.total_mb} MB")
