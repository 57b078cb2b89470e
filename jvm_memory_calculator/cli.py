# cli.py
import argparse
import json
import sys
from typing import List
from typing import Optional

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from jvm_memory_calculator.api import calculate_memory
from jvm_memory_calculator.config.sizing_profiles import PROFILES
from jvm_memory_calculator.config.sizing_profiles import MarginPolicy
from jvm_memory_calculator.models.recommendation import SizingResults
from jvm_memory_calculator.models.sizing_input import GCStrategy
from jvm_memory_calculator.models.sizing_input import SizingInput
from jvm_memory_calculator.utils.clipboard import copy_to_clipboard
from jvm_memory_calculator.utils.logging import setup_logging

console = Console()
err_console = Console(stderr=True)

CHART_WIDTH = 40
CHART_COLORS = {
    "Heap": "blue",
    "Non-Heap": "red",
    "Other": "green",
    "Safety Margin": "yellow",
}


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} must be a positive integer")
    return number


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} must not be negative")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"{value} must be a positive number")
    # 1.0 renders as -Xss1M, not -Xss1.0M
    return int(number) if number.is_integer() else number


def _percentage(value: str) -> float:
    number = float(value)
    if not 0 < number <= 100:
        raise argparse.ArgumentTypeError(f"{value} must be within (0, 100]")
    return number


def _distribution_table(results: SizingResults) -> Table:
    slices = results.breakdown.chart_slices()
    total = sum(slices.values()) or 1

    table = Table(title="Memory Distribution", show_header=True, box=None)
    table.add_column("Region", style="cyan bold")
    table.add_column("MB", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("")
    for label, value in slices.items():
        share = value / total
        bar = "█" * round(share * CHART_WIDTH)
        table.add_row(
            label,
            str(value),
            f"{share * 100:.1f}%",
            f"[{CHART_COLORS[label]}]{bar}[/]",
        )
    return table


def _region_panels(results: SizingResults) -> Columns:
    breakdown = results.breakdown

    heap = Table.grid()
    heap.add_row(f"Young Generation: {breakdown.young_gen_mb}MB")
    heap.add_row(f"Old Generation: {breakdown.old_gen_mb}MB")

    non_heap = Table.grid()
    non_heap.add_row(f"Metaspace: {breakdown.metaspace_mb}MB")
    non_heap.add_row(f"Code Cache: {breakdown.code_cache_mb}MB")
    non_heap.add_row(f"Thread Stacks: {breakdown.thread_stacks_mb}MB")
    non_heap.add_row(f"Compressed Class: {breakdown.compressed_class_space_mb}MB")

    other = Table.grid()
    other.add_row(f"Direct Buffers: {breakdown.direct_memory_mb}MB")
    other.add_row(f"Native Memory: {breakdown.native_memory_mb}MB")
    other.add_row(f"JVM Overhead: {breakdown.jvm_overhead_mb}MB")

    return Columns(
        [
            Panel(
                heap,
                title=f"Heap Memory: {breakdown.heap_size_mb}MB",
                border_style="blue",
            ),
            Panel(
                non_heap,
                title=f"Non-Heap Memory: {breakdown.total_non_heap_mb}MB",
                border_style="red",
            ),
            Panel(
                other,
                title=f"Other Memory: {breakdown.total_other_mb}MB",
                border_style="green",
            ),
        ]
    )


def render_results(results: SizingResults, out: Optional[Console] = None) -> None:
    """Print the breakdown, JVM flags and container sizing."""
    out = out or console
    breakdown = results.breakdown
    sizing_input = results.sizing_input

    out.rule(
        f"[bold magenta]JVM Memory Calculator ({sizing_input.gc_strategy.value}, "
        f"profile: {results.profile_name})[/]"
    )
    out.print(_distribution_table(results))
    out.print(_region_panels(results))

    total = Table(show_header=False, box=None)
    total.add_column("Metric", style="cyan bold")
    total.add_column("Value", style="green")
    total.add_row("Recommended Total Memory", f"[bold]{breakdown.total_mb}MB[/]")
    total.add_row(
        "Safety Margin",
        f"{breakdown.safety_margin_mb}MB ({breakdown.safety_margin_percent:.2f}%, "
        f"{breakdown.margin_policy.value})",
    )
    out.print(Panel(total, expand=False, border_style="green"))

    params = Table(
        title="Recommended JVM Parameters",
        show_header=True,
        header_style="bold magenta",
    )
    params.add_column("Flag", style="cyan", no_wrap=True)
    params.add_column("Description")
    for rec in results.parameters:
        params.add_row(escape(rec.token), rec.rationale)
    out.print(params)
    out.print("[bold magenta]java options[/]")
    # One line, so the flags can be copied from the terminal as is
    out.print(escape(results.command_line), soft_wrap=True)

    containers = results.containers
    k8s = Table(
        title="Kubernetes Requests & Limits",
        show_header=False,
        box=None,
        min_width=40,
    )
    k8s.add_column("Metric", style="cyan bold")
    k8s.add_column("Value", style="green")
    k8s.add_row("Memory Request", f"{containers.memory_request_mi}Mi")
    k8s.add_row("Memory Limit", f"{containers.memory_limit_mi}Mi")
    k8s.add_row("CPU Request", f"{containers.cpu_request_cores} cores")
    k8s.add_row("CPU Limit", f"{containers.cpu_limit_cores} cores")
    if containers.target_utilization_percent:
        k8s.add_row("Target Utilization", f"{containers.target_utilization_percent}%")
    out.print(k8s)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate JVM memory footprint and recommend JVM parameters"
    )
    parser.add_argument(
        "--heap-size", type=_positive_int, default=384, help="Desired heap (MB)"
    )
    parser.add_argument(
        "--threads", type=_positive_int, default=85, help="Number of threads"
    )
    parser.add_argument(
        "--classes", type=_non_negative_int, default=30000, help="Number of classes"
    )
    parser.add_argument(
        "--stack-size",
        type=_positive_float,
        default=1,
        help="Stack size per thread (MB)",
    )
    parser.add_argument(
        "--code-cache",
        type=_positive_int,
        default=64,
        help="Reserved code cache (MB)",
    )
    parser.add_argument(
        "--direct-memory",
        type=_non_negative_int,
        default=10,
        help="Direct memory size (MB)",
    )
    parser.add_argument(
        "--gc",
        type=str.upper,
        default=GCStrategy.G1.value,
        choices=[strategy.value for strategy in GCStrategy],
        help="Garbage collector: G1 (recommended) or ZGC (low latency)",
    )
    parser.add_argument(
        "--target-utilization",
        type=_percentage,
        help="Share of the container memory limit the JVM should fill (%%)",
    )
    parser.add_argument(
        "--profile",
        type=str.lower,
        default="java21",
        choices=list(PROFILES),
        help="Sizing profile (ratio set and safety margin policy)",
    )
    parser.add_argument(
        "--margin-policy",
        choices=[policy.value for policy in MarginPolicy],
        help="Override the safety margin policy of the profile",
    )
    parser.add_argument(
        "--g1-hints",
        action="store_true",
        help="Add G1 young generation and region size hints",
    )
    parser.add_argument(
        "--class-space-flags",
        action="store_true",
        help="Add explicit metaspace and compressed class space sizes",
    )
    parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the recommended JVM parameters to the clipboard",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the results as JSON"
    )
    parser.add_argument(
        "--sink-path",
        type=str,
        help="Path to save sizing results parquet file (e.g., s3://bucket/path)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        sizing_input = SizingInput(
            heap_size_mb=args.heap_size,
            thread_count=args.threads,
            loaded_class_count=args.classes,
            stack_size_per_thread_mb=args.stack_size,
            code_cache_mb=args.code_cache,
            direct_memory_mb=args.direct_memory,
            gc_strategy=args.gc,
            target_utilization_percent=args.target_utilization,
        )
        results = calculate_memory(
            sizing_input,
            profile=args.profile,
            margin_policy=args.margin_policy,
            g1_tuning_hints=args.g1_hints,
            class_space_flags=args.class_space_flags,
            sink_path=args.sink_path,
        )
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", style="red")
        if not isinstance(e, ValueError):
            raise e
        return 1

    if args.json:
        print(json.dumps(results.to_dict(), indent=2))
    else:
        render_results(results)

    if args.copy:
        outcome = copy_to_clipboard(results.command_line)
        if outcome.success:
            err_console.print(f"[bold green]{outcome.message}[/]")
        else:
            err_console.print(
                f"[bold red]Failed to copy JVM parameters:[/] {escape(outcome.message)}"
            )
    return 0


if __name__ == "__main__":
    sys.exit(main())
