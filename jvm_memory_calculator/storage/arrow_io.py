"""Arrow/Parquet storage layer for sizing results.

Each calculation becomes one row of a Parquet dataset partitioned by date.
"""
import logging

import pyarrow as pa
import pyarrow.parquet as pq
import s3fs
from jvm_memory_calculator.models.recommendation import SizingResults

from .datasink import IDataSink

logger = logging.getLogger(__name__)


class ParquetSink(IDataSink):
    """
    A data sink that writes sizing results to a Parquet dataset.
    """

    def __init__(self, sink_location: str):
        """
        Initializes the sink with a target location.
        :param sink_location: The root path for the Parquet dataset (e.g., 's3://my-bucket/my-path/').
        """
        self.sink_location = sink_location.rstrip("/")
        self.filesystem = (
            s3fs.S3FileSystem() if self.sink_location.startswith("s3://") else None
        )

    def _get_parameters_schema(self):
        return pa.struct(
            [
                ("flag", pa.string()),
                ("value", pa.string()),
                ("token", pa.string()),
                ("rationale", pa.string()),
            ]
        )

    def _get_schema(self) -> pa.Schema:
        return pa.schema(
            [
                # Inputs
                pa.field("heap_size_mb", pa.int64()),
                pa.field("thread_count", pa.int64()),
                pa.field("loaded_class_count", pa.int64()),
                pa.field("stack_size_per_thread_mb", pa.float64()),
                pa.field("code_cache_mb", pa.int64()),
                pa.field("direct_memory_mb", pa.int64()),
                pa.field("gc_strategy", pa.string()),
                pa.field("target_utilization_percent", pa.float64(), nullable=True),
                pa.field("profile_name", pa.string()),
                # Breakdown
                pa.field("young_gen_mb", pa.int64()),
                pa.field("old_gen_mb", pa.int64()),
                pa.field("metaspace_mb", pa.int64()),
                pa.field("thread_stacks_mb", pa.int64()),
                pa.field("compressed_class_space_mb", pa.int64()),
                pa.field("total_non_heap_mb", pa.int64()),
                pa.field("native_memory_mb", pa.int64()),
                pa.field("jvm_overhead_mb", pa.int64()),
                pa.field("total_other_mb", pa.int64()),
                pa.field("subtotal_mb", pa.int64()),
                pa.field("safety_margin_mb", pa.int64()),
                pa.field("safety_margin_percent", pa.float64()),
                pa.field("total_mb", pa.int64()),
                pa.field("margin_policy", pa.string()),
                # Containers
                pa.field("memory_request_mi", pa.int64()),
                pa.field("memory_limit_mi", pa.int64()),
                pa.field("cpu_request_cores", pa.int64()),
                pa.field("cpu_limit_cores", pa.int64()),
                # Flags
                pa.field("command_line", pa.string()),
                pa.field(
                    "parameters",
                    pa.list_(self._get_parameters_schema()),
                    nullable=True,
                ),
                pa.field("calculation_dt", pa.date32()),
            ]
        )

    def to_table(self, data: SizingResults) -> pa.Table:
        """Flatten one SizingResults into a single-row Arrow table."""
        containers = data.containers.to_dict()
        containers.pop("target_utilization_percent")
        row = {
            **data.sizing_input.to_dict(),
            "profile_name": data.profile_name,
            **data.breakdown.to_dict(),
            **containers,
            "command_line": data.command_line,
            "parameters": [p.to_dict() for p in data.parameters],
            "calculation_dt": data.calculation_dt,
        }
        schema = self._get_schema()
        table_data = {name: [row[name]] for name in schema.names}
        return pa.Table.from_pydict(table_data, schema=schema)

    def save(self, data: SizingResults) -> None:
        """
        Saves the sizing results to a partitioned Parquet dataset.
        The dataset is partitioned by 'calculation_dt'.
        """
        if not isinstance(data, SizingResults):
            raise TypeError("Data must be a SizingResults object")

        table = self.to_table(data)
        logger.info(f"Writing sizing results to {self.sink_location}")
        pq.write_to_dataset(
            table,
            root_path=self.sink_location,
            filesystem=self.filesystem,
            partition_cols=["calculation_dt"],
            existing_data_behavior="overwrite_or_ignore",
        )
