from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationConfig(BaseModel):
    """Options for one TPC-DS generation run.

    Built once from defaults plus overrides and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", coerce_numbers_to_str=True)

    master: str = Field("local[*]", min_length=1, description="Spark master URL")
    dsdgen_dir: str = Field(..., min_length=1, description="Directory holding the dsdgen binary")
    scale_factor: Optional[str] = Field(
        None,
        pattern=r"^\d+$",
        description="Size of the dataset to generate, in GB",
    )
    location: Optional[str] = Field(None, min_length=1, description="Root directory to create data in")
    format: Optional[str] = Field(None, min_length=1, description="Spark data source format, e.g. parquet or orc")
    use_double_for_decimal: bool = False
    use_string_for_date: bool = False
    overwrite: bool = False
    partition_tables: bool = True
    cluster_by_partition_columns: bool = True
    filter_out_null_partition_values: bool = True
    # passed to genData as a Java Int
    num_partitions: int = Field(10000, ge=1, le=2**31 - 1, description="Number of dsdgen tasks")

    def with_overrides(self, **changes: Any) -> "GenerationConfig":
        """Return a validated copy with ``changes`` applied."""
        return GenerationConfig.model_validate({**self.model_dump(), **changes})
