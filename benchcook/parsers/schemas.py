"""
Pydantic schemas for parsed benchmark runs and their per-day aggregates.

This is the single source of truth for:
- Measurement records (one parsed benchmark result line)
- Day aggregates (the filtered mean of all runs of one workload on one day)
- Parse result containers returned by the line parser

Copyright 2025 Advanced Micro Devices, Inc.
All rights reserved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Optional
import math

from pydantic import BaseModel, Field, field_validator, ConfigDict

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
PositiveInt = Annotated[int, Field(gt=0)]


# =============================================================================
# Common Types
# =============================================================================


class ParseStatus(Enum):
    """Status of a single line parse."""

    SUCCESS = "success"
    MISMATCH = "mismatch"  # Benchmark marker present, fields did not match
    UNMARKED = "unmarked"  # No Benchmark marker, not a result line at all


# =============================================================================
# Benchmark Run Schemas
# =============================================================================


class MeasurementRecord(BaseModel):
    """
    One benchmark run's result.

    Throughput is the field used for outlier filtering when runs are cooked
    into a day aggregate.
    """

    model_config = ConfigDict(frozen=True)

    ops_sec: float = Field(description="Throughput in ops/sec")
    read_bytes: int = Field(description="Bytes read during the run")
    write_bytes: int = Field(description="Bytes written during the run")
    read_amp: float = Field(description="Read amplification")
    write_amp: float = Field(description="Write amplification")

    @field_validator('ops_sec', 'read_amp', 'write_amp')
    @classmethod
    def validate_not_nan_inf(cls, v: float, info) -> float:
        """Ensure no NaN/Inf values in measurements."""
        if math.isnan(v) or math.isinf(v):
            raise ValueError(f'{info.field_name} cannot be NaN/Inf, got {v}')
        return v


class DayAggregate(BaseModel):
    """
    Filtered mean of all runs of a workload on one day.

    Only runs whose throughput lies within one population standard deviation
    of the mean throughput contribute to the averaged fields.
    """

    model_config = ConfigDict(frozen=True)

    runs: PositiveInt = Field(description="Number of runs observed for the day")
    count: PositiveInt = Field(description="Number of runs kept after outlier rejection")
    mean_ops_sec: float = Field(description="Unfiltered mean throughput")
    stddev_ops_sec: NonNegativeFloat = Field(description="Population std dev of throughput")

    ops_sec: float
    read_bytes: int
    write_bytes: int
    read_amp: float
    write_amp: float

    @property
    def rejected(self) -> int:
        """Number of runs dropped as outliers."""
        return self.runs - self.count

    def render(self) -> str:
        """Render as avgOpsPerSec,avgReadBytes,avgWriteBytes,avgReadAmp,avgWriteAmp."""
        return (
            f"{self.ops_sec:.1f},{self.read_bytes:d},{self.write_bytes:d},"
            f"{self.read_amp:.1f},{self.write_amp:.1f}"
        )


@dataclass
class ParsedLine:
    """
    Result of parsing one raw log line.

    On success carries the workload name and its record; on mismatch carries
    the raw line and the reason it was rejected.
    """

    status: ParseStatus
    workload: Optional[str] = None
    record: Optional[MeasurementRecord] = None
    line: Optional[str] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == ParseStatus.SUCCESS

    @property
    def mismatched(self) -> bool:
        return self.status == ParseStatus.MISMATCH
