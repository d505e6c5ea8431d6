"""
Parsers module - raw benchmark log lines to validated records.

Parsers are responsible for:
- Recognising benchmark result lines
- Extracting the numeric fields of a run
- Validating results against Pydantic schemas

Parsers should NOT:
- Read files or walk directories
- Group or aggregate runs
- Log diagnostics (callers decide how to report mismatches)
"""

from benchcook.parsers.schemas import (
    DayAggregate,
    MeasurementRecord,
    ParsedLine,
    ParseStatus,
)
from benchcook.parsers.benchmark_line import BENCHMARK_LINE_RE, MARKER, BenchmarkLineParser

__all__ = [
    # Schemas
    "DayAggregate",
    "MeasurementRecord",
    "ParsedLine",
    "ParseStatus",
    # Parser implementations
    "BENCHMARK_LINE_RE",
    "MARKER",
    "BenchmarkLineParser",
]
