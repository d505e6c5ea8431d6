"""
Benchmark result line parser.

Matches lines of the form

    Benchmark<name> <iterations> <ops> ops/sec <read> read <write> write <ramp> r-amp <wamp> w-amp

and turns them into validated MeasurementRecord instances.

Copyright 2025 Advanced Micro Devices, Inc.
All rights reserved.
"""

import re

from pydantic import ValidationError

from benchcook.parsers.schemas import MeasurementRecord, ParsedLine, ParseStatus

MARKER = "Benchmark"

_INT = r"[+-]?\d+"
_FLOAT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_SEP = r"[ \t]+"

BENCHMARK_LINE_RE = re.compile(
    rf"^{MARKER}(?P<name>\S+)"
    rf"{_SEP}(?P<iterations>{_INT})"
    rf"{_SEP}(?P<ops_sec>{_FLOAT}){_SEP}ops/sec"
    rf"{_SEP}(?P<read_bytes>{_INT}){_SEP}read"
    rf"{_SEP}(?P<write_bytes>{_INT}){_SEP}write"
    rf"{_SEP}(?P<read_amp>{_FLOAT}){_SEP}r-amp"
    rf"{_SEP}(?P<write_amp>{_FLOAT}){_SEP}w-amp"
)


def _format_validation_error(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())


class BenchmarkLineParser:
    """
    Parser for benchmark result lines.

    Lines without the Benchmark marker are reported as UNMARKED so callers can
    skip them without a diagnostic. Marked lines that fail to match the full
    pattern, or whose values fail record validation, are reported as MISMATCH.
    The parser never logs; reporting is left to the caller.
    """

    def __init__(self, pattern: re.Pattern = BENCHMARK_LINE_RE):
        self.pattern = pattern

    def parse(self, line: str) -> ParsedLine:
        """
        Parse a single raw line.

        Args:
            line: Text line, with or without its trailing newline

        Returns:
            ParsedLine with status SUCCESS, MISMATCH or UNMARKED
        """
        line = line.rstrip("\r\n")
        if not line.startswith(MARKER):
            return ParsedLine(status=ParseStatus.UNMARKED)

        match = self.pattern.match(line)
        if match is None:
            return ParsedLine(
                status=ParseStatus.MISMATCH,
                line=line,
                error="line does not match benchmark result format",
            )

        try:
            record = MeasurementRecord(
                ops_sec=float(match.group("ops_sec")),
                read_bytes=int(match.group("read_bytes")),
                write_bytes=int(match.group("write_bytes")),
                read_amp=float(match.group("read_amp")),
                write_amp=float(match.group("write_amp")),
            )
        except ValidationError as e:
            return ParsedLine(status=ParseStatus.MISMATCH, line=line, error=_format_validation_error(e))

        return ParsedLine(
            status=ParseStatus.SUCCESS,
            workload=match.group("name"),
            record=record,
            line=line,
        )
