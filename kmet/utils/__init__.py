"""Utility functions for the kmet dashboard."""

from kmet.utils.charts import bar, clamp, clamp01, sparkline
from kmet.utils.formatting import fit, format_log_line
from kmet.utils.resource_parser import (
    cpu_str_to_millicores,
    memory_str_to_bytes,
    parse_cpu,
)

__all__ = [
    # Charts
    "bar",
    "clamp",
    "clamp01",
    # Quantities
    "cpu_str_to_millicores",
    # Text
    "fit",
    "format_log_line",
    "memory_str_to_bytes",
    "parse_cpu",
    "sparkline",
]
