"""Resource parsing utilities for Kubernetes quantities.

Parses the quantity strings found in pod specs and metrics.k8s.io payloads:
- CPU: parsed to cores (float) or whole millicores (int)
- Memory: parsed to bytes, binary (Ki..Ei) and decimal (k..E) suffixes
"""

from __future__ import annotations

# Suffix multipliers for memory_str_to_bytes(); two-letter binary suffixes
# are checked before the one-letter decimal ones.
_MEMORY_BYTES_MULTIPLIERS: tuple[tuple[str, int], ...] = (
    ("Ki", 1024),
    ("Mi", 1024**2),
    ("Gi", 1024**3),
    ("Ti", 1024**4),
    ("Pi", 1024**5),
    ("Ei", 1024**6),
    ("k", 1000),
    ("K", 1000),
    ("M", 1000**2),
    ("G", 1000**3),
    ("T", 1000**4),
    ("P", 1000**5),
    ("E", 1000**6),
)

_CPU_DIVISORS: tuple[tuple[str, int], ...] = (
    ("n", 1_000_000_000),
    ("u", 1_000_000),
    ("m", 1000),
)


def parse_cpu(cpu_str: str) -> float:
    """Parse CPU string to cores (float).

    Handles nanocores ("500000000n"), microcores ("500000u"),
    millicores ("100m") and plain cores ("1.5", "2").

    Returns:
        CPU value in cores. 0.0 on parse error or empty string.
    """
    if not cpu_str:
        return 0.0

    cpu_str = str(cpu_str).strip()
    for suffix, divisor in _CPU_DIVISORS:
        if cpu_str.endswith(suffix):
            try:
                return float(cpu_str[: -len(suffix)]) / divisor
            except ValueError:
                return 0.0

    try:
        return float(cpu_str)
    except ValueError:
        return 0.0


def cpu_str_to_millicores(cpu_str: str) -> int:
    """Parse CPU string to whole millicores, rounding to nearest."""
    return int(round(parse_cpu(cpu_str) * 1000))


def memory_str_to_bytes(memory_str: str) -> int:
    """Convert memory string to bytes.

    Examples: "1024Ki" -> 1048576, "512Mi" -> 536870912, "1G" -> 10**9.

    Returns:
        Memory in whole bytes. 0 on parse error or empty string.
    """
    if not memory_str:
        return 0

    memory_str = str(memory_str).strip()

    for suffix, mult in _MEMORY_BYTES_MULTIPLIERS:
        if memory_str.endswith(suffix):
            try:
                return int(float(memory_str[: -len(suffix)]) * mult)
            except ValueError:
                return 0

    try:
        return int(float(memory_str))
    except ValueError:
        return 0


__all__ = [
    "cpu_str_to_millicores",
    "memory_str_to_bytes",
    "parse_cpu",
]
