"""Per-process information from ``/proc/[pid]``."""

from proclimits.pid.limits import (
    LIMITS_INFINITY,
    Limit,
    LimitDuration,
    LimitUnit,
    Limits,
    OtherUnit,
    format_limits,
    limits,
    limits_self,
    parse_limits,
)

__all__ = [
    "LIMITS_INFINITY",
    "Limit",
    "LimitDuration",
    "LimitUnit",
    "Limits",
    "OtherUnit",
    "format_limits",
    "limits",
    "limits_self",
    "parse_limits",
]
