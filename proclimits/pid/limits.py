"""Process resource limits from ``/proc/[pid]/limits``.

The kernel prints one header line followed by sixteen rows in a fixed order::

    Limit                     Soft Limit           Hard Limit           Units
    Max cpu time              unlimited            unlimited            seconds
    ...
    Max realtime timeout      unlimited            unlimited            us

Each row is a label, a soft and a hard limit (``unlimited`` or an integer)
and an optional unit. The CPU time and realtime timeout rows are converted
to :class:`~datetime.timedelta` values using their unit.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any

from proclimits.config.models import ProcLimitsConfig
from proclimits.errors import MalformedRowError, TruncatedInputError, UnitMismatchError
from proclimits.io import read_to_end
from proclimits.parsers import (
    GrammarError,
    Incomplete,
    line_ending,
    map_result,
    opt,
    parse_isize,
    parse_word,
    skip_space,
    tag,
    take_until,
    take_until_and_consume,
)

LIMITS_INFINITY = -1
"""Value of a soft or hard limit reported as ``unlimited``."""


class LimitUnit(str, Enum):
    """Units printed in the last column of the limits table."""

    SECONDS = "seconds"
    BYTES = "bytes"
    PROCESSES = "processes"
    FILES = "files"
    LOCKS = "locks"
    SIGNALS = "signals"
    MICROSECONDS = "us"


@dataclass(frozen=True)
class OtherUnit:
    """A unit word the kernel printed that is not a known LimitUnit."""

    text: str


Unit = LimitUnit | OtherUnit


@dataclass(frozen=True)
class Limit:
    """Soft and hard limit of one resource.

    A value equal to LIMITS_INFINITY means the limit is "unlimited".
    """

    soft_limit: int
    hard_limit: int
    unit: Unit | None = None


@dataclass(frozen=True)
class LimitDuration:
    """Soft and hard limit of a time-valued resource.

    "unlimited" is a duration of -1 in the row's unit.
    """

    soft_limit: timedelta
    hard_limit: timedelta
    unit: Unit | None = None


@dataclass(frozen=True)
class Limits:
    """Process limits information.

    See getrlimit(2) for the meaning of each resource.

    Attributes:
        max_cpu_time: CPU time the process can use.
        max_file_size: Largest file the process may create.
        max_data_size: Size of the process's data segment.
        max_stack_size: Size of the process stack.
        max_core_file_size: Size of a core file.
        max_resident_set: Size of the process's resident set.
        max_processes: Number of threads the real user ID may create.
        max_open_files: One more than the highest file descriptor number.
        max_locked_memory: Bytes of memory that may be locked into RAM.
        max_address_space: Size of the virtual address space.
        max_file_locks: Number of locks and leases.
        max_pending_signals: Number of signals queued for the real user ID.
        max_msgqueue_size: Bytes allocated to POSIX message queues.
        max_nice_priority: Ceiling of the nice value.
        max_realtime_priority: Ceiling of the real-time priority.
        max_realtime_timeout: CPU time a real-time task may consume without
            a blocking system call.
    """

    max_cpu_time: LimitDuration
    max_file_size: Limit
    max_data_size: Limit
    max_stack_size: Limit
    max_core_file_size: Limit
    max_resident_set: Limit
    max_processes: Limit
    max_open_files: Limit
    max_locked_memory: Limit
    max_address_space: Limit
    max_file_locks: Limit
    max_pending_signals: Limit
    max_msgqueue_size: Limit
    max_nice_priority: Limit
    max_realtime_priority: Limit
    max_realtime_timeout: LimitDuration

    def to_dict(self) -> dict[str, Any]:
        """Serialize limits to a JSON-compatible dictionary.

        Durations are expressed as integers in their row's unit, the way the
        kernel prints them.
        """
        data = {}
        for field, _, _ in LIMIT_ROWS:
            limit = getattr(self, field)
            soft, hard = _raw_values(field, limit)
            data[field] = {
                "soft_limit": soft,
                "hard_limit": hard,
                "unit": _unit_text(limit.unit),
            }
        return data


# (field, kernel label, duration row) in kernel order
LIMIT_ROWS = (
    ("max_cpu_time", "Max cpu time", True),
    ("max_file_size", "Max file size", False),
    ("max_data_size", "Max data size", False),
    ("max_stack_size", "Max stack size", False),
    ("max_core_file_size", "Max core file size", False),
    ("max_resident_set", "Max resident set", False),
    ("max_processes", "Max processes", False),
    ("max_open_files", "Max open files", False),
    ("max_locked_memory", "Max locked memory", False),
    ("max_address_space", "Max address space", False),
    ("max_file_locks", "Max file locks", False),
    ("max_pending_signals", "Max pending signals", False),
    ("max_msgqueue_size", "Max msgqueue size", False),
    ("max_nice_priority", "Max nice priority", False),
    ("max_realtime_priority", "Max realtime priority", False),
    ("max_realtime_timeout", "Max realtime timeout", True),
)

_UNITS = {unit.value: unit for unit in LimitUnit}

_DURATION_UNITS = {
    LimitUnit.SECONDS: timedelta(seconds=1),
    LimitUnit.MICROSECONDS: timedelta(microseconds=1),
}


def parse_limit_value(data: bytes, pos: int) -> tuple[int, int]:
    """Parse ``unlimited`` as LIMITS_INFINITY, or else a signed integer.

    A literal ``-1`` is accepted too and cannot be told apart from
    ``unlimited`` afterwards.
    """
    try:
        pos, _ = tag(data, pos, b"unlimited")
        return pos, LIMITS_INFINITY
    except GrammarError:
        return parse_isize(data, pos)


def parse_limit_line(data: bytes, pos: int) -> tuple[int, tuple[int, int, str | None]]:
    """Parse one row into ``(soft, hard, unit word or None)``.

    The label is whatever precedes the first double space and is discarded.
    """
    pos, _ = take_until(data, pos, b"  ")
    pos = skip_space(data, pos)
    pos, soft_limit = parse_limit_value(data, pos)
    pos = skip_space(data, pos)
    pos, hard_limit = parse_limit_value(data, pos)
    pos = skip_space(data, pos)
    pos, unit = opt(parse_word, data, pos)
    pos = skip_space(data, pos)
    pos, _ = line_ending(data, pos, allow_eof=True)
    return pos, (soft_limit, hard_limit, unit)


def unit_type(unit: str | None) -> Unit | None:
    """Classify a unit word; unknown words are kept verbatim as OtherUnit."""
    if unit is None:
        return None
    return _UNITS.get(unit, OtherUnit(unit))


def to_limit(row: int, field: str, values: tuple[int, int, str | None]) -> Limit:
    """Build a plain Limit from a parsed row."""
    soft_limit, hard_limit, unit = values
    return Limit(soft_limit=soft_limit, hard_limit=hard_limit, unit=unit_type(unit))


def to_limit_duration(
    row: int, field: str, values: tuple[int, int, str | None]
) -> LimitDuration:
    """Build a LimitDuration from a parsed row.

    Raises:
        UnitMismatchError: If the row's unit is not seconds or microseconds.
        MalformedRowError: If a value does not fit in a timedelta.
    """
    soft_limit, hard_limit, unit = values
    limit_unit = unit_type(unit)
    step = _DURATION_UNITS.get(limit_unit)
    if step is None:
        raise UnitMismatchError(row, field, limit_unit)

    try:
        return LimitDuration(
            soft_limit=step * soft_limit,
            hard_limit=step * hard_limit,
            unit=limit_unit,
        )
    except OverflowError as e:
        raise MalformedRowError(row, field, f"duration out of range: {e}") from e


def _parse_row(
    data: bytes, pos: int, row: int, field: str
) -> tuple[int, tuple[int, int, str | None]]:
    try:
        return parse_limit_line(data, pos)
    except Incomplete as e:
        raise TruncatedInputError(
            f"Input ended while expecting {e.expected}", row=row, field=field
        ) from e
    except GrammarError as e:
        raise MalformedRowError(row, field, str(e)) from e


def _parse_limits(data: bytes, pos: int) -> tuple[int, Limits]:
    pos, _ = take_until_and_consume(data, pos, b"\n")

    values = {}
    for row, (field, _, duration) in enumerate(LIMIT_ROWS, start=1):
        pos, parsed = _parse_row(data, pos, row, field)
        convert = to_limit_duration if duration else to_limit
        values[field] = convert(row, field, parsed)

    return pos, Limits(**values)


def parse_limits(data: bytes) -> Limits:
    """Parse the contents of a limits file.

    Args:
        data: Complete file contents, header line included.

    Returns:
        Parsed Limits.

    Raises:
        MalformedRowError: If a row does not match the grammar.
        UnitMismatchError: If a duration row carries a non-time unit.
        TruncatedInputError: If the input ends before all rows are read.
    """
    return map_result(_parse_limits, data)


def _raw_values(field: str, limit: Limit | LimitDuration) -> tuple[int, int]:
    """Soft and hard values as the kernel prints them, durations in their unit.

    Raises:
        ValueError: If a duration has no time unit or is not a whole number
            of its unit.
    """
    if isinstance(limit, Limit):
        return limit.soft_limit, limit.hard_limit

    step = _DURATION_UNITS.get(limit.unit)
    if step is None:
        raise ValueError(f"{field}: unit {limit.unit!r} is not seconds or microseconds")

    for value in (limit.soft_limit, limit.hard_limit):
        if value % step:
            raise ValueError(
                f"{field}: {value!r} is not a whole number of {limit.unit.value}"
            )
    return limit.soft_limit // step, limit.hard_limit // step


def _unit_text(unit: Unit | None) -> str | None:
    if unit is None:
        return None
    if isinstance(unit, OtherUnit):
        return unit.text
    return unit.value


def _format_value(value: int) -> str:
    return "unlimited" if value == LIMITS_INFINITY else str(value)


def format_limits(limits: Limits) -> str:
    """Render limits in the kernel's table layout.

    ``parse_limits(format_limits(limits).encode())`` yields ``limits`` again.

    Raises:
        ValueError: If a duration cannot be written in its row's unit.
    """
    lines = [f"{'Limit':<25} {'Soft Limit':<20} {'Hard Limit':<20} {'Units':<10}\n"]
    for field, label, _ in LIMIT_ROWS:
        limit = getattr(limits, field)
        soft, hard = _raw_values(field, limit)
        line = f"{label:<25} {_format_value(soft):<20} {_format_value(hard):<20} "
        unit = _unit_text(limit.unit)
        if unit is not None:
            line += f"{unit:<10}"
        lines.append(line + "\n")
    return "".join(lines)


def _read_limits(path: str, config: ProcLimitsConfig | None) -> Limits:
    config = config or ProcLimitsConfig()
    return parse_limits(read_to_end(config.proc_root / path, config.buffer_size))


def limits(pid: int, config: ProcLimitsConfig | None = None) -> Limits:
    """Read and parse the limits of process ``pid``.

    Raises:
        ParseError: If the file content is malformed or truncated.
        OSError: If the file cannot be read (e.g. no such process).
    """
    return _read_limits(f"{int(pid)}/limits", config)


def limits_self(config: ProcLimitsConfig | None = None) -> Limits:
    """Read and parse the limits of the calling process."""
    return _read_limits("self/limits", config)
