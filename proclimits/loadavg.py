"""System load averages from ``/proc/loadavg``.

The file holds a single line such as ``0.52 0.58 0.59 2/1234 56789``: the
1, 5 and 15 minute load averages, runnable and total scheduling entities,
and the most recently assigned pid.
"""

from dataclasses import dataclass

from proclimits.config.models import ProcLimitsConfig
from proclimits.errors import MalformedRowError, TruncatedInputError
from proclimits.io import read_to_end
from proclimits.parsers import (
    GrammarError,
    Incomplete,
    line_ending,
    map_result,
    parse_float,
    parse_isize,
    tag,
)
from proclimits.parsers.primitives import SPACE, take_while


@dataclass(frozen=True)
class LoadAvg:
    """Snapshot of the system load.

    Attributes:
        one: Load average over the last minute.
        five: Load average over the last 5 minutes.
        fifteen: Load average over the last 15 minutes.
        tasks_runnable: Currently runnable scheduling entities.
        tasks_total: Scheduling entities that exist on the system.
        last_pid: Pid most recently created on the system.
    """

    one: float
    five: float
    fifteen: float
    tasks_runnable: int
    tasks_total: int
    last_pid: int


def _separator(data: bytes, pos: int) -> int:
    end, blanks = take_while(data, pos, SPACE)
    if not blanks:
        if end >= len(data):
            raise Incomplete(end, "space")
        raise GrammarError(end, "space", data[end : end + 12])
    return end


def _parse_loadavg_line(data: bytes, pos: int) -> tuple[int, LoadAvg]:
    pos, one = parse_float(data, pos)
    pos = _separator(data, pos)
    pos, five = parse_float(data, pos)
    pos = _separator(data, pos)
    pos, fifteen = parse_float(data, pos)
    pos = _separator(data, pos)
    pos, tasks_runnable = parse_isize(data, pos)
    pos, _ = tag(data, pos, b"/")
    pos, tasks_total = parse_isize(data, pos)
    pos = _separator(data, pos)
    pos, last_pid = parse_isize(data, pos)
    pos, _ = line_ending(data, pos, allow_eof=True)

    return pos, LoadAvg(
        one=one,
        five=five,
        fifteen=fifteen,
        tasks_runnable=tasks_runnable,
        tasks_total=tasks_total,
        last_pid=last_pid,
    )


def _parse_loadavg(data: bytes, pos: int) -> tuple[int, LoadAvg]:
    try:
        return _parse_loadavg_line(data, pos)
    except Incomplete as e:
        raise TruncatedInputError(
            f"Input ended while expecting {e.expected}", row=1, field="loadavg"
        ) from e
    except GrammarError as e:
        raise MalformedRowError(1, "loadavg", str(e)) from e


def parse_loadavg(data: bytes) -> LoadAvg:
    """Parse the contents of ``/proc/loadavg``.

    Raises:
        MalformedRowError: If the line does not match the expected layout.
        TruncatedInputError: If the line ends early.
    """
    return map_result(_parse_loadavg, data)


def loadavg(config: ProcLimitsConfig | None = None) -> LoadAvg:
    """Read and parse the system load averages."""
    config = config or ProcLimitsConfig()
    path = config.proc_root / "loadavg"
    return parse_loadavg(read_to_end(path, config.buffer_size))
