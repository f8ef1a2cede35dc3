"""System load average, rated against the number of logical cores."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

from .state import State

CPUINFO_PATH = Path("/proc/cpuinfo")
LOADAVG_PATH = Path("/proc/loadavg")


@dataclass
class LoadConfig:
    """Settings of the load block."""

    format: str = "{1m}"
    interval: float = 5.0
    info: float = 0.3
    warning: float = 0.6
    critical: float = 0.9


@dataclass(frozen=True)
class LoadReading:
    """Load averages over one, five and fifteen minutes."""

    one: float
    five: float
    fifteen: float


def count_logical_cores(cpuinfo_text: str) -> int:
    """Count the processor entries of a /proc/cpuinfo listing."""
    return sum(1 for line in cpuinfo_text.splitlines() if line.startswith("processor"))


def parse_loadavg(text: str) -> LoadReading:
    """Parse the first three fields of /proc/loadavg."""
    fields = text.split(" ")[:3]
    if len(fields) < 3:
        raise ValueError(f"malformed load average: {text!r}")
    one, five, fifteen = (float(field) for field in fields)
    return LoadReading(one, five, fifteen)


def _per_core(load: float, cores: int) -> float:
    if cores:
        return load / cores
    if load == 0 or math.isnan(load):
        return math.nan
    return math.copysign(math.inf, load)


def load_state(load_1m: float, cores: int, info: float, warning: float, critical: float) -> State:
    """Rate the one-minute load per core against the thresholds."""
    used = _per_core(load_1m, cores)
    if used > critical:
        return State.CRITICAL
    if used > warning:
        return State.WARNING
    if used > info:
        return State.INFO
    return State.IDLE


class Load:
    """Reads the load average and rates it."""

    def __init__(
        self,
        config: LoadConfig | None = None,
        *,
        cpuinfo_path: str | Path = CPUINFO_PATH,
        loadavg_path: str | Path = LOADAVG_PATH,
    ) -> None:
        self.config = config or LoadConfig()
        self.loadavg_path = Path(loadavg_path)
        try:
            cpuinfo = Path(cpuinfo_path).read_text()
        except OSError as exc:
            raise OSError("Your system doesn't support /proc/cpuinfo") from exc
        self.logical_cores = count_logical_cores(cpuinfo)

    def read(self) -> tuple[LoadReading, State]:
        """Return the current load averages and their state."""
        try:
            text = self.loadavg_path.read_text()
        except OSError as exc:
            raise OSError(
                "Your system does not support reading the load average from /proc/loadavg"
            ) from exc
        reading = parse_loadavg(text)
        cfg = self.config
        state = load_state(reading.one, self.logical_cores, cfg.info, cfg.warning, cfg.critical)
        return reading, state