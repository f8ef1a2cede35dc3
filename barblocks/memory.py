"""Memory and swap usage read from /proc/meminfo."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .state import State

MEMINFO_PATH = Path("/proc/meminfo")
ARCSTATS_PATH = Path("/proc/spl/kstat/zfs/arcstats")

_ARC_SIZE_RE = re.compile(r"size\s+\d+\s+(\d+)")

_MEMINFO_FIELDS = {
    "MemTotal:": "mem_total",
    "MemFree:": "mem_free",
    "Buffers:": "buffers",
    "Cached:": "cached",
    "SReclaimable:": "s_reclaimable",
    "Shmem:": "shmem",
    "SwapTotal:": "swap_total",
    "SwapFree:": "swap_free",
}


class MemType(Enum):
    """Which view the block shows."""

    SWAP = "swap"
    MEMORY = "memory"


@dataclass(frozen=True)
class MemState:
    """Figures of /proc/meminfo in kB; the ZFS ARC size is in bytes."""

    mem_total: int = 0
    mem_free: int = 0
    buffers: int = 0
    cached: int = 0
    s_reclaimable: int = 0
    shmem: int = 0
    swap_total: int = 0
    swap_free: int = 0
    zfs_arc_cache: int = 0


@dataclass
class MemoryConfig:
    """Settings of the memory block."""

    format_mem: str = "{mem_free;M}/{mem_total;M}({mem_total_used_percents})"
    format_swap: str = "{swap_free;M}/{swap_total;M}({swap_used_percents})"
    display_type: MemType = MemType.MEMORY
    icons: bool = True
    clickable: bool = True
    interval: float = 5.0
    warning_mem: float = 80.0
    warning_swap: float = 80.0
    critical_mem: float = 95.0
    critical_swap: float = 95.0


def _parse_kb(fields: list[str], name: str) -> int:
    if len(fields) < 2 or not (fields[1].isascii() and fields[1].isdigit()):
        raise ValueError(f"failed to parse {name}")
    return int(fields[1])


def parse_meminfo(text: str) -> MemState:
    """Collect the figures the block needs from /proc/meminfo text."""
    found: dict[str, int] = {}
    for line in text.splitlines():
        if len(found) == len(_MEMINFO_FIELDS):
            break
        fields = line.split()
        if not fields:
            continue
        name = _MEMINFO_FIELDS.get(fields[0])
        if name is not None:
            found[name] = _parse_kb(fields, name)
    return MemState(**found)


def parse_arcstats(text: str) -> int:
    """Return the ZFS ARC size in bytes from arcstats text."""
    match = _ARC_SIZE_RE.search(text)
    if match is None:
        raise ValueError("failed to find zfs_arc_cache size")
    return int(match.group(1))


def _percent(part: float, whole: float) -> float:
    if whole:
        return part / whole * 100.0
    if part == 0 or math.isnan(part):
        return math.nan
    return math.copysign(math.inf, part)


def memory_values(mem_state: MemState) -> dict[str, float]:
    """Byte amounts and percentages derived from a MemState."""
    mem_total = mem_state.mem_total * 1024.0
    mem_free = mem_state.mem_free * 1024.0
    swap_total = mem_state.swap_total * 1024.0
    swap_free = mem_state.swap_free * 1024.0
    swap_used = swap_total - swap_free
    mem_total_used = mem_total - mem_free
    buffers = mem_state.buffers * 1024.0
    cached = (
        mem_state.cached + mem_state.s_reclaimable - mem_state.shmem
    ) * 1024.0 + mem_state.zfs_arc_cache
    mem_used = mem_total_used - (buffers + cached)
    mem_avail = mem_total - mem_used

    return {
        "mem_total": mem_total,
        "mem_free": mem_free,
        "mem_free_percents": _percent(mem_free, mem_total),
        "mem_total_used": mem_total_used,
        "mem_total_used_percents": _percent(mem_total_used, mem_total),
        "mem_used": mem_used,
        "mem_used_percents": _percent(mem_used, mem_total),
        "mem_avail": mem_avail,
        "mem_avail_percents": _percent(mem_avail, mem_total),
        "swap_total": swap_total,
        "swap_free": swap_free,
        "swap_free_percents": _percent(swap_free, swap_total),
        "swap_used": swap_used,
        "swap_used_percents": _percent(swap_used, swap_total),
        "buffers": buffers,
        "buffers_percent": _percent(buffers, mem_total),
        "cached": cached,
        "cached_percent": _percent(cached, mem_total),
    }


def usage_state(percent: float, warning: float, critical: float) -> State:
    """Rate a usage percentage against the thresholds."""
    if percent > critical:
        return State.CRITICAL
    if percent > warning:
        return State.WARNING
    return State.IDLE


class Memory:
    """Memory block that shows either memory or swap usage."""

    def __init__(self, config: MemoryConfig | None = None) -> None:
        self.config = config or MemoryConfig()
        self.memtype = self.config.display_type
        self.clickable = self.config.clickable

    def switch(self) -> None:
        """Toggle between the memory and the swap view."""
        self.memtype = MemType.SWAP if self.memtype is MemType.MEMORY else MemType.MEMORY

    @property
    def format(self) -> str:
        """Format string of the current view."""
        if self.memtype is MemType.MEMORY:
            return self.config.format_mem
        return self.config.format_swap

    def render(self, mem_state: MemState) -> tuple[dict[str, float], State]:
        """Values of mem_state and the state of the current view."""
        values = memory_values(mem_state)
        cfg = self.config
        if self.memtype is MemType.MEMORY:
            state = usage_state(values["mem_used_percents"], cfg.warning_mem, cfg.critical_mem)
        else:
            state = usage_state(values["swap_used_percents"], cfg.warning_swap, cfg.critical_swap)
        return values, state

    def read(
        self,
        meminfo_path: str | Path = MEMINFO_PATH,
        arcstats_path: str | Path = ARCSTATS_PATH,
    ) -> tuple[dict[str, float], State]:
        """Read the system files and render them."""
        try:
            meminfo = Path(meminfo_path).read_text()
        except OSError as exc:
            raise OSError(f"{meminfo_path} does not exist") from exc
        mem_state = parse_meminfo(meminfo)
        try:
            arcstats = Path(arcstats_path).read_text()
        except OSError:
            arcstats = None
        if arcstats is not None:
            mem_state = replace(mem_state, zfs_arc_cache=parse_arcstats(arcstats))
        return self.render(mem_state)