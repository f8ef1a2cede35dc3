"""Network device state read from sysfs and the ip, iw and ethtool tools."""

from __future__ import annotations

import re
import subprocess
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path

from .net_parse import (
    parse_default_device,
    parse_ethtool_speed,
    parse_ip_json,
    parse_iw_bitrate,
)

SYS_CLASS_NET = Path("/sys/class/net")
HISTORY_LENGTH = 10

_COUNTER_RE = re.compile(r"\+?[0-9]+")


def _read_file(path: Path) -> str:
    """Read a sysfs file and drop its last character (the trailing newline)."""
    try:
        content = path.read_text()
    except OSError as exc:
        raise OSError(f"failed to open file {path}") from exc
    return content[:-1]


def _run(args: list[str], failure: str) -> bytes:
    try:
        result = subprocess.run(args, capture_output=True, check=False)
    except OSError as exc:
        raise OSError(failure) from exc
    return result.stdout


def _parse_counter(text: str, name: str) -> int:
    if _COUNTER_RE.fullmatch(text) is None:
        raise ValueError(f"Failed to parse {name}")
    return int(text)


@dataclass
class NetworkDevice:
    """A network interface as described under /sys/class/net."""

    device: str
    device_path: Path
    wireless: bool = False
    tun: bool = False
    wg: bool = False
    ppp: bool = False

    @classmethod
    def from_device(cls, device: str, root: str | Path = SYS_CLASS_NET) -> NetworkDevice:
        """Describe the interface named device, probing its sysfs directory."""
        device_path = Path(root) / device
        wireless = (device_path / "wireless").exists()
        tun = (
            (device_path / "tun_flags").exists()
            or device.startswith("tun")
            or device.startswith("tap")
        )
        try:
            uevent = (device_path / "uevent").read_text()
        except OSError:
            uevent = ""
        return cls(
            device=device,
            device_path=device_path,
            wireless=wireless,
            tun=tun,
            wg="wireguard" in uevent,
            ppp="ppp" in uevent,
        )

    @classmethod
    def default_device(cls) -> str | None:
        """Name of the device carrying the default route, if one is found."""
        try:
            result = subprocess.run(
                ["ip", "route", "show", "default"], capture_output=True, check=False
            )
        except OSError:
            return None
        return parse_default_device(result.stdout)

    def exists(self) -> bool:
        """Whether the device directory exists."""
        return self.device_path.exists()

    def is_up(self) -> bool:
        """Whether the device is up; a device that is not up need not be down."""
        operstate_file = self.device_path / "operstate"
        if not operstate_file.exists():
            return False
        if self.is_vpn():
            return True
        operstate = _read_file(operstate_file)
        carrier_file = self.device_path / "carrier"
        if not carrier_file.exists():
            return operstate == "up"
        if operstate == "up":
            return True
        try:
            carrier = _read_file(carrier_file)
        except OSError:
            return operstate == "up"
        return carrier == "1"

    def tx_bytes(self) -> int:
        """Transmitted byte counter of the device."""
        text = _read_file(self.device_path / "statistics" / "tx_bytes")
        return _parse_counter(text, "tx_bytes")

    def rx_bytes(self) -> int:
        """Received byte counter of the device."""
        text = _read_file(self.device_path / "statistics" / "rx_bytes")
        return _parse_counter(text, "rx_bytes")

    def is_wireless(self) -> bool:
        """Whether the device is wireless."""
        return self.wireless

    def is_vpn(self) -> bool:
        """Whether the device is a tunnel, WireGuard or PPP link."""
        return self.tun or self.wg or self.ppp

    def _address(self, family: str) -> str | None:
        if not self.is_up():
            return None
        output = _run(
            ["ip", "-json", "-family", family, "address", "show", self.device],
            "Failed to execute IP address query.",
        )
        return parse_ip_json(output)

    def ip_addr(self) -> str | None:
        """First IPv4 address of the device, "" if none, None if it is down."""
        return self._address("inet")

    def ipv6_addr(self) -> str | None:
        """First IPv6 address of the device, "" if none, None if it is down."""
        return self._address("inet6")

    def bitrate(self) -> str | None:
        """Link bitrate reported by iw (wireless) or ethtool (wired)."""
        if not self.is_up():
            return None
        if self.wireless:
            output = _run(
                ["iw", "dev", self.device, "link"],
                "Failed to execute bitrate query with iw.",
            )
            return parse_iw_bitrate(output)
        output = _run(
            ["ethtool", self.device],
            "Failed to execute bitrate query with ethtool",
        )
        return parse_ethtool_speed(output)


def _zero_history() -> deque[float]:
    return deque([0.0] * HISTORY_LENGTH, maxlen=HISTORY_LENGTH)


@dataclass
class TrafficMeter:
    """Turns byte counters sampled every interval seconds into speeds."""

    interval: float = 1.0
    tx_bytes: int = 0
    rx_bytes: int = 0
    speed_up: float = 0.0
    speed_down: float = 0.0
    tx_history: deque[float] = field(default_factory=_zero_history)
    rx_history: deque[float] = field(default_factory=_zero_history)

    def _rate(self, current: int, previous: int) -> int:
        return int(max(current - previous, 0) / self.interval)

    def update(self, current_tx: int, current_rx: int) -> tuple[float, float]:
        """Record new counters and return (upload, download) in bytes per second."""
        tx_rate = self._rate(current_tx, self.tx_bytes)
        self.tx_bytes = current_tx
        self.speed_up = float(tx_rate)
        self.tx_history.append(float(tx_rate))

        rx_rate = self._rate(current_rx, self.rx_bytes)
        self.rx_bytes = current_rx
        self.speed_down = float(rx_rate)
        self.rx_history.append(float(rx_rate))

        return self.speed_up, self.speed_down