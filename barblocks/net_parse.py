"""Parsing helpers for network device information and tool output."""

from __future__ import annotations

import json
import re

_DEFAULT_DEV_RE = re.compile(r"default.*dev (\w*).*")
_ETHTOOL_SPEED_RE = re.compile(r"Speed: (\d+\w\w/s)")
_IW_BITRATE_RE = re.compile(r"tx bitrate: (\d+(?:\.?\d+) [A-Za-z]+/s)")
_ESCAPED_BYTE_RE = re.compile(rb"\\x([0-9A-Fa-f]{2})")

_PERFECT_SIGNAL = -20.0
_WORST_SIGNAL = -85.0


def _as_text(output: str | bytes) -> str:
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="surrogateescape")
    return output


def _is_utf8(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def decode_escaped_unicode(raw: str | bytes) -> str:
    """Turn ``\\xNN`` escapes of an SSID into bytes and decode them as UTF-8."""
    data = raw.encode("utf-8") if isinstance(raw, str) else raw
    decoded = _ESCAPED_BYTE_RE.sub(lambda m: bytes([int(m.group(1), 16)]), data)
    return decoded.decode("utf-8", errors="replace")


def signal_percents(raw: int) -> int:
    """Convert a signal level in dBm to a quality percentage in 0..100."""
    level = float(raw)
    span = _PERFECT_SIGNAL - _WORST_SIGNAL
    gap = _PERFECT_SIGNAL - level
    percents = 100.0 - gap * (15.0 * span + 62.0 * gap) / (span * span)
    return max(0, min(100, int(percents)))


def parse_default_device(output: str | bytes) -> str | None:
    """Device name of the default route in ``ip route show default`` output."""
    match = _DEFAULT_DEV_RE.search(_as_text(output))
    if match is None:
        return None
    device = match.group(1)
    return device if _is_utf8(device) else None


def parse_ip_json(output: str | bytes) -> str:
    """First local address in ``ip -json address show`` output, or ``""``."""
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("Response contained non-UTF8 characters.") from exc
    try:
        devices = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ValueError("Failed to parse JSON response") from exc
    if not isinstance(devices, list):
        raise ValueError("Failed to parse JSON response")

    addresses: list[str] = []
    for device in devices:
        if not isinstance(device, dict):
            raise ValueError("Failed to parse JSON response")
        addr_info = device.get("addr_info")
        if addr_info is None:
            continue
        if not isinstance(addr_info, list):
            raise ValueError("Failed to parse JSON response")
        for info in addr_info:
            if not isinstance(info, dict):
                raise ValueError("Failed to parse JSON response")
            local = info.get("local")
            if local is None:
                continue
            if not isinstance(local, str):
                raise ValueError("Failed to parse JSON response")
            addresses.append(local)
    return addresses[0] if addresses else ""


def _rate(match: re.Match[str] | None) -> str | None:
    if match is None:
        return None
    rate = match.group(1)
    if not _is_utf8(rate):
        raise ValueError("Non-UTF8 bitrate")
    return rate


def parse_iw_bitrate(output: str | bytes) -> str | None:
    """Transmit bitrate from ``iw dev <device> link`` output."""
    return _rate(_IW_BITRATE_RE.search(_as_text(output)))


def parse_ethtool_speed(output: str | bytes) -> str | None:
    """Link speed from ``ethtool <device>`` output."""
    return _rate(_ETHTOOL_SPEED_RE.search(_as_text(output)))