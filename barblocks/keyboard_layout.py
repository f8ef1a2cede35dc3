"""Keyboard layout discovery for setxkbmap, kbdd and sway style sources."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Mapping
from enum import Enum

_WHITESPACE_CHAR = re.compile(r"\s")


class KeyboardLayoutDriver(Enum):
    """Where the current keyboard layout is read from."""

    SETXKBMAP = "setxkbmap"
    LOCALEBUS = "localebus"
    KBDDBUS = "kbddbus"
    SWAY = "sway"


def parse_setxkbmap_layout(output: str) -> str:
    """Return the value of the ``layout`` entry of ``setxkbmap -query`` output."""
    line = next((line for line in output.split("\n") if line.startswith("layout")), None)
    if line is None:
        raise ValueError("Could not find the layout entry from setxkbmap.")
    return _WHITESPACE_CHAR.split(line)[-1]


def kbdd_layout(layouts: str, index: int) -> str:
    """Pick the layout at ``index`` from a comma separated layout list.

    A variant glued to the layout (``bg:bas_phonetic``) is dropped. When the
    index is out of range, the whole list is returned.
    """
    parts = layouts.split(",")
    if not 0 <= index < len(parts):
        return layouts
    return parts[index].split(":")[0]


def sway_layout(name: str) -> str:
    """Layout part of a sway layout name such as ``English (US)``."""
    paren = name.find("(")
    if paren < 0:
        return name
    prefix = name[:paren]
    words = prefix.split()
    return words[0] if words else prefix


def sway_variant(name: str) -> str:
    """Variant part of a sway layout name, or ``N/A`` when there is none."""
    paren = name.find("(")
    if paren < 0:
        return "N/A"
    return name[paren:][1:-1]


def apply_mapping(layout: str, variant: str, mappings: Mapping[str, str] | None) -> str:
    """Replace the layout by its mapping for ``"layout (variant)"``, if any."""
    if mappings:
        mapped = mappings.get(f"{layout} ({variant})")
        if mapped is not None:
            return mapped
    return layout


class SetXkbMap:
    """Reads the layout by running ``setxkbmap -query``; has to be polled."""

    def keyboard_layout(self) -> str:
        """Current layout as reported by setxkbmap."""
        try:
            result = subprocess.run(["setxkbmap", "-query"], capture_output=True, check=False)
        except OSError as exc:
            raise OSError("Failed to execute setxkbmap.") from exc
        try:
            output = result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError("Non-UTF8 input.") from exc
        return parse_setxkbmap_layout(output)

    def keyboard_variant(self) -> str:
        """setxkbmap does not report a variant."""
        return "N/A"

    def must_poll(self) -> bool:
        """setxkbmap gives no change notifications."""
        return True