"""Tracking of MPRIS media players and their reported state."""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from .music_meta import (
    PlaybackStatus,
    extract_from_metadata,
    extract_playback_status,
    ignored_player,
)


@dataclass
class Player:
    """One media player seen on the bus."""

    bus_name: str
    interface_name: str
    playback_status: PlaybackStatus = PlaybackStatus.UNKNOWN
    artist: str | None = None
    title: str | None = None


class PlayerQueue:
    """Ordered, thread-safe collection of players; the first one is shown."""

    def __init__(
        self,
        exclude_patterns: Iterable[str | re.Pattern[str]] = (),
        preferred_player: str | None = None,
    ) -> None:
        self._players: list[Player] = []
        self._lock = threading.RLock()
        self.exclude_patterns = [re.compile(p) for p in exclude_patterns]
        self.preferred_player = preferred_player

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        with self._lock:
            return iter(list(self._players))

    def add(self, player: Player) -> bool:
        """Append a player unless its owner is already tracked or it is ignored."""
        with self._lock:
            if any(p.bus_name == player.bus_name for p in self._players):
                return False
            if ignored_player(
                player.interface_name, self.exclude_patterns, self.preferred_player
            ):
                return False
            self._players.append(player)
            return True

    def remove_owner(self, bus_name: str) -> bool:
        """Drop the player owned by bus_name; report whether one was removed."""
        with self._lock:
            for index, player in enumerate(self._players):
                if player.bus_name == bus_name:
                    del self._players[index]
                    return True
            return False

    def rotate(self) -> bool:
        """Move the first player to the end; report whether there was one."""
        with self._lock:
            if not self._players:
                return False
            self._players.append(self._players.pop(0))
            return True

    def first(self) -> Player | None:
        """The player currently shown, if any."""
        with self._lock:
            return self._players[0] if self._players else None

    def apply_properties(self, bus_name: str, changed: Mapping[str, Any]) -> bool:
        """Apply a PropertiesChanged mapping sent by bus_name.

        Returns whether anything shown by the block changed.
        """
        with self._lock:
            player = next((p for p in self._players if p.bus_name == bus_name), None)
            if player is None:
                return False
            updated = False

            if "Metadata" in changed:
                try:
                    title, artist = extract_from_metadata(changed["Metadata"])
                except ValueError:
                    title, artist = None, None
                if player.title != title or player.artist != artist:
                    player.title = title
                    player.artist = artist
                    updated = True

            if "PlaybackStatus" in changed:
                status = extract_playback_status(changed["PlaybackStatus"])
                if player.playback_status != status:
                    player.playback_status = status
                    updated = True

            # playerctld stays on the bus after its last player closes; it
            # announces that through an empty PlayerNames list.
            if "PlayerNames" in changed:
                if next(iter(changed["PlayerNames"]), None) is None:
                    player.artist = None
                    player.title = None
                    updated = True

            return updated