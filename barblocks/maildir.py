"""Counting of messages in maildir inboxes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .state import State


class MailType(Enum):
    """Which maildir folders are counted."""

    NEW = "new"
    CUR = "cur"
    ALL = "all"


@dataclass
class MaildirConfig:
    """Settings of the maildir block."""

    interval: float = 5.0
    inboxes: list[str] = field(default_factory=list)
    threshold_warning: int = 1
    threshold_critical: int = 10
    display_type: MailType = MailType.NEW
    icon: bool = True


def _count_entries(directory: Path) -> int:
    try:
        return sum(1 for entry in directory.iterdir() if not entry.name.startswith("."))
    except OSError:
        return 0


def count_mail(path: str | Path, mail_type: MailType) -> int:
    """Count the messages of one maildir in the folders chosen by mail_type."""
    root = Path(path)
    if mail_type is MailType.NEW:
        return _count_entries(root / "new")
    if mail_type is MailType.CUR:
        return _count_entries(root / "cur")
    return _count_entries(root / "new") + _count_entries(root / "cur")


def count_inboxes(inboxes: Iterable[str | Path], mail_type: MailType) -> int:
    """Total message count over several maildirs."""
    return sum(count_mail(inbox, mail_type) for inbox in inboxes)


def mail_state(count: int, threshold_warning: int, threshold_critical: int) -> State:
    """Rate a message count against the thresholds."""
    if count >= threshold_critical:
        return State.CRITICAL
    if count >= threshold_warning:
        return State.WARNING
    return State.IDLE