"""Status bar building blocks: load, maildir, memory, keyboard layout, MPRIS players and network."""

__version__ = "0.1.0"