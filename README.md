# barblocks

Building blocks for a status bar on Linux. Each module reads one kind of
system information and turns it into plain values and, where it fits, a
display state (`barblocks.state.State`: `IDLE`, `INFO`, `GOOD`, `WARNING`,
`CRITICAL`).

## Installation

```
pip install barblocks
```

The package uses only the standard library. Some functions read from
`/proc` and `/sys`, and some run system tools (`ip`, `iw`, `ethtool`,
`setxkbmap`). Those tools must be installed for the functions that call them.

## Modules

### `barblocks.load`

- `count_logical_cores(cpuinfo_text)` counts the `processor` lines of a
  `/proc/cpuinfo` listing.
- `parse_loadavg(text)` returns a `LoadReading(one, five, fifteen)` and raises
  `ValueError` on malformed input.
- `load_state(load_1m, cores, info, warning, critical)` rates the one-minute
  load per core.
- `Load(config=None, *, cpuinfo_path=..., loadavg_path=...)` counts the cores
  when it is created. `Load.read()` returns `(LoadReading, State)`.
  `LoadConfig` holds the thresholds (defaults 0.3, 0.6 and 0.9), the interval
  and a format string.

### `barblocks.maildir`

- `MailType` is `NEW`, `CUR` or `ALL`.
- `count_mail(path, mail_type)` counts the non-hidden entries of the
  `new` and/or `cur` folders of one maildir. A missing folder counts as zero.
- `count_inboxes(inboxes, mail_type)` sums over several maildirs.
- `mail_state(count, threshold_warning, threshold_critical)` rates a count.
- `MaildirConfig` holds the settings (warning at 1, critical at 10 by default).

### `barblocks.memory`

- `parse_meminfo(text)` returns a `MemState` with the figures in kB.
- `parse_arcstats(text)` returns the ZFS ARC size in bytes.
- `memory_values(mem_state)` derives byte amounts and percentages:
  `mem_total`, `mem_free`, `mem_used`, `mem_avail`, `swap_used`,
  `cached`, `buffers`, their `*_percents` and more.
- `usage_state(percent, warning, critical)` rates a percentage.
- `Memory(config=None)` shows either memory or swap (`MemType`).
  `switch()` toggles the view, `format` gives the current format string,
  `render(mem_state)` and `read(meminfo_path, arcstats_path)` return
  `(values, State)`. The ARC size is added to the cache when the arcstats
  file exists.

### `barblocks.keyboard_layout`

- `parse_setxkbmap_layout(output)` reads the `layout` entry of
  `setxkbmap -query` output.
- `kbdd_layout(layouts, index)` picks one layout of a comma-separated list
  and drops a glued-on variant. When the index is out of range, it returns
  the whole list.
- `sway_layout(name)` and `sway_variant(name)` split a name such as
  `English (US)`. The variant is `N/A` when the name has none.
- `apply_mapping(layout, variant, mappings)` replaces the layout by the
  value stored under `"layout (variant)"`.
- `SetXkbMap` runs `setxkbmap -query`. Its `keyboard_variant()` is always
  `N/A` and `must_poll()` is `True`.
- `KeyboardLayoutDriver` names the layout sources.

### `barblocks.music_meta` and `barblocks.music`

- `smart_trim(artist, title, separator, max_width)` shortens title and
  artist in proportion to their lengths. `combo_text(...)` joins them and
  calls `smart_trim` only when the text is too long and trimming is asked
  for.
- `player_name(interface_name)` returns e.g. `spotify` from
  `org.mpris.MediaPlayer2.spotify`.
- `extract_playback_status`, `extract_artist` and `extract_from_metadata`
  read MPRIS property values given as Python strings, lists and mappings.
- `ignored_player(name, exclude_patterns, preferred_player)` filters bus
  names.
- `Player` and `PlayerQueue`: a thread-safe ordered set of players with
  `add`, `remove_owner`, `rotate`, `first` and
  `apply_properties(bus_name, changed)`. The last of these applies a
  PropertiesChanged mapping and reports whether anything shown changed.

### `barblocks.net_parse` and `barblocks.net`

- `decode_escaped_unicode(raw)` decodes `\xNN` escapes in an SSID.
- `signal_percents(raw)` converts dBm to a 0–100 quality.
- `parse_default_device`, `parse_ip_json`, `parse_iw_bitrate` and
  `parse_ethtool_speed` read the output of `ip`, `iw` and `ethtool`.
- `NetworkDevice.from_device(device, root)` probes `/sys/class/net/<device>`.
  It offers `exists()`, `is_up()`, `tx_bytes()`, `rx_bytes()`,
  `is_wireless()`, `is_vpn()`, `ip_addr()`, `ipv6_addr()` and `bitrate()`.
  `NetworkDevice.default_device()` names the device of the default route.
- `TrafficMeter(interval)` turns byte counters into upload and download
  speeds. It keeps the last ten samples in `tx_history` and `rx_history`.

## Example

```python
from barblocks.load import Load, LoadConfig

reading, state = Load(LoadConfig()).read()
print(reading.one, reading.five, reading.fifteen, state)
```

```python
from barblocks.music_meta import smart_trim

print(smart_trim("Some Artist", "A Rather Long Song Title", " - ", 21))
```

## What this package does not do

It does not contain a status bar program, a command to run, or an output
protocol for a bar. It does not render format strings. The `format` fields
of the config classes are only stored. There is no D-Bus or sway IPC
client. Layout changes, MPRIS players and their properties must be fed in by
the caller. There is no query of Wi-Fi SSID or frequency from the kernel.

## Running the tests

```
pip install barblocks[test]
pytest
```