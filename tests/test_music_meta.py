import re

import pytest

from barblocks.music_meta import (
    PlaybackStatus,
    combo_text,
    extract_artist,
    extract_from_metadata,
    extract_playback_status,
    ignored_player,
    player_name,
    smart_trim,
)


def test_smart_trim_empty_title_truncates_artist():
    assert smart_trim("A very long artist name", "", " - ", 6) == " - " + "A very long artist name"[:6]


def test_smart_trim_empty_artist_truncates_title():
    assert smart_trim("", "A very long title", " - ", 5) == "A very long title"[:5] + " - "


def test_smart_trim_worked_example():
    result = smart_trim("Artist Name", "Song Title Here", " - ", 21)
    assert result == "Song Title - Artist "
    assert len(result) <= 21


def test_smart_trim_prefers_trimming_only_title():
    artist = "ABC"
    title = "abcdefghijklmnopqrst"
    result = smart_trim(artist, title, " - ", 21)
    assert result.endswith(" - " + artist)
    kept_title = result[: -len(" - " + artist)]
    assert title.startswith(kept_title)
    assert 0 < len(kept_title) < len(title)


def test_smart_trim_keeps_prefixes():
    artist = "The Quite Long Artist Name"
    title = "An Even Longer Title Of The Song"
    result = smart_trim(artist, title, " | ", 30)
    kept_title, kept_artist = result.split(" | ")
    assert title.startswith(kept_title)
    assert artist.startswith(kept_artist)
    assert len(result) < len(title) + 3 + len(artist)


def test_smart_trim_rejects_short_text():
    with pytest.raises(ValueError):
        smart_trim("ab", "cd", " - ", 50)


def test_combo_text_short_is_plain():
    assert combo_text("Band", "Song", " - ", 21, True) == "Song - Band"


def test_combo_text_without_smart_trim_is_plain():
    artist = "Artist Name"
    title = "Song Title Here"
    assert combo_text(artist, title, " - ", 21, False) == f"{title} - {artist}"


def test_combo_text_long_uses_smart_trim():
    artist = "Artist Name"
    title = "Song Title Here"
    assert combo_text(artist, title, " - ", 21, True) == smart_trim(artist, title, " - ", 21)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("org.mpris.MediaPlayer2.spotify", "spotify"),
        ("org.mpris.MediaPlayer2.vlc.instance42", "vlc"),
    ],
)
def test_player_name(name, expected):
    assert player_name(name) == expected


def test_player_name_rejects_short_name():
    with pytest.raises(ValueError):
        player_name("org.mpris")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Playing", PlaybackStatus.PLAYING),
        ("Paused", PlaybackStatus.PAUSED),
        ("Stopped", PlaybackStatus.STOPPED),
        ("Buffering", PlaybackStatus.UNKNOWN),
        (42, PlaybackStatus.UNKNOWN),
        (None, PlaybackStatus.UNKNOWN),
    ],
)
def test_extract_playback_status(value, expected):
    assert extract_playback_status(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Solo", "Solo"),
        (["First", "Second"], "First"),
        ([["Nested"]], "Nested"),
    ],
)
def test_extract_artist(value, expected):
    assert extract_artist(value) == expected


@pytest.mark.parametrize("value", [[], 5, [[]]])
def test_extract_artist_errors(value):
    with pytest.raises(ValueError):
        extract_artist(value)


def test_extract_from_metadata():
    metadata = {
        "mpris:trackid": "/track/1",
        "xesam:title": "Song",
        "xesam:artist": ["Band", "Guest"],
    }
    assert extract_from_metadata(metadata) == ("Song", "Band")


def test_extract_from_metadata_missing_fields():
    assert extract_from_metadata({"mpris:length": 1000}) == (None, None)


@pytest.mark.parametrize(
    "metadata",
    [
        {"xesam:title": 7},
        {1: "x"},
        ["xesam:title", "Song"],
        {"xesam:artist": []},
    ],
)
def test_extract_from_metadata_errors(metadata):
    with pytest.raises(ValueError):
        extract_from_metadata(metadata)


def test_ignored_player_non_mpris():
    assert ignored_player("org.freedesktop.Notifications", [], None) is True


def test_ignored_player_accepts_mpris():
    assert ignored_player("org.mpris.MediaPlayer2.spotify", [], None) is False


def test_ignored_player_preferred():
    assert ignored_player("org.mpris.MediaPlayer2.vlc", [], "spotify") is True
    assert ignored_player("org.mpris.MediaPlayer2.spotify", [], "spotify") is False


def test_ignored_player_exclude_patterns():
    assert ignored_player("org.mpris.MediaPlayer2.firefox.instance1", ["firefox"], None) is True
    assert ignored_player("org.mpris.MediaPlayer2.mpv", [re.compile("^.*chromium")], None) is False


def test_ignored_player_invalid_pattern():
    with pytest.raises(re.error):
        ignored_player("org.mpris.MediaPlayer2.mpv", ["("], None)