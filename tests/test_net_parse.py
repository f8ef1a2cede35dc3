import pytest

from barblocks.net_parse import (
    decode_escaped_unicode,
    parse_default_device,
    parse_ethtool_speed,
    parse_ip_json,
    parse_iw_bitrate,
    signal_percents,
)


def test_ssid_decode_escaped_unicode():
    assert decode_escaped_unicode(rb"\xc4\x85\xc5\xbeuolas") == "ąžuolas"


def test_ssid_decode_escaped_emoji():
    assert decode_escaped_unicode(rb"\xf0\x9f\x8c\xb3oak") == "🌳oak"


def test_ssid_decode_legit_backslash():
    assert decode_escaped_unicode(rb"\x5cx backslash") == r"\x backslash"


def test_ssid_decode_surrounded_by_spaces():
    assert decode_escaped_unicode(rb"\x20surrounded by spaces\x20") == " surrounded by spaces "


def test_ssid_decode_noescape_path():
    path = r"C:\Program Files(x86)\Custom\Utilities\Tool.exe"
    assert decode_escaped_unicode(path.encode()) == path


def test_ssid_decode_noescape_invalid():
    assert decode_escaped_unicode(rb"\xp0") == r"\xp0"


def test_ssid_decode_accepts_str():
    assert decode_escaped_unicode(r"\x41bc") == "Abc"


def test_signal_perfect_is_full():
    assert signal_percents(-20) == 100


def test_signal_stronger_than_perfect_is_clamped():
    assert signal_percents(-10) == 100


def test_signal_very_weak_is_clamped_to_zero():
    assert signal_percents(-128) == 0


def test_default_device_found():
    output = b"default via 192.168.1.1 dev wlan0 proto dhcp metric 600\n"
    assert parse_default_device(output) == "wlan0"


def test_default_device_missing():
    assert parse_default_device("") is None


def test_default_device_str_input():
    assert parse_default_device("default via 10.0.0.1 dev eth0\n") == "eth0"


def test_ip_json_first_local():
    output = (
        '[{"ifname": "eth0", "addr_info": [{"local": "10.0.0.5"}, {"local": "10.0.0.6"}]}]'
    )
    assert parse_ip_json(output) == "10.0.0.5"


def test_ip_json_skips_missing_addr_info():
    output = '[{"ifname": "a"}, {"addr_info": [{"family": "inet"}, {"local": "fe80::1"}]}]'
    assert parse_ip_json(output) == "fe80::1"


def test_ip_json_empty_list():
    assert parse_ip_json("[]") == ""


def test_ip_json_no_addresses():
    assert parse_ip_json('[{"addr_info": []}]') == ""


def test_ip_json_invalid():
    with pytest.raises(ValueError):
        parse_ip_json("not json")


def test_ip_json_non_utf8():
    with pytest.raises(ValueError):
        parse_ip_json(b"\xff\xfe")


def test_iw_bitrate():
    output = b"Connected to 00:00:5e:00:53:01 (on wlan0)\n\ttx bitrate: 866.7 MBit/s VHT-MCS 9\n"
    assert parse_iw_bitrate(output) == "866.7 MBit/s"


def test_iw_bitrate_absent():
    assert parse_iw_bitrate("Not connected.\n") is None


def test_ethtool_speed():
    output = "Settings for eth0:\n\tSpeed: 1000Mb/s\n\tDuplex: Full\n"
    assert parse_ethtool_speed(output) == "1000Mb/s"


def test_ethtool_speed_unknown():
    assert parse_ethtool_speed(b"\tSpeed: Unknown!\n") is None