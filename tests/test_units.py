# -*- coding: utf-8 -*-
import pytest

from hyperv_mcp.utils import (
    bytes_to_gb,
    mb_to_gb,
    format_percent,
    percent_of,
    normalize_mac,
    format_wwn,
    format_link_speed,
)


def test_bytes_to_gb_divides_by_2_30_and_rounds():
    assert bytes_to_gb(68719476736) == 64.0
    assert bytes_to_gb(1610612736) == 1.5
    assert bytes_to_gb(1000000000) == 0.93
    assert bytes_to_gb(None) is None


def test_mb_to_gb():
    assert mb_to_gb(8192) == 8.0
    assert mb_to_gb(45875) == 44.8
    assert mb_to_gb(None) is None


def test_percent_has_no_decimals():
    assert format_percent(45.2) == "45%"
    assert format_percent(99.9) == "100%"
    assert format_percent(0) == "0%"
    assert format_percent(None) is None


def test_percent_of_zero_total_is_none():
    assert percent_of(48, 64) == "75%"
    assert percent_of(0, 64) == "0%"
    assert percent_of(10, 0) is None
    assert percent_of(None, 10) is None


@pytest.mark.parametrize("raw", [
    "00-15-5D-0A-0B-0C",
    "00155D0A0B0C",
    "00:15:5d:0a:0b:0c",
])
def test_normalize_mac(raw):
    assert normalize_mac(raw) == "00:15:5D:0A:0B:0C"


def test_normalize_mac_leaves_unexpected_values():
    assert normalize_mac("not-a-mac") == "not-a-mac"
    assert normalize_mac("") is None


def test_format_wwn():
    assert format_wwn("20000025b500000a") == "20:00:00:25:B5:00:00:0A"
    assert format_wwn("20:00:00:25:B5:00:00:0A") == "20:00:00:25:B5:00:00:0A"
    assert format_wwn(None) is None


def test_format_link_speed():
    assert format_link_speed(10000000000) == "10 Gbps"
    assert format_link_speed(100000000) == "100 Mbps"
    assert format_link_speed(None) is None
