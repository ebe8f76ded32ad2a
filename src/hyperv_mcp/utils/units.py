# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 单位换算与地址格式化
"""

import re
from typing import Optional, Union

Number = Union[int, float]

GIB = 1024 ** 3

_HEX_ONLY = re.compile(r'[^0-9A-Fa-f]')


def bytes_to_gb(value: Optional[Number]) -> Optional[float]:
    """字节转 GB (除以 2^30，保留两位小数)"""
    if value is None:
        return None
    return round(value / GIB, 2)


def mb_to_gb(value: Optional[Number]) -> Optional[float]:
    """MB 转 GB (保留两位小数)"""
    if value is None:
        return None
    return round(value / 1024, 2)


def format_percent(value: Optional[Number]) -> Optional[str]:
    """百分比格式化为零位小数，如 45.2 -> '45%'"""
    if value is None:
        return None
    return f"{value:.0f}%"


def percent_of(part: Optional[Number], total: Optional[Number]) -> Optional[str]:
    """part 占 total 的比例；total 为空或 0 时返回 None"""
    if part is None or not total:
        return None
    return format_percent(part / total * 100)


def normalize_mac(mac: Optional[str]) -> Optional[str]:
    """
    统一 MAC 地址格式为大写冒号分隔

    接受 00-15-5D-0A-0B-0C / 00155D0A0B0C / 00:15:5d:0a:0b:0c 等写法。
    不是 12 位十六进制时原样返回，便于排查。
    """
    if not mac:
        return None
    digits = _HEX_ONLY.sub('', mac).upper()
    if len(digits) != 12:
        return mac
    return ":".join(digits[i:i + 2] for i in range(0, 12, 2))


def format_wwn(wwn: Optional[str]) -> Optional[str]:
    """WWN 格式化为 8 组大写十六进制，如 20:00:00:25:B5:00:00:0A"""
    if not wwn:
        return None
    digits = _HEX_ONLY.sub('', wwn).upper()
    if len(digits) != 16:
        return wwn
    return ":".join(digits[i:i + 2] for i in range(0, 16, 2))


def format_link_speed(bits_per_second: Optional[Number]) -> Optional[str]:
    """链路速率 (bps) 格式化为 Gbps/Mbps"""
    if bits_per_second is None:
        return None
    if bits_per_second >= 10 ** 9:
        return f"{bits_per_second / 10 ** 9:g} Gbps"
    return f"{bits_per_second / 10 ** 6:g} Mbps"
