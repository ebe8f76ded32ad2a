# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 客户端包导出
"""

from .session import PowerShellSession
from .vmm import (
    VMMClient,
    get_vmm_client,
)

__all__ = [
    "PowerShellSession",
    "VMMClient",
    "get_vmm_client",
]
