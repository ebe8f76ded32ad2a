# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server

基于 System Center VMM 与 WinRM 的 Hyper-V 报表/操作 MCP 服务器。
"""

from .server import mcp, run_server
from .client import VMMClient, get_vmm_client
from .models import MCPResult, MCPError, ErrorType

__version__ = "0.1.0"

__all__ = [
    "mcp",
    "run_server",
    "VMMClient",
    "get_vmm_client",
    "MCPResult",
    "MCPError",
    "ErrorType",
]
