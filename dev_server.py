#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
开发调试入口 - 用于 mcp dev 命令

使用方法:
    SCVMM_SERVER=vmm01 SCVMM_USERNAME='CONTOSO\\svc-vmm' SCVMM_PASSWORD=... \\
        uv run mcp dev dev_server.py:mcp
"""

import os
import sys

# 将 src 目录添加到 Python 路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

# 使用绝对导入
from hyperv_mcp.server import mcp, run_server

# 本地调试默认值，已设置的环境变量优先
os.environ.setdefault("SCVMM_TRANSPORT", "ntlm")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

if __name__ == "__main__":
    run_server()
