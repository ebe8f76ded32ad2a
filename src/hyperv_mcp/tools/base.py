# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 工具公共调用流程

连接 -> 调用客户端方法 -> 包装为 MCPResult
"""

import logging
from typing import Optional

from ..models import MCPResult
from ..client import get_vmm_client
from ..utils import parse_winrm_error


logger = logging.getLogger(__name__)


def call_client(operation: str, method: str, *args, target: Optional[str] = None) -> MCPResult:
    """
    获取 VMM 客户端并调用指定方法

    客户端方法返回 (data, error) 元组或直接返回数据列表；
    远程异常统一由 parse_winrm_error 转换；未指定 target 时按 VMM 服务器报告。
    """
    client, error = get_vmm_client()
    if error:
        return MCPResult.failed(error)

    try:
        result = getattr(client, method)(*args)
    except Exception as e:
        logger.error(f"{operation} 失败: {e}")
        return MCPResult.failed(parse_winrm_error(e, operation, target or client.server))
    finally:
        client.disconnect()

    if isinstance(result, tuple):
        data, error = result
        if error:
            return MCPResult.failed(error)
    else:
        data = result

    return MCPResult(success=True, data=data)
