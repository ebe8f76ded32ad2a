# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 数据模型基础模块

统一的错误类型与响应模型，所有报表/操作工具共用。
"""

from enum import Enum
from typing import Dict, Any, Optional, List

from pydantic import Field, BaseModel, ConfigDict


# =============================================================================
# 错误类型枚举
# =============================================================================
class ErrorType(str, Enum):
    """错误类型枚举，帮助 LLM 理解错误性质"""
    MISSING_PARAMETER = "MISSING_PARAMETER"          # 必需参数或环境变量缺失
    INVALID_PARAMETER = "INVALID_PARAMETER"          # 参数格式或值无效
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"        # 主机/集群/虚拟机/磁盘不存在
    PERMISSION_DENIED = "PERMISSION_DENIED"          # 凭据无效或权限不足
    API_ERROR = "API_ERROR"                          # 远程 PowerShell 执行失败
    CONNECTION_ERROR = "CONNECTION_ERROR"            # WinRM 连接失败


# =============================================================================
# 基础模型
# =============================================================================
class MyBaseModel(BaseModel):
    model_config = ConfigDict(json_dumps_params={'ensure_ascii': False})


class ToolSuggestion(MyBaseModel):
    """工具建议模型 - 引导 LLM 调用正确的工具"""
    tool_name: str = Field(description="建议调用的工具名称")
    description: str = Field(description="调用该工具的原因说明")
    example_params: Optional[Dict[str, Any]] = Field(default=None, description="示例参数")


class MCPError(MyBaseModel):
    """
    结构化错误响应

    包含错误类型、可读消息、出错参数、修复建议和相关工具，
    便于调用方区分"配置缺失"、"对象不存在"和"远程命令失败"。
    """
    error_type: ErrorType = Field(description="错误类型")
    message: str = Field(description="人类可读的错误描述")
    parameter: Optional[str] = Field(default=None, description="出错的参数名")
    suggestion: str = Field(description="给 LLM 的解决方案建议")
    related_tools: Optional[List[ToolSuggestion]] = Field(
        default=None,
        description="相关工具推荐，LLM 可以调用这些工具来解决问题"
    )

    def __str__(self) -> str:
        parts = [
            f"[{self.error_type.value}] {self.message}",
            f"建议: {self.suggestion}"
        ]
        if self.related_tools:
            tools_info = ", ".join([f"{t.tool_name}({t.description})" for t in self.related_tools])
            parts.append(f"相关工具: {tools_info}")
        return "\n".join(parts)


class MCPResult(MyBaseModel):
    """统一响应模型，data 为扁平记录列表或单条记录"""
    success: bool = Field(description="操作是否成功")
    data: Optional[Any] = Field(default=None, description="成功时的数据")
    error: Optional[MCPError] = Field(default=None, description="失败时的错误信息")
    request_id: Optional[str] = Field(default=None, description="请求 ID，用于追踪")

    @classmethod
    def failed(cls, error: MCPError) -> "MCPResult":
        return cls(success=False, error=error)
