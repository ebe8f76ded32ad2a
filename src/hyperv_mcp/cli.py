# -*- coding: utf-8 -*-
"""
Hyper-V MCP Server - 命令行报表入口

不经过 MCP 直接调用某个工具并把 MCPResult 以 JSON 打印出来：

    hyperv-report describeHostMemory host_name=hv01.contoso.local
    hyperv-report setVMTimeSync vm_name=web01 enabled=false
"""

import sys
import json
import asyncio
import inspect
import argparse
from typing import Any, Dict, List, Optional

from pydantic.fields import FieldInfo, PydanticUndefined

from .server import ToolRegistry, configure_logging
from .tools import get_vm_time_sync, set_vm_time_sync, create_cluster_shared_volume

TOOLS = {name: fn for name, fn, _, _ in ToolRegistry.QUERY_TOOLS + ToolRegistry.HOST_TOOLS}
TOOLS.update({
    "getVMTimeSync": get_vm_time_sync,
    "setVMTimeSync": set_vm_time_sync,
    "createClusterSharedVolume": create_cluster_shared_volume,
})

_BOOLEANS = {"true": True, "yes": True, "1": True, "false": False, "no": False, "0": False}


def parse_assignments(pairs: List[str]) -> Dict[str, str]:
    """解析 key=value 参数，值保持字符串"""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"参数格式应为 key=value: '{pair}'")
        params[key] = value
    return params


def resolve_arguments(fn, params: Dict[str, Any]) -> Dict[str, Any]:
    """
    补齐工具参数

    工具参数默认值是 pydantic Field，直接调用时需替换为真实默认值；
    只有标注为 bool 的参数才把 true/false 等字面量转为 bool。
    """
    signature = inspect.signature(fn)
    unknown = set(params) - set(signature.parameters)
    if unknown:
        raise ValueError(f"未知参数: {', '.join(sorted(unknown))}")

    kwargs = {}
    for name, parameter in signature.parameters.items():
        if name in params:
            value = params[name]
            if parameter.annotation is bool and isinstance(value, str):
                value = _BOOLEANS.get(value.lower(), value)
            kwargs[name] = value
            continue
        default = parameter.default
        if isinstance(default, FieldInfo):
            default = None if default.default is PydanticUndefined else default.default
        elif default is inspect.Parameter.empty:
            default = None
        kwargs[name] = default
    return kwargs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hyperv-report", description="调用一个 Hyper-V 报表工具并打印 JSON 结果")
    parser.add_argument("tool", help="工具名称: " + ", ".join(sorted(TOOLS)))
    parser.add_argument("params", nargs="*", help="key=value 形式的工具参数")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    fn = TOOLS.get(args.tool)
    if fn is None:
        print(f"未知工具: {args.tool}", file=sys.stderr)
        return 2

    try:
        kwargs = resolve_arguments(fn, parse_assignments(args.params))
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    result = asyncio.run(fn(**kwargs))
    print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
