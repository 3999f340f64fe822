# -*- coding: utf-8 -*-
"""
Ping 工具函数
刻意实现为普通函数而不是类，方便在自己的代码中组合使用

使用方式:
    from ping_command.ping import ping_command, ping_command_args

    output = ping_command(ping_command_args("localhost"))
"""

import os
import subprocess
from datetime import datetime
from typing import Callable, List, Optional

from .event import Event
from .round_trip_statistics import ParseError, RoundTripStatistics


class PingCommandError(OSError):
    """ping 命令退出码非 0"""

    def __init__(self, message: str, returncode: Optional[int] = None, output: str = ''):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


def current_family() -> str:
    """当前操作系统族: 'unix' / 'windows' / 其他"""
    if os.name == 'nt':
        return 'windows'
    if os.name == 'posix':
        return 'unix'
    return os.name


def ping_command_args(host: str, family: str = None) -> List[str]:
    """
    根据操作系统族生成单次 ping 的命令参数

    不同系统的 ping 选项不同:
    - unix:    ["-c", "1", "-W", "5", host]
    - windows: ["-n", "1", "-w", "5000", host]

    Args:
        host: 目标主机
        family: 操作系统族（默认取当前系统）

    Returns:
        参数列表，未知系统族返回空列表
    """
    family = family or current_family()
    if family == 'unix':
        return ["-c", "1", "-W", "5", host]
    if family == 'windows':
        return ["-n", "1", "-w", "5000", host]
    return []


def ping_command(args: List[str]) -> str:
    """
    调用本地 ping 命令并返回标准输出

    Args:
        args: ping 参数

    Returns:
        ping 的标准输出

    Raises:
        PingCommandError: ping 退出码非 0
        OSError: 无法启动 ping 进程
    """
    completed = subprocess.run(
        ["ping", *args],
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    output = completed.stdout.decode('utf-8', errors='replace')
    if completed.returncode == 0:
        return output
    raise PingCommandError(
        "Ping command output is not a success.",
        returncode=completed.returncode,
        output=output,
    )


def ping_command_into_round_trip_statistics(
    args: List[str],
    runner: Callable[[List[str]], str] = ping_command,
) -> RoundTripStatistics:
    """
    调用 ping 并把输出解析为往返时延

    Raises:
        PingCommandError: ping 执行失败
        ParseError: 输出中没有汇总行
    """
    output = runner(args)
    return RoundTripStatistics.from_str(output)


def probe(
    host: str,
    runner: Callable[[List[str]], str] = ping_command,
    clock: Callable[[], object] = datetime.now,
    family: str = None,
) -> Event:
    """
    执行一次探测并转换为 Event

    - 执行失败（退出码非 0 / 无法启动）: success=False
    - 执行成功但无法解析: success=True，round_trip_statistics=None

    Args:
        host: 目标主机
        runner: 执行 ping 的函数（本地或 SSH 远程）
        clock: 时间戳来源
        family: 生成参数使用的操作系统族

    Returns:
        Event 对象
    """
    timestamp = clock()
    try:
        output = runner(ping_command_args(host, family))
    except OSError:
        return Event(timestamp=timestamp, host=host, success=False)

    try:
        stats = RoundTripStatistics.from_str(output)
    except ParseError:
        stats = None
    return Event(timestamp=timestamp, host=host, success=True, round_trip_statistics=stats)
