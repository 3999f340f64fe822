# -*- coding: utf-8 -*-
"""
往返时延统计模块
将 ping 输出中的汇总行解析为结构化的时延数据

示例:
    >>> stats = RoundTripStatistics.from_str(
    ...     "round-trip min/avg/max/stddev = 12.445/26.791/61.365/20.049 ms")
    >>> stats.average
    26.791
"""

import math
import re
from dataclasses import dataclass


# 汇总行格式: round-trip min/avg/max/stddev = 12.445/26.791/61.365/20.049 ms
# 只锚定行首，允许出现在多行输出的任意一行
ROUND_TRIP_PATTERN = re.compile(
    r'^round-trip min/avg/max/stddev = '
    r'(?P<min>[0-9.]+)/(?P<average>[0-9.]+)/(?P<max>[0-9.]+)/(?P<standard_deviation>[0-9.]+) ms',
    re.MULTILINE,
)


class ParseError(ValueError):
    """ping 输出中没有可识别的往返时延汇总行"""


def _format_ms(value: float) -> str:
    """保留 3 位小数，NaN 显示为 NaN"""
    if math.isnan(value):
        return "NaN"
    return f"{value:.3f}"


def _to_float(text: str) -> float:
    """转换单个数值，格式错误时返回 NaN 而不是让整体解析失败"""
    try:
        return float(text)
    except ValueError:
        return math.nan


@dataclass(frozen=True)
class RoundTripStatistics:
    """往返时延统计（单位均为毫秒）"""

    min: float
    max: float
    average: float
    standard_deviation: float

    @classmethod
    def from_str(cls, text: str) -> "RoundTripStatistics":
        """
        从 ping 标准输出中解析往返时延

        Args:
            text: ping 命令的完整输出（或仅汇总行）

        Returns:
            RoundTripStatistics 对象

        Raises:
            ParseError: 输出中找不到汇总行
        """
        match = ROUND_TRIP_PATTERN.search(text)
        if not match:
            raise ParseError("no round-trip summary line found")

        # 文本顺序是 min/avg/max/stddev，按名称而不是位置赋值
        return cls(
            min=_to_float(match.group('min')),
            max=_to_float(match.group('max')),
            average=_to_float(match.group('average')),
            standard_deviation=_to_float(match.group('standard_deviation')),
        )

    def __str__(self) -> str:
        return (
            f"min: {_format_ms(self.min)}\n"
            f"max: {_format_ms(self.max)}\n"
            f"average: {_format_ms(self.average)}\n"
            f"standard deviation: {_format_ms(self.standard_deviation)}"
        )


def parse_round_trip_statistics(text: str) -> RoundTripStatistics:
    """解析 ping 输出，等价于 RoundTripStatistics.from_str"""
    return RoundTripStatistics.from_str(text)
