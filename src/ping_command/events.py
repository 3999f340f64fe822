# -*- coding: utf-8 -*-
"""
探测事件聚合模块
按时间顺序累积 Event，并按需计算成功率等汇总指标

注意: Events 没有内部锁，多线程并发 append 需要调用方自行同步
"""

import math
from typing import Iterator, List

import pandas as pd

from .event import Event
from .round_trip_statistics import RoundTripStatistics


def _format_rate(rate: float) -> str:
    """NaN 显示为 NaN，整数值不带小数部分（1.0 -> 1）"""
    if math.isnan(rate):
        return "NaN"
    if rate.is_integer():
        return str(int(rate))
    return repr(rate)


class Events:
    """事件序列（只追加）"""

    DATAFRAME_COLUMNS = [
        'timestamp', 'host', 'success',
        'min', 'average', 'max', 'standard_deviation',
    ]

    def __init__(self):
        self.events: List[Event] = []

    def append(self, event: Event):
        """追加一个事件"""
        self.events.append(event)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def attempt_count(self) -> int:
        """探测总次数"""
        return len(self.events)

    def success_count(self) -> int:
        """成功次数"""
        return sum(1 for e in self.events if e.success)

    def failure_count(self) -> int:
        """失败次数"""
        return sum(1 for e in self.events if not e.success)

    def success_rate(self) -> float:
        """
        成功率

        Returns:
            success_count / attempt_count，没有任何探测时返回 NaN
        """
        attempts = self.attempt_count()
        if attempts == 0:
            return math.nan
        return self.success_count() / attempts

    def success_round_trip_statistics(self) -> List[RoundTripStatistics]:
        """
        成功事件的时延统计（保持追加顺序）

        跳过失败事件，以及成功但没有解析出时延的事件
        """
        return [
            e.round_trip_statistics
            for e in self.events
            if e.success and e.round_trip_statistics is not None
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """
        导出为 DataFrame，每个事件一行

        没有时延统计的事件对应列为 NaN
        """
        rows = []
        for e in self.events:
            stats = e.round_trip_statistics
            rows.append({
                'timestamp': e.timestamp,
                'host': e.host,
                'success': e.success,
                'min': stats.min if stats else math.nan,
                'average': stats.average if stats else math.nan,
                'max': stats.max if stats else math.nan,
                'standard_deviation': stats.standard_deviation if stats else math.nan,
            })
        return pd.DataFrame(rows, columns=self.DATAFRAME_COLUMNS)

    def __str__(self) -> str:
        return (
            f"attempt count: {self.attempt_count()}\n"
            f"success count: {self.success_count()}\n"
            f"success rate: {_format_rate(self.success_rate())}"
        )
