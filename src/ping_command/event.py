# -*- coding: utf-8 -*-
"""
探测事件模块
每次 ping 尝试对应一个不可变的 Event
"""

from dataclasses import dataclass
from typing import Any, Optional

from .round_trip_statistics import RoundTripStatistics


@dataclass(frozen=True)
class Event:
    """
    单次 ping 探测结果

    Attributes:
        timestamp: 探测时间（由调用方提供，对本模块不透明）
        host: 目标主机
        success: 探测是否成功
        round_trip_statistics: 时延统计，仅在成功且解析成功时存在
    """

    timestamp: Any
    host: str
    success: bool
    round_trip_statistics: Optional[RoundTripStatistics] = None

    def __post_init__(self):
        if not self.success and self.round_trip_statistics is not None:
            raise ValueError("failed event cannot carry round trip statistics")
