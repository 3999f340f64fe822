# -*- coding: utf-8 -*-
"""
Ping 往返时延统计库 (ping_command)
解析 ping 输出中的往返时延汇总行，并聚合多次探测的成功率

使用方式:
    from ping_command import Events, probe

    events = Events()
    for _ in range(3):
        events.append(probe("localhost"))
    print(events)
"""

__version__ = "0.1.0"

from .round_trip_statistics import RoundTripStatistics, ParseError, parse_round_trip_statistics
from .event import Event
from .events import Events
from .ping import (
    PingCommandError,
    ping_command,
    ping_command_args,
    ping_command_into_round_trip_statistics,
    probe,
)

__all__ = [
    "RoundTripStatistics",
    "ParseError",
    "parse_round_trip_statistics",
    "Event",
    "Events",
    "PingCommandError",
    "ping_command",
    "ping_command_args",
    "ping_command_into_round_trip_statistics",
    "probe",
]
