import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest

from ping_command.event import Event
from ping_command.round_trip_statistics import RoundTripStatistics


MACOS_OUTPUT = """PING localhost (127.0.0.1): 56 data bytes
64 bytes from 127.0.0.1: icmp_seq=0 ttl=64 time=0.041 ms

--- localhost ping statistics ---
1 packets transmitted, 1 packets received, 0.0% packet loss
round-trip min/avg/max/stddev = 12.445/26.791/61.365/20.049 ms
"""


@pytest.fixture
def macos_output():
    return MACOS_OUTPUT


@pytest.fixture
def sample_stats():
    return RoundTripStatistics(min=12.445, max=61.365, average=26.791, standard_deviation=20.049)


@pytest.fixture
def make_event():
    def _make(success=True, stats=None, host="localhost"):
        return Event(timestamp=datetime(2024, 1, 1, 12, 0, 0), host=host,
                     success=success, round_trip_statistics=stats)
    return _make
