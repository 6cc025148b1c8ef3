from collections import deque

import pytest

from ads1263.ads1263 import ADS1263
from ads1263.transport import Transport


class FakeTransport(Transport):
    """Records every line change and byte; replays scripted MISO bytes and DRDY levels."""

    def __init__(self):
        self.events = []
        self.miso = deque()
        self.drdy_levels = deque()
        self.closed = False

    def set_rst(self, high):
        self.events.append(("rst", high))

    def set_cs(self, high):
        self.events.append(("cs", high))

    def read_drdy(self):
        if self.drdy_levels:
            return self.drdy_levels.popleft()
        return False

    def write_byte(self, value):
        self.events.append(("tx", int(value)))

    def read_byte(self):
        value = self.miso.popleft() if self.miso else 0x00
        self.events.append(("rx", value))
        return value

    def transfer_byte(self, value):
        self.write_byte(value)
        return self.read_byte()

    def delay_ms(self, ms):
        self.events.append(("delay_ms", ms))

    def delay_us(self, us):
        self.events.append(("delay_us", us))

    def close(self):
        self.closed = True

    @property
    def transactions(self):
        """Bytes sent during each chip-select window."""
        result = []
        current = None
        for kind, value in self.events:
            if kind == "cs" and value is False:
                current = []
            elif kind == "cs" and value is True:
                result.append(current)
                current = None
            elif kind == "tx" and current is not None:
                current.append(value)
        return result

    def count(self, kind):
        return sum(1 for event_kind, _ in self.events if event_kind == kind)


def frame_checksum(value):
    total = 0
    while value:
        total = (total + (value & 0xFF)) & 0xFF
        value >>= 8
    return (total + 0x9B) & 0xFF


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def adc(transport):
    return ADS1263(transport)
