import logging
import time

from ads1263 import config
from ads1263.errors import DrdyTimeoutError

logger = logging.getLogger(__name__)


class Transport:
    """
    Link between the protocol engine and the chip: SPI byte transfers plus
    the RST, CS and DRDY lines.

    Subclasses provide the line and byte primitives. The DRDY waits are
    built on top of `read_drdy` and `delay_us` here. Line levels follow the
    chip: CS and DRDY are active low, so `set_cs(True)` deselects and
    `read_drdy()` returning True means no data is ready.
    """

    def set_rst(self, high):
        raise NotImplementedError

    def set_cs(self, high):
        raise NotImplementedError

    def read_drdy(self):
        raise NotImplementedError

    def transfer_byte(self, value):
        """Clock one byte out and return the byte clocked in."""
        raise NotImplementedError

    def write_byte(self, value):
        self.transfer_byte(value)

    def read_byte(self):
        return self.transfer_byte(0x00)

    def delay_ms(self, ms):
        time.sleep(ms / 1000.0)

    def delay_us(self, us):
        time.sleep(us / 1000000.0)

    def wait_drdy(self, iterations=config.DRDY_TIMEOUT_ITERATIONS):
        for _ in range(iterations):
            if not self.read_drdy():
                return
        logger.error("Timeout waiting for DRDY")
        raise DrdyTimeoutError(f"DRDY still high after {iterations} polls")

    def wait_drdy_timeout(self, timeout_ms):
        start_time = time.monotonic()
        while (time.monotonic() - start_time) * 1000.0 < timeout_ms:
            if not self.read_drdy():
                return
            self.delay_us(config.DRDY_POLL_US)
        logger.error("Timeout (%s ms) waiting for DRDY", timeout_ms)
        raise DrdyTimeoutError(f"DRDY still high after {timeout_ms} ms")

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
