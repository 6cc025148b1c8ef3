import importlib
import sys
from unittest import mock

import pytest

from ads1263.errors import ADS1263Error, DrdyTimeoutError
from ads1263.transport import Transport


def test_wait_drdy_returns_when_line_drops(transport):
    transport.drdy_levels.extend([True, True, False, True])
    transport.wait_drdy(iterations=10)
    assert list(transport.drdy_levels) == [True]


def test_wait_drdy_iteration_bound(transport):
    transport.drdy_levels.extend([True] * 4)
    with pytest.raises(DrdyTimeoutError) as excinfo:
        transport.wait_drdy(iterations=4)
    assert isinstance(excinfo.value, TimeoutError)
    assert isinstance(excinfo.value, ADS1263Error)


def test_wait_drdy_timeout_sleeps_between_polls(transport):
    transport.drdy_levels.extend([True, True, False])
    transport.wait_drdy_timeout(1000)
    assert transport.events == [("delay_us", 10), ("delay_us", 10)]


def test_wait_drdy_timeout_expires(transport):
    transport.read_drdy = lambda: True
    with pytest.raises(DrdyTimeoutError):
        transport.wait_drdy_timeout(1)


def test_base_transport_byte_helpers():
    class EchoTransport(Transport):
        def __init__(self):
            self.sent = []

        def transfer_byte(self, value):
            self.sent.append(value)
            return 0xA5

    echo = EchoTransport()
    echo.write_byte(0x12)
    assert echo.read_byte() == 0xA5
    assert echo.sent == [0x12, 0x00]


def test_base_transport_primitives_are_abstract():
    bare = Transport()
    with pytest.raises(NotImplementedError):
        bare.set_cs(True)
    with pytest.raises(NotImplementedError):
        bare.read_drdy()


@pytest.fixture
def rpi():
    """Stand-ins for spidev and RPi.GPIO so the Pi transport imports off-target."""
    gpio = mock.MagicMock(name="GPIO")
    gpio.HIGH = 1
    gpio.LOW = 0
    rpi_package = mock.MagicMock(name="RPi")
    rpi_package.GPIO = gpio
    spidev = mock.MagicMock(name="spidev")
    spi = spidev.SpiDev.return_value
    spi.xfer2.return_value = [0x3C]

    modules = {"spidev": spidev, "RPi": rpi_package, "RPi.GPIO": gpio}
    with mock.patch.dict(sys.modules, modules):
        sys.modules.pop("ads1263.spi_transport", None)
        module = importlib.import_module("ads1263.spi_transport")
        yield module, gpio, spi
    sys.modules.pop("ads1263.spi_transport", None)


def test_spi_transport_setup(rpi):
    module, gpio, spi = rpi
    module.SpiTransport(spi_bus=0, spi_device=1, rst_pin=18, cs_pin=22, drdy_pin=17,
                        max_speed_hz=500000)

    gpio.setmode.assert_called_once_with(gpio.BCM)
    gpio.setup.assert_any_call(22, gpio.OUT, initial=gpio.HIGH)
    gpio.setup.assert_any_call(17, gpio.IN)
    spi.open.assert_called_once_with(0, 1)
    assert spi.max_speed_hz == 500000
    assert spi.mode == 0b01


def test_spi_transport_lines_and_bytes(rpi):
    module, gpio, spi = rpi
    link = module.SpiTransport()

    link.set_cs(False)
    gpio.output.assert_called_with(link.cs_pin, 0)
    link.set_rst(True)
    gpio.output.assert_called_with(link.rst_pin, 1)

    gpio.input.return_value = 0
    assert link.read_drdy() is False
    gpio.input.return_value = 1
    assert link.read_drdy() is True

    assert link.read_byte() == 0x3C
    spi.xfer2.assert_called_with([0x00])
    link.write_byte(0x145)
    spi.xfer2.assert_called_with([0x45])


def test_spi_transport_close_releases_lines_once(rpi):
    module, gpio, spi = rpi
    with module.SpiTransport() as link:
        pass

    gpio.output.assert_any_call(link.cs_pin, 1)
    gpio.output.assert_any_call(link.rst_pin, 0)
    spi.close.assert_called_once()
    gpio.cleanup.assert_called_once_with((link.rst_pin, link.cs_pin, link.drdy_pin))

    link.close()
    spi.close.assert_called_once()
