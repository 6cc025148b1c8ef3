import logging

import spidev  # type: ignore
import RPi.GPIO as GPIO  # type: ignore
# pylint: enable=import-error

from ads1263 import config
from ads1263.transport import Transport

GPIO.setwarnings(False)  # Disable GPIO warnings

logger = logging.getLogger(__name__)


class SpiTransport(Transport):
    """Raspberry Pi transport: spidev for the bus, RPi.GPIO for RST/CS/DRDY."""

    def __init__(self, spi_bus=config.SPI_BUS, spi_device=config.SPI_DEVICE,
                 rst_pin=config.RST_PIN, cs_pin=config.CS_PIN, drdy_pin=config.DRDY_PIN,
                 max_speed_hz=config.SPI_MAX_SPEED_HZ):
        self.rst_pin = rst_pin
        self.cs_pin = cs_pin
        self.drdy_pin = drdy_pin
        self.closed = False

        GPIO.setmode(GPIO.BCM)
        GPIO.setup(rst_pin, GPIO.OUT)
        GPIO.setup(cs_pin, GPIO.OUT, initial=GPIO.HIGH)  # CS starts inactive
        GPIO.setup(drdy_pin, GPIO.IN)

        self.spi = spidev.SpiDev()
        try:
            self.spi.open(spi_bus, spi_device)
        except OSError:
            GPIO.cleanup((rst_pin, cs_pin, drdy_pin))
            raise
        self.spi.max_speed_hz = max_speed_hz
        self.spi.mode = config.SPI_MODE

        logger.info("GPIO initialized - RST: BCM%d, CS: BCM%d, DRDY: BCM%d", rst_pin, cs_pin, drdy_pin)
        logger.info("SPI configured - /dev/spidev%d.%d, %d Hz, mode %d",
                    spi_bus, spi_device, max_speed_hz, config.SPI_MODE)

    def set_rst(self, high):
        GPIO.output(self.rst_pin, GPIO.HIGH if high else GPIO.LOW)

    def set_cs(self, high):
        GPIO.output(self.cs_pin, GPIO.HIGH if high else GPIO.LOW)

    def read_drdy(self):
        return GPIO.input(self.drdy_pin) == GPIO.HIGH

    def transfer_byte(self, value):
        return self.spi.xfer2([value & 0xFF])[0]

    def close(self):
        if self.closed:
            return
        self.closed = True
        try:
            GPIO.output(self.cs_pin, GPIO.HIGH)
            GPIO.output(self.rst_pin, GPIO.LOW)
            self.spi.close()
        finally:
            GPIO.cleanup((self.rst_pin, self.cs_pin, self.drdy_pin))
        logger.debug("Transport closed")
