import os


def _env_int(name, default):
    if name in os.environ:
        return int(os.getenv(name))
    return default


def _env_float(name, default):
    if name in os.environ:
        return float(os.getenv(name))
    return default


# Waveshare High-Precision AD HAT wiring (BCM numbering)
RST_PIN = _env_int("ADS1263_RST_PIN", 18)
CS_PIN = _env_int("ADS1263_CS_PIN", 22)
DRDY_PIN = _env_int("ADS1263_DRDY_PIN", 17)

SPI_BUS = _env_int("ADS1263_SPI_BUS", 0)
SPI_DEVICE = _env_int("ADS1263_SPI_DEVICE", 0)
SPI_MAX_SPEED_HZ = _env_int("ADS1263_SPI_SPEED_HZ", 1000000)
SPI_MODE = 0b01  # CPOL=0, CPHA=1

# None selects the iteration-bounded DRDY wait
DRDY_TIMEOUT_MS = _env_int("ADS1263_DRDY_TIMEOUT_MS", None)
DRDY_TIMEOUT_ITERATIONS = 4000000
DRDY_POLL_US = 10
STATUS_POLL_LIMIT = 100000

RESET_HOLD_MS = 300
SETTLE_MS = 1
RTD_START_DELAY_MS = 10

# AVDD/AVSS measured on the HAT; modify to match the board
REFERENCE_VOLTAGE = _env_float("ADS1263_REFERENCE_VOLTAGE", 5.08)
RTD_REFERENCE_RESISTOR = 2000.0
