class ADS1263Error(Exception):
    """Base class for errors raised by the ADS1263 driver."""


class ChipIdError(ADS1263Error):
    def __init__(self, chip_id, expected):
        super().__init__(f"Invalid chip ID: expected {expected}, got {chip_id}")
        self.chip_id = chip_id
        self.expected = expected


class ChannelRangeError(ADS1263Error, ValueError):
    def __init__(self, channel, maximum):
        super().__init__(f"Invalid channel: {channel} (max: {maximum})")
        self.channel = channel
        self.maximum = maximum


class DrdyTimeoutError(ADS1263Error, TimeoutError):
    """DRDY did not go low within the configured bound."""


class StatusTimeoutError(DrdyTimeoutError):
    """The ready bit in the data frame status byte was never set."""
