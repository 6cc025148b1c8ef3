import logging
from contextlib import contextmanager

from ads1263 import config
from ads1263.errors import ChannelRangeError, ChipIdError, StatusTimeoutError
from ads1263.registers import (
    ADC1_READY,
    ADC2_READY,
    ADC2_SCAN_CHANNELS,
    ADC2CFG_REF_AVDD_AVSS,
    CHECKSUM_OFFSET,
    CHIP_ID,
    CHIP_ID_SHIFT,
    DAC_ENABLE,
    DIFFERENTIAL_PAIRS,
    MAX_DIFFERENTIAL_CHANNEL,
    MAX_SINGLE_ENDED_CHANNEL,
    MODE2_PGA_BYPASS,
    MUX_AINCOM,
    RTD_IDACMAG,
    RTD_IDACMUX,
    RTD_INPMUX,
    RTD_REFMUX,
    Adc2DataRate,
    Adc2Gain,
    Command,
    DacVoltage,
    DataRate,
    Delay,
    DigitalFilter,
    Gain,
    InputMode,
    ReferenceSource,
    Register,
)
from ads1263.utils import bytes_to_integer, split_integer_to_bytes

logger = logging.getLogger(__name__)


def encode_input_mux(channel, mode):
    """
    Multiplexer byte selecting `channel` in the given input mode.

    Single-ended channels 0-10 are measured against AINCOM. Differential
    channels 0-4 select the fixed pairs AIN0-AIN1 ... AIN8-AIN9.
    """
    if InputMode(mode) is InputMode.SINGLE_ENDED:
        if not 0 <= channel <= MAX_SINGLE_ENDED_CHANNEL:
            raise ChannelRangeError(channel, MAX_SINGLE_ENDED_CHANNEL)
        return (channel << 4) | MUX_AINCOM

    if not 0 <= channel <= MAX_DIFFERENTIAL_CHANNEL:
        raise ChannelRangeError(channel, MAX_DIFFERENTIAL_CHANNEL)
    positive, negative = DIFFERENTIAL_PAIRS[channel]
    return (positive << 4) | negative


class ADS1263:
    """
    Driver for the TI ADS1263 32-bit delta-sigma ADC (Waveshare
    High-Precision AD HAT).

    Owns the transport for its lifetime; use it as a context manager so the
    control lines are released on every exit path::

        with ADS1263(SpiTransport()) as adc:
            adc.init_adc1(DataRate.SPS_400)
            volts = raw_to_voltage_adc1(adc.get_channel_value(0), 5.0)
    """

    def __init__(self, transport, mode=InputMode.SINGLE_ENDED,
                 drdy_timeout_ms=config.DRDY_TIMEOUT_MS,
                 status_poll_limit=config.STATUS_POLL_LIMIT):
        self.transport = transport
        self.mode = InputMode(mode)
        self.drdy_timeout_ms = drdy_timeout_ms
        self.status_poll_limit = status_poll_limit

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.transport.close()

    # Bus primitives

    @contextmanager
    def _selected(self):
        self.transport.set_cs(False)
        try:
            yield
        finally:
            self.transport.set_cs(True)

    def reset(self):
        logger.debug("Performing hardware reset")
        self.transport.set_rst(True)
        self.transport.delay_ms(config.RESET_HOLD_MS)
        self.transport.set_rst(False)
        self.transport.delay_ms(config.RESET_HOLD_MS)
        self.transport.set_rst(True)
        self.transport.delay_ms(config.RESET_HOLD_MS)

    def write_command(self, command):
        command = Command(command)
        with self._selected():
            self.transport.write_byte(command)

    def write_register(self, register, value):
        register = Register(register)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Register value must be one byte, got {value!r}")

        with self._selected():
            self.transport.write_byte(Command.WREG | register)
            self.transport.write_byte(0x00)  # Number of registers minus one
            self.transport.write_byte(value)

    def read_register(self, register):
        register = Register(register)
        with self._selected():
            self.transport.write_byte(Command.RREG | register)
            self.transport.write_byte(0x00)  # Number of registers minus one
            return self.transport.read_byte()

    def write_register_verified(self, register, value, name):
        """
        Write a register, then read it back after 1 ms.

        A mismatch is logged and otherwise ignored: reserved and read-only
        bits never echo what was written.
        """
        self.write_register(register, value)
        self.transport.delay_ms(config.SETTLE_MS)

        read_back = self.read_register(register)
        if read_back == value:
            logger.info(f"{name} configured successfully (0x{value:02X})")
        else:
            logger.warning(
                f"{name} configuration mismatch: wrote 0x{value:02X}, read 0x{read_back:02X}")

    @staticmethod
    def checksum(value, crc):
        total = 0
        for byte in split_integer_to_bytes(value):
            total = (total + byte) & 0xFF
        total = (total + CHECKSUM_OFFSET) & 0xFF
        return total == crc

    # Identity and mode

    def read_chip_id(self):
        return self.read_register(Register.ID) >> CHIP_ID_SHIFT

    def _check_chip_id(self):
        chip_id = self.read_chip_id()
        if chip_id != CHIP_ID:
            logger.error(f"Invalid chip ID: {chip_id} (expected {CHIP_ID})")
            raise ChipIdError(chip_id, CHIP_ID)
        logger.info(f"Chip ID verified: {chip_id}")

    def set_mode(self, mode):
        self.mode = InputMode(mode)
        logger.info(f"Input mode set to {self.mode.name}")

    def get_mode(self):
        return self.mode

    # ADC1 configuration

    def config_adc1(self, gain, drate, delay,
                    reference=ReferenceSource.AVDD_AVSS,
                    digital_filter=DigitalFilter.FIR):
        gain = Gain(gain)
        drate = DataRate(drate)
        delay = Delay(delay)

        mode2 = MODE2_PGA_BYPASS | (gain << 4) | drate
        self.write_register_verified(Register.MODE2, mode2, "REG_MODE2")
        self.write_register_verified(Register.REFMUX, ReferenceSource(reference), "REG_REFMUX")
        self.write_register_verified(Register.MODE0, delay, "REG_MODE0")
        self.write_register_verified(Register.MODE1, DigitalFilter(digital_filter), "REG_MODE1")

    def init_adc1(self, rate=DataRate.SPS_400):
        rate = DataRate(rate)
        self.reset()
        self._check_chip_id()

        self.stop_adc1()
        self.config_adc1(Gain.GAIN_1, rate, Delay.DELAY_35US)
        self.start_adc1()
        logger.info(f"ADC1 initialized with data rate {rate.name}")

    # ADC2 configuration

    def config_adc2(self, gain, drate, delay):
        gain = Adc2Gain(gain)
        drate = Adc2DataRate(drate)
        delay = Delay(delay)

        adc2cfg = ADC2CFG_REF_AVDD_AVSS | (drate << 6) | gain
        self.write_register_verified(Register.ADC2CFG, adc2cfg, "REG_ADC2CFG")
        self.write_register_verified(Register.MODE0, delay, "REG_MODE0")

    def init_adc2(self, rate=Adc2DataRate.SPS_100):
        rate = Adc2DataRate(rate)
        self.reset()
        self._check_chip_id()

        # ADC2 is started per read
        self.stop_adc2()
        self.config_adc2(Adc2Gain.GAIN_1, rate, Delay.DELAY_35US)
        logger.info(f"ADC2 initialized with data rate {rate.name}")

    # Channel selection

    def set_channel(self, channel):
        self.write_register(Register.INPMUX, encode_input_mux(channel, InputMode.SINGLE_ENDED))

    def set_diff_channel(self, channel):
        self.write_register(Register.INPMUX, encode_input_mux(channel, InputMode.DIFFERENTIAL))

    def set_channel_adc2(self, channel):
        self.write_register(Register.ADC2MUX, encode_input_mux(channel, InputMode.SINGLE_ENDED))

    def set_diff_channel_adc2(self, channel):
        self.write_register(Register.ADC2MUX, encode_input_mux(channel, InputMode.DIFFERENTIAL))

    # Data frames

    def _wait_status(self, command, ready_bit):
        for _ in range(self.status_poll_limit):
            self.transport.write_byte(command)
            status = self.transport.read_byte()
            if status & ready_bit:
                return status
        logger.error(f"Timeout waiting for {command.name} status ready")
        raise StatusTimeoutError(
            f"{command.name} status not ready after {self.status_poll_limit} polls")

    def _wait_drdy(self):
        if self.drdy_timeout_ms is None:
            self.transport.wait_drdy(config.DRDY_TIMEOUT_ITERATIONS)
        else:
            self.transport.wait_drdy_timeout(self.drdy_timeout_ms)

    def read_adc1_data(self):
        with self._selected():
            self._wait_status(Command.RDATA1, ADC1_READY)
            data = [self.transport.read_byte() for _ in range(4)]
            crc = self.transport.read_byte()

        value = bytes_to_integer(data)
        if not self.checksum(value, crc):
            logger.warning(f"ADC1 checksum error: data=0x{value:08X}, crc=0x{crc:02X}")
        return value

    def read_adc2_data(self):
        with self._selected():
            self._wait_status(Command.RDATA2, ADC2_READY)
            data = [self.transport.read_byte() for _ in range(3)]
            self.transport.read_byte()  # Pad byte
            crc = self.transport.read_byte()

        value = bytes_to_integer(data)
        if not self.checksum(value, crc):
            logger.warning(f"ADC2 checksum error: data=0x{value:06X}, crc=0x{crc:02X}")
        return value

    # Acquisition

    def get_channel_value(self, channel):
        if self.mode is InputMode.SINGLE_ENDED:
            self.set_channel(channel)
        else:
            self.set_diff_channel(channel)

        self._wait_drdy()
        return self.read_adc1_data()

    def get_channel_value_adc2(self, channel):
        if self.mode is InputMode.SINGLE_ENDED:
            self.set_channel_adc2(channel)
        else:
            self.set_diff_channel_adc2(channel)

        # No DRDY wait: the frame status bit is polled instead
        self.start_adc2()
        return self.read_adc2_data()

    def get_all(self, channels, stop_event=None):
        """Read each of `channels` from ADC1 in order. Stops early once `stop_event` is set."""
        values = []
        for channel in channels:
            if stop_event is not None and stop_event.is_set():
                break
            values.append(self.get_channel_value(channel))
        return values

    def get_all_adc2(self, stop_event=None):
        """Read single-ended channels 0-9 from ADC2, stopping the converter after each."""
        values = []
        for channel in range(ADC2_SCAN_CHANNELS):
            if stop_event is not None and stop_event.is_set():
                break
            self.set_channel_adc2(channel)
            self.start_adc2()
            values.append(self.read_adc2_data())
            self.stop_adc2()
        return values

    # RTD and DAC

    def read_rtd(self, delay, gain, drate):
        """
        Single RTD conversion on ADC1.

        IDAC1 (250 uA) drives AIN3 and IDAC2 (250 uA) drives AINCOM; the
        sense pair is AIN7/AIN6 against the reference resistor on AIN4/AIN5.
        Every register change is followed by a settling delay.
        """
        delay = Delay(delay)
        gain = Gain(gain)
        drate = DataRate(drate)

        sequence = [
            (Register.MODE0, delay),
            (Register.IDACMUX, RTD_IDACMUX),
            (Register.IDACMAG, RTD_IDACMAG),
            (Register.MODE2, (gain << 4) | drate),
            (Register.INPMUX, RTD_INPMUX),
            (Register.REFMUX, RTD_REFMUX),
        ]
        for register, value in sequence:
            self.write_register(register, value)
            self.transport.delay_ms(config.SETTLE_MS)

        self.start_adc1()
        try:
            self.transport.delay_ms(config.RTD_START_DELAY_MS)
            self._wait_drdy()
            return self.read_adc1_data()
        finally:
            self.stop_adc1()

    def set_dac(self, voltage, positive=True, enable=True):
        voltage = DacVoltage(voltage)
        register = Register.TDACP if positive else Register.TDACN
        value = (voltage | DAC_ENABLE) if enable else 0x00

        self.write_register(register, value)
        logger.debug(
            f"DAC {'positive' if positive else 'negative'} "
            f"{'enabled' if enable else 'disabled'} with voltage {voltage.name}")

    def start_adc1(self):
        self.write_command(Command.START1)

    def stop_adc1(self):
        self.write_command(Command.STOP1)

    def start_adc2(self):
        self.write_command(Command.START2)

    def stop_adc2(self):
        self.write_command(Command.STOP2)
