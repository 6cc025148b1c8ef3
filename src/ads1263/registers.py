from enum import Enum, IntEnum

# ADS1263 register, command and configuration tables (datasheet SBAS661)


class Register(IntEnum):
    ID = 0x00
    POWER = 0x01
    INTERFACE = 0x02
    MODE0 = 0x03        # Conversion delay, chop
    MODE1 = 0x04        # Digital filter
    MODE2 = 0x05        # PGA bypass, gain, data rate
    INPMUX = 0x06
    OFCAL0 = 0x07
    OFCAL1 = 0x08
    OFCAL2 = 0x09
    FSCAL0 = 0x0A
    FSCAL1 = 0x0B
    FSCAL2 = 0x0C
    IDACMUX = 0x0D
    IDACMAG = 0x0E
    REFMUX = 0x0F
    TDACP = 0x10        # Drives AIN6
    TDACN = 0x11        # Drives AIN7
    GPIOCON = 0x12
    GPIODIR = 0x13
    GPIODAT = 0x14
    ADC2CFG = 0x15
    ADC2MUX = 0x16
    ADC2OFC0 = 0x17
    ADC2OFC1 = 0x18
    ADC2FSC0 = 0x19
    ADC2FSC1 = 0x1A


class Command(IntEnum):
    RESET = 0x06
    START1 = 0x08
    STOP1 = 0x0A
    START2 = 0x0C
    STOP2 = 0x0E
    RDATA1 = 0x12
    RDATA2 = 0x14
    SYOCAL1 = 0x16
    SYGCAL1 = 0x17
    SFOCAL1 = 0x19
    SYOCAL2 = 0x1B
    SYGCAL2 = 0x1C
    SFOCAL2 = 0x1E
    RREG = 0x20         # OR with register address
    WREG = 0x40         # OR with register address


class Gain(IntEnum):
    GAIN_1 = 0
    GAIN_2 = 1
    GAIN_4 = 2
    GAIN_8 = 3
    GAIN_16 = 4
    GAIN_32 = 5
    GAIN_64 = 6


class DataRate(IntEnum):
    SPS_2_5 = 0
    SPS_5 = 1
    SPS_10 = 2
    SPS_16_6 = 3
    SPS_20 = 4
    SPS_50 = 5
    SPS_60 = 6
    SPS_100 = 7
    SPS_400 = 8
    SPS_1200 = 9
    SPS_2400 = 10
    SPS_4800 = 11
    SPS_7200 = 12
    SPS_14400 = 13
    SPS_19200 = 14
    SPS_38400 = 15


class Delay(IntEnum):
    DELAY_0 = 0
    DELAY_8_7US = 1
    DELAY_17US = 2
    DELAY_35US = 3
    DELAY_169US = 4
    DELAY_139US = 5
    DELAY_278US = 6
    DELAY_555US = 7
    DELAY_1_1MS = 8
    DELAY_2_2MS = 9
    DELAY_4_4MS = 10
    DELAY_8_8MS = 11


class Adc2Gain(IntEnum):
    GAIN_1 = 0
    GAIN_2 = 1
    GAIN_4 = 2
    GAIN_8 = 3
    GAIN_16 = 4
    GAIN_32 = 5
    GAIN_64 = 6
    GAIN_128 = 7


class Adc2DataRate(IntEnum):
    SPS_10 = 0
    SPS_100 = 1
    SPS_400 = 2
    SPS_800 = 3


class DacVoltage(IntEnum):
    """TDACP/TDACN output level codes (bit 7, the enable bit, not included)."""
    VOLT_4_5 = 0b01001
    VOLT_3_5 = 0b01000
    VOLT_3_0 = 0b00111
    VOLT_2_75 = 0b00110
    VOLT_2_625 = 0b00101
    VOLT_2_5625 = 0b00100
    VOLT_2_53125 = 0b00011
    VOLT_2_515625 = 0b00010
    VOLT_2_5078125 = 0b00001
    VOLT_2_5 = 0b00000
    VOLT_2_4921875 = 0b10001
    VOLT_2_484375 = 0b10010
    VOLT_2_46875 = 0b10011
    VOLT_2_4375 = 0b10100
    VOLT_2_375 = 0b10101
    VOLT_2_25 = 0b10110
    VOLT_2_0 = 0b10111
    VOLT_1_5 = 0b11000
    VOLT_0_5 = 0b11001


class DigitalFilter(IntEnum):
    SINC1 = 0x04
    SINC2 = 0x24
    SINC3 = 0x44
    SINC4 = 0x64
    FIR = 0x84          # Best 50/60 Hz rejection


class ReferenceSource(IntEnum):
    INTERNAL_2V5 = 0x00
    EXTERNAL_AIN0_AIN1 = 0x09
    EXTERNAL_AIN2_AIN3 = 0x12
    EXTERNAL_AIN4_AIN5 = 0x1B
    AVDD_AVSS = 0x24


class InputMode(Enum):
    SINGLE_ENDED = 0    # AIN0-AIN9 (and AINCOM) against AINCOM
    DIFFERENTIAL = 1    # AIN0-AIN1, AIN2-AIN3, ... AIN8-AIN9


# Fixed field values
CHIP_ID = 1
CHIP_ID_SHIFT = 5
CHECKSUM_OFFSET = 0x9B
MODE2_PGA_BYPASS = 0x80
ADC2CFG_REF_AVDD_AVSS = 0x20
DAC_ENABLE = 0x80

# Status byte ready flags
ADC1_READY = 0x40
ADC2_READY = 0x80

# Input multiplexer
MUX_AINCOM = 0x0A
MAX_SINGLE_ENDED_CHANNEL = 10
DIFFERENTIAL_PAIRS = ((0, 1), (2, 3), (4, 5), (6, 7), (8, 9))
MAX_DIFFERENTIAL_CHANNEL = len(DIFFERENTIAL_PAIRS) - 1
ADC2_SCAN_CHANNELS = 10

# Code scaling
ADC1_BITS = 32
ADC2_BITS = 24
ADC1_FULL_SCALE = 0x7FFFFFFF
ADC1_HALF_SCALE = 0x80000000
ADC2_FULL_SCALE = 0x7FFFFF
ADC2_HALF_SCALE = 0x800000

# RTD micro-sequence
RTD_IDACMUX = (0x0A << 4) | 0x03    # IDAC2 -> AINCOM, IDAC1 -> AIN3
RTD_IDACMAG = (0x03 << 4) | 0x03    # IDAC2 = IDAC1 = 250 uA
RTD_INPMUX = (0x07 << 4) | 0x06     # AINP = AIN7, AINN = AIN6
RTD_REFMUX = (0x03 << 3) | 0x03     # REFP = AIN4, REFN = AIN5
