from ads1263.registers import (
    ADC1_BITS,
    ADC1_FULL_SCALE,
    ADC2_BITS,
)

PT100_R0 = 100.0
PT100_ALPHA = 0.00385


# takes a given integer and splits its value into 4 seperate byte frames in a returned list
def split_integer_to_bytes(value: int) -> list[int]:
    if not (0 <= value <= 0xFFFFFFFF):
        raise ValueError("The input integer must be between 0 and 0xFFFFFFFF (inclusive).")

    return [
        (value >> 24) & 0xFF,  # Extract the most significant byte
        (value >> 16) & 0xFF,  # Extract the second byte
        (value >> 8) & 0xFF,   # Extract the third byte
        value & 0xFF           # Extract the least significant byte
    ]


# assembles big-endian bytes read off the bus into one integer
def bytes_to_integer(data: list[int]) -> int:
    value = 0
    for byte in data:
        value = (value << 8) | (byte & 0xFF)
    return value


def raw_to_voltage(raw: int, reference: float, bits: int) -> float:
    """
    Map a raw code to volts using the ADS1263 sign convention.

    The MSB of the nominal width marks a negative reading. Negative codes are
    scaled by 2**(bits-1), positive codes by 2**(bits-1) - 1, so the mapping
    is deliberately not plain two's complement.
    """
    half_scale = 1 << (bits - 1)
    full_scale = half_scale - 1

    if (raw >> (bits - 1)) & 0x1:
        return -(reference * 2.0 - (raw / half_scale) * reference)
    return (raw / full_scale) * reference


def raw_to_voltage_adc1(raw: int, reference: float) -> float:
    return raw_to_voltage(raw, reference, ADC1_BITS)


def raw_to_voltage_adc2(raw: int, reference: float) -> float:
    return raw_to_voltage(raw, reference, ADC2_BITS)


# 2x accounts for both IDACs driving the reference resistor
def rtd_to_resistance(raw: int, r_ref: float) -> float:
    return (raw / ADC1_FULL_SCALE) * 2.0 * r_ref


def pt100_to_celsius(resistance: float) -> float:
    """
    Approximate PT100 temperature in degrees Celsius.

    Linear model R = R0 * (1 + alpha * T) with alpha = 0.00385. This is an
    approximation only; it does not apply the Callendar-Van Dusen correction.
    """
    return (resistance / PT100_R0 - 1.0) / PT100_ALPHA
