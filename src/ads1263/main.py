import argparse
import signal
import sys
import threading
import time

from ads1263 import config
from ads1263.ads1263 import ADS1263
from ads1263.logger import log_to_file, setup_logging
from ads1263.registers import Adc2DataRate, DataRate, Delay, Gain, InputMode
from ads1263.utils import (
    pt100_to_celsius,
    raw_to_voltage_adc1,
    raw_to_voltage_adc2,
    rtd_to_resistance,
)

DEFAULT_CHANNELS = [0, 1, 2, 3, 4]
CURSOR_UP = "\x1b[1A"


def print_voltages(channels, voltages):
    for channel, voltage in zip(channels, voltages):
        # Align positive values with the minus sign of negative ones
        pad = "" if voltage < 0 else " "
        print(f"IN{channel} is {pad}{voltage:.6f} V")
    print(CURSOR_UP * len(voltages), end="")
    sys.stdout.flush()


def test_adc1(adc, channels, reference, stop_event):
    print("TEST_ADC1")
    # The faster the rate, the worse the stability
    adc.init_adc1(DataRate.SPS_400)

    while not stop_event.is_set():
        values = adc.get_all(channels, stop_event)
        print_voltages(channels, [raw_to_voltage_adc1(raw, reference) for raw in values])


def test_adc1_rate(adc, iterations):
    print("TEST_ADC1_RATE")
    adc.init_adc1(DataRate.SPS_400)

    start_time = time.time()
    for _ in range(iterations):
        adc.get_channel_value(0)
    time_ms = (time.time() - start_time) * 1000.0

    print(f"{time_ms:.2f} ms")
    print(f"Single channel: {iterations / time_ms:.2f} kHz")


def test_adc2(adc, reference, stop_event):
    print("TEST_ADC2")
    adc.init_adc2(Adc2DataRate.SPS_100)

    while not stop_event.is_set():
        values = adc.get_all_adc2(stop_event)
        print_voltages(range(len(values)), [raw_to_voltage_adc2(raw, reference) for raw in values])


def test_rtd(adc):
    print("TEST_RTD")
    adc.init_adc1(DataRate.SPS_20)

    raw = adc.read_rtd(Delay.DELAY_8_8MS, Gain.GAIN_1, DataRate.SPS_20)
    resistance = rtd_to_resistance(raw, config.RTD_REFERENCE_RESISTOR)
    print(f"Resistance: {resistance:.2f} Ohm")
    print(f"Temperature: {pt100_to_celsius(resistance):.2f} C (linear PT100 approximation)")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="ADS1263 demo readings.")
    parser.add_argument("test", choices=["adc1", "adc1-rate", "adc2", "rtd"], help="Test to run")
    parser.add_argument("-c", "--channels", type=int, nargs="+", default=DEFAULT_CHANNELS,
                        help="ADC1 channels to scan")
    parser.add_argument("-r", "--reference", type=float, default=config.REFERENCE_VOLTAGE,
                        help="Reference voltage in volts")
    parser.add_argument("-n", "--iterations", type=int, default=10000,
                        help="Reads for the adc1-rate test")
    parser.add_argument("--differential", action="store_true", help="Use differential input pairs")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-l", "--log-file", type=str, default=None, help="Write log records to a file")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    if args.log_file:
        log_to_file(args.log_file)

    stop_event = threading.Event()

    def handle_sigint(signum, frame):
        print("\r\nReceived Ctrl+C, exiting...")
        stop_event.set()

    signal.signal(signal.SIGINT, handle_sigint)

    # Hardware modules are only importable on the Pi
    from ads1263.spi_transport import SpiTransport

    mode = InputMode.DIFFERENTIAL if args.differential else InputMode.SINGLE_ENDED
    with ADS1263(SpiTransport(), mode=mode) as adc:
        if args.test == "adc1":
            test_adc1(adc, args.channels, args.reference, stop_event)
        elif args.test == "adc1-rate":
            test_adc1_rate(adc, args.iterations)
        elif args.test == "adc2":
            test_adc2(adc, args.reference, stop_event)
        elif args.test == "rtd":
            test_rtd(adc)

    print("\r\nEND")


if __name__ == "__main__":
    main()
