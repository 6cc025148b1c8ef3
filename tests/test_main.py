import logging

import pytest

from ads1263 import config
from ads1263.logger import log_to_file, setup_logging
from ads1263.main import DEFAULT_CHANNELS, parse_args, print_voltages


def test_parse_args_defaults():
    args = parse_args(["adc1"])
    assert args.test == "adc1"
    assert args.channels == DEFAULT_CHANNELS
    assert args.reference == config.REFERENCE_VOLTAGE
    assert not args.differential
    assert args.log_file is None


def test_parse_args_options():
    args = parse_args(["adc2", "-c", "1", "7", "-r", "2.5", "--differential", "-d"])
    assert args.channels == [1, 7]
    assert args.reference == 2.5
    assert args.differential
    assert args.debug


def test_parse_args_rejects_unknown_test():
    with pytest.raises(SystemExit):
        parse_args(["scan"])


def test_print_voltages(capsys):
    print_voltages([0, 3], [1.5, -0.25])
    out = capsys.readouterr().out
    assert "IN0 is  1.500000 V" in out
    assert "IN3 is -0.250000 V" in out


@pytest.fixture
def clean_logger():
    root = logging.getLogger("ads1263")
    saved = (list(root.handlers), root.level)
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved[0]:
        root.addHandler(handler)
    root.setLevel(saved[1])


def test_setup_logging_levels(clean_logger):
    setup_logging(debug=True)
    assert clean_logger.level == logging.DEBUG
    setup_logging()
    assert clean_logger.level == logging.INFO


def test_log_to_file(clean_logger, tmp_path):
    setup_logging()
    path = tmp_path / "driver.log"
    log_to_file(str(path))

    logging.getLogger("ads1263.ads1263").warning("ADC1 checksum error")

    assert len(clean_logger.handlers) == 1
    assert "WARNING ads1263.ads1263: ADC1 checksum error" in path.read_text()
