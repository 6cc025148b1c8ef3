import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(debug=False):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("ads1263")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    return root


def log_to_file(filename):
    """Send driver log records to `filename` instead of the console."""
    handler = logging.FileHandler(filename, mode="w")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("ads1263")
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.addHandler(handler)
    return handler
