import logging
import sys
import os
from datetime import datetime


def setup(debug: bool = False) -> None:
    """
    Setup logging configuration: console handler on stdout.
    """
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-1s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(console_handler)

    # Reduce noise from libraries
    logging.getLogger("cv2").setLevel(logging.WARNING)


def setup_file_logging(log_dir: str, debug: bool = False) -> str:
    """
    Add a daily log file under log_dir to the root logger.

    Returns:
        Path of the log file
    """
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, f"motion_outline_{datetime.now().strftime('%Y%m%d')}.log")

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(formatter)

    logging.getLogger().addHandler(file_handler)
    logging.info(f"File logging initialized: {log_file}")
    return log_file
