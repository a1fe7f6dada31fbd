"""
posprint
========

ESC/POS command encoder for thermal receipt printers.

This package provides:
    - Bit-exact ESC/POS command frames (feed, cut, fonts, styles, barcodes)
    - A stateful printer session that tracks font size and style toggles
    - Chunked raster-image transfer through the GS 8 L graphics buffer
    - Pillow-based conversion of images and rendered text to raster data
    - USB device-file and TCP transports

Basic usage:
    >>> import io
    >>> from posprint import Printer, Alignment
    >>>
    >>> sink = io.BytesIO()
    >>> printer = Printer(sink)
    >>> printer.init()
    >>> printer.set_align(Alignment.CENTER)
    >>> printer.set_emphasize(1)
    >>> printer.write_string("TOTAL 12.50\\n")
    >>> printer.feed_and_cut(feed=True)

Network printer:
    >>> from posprint import open_connection
    >>> with open_connection("network", "192.168.1.50:9100") as printer:
    ...     printer.init()
    ...     printer.write_string("Hello\\n")
    ...     printer.cut()

Logging is controlled through the POSPRINT_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING, ERROR, CRITICAL). Set POSPRINT_LOG_DIR to also write
a rotating log file.
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# VERSION METADATA
# =============================================================================

__version__ = "0.1.0"
__author__ = "posprint developers"
__description__ = "ESC/POS command encoder for thermal receipt printers"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"posprint requires Python 3.11 or newer. "
        f"Current version: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# LOGGING
# =============================================================================

_LOGGER_NAME = "posprint"


def _setup_logging() -> None:
    """
    Configure the package logger.

    - stderr handler for WARNING and above
    - rotating file handler for every level, only when POSPRINT_LOG_DIR is set
    - format: [timestamp] LEVEL [module.function:line] message

    The level comes from POSPRINT_LOG_LEVEL (default INFO). Calling this
    again after handlers are attached has no effect.
    """
    log_level_str = os.environ.get("POSPRINT_LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    root_logger = logging.getLogger(_LOGGER_NAME)
    if root_logger.handlers:
        return

    root_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_dir_str = os.environ.get("POSPRINT_LOG_DIR")
    if log_dir_str:
        try:
            log_dir = Path(log_dir_str)
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / "posprint.log",
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(
                f"Could not initialize file logging in {log_dir_str}: {e}. "
                f"Logging to console only."
            )

    root_logger.propagate = False


def get_logger(module_name: str) -> logging.Logger:
    """
    Return a logger inside the ``posprint`` namespace.

    Args:
        module_name: Usually ``__name__``. Names outside the package are
            prefixed with ``posprint.``; ``__main__`` maps to ``posprint.main``.

    Returns:
        A configured ``logging.Logger``.

    Example:
        >>> logger = get_logger("receipts")
        >>> logger.name
        'posprint.receipts'
    """
    if not module_name.startswith(_LOGGER_NAME):
        if module_name == "__main__":
            full_name = f"{_LOGGER_NAME}.main"
        else:
            clean_name = module_name.lstrip(".")
            full_name = f"{_LOGGER_NAME}.{clean_name}"
    else:
        full_name = module_name

    return logging.getLogger(full_name)


# =============================================================================
# CONFIGURATION
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "encoding": "cp437",
    "font_file": None,
    "dpi": 50.0,
    "font_size": 30.0,
    "spacing": 1.5,
    "white_on_black": True,
    "image_height": 38,
    "canvas_width": 760,
    "max_width": 512,
    "threshold": 0.5,
    "raster_mode": "graphics",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load printer session settings from a JSON file merged over the defaults.

    Keys:
        - encoding: str - codec used for plain text
        - font_file: str | None - TrueType font for text rendering
        - dpi: float - rendering resolution
        - font_size: float - rendering size in points
        - spacing: float - line spacing multiplier
        - white_on_black: bool - rendered text colors
        - image_height: int - rendered text canvas height
        - canvas_width: int - rendered text canvas width
        - max_width: int - widest raster image in dots
        - threshold: float - black/white cut-off (0..1)
        - raster_mode: str - "graphics" or "bit_image"

    Args:
        config_path: JSON file. Defaults to ``posprint.json`` in the
            current directory.

    Returns:
        A dictionary that always contains every default key. A missing
        file, invalid JSON or a non-object document are logged and the
        defaults are returned.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("posprint.json")

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Configuration file must contain a JSON object, "
                    f"got {type(user_config).__name__}"
                )

            config.update(user_config)

            logger.info(f"Configuration loaded from {config_path}")
            logger.debug(f"Configuration: {config}")

        except json.JSONDecodeError as e:
            logger.warning(
                f"Could not parse {config_path}: invalid JSON "
                f"at line {e.lineno}, column {e.colno}. "
                f"Using default configuration."
            )
        except OSError as e:
            logger.warning(f"Could not read {config_path}: {e}. Using default configuration.")
        except ValueError as e:
            logger.warning(f"Invalid configuration format: {e}. Using default configuration.")
    else:
        logger.debug(f"Configuration file {config_path} not found. Using defaults.")

    return config


# =============================================================================
# PUBLIC API
# =============================================================================

# Imported after the utilities so that logging is configured first.
from .errors import (  # noqa: E402
    FontSizeError,
    IntegerRangeError,
    PrinterError,
    PrinterStateError,
    RasterError,
    ValidationError,
)
from .model.enums import (  # noqa: E402
    Alignment,
    BarcodeSymbology,
    ConnectionType,
    Font,
    Language,
    RasterMode,
)
from .model.state import PrinterState  # noqa: E402
from .config import PrinterConfig  # noqa: E402
from .escpos.integers import int_low_high  # noqa: E402
from .escpos.raster import RasterChunk, plan_chunks  # noqa: E402
from .escpos.printer import Printer, Sink  # noqa: E402
from .connection import SocketSink, open_connection  # noqa: E402
from .nodes import write_node  # noqa: E402

__all__ = [
    # Version metadata
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Utilities
    "get_logger",
    "load_config",
    # Errors
    "PrinterError",
    "ValidationError",
    "PrinterStateError",
    "FontSizeError",
    "IntegerRangeError",
    "RasterError",
    # Enumerations
    "Alignment",
    "BarcodeSymbology",
    "ConnectionType",
    "Font",
    "Language",
    "RasterMode",
    # Session
    "PrinterConfig",
    "PrinterState",
    "Printer",
    "Sink",
    "RasterChunk",
    "plan_chunks",
    "int_low_high",
    # Transport and dispatch
    "SocketSink",
    "open_connection",
    "write_node",
]

# =============================================================================
# PACKAGE INITIALIZATION
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug(f"posprint v{__version__} initialized (Python {sys.version.split()[0]})")
