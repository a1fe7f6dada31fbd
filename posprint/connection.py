"""
Transports: USB device files and raw TCP (port 9100) printers.

Both produce a Printer whose sink writes straight to the device; there is
no buffering or retry at this layer. Failures (missing device, refused
connection, timeout) surface as the OSError the operating system raised.
"""

import logging
import socket
from typing import Final, Optional, Tuple, Union

from .config import PrinterConfig
from .escpos.printer import Printer
from .model.enums import ConnectionType

__all__ = [
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT",
    "SocketSink",
    "parse_address",
    "open_connection",
]

logger: Final = logging.getLogger(__name__)

DEFAULT_PORT: Final[int] = 9100
DEFAULT_TIMEOUT: Final[float] = 10.0


class SocketSink:
    """Write-only byte sink over a connected socket."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    def write(self, data: bytes) -> int:
        self._sock.sendall(data)
        return len(data)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        try:
            self._sock.shutdown(socket.SHUT_WR)
        except OSError:
            # Peer may already have closed the connection.
            pass
        self._sock.close()


def parse_address(target: str) -> Tuple[str, int]:
    """
    Split ``host[:port]``; the port defaults to 9100.

    Raises:
        ValueError: If the port is not an integer.
    """
    host, sep, port = target.rpartition(":")
    if not sep:
        return target, DEFAULT_PORT
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host, int(port)
    except ValueError as e:
        raise ValueError(f"Invalid port in printer address {target!r}") from e


def open_connection(
    kind: Union[ConnectionType, str],
    target: str,
    config: Optional[PrinterConfig] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Printer:
    """
    Open a printer over USB or the network.

    Args:
        kind: ``"usb"`` (device file such as /dev/usb/lp0) or ``"network"``.
        target: Device path, or ``host[:port]`` for network printers.
        config: Session settings for the returned Printer.
        timeout: TCP connect timeout in seconds.

    Returns:
        A Printer writing to the opened device. Use it as a context manager
        or call ``close()`` when done.

    Raises:
        ValueError: If ``kind`` is not a known connection type.
        OSError: If the device cannot be opened or reached.
    """
    try:
        connection_type = ConnectionType(kind)
    except ValueError as e:
        raise ValueError(f"Unknown connection type: {kind!r}") from e

    if connection_type is ConnectionType.USB:
        sink = open(target, "wb", buffering=0)
        logger.info("Opened USB printer %s", target)
        return Printer(sink, config=config)

    host, port = parse_address(target)
    sock = socket.create_connection((host, port), timeout=timeout)
    logger.info("Connected to network printer %s:%d", host, port)
    return Printer(SocketSink(sock), config=config)
