from __future__ import annotations

import logging
from typing import Optional

import serial  # pip install pyserial

logger = logging.getLogger(__name__)


class SerialByteSource:
    """Reads the sensor gateway's serial port one byte at a time without blocking.

    Line settings are 8 data bits, no parity and one stop bit, which is what
    the gateway firmware emits.
    """

    def __init__(self, port: str, baudrate: int = 115200) -> None:
        self.port = port
        self.baudrate = baudrate
        self._serial = serial.Serial(
            port=port,
            baudrate=baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            timeout=0,
        )
        logger.info("Serial port %s opened at %d baud", port, baudrate)

    def read_byte(self) -> Optional[int]:
        data = self._serial.read(1)
        if not data:
            return None
        return data[0]

    def close(self) -> None:
        if self._serial.is_open:
            self._serial.close()
            logger.info("Serial port %s closed", self.port)

    def __enter__(self) -> "SerialByteSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
