from __future__ import annotations

import logging
from typing import List

from sources import serial_port
from sources.serial_port import SerialByteSource


class FakeSerial:
    def __init__(self, **kwargs) -> None:
        self.kwargs = kwargs
        self.pending: List[bytes] = [b"T", b""]
        self.is_open = True

    def read(self, size: int) -> bytes:
        return self.pending.pop(0) if self.pending else b""

    def close(self) -> None:
        self.is_open = False


def test_serial_source_reads_bytes_and_logs_lifecycle(monkeypatch, caplog) -> None:
    monkeypatch.setattr(serial_port.serial, "Serial", FakeSerial)
    caplog.set_level(logging.INFO, logger="sources.serial_port")

    with SerialByteSource("/dev/ttyS9", 9600) as source:
        assert source._serial.kwargs["timeout"] == 0
        assert source.read_byte() == ord("T")
        assert source.read_byte() is None

    messages = [record.getMessage() for record in caplog.records]
    assert messages == [
        "Serial port /dev/ttyS9 opened at 9600 baud",
        "Serial port /dev/ttyS9 closed",
    ]
    assert caplog.records[0].args == ("/dev/ttyS9", 9600)


def test_serial_source_close_is_idempotent(monkeypatch, caplog) -> None:
    monkeypatch.setattr(serial_port.serial, "Serial", FakeSerial)
    caplog.set_level(logging.INFO, logger="sources.serial_port")

    source = SerialByteSource("/dev/ttyS9")
    source.close()
    source.close()

    closed = [r for r in caplog.records if r.getMessage().endswith("closed")]
    assert len(closed) == 1
