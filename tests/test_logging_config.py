from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.protocol",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Discarding malformed line.",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_context_in_declared_order() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    message = formatter.format(_record(reason="unknown sensor kind", line="X,Z-1,10", sensor_id=None))

    assert message == "Discarding malformed line. | line='X,Z-1,10' reason=unknown sensor kind"


def test_formatter_without_context_returns_plain_message() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    assert formatter.format(_record()) == "WARNING Discarding malformed line."


def test_formatter_honours_custom_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s", extra_keys=["sensor_id"])

    message = formatter.format(_record(sensor_id="T-001", reason="ignored"))

    assert message == "Discarding malformed line. | sensor_id=T-001"
