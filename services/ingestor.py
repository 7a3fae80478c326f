"""Time-bounded ingestion loop driving the line protocol parser."""

from __future__ import annotations

import logging
import time
from typing import Callable

from services.protocol import IngestionSummary, LineProtocolParser
from sources.base import ByteSource

logger = logging.getLogger(__name__)


def run_ingestion(
    source: ByteSource,
    parser: LineProtocolParser,
    duration: float,
    poll_interval: float = 0.01,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> IngestionSummary:
    """Pull bytes from ``source`` into ``parser`` for ``duration`` seconds.

    All bytes that are immediately available are drained before sleeping
    for ``poll_interval``. The source is left open for the caller to close.
    """
    logger.info("Ingestion started for %.1fs.", duration)
    started = clock()
    while clock() - started < duration:
        byte = source.read_byte()
        if byte is None:
            sleep(poll_interval)
            continue
        parser.feed_byte(byte)

    summary = parser.summary
    logger.info(
        "Ingestion finished: %d line(s), %d accepted, %d rejected.",
        summary.lines,
        summary.accepted,
        summary.rejected,
    )
    return summary


def drain(source: ByteSource, parser: LineProtocolParser) -> IngestionSummary:
    """Feed every byte ``source`` yields until it reports nothing available."""
    while True:
        byte = source.read_byte()
        if byte is None:
            break
        parser.feed_byte(byte)
    return parser.summary
