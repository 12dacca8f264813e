"""Unit tests for log context fields."""

from __future__ import annotations

import asyncio
import logging

from msak.logging import install_log_context, log_context


class _Capture(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _capture_logger(name: str) -> tuple[logging.Logger, _Capture]:
    install_log_context()
    logger = logging.getLogger(name)
    handler = _Capture()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    return logger, handler


def test_records_carry_phase_and_stream_fields() -> None:
    logger, handler = _capture_logger("msak.tests.fields")
    with log_context(phase="upload", stream_id=3):
        logger.info("inside")
    logger.info("outside")
    inside, outside = handler.records
    assert (inside.phase, inside.stream_id) == ("upload", "3")
    assert (outside.phase, outside.stream_id) == ("-", "-")


def test_each_task_keeps_its_own_stream_id() -> None:
    logger, handler = _capture_logger("msak.tests.tasks")

    async def stream(stream_id: int) -> None:
        with log_context(stream_id=stream_id):
            await asyncio.sleep(0)
            logger.info("tick")

    async def _run() -> None:
        with log_context(phase="download"):
            await asyncio.gather(*(stream(i) for i in range(3)))

    asyncio.run(_run())
    assert sorted(record.stream_id for record in handler.records) == ["0", "1", "2"]
    assert {record.phase for record in handler.records} == {"download"}
