import json
import logging

from ldes_snapshot.logging import CustomJsonFormatter, configure_logging, setup_logging
from ldes_snapshot.settings import SnapshotSettings


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="ldes_snapshot.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="member %s skipped",
        args=("ex:v1",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_renders_message_and_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(error_code="MEMBER_002")))
    assert payload["message"] == "member ex:v1 skipped"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "ldes_snapshot.test"
    assert payload["error_code"] == "MEMBER_002"
    assert "trace_id" not in payload


def test_json_formatter_skips_none_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(stream_id=None)))
    assert "stream_id" not in payload


def test_setup_logging_configures_package_logger():
    setup_logging(level="debug", json_output=False)
    logger = logging.getLogger("ldes_snapshot")
    try:
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
        assert len(logger.handlers) == 1
    finally:
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


def test_configure_logging_reads_settings(monkeypatch):
    monkeypatch.setenv("LDES_SNAPSHOT_LOG_LEVEL", "warning")
    monkeypatch.setenv("LDES_SNAPSHOT_LOG_JSON", "false")
    configure_logging(SnapshotSettings(_env_file=None))
    logger = logging.getLogger("ldes_snapshot")
    try:
        assert logger.level == logging.WARNING
        handler = logger.handlers[0]
        assert not isinstance(handler.formatter, CustomJsonFormatter)
    finally:
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
