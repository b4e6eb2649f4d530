from __future__ import annotations

import functools
import json
import logging
import os
import sys
from collections.abc import Callable, Mapping
from unittest.mock import MagicMock, patch

import pytest
from freezegun import freeze_time

from alexandria.metadata.service.logging.configuration import (
    LoggingConfiguration,
    LogLevel,
)
from alexandria.metadata.service.logging.log import (
    JSONFormatter,
    create_stream_handler,
    setup_logging,
    setup_logging_from_configuration,
)


class TestJSONFormatter:
    LogRecordCallable = Callable[..., logging.LogRecord]

    @pytest.fixture()
    def log_record(self) -> LogRecordCallable:
        return functools.partial(
            logging.LogRecord,
            name="some logger",
            level=logging.DEBUG,
            pathname="pathname",
            lineno=104,
            msg="A message",
            args={},
            exc_info=None,
            func=None,
        )

    @freeze_time("1990-05-05")
    def test_format(self, log_record: LogRecordCallable):
        formatter = JSONFormatter()
        record = log_record()
        data = json.loads(formatter.format(record))
        assert "host" in data
        assert data["name"] == "some logger"
        assert data["timestamp"] == "1990-05-05T00:00:00+00:00"
        assert data["level"] == "DEBUG"
        assert data["message"] == "A message"
        assert data["filename"] == "pathname"
        assert "traceback" not in data
        assert data["process"] == os.getpid()

        # If the record has no process, the process field is not included in the log.
        record = log_record()
        record.process = None
        data = json.loads(formatter.format(record))
        assert "process" not in data

    def test_format_thread(self, log_record: LogRecordCallable) -> None:
        formatter = JSONFormatter()
        record = log_record()

        # Since we are in the main thread, the thread field is not included in the log.
        data = json.loads(formatter.format(record))
        assert "thread" not in data

        record.thread = 12
        data = json.loads(formatter.format(record))
        assert data["thread"] == 12

    def test_format_exception(self, log_record: LogRecordCallable) -> None:
        formatter = JSONFormatter()

        try:
            raise ValueError("fake exception")
        except ValueError:
            exc_info = sys.exc_info()

        record = log_record(exc_info=exc_info)
        data = json.loads(formatter.format(record))
        assert "ValueError: fake exception" in data["traceback"]

    def test_format_stack_info(self, log_record: LogRecordCallable) -> None:
        formatter = JSONFormatter()
        record = log_record(sinfo="some info")
        data = json.loads(formatter.format(record))
        assert data["stack"] == "some info"

    @pytest.mark.parametrize(
        "msg, args, expected",
        [
            ("An important snowman: %s", ("☃",), "An important snowman: ☃"),
            ("An important snowman: %s", ("☃".encode(),), "An important snowman: ☃"),
            (b"An important snowman: %s", ("☃",), "An important snowman: ☃"),
            (
                "abc %(test1)s %(test2)s",
                {"test1": "🚀".encode(), "test2": "🪄"},
                "abc 🚀 🪄",
            ),
            (
                "Foo Bar Baz",
                ("a", "b", "c"),
                "Log message could not be formatted. Exception: TypeError('not all arguments "
                "converted during string formatting'). Original message: message='Foo Bar Baz'"
                " args=('a', 'b', 'c')",
            ),
        ],
    )
    def test_format_args(
        self,
        msg: str | bytes,
        args: tuple[str | bytes, ...] | Mapping[str | bytes, str | bytes],
        expected: str,
        log_record: LogRecordCallable,
    ) -> None:
        formatter = JSONFormatter()
        record = log_record(msg=msg, args=args)
        data = json.loads(formatter.format(record))
        assert data["message"] == expected

    def test_format_extra(self, log_record: LogRecordCallable) -> None:
        formatter = JSONFormatter()
        record = log_record()
        record.alexandria_line_number = 12
        record.alexandria_unserializable = object()
        record.alexandria_missing = None
        record.line_number = 13
        # Prefixed attributes can't replace the standard fields.
        record.alexandria_level = "nope"

        data = json.loads(formatter.format(record))
        assert data["line_number"] == 12
        assert "unserializable" not in data
        assert "missing" not in data
        assert data["level"] == "DEBUG"


def test_create_stream_handler() -> None:
    mock_formatter = MagicMock()

    handler = create_stream_handler(formatter=mock_formatter)

    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter == mock_formatter
    assert handler.level == logging.NOTSET


def test_setup_logging() -> None:
    mock_stream_handler = MagicMock()

    # We patch logging so that we don't actually modify the global logging
    # configuration.
    with patch("alexandria.metadata.service.logging.log.logging") as mock_logging:
        setup_logging(
            level=LogLevel.debug,
            verbose_level=LogLevel.error,
            stream=mock_stream_handler,
        )

    mock_logging.basicConfig.assert_called_once_with(
        force=True, level="DEBUG", handlers=[mock_stream_handler]
    )
    mock_logging.getLogger.assert_any_call("dotenv")
    mock_logging.getLogger.assert_any_call("pydantic_settings")
    mock_logging.getLogger.return_value.setLevel.assert_called_with("ERROR")


@pytest.mark.parametrize(
    "json_format, formatter_cls",
    [
        pytest.param(True, JSONFormatter, id="json"),
        pytest.param(False, logging.Formatter, id="text"),
    ],
)
def test_setup_logging_from_configuration(
    json_format: bool, formatter_cls: type[logging.Formatter]
) -> None:
    config = LoggingConfiguration.model_construct(
        level=LogLevel.warning,
        verbose_level=LogLevel.warning,
        json_format=json_format,
    )
    with patch(
        "alexandria.metadata.service.logging.log.setup_logging"
    ) as mock_setup_logging:
        setup_logging_from_configuration(config)

    [level, verbose_level, handler] = mock_setup_logging.call_args.args
    assert level == LogLevel.warning
    assert verbose_level == LogLevel.warning
    assert type(handler.formatter) is formatter_cls
