"""Tests for the gitkit.logging module."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from gitkit.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestConfigureLogging:
    def test_configure_logging_custom_level(self) -> None:
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        with patch.dict(os.environ, {"GITKIT_LOG_LEVEL": "ERROR"}):
            configure_logging()

        assert logging.getLogger().level == logging.ERROR

    def test_unknown_level_falls_back_to_info(self) -> None:
        with patch.dict(os.environ, {"GITKIT_LOG_LEVEL": "chatty"}):
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_repeated_configuration_keeps_one_handler(self) -> None:
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1


class TestLogOutput:
    def test_json_output_goes_to_stderr(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(force_json=True, level=logging.INFO)

        get_logger("gitkit.test").info("git_diff_completed", files_changed=2)

        captured = capsys.readouterr()
        assert captured.out == ""
        record = json.loads(captured.err.strip().splitlines()[-1])
        assert record["event"] == "git_diff_completed"
        assert record["files_changed"] == 2
        assert record["level"] == "info"

    def test_json_via_env(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict(os.environ, {"GITKIT_LOG_FORMAT": "json"}):
            configure_logging(level=logging.INFO)

        get_logger("gitkit.test").info("git_command_started")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "git_command_started"

    def test_below_level_is_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.WARNING)

        get_logger("gitkit.test").debug("git_command_started")

        assert capsys.readouterr().err == ""

    def test_bound_logger_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(force_json=True, level=logging.INFO)

        log = get_logger("gitkit.test").bind(tenant_id="acme")
        log.info("git_command_completed")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["tenant_id"] == "acme"


class TestContextBinding:
    def test_bind_context(self) -> None:
        clear_context()

        bind_context(request_id="req-7", tenant_id="acme")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx["request_id"] == "req-7"
        assert ctx["tenant_id"] == "acme"

    def test_clear_context(self) -> None:
        bind_context(request_id="req-7")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_context_propagation_in_logs(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(force_json=True, level=logging.INFO)
        clear_context()
        bind_context(request_id="req-9")

        get_logger("gitkit.test").info("git_operation_started")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["request_id"] == "req-9"
