"""Unit tests for settings loading"""

import logging
import os
from pathlib import Path

from ral.core.config import load_settings
from ral.core.log import configure_logging


def test_defaults_with_empty_environment():
    settings = load_settings(environ={}).unwrap()
    assert settings.provider_paths == []
    assert settings.log_level == "WARNING"
    assert settings.execution.timeout_seconds == 0
    assert settings.execution.noop is False


def test_reads_environment():
    env = {
        "RAL_PROVIDER_PATH": os.pathsep.join(["/usr/share/ral", "/etc/ral/providers"]),
        "RAL_TIMEOUT": "30",
        "RAL_NOOP": "true",
        "RAL_LOG_LEVEL": "debug",
    }
    settings = load_settings(environ=env).unwrap()
    assert settings.provider_paths == [Path("/usr/share/ral"), Path("/etc/ral/providers")]
    assert settings.execution.timeout_seconds == 30
    assert settings.execution.noop is True
    assert settings.log_level == "DEBUG"


def test_overrides_win_over_environment():
    env = {"RAL_TIMEOUT": "30", "RAL_PROVIDER_PATH": "/usr/share/ral"}
    settings = load_settings(
        environ=env, timeout_seconds=5, provider_paths=["/tmp/p"], log_level=None
    ).unwrap()
    assert settings.execution.timeout_seconds == 5
    assert settings.provider_paths == [Path("/tmp/p")]
    assert settings.log_level == "WARNING"


def test_invalid_values_are_errors():
    result = load_settings(environ={"RAL_TIMEOUT": "-1"})
    assert result.is_err()
    assert "timeout_seconds" in result.err().detail

    result = load_settings(environ={"RAL_LOG_LEVEL": "chatty"})
    assert result.is_err()
    assert "log_level" in result.err().detail


def test_configure_logging_sets_level():
    configure_logging("error")
    ral_logger = logging.getLogger("ral")
    assert ral_logger.level == logging.ERROR
    assert len(ral_logger.handlers) == 1
    configure_logging("warning")
    assert len(ral_logger.handlers) == 1
