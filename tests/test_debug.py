# ABOUTME: Tests for debug mode configuration
# ABOUTME: Validates DEBUG env var enables tagged stdout logging

import os
from importlib import reload
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def restore_modules():
    """Reload config and debug with the real environment after each test"""
    yield
    from surfscore import config, debug
    reload(config)
    reload(debug)


def test_debug_mode_disabled_by_default():
    """Debug mode should be disabled when env var not set"""
    with patch("dotenv.load_dotenv", lambda *args, **kwargs: None):
        with patch.dict(os.environ, {}, clear=True):
            from surfscore import config
            reload(config)
            assert config.Config.DEBUG is False


def test_debug_mode_enabled_when_env_true():
    """Debug mode should be enabled when DEBUG=true"""
    with patch.dict(os.environ, {"DEBUG": "true"}):
        from surfscore import config
        reload(config)
        assert config.Config.DEBUG is True


def test_debug_log_outputs_when_enabled(capsys):
    """debug_log should print a tagged line when DEBUG=true"""
    with patch.dict(os.environ, {"DEBUG": "true"}):
        from surfscore import config, debug
        reload(config)
        reload(debug)

        debug.debug_log("window found", "DETECTOR")

    assert "[DETECTOR] window found" in capsys.readouterr().out


def test_debug_log_silent_when_disabled(capsys):
    """debug_log should be silent when DEBUG=false"""
    with patch.dict(os.environ, {"DEBUG": "false"}):
        from surfscore import config, debug
        reload(config)
        reload(debug)

        debug.debug_log("test message")

    assert capsys.readouterr().out == ""
