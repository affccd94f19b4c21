"""Tests for logging setup."""

import logging
import logging.handlers

import pytest
from wind import logging_config
from wind.config import load_config
from wind.logging_config import KEY_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    """setup_logging reconfigures global loggers; put them back afterwards."""
    saved = [(lg, list(lg.handlers), lg.level, lg.propagate, lg.disabled)
             for lg in (logging_config.logger, KEY_LOGGER)]
    yield
    for lg, handlers, level, propagate, disabled in saved:
        for handler in lg.handlers:
            if handler not in handlers:
                handler.close()
        lg.handlers = handlers
        lg.setLevel(level)
        lg.propagate = propagate
        lg.disabled = disabled


def file_handlers(lg):
    return [h for h in lg.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]


def test_file_handler_in_directory(tmp_path, monkeypatch):
    monkeypatch.delenv("WIND_KEYTRACE", raising=False)
    setup_logging({}, directory=tmp_path)

    handlers = file_handlers(logging_config.logger)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(tmp_path / "wind.log")
    assert handlers[0].level == logging.INFO
    assert logging_config.logger.propagate is False
    assert (tmp_path / "wind.log").exists()


def test_file_level_from_config(tmp_path):
    setup_logging({"logging": {"file_level": "debug"}}, directory=tmp_path)
    assert file_handlers(logging_config.logger)[0].level == logging.DEBUG


def test_calling_twice_does_not_duplicate(tmp_path):
    setup_logging({}, directory=tmp_path)
    setup_logging({}, directory=tmp_path)
    assert len(logging_config.logger.handlers) == 1


def test_keytrace_disabled_by_default(tmp_path, monkeypatch):
    monkeypatch.delenv("WIND_KEYTRACE", raising=False)
    setup_logging({}, directory=tmp_path)
    assert KEY_LOGGER.disabled is True
    assert not (tmp_path / "keytrace.log").exists()


def test_keytrace_from_config(tmp_path, monkeypatch):
    monkeypatch.delenv("WIND_KEYTRACE", raising=False)
    setup_logging({"logging": {"keytrace": True}}, directory=tmp_path)

    assert KEY_LOGGER.disabled is False
    assert file_handlers(KEY_LOGGER)[0].baseFilename == str(tmp_path / "keytrace.log")


def test_keytrace_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("WIND_KEYTRACE", "1")
    setup_logging({}, directory=tmp_path)

    KEY_LOGGER.debug("regular 'a' in normal mode")
    for handler in KEY_LOGGER.handlers:
        handler.flush()

    assert "regular 'a' in normal mode" in (tmp_path / "keytrace.log").read_text()


def test_unwritable_directory_falls_back_to_temp(tmp_path, monkeypatch, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setattr(logging_config.tempfile, "gettempdir", lambda: str(tmp_path))

    handler = logging_config._rotating_handler(blocker / "logs", "test.log")
    try:
        assert handler.baseFilename == str(tmp_path / "wind-test.log")
    finally:
        handler.close()
    assert "Cannot log to" in capsys.readouterr().err


def test_mistyped_logging_section_falls_back(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text('{"logging": "verbose"}')

    setup_logging(load_config(config_file), directory=tmp_path / "logs")

    assert file_handlers(logging_config.logger)[0].level == logging.INFO
    assert (tmp_path / "logs" / "wind.log").exists()
