import json
import logging

import pytest

from keyfixtures.utils import CleanupManager, configure_logging, get_logger, remove_file
from keyfixtures.utils.logging import JsonFormatter


def test_cleanup_runs_in_lifo_order_on_error() -> None:
    order = []
    with pytest.raises(RuntimeError):
        with CleanupManager() as cleanup:
            cleanup.register(lambda: order.append("first"))
            cleanup.register(lambda: order.append("second"))
            raise RuntimeError("boom")
    assert order == ["second", "first"]


def test_cleanup_skipped_on_success(tmp_path) -> None:
    target = tmp_path / "keymap.tmp"
    target.write_text("partial")
    with CleanupManager() as cleanup:
        cleanup.register(remove_file(str(target)))
    assert target.exists()


def test_cleanup_continues_after_failing_callback(tmp_path) -> None:
    target = tmp_path / "keymap.tmp"
    target.write_text("partial")

    def busy() -> None:
        raise OSError("busy")

    cleanup = CleanupManager()
    cleanup.register(remove_file(str(target)))
    cleanup.register(busy)
    cleanup.run()
    assert not target.exists()


def test_json_formatter_emits_json() -> None:
    record = logging.LogRecord("keyfixtures", logging.INFO, __file__, 1, "wrote %s", ("keymap.go",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "wrote keymap.go"
    assert payload["level"] == "INFO"


def test_configure_logging_honours_env_level(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    log_file = tmp_path / "keyfixtures.log"
    configure_logging(log_file=str(log_file))
    get_logger("keyfixtures.test").debug("visible")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert logging.getLogger().level == logging.DEBUG
    assert "visible" in log_file.read_text()
