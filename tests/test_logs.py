import logging
import sys

from typeworks.app.logs import LOG_FORMAT, setup_logging


def test_setup_logging_writes_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    log_file = tmp_path / "typeworks.log"
    setup_logging(logging.DEBUG, str(log_file))
    root = logging.getLogger()
    try:
        logging.getLogger("typeworks.test").info("hello")
        for h in root.handlers:
            h.flush()
        text = log_file.read_text(encoding="utf-8")
        assert "| INFO | typeworks.test | hello" in text
        assert root.level == logging.DEBUG
        assert sys.excepthook is not sys.__excepthook__
    finally:
        for h in root.handlers[:]:
            h.close()
            root.removeHandler(h)


def test_format_fields():
    assert "%(levelname)s" in LOG_FORMAT
    assert "%(name)s" in LOG_FORMAT
