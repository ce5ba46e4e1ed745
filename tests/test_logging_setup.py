import io
import logging

import pytest

from tasktrack.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_filters_third_party_below_error(restore_root_logger):
    buf = io.StringIO()
    setup_logging(logging.DEBUG, stream=buf)

    logging.getLogger("tasktrack.store").debug("saved tasks")
    logging.getLogger("urllib3").warning("noisy library")
    logging.getLogger("urllib3").error("library failure")

    out = buf.getvalue()
    assert "DEBUG tasktrack.store: saved tasks" in out
    assert "noisy library" not in out
    assert "library failure" in out


def test_replaces_existing_handlers(restore_root_logger):
    root = restore_root_logger
    first, second = io.StringIO(), io.StringIO()
    setup_logging(logging.INFO, stream=first)
    setup_logging(logging.INFO, stream=second)

    assert len(root.handlers) == 1
    logging.getLogger("tasktrack").info("hello")
    assert first.getvalue() == ""
    assert "hello" in second.getvalue()
