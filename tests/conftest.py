"""Shared pytest fixtures for lockscan tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def _route_structlog_to_stdlib():
    """Send structlog events through stdlib logging so caplog sees them.

    structlog's default logger prints to stdout, which would leak into CLI
    output under test.
    """
    structlog.reset_defaults()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_lockfile(tmp_path):
    """Write *content* to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    pkg = logging.getLogger("lockscan")
    handlers, level, pkg_level = list(root.handlers), root.level, pkg.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    pkg.setLevel(pkg_level)
