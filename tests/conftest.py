import logging

import pytest

from iptally.utils.logging import ROOT_LOGGER, set_verbosity

SAMPLE_LOG = (
    "203.0.113.5 2024-01-01 10:00:00\n"
    "noise line\n"
    "203.0.113.5 2024-01-01 10:05:00\n"
    "198.51.100.2 2024-01-01 11:00:00"
)

ENV_VARS = ("LOG_FILE_PATH", "OUTPUT_FILE_PATH", "ADDRESS_START", "ADDRESS_MASK")


@pytest.fixture
def sample_log(tmp_path):
    """Access log with two hits from 203.0.113.5, one from 198.51.100.2 and a noise line."""
    path = tmp_path / "access.log"
    path.write_text(SAMPLE_LOG)
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Make sure the process environment does not leak parameters into a test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class _RecordCollector(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.NOTSET)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def emitted_logs():
    """Records the package logger lets through at its configured level."""
    set_verbosity(False)
    collector = _RecordCollector()
    logger = logging.getLogger(ROOT_LOGGER)
    logger.addHandler(collector)
    yield collector.records
    logger.removeHandler(collector)
