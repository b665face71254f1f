import logging
from collections.abc import Iterator

import pytest
import structlog

from noisegate.logs.structlog import ModuleFilter, configure


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


def make_record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_module_filter_applies_first_matching_prefix() -> None:
    module_filter = ModuleFilter({"noisegate": "DEBUG", "*": "WARNING"})

    assert module_filter.filter(make_record("noisegate.matching.pattern", logging.DEBUG))
    assert not module_filter.filter(make_record("urllib3", logging.INFO))
    assert module_filter.filter(make_record("urllib3", logging.ERROR))


def test_module_filter_without_modules_allows_everything() -> None:
    assert ModuleFilter({}).filter(make_record("anything", logging.DEBUG))


def test_configure_without_log_dir_uses_console_only() -> None:
    configure(service_name="noisegate", log_level="debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    names = [type(h).__name__ for h in root.handlers]
    assert "StreamHandler" in names
    assert "TimedRotatingFileHandler" not in names


def test_configure_with_log_dir_writes_file(tmp_path) -> None:
    configure(service_name="noisegate", log_level="INFO", log_dir=str(tmp_path / "logs"))

    assert (tmp_path / "logs").is_dir()
    assert any(type(h).__name__ == "TimedRotatingFileHandler" for h in logging.getLogger().handlers)
