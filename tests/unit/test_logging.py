from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from common.base.logging import ListerLogger, get_logger, normalize_level, setup_logging


@pytest.fixture(autouse=True)
def _reset_lister_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("lister")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger._initialized = False  # type: ignore[attr-defined]


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    logger = setup_logging("DEBUG", use_rich=False, log_dir=tmp_path / "logs", file_prefix="run")

    assert isinstance(logger, ListerLogger)
    assert logger.rich_enabled is False
    assert logger.log_file is not None
    assert logger.log_file.parent == tmp_path / "logs"
    assert logger.log_file.name.startswith("run_")

    get_logger("scanner").warning("disk almost full")
    for handler in logger.handlers:
        handler.flush()

    content = logger.log_file.read_text(encoding="utf-8")
    assert "[WARNING] lister.scanner: disk almost full" in content


def test_setup_logging_rebuilds_handlers() -> None:
    setup_logging("INFO", use_rich=True)
    logger = setup_logging("INFO", use_rich=True)

    assert logger.rich_enabled is True
    assert logger.log_file is None
    assert len(logger.handlers) == 1


def test_get_logger_returns_namespaced_child() -> None:
    child = get_logger("lister.scanner")

    assert child.name == "lister.scanner"
    assert child.parent is logging.getLogger("lister")
    assert get_logger("common.shared.report").name == "lister.common.shared.report"
    assert get_logger().name == "lister"


@pytest.mark.parametrize(
    "value, expected",
    [("debug", "DEBUG"), (" warning ", "WARNING"), (logging.ERROR, "ERROR"), ("loud", "INFO"), (None, "INFO"), (True, "INFO")],
)
def test_normalize_level(value: object, expected: str) -> None:
    assert normalize_level(value) == expected
