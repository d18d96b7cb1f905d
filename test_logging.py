"""Tests for logging setup and context propagation."""

import logging

import pytest

from vehicle_intake.utils.logging import (
    ContextFilter,
    clear_context,
    get_context,
    set_context,
    setup_logging,
    with_context,
)


@pytest.fixture(autouse=True)
def reset_context():
    clear_context()
    yield
    clear_context()


def test_context_filter_stamps_records():
    set_context(marker_group="m1")
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

    assert ContextFilter().filter(record) is True
    assert record.marker_group == "m1"
    assert record.inspection_session == "-"


def test_default_format_renders_without_context(tmp_path):
    log_file = tmp_path / "intake.log"

    setup_logging(level="INFO", log_file=str(log_file))
    logging.getLogger("vehicle_intake.test").info("sin contexto")

    assert "[-/-] sin contexto" in log_file.read_text(encoding="utf-8")

    setup_logging(level="INFO")


def test_with_context_restores_previous_context():
    set_context(inspection_session="s1")
    
    @with_context(component="editor")
    def work():
        return get_context()
    
    inside = work()
    
    assert inside == {"inspection_session": "s1", "component": "editor"}
    assert get_context() == {"inspection_session": "s1"}


@pytest.mark.asyncio
async def test_with_context_supports_coroutines():
    @with_context(component="photo_manager")
    async def work():
        return get_context()
    
    assert await work() == {"component": "photo_manager"}
    assert get_context() == {}


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "intake.log"
    
    logger = setup_logging(level="debug", log_format="%(levelname)s %(message)s", log_file=str(log_file))
    logging.getLogger("vehicle_intake.test").debug("hola")
    for handler in logger.handlers:
        handler.flush()
    
    assert logger.level == logging.DEBUG
    assert "DEBUG hola" in log_file.read_text(encoding="utf-8")
    
    setup_logging(level="INFO")
