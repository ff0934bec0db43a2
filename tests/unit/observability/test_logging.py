"""Unit tests for logging setup and the request logging context."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import orjson
import pytest
from loguru import logger

from recipe_share.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    setup_logging,
)


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def reset_context() -> Iterator[None]:
    clear_context()
    yield
    clear_context()
    # Sinks added under capsys point at its buffer
    logger.remove()
    logger.add(sys.__stderr__, level="WARNING")


class TestContext:
    def test_bind_accumulates(self) -> None:
        bind_context(request_id="r-1")
        bind_context(user_id="u-1")

        assert get_context() == {"request_id": "r-1", "user_id": "u-1"}

    def test_clear(self) -> None:
        bind_context(request_id="r-1")

        clear_context()

        assert get_context() == {}

    def test_returns_copy(self) -> None:
        bind_context(request_id="r-1")

        get_context()["request_id"] = "changed"

        assert get_context()["request_id"] == "r-1"


class TestJsonOutput:
    def test_lines_carry_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("INFO", "json")
        bind_context(request_id="r-42")

        get_logger("recipe_share.tests").info("Recipe submitted", recipe_id="abc")

        line = orjson.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["message"] == "Recipe submitted"
        assert line["level"] == "INFO"
        assert line["logger"] == "recipe_share.tests"
        assert line["request_id"] == "r-42"
        assert line["recipe_id"] == "abc"

    def test_level_threshold(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("WARNING", "json")

        logger.info("quiet")

        assert capsys.readouterr().out == ""

    def test_stdlib_records_intercepted(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        setup_logging("INFO", "json")

        logging.getLogger("recipe_share.stdlib").warning("from stdlib")

        line = orjson.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert line["message"] == "from stdlib"
        assert line["level"] == "WARNING"
