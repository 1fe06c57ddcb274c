"""Testes para as funções de log no logger default."""

from __future__ import annotations

import inspect
import json

import pytest

from structured_logging import (
    LEVEL_WARN,
    attrs,
    background,
    defaults,
    new_logger,
    with_json_format,
    with_set_default,
    with_short_source,
)


@pytest.fixture
def installed(capsys):
    """Instala um logger JSON como default do processo."""
    return new_logger(with_json_format(True), with_short_source(True), with_set_default(True))


def _last_record(capsys) -> dict:
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    return json.loads(lines[-1])


class TestModuleFunctions:
    """debug/info/warn/error/log sobre o default instalado."""

    @pytest.mark.parametrize(
        ("func", "level"),
        [
            (defaults.debug, "DEBUG"),
            (defaults.info, "INFO"),
            (defaults.warn, "WARN"),
            (defaults.error, "ERROR"),
        ],
    )
    def test_levels(self, installed, capsys, func, level) -> None:
        func("hello", key="v")
        record = _last_record(capsys)
        assert record["level"] == level
        assert record["key"] == "v"

    def test_context_variant(self, installed, capsys) -> None:
        defaults.info_context(background(), "ctx")
        assert _last_record(capsys)["msg"] == "ctx"

    def test_log_and_log_attrs(self, installed, capsys) -> None:
        defaults.log(LEVEL_WARN, "generic")
        assert _last_record(capsys)["level"] == "WARN"

        defaults.log_context(background(), LEVEL_WARN, "with ctx")
        assert _last_record(capsys)["msg"] == "with ctx"

        defaults.log_attrs(LEVEL_WARN, "typed", attrs.int_("n", 1))
        assert _last_record(capsys)["n"] == 1

        defaults.log_attrs_context(None, LEVEL_WARN, "typed ctx", attrs.int_("n", 2))
        assert _last_record(capsys)["n"] == 2

    def test_source_is_caller(self, installed, capsys) -> None:
        defaults.info("here")
        expected_line = inspect.currentframe().f_lineno - 1
        record = _last_record(capsys)
        assert record["source"] == f"test_structured_logging/test_defaults.py:{expected_line}"


class TestModuleFatal:
    """fatal/fatal_context sobre o default."""

    def test_fatal(self, installed, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            defaults.fatal("bye")
        assert exc_info.value.code == 1
        assert _last_record(capsys)["level"] == "FATAL"

    def test_fatal_context_source_is_caller(self, installed, capsys) -> None:
        with pytest.raises(SystemExit):
            defaults.fatal_context(None, "bye")
        expected_line = inspect.currentframe().f_lineno - 1
        record = _last_record(capsys)
        assert record["source"] == f"test_structured_logging/test_defaults.py:{expected_line}"


class TestInitialDefault:
    """Default inicial do processo (antes de qualquer instalação)."""

    def test_writes_text_to_stderr(self, capsys) -> None:
        from structured_logging.logger import _fallback_logger

        fallback = _fallback_logger()
        fallback.info("early")
        fallback.debug("below info")
        captured = capsys.readouterr()
        assert "level=INFO msg=early" in captured.err
        assert "below info" not in captured.err
        assert captured.out == ""

    def test_fatal_is_labelled(self, capsys) -> None:
        from structured_logging.logger import _fallback_logger

        fallback = _fallback_logger()
        with pytest.raises(SystemExit):
            fallback.fatal("bye")
        err = capsys.readouterr().err
        assert "level=FATAL msg=bye" in err
        assert "ERROR+10" not in err
