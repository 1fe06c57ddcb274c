"""Testes para níveis e parse_level."""

from __future__ import annotations

import logging

import pytest

from structured_logging.errors import InvalidLevelError, StructuredLoggingError
from structured_logging.levels import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_FATAL,
    LEVEL_INFO,
    LEVEL_WARN,
    Level,
    parse_level,
)


class TestLevel:
    """Valores e nomes dos níveis."""

    def test_native_levels_match_stdlib(self) -> None:
        assert LEVEL_DEBUG == logging.DEBUG
        assert LEVEL_INFO == logging.INFO
        assert LEVEL_WARN == logging.WARNING
        assert LEVEL_ERROR == logging.ERROR

    def test_fatal_is_above_native_maximum(self) -> None:
        assert LEVEL_FATAL > LEVEL_ERROR

    @pytest.mark.parametrize(
        ("level", "text"),
        [
            (LEVEL_DEBUG, "DEBUG"),
            (LEVEL_INFO, "INFO"),
            (LEVEL_WARN, "WARN"),
            (LEVEL_ERROR, "ERROR"),
            (Level(22), "INFO+2"),
            (Level(5), "DEBUG-5"),
        ],
    )
    def test_str(self, level: Level, text: str) -> None:
        assert str(level) == text

    def test_fatal_is_unknown_to_native_names(self) -> None:
        assert str(LEVEL_FATAL) == "ERROR+10"


class TestParseLevel:
    """Testes para parse_level."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("debug", LEVEL_DEBUG),
            ("INFO", LEVEL_INFO),
            ("warn", LEVEL_WARN),
            ("WARNING", LEVEL_WARN),
            ("Error", LEVEL_ERROR),
            ("fatal", LEVEL_FATAL),
            ("INFO+2", Level(22)),
            ("ERROR-1", Level(39)),
            (15, Level(15)),
        ],
    )
    def test_valid(self, text, expected) -> None:
        assert parse_level(text) == expected

    @pytest.mark.parametrize("text", ["INVALID", "INFO+x", ""])
    def test_invalid_raises(self, text: str) -> None:
        with pytest.raises(InvalidLevelError, match="Nível de log inválido"):
            parse_level(text)

    def test_error_hierarchy(self) -> None:
        assert issubclass(InvalidLevelError, StructuredLoggingError)
        assert issubclass(InvalidLevelError, ValueError)
