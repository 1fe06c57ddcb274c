"""Testes para a reescrita de campos reservados."""

from __future__ import annotations

import pytest

from structured_logging import attrs
from structured_logging.attrs import Attr, Kind, Source
from structured_logging.levels import (
    LEVEL_ERROR,
    LEVEL_FATAL,
    LEVEL_INFO,
    LEVEL_KEY,
    MESSAGE_KEY,
    RESERVED_KEYS,
    SOURCE_KEY,
    TIME_KEY,
)
from structured_logging.options import (
    build_options,
    with_replace_default_key_name,
    with_short_source,
)
from structured_logging.rewrite import replace_attr, shorten_path, short_source_attr


def _source_attr(file: str = "/home/app/pkg/handlers/user.py", line: int = 42) -> Attr:
    return Attr(SOURCE_KEY, Source("handle", file, line), Kind.SOURCE)


class TestShortenPath:
    """Mantém só o diretório pai imediato e o arquivo."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/home/app/pkg/handlers/user.py", "handlers/user.py"),
            ("a/b/file.py", "b/file.py"),
            ("pkg/file.py", "pkg/file.py"),
            ("file.py", "file.py"),
            ("/file.py", "file.py"),
        ],
    )
    def test_shorten(self, path: str, expected: str) -> None:
        assert shorten_path(path) == expected

    def test_never_produces_empty_dir_segment(self) -> None:
        assert not shorten_path("/file.py").startswith("/")


class TestShortSourceAttr:
    """Testes para short_source_attr."""

    def test_source_becomes_string(self) -> None:
        got = short_source_attr(_source_attr(), "caller")
        assert got == attrs.string("caller", "handlers/user.py:42")

    def test_non_source_value_falls_back_to_rename(self) -> None:
        got = short_source_attr(attrs.string(SOURCE_KEY, "weird"), "caller")
        assert got == attrs.string("caller", "weird")


class TestReplaceAttr:
    """Regras do callback de reescrita."""

    def test_default_table_is_identity(self) -> None:
        options = build_options()
        for key in RESERVED_KEYS:
            original = attrs.string(key, "value")
            assert replace_attr(options, [], original) == original

    def test_unreserved_key_untouched(self) -> None:
        options = build_options(with_replace_default_key_name(TIME_KEY, "ts"))
        original = attrs.int_("user_id", 7)
        assert replace_attr(options, [], original) is original

    def test_plain_rename(self) -> None:
        options = build_options(with_replace_default_key_name(MESSAGE_KEY, "message"))
        got = replace_attr(options, [], attrs.string(MESSAGE_KEY, "hello"))
        assert got == attrs.string("message", "hello")

    def test_source_without_short_source_is_plain_rename(self) -> None:
        options = build_options(with_replace_default_key_name(SOURCE_KEY, "caller"))
        source = _source_attr()
        got = replace_attr(options, [], source)
        assert got == Attr("caller", source.value, Kind.SOURCE)

    def test_source_with_short_source_is_shortened(self) -> None:
        options = build_options(
            with_short_source(True),
            with_replace_default_key_name(SOURCE_KEY, "caller"),
        )
        got = replace_attr(options, [], _source_attr(line=7))
        assert got == attrs.string("caller", "handlers/user.py:7")

    def test_fatal_level_relabelled(self) -> None:
        options = build_options()
        got = replace_attr(options, [], Attr(LEVEL_KEY, LEVEL_FATAL, Kind.LEVEL))
        assert got == attrs.string(LEVEL_KEY, "FATAL")

    def test_fatal_label_under_renamed_level_key(self) -> None:
        options = build_options(with_replace_default_key_name(LEVEL_KEY, "severity"))
        got = replace_attr(options, [], Attr(LEVEL_KEY, LEVEL_FATAL, Kind.LEVEL))
        assert got == attrs.string("severity", "FATAL")

    @pytest.mark.parametrize("level", [LEVEL_INFO, LEVEL_ERROR])
    def test_non_fatal_level_only_renamed(self, level) -> None:
        options = build_options(with_replace_default_key_name(LEVEL_KEY, "severity"))
        got = replace_attr(options, [], Attr(LEVEL_KEY, level, Kind.LEVEL))
        assert got == Attr("severity", level, Kind.LEVEL)

    def test_options_method_delegates(self) -> None:
        options = build_options(with_replace_default_key_name(TIME_KEY, "timestamp"))
        got = options.replace_attr([], attrs.string(TIME_KEY, "now"))
        assert got.key == "timestamp"
