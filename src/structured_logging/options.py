"""Configuração do logger e funções de opção.

Cada opção é uma função que muta um `Options` recém-criado com os
defaults. As opções rodam na ordem recebida; em conflito, a última vence.

Uso:
    from structured_logging import new_logger, with_json_format, with_short_source

    logger = new_logger(
        with_json_format(True),
        with_short_source(True),
        with_replace_default_key_name(TIME_KEY, "timestamp"),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from structured_logging import rewrite
from structured_logging.attrs import Attr
from structured_logging.levels import (
    LEVEL_DEBUG,
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    Level,
)

DEFAULT_LOG_LEVEL = LEVEL_DEBUG
DEFAULT_ADD_SOURCE = False
DEFAULT_ADD_SHORT_SOURCE = False
DEFAULT_JSON_FORMAT = False
DEFAULT_SET_DEFAULT = False

# Renomeação identidade para as quatro chaves reservadas
DEFAULT_REPLACE_ATTRS: dict[str, str] = {
    TIME_KEY: TIME_KEY,
    SOURCE_KEY: SOURCE_KEY,
    MESSAGE_KEY: MESSAGE_KEY,
    LEVEL_KEY: LEVEL_KEY,
}


def _default_replace_attrs() -> dict[str, str]:
    return dict(DEFAULT_REPLACE_ATTRS)


@dataclass
class Options:
    """Configuração de construção de um logger.

    Attributes:
        log_level: Nível mínimo emitido
        add_source: Inclui o call site em cada registro
        add_short_source: Inclui o call site encurtado (implica add_source)
        json_format: JSON em vez de texto key=value
        set_default: Instala o logger como default do processo
        replace_attrs: Chave reservada -> nome exibido
    """

    log_level: Level = DEFAULT_LOG_LEVEL
    add_source: bool = DEFAULT_ADD_SOURCE
    add_short_source: bool = DEFAULT_ADD_SHORT_SOURCE
    json_format: bool = DEFAULT_JSON_FORMAT
    set_default: bool = DEFAULT_SET_DEFAULT
    replace_attrs: dict[str, str] = field(default_factory=_default_replace_attrs)

    @property
    def capture_source(self) -> bool:
        """Short source implica captura do call site."""
        return self.add_source or self.add_short_source

    def replace_attr(self, groups: Sequence[str], attr: Attr) -> Attr:
        return rewrite.replace_attr(self, groups, attr)


Option = Callable[[Options], None]


def build_options(*opts: Option) -> Options:
    """Aplica as opções, em ordem, sobre os defaults."""
    config = Options()
    for opt in opts:
        opt(config)
    return config


def with_log_level(level: Level | int) -> Option:
    """Define o nível mínimo de log."""

    def _apply(o: Options) -> None:
        o.log_level = Level(level)

    return _apply


def with_source(source: bool) -> Option:
    def _apply(o: Options) -> None:
        o.add_source = source

    return _apply


def with_short_source(short_source: bool) -> Option:
    def _apply(o: Options) -> None:
        o.add_short_source = short_source

    return _apply


def with_json_format(json_format: bool) -> Option:
    def _apply(o: Options) -> None:
        o.json_format = json_format

    return _apply


def with_set_default(set_default: bool) -> Option:
    def _apply(o: Options) -> None:
        o.set_default = set_default

    return _apply


def with_replace_default_key_name(key_name: str, replace_key_name: str) -> Option:
    """Renomeia uma chave reservada na saída.

    Chaves fora das quatro reservadas são ignoradas silenciosamente: a
    opção nunca insere novas entradas na tabela.

    Args:
        key_name: Chave reservada original (TIME_KEY, SOURCE_KEY, ...).
        replace_key_name: Nome a exibir.
    """

    def _apply(o: Options) -> None:
        if key_name in o.replace_attrs:
            o.replace_attrs[key_name] = replace_key_name

    return _apply
