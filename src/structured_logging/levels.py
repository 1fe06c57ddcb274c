"""Níveis de severidade e chaves reservadas dos registros de log.

Os quatro níveis nativos usam os mesmos valores numéricos do módulo
`logging` da stdlib, para que o filtro de nível do handler funcione sem
conversão. FATAL é um nível sintético acima de ERROR: o handler não conhece
seu nome (renderiza `ERROR+10`) e o rótulo "FATAL" é aplicado apenas pelo
callback de reescrita de campos.

Uso:
    from structured_logging.levels import LEVEL_INFO, parse_level

    level = parse_level("warn")  # LEVEL_WARN
"""

from __future__ import annotations

import logging

from structured_logging.errors import InvalidLevelError

# Chaves reservadas, estáveis entre os formatos texto e JSON
TIME_KEY = "time"
SOURCE_KEY = "source"
MESSAGE_KEY = "msg"
LEVEL_KEY = "level"

RESERVED_KEYS = (TIME_KEY, SOURCE_KEY, MESSAGE_KEY, LEVEL_KEY)


class Level(int):
    """Severidade de um registro.

    Subclasse de `int` para comparar diretamente com níveis da stdlib.
    `str()` segue o padrão "NOME" ou "NOME+offset" relativo ao nível nativo
    imediatamente inferior.
    """

    __slots__ = ()

    def __str__(self) -> str:
        value = int(self)
        for base, name in reversed(_NATIVE_NAMES):
            if value >= base:
                return name if value == base else f"{name}+{value - base}"
        base, name = _NATIVE_NAMES[0]
        return f"{name}{value - base}"

    def __repr__(self) -> str:
        return f"Level({int(self)}, {self!s})"


LEVEL_DEBUG = Level(logging.DEBUG)
LEVEL_INFO = Level(logging.INFO)
LEVEL_WARN = Level(logging.WARNING)
LEVEL_ERROR = Level(logging.ERROR)

# Acima do máximo nativo; usado só pelos caminhos de fatal
LEVEL_FATAL = Level(LEVEL_ERROR + 10)

_NATIVE_NAMES: tuple[tuple[int, str], ...] = (
    (LEVEL_DEBUG, "DEBUG"),
    (LEVEL_INFO, "INFO"),
    (LEVEL_WARN, "WARN"),
    (LEVEL_ERROR, "ERROR"),
)

_LEVELS_BY_NAME: dict[str, Level] = {
    "DEBUG": LEVEL_DEBUG,
    "INFO": LEVEL_INFO,
    "WARN": LEVEL_WARN,
    "WARNING": LEVEL_WARN,
    "ERROR": LEVEL_ERROR,
    "FATAL": LEVEL_FATAL,
}


def parse_level(value: str | int) -> Level:
    """Converte nome ou número em Level.

    Aceita nomes case-insensitive (DEBUG, INFO, WARN/WARNING, ERROR, FATAL),
    com offset opcional ("INFO+2", "ERROR-1"), ou um inteiro.

    Args:
        value: Nome do nível ou valor numérico.

    Returns:
        Level correspondente.

    Raises:
        InvalidLevelError: Se o nome não corresponder a nenhum nível.
    """
    if isinstance(value, int):
        return Level(value)

    text = value.strip().upper()
    name, sign, offset = text, "", "0"
    for candidate in ("+", "-"):
        if candidate in text:
            name, offset = text.split(candidate, 1)
            sign = candidate
            break

    base = _LEVELS_BY_NAME.get(name.strip())
    if base is None or not offset.strip().isdigit():
        raise InvalidLevelError(
            f"Nível de log inválido: {value}. "
            f"Válidos: {', '.join(sorted(_LEVELS_BY_NAME))}"
        )

    delta = int(offset)
    return Level(base - delta if sign == "-" else base + delta)
