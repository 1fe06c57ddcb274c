"""Atributos estruturados (pares chave/valor) anexados aos registros de log.

Cada construtor fixa o tipo (`Kind`) do valor no momento da criação.
Construtores "_ptr" aceitam `None`: o atributo não é omitido, é registrado
com o valor literal "nil" sob a mesma chave.

Uso:
    from structured_logging import attrs

    logger.info("pedido criado", attrs.string("order_id", "abc"), attrs.int_("items", 3))
    logger.error("falha", attrs.error(exc))
"""

from __future__ import annotations

import ctypes
import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from structured_logging.levels import Level

NIL = "nil"
ERROR_KEY = "error"
BAD_KEY = "!BADKEY"


class Kind(enum.Enum):
    """Tipo do valor de um atributo."""

    BOOL = "bool"
    STRING = "string"
    INT64 = "int64"
    FLOAT64 = "float64"
    DURATION = "duration"
    TIME = "time"
    ANY = "any"
    GROUP = "group"
    LEVEL = "level"
    SOURCE = "source"


@dataclass(frozen=True)
class Source:
    """Local de chamada (call site) de um registro.

    Attributes:
        function: Nome qualificado da função chamadora
        file: Caminho completo do arquivo
        line: Número da linha
    """

    function: str
    file: str
    line: int


@dataclass(frozen=True)
class Attr:
    """Atributo imutável de um registro de log.

    Attributes:
        key: Nome do campo
        value: Valor já normalizado para o `kind`
        kind: Tipo do valor (nunca convertido depois da criação)
    """

    key: str
    value: Any
    kind: Kind = Kind.ANY

    def is_empty(self) -> bool:
        """Atributo sem chave e sem valor (ignorado pelos formatters)."""
        return not self.key and self.value is None

    def with_key(self, key: str) -> Attr:
        """Retorna cópia com outra chave, mantendo valor e tipo."""
        return Attr(key, self.value, self.kind)


def bool_(key: str, val: bool) -> Attr:
    return Attr(key, bool(val), Kind.BOOL)


def bool_ptr(key: str, val: bool | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return bool_(key, val)


def string(key: str, val: str) -> Attr:
    return Attr(key, str(val), Kind.STRING)


def string_ptr(key: str, val: str | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return string(key, val)


def int_(key: str, val: int) -> Attr:
    return int64(key, int(val))


def int_ptr(key: str, val: int | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return int_(key, val)


def int32(key: str, val: int) -> Attr:
    """Inteiro de 32 bits, armazenado como INT64.

    Valores fora da faixa são truncados como numa conversão para int32.
    """
    return int64(key, ctypes.c_int32(val).value)


def int32_ptr(key: str, val: int | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return int32(key, val)


def int64(key: str, val: int) -> Attr:
    return Attr(key, ctypes.c_int64(val).value, Kind.INT64)


def int64_ptr(key: str, val: int | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return int64(key, val)


def float32(key: str, val: float) -> Attr:
    """Float de 32 bits, armazenado como FLOAT64 (com a precisão de float32)."""
    return float64(key, ctypes.c_float(val).value)


def float32_ptr(key: str, val: float | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return float32(key, val)


def float64(key: str, val: float) -> Attr:
    return Attr(key, float(val), Kind.FLOAT64)


def float64_ptr(key: str, val: float | None) -> Attr:
    if val is None:
        return string(key, NIL)
    return float64(key, val)


def duration(key: str, val: timedelta) -> Attr:
    return Attr(key, val, Kind.DURATION)


def time_(key: str, val: datetime) -> Attr:
    return Attr(key, val, Kind.TIME)


def error(err: BaseException | None) -> Attr:
    """Atributo de erro sob a chave fixa "error".

    Args:
        err: Exceção (ou None).

    Returns:
        string("error", "nil") se err for None, senão a descrição textual.
    """
    if err is None:
        return string(ERROR_KEY, NIL)
    return string(ERROR_KEY, str(err))


def group(key: str, *attrs: Attr) -> Attr:
    """Agrupa atributos sob uma única chave (objeto aninhado no JSON)."""
    return Attr(key, tuple(attrs), Kind.GROUP)


dict_ = group


def any_(key: str, val: Any) -> Attr:
    """Cria atributo inferindo o tipo a partir do valor Python."""
    if isinstance(val, Attr):
        return val.with_key(key)
    # bool antes de int: bool é subclasse de int
    if isinstance(val, bool):
        return bool_(key, val)
    if isinstance(val, Level):
        return Attr(key, val, Kind.LEVEL)
    if isinstance(val, int):
        return int_(key, val)
    if isinstance(val, float):
        return float64(key, val)
    if isinstance(val, str):
        return string(key, val)
    if isinstance(val, timedelta):
        return duration(key, val)
    if isinstance(val, datetime):
        return time_(key, val)
    if isinstance(val, Source):
        return Attr(key, val, Kind.SOURCE)
    if isinstance(val, (list, tuple)) and val and all(isinstance(v, Attr) for v in val):
        return group(key, *val)
    return Attr(key, val, Kind.ANY)


def args_to_attrs(args: Iterable[Any], kwargs: Mapping[str, Any] | None = None) -> list[Attr]:
    """Converte argumentos livres de uma chamada de log em atributos.

    Regras:
    - Attr é usado como está
    - str seguido de um valor vira any_(str, valor)
    - str solitário no final, ou qualquer outro valor, vira "!BADKEY"
    - kwargs viram any_(chave, valor)
    """
    pending = list(args)
    result: list[Attr] = []
    i = 0
    while i < len(pending):
        item = pending[i]
        if isinstance(item, Attr):
            result.append(item)
            i += 1
        elif isinstance(item, str) and i + 1 < len(pending):
            result.append(any_(item, pending[i + 1]))
            i += 2
        else:
            result.append(any_(BAD_KEY, item))
            i += 1

    for key, value in (kwargs or {}).items():
        result.append(any_(key, value))
    return result
