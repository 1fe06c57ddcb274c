"""Handlers e formatters que serializam os registros.

Dois formatos de saída, com os mesmos campos:
- texto: linha `time=... level=INFO source=... msg="..." k=v` (logfmt)
- JSON: objeto por linha via python-json-logger

Ordem dos campos embutidos: time, level, source (se habilitado), msg.
Todo campo, embutido ou do usuário, passa pelo callback `replace_attr`
antes de ser serializado. Atributos do usuário viajam no LogRecord em
`structured_attrs` como pares (caminho_de_grupos, Attr).

Uso:
    handler = new_json_handler(None, HandlerOptions(level=LEVEL_INFO))
    # None -> stdout do processo, resolvido a cada escrita
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from pythonjsonlogger.json import JsonFormatter

from structured_logging import attrs
from structured_logging.attrs import Attr, Kind, Source
from structured_logging.levels import (
    LEVEL_INFO,
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    Level,
)

if TYPE_CHECKING:
    from typing import TextIO

# Atributo extra do LogRecord com os atributos estruturados
RECORD_ATTRS = "structured_attrs"
# Atributo extra do LogRecord com o Context da chamada
RECORD_CONTEXT = "log_context"

ReplaceAttr = Callable[[Sequence[str], Attr], Attr]
Entry = tuple[tuple[str, ...], Attr]


@dataclass(frozen=True)
class HandlerOptions:
    """Parâmetros de construção de um handler.

    Attributes:
        level: Nível mínimo aceito pelo handler
        add_source: Inclui o campo source (call site)
        replace_attr: Callback aplicado a cada campo antes da serialização
    """

    level: Level = LEVEL_INFO
    add_source: bool = False
    replace_attr: ReplaceAttr | None = None


class StdStreamHandler(logging.StreamHandler):
    """StreamHandler que resolve sys.stdout/sys.stderr a cada escrita.

    Mesmo padrão do `_StderrHandler` da stdlib: trocas de sys.stdout
    (ex: captura em testes) são respeitadas sem recriar o handler.
    """

    def __init__(self, stream_name: str = "stdout", level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)
        self._stream_name = stream_name

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return getattr(sys, self._stream_name)


def format_duration(value: timedelta) -> str:
    """Formata duração no estilo "1h2m3.5s", "150ms", "0s"."""
    ns = _duration_nanoseconds(value)
    if ns == 0:
        return "0s"

    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000_000_000:
        for unit, size in (("ms", 1_000_000), ("µs", 1_000), ("ns", 1)):
            if ns >= size:
                return f"{sign}{_trim_decimal(ns / size)}{unit}"

    hours, rem = divmod(ns, 3_600_000_000_000)
    minutes, rem = divmod(rem, 60_000_000_000)
    seconds = _trim_decimal(rem / 1_000_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim_decimal(value: float) -> str:
    return f"{value:.9f}".rstrip("0").rstrip(".")


def _duration_nanoseconds(value: timedelta) -> int:
    return ((value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds) * 1000


def _needs_quoting(text: str) -> bool:
    if not text:
        return True
    return any(ch in ' ="' or not ch.isprintable() for ch in text)


def _quote(text: str) -> str:
    if _needs_quoting(text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _format_float(value: float) -> str:
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


class _RecordFieldsMixin:
    """Monta a lista de campos de um LogRecord aplicando `replace_attr`."""

    handler_options: HandlerOptions

    def builtin_attrs(self, record: logging.LogRecord) -> list[Attr]:
        fields = [
            attrs.time_(TIME_KEY, datetime.fromtimestamp(record.created).astimezone()),
            Attr(LEVEL_KEY, Level(record.levelno), Kind.LEVEL),
        ]
        if self.handler_options.add_source:
            source = Source(record.funcName, record.pathname, record.lineno)
            fields.append(Attr(SOURCE_KEY, source, Kind.SOURCE))
        fields.append(attrs.string(MESSAGE_KEY, record.getMessage()))
        return fields

    def rewrite(self, groups: tuple[str, ...], attr: Attr) -> Attr | None:
        """Aplica replace_attr (recursivo em grupos); None = campo descartado."""
        if attr.kind is Kind.GROUP:
            path = (*groups, attr.key) if attr.key else groups
            children = tuple(
                child
                for child in (self.rewrite(path, member) for member in attr.value)
                if child is not None
            )
            if not children:
                return None
            return Attr(attr.key, children, Kind.GROUP)

        replace = self.handler_options.replace_attr
        if replace is not None:
            attr = replace(list(groups), attr)
        if attr.is_empty():
            return None
        return attr

    def resolve_fields(self, record: logging.LogRecord) -> list[Entry]:
        entries: list[Entry] = []
        for builtin in self.builtin_attrs(record):
            rewritten = self.rewrite((), builtin)
            if rewritten is not None:
                entries.append(((), rewritten))

        for groups, attr in getattr(record, RECORD_ATTRS, ()):
            rewritten = self.rewrite(tuple(groups), attr)
            if rewritten is not None:
                entries.append((tuple(groups), rewritten))
        return entries


class TextFormatter(_RecordFieldsMixin, logging.Formatter):
    """Formatter key=value; grupos viram prefixos com ponto (g.k=v)."""

    def __init__(self, handler_options: HandlerOptions) -> None:
        super().__init__()
        self.handler_options = handler_options

    def format(self, record: logging.LogRecord) -> str:
        pairs: list[str] = []
        for groups, attr in self.resolve_fields(record):
            self._append_pairs(pairs, groups, attr)
        return " ".join(pairs)

    def _append_pairs(self, pairs: list[str], groups: tuple[str, ...], attr: Attr) -> None:
        if attr.kind is Kind.GROUP:
            path = (*groups, attr.key) if attr.key else groups
            for member in attr.value:
                self._append_pairs(pairs, path, member)
            return

        key = ".".join((*groups, attr.key))
        pairs.append(f"{_quote(key)}={self.format_value(attr)}")

    def format_value(self, attr: Attr) -> str:
        value = attr.value
        if attr.kind is Kind.BOOL:
            return "true" if value else "false"
        if attr.kind is Kind.INT64:
            return str(value)
        if attr.kind is Kind.FLOAT64:
            return _format_float(value)
        if attr.kind is Kind.DURATION:
            return format_duration(value)
        if attr.kind is Kind.TIME:
            return value.isoformat(timespec="milliseconds")
        if attr.kind is Kind.SOURCE:
            return _quote(f"{value.file}:{value.line}")
        if value is None:
            return "<nil>"
        return _quote(str(value))


class JsonRecordFormatter(_RecordFieldsMixin, JsonFormatter):
    """Formatter JSON; grupos viram objetos aninhados."""

    def __init__(self, handler_options: HandlerOptions) -> None:
        super().__init__(json_default=str, json_ensure_ascii=False)
        self.handler_options = handler_options

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        for groups, attr in self.resolve_fields(record):
            target = log_data
            for name in groups:
                nested = target.get(name)
                if not isinstance(nested, dict):
                    nested = {}
                    target[name] = nested
                target = nested
            target.update(self.group_value((attr,)))

        # exc_info/stack_info preenchidos pelo JsonFormatter base
        log_data.update(message_dict)

    def json_value(self, attr: Attr) -> Any:
        value = attr.value
        if attr.kind is Kind.GROUP:
            return self.group_value(value)
        if attr.kind is Kind.DURATION:
            return _duration_nanoseconds(value)
        if attr.kind is Kind.TIME:
            return value.isoformat()
        if attr.kind is Kind.LEVEL:
            return str(value)
        if attr.kind is Kind.SOURCE:
            return {"function": value.function, "file": value.file, "line": value.line}
        return value

    def group_value(self, members: Sequence[Attr]) -> dict[str, Any]:
        """Objeto JSON dos membros; grupos sem chave entram no nível atual."""
        data: dict[str, Any] = {}
        for member in members:
            if member.kind is Kind.GROUP and not member.key:
                data.update(self.group_value(member.value))
            else:
                data[member.key] = self.json_value(member)
        return data


def _stream_handler(stream: TextIO | None) -> logging.StreamHandler:
    if stream is None:
        return StdStreamHandler("stdout")
    return logging.StreamHandler(stream)


def new_text_handler(stream: TextIO | None, options: HandlerOptions) -> logging.Handler:
    """Handler de texto key=value.

    Args:
        stream: Destino; None usa o stdout do processo.
        options: Nível, source e callback de reescrita.
    """
    handler = _stream_handler(stream)
    handler.setLevel(options.level)
    handler.setFormatter(TextFormatter(options))
    return handler


def new_json_handler(stream: TextIO | None, options: HandlerOptions) -> logging.Handler:
    """Handler JSON (uma linha por registro).

    Args:
        stream: Destino; None usa o stdout do processo.
        options: Nível, source e callback de reescrita.
    """
    handler = _stream_handler(stream)
    handler.setLevel(options.level)
    handler.setFormatter(JsonRecordFormatter(options))
    return handler
