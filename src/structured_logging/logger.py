"""Logger estruturado e sua construção a partir de opções.

`new_logger` parte dos defaults, aplica as opções em ordem, escolhe o
handler (texto ou JSON, sempre no stdout) e liga o callback de reescrita
de campos à configuração final. Opcionalmente instala o resultado como
logger default do processo.

Uso:
    from structured_logging import new_logger, with_log_level, with_set_default, LEVEL_INFO

    logger = new_logger(with_log_level(LEVEL_INFO), with_set_default(True))
    logger.info("serviço iniciado", port=8080)
    logger.fatal("configuração ausente")  # registra e encerra o processo
"""

from __future__ import annotations

import copy
import logging
import os
import sys
import threading
from collections.abc import Iterable
from typing import Any, NoReturn

from structured_logging.attrs import Attr, args_to_attrs
from structured_logging.context import Context, background
from structured_logging.handlers import (
    RECORD_ATTRS,
    RECORD_CONTEXT,
    Entry,
    HandlerOptions,
    StdStreamHandler,
    TextFormatter,
    new_json_handler,
    new_text_handler,
)
from structured_logging.levels import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_FATAL,
    LEVEL_INFO,
    LEVEL_WARN,
    Level,
)
from structured_logging.options import Option, Options, build_options

logger = logging.getLogger(__name__)

LOGGER_NAME = "structured_logging"
FATAL_EXIT_CODE = 1

# Frames entre o código do usuário e _log: o método público e o próprio _log
_CALLER_DEPTH = 2


def exit_process(code: int) -> NoReturn:
    """Encerra o processo após um registro fatal.

    Na thread principal levanta SystemExit (finally e atexit ainda rodam).
    Em qualquer outra thread SystemExit só encerraria a thread, então o
    processo sai direto via os._exit depois de esvaziar stdout e stderr.
    """
    if threading.current_thread() is threading.main_thread():
        sys.exit(code)
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
    os._exit(code)


class Logger:
    """Logger ligado a um único handler e a uma configuração resolvida.

    Seguro para uso concorrente: cada chamada monta seu próprio registro;
    a única sincronização é o lock interno do handler.

    Attributes:
        handler: Handler (stdlib) que serializa e escreve os registros.
    """

    def __init__(self, handler: logging.Handler, name: str = LOGGER_NAME) -> None:
        # Fora do registro global da stdlib: sem propagação para o root
        self._logger = logging.Logger(name)
        self._logger.propagate = False
        self._logger.addHandler(handler)
        self._handler = handler
        self._bound: tuple[Entry, ...] = ()
        self._groups: tuple[str, ...] = ()

    @property
    def handler(self) -> logging.Handler:
        return self._handler

    @property
    def stdlib_logger(self) -> logging.Logger:
        """Logger da stdlib subjacente (para integrar com código legado)."""
        return self._logger

    def enabled(self, level: int) -> bool:
        """Indica se registros no nível informado seriam emitidos."""
        return self._logger.isEnabledFor(level) and level >= self._handler.level

    def with_(self, *args: Any, **kwargs: Any) -> Logger:
        """Retorna logger que inclui os atributos em todo registro."""
        new_attrs = args_to_attrs(args, kwargs)
        if not new_attrs:
            return self
        derived = copy.copy(self)
        derived._bound = (*self._bound, *((self._groups, attr) for attr in new_attrs))
        return derived

    def with_group(self, name: str) -> Logger:
        """Retorna logger que aninha os atributos seguintes no grupo `name`."""
        if not name:
            return self
        derived = copy.copy(self)
        derived._groups = (*self._groups, name)
        return derived

    def log(self, level: int, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(None, level, msg, args_to_attrs(args, kwargs))

    def log_context(self, ctx: Context | None, level: int, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(ctx, level, msg, args_to_attrs(args, kwargs))

    def log_attrs(self, level: int, msg: str, /, *attrs: Attr) -> None:
        """Variante sem conversão de argumentos: recebe apenas Attr."""
        self._log(None, level, msg, attrs)

    def log_attrs_context(self, ctx: Context | None, level: int, msg: str, /, *attrs: Attr) -> None:
        self._log(ctx, level, msg, attrs)

    def debug(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(None, LEVEL_DEBUG, msg, args_to_attrs(args, kwargs))

    def debug_context(self, ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(ctx, LEVEL_DEBUG, msg, args_to_attrs(args, kwargs))

    def info(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(None, LEVEL_INFO, msg, args_to_attrs(args, kwargs))

    def info_context(self, ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(ctx, LEVEL_INFO, msg, args_to_attrs(args, kwargs))

    def warn(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(None, LEVEL_WARN, msg, args_to_attrs(args, kwargs))

    warning = warn

    def warn_context(self, ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(ctx, LEVEL_WARN, msg, args_to_attrs(args, kwargs))

    def error(self, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(None, LEVEL_ERROR, msg, args_to_attrs(args, kwargs))

    def error_context(self, ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
        self._log(ctx, LEVEL_ERROR, msg, args_to_attrs(args, kwargs))

    def fatal(self, msg: str, /, *args: Any, **kwargs: Any) -> NoReturn:
        """Registra em LEVEL_FATAL e encerra o processo com status 1."""
        self._log_fatal(None, msg, args_to_attrs(args, kwargs))

    def fatal_context(self, ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> NoReturn:
        """Como `fatal`, repassando o contexto ao handler."""
        self._log_fatal(ctx, msg, args_to_attrs(args, kwargs))

    def _log(self, ctx: Context | None, level: int, msg: str, attrs: Iterable[Attr]) -> None:
        if not self.enabled(level):
            return
        record = self._make_record(ctx, level, msg, attrs, _CALLER_DEPTH + 1)
        self._logger.handle(record)

    def _log_fatal(self, ctx: Context | None, msg: str, attrs: Iterable[Attr]) -> NoReturn:
        record = self._make_record(ctx, LEVEL_FATAL, msg, attrs, _CALLER_DEPTH + 1)
        # Direto no handler: o nível sintético não passa pelo filtro de nível
        self._handler.handle(record)
        self._handler.flush()
        exit_process(FATAL_EXIT_CODE)

    def _make_record(
        self,
        ctx: Context | None,
        level: int,
        msg: str,
        attrs: Iterable[Attr],
        depth: int,
    ) -> logging.LogRecord:
        frame = sys._getframe(depth)
        code = frame.f_code
        entries = (*self._bound, *((self._groups, attr) for attr in attrs))
        return self._logger.makeRecord(
            self._logger.name,
            Level(level),
            code.co_filename,
            frame.f_lineno,
            msg,
            (),
            None,
            func=getattr(code, "co_qualname", code.co_name),
            extra={
                RECORD_ATTRS: entries,
                RECORD_CONTEXT: ctx if ctx is not None else background(),
            },
        )


def new_logger(*opts: Option) -> Logger:
    """Cria logger configurado a partir das opções.

    Args:
        *opts: Opções aplicadas em ordem sobre os defaults.

    Returns:
        Logger escrevendo no stdout do processo.
    """
    config = build_options(*opts)

    handler_opts = HandlerOptions(
        level=config.log_level,
        add_source=config.capture_source,
        replace_attr=config.replace_attr,
    )

    if config.json_format:
        handler = new_json_handler(None, handler_opts)
    else:
        handler = new_text_handler(None, handler_opts)

    emitter = Logger(handler)

    if config.set_default:
        set_default(emitter)
        logger.debug("Logger instalado como default do processo")

    return emitter


def _fallback_logger() -> Logger:
    """Default inicial: texto, INFO, stderr."""
    handler = StdStreamHandler("stderr")
    options = HandlerOptions(level=LEVEL_INFO, replace_attr=Options().replace_attr)
    handler.setLevel(options.level)
    handler.setFormatter(TextFormatter(options))
    return Logger(handler)


# Slot único do processo: escrito por set_default, lido pelas funções
# de nível de módulo e pelo fallback de logger_from_context
_default_logger: Logger = _fallback_logger()


def set_default(emitter: Logger) -> None:
    """Instala o logger como default do processo (última escrita vence)."""
    global _default_logger
    _default_logger = emitter


def default_logger() -> Logger:
    return _default_logger
