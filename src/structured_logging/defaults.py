"""Funções de log sobre o logger default do processo.

Antes de usar, instale um logger com `with_set_default(True)`; até lá as
funções escrevem no logger inicial (texto, INFO, stderr).

Uso:
    from structured_logging import defaults

    defaults.info("job concluído", job_id="abc")
    defaults.fatal("banco indisponível")  # encerra o processo
"""

from __future__ import annotations

from typing import Any, NoReturn

from structured_logging.attrs import Attr, args_to_attrs
from structured_logging.context import Context
from structured_logging.levels import LEVEL_DEBUG, LEVEL_ERROR, LEVEL_INFO, LEVEL_WARN
from structured_logging.logger import default_logger

# Cada função chama Logger._log diretamente para manter a mesma
# profundidade de pilha dos métodos do Logger (source = quem chamou).


def debug(msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(None, LEVEL_DEBUG, msg, args_to_attrs(args, kwargs))


def debug_context(ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(ctx, LEVEL_DEBUG, msg, args_to_attrs(args, kwargs))


def info(msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(None, LEVEL_INFO, msg, args_to_attrs(args, kwargs))


def info_context(ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(ctx, LEVEL_INFO, msg, args_to_attrs(args, kwargs))


def warn(msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(None, LEVEL_WARN, msg, args_to_attrs(args, kwargs))


def warn_context(ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(ctx, LEVEL_WARN, msg, args_to_attrs(args, kwargs))


def error(msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(None, LEVEL_ERROR, msg, args_to_attrs(args, kwargs))


def error_context(ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(ctx, LEVEL_ERROR, msg, args_to_attrs(args, kwargs))


def log(level: int, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(None, level, msg, args_to_attrs(args, kwargs))


def log_context(ctx: Context | None, level: int, msg: str, /, *args: Any, **kwargs: Any) -> None:
    default_logger()._log(ctx, level, msg, args_to_attrs(args, kwargs))


def log_attrs(level: int, msg: str, /, *attrs: Attr) -> None:
    default_logger()._log(None, level, msg, attrs)


def log_attrs_context(ctx: Context | None, level: int, msg: str, /, *attrs: Attr) -> None:
    default_logger()._log(ctx, level, msg, attrs)


def fatal(msg: str, /, *args: Any, **kwargs: Any) -> NoReturn:
    """Chama `Logger.fatal` no logger default."""
    default_logger()._log_fatal(None, msg, args_to_attrs(args, kwargs))


def fatal_context(ctx: Context | None, msg: str, /, *args: Any, **kwargs: Any) -> NoReturn:
    """Chama `Logger.fatal_context` no logger default."""
    default_logger()._log_fatal(ctx, msg, args_to_attrs(args, kwargs))
