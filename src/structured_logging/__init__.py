"""Logging estruturado configurável por opções.

Re-exporta o builder, as opções, os construtores de atributos e o
carregamento de logger via contexto.

Uso:
    from structured_logging import (
        TIME_KEY,
        new_logger,
        with_json_format,
        with_replace_default_key_name,
        with_short_source,
    )

    logger = new_logger(
        with_json_format(True),
        with_short_source(True),
        with_replace_default_key_name(TIME_KEY, "timestamp"),
    )
    logger.info("pedido criado", order_id="abc-123")

Campos reservados em todo registro: time, level, source (opcional), msg.
"""

import logging

from structured_logging.attrs import (
    Attr,
    Kind,
    Source,
    any_,
    bool_,
    bool_ptr,
    dict_,
    duration,
    error,
    float32,
    float32_ptr,
    float64,
    float64_ptr,
    group,
    int32,
    int32_ptr,
    int64,
    int64_ptr,
    int_,
    int_ptr,
    string,
    string_ptr,
    time_,
)
from structured_logging.context import (
    Context,
    background,
    context_with_logger,
    logger_from_context,
)
from structured_logging.errors import InvalidLevelError, StructuredLoggingError
from structured_logging.levels import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_FATAL,
    LEVEL_INFO,
    LEVEL_KEY,
    LEVEL_WARN,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    Level,
    parse_level,
)
from structured_logging.logger import Logger, default_logger, new_logger, set_default
from structured_logging.options import (
    Option,
    Options,
    with_json_format,
    with_log_level,
    with_replace_default_key_name,
    with_set_default,
    with_short_source,
    with_source,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "LEVEL_DEBUG",
    "LEVEL_ERROR",
    "LEVEL_FATAL",
    "LEVEL_INFO",
    "LEVEL_KEY",
    "LEVEL_WARN",
    "MESSAGE_KEY",
    "SOURCE_KEY",
    "TIME_KEY",
    # Atributos
    "Attr",
    "Kind",
    "Source",
    "any_",
    "bool_",
    "bool_ptr",
    "dict_",
    "duration",
    "error",
    "float32",
    "float32_ptr",
    "float64",
    "float64_ptr",
    "group",
    "int32",
    "int32_ptr",
    "int64",
    "int64_ptr",
    "int_",
    "int_ptr",
    "string",
    "string_ptr",
    "time_",
    # Contexto
    "Context",
    "background",
    "context_with_logger",
    "logger_from_context",
    # Erros
    "InvalidLevelError",
    "StructuredLoggingError",
    # Níveis
    "Level",
    "parse_level",
    # Logger
    "Logger",
    "default_logger",
    "new_logger",
    "set_default",
    # Opções
    "Option",
    "Options",
    "with_json_format",
    "with_log_level",
    "with_replace_default_key_name",
    "with_set_default",
    "with_short_source",
    "with_source",
]
