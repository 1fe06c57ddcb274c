#!/usr/bin/env python3
"""Demonstra o logger estruturado em JSON com source encurtado.

Uso:
    python scripts/demo_logging.py
    python scripts/demo_logging.py --text --fatal

Por padrão emite alguns registros e termina normalmente; com --fatal o
último registro é FATAL e o processo sai com status 1.
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from structured_logging import (
    LEVEL_DEBUG,
    SOURCE_KEY,
    TIME_KEY,
    Context,
    attrs,
    background,
    context_with_logger,
    defaults,
    logger_from_context,
    new_logger,
    with_json_format,
    with_log_level,
    with_replace_default_key_name,
    with_set_default,
    with_short_source,
)


def handle_request(ctx: Context) -> None:
    logger = logger_from_context(ctx).with_group("request")
    logger.info("request handled", method="GET", elapsed=timedelta(milliseconds=12))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--text", action="store_true", help="saída texto em vez de JSON")
    parser.add_argument("--fatal", action="store_true", help="termina com um registro FATAL")
    args = parser.parse_args()

    logger = new_logger(
        with_log_level(LEVEL_DEBUG),
        with_short_source(True),
        with_json_format(not args.text),
        with_replace_default_key_name(TIME_KEY, "timestamp"),
        with_replace_default_key_name(SOURCE_KEY, "caller"),
        with_set_default(True),
    )

    logger.debug("debug message", attrs.string("key", "debug"))
    logger.info("info message", attrs.string("key", "info"))
    logger.error("error message", attrs.error(ConnectionError("connection refused")))
    logger.info("optional values", attrs.int_ptr("retries", None))

    handle_request(context_with_logger(background(), logger.with_(service="demo")))
    defaults.warn("via default logger")

    if args.fatal:
        logger.fatal("shutting down", attrs.string("reason", "--fatal"))


if __name__ == "__main__":
    main()
