"""Propagação explícita do logger por contexto de chamada.

`Context` é uma cadeia imutável de nós chave/valor: cada `with_value`
cria um novo nó filho, o pai nunca é alterado. A busca sobe a cadeia até
o ancestral mais próximo que definiu a chave.

Sem ContextVar/thread-local: o contexto é passado explicitamente pelas
funções, como qualquer outro argumento.

Uso:
    ctx = context_with_logger(background(), logger)
    handle_request(ctx)

    def handle_request(ctx: Context) -> None:
        logger_from_context(ctx).info("processando request")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from structured_logging.logger import Logger


class _LoggerKey:
    """Chave privada; nenhuma outra chave pode colidir com a instância."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<logger key>"


_LOGGER_KEY = _LoggerKey()
_MISSING = object()


class Context:
    """Nó imutável de uma cadeia de contexto."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self, parent: Context | None = None, key: Any = _MISSING, value: Any = None) -> None:
        self._parent = parent
        self._key = key
        self._value = value

    def value(self, key: Any) -> Any | None:
        """Valor do ancestral mais próximo que definiu `key`, ou None."""
        node: Context | None = self
        while node is not None:
            if node._key is not _MISSING and node._key == key:
                return node._value
            node = node._parent
        return None

    def with_value(self, key: Any, value: Any) -> Context:
        return Context(self, key, value)

    def __repr__(self) -> str:
        if self._key is _MISSING:
            return "Context.background"
        return f"{self._parent!r}.with_value({self._key!r})"


_BACKGROUND = Context()


def background() -> Context:
    """Contexto raiz vazio."""
    return _BACKGROUND


def context_with_logger(ctx: Context | None, logger: Logger) -> Context:
    """Anexa o logger ao contexto e retorna o contexto derivado.

    Args:
        ctx: Contexto pai (None é tratado como background()).
        logger: Logger a propagar.

    Returns:
        Novo Context; `ctx` permanece inalterado.
    """
    if ctx is None:
        ctx = background()
    return ctx.with_value(_LOGGER_KEY, logger)


def logger_from_context(ctx: Context | None) -> Logger:
    """Extrai o logger do contexto.

    Sempre retorna um logger utilizável: se nenhum ancestral tiver um
    logger (ou ctx for None), retorna o logger default do processo.
    """
    from structured_logging.logger import Logger, default_logger

    if ctx is None:
        ctx = background()

    logger = ctx.value(_LOGGER_KEY)
    if isinstance(logger, Logger):
        return logger
    return default_logger()
