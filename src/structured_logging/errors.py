"""Exceções do pacote de logging estruturado.

A emissão de logs nunca levanta exceção para o chamador; estas exceções
existem apenas para erros de configuração (ex: nível inválido vindo de env).
"""

from __future__ import annotations


class StructuredLoggingError(Exception):
    """Base para erros de configuração do logging estruturado."""


class InvalidLevelError(StructuredLoggingError, ValueError):
    """Nível de log desconhecido ou mal formatado."""
