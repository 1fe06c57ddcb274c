"""Settings de logging carregadas de variáveis de ambiente.

Permite configurar o logger sem alterar código (ex: LOG_FORMAT=json em
produção, text em desenvolvimento).

Variáveis:
    LOG_LEVEL         DEBUG | INFO | WARN | ERROR (default: DEBUG)
    LOG_FORMAT        text | json (default: text)
    LOG_ADD_SOURCE    true/false
    LOG_SHORT_SOURCE  true/false
    LOG_SET_DEFAULT   true/false
    LOG_TIME_KEY, LOG_SOURCE_KEY, LOG_MESSAGE_KEY, LOG_LEVEL_KEY
                      nomes exibidos para as chaves reservadas

Uso:
    from structured_logging.settings import get_logging_settings

    settings = get_logging_settings()
    logger = new_logger(*settings.to_options())
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from structured_logging.levels import (
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    parse_level,
)
from structured_logging.options import (
    DEFAULT_LOG_LEVEL,
    Option,
    with_json_format,
    with_log_level,
    with_replace_default_key_name,
    with_set_default,
    with_short_source,
    with_source,
)

VALID_FORMATS = frozenset({"text", "json"})

# Variável de ambiente -> chave reservada
_KEY_NAME_ENV = {
    "LOG_TIME_KEY": TIME_KEY,
    "LOG_SOURCE_KEY": SOURCE_KEY,
    "LOG_MESSAGE_KEY": MESSAGE_KEY,
    "LOG_LEVEL_KEY": LEVEL_KEY,
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class LoggingSettings:
    """Configurações do logger.

    Attributes:
        level: Nome do nível mínimo (validado por parse_level)
        log_format: "text" ou "json"
        add_source: Inclui o call site
        add_short_source: Inclui o call site encurtado
        set_default: Instala como logger default do processo
        key_names: Chave reservada -> nome exibido (só as sobrescritas)
    """

    level: str = str(DEFAULT_LOG_LEVEL)
    log_format: str = "text"
    add_source: bool = False
    add_short_source: bool = False
    set_default: bool = False
    key_names: dict[str, str] = field(default_factory=dict)

    @property
    def json_format(self) -> bool:
        return self.log_format == "json"

    def validate(self) -> list[str]:
        """Valida as configurações.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        try:
            parse_level(self.level)
        except ValueError:
            errors.append(f"LOG_LEVEL inválido: {self.level}")

        if self.log_format not in VALID_FORMATS:
            errors.append(
                f"LOG_FORMAT deve ser um de {', '.join(sorted(VALID_FORMATS))}"
            )

        for key, name in self.key_names.items():
            if not name:
                errors.append(f"Nome vazio para a chave reservada {key}")

        return errors

    def to_options(self) -> list[Option]:
        """Converte em opções para new_logger.

        Raises:
            InvalidLevelError: Se `level` não for um nível válido.
        """
        opts: list[Option] = [
            with_log_level(parse_level(self.level)),
            with_json_format(self.json_format),
            with_source(self.add_source),
            with_short_source(self.add_short_source),
            with_set_default(self.set_default),
        ]
        opts.extend(
            with_replace_default_key_name(key, name)
            for key, name in self.key_names.items()
        )
        return opts


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _load_from_env() -> LoggingSettings:
    """Carrega LoggingSettings de variáveis de ambiente."""
    key_names = {
        key: os.environ[env_name].strip()
        for env_name, key in _KEY_NAME_ENV.items()
        if env_name in os.environ
    }

    return LoggingSettings(
        level=os.getenv("LOG_LEVEL", str(DEFAULT_LOG_LEVEL)).strip(),
        log_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        add_source=_env_bool("LOG_ADD_SOURCE"),
        add_short_source=_env_bool("LOG_SHORT_SOURCE"),
        set_default=_env_bool("LOG_SET_DEFAULT"),
        key_names=key_names,
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Retorna instância cacheada de LoggingSettings."""
    return _load_from_env()
