"""Reescrita dos campos reservados de cada registro emitido.

O handler chama `replace_attr` uma vez por campo, antes de serializar.
Somente as chaves presentes na tabela de renomeação (time, source, msg,
level) são candidatas a reescrita; atributos do usuário passam intactos.

Regras, na ordem:
1. Chave fora da tabela: atributo inalterado.
2. source com short source ativo: "<dir_pai>/<arquivo>:<linha>".
3. level: valor igual a LEVEL_FATAL vira o rótulo "FATAL".
4. Demais casos: apenas renomeia a chave.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath
from typing import TYPE_CHECKING

from structured_logging import attrs
from structured_logging.attrs import Attr, Source
from structured_logging.levels import LEVEL_FATAL, LEVEL_KEY, SOURCE_KEY, Level

if TYPE_CHECKING:
    from structured_logging.options import Options

FATAL_LABEL = "FATAL"


def shorten_path(file: str) -> str:
    """Mantém apenas o diretório pai imediato e o nome do arquivo.

    Exemplos:
        "/home/app/pkg/handlers/user.py" -> "handlers/user.py"
        "user.py" -> "user.py"
        "/user.py" -> "user.py"
    """
    path = PurePath(file)
    parent = path.parent.name
    if not parent:
        return path.name
    return f"{parent}/{path.name}"


def short_source_attr(attr: Attr, new_key: str) -> Attr:
    """Reduz o source a "dir/arquivo:linha" sob a nova chave.

    Valores que não são `Source` caem no rename simples.
    """
    if isinstance(attr.value, Source):
        src = attr.value
        return attrs.string(new_key, f"{shorten_path(src.file)}:{src.line}")

    return attr.with_key(new_key)


def replace_level(attr: Attr, new_key: str, label: str = FATAL_LABEL) -> Attr:
    """Aplica o rótulo FATAL comparando o valor numérico do nível.

    Não usa a chave para decidir: só registros em LEVEL_FATAL são
    reescritos, os demais apenas recebem a chave renomeada.
    """
    if isinstance(attr.value, Level) and attr.value == LEVEL_FATAL:
        return attrs.string(new_key, label)

    return attr.with_key(new_key)


def replace_attr(options: Options, groups: Sequence[str], attr: Attr) -> Attr:
    """Callback de reescrita por campo.

    Args:
        options: Configuração final do logger (capturada por closure).
        groups: Caminho de grupos do atributo (vazio para campos de topo).
        attr: Atributo original.

    Returns:
        Atributo reescrito (ou o próprio atributo, se não reservado).
    """
    new_key = options.replace_attrs.get(attr.key)
    if new_key is None:
        return attr

    if attr.key == SOURCE_KEY and options.add_short_source:
        return short_source_attr(attr, new_key)
    if attr.key == LEVEL_KEY:
        return replace_level(attr, new_key)

    return attr.with_key(new_key)
