"""Configuração do pytest para o pacote structured_logging."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from structured_logging import logger as logger_module  # noqa: E402


@pytest.fixture(autouse=True)
def restore_default_logger():
    """Restaura o logger default do processo após cada teste."""
    previous = logger_module.default_logger()
    yield
    logger_module.set_default(previous)
