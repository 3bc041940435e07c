# maquina/infra/db.py
"""
Conexão SQLite usada para persistir o estado da máquina.

Cada caso de uso abre uma conexão, grava o snapshot inteiro e fecha; não
há conexão compartilhada entre comandos da CLI.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def _prepare_path(db_path: str) -> str:
    """Cria a pasta do arquivo do banco (ex.: `--db dados/maquina.db`)."""
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return db_path


@contextmanager
def connect(db_path: str) -> Iterator[sqlite3.Connection]:
    """
    Abre o banco da máquina em uma transação.

    - `row_factory = sqlite3.Row`, para ler colunas pelo nome;
    - `foreign_keys` ligado: bebidas apontam para o pack do subtipo;
    - commit ao sair do bloco, rollback se uma exceção escapar, e a conexão
      é sempre fechada.
    """
    conn = sqlite3.connect(_prepare_path(db_path))
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
