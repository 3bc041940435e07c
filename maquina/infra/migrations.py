"""
Migrações de schema usando PRAGMA user_version.

V1: parâmetros (saldo, versão do snapshot), packs registrados, bebidas em
    estoque e histórico de compras.
"""

from __future__ import annotations

from typing import List
from .db import connect


SCHEMA_V1: List[str] = [
    # Parâmetros K/V (saldo, schema_version)
    """
    CREATE TABLE IF NOT EXISTS params (
        chave TEXT PRIMARY KEY,
        valor TEXT
    );
    """,
    # Packs registrados (inclusive os esgotados)
    """
    CREATE TABLE IF NOT EXISTS pack (
        subcategoria TEXT PRIMARY KEY,
        titulo TEXT NOT NULL,
        preco INTEGER NOT NULL,
        quente INTEGER DEFAULT 0
    );
    """,
    # Bebidas em estoque
    """
    CREATE TABLE IF NOT EXISTS bebida (
        id TEXT PRIMARY KEY,
        subcategoria TEXT NOT NULL,
        nome TEXT,
        marca TEXT,
        volume INTEGER,
        preco INTEGER NOT NULL,
        data_fabricacao TEXT NOT NULL,
        data_validade TEXT NOT NULL,
        atributos TEXT,          -- JSON com o payload do tipo (soda/coffee/milk)
        FOREIGN KEY (subcategoria) REFERENCES pack(subcategoria) ON DELETE CASCADE
    );
    """,
    # Histórico de compras
    """
    CREATE TABLE IF NOT EXISTS historico (
        numero INTEGER PRIMARY KEY,
        descricao TEXT NOT NULL
    );
    """,
]


def _apply_v1(conn) -> None:
    for sql in SCHEMA_V1:
        conn.executescript(sql)


def apply_migrations(db_path: str) -> None:
    """Aplica migrações incrementais de acordo com PRAGMA user_version."""
    with connect(db_path) as conn:
        ver = conn.execute("PRAGMA user_version;").fetchone()[0] or 0

        if ver < 1:
            _apply_v1(conn)
            conn.execute("PRAGMA user_version = 1;")
            ver = 1

        # versões futuras: if ver < 2: _apply_v2(...)
