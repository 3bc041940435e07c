# maquina/infra/repositories.py
"""
Repositórios (DAO) para acesso ao estado da máquina no SQLite.

Classes:
- MachineRepo

O `MachineRepo` trabalha com o snapshot em dicionário definido em
`maquina.infra.serialization`, gravando/lendo tudo em uma única conexão
para que o estado salvo seja sempre consistente.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from .db import connect
from .logger import log_database_operation


# -------------------------
# Máquina (snapshot completo)
# -------------------------

class MachineRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def save(self, snapshot: Dict[str, Any]) -> None:
        """Substitui todo o estado salvo pelo snapshot, em uma transação."""
        with connect(self.db_path) as c:
            c.execute("DELETE FROM bebida")
            c.execute("DELETE FROM pack")
            c.execute("DELETE FROM historico")
            c.executemany(
                "INSERT INTO params (chave, valor) VALUES (?, ?) "
                "ON CONFLICT(chave) DO UPDATE SET valor=excluded.valor",
                [
                    ("schema_version", str(snapshot["version"])),
                    ("saldo", str(snapshot["balance"])),
                ],
            )
            c.executemany(
                "INSERT INTO pack (subcategoria, titulo, preco, quente) VALUES (?, ?, ?, ?)",
                [(p["subcategory"], p["title"], p["price"], int(p["hot"])) for p in snapshot["packs"]],
            )
            c.executemany(
                """
                INSERT INTO bebida
                    (id, subcategoria, nome, marca, volume, preco,
                     data_fabricacao, data_validade, atributos)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        b["id"], b["subcategory"], b["name"], b["brand"], b["serving_size"],
                        b["price"], b["manufacture_date"], b["expiration_date"],
                        json.dumps(b["attributes"], ensure_ascii=False),
                    )
                    for b in snapshot["beverages"]
                ],
            )
            c.executemany(
                "INSERT INTO historico (numero, descricao) VALUES (?, ?)",
                [(h["number"], h["description"]) for h in snapshot["history"]],
            )
        log_database_operation(
            "bebida", "REPLACE", len(snapshot["beverages"]),
            packs=len(snapshot["packs"]), historico=len(snapshot["history"]),
        )

    def load(self) -> Optional[Dict[str, Any]]:
        """Lê o snapshot salvo; None se a máquina nunca foi salva."""
        with connect(self.db_path) as c:
            params = {r["chave"]: r["valor"] for r in c.execute("SELECT chave, valor FROM params")}
            if "schema_version" not in params:
                return None
            packs: List[Dict[str, Any]] = [
                {
                    "subcategory": r["subcategoria"],
                    "title": r["titulo"],
                    "price": r["preco"],
                    "hot": bool(r["quente"]),
                }
                for r in c.execute("SELECT subcategoria, titulo, preco, quente FROM pack")
            ]
            beverages: List[Dict[str, Any]] = [
                {
                    "id": r["id"],
                    "subcategory": r["subcategoria"],
                    "name": r["nome"],
                    "brand": r["marca"],
                    "serving_size": r["volume"],
                    "price": r["preco"],
                    "manufacture_date": r["data_fabricacao"],
                    "expiration_date": r["data_validade"],
                    "attributes": json.loads(r["atributos"] or "{}"),
                }
                # rowid preserva a ordem de chegada entre bebidas da mesma data
                for r in c.execute("SELECT * FROM bebida ORDER BY rowid")
            ]
            history: List[Dict[str, Any]] = [
                {"number": r["numero"], "description": r["descricao"]}
                for r in c.execute("SELECT numero, descricao FROM historico ORDER BY numero")
            ]
        log_database_operation("bebida", "SELECT", len(beverages), historico=len(history))
        return {
            "version": int(params["schema_version"]),
            "balance": int(params.get("saldo", 0)),
            "packs": packs,
            "beverages": beverages,
            "history": history,
        }
