"""
Carga e gravação da máquina no SQLite.

A máquina é construída explicitamente por quem a usa (casos de uso/CLI):
`load_machine` no início da operação e `save_machine` ao final. Qualquer
falha na carga resulta em uma máquina nova e vazia.
"""

from __future__ import annotations

from maquina.config import DB_PATH
from maquina.domain.machine import VendingMachine
from maquina.infra.logger import log_system_event
from maquina.infra.migrations import apply_migrations
from maquina.infra.repositories import MachineRepo
from maquina.infra.serialization import machine_from_dict, machine_to_dict


def load_machine(db_path: str = DB_PATH) -> VendingMachine:
    """Carrega a máquina salva em `db_path` ou retorna a máquina padrão vazia."""
    try:
        apply_migrations(db_path)
        snapshot = MachineRepo(db_path).load()
        if snapshot is None:
            log_system_event("machine_default", {"db_path": db_path})
            return VendingMachine()
        machine = machine_from_dict(snapshot)
    except Exception as e:
        log_system_event("machine_load_failed", {"db_path": db_path, "error": str(e)}, level="warning")
        return VendingMachine()
    log_system_event("machine_loaded", {"db_path": db_path, "saldo": machine.balance.amount})
    return machine


def save_machine(machine: VendingMachine, db_path: str = DB_PATH) -> None:
    apply_migrations(db_path)
    MachineRepo(db_path).save(machine_to_dict(machine))
    log_system_event("machine_saved", {"db_path": db_path, "saldo": machine.balance.amount})
