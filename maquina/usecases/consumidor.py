"""
UC: operações do CONSUMIDOR.
- run_saldo(): saldo atual.
- run_inserir(valor): insere dinheiro.
- run_listar_compraveis(): packs que o saldo atual compra.
- run_vitrine(): todos os packs, marcando os compráveis.
- run_comprar(numero): compra o pack na posição `numero` da lista de compráveis.

Cada caso de uso carrega a máquina do SQLite, executa uma operação,
salva o estado e registra a transação no log.
"""

from __future__ import annotations

from typing import Any, Dict, List

from maquina.config import DB_PATH
from maquina.domain.machine import VendingError
from maquina.infra.archiver import load_machine, save_machine
from maquina.infra.logger import (
    log_transaction, log_consumidor, log_system_event, print_system
)


def run_saldo(db_path: str = DB_PATH) -> Dict[str, Any]:
    machine = load_machine(db_path)
    out: Dict[str, Any] = {}
    machine.show_balance(lambda amount: out.update(saldo=amount))
    return out


def run_inserir(valor: int, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Insere `valor` no saldo; valores não positivos são recusados sem alterar nada."""
    log_system_event("inserir_start", {"valor": valor})
    try:
        machine = load_machine(db_path)
        if not machine.insert(valor):
            erro = VendingError.INVALID_AMOUNT.message
            log_transaction("inserir", {"valor": valor}, error=erro)
            return {"sucesso": False, "saldo": machine.balance.amount, "erro": erro}

        save_machine(machine, db_path)
        saldo = machine.balance.amount
        log_consumidor("insert", saldo, valor=valor)
        log_transaction("inserir", {"valor": valor}, result={"saldo": saldo})
        print_system(f">> Saldo atual: {saldo}")
        return {"sucesso": True, "saldo": saldo, "erro": None}
    except Exception as e:
        log_transaction("inserir", {"valor": valor}, error=str(e))
        log_system_event("inserir_error", {"error": str(e)}, level="error")
        raise


def run_listar_compraveis(db_path: str = DB_PATH) -> Dict[str, Any]:
    """Lista os packs compráveis como (numero, descricao, ultimo)."""
    machine = load_machine(db_path)
    itens: List[Dict[str, Any]] = []
    machine.show_list_of_buyable(
        lambda last, number, description: itens.append(
            {"numero": number, "bebida": description, "ultimo": last}
        )
    )
    erro = VendingError.OUT_OF_STOCK.message if machine.is_empty() else None
    log_consumidor("list", machine.balance.amount, itens=len(itens))
    return {"saldo": machine.balance.amount, "itens": itens, "erro": erro}


def run_vitrine(db_path: str = DB_PATH) -> List[Dict[str, Any]]:
    machine = load_machine(db_path)
    linhas: List[Dict[str, Any]] = []
    machine.show_list_of_all_marked(
        lambda description, quantity, buyable: linhas.append(
            {"bebida": description, "quantidade": quantity, "compravel": "sim" if buyable else "não"}
        )
    )
    return linhas


def run_comprar(numero: int, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Compra o pack na posição `numero` (a partir de 1) da lista de compráveis."""
    log_system_event("comprar_start", {"numero": numero})
    try:
        machine = load_machine(db_path)
        if machine.is_empty():
            erro = VendingError.OUT_OF_STOCK.message
            log_transaction("comprar", {"numero": numero}, error=erro)
            return {"sucesso": False, "bebida": None, "saldo": machine.balance.amount, "erro": erro}

        buyable = machine.get_list_buyable()
        beverage = None
        if 1 <= numero <= len(buyable):
            beverage = machine.buy(buyable[numero - 1])
        if beverage is None:
            erro = VendingError.NOT_BUYABLE.message
            log_transaction("comprar", {"numero": numero}, error=erro)
            return {"sucesso": False, "bebida": None, "saldo": machine.balance.amount, "erro": erro}

        save_machine(machine, db_path)
        saldo = machine.balance.amount
        log_consumidor("buy", saldo, beverage.description, id=beverage.id)
        log_transaction("comprar", {"numero": numero}, result={"bebida": beverage.description, "saldo": saldo})
        print_system(f">> {beverage.description} comprada. Saldo: {saldo}")
        return {"sucesso": True, "bebida": beverage.description, "saldo": saldo, "erro": None}
    except Exception as e:
        log_transaction("comprar", {"numero": numero}, error=str(e))
        log_system_event("comprar_error", {"error": str(e)}, level="error")
        raise
