"""
UC: operações do GERENTE.
- run_estoque(): todos os packs com a quantidade em estoque.
- run_quentes(): packs de bebidas quentes.
- run_catalogo(): subtipos disponíveis para abastecimento.
- run_adicionar(subcategoria, quantidade): abastece pelo catálogo.
- run_remover(numero): retira uma unidade do subtipo.
- run_remover_vencidos(): descarta bebidas vencidas.
- run_historico(): compras registradas.
- run_abastecer_lote(path): abastece a partir de uma planilha XLSX/CSV.
- run_exportar(path) / run_importar(path): snapshot JSON da máquina.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from maquina.config import DB_PATH, DEFAULTS
from maquina.adapters.stock_loader import load_abastecimento
from maquina.domain.catalog import CATALOG, create_beverage, parse_subcategory
from maquina.domain.machine import VendingError
from maquina.domain.models import BeverageSubCategory, Money
from maquina.infra.archiver import load_machine, save_machine
from maquina.infra.logger import (
    log_transaction, log_gerente, log_system_event, log_file_operation, print_system
)
from maquina.infra.serialization import load_json, save_json


def run_estoque(db_path: str = DB_PATH) -> List[Dict[str, Any]]:
    machine = load_machine(db_path)
    linhas: List[Dict[str, Any]] = []
    machine.show_list_of_all(
        lambda title, quantity, in_stock: linhas.append(
            {"bebida": title, "quantidade": quantity, "situacao": "ok" if in_stock else "esgotado"}
        )
    )
    return linhas


def run_quentes(db_path: str = DB_PATH) -> List[Dict[str, Any]]:
    machine = load_machine(db_path)
    return [
        {"bebida": pack.title, "preco": pack.price.amount, "quantidade": machine.inventory.count(pack)}
        for pack in machine.get_list_of_hot_beverages()
    ]


def run_catalogo() -> List[Dict[str, Any]]:
    return [
        {
            "numero": int(sub),
            "bebida": sub.title,
            "tipo": sub.type.value,
            "preco": entry.price,
            "validade_dias": entry.shelf_life_days,
        }
        for sub, entry in CATALOG.items()
    ]


def run_adicionar(subcategoria: str, quantidade: int = 1, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Abastece `quantidade` unidades do subtipo com os valores de catálogo."""
    log_system_event("adicionar_start", {"subcategoria": subcategoria, "quantidade": quantidade})
    sub = parse_subcategory(subcategoria)
    if sub is None or quantidade <= 0:
        erro = VendingError.NOT_EXIST_PACK.message if sub is None else VendingError.INVALID_AMOUNT.message
        log_transaction("adicionar", {"subcategoria": subcategoria}, error=erro)
        return {"sucesso": False, "bebida": subcategoria, "adicionadas": 0, "erro": erro}
    try:
        machine = load_machine(db_path)
        for _ in range(quantidade):
            machine.add(sub)
        save_machine(machine, db_path)

        total = machine.count(int(sub))
        log_gerente("add", sub.name, quantidade, total=total)
        log_transaction("adicionar", {"subcategoria": sub.name, "quantidade": quantidade}, result={"total": total})
        print_system(f">> {quantidade} x {sub.title} adicionadas.")
        return {"sucesso": True, "bebida": sub.title, "adicionadas": quantidade, "total": total, "erro": None}
    except Exception as e:
        log_transaction("adicionar", {"subcategoria": subcategoria}, error=str(e))
        log_system_event("adicionar_error", {"error": str(e)}, level="error")
        raise


def run_remover(numero: int, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Retira uma unidade do subtipo de número `numero`."""
    log_system_event("remover_start", {"numero": numero})
    try:
        machine = load_machine(db_path)
        beverage, error = machine.remove(numero)
        if beverage is None:
            log_transaction("remover", {"numero": numero}, error=error.message)
            return {"sucesso": False, "bebida": None, "erro": error.message}

        save_machine(machine, db_path)
        log_gerente("remove", beverage.subcategory.name, 1, id=beverage.id)
        log_transaction("remover", {"numero": numero}, result={"bebida": beverage.description})
        return {"sucesso": True, "bebida": beverage.description, "erro": None}
    except Exception as e:
        log_transaction("remover", {"numero": numero}, error=str(e))
        log_system_event("remover_error", {"error": str(e)}, level="error")
        raise


def run_remover_vencidos(db_path: str = DB_PATH, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Descarta as bebidas vencidas e retorna o que foi removido."""
    log_system_event("remover_vencidos_start")
    try:
        machine = load_machine(db_path)
        removed = machine.remove_expired_beverages(now)
        if removed:
            save_machine(machine, db_path)
        log_gerente("expire", None, len(removed))
        log_transaction("remover_vencidos", {}, result={"removidas": len(removed)})
        return [
            {"bebida": b.description, "validade": b.expiration_date.date().isoformat()}
            for b in removed
        ]
    except Exception as e:
        log_transaction("remover_vencidos", {}, error=str(e))
        log_system_event("remover_vencidos_error", {"error": str(e)}, level="error")
        raise


def run_historico(db_path: str = DB_PATH) -> List[Dict[str, Any]]:
    machine = load_machine(db_path)
    linhas: List[Dict[str, Any]] = []
    machine.show_history(lambda number, description: linhas.append({"numero": number, "bebida": description}))
    return linhas


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def run_abastecer_lote(path: str, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Lê uma planilha de abastecimento e adiciona as bebidas de cada linha.

    Linhas inválidas não interrompem o lote; são reportadas em `erros`
    com o número da linha (a partir de 1, sem contar o cabeçalho).
    """
    log_system_event("abastecer_lote_start", {"file_path": path})
    log_file_operation("import", path)
    try:
        rows = load_abastecimento(path)
        log_file_operation("import", path, rows_processed=len(rows))

        machine = load_machine(db_path)
        erros: List[Dict[str, Any]] = []
        adicionadas = 0
        for linha, row in enumerate(rows, start=1):
            sub: Optional[BeverageSubCategory] = parse_subcategory(row.get("subcategoria"))
            if sub is None:
                erros.append({"linha": linha, "mensagem": f"Subcategoria desconhecida: {row.get('subcategoria')}"})
                continue
            invalidos = row.get("invalidos") or {}
            if invalidos:
                campo, bruto = next(iter(invalidos.items()))
                erros.append({"linha": linha, "mensagem": f"Valor inválido em {campo}: {bruto}"})
                continue
            quantidade = row.get("quantidade")
            if quantidade is None:
                quantidade = DEFAULTS.quantidade_lote
            if quantidade <= 0:
                erros.append({"linha": linha, "mensagem": f"Quantidade inválida: {quantidade}"})
                continue
            preco = row.get("preco")
            if preco is not None and preco < 0:
                erros.append({"linha": linha, "mensagem": f"Preço inválido: {preco}"})
                continue
            fabricacao = _parse_iso(row.get("fabricacao"))
            validade = _parse_iso(row.get("validade"))
            if fabricacao is not None and validade is not None and validade < fabricacao:
                erros.append({
                    "linha": linha,
                    "mensagem": f"Validade {row['validade']} anterior à fabricação {row['fabricacao']}",
                })
                continue
            for _ in range(quantidade):
                machine.add_beverage(create_beverage(
                    sub,
                    manufacture_date=fabricacao,
                    expiration_date=validade,
                    price=Money(preco) if preco is not None else None,
                ))
            adicionadas += quantidade
            log_gerente("batch_prepare", sub.name, quantidade, linha=linha)

        if adicionadas:
            save_machine(machine, db_path)

        result = {
            "tipo": "Abastecimento",
            "arquivo": path,
            "total": len(rows),
            "sucessos": len(rows) - len(erros),
            "registros": adicionadas,
            "erros": erros,
        }
        log_transaction("abastecer_lote", {"file": path, "rows_count": len(rows)}, result=result)
        log_system_event("abastecer_lote_success", {"file_path": path, "bebidas": adicionadas})
        return result
    except Exception as e:
        log_transaction("abastecer_lote", {"file": path}, error=str(e))
        log_system_event("abastecer_lote_error", {"file_path": path, "error": str(e)}, level="error")
        raise


def run_exportar(path: str, db_path: str = DB_PATH) -> Dict[str, Any]:
    machine = load_machine(db_path)
    save_json(machine, path)
    log_file_operation("export", path, rows_processed=len(machine.inventory))
    return {"arquivo": path, "bebidas": len(machine.inventory), "historico": len(machine.history)}


def run_importar(path: str, db_path: str = DB_PATH) -> Dict[str, Any]:
    """Substitui o estado salvo pelo snapshot JSON. `SnapshotError` se o arquivo for inválido."""
    machine = load_json(path)
    save_machine(machine, db_path)
    log_file_operation("import", path, rows_processed=len(machine.inventory))
    return {"arquivo": path, "bebidas": len(machine.inventory), "historico": len(machine.history)}
