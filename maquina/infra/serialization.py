"""
Snapshot versionado do estado da máquina.

Formato (versão 1):

    {
      "version": 1,
      "balance": 1300,
      "packs": [{"subcategory": "COKE", "title": "Coca-Cola", "price": 1000, "hot": false}],
      "beverages": [{"id": "...", "subcategory": "COKE", "name": "...", "brand": "...",
                     "serving_size": 350, "price": 1000,
                     "manufacture_date": "2026-01-01T10:00:00",
                     "expiration_date": "2026-06-30T10:00:00",
                     "attributes": {"kind": "soda", "is_sugar_free": false, "package_color": "red"}}],
      "history": [{"number": 1, "description": "Coca-Cola 350ml (1.000)"}]
    }

Os packs entram no snapshot para preservar os esgotados: um pack zerado
não tem bebidas que o representem.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from maquina.config import DEFAULTS
from maquina.domain.history import History, HistoryRecord
from maquina.domain.inventory import Inventory
from maquina.domain.machine import VendingMachine
from maquina.domain.models import (
    Beverage,
    BeverageAttributes,
    BeverageSubCategory,
    CoffeeAttributes,
    MilkAttributes,
    Money,
    Pack,
    SodaAttributes,
)


SCHEMA_VERSION = DEFAULTS.schema_version

_ATTRIBUTE_KINDS = {
    "soda": SodaAttributes,
    "coffee": CoffeeAttributes,
    "milk": MilkAttributes,
}


class SnapshotError(ValueError):
    """Snapshot com versão não suportada ou conteúdo inválido."""


# -------------------------
# encode
# -------------------------

def attributes_to_dict(attributes: BeverageAttributes) -> Dict[str, Any]:
    for kind, cls in _ATTRIBUTE_KINDS.items():
        if isinstance(attributes, cls):
            return {"kind": kind, **asdict(attributes)}
    raise TypeError(f"atributos desconhecidos: {attributes!r}")


def beverage_to_dict(beverage: Beverage) -> Dict[str, Any]:
    return {
        "id": beverage.id,
        "subcategory": beverage.subcategory.name,
        "name": beverage.name,
        "brand": beverage.brand,
        "serving_size": beverage.serving_size,
        "price": beverage.price.amount,
        "manufacture_date": beverage.manufacture_date.isoformat(),
        "expiration_date": beverage.expiration_date.isoformat(),
        "attributes": attributes_to_dict(beverage.attributes),
    }


def pack_to_dict(pack: Pack) -> Dict[str, Any]:
    return {
        "subcategory": pack.subcategory.name,
        "title": pack.title,
        "price": pack.price.amount,
        "hot": pack.is_hot,
    }


def machine_to_dict(machine: VendingMachine) -> Dict[str, Any]:
    inventory = machine.inventory
    return {
        "version": SCHEMA_VERSION,
        "balance": machine.balance.amount,
        "packs": [pack_to_dict(p) for p in inventory.packs()],
        "beverages": [beverage_to_dict(b) for b in inventory.beverages()],
        "history": [{"number": r.number, "description": r.description} for r in machine.history],
    }


# -------------------------
# decode
# -------------------------

def _subcategory(name: str) -> BeverageSubCategory:
    try:
        return BeverageSubCategory[name]
    except KeyError:
        raise SnapshotError(f"subcategoria desconhecida: {name!r}") from None


def attributes_from_dict(data: Dict[str, Any]) -> BeverageAttributes:
    fields = dict(data)
    kind = fields.pop("kind", None)
    cls = _ATTRIBUTE_KINDS.get(kind)
    if cls is None:
        raise SnapshotError(f"tipo de atributos desconhecido: {kind!r}")
    return cls(**fields)


def _naive_datetime(value: str) -> datetime:
    # o domínio compara datas com datetime.now(), sem fuso
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        raise SnapshotError(f"data com fuso horário não suportada: {value!r}")
    return parsed


def beverage_from_dict(data: Dict[str, Any]) -> Beverage:
    return Beverage(
        id=str(data["id"]),
        subcategory=_subcategory(data["subcategory"]),
        name=data["name"],
        brand=data["brand"],
        serving_size=int(data["serving_size"]),
        price=Money(int(data["price"])),
        manufacture_date=_naive_datetime(data["manufacture_date"]),
        expiration_date=_naive_datetime(data["expiration_date"]),
        attributes=attributes_from_dict(data["attributes"]),
    )


def pack_from_dict(data: Dict[str, Any]) -> Pack:
    return Pack(
        subcategory=_subcategory(data["subcategory"]),
        title=data["title"],
        price=Money(int(data["price"])),
        is_hot=bool(data.get("hot", False)),
    )


def _history_from_list(items: List[Dict[str, Any]]) -> History:
    records = [HistoryRecord(int(r["number"]), str(r["description"])) for r in items]
    # a próxima compra recebe len + 1; só a sequência 1..n mantém os números únicos
    for expected, record in enumerate(records, start=1):
        if record.number != expected:
            raise SnapshotError(
                f"histórico fora de sequência: esperado {expected}, encontrado {record.number}"
            )
    return History(records)


def machine_from_dict(data: Dict[str, Any]) -> VendingMachine:
    """Reconstrói a máquina a partir de um snapshot.

    Raises:
        SnapshotError: versão não suportada ou campos inválidos.
    """
    if not isinstance(data, dict):
        raise SnapshotError("snapshot deve ser um objeto")
    version = data.get("version")
    if version != SCHEMA_VERSION:
        raise SnapshotError(f"versão de snapshot não suportada: {version!r}")
    try:
        inventory = Inventory(
            beverages=[beverage_from_dict(b) for b in data.get("beverages", [])],
            packs=[pack_from_dict(p) for p in data.get("packs", [])],
        )
        history = _history_from_list(data.get("history", []))
        balance = Money(int(data.get("balance", 0)))
    except SnapshotError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"snapshot inválido: {e}") from e
    return VendingMachine(balance=balance, inventory=inventory, history=history)


# -------------------------
# arquivos JSON
# -------------------------

def save_json(machine: VendingMachine, path: Union[str, Path]) -> None:
    Path(path).write_text(
        json.dumps(machine_to_dict(machine), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def load_json(path: Union[str, Path]) -> VendingMachine:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise SnapshotError(f"arquivo não está em UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"JSON inválido: {e}") from e
    return machine_from_dict(data)
