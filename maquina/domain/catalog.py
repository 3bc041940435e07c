"""
Catálogo de subtipos: uma fábrica de bebidas por `BeverageSubCategory`.

Cada fábrica constrói uma `Beverage` com os atributos padrão do subtipo
(nome, marca, volume, preço e prazo de validade). Preço e datas podem ser
sobrescritos, o que é usado no abastecimento em lote a partir de planilhas.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from maquina.domain.models import (
    Beverage,
    BeverageAttributes,
    BeverageSubCategory,
    CoffeeAttributes,
    MilkAttributes,
    Money,
    SodaAttributes,
)


@dataclass(frozen=True)
class CatalogEntry:
    """Valores padrão de um subtipo."""
    name: str
    brand: str
    serving_size: int
    price: int
    shelf_life_days: int
    attributes: BeverageAttributes


CATALOG: Dict[BeverageSubCategory, CatalogEntry] = {
    BeverageSubCategory.COKE: CatalogEntry(
        "Coca-Cola", "Coca-Cola Company", 350, 1000, 180,
        SodaAttributes(is_sugar_free=False, package_color="red"),
    ),
    BeverageSubCategory.SPRITE: CatalogEntry(
        "Sprite", "Coca-Cola Company", 350, 1000, 180,
        SodaAttributes(is_sugar_free=False, package_color="green"),
    ),
    BeverageSubCategory.TOP_COFFEE: CatalogEntry(
        "TOP Café", "Maxim", 275, 2000, 90,
        CoffeeAttributes(is_hot=True, caffeine_mg=101),
    ),
    BeverageSubCategory.CANTATA: CatalogEntry(
        "Cantata", "Lotte", 275, 1500, 90,
        CoffeeAttributes(is_hot=False, caffeine_mg=80),
    ),
    BeverageSubCategory.STRAWBERRY_MILK: CatalogEntry(
        "Leite de Morango", "Binggrae", 240, 1200, 10,
        MilkAttributes(farm_code="BG-01", fat_percent=2.8),
    ),
    BeverageSubCategory.CHOCOLATE_MILK: CatalogEntry(
        "Leite de Chocolate", "Seoul Milk", 240, 1200, 10,
        MilkAttributes(farm_code="SM-07", fat_percent=3.1),
    ),
}


def create_beverage(
    subcategory: BeverageSubCategory,
    manufacture_date: Optional[datetime] = None,
    expiration_date: Optional[datetime] = None,
    price: Optional[Money] = None,
) -> Beverage:
    """Constrói uma bebida nova do subtipo com os valores do catálogo.

    Args:
        subcategory: Subtipo a ser fabricado.
        manufacture_date: Data de fabricação (padrão: agora).
        expiration_date: Data de validade (padrão: fabricação + prazo do subtipo).
        price: Preço (padrão: preço de catálogo).

    Returns:
        A `Beverage` criada, com identidade nova.
    """
    entry = CATALOG[subcategory]
    made = manufacture_date or datetime.now()
    expires = expiration_date or made + timedelta(days=entry.shelf_life_days)
    return Beverage(
        subcategory=subcategory,
        name=entry.name,
        brand=entry.brand,
        serving_size=entry.serving_size,
        price=price if price is not None else Money(entry.price),
        manufacture_date=made,
        expiration_date=expires,
        attributes=entry.attributes,
    )


def _slug(s: str) -> str:
    s = str(s).strip().lower()
    acentos = dict(zip("áàâãäéèêëíìîïóòôõöúùûüç", "aaaaaeeeeiiiiooooouuuuc"))
    s = "".join(acentos.get(ch, ch) for ch in s)
    return re.sub(r"[^a-z0-9]+", "", s)


_BY_SLUG: Dict[str, BeverageSubCategory] = {}
for _sub in BeverageSubCategory:
    _BY_SLUG[_slug(_sub.name)] = _sub
    _BY_SLUG[_slug(_sub.title)] = _sub


def parse_subcategory(value) -> Optional[BeverageSubCategory]:
    """Interpreta um subtipo a partir do número, do nome do membro ou do título.

    Exemplos:
        "1"            → COKE
        "coke"         → COKE
        "Leite de Morango" → STRAWBERRY_MILK
        "99"           → None
        "1.9"          → None
    """
    if value is None:
        return None
    if isinstance(value, BeverageSubCategory):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        number = float(s)
    except ValueError:
        return _BY_SLUG.get(_slug(s))
    # planilhas trazem "1.0"; "1.9" não é número de subtipo
    if not number.is_integer():
        return None
    try:
        return BeverageSubCategory(int(number))
    except ValueError:
        return None
