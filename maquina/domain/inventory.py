"""
Inventário da máquina: bebidas agrupadas em packs por subtipo.

Regras:
- Cada subtipo adicionado pelo menos uma vez tem um `Pack` registrado,
  mesmo quando a contagem cai para zero (aparece como esgotado).
- Dentro de um subtipo as bebidas ficam em ordem FIFO por data de
  fabricação; a venda e a remoção sempre levam a mais antiga.
- Listagens seguem a ordem da enumeração `BeverageSubCategory`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from maquina.domain.models import Beverage, BeverageSubCategory, Money, Pack


class Inventory:
    def __init__(self, beverages: Iterable[Beverage] = (), packs: Iterable[Pack] = ()):
        self._stock: Dict[BeverageSubCategory, List[Beverage]] = {}
        self._packs: Dict[BeverageSubCategory, Pack] = {}
        for pack in packs:
            self._packs[pack.subcategory] = pack
            self._stock.setdefault(pack.subcategory, [])
        for beverage in beverages:
            self.add(beverage)

    # -------------------------
    # consultas
    # -------------------------

    def _subcategories(self) -> List[BeverageSubCategory]:
        return sorted(self._packs)

    def is_empty(self) -> bool:
        return all(not beverages for beverages in self._stock.values())

    def get_list_of_all(self) -> Dict[Pack, int]:
        """Mapeia cada pack registrado para sua contagem (incluindo esgotados)."""
        return {self._packs[sub]: len(self._stock[sub]) for sub in self._subcategories()}

    def get_list_buyable(self, balance: Money) -> List[Pack]:
        """Packs com estoque cujo preço cabe no saldo."""
        out: List[Pack] = []
        for sub in self._subcategories():
            pack = self._packs[sub]
            if self._stock[sub] and balance.is_affordable(pack.price):
                out.append(pack)
        return out

    def get_list_of_hot_beverages(self) -> List[Pack]:
        return [self._packs[sub] for sub in self._subcategories() if self._packs[sub].is_hot]

    def pack_of(self, subcategory: BeverageSubCategory) -> Optional[Pack]:
        return self._packs.get(subcategory)

    def count(self, pack: Pack) -> int:
        return len(self._stock.get(pack.subcategory, []))

    def has_no_beverage(self, of: BeverageSubCategory) -> bool:
        """True se o pack existe mas está zerado."""
        return of in self._packs and not self._stock[of]

    def beverages(self) -> List[Beverage]:
        """Todas as bebidas em estoque, por subtipo e em ordem FIFO."""
        return [b for sub in self._subcategories() for b in self._stock[sub]]

    def packs(self) -> List[Pack]:
        return [self._packs[sub] for sub in self._subcategories()]

    def __len__(self) -> int:
        return sum(len(beverages) for beverages in self._stock.values())

    # -------------------------
    # mutações
    # -------------------------

    def _refresh_pack(self, sub: BeverageSubCategory) -> None:
        # o pack representa a próxima bebida a ser vendida; zerado, mantém o último
        beverages = self._stock[sub]
        if beverages:
            self._packs[sub] = Pack.representing(beverages[0])

    def add(self, beverage: Beverage) -> None:
        sub = beverage.subcategory
        beverages = self._stock.setdefault(sub, [])
        beverages.append(beverage)
        # sort estável: mesma data de fabricação mantém a ordem de chegada
        beverages.sort(key=lambda b: b.manufacture_date)
        self._refresh_pack(sub)

    def remove(self, selected: Pack) -> Optional[Beverage]:
        """Retira a bebida mais antiga do pack; None se o pack não existe ou está zerado."""
        beverages = self._stock.get(selected.subcategory)
        if not beverages:
            return None
        beverage = beverages.pop(0)
        self._refresh_pack(selected.subcategory)
        return beverage

    def remove_expired_beverages(self, now: Optional[datetime] = None) -> List[Beverage]:
        """Remove e retorna todas as bebidas com validade anterior a `now`."""
        now = now or datetime.now()
        removed: List[Beverage] = []
        for sub in self._subcategories():
            beverages = self._stock[sub]
            expired = [b for b in beverages if b.is_expired(now)]
            if not expired:
                continue
            self._stock[sub] = [b for b in beverages if not b.is_expired(now)]
            self._refresh_pack(sub)
            removed.extend(expired)
        return removed
