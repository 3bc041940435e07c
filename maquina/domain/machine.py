"""
Máquina de vendas: dona única do saldo, do inventário e do histórico.

Operações do consumidor:
- insert / get_list_buyable / buy / is_empty

Operações do gerente:
- add_beverage / add / remove / remove_expired_beverages

Além disso expõe callbacks de exibição (`show_*`) que entregam dados
simples para a camada de apresentação, sem formatar mensagens.

Falhas são valores de retorno (False, None ou um `VendingError`) e nunca
deixam o estado parcialmente alterado.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Tuple, Union

from maquina.domain.catalog import create_beverage
from maquina.domain.history import History
from maquina.domain.inventory import Inventory
from maquina.domain.models import Beverage, BeverageSubCategory, Money, Pack


class VendingError(Enum):
    OUT_OF_STOCK = "out_of_stock"
    NOT_EXIST_PACK = "not_exist_pack"
    CANNOT_REMOVE = "cannot_remove"
    INVALID_AMOUNT = "invalid_amount"
    NOT_BUYABLE = "not_buyable"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    VendingError.OUT_OF_STOCK: "Desculpe, todos os itens estão esgotados. Reposição prevista para amanhã.",
    VendingError.NOT_EXIST_PACK: "Tipo de bebida que nunca foi adicionado.",
    VendingError.CANNOT_REMOVE: "Não há mais estoque desta bebida.",
    VendingError.INVALID_AMOUNT: "Valor inválido: insira um valor positivo.",
    VendingError.NOT_BUYABLE: "Bebida indisponível ou saldo insuficiente.",
}


class VendingMachine:
    def __init__(
        self,
        balance: Optional[Money] = None,
        inventory: Optional[Inventory] = None,
        history: Optional[History] = None,
    ):
        self._balance = balance if balance is not None else Money()
        self._inventory = inventory if inventory is not None else Inventory()
        self._history = history if history is not None else History()

    # -------------------------
    # projeções (somente leitura)
    # -------------------------

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    @property
    def history(self) -> History:
        return self._history

    def count(self, index: int) -> Optional[int]:
        """Contagem do pack pelo número do subtipo; None se não existe."""
        pack = self._pack_by_number(index)
        if pack is None:
            return None
        return self._inventory.count(pack)

    def get_list_of_hot_beverages(self) -> List[Pack]:
        return self._inventory.get_list_of_hot_beverages()

    def has_equal_history(self, other: History) -> bool:
        return self._history == other

    def _pack_by_number(self, number: int) -> Optional[Pack]:
        try:
            sub = BeverageSubCategory(number)
        except ValueError:
            return None
        return self._inventory.pack_of(sub)

    # -------------------------
    # consumidor
    # -------------------------

    def is_empty(self) -> bool:
        return self._inventory.is_empty()

    def insert(self, money: Union[int, Money]) -> bool:
        """Soma `money` ao saldo; valores não positivos são recusados."""
        amount = money.amount if isinstance(money, Money) else int(money)
        if amount <= 0:
            return False
        self._balance = self._balance + Money(amount)
        return True

    def get_list_buyable(self) -> List[Pack]:
        return self._inventory.get_list_buyable(self._balance)

    def buy(self, pack: Pack) -> Optional[Beverage]:
        """Compra uma unidade do pack.

        Só packs presentes na lista de compráveis são aceitos, o que garante
        que o preço cabe no saldo. Retirada do estoque, desconto do saldo e
        registro no histórico acontecem juntos; em caso de falha nada muda.

        Returns:
            A bebida vendida ou None.
        """
        if pack not in self.get_list_buyable():
            return None
        beverage = self._inventory.remove(selected=pack)
        if beverage is None:
            return None
        self._balance = self._balance.deducted(beverage.price)
        self._history.update(purchase=beverage)
        return beverage

    def show_balance(self, form: Callable[[int], None]) -> None:
        self._balance.show(form)

    def show_list_of_buyable(self, show: Callable[[bool, int, str], None]) -> None:
        """Chama `show(ultimo, posicao, descricao)` para cada pack comprável (posição a partir de 1)."""
        buyable = self.get_list_buyable()
        for number, pack in enumerate(buyable, start=1):
            show(number == len(buyable), number, pack.description)

    def show_list_of_all_marked(self, show: Callable[[str, int, bool], None]) -> None:
        """Chama `show(descricao, quantidade, compravel)` para todos os packs."""
        buyable = self.get_list_buyable()
        for pack, quantity in self._inventory.get_list_of_all().items():
            show(pack.description, quantity, pack in buyable)

    # -------------------------
    # gerente
    # -------------------------

    def add_beverage(self, beverage: Beverage) -> None:
        self._inventory.add(beverage)

    def add(self, subcategory: BeverageSubCategory, now: Optional[datetime] = None) -> bool:
        """Fabrica uma bebida do subtipo com os valores de catálogo e a estoca."""
        self._inventory.add(create_beverage(subcategory, manufacture_date=now))
        return True

    def remove(self, number: int) -> Tuple[Optional[Beverage], Optional[VendingError]]:
        """Retira uma unidade do subtipo de número `number`.

        Returns:
            (bebida, None) em caso de sucesso; (None, NOT_EXIST_PACK) se o
            número não corresponde a um pack; (None, CANNOT_REMOVE) se o
            pack está zerado.
        """
        pack = self._pack_by_number(number)
        if pack is None:
            return None, VendingError.NOT_EXIST_PACK
        beverage = self._inventory.remove(selected=pack)
        if beverage is None:
            return None, VendingError.CANNOT_REMOVE
        return beverage, None

    def remove_expired_beverages(self, now: Optional[datetime] = None) -> List[Beverage]:
        return self._inventory.remove_expired_beverages(now)

    def show_list_of_all(self, show: Callable[[str, int, bool], None]) -> None:
        """Chama `show(titulo, quantidade, tem_estoque)` para cada pack registrado."""
        for pack, quantity in self._inventory.get_list_of_all().items():
            if self._inventory.has_no_beverage(of=pack.subcategory):
                show(pack.title, 0, False)
                continue
            show(pack.title, quantity, True)

    def has_history(self) -> bool:
        return not self._history.is_empty()

    def show_history(self, show: Callable[[int, str], None]) -> None:
        self._history.show_list(show)
