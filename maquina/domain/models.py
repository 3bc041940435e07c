"""
Modelos (dataclasses) do domínio da máquina de vendas.

Observação importante:
- Todos os modelos são imutáveis. O único estado mutável do sistema
  fica em `VendingMachine` (saldo, inventário e histórico).
- Os atributos específicos de cada tipo de bebida ficam em um payload
  (`SodaAttributes`, `CoffeeAttributes`, `MilkAttributes`) em vez de
  uma hierarquia de classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Callable, Union
from uuid import uuid4


@dataclass(frozen=True, order=True)
class Money:
    """Valor monetário abstrato, inteiro e nunca negativo."""
    amount: int = 0

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"valor monetário negativo: {self.amount}")

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_affordable(self, price: Money) -> bool:
        """True se `price` cabe neste saldo."""
        return price <= self

    def deducted(self, price: Money) -> Money:
        """Retorna o saldo após descontar `price`.

        Quem chama já garantiu `price <= self`; um preço maior é violação de
        contrato e levanta ``ValueError``.
        """
        if price > self:
            raise ValueError(f"saldo insuficiente: {self.amount} < {price.amount}")
        return Money(self.amount - price.amount)

    def show(self, form: Callable[[int], None]) -> None:
        form(self.amount)

    def __str__(self) -> str:
        return f"{self.amount:,}".replace(",", ".")


class BeverageType(Enum):
    """Classificação grossa das bebidas."""
    SODA = "soda"
    COFFEE = "coffee"
    MILK = "milk"


class BeverageSubCategory(IntEnum):
    """Enumeração fechada dos subtipos que a máquina pode estocar.

    O valor inteiro é o número usado pelo gerente para escolher o subtipo.
    """
    COKE = 1
    SPRITE = 2
    TOP_COFFEE = 3
    CANTATA = 4
    STRAWBERRY_MILK = 5
    CHOCOLATE_MILK = 6

    @property
    def type(self) -> BeverageType:
        return _SUBCATEGORY_TYPES[self]

    @property
    def title(self) -> str:
        return _SUBCATEGORY_TITLES[self]


_SUBCATEGORY_TYPES = {
    BeverageSubCategory.COKE: BeverageType.SODA,
    BeverageSubCategory.SPRITE: BeverageType.SODA,
    BeverageSubCategory.TOP_COFFEE: BeverageType.COFFEE,
    BeverageSubCategory.CANTATA: BeverageType.COFFEE,
    BeverageSubCategory.STRAWBERRY_MILK: BeverageType.MILK,
    BeverageSubCategory.CHOCOLATE_MILK: BeverageType.MILK,
}

_SUBCATEGORY_TITLES = {
    BeverageSubCategory.COKE: "Coca-Cola",
    BeverageSubCategory.SPRITE: "Sprite",
    BeverageSubCategory.TOP_COFFEE: "TOP Café",
    BeverageSubCategory.CANTATA: "Cantata",
    BeverageSubCategory.STRAWBERRY_MILK: "Leite de Morango",
    BeverageSubCategory.CHOCOLATE_MILK: "Leite de Chocolate",
}


@dataclass(frozen=True)
class SodaAttributes:
    is_sugar_free: bool = False
    package_color: str = "red"


@dataclass(frozen=True)
class CoffeeAttributes:
    is_hot: bool = False
    caffeine_mg: int = 0


@dataclass(frozen=True)
class MilkAttributes:
    farm_code: str = ""
    fat_percent: float = 0.0


BeverageAttributes = Union[SodaAttributes, CoffeeAttributes, MilkAttributes]


@dataclass(frozen=True)
class Beverage:
    """Uma unidade de bebida em estoque."""
    subcategory: BeverageSubCategory
    name: str
    brand: str
    serving_size: int                # ml
    price: Money
    manufacture_date: datetime
    expiration_date: datetime
    attributes: BeverageAttributes
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def type(self) -> BeverageType:
        return self.subcategory.type

    @property
    def is_hot(self) -> bool:
        return isinstance(self.attributes, CoffeeAttributes) and self.attributes.is_hot

    @property
    def description(self) -> str:
        return f"{self.name} {self.serving_size}ml ({self.price})"

    def is_expired(self, now: datetime) -> bool:
        """Vencida se a validade é estritamente anterior a `now`."""
        return self.expiration_date < now


@dataclass(frozen=True)
class Pack:
    """Agrupamento de todas as bebidas de um subtipo.

    Igualdade e hash consideram apenas o subtipo; título, preço e o
    indicador de bebida quente vêm da próxima bebida a ser vendida.
    """
    subcategory: BeverageSubCategory
    title: str = field(compare=False)
    price: Money = field(compare=False)
    is_hot: bool = field(default=False, compare=False)

    @classmethod
    def representing(cls, beverage: Beverage) -> Pack:
        return cls(
            subcategory=beverage.subcategory,
            title=beverage.subcategory.title,
            price=beverage.price,
            is_hot=beverage.is_hot,
        )

    @property
    def description(self) -> str:
        return f"{self.title} ({self.price})"
