from datetime import datetime, timedelta

import pytest

from maquina.domain.catalog import CATALOG, create_beverage, parse_subcategory
from maquina.domain.models import (
    BeverageSubCategory,
    BeverageType,
    CoffeeAttributes,
    Money,
    Pack,
    SodaAttributes,
)


def test_money_soma_e_comparacao():
    assert Money(300) + Money(700) == Money(1000)
    assert Money(700) < Money(1000)
    assert Money(1000).is_affordable(Money(1000))
    assert not Money(999).is_affordable(Money(1000))
    assert Money().amount == 0
    assert not Money().is_positive()


def test_money_nunca_negativo():
    with pytest.raises(ValueError):
        Money(-1)
    with pytest.raises(ValueError):
        Money(100).deducted(Money(101))
    assert Money(1000).deducted(Money(700)) == Money(300)


def test_money_show_e_str():
    shown = []
    Money(1500).show(shown.append)
    assert shown == [1500]
    assert str(Money(1500)) == "1.500"


def test_subcategoria_tipo_e_titulo():
    assert BeverageSubCategory.COKE.type is BeverageType.SODA
    assert BeverageSubCategory.CANTATA.type is BeverageType.COFFEE
    assert BeverageSubCategory.CHOCOLATE_MILK.type is BeverageType.MILK
    assert BeverageSubCategory(1) is BeverageSubCategory.COKE
    # todo subtipo tem exatamente uma fábrica
    assert set(CATALOG) == set(BeverageSubCategory)


def test_create_beverage_usa_catalogo():
    made = datetime(2026, 1, 1, 9, 0)
    b = create_beverage(BeverageSubCategory.COKE, manufacture_date=made)
    assert b.price == Money(1000)
    assert b.expiration_date == made + timedelta(days=180)
    assert isinstance(b.attributes, SodaAttributes)
    assert b.type is BeverageType.SODA
    assert not b.is_hot


def test_create_beverage_sobrescreve_preco_e_validade():
    made = datetime(2026, 1, 1)
    exp = datetime(2026, 1, 5)
    b = create_beverage(BeverageSubCategory.TOP_COFFEE, manufacture_date=made, expiration_date=exp, price=Money(700))
    assert b.price == Money(700)
    assert b.expiration_date == exp
    assert isinstance(b.attributes, CoffeeAttributes)
    assert b.is_hot


def test_bebidas_tem_identidade_unica():
    a = create_beverage(BeverageSubCategory.SPRITE)
    b = create_beverage(BeverageSubCategory.SPRITE)
    assert a.id != b.id
    assert a != b


def test_is_expired_estritamente_antes():
    exp = datetime(2026, 3, 1, 12, 0)
    b = create_beverage(BeverageSubCategory.STRAWBERRY_MILK, manufacture_date=datetime(2026, 2, 20), expiration_date=exp)
    assert not b.is_expired(exp)
    assert b.is_expired(exp + timedelta(seconds=1))


def test_pack_igualdade_por_subtipo():
    a = Pack(BeverageSubCategory.COKE, "Coca-Cola", Money(1000))
    b = Pack(BeverageSubCategory.COKE, "Outro título", Money(700))
    assert a == b
    assert hash(a) == hash(b)
    assert a != Pack(BeverageSubCategory.SPRITE, "Sprite", Money(1000))
    assert a.description == "Coca-Cola (1.000)"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1", BeverageSubCategory.COKE),
        (3, BeverageSubCategory.TOP_COFFEE),
        ("coke", BeverageSubCategory.COKE),
        ("STRAWBERRY_MILK", BeverageSubCategory.STRAWBERRY_MILK),
        ("Leite de Chocolate", BeverageSubCategory.CHOCOLATE_MILK),
        ("top cafe", BeverageSubCategory.TOP_COFFEE),
        ("99", None),
        ("1.0", BeverageSubCategory.COKE),
        ("1.9", None),
        ("inf", None),
        ("", None),
        (None, None),
        ("guaraná", None),
    ],
)
def test_parse_subcategory(value, expected):
    assert parse_subcategory(value) is expected
