from datetime import datetime, timedelta

from maquina.domain.catalog import create_beverage
from maquina.domain.history import History, HistoryRecord
from maquina.domain.inventory import Inventory
from maquina.domain.models import BeverageSubCategory as Sub, Money

NOW = datetime(2026, 6, 1, 12, 0)


def _bev(sub, days_ago=1, price=None, expires_in=30):
    made = NOW - timedelta(days=days_ago)
    return create_beverage(
        sub,
        manufacture_date=made,
        expiration_date=NOW + timedelta(days=expires_in),
        price=Money(price) if price is not None else None,
    )


def test_inventario_vazio():
    inv = Inventory()
    assert inv.is_empty()
    assert inv.get_list_of_all() == {}
    assert inv.get_list_buyable(Money(10000)) == []
    assert inv.pack_of(Sub.COKE) is None
    assert not inv.has_no_beverage(of=Sub.COKE)


def test_add_agrupa_por_subtipo_em_ordem_da_enumeracao():
    inv = Inventory()
    inv.add(_bev(Sub.CANTATA))
    inv.add(_bev(Sub.COKE))
    inv.add(_bev(Sub.COKE))

    listing = inv.get_list_of_all()
    assert [p.subcategory for p in listing] == [Sub.COKE, Sub.CANTATA]
    assert list(listing.values()) == [2, 1]
    assert sum(listing.values()) == len(inv) == 3


def test_get_list_buyable_filtra_por_saldo_e_estoque():
    inv = Inventory()
    inv.add(_bev(Sub.COKE, price=700))
    inv.add(_bev(Sub.TOP_COFFEE, price=2000))
    inv.add(_bev(Sub.SPRITE, price=1000))
    inv.remove(inv.pack_of(Sub.SPRITE))

    buyable = inv.get_list_buyable(Money(1000))
    assert [p.subcategory for p in buyable] == [Sub.COKE]
    assert inv.get_list_buyable(Money(699)) == []


def test_pack_zerado_continua_listado_mas_nao_compravel():
    inv = Inventory()
    inv.add(_bev(Sub.COKE))
    pack = inv.pack_of(Sub.COKE)
    assert inv.remove(pack) is not None

    assert inv.is_empty()
    assert inv.get_list_of_all() == {pack: 0}
    assert inv.has_no_beverage(of=Sub.COKE)
    assert inv.get_list_buyable(Money(100000)) == []
    assert inv.remove(pack) is None


def test_remove_fifo_por_data_de_fabricacao():
    inv = Inventory()
    newer = _bev(Sub.COKE, days_ago=1)
    older = _bev(Sub.COKE, days_ago=10)
    inv.add(newer)
    inv.add(older)

    pack = inv.pack_of(Sub.COKE)
    assert inv.remove(pack) == older
    assert inv.remove(pack) == newer


def test_pack_representa_a_proxima_bebida():
    inv = Inventory()
    inv.add(_bev(Sub.COKE, days_ago=1, price=1200))
    inv.add(_bev(Sub.COKE, days_ago=5, price=800))
    assert inv.pack_of(Sub.COKE).price == Money(800)
    inv.remove(inv.pack_of(Sub.COKE))
    assert inv.pack_of(Sub.COKE).price == Money(1200)


def test_remove_pack_inexistente():
    inv = Inventory()
    inv.add(_bev(Sub.COKE))
    other = Inventory()
    other.add(_bev(Sub.SPRITE))
    assert inv.remove(other.pack_of(Sub.SPRITE)) is None
    assert len(inv) == 1


def test_remove_expired_beverages_idempotente():
    inv = Inventory()
    expired = _bev(Sub.STRAWBERRY_MILK, days_ago=20, expires_in=-1)
    fresh = _bev(Sub.STRAWBERRY_MILK, days_ago=2, expires_in=5)
    inv.add(expired)
    inv.add(fresh)
    inv.add(_bev(Sub.COKE))

    assert inv.remove_expired_beverages(NOW) == [expired]
    assert inv.count(inv.pack_of(Sub.STRAWBERRY_MILK)) == 1
    assert inv.remove_expired_beverages(NOW) == []
    assert len(inv) == 2


def test_bebidas_quentes():
    inv = Inventory()
    inv.add(_bev(Sub.TOP_COFFEE))
    inv.add(_bev(Sub.CANTATA))
    inv.add(_bev(Sub.COKE))
    assert [p.subcategory for p in inv.get_list_of_hot_beverages()] == [Sub.TOP_COFFEE]


def test_inventario_restaurado_com_packs_esgotados():
    inv = Inventory()
    inv.add(_bev(Sub.COKE))
    inv.remove(inv.pack_of(Sub.COKE))

    restored = Inventory(beverages=inv.beverages(), packs=inv.packs())
    assert restored.get_list_of_all() == inv.get_list_of_all()
    assert restored.has_no_beverage(of=Sub.COKE)


def test_historico_sequencial_e_igualdade():
    h = History()
    assert h.is_empty()
    h.update(_bev(Sub.COKE))
    h.update(_bev(Sub.SPRITE))
    assert [r.number for r in h] == [1, 2]

    shown = []
    h.show_list(lambda n, d: shown.append((n, d)))
    assert shown == [(r.number, r.description) for r in h.records]

    assert h == History(h.records)
    assert h != History([HistoryRecord(1, h.records[0].description)])
