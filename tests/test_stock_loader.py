"""
Testes do loader de planilhas de abastecimento e do caso de uso em lote.
"""

from pathlib import Path

import pandas as pd

from maquina.adapters.stock_loader import _normalize_columns, load_abastecimento
from maquina.domain.models import BeverageSubCategory as Sub, Money
from maquina.infra.archiver import load_machine
from maquina.usecases.gerente import run_abastecer_lote


def test_normalize_columns_sinonimos():
    df = pd.DataFrame({
        "Bebida": ["coke"],
        "Qtd": ["2"],
        "Data de Fabricação": ["2026-01-01"],
        "Vencimento": ["2026-02-01"],
        "Preço": ["900"],
        "Observação": ["x"],
    })
    cols = list(_normalize_columns(df).columns)
    assert cols == ["subcategoria", "quantidade", "fabricacao", "validade", "preco", "observacao"]


def test_load_abastecimento_csv(tmp_path: Path):
    path = tmp_path / "abastecimento.csv"
    pd.DataFrame({
        "Subcategoria": ["1", "Cantata", "leite de morango"],
        "Quantidade": ["3", "", "2"],
        "Fabricação": ["2026-01-02", "15/01/2026", ""],
        "Validade": ["2026-07-01", "", "2026-01-20"],
        "Preço": ["", "1300", ""],
    }).to_csv(path, index=False)

    rows = load_abastecimento(str(path))
    assert rows == [
        {"subcategoria": "1", "quantidade": 3, "fabricacao": "2026-01-02", "validade": "2026-07-01", "preco": None, "invalidos": {}},
        {"subcategoria": "Cantata", "quantidade": None, "fabricacao": "2026-01-15", "validade": None, "preco": 1300, "invalidos": {}},
        {"subcategoria": "leite de morango", "quantidade": 2, "fabricacao": None, "validade": "2026-01-20", "preco": None, "invalidos": {}},
    ]


def test_load_abastecimento_xlsx(tmp_path: Path):
    path = tmp_path / "abastecimento.xlsx"
    pd.DataFrame({
        "Tipo": ["sprite"],
        "Qtde": ["4"],
    }).to_excel(path, index=False)

    rows = load_abastecimento(str(path))
    assert len(rows) == 1
    assert rows[0]["subcategoria"] == "sprite"
    assert rows[0]["quantidade"] == 4


def test_run_abastecer_lote_reporta_linhas_invalidas(tmp_path: Path):
    planilha = tmp_path / "abastecimento.csv"
    pd.DataFrame({
        "Bebida": ["coke", "guarana", "TOP Café", "sprite"],
        "Quantidade": ["2", "1", "", "-1"],
        "Preço": ["800", "", "", ""],
    }).to_csv(planilha, index=False)
    db_path = str(tmp_path / "maquina.sqlite")

    res = run_abastecer_lote(str(planilha), db_path=db_path)
    assert res["total"] == 4
    assert res["sucessos"] == 2
    assert res["registros"] == 3
    assert [e["linha"] for e in res["erros"]] == [2, 4]

    machine = load_machine(db_path)
    assert machine.count(int(Sub.COKE)) == 2
    assert machine.count(int(Sub.TOP_COFFEE)) == 1
    assert machine.count(int(Sub.SPRITE)) is None
    assert machine.inventory.pack_of(Sub.COKE).price == Money(800)


def test_load_abastecimento_guarda_celulas_invalidas(tmp_path: Path):
    path = tmp_path / "abastecimento.csv"
    pd.DataFrame({
        "Bebida": ["coke", "sprite"],
        "Quantidade": ["dois", "1"],
        "Validade": ["2026-07-01", "31/31/2026"],
    }).to_csv(path, index=False)

    rows = load_abastecimento(str(path))
    assert rows[0]["quantidade"] is None
    assert rows[0]["invalidos"] == {"quantidade": "dois"}
    assert rows[1]["validade"] is None
    assert rows[1]["invalidos"] == {"validade": "31/31/2026"}


def test_run_abastecer_lote_recusa_datas_invalidas(tmp_path: Path):
    planilha = tmp_path / "abastecimento.csv"
    pd.DataFrame({
        "Bebida": ["coke", "sprite", "cantata", "leite de morango"],
        "Fabricação": ["2026-01-10", "2026-03-01", "ontem", "2026-01-10"],
        "Validade": ["nunca", "2026-02-01", "2026-05-01", "2026-01-20"],
    }).to_csv(planilha, index=False)
    db_path = str(tmp_path / "maquina.sqlite")

    res = run_abastecer_lote(str(planilha), db_path=db_path)
    assert res["total"] == 4
    assert res["registros"] == 1
    assert [e["linha"] for e in res["erros"]] == [1, 2, 3]
    assert "validade" in res["erros"][0]["mensagem"]
    assert "anterior" in res["erros"][1]["mensagem"]
    assert "fabricacao" in res["erros"][2]["mensagem"]

    machine = load_machine(db_path)
    assert machine.count(int(Sub.COKE)) is None
    assert machine.count(int(Sub.SPRITE)) is None
    assert machine.count(int(Sub.STRAWBERRY_MILK)) == 1
    (bebida,) = machine.inventory.beverages()
    assert bebida.expiration_date.date().isoformat() == "2026-01-20"
