"""
CLI da máquina de vendas (Typer).

Comandos do consumidor:
- saldo                   -> mostra o saldo
- inserir <valor>         -> insere dinheiro
- compraveis              -> lista o que o saldo compra
- vitrine                 -> todos os packs, marcando os compráveis
- comprar <n>             -> compra o item n da lista de compráveis

Comandos do gerente:
- migrate                 -> aplica migrações
- catalogo                -> subtipos que podem ser abastecidos
- estoque / quentes       -> inventário completo / bebidas quentes
- adicionar <sub>         -> abastece pelo catálogo
- remover <n>             -> retira uma unidade do subtipo n
- vencidos                -> descarta bebidas vencidas
- historico               -> compras registradas
- abastecer-lote <arq>    -> abastece a partir de XLSX/CSV
- exportar / importar     -> snapshot JSON da máquina
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from maquina.config import DB_PATH
from maquina.infra.migrations import apply_migrations
from maquina.infra.serialization import SnapshotError
from maquina.usecases.consumidor import (
    run_saldo,
    run_inserir,
    run_listar_compraveis,
    run_vitrine,
    run_comprar,
)
from maquina.usecases.gerente import (
    run_estoque,
    run_quentes,
    run_catalogo,
    run_adicionar,
    run_remover,
    run_remover_vencidos,
    run_historico,
    run_abastecer_lote,
    run_exportar,
    run_importar,
)


app = typer.Typer(help="Máquina de Vendas (CLI)")
console = Console()


# -----------------------
# util
# -----------------------

def _print_json(obj) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


def _display_table(data: List[Dict[str, Any]], title: str = "Resultado", empty: str = "Nenhum dado encontrado") -> None:
    """Exibe uma lista de dicionários como tabela Rich."""
    if not data:
        console.print(Panel(empty, title=title, border_style="yellow"))
        return

    table = Table(title=title, box=box.ROUNDED)
    columns = list(data[0].keys())
    for column in columns:
        if column in ("quantidade", "preco", "numero", "validade_dias"):
            table.add_column(column, justify="right")
        else:
            table.add_column(column)

    for row in data:
        values = []
        for col in columns:
            val = row.get(col, "")
            if col == "situacao" and val == "esgotado":
                values.append(f"[bold red]{val}[/]")
            elif col == "compravel" and val == "sim":
                values.append(f"[bold green]{val}[/]")
            else:
                values.append(str(val))
        table.add_row(*values)

    console.print(table)


def _display_result(res: Dict[str, Any], title: str) -> None:
    """Exibe o resultado de uma operação; sai com código 1 em caso de falha."""
    if res.get("erro"):
        console.print(Panel(res["erro"], title=title, border_style="red"))
        raise typer.Exit(code=1)
    linhas = [f"{k}: {v}" for k, v in res.items() if k not in ("sucesso", "erro")]
    console.print(Panel("\n".join(linhas), title=title, border_style="green"))


def _display_batch(data: Dict[str, Any]) -> None:
    panel_content = [
        f"Total de linhas: {data['total']}",
        f"Processadas com sucesso: {data.get('sucessos', 0)}",
        f"Bebidas adicionadas: {data.get('registros', 0)}",
    ]
    if data.get("erros"):
        panel_content.append(f"Erros: {len(data['erros'])}")
    console.print(Panel("\n".join(panel_content), title=f"{data.get('tipo', 'Registros')} em Lote"))

    if data.get("erros"):
        erro_table = Table(title="Erros Encontrados")
        erro_table.add_column("Linha")
        erro_table.add_column("Erro")
        for erro in data["erros"]:
            erro_table.add_row(str(erro.get("linha", "?")), erro.get("mensagem", "Erro desconhecido"))
        console.print(erro_table)


# -----------------------
# comandos de infra
# -----------------------

@app.command("migrate")
def cmd_migrate(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Aplica as migrações do banco da máquina."""
    apply_migrations(db_path)
    typer.echo(f">> Migrações aplicadas em: {db_path}")


# -----------------------
# consumidor
# -----------------------

@app.command("saldo")
def cmd_saldo(
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Mostra o saldo atual."""
    res = run_saldo(db_path=db_path)
    if as_json:
        _print_json(res)
        return
    console.print(f"Saldo atual: [bold]{res['saldo']}[/bold]")


@app.command("inserir")
def cmd_inserir(
    valor: int = typer.Argument(..., help="Valor a inserir (positivo)"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Insere dinheiro na máquina."""
    res = run_inserir(valor, db_path=db_path)
    _display_result(res, title="Inserir Dinheiro")


@app.command("compraveis")
def cmd_compraveis(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Lista as bebidas que o saldo atual compra."""
    res = run_listar_compraveis(db_path=db_path)
    if res["erro"]:
        console.print(Panel(res["erro"], title="Esgotado", border_style="red"))
        return
    itens = [{"numero": i["numero"], "bebida": i["bebida"]} for i in res["itens"]]
    _display_table(itens, title=f"Compráveis (saldo: {res['saldo']})", empty="Saldo insuficiente para qualquer bebida")


@app.command("vitrine")
def cmd_vitrine(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Mostra todos os packs marcando os que podem ser comprados."""
    _display_table(run_vitrine(db_path=db_path), title="Vitrine")


@app.command("comprar")
def cmd_comprar(
    numero: int = typer.Argument(..., help="Número do item na lista de compráveis"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Compra uma bebida da lista de compráveis."""
    res = run_comprar(numero, db_path=db_path)
    _display_result(res, title="Compra")


# -----------------------
# gerente
# -----------------------

@app.command("catalogo")
def cmd_catalogo():
    """Lista os subtipos que podem ser abastecidos."""
    _display_table(run_catalogo(), title="Catálogo")


@app.command("estoque")
def cmd_estoque(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Mostra o inventário completo, incluindo os esgotados."""
    _display_table(run_estoque(db_path=db_path), title="Estoque", empty="Nenhuma bebida foi adicionada")


@app.command("quentes")
def cmd_quentes(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Lista as bebidas quentes."""
    _display_table(run_quentes(db_path=db_path), title="Bebidas Quentes")


@app.command("adicionar")
def cmd_adicionar(
    subcategoria: str = typer.Argument(..., help="Número ou nome do subtipo (veja `catalogo`)"),
    quantidade: int = typer.Option(1, "--quantidade", "-q", help="Unidades a adicionar"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Abastece bebidas do catálogo."""
    res = run_adicionar(subcategoria, quantidade, db_path=db_path)
    _display_result(res, title="Abastecimento")


@app.command("remover")
def cmd_remover(
    numero: int = typer.Argument(..., help="Número do subtipo"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Retira uma unidade de um subtipo."""
    res = run_remover(numero, db_path=db_path)
    _display_result(res, title="Remoção")


@app.command("vencidos")
def cmd_vencidos(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Descarta as bebidas vencidas."""
    _display_table(run_remover_vencidos(db_path=db_path), title="Bebidas Descartadas", empty="Nenhuma bebida vencida")


@app.command("historico")
def cmd_historico(
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Mostra o histórico de compras."""
    linhas = run_historico(db_path=db_path)
    if as_json:
        _print_json(linhas)
        return
    _display_table(linhas, title="Histórico de Compras", empty="Nenhuma compra registrada")


@app.command("abastecer-lote")
def cmd_abastecer_lote(
    path: str = typer.Argument(..., help="Caminho do XLSX/CSV de ABASTECIMENTO"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Abastece a máquina a partir de uma planilha."""
    _display_batch(run_abastecer_lote(path, db_path=db_path))


@app.command("exportar")
def cmd_exportar(
    path: str = typer.Argument(..., help="Arquivo JSON de destino"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Exporta o estado da máquina para JSON."""
    res = run_exportar(path, db_path=db_path)
    typer.echo(f">> Estado exportado para {res['arquivo']} ({res['bebidas']} bebidas)")


@app.command("importar")
def cmd_importar(
    path: str = typer.Argument(..., help="Arquivo JSON de origem"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Substitui o estado da máquina pelo snapshot JSON."""
    try:
        res = run_importar(path, db_path=db_path)
    except (SnapshotError, OSError) as e:
        console.print(Panel(str(e), title="Importação", border_style="red"))
        raise typer.Exit(code=1)
    typer.echo(f">> Estado importado de {res['arquivo']} ({res['bebidas']} bebidas)")


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
