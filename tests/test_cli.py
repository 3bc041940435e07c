import json
from pathlib import Path
from typer.testing import CliRunner

from maquina.adapters.cli import app

runner = CliRunner()


def test_cli_migrate_e_saldo(tmp_path: Path):
    db_path = tmp_path / "maquina_test.sqlite"
    result = runner.invoke(app, ["migrate", "--db", str(db_path)])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["saldo", "--json", "--db", str(db_path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"saldo": 0}


def test_cli_inserir_recusa_valor_nao_positivo(tmp_path: Path):
    db_path = str(tmp_path / "maquina_test.sqlite")
    result = runner.invoke(app, ["inserir", "0", "--db", db_path])
    assert result.exit_code == 1

    result = runner.invoke(app, ["inserir", "1000", "--db", db_path])
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["saldo", "--json", "--db", db_path])
    assert json.loads(result.stdout) == {"saldo": 1000}


def test_cli_compra_completa(tmp_path: Path):
    db_path = str(tmp_path / "maquina_test.sqlite")
    assert runner.invoke(app, ["adicionar", "coke", "--quantidade", "2", "--db", db_path]).exit_code == 0
    assert runner.invoke(app, ["inserir", "1500", "--db", db_path]).exit_code == 0

    result = runner.invoke(app, ["compraveis", "--db", db_path])
    assert result.exit_code == 0, result.output
    assert "Coca-Cola" in result.stdout

    result = runner.invoke(app, ["comprar", "1", "--db", db_path])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["comprar", "1", "--db", db_path])
    assert result.exit_code == 1

    result = runner.invoke(app, ["saldo", "--json", "--db", db_path])
    assert json.loads(result.stdout) == {"saldo": 500}

    result = runner.invoke(app, ["historico", "--json", "--db", db_path])
    assert json.loads(result.stdout) == [{"numero": 1, "bebida": "Coca-Cola 350ml (1.000)"}]


def test_cli_gerente(tmp_path: Path):
    db_path = str(tmp_path / "maquina_test.sqlite")
    assert runner.invoke(app, ["catalogo"]).exit_code == 0
    assert runner.invoke(app, ["adicionar", "guarana", "--db", db_path]).exit_code == 1
    assert runner.invoke(app, ["remover", "1", "--db", db_path]).exit_code == 1

    assert runner.invoke(app, ["adicionar", "3", "--db", db_path]).exit_code == 0
    result = runner.invoke(app, ["quentes", "--db", db_path])
    assert result.exit_code == 0
    assert "TOP" in result.stdout

    assert runner.invoke(app, ["remover", "3", "--db", db_path]).exit_code == 0
    assert runner.invoke(app, ["remover", "3", "--db", db_path]).exit_code == 1

    result = runner.invoke(app, ["estoque", "--db", db_path])
    assert result.exit_code == 0
    assert "esgotado" in result.stdout

    result = runner.invoke(app, ["vencidos", "--db", db_path])
    assert result.exit_code == 0
    assert "Nenhuma bebida vencida" in result.stdout


def test_cli_exportar_importar(tmp_path: Path):
    db_path = str(tmp_path / "maquina_test.sqlite")
    snapshot = str(tmp_path / "snapshot.json")
    runner.invoke(app, ["adicionar", "sprite", "--db", db_path])
    result = runner.invoke(app, ["exportar", snapshot, "--db", db_path])
    assert result.exit_code == 0, result.output
    assert json.loads(Path(snapshot).read_text(encoding="utf-8"))["version"] == 1

    other_db = str(tmp_path / "outra.sqlite")
    assert runner.invoke(app, ["importar", snapshot, "--db", other_db]).exit_code == 0

    bad = tmp_path / "ruim.json"
    bad.write_text('{"version": 7}', encoding="utf-8")
    assert runner.invoke(app, ["importar", str(bad), "--db", other_db]).exit_code == 1


def test_cli_importar_recusa_snapshot_invalido(tmp_path: Path):
    db_path = str(tmp_path / "maquina_test.sqlite")
    snapshot = tmp_path / "snapshot.json"
    runner.invoke(app, ["adicionar", "coke", "--db", db_path])
    runner.invoke(app, ["inserir", "3000", "--db", db_path])
    runner.invoke(app, ["comprar", "1", "--db", db_path])
    assert runner.invoke(app, ["exportar", str(snapshot), "--db", db_path]).exit_code == 0
    data = json.loads(snapshot.read_text(encoding="utf-8"))

    binario = tmp_path / "binario.json"
    binario.write_bytes(b"\xff\xfe")
    result = runner.invoke(app, ["importar", str(binario), "--db", db_path])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)

    duplicado = tmp_path / "duplicado.json"
    data["history"] = data["history"] * 2
    duplicado.write_text(json.dumps(data), encoding="utf-8")
    result = runner.invoke(app, ["importar", str(duplicado), "--db", db_path])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)

    # o estado salvo continua o anterior
    historico = runner.invoke(app, ["historico", "--json", "--db", db_path])
    assert [h["numero"] for h in json.loads(historico.output)] == [1]
