# maquina/adapters/stock_loader.py
"""
Loader de planilhas (XLSX ou CSV) de ABASTECIMENTO.

Essas funções:
- leem a planilha usando pandas;
- normalizam cabeçalhos (acentos, variações, sinônimos);
- retornam listas de dicionários com as chaves esperadas pelo caso de uso
  `run_abastecer_lote`.

Observações:
- Não resolvem a subcategoria: o valor é preservado como texto e
  interpretado por `maquina.domain.catalog.parse_subcategory`.
- Datas são normalizadas para ISO (YYYY-MM-DD); células que não convertem
  são devolvidas em `invalidos` para o caso de uso reportar a linha.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd


# ---------------------------
# utilitários de normalização
# ---------------------------

def _slug(s: str) -> str:
    """Normaliza cabeçalhos: minúsculas, sem acentos, sem não-alfanumérico."""
    if s is None:
        return ""
    s = str(s).strip().lower()
    acentos = dict(zip("áàâãäéèêëíìîïóòôõöúùûüç", "aaaaaeeeeiiiiooooouuuuc"))
    s = "".join(acentos.get(ch, ch) for ch in s)
    s = re.sub(r"[^a-z0-9]+", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def _safe_get(row, key):
    """Lê um valor da linha tratando NA como None."""
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    val = str(val).strip()
    return val or None


def _to_int(val: Any) -> Optional[int]:
    if val is None:
        return None
    try:
        return int(float(str(val).replace(",", ".")))
    except (ValueError, OverflowError):
        return None


def _to_date_iso(val: Any) -> Optional[str]:
    """Converte valor para data ISO (YYYY-MM-DD) se possível."""
    if val is None:
        return None
    s = str(val).strip()
    if not s:
        return None
    # ISO primeiro: com dayfirst o pandas inverteria dia e mês de "2026-01-02"
    try:
        return datetime.strptime(s[:10], "%Y-%m-%d").date().isoformat()
    except ValueError:
        pass
    d = pd.to_datetime(s, dayfirst=True, errors="coerce")
    if pd.isna(d):
        return None
    return d.date().isoformat()


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia colunas com base em sinônimos/variações."""
    aliases = {
        "subcategoria": "subcategoria",
        "bebida": "subcategoria",
        "tipo": "subcategoria",
        "codigo": "subcategoria",
        "cod": "subcategoria",

        "quantidade": "quantidade",
        "qtde": "quantidade",
        "qtd": "quantidade",

        "fabricacao": "fabricacao",
        "data fabricacao": "fabricacao",
        "data de fabricacao": "fabricacao",

        "validade": "validade",
        "data validade": "validade",
        "data de validade": "validade",
        "vencimento": "validade",

        "preco": "preco",
        "valor": "preco",
        "preco unitario": "preco",
    }

    new_cols = {}
    for col in df.columns:
        key = _slug(col)
        new_cols[col] = aliases.get(key, key)  # se não houver alias, mantém slug
    return df.rename(columns=new_cols)


_CONVERSORES = {
    "quantidade": _to_int,
    "fabricacao": _to_date_iso,
    "validade": _to_date_iso,
    "preco": _to_int,
}


def _read_table(path: str) -> pd.DataFrame:
    if Path(path).suffix.lower() == ".csv":
        return pd.read_csv(path, dtype="string")
    return pd.read_excel(path, dtype="string")


# ---------------------------
# loader público
# ---------------------------

def load_abastecimento(path: str) -> List[Dict[str, Any]]:
    """Lê a planilha de ABASTECIMENTO e retorna um registro por linha.

    Campos de saída (chaves do dict por linha):
      - subcategoria: str | None  (número, nome ou título do subtipo)
      - quantidade: int | None
      - fabricacao: ISO date | None
      - validade: ISO date | None
      - preco: int | None
      - invalidos: {campo: texto original} das células preenchidas que não
        puderam ser convertidas (o campo correspondente fica None)
    """
    df = _normalize_columns(_read_table(path))
    out: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        record: Dict[str, Any] = {"subcategoria": _safe_get(row, "subcategoria")}
        invalidos: Dict[str, str] = {}
        for campo, converter in _CONVERSORES.items():
            bruto = _safe_get(row, campo)
            valor = converter(bruto)
            if bruto is not None and valor is None:
                invalidos[campo] = bruto
            record[campo] = valor
        record["invalidos"] = invalidos
        out.append(record)
    return out
