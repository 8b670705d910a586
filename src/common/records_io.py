#rotasmart/src/common/records_io.py

import json
import os
import uuid
from typing import List

import pandas as pd
from loguru import logger

from common.establishment_entity import EstablishmentRecord


def detectar_separador(path: str) -> str:
    """Detecta automaticamente o separador do CSV."""
    with open(path, "r", encoding="utf-8-sig") as f:
        linha = f.readline()
        return ";" if ";" in linha else ","


def load_records(path: str) -> List[EstablishmentRecord]:
    """
    Lê registros já no layout canônico (colunas camelCase: id, name, averageSales, ...).
    Aceita .csv, .xlsx/.xls e .json. Linhas sem id recebem um uuid4.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Arquivo não encontrado: {path}")

    ext = os.path.splitext(path)[1].lower()

    if ext == ".json":
        with open(path, "r", encoding="utf-8") as f:
            linhas = json.load(f)
    else:
        if ext in (".xlsx", ".xls"):
            df = pd.read_excel(path, dtype=object)
        else:
            df = pd.read_csv(path, sep=detectar_separador(path), dtype=object, encoding="utf-8-sig")

        df = df.astype(object).where(pd.notna(df), None)
        linhas = df.to_dict(orient="records")

    registros = []
    for linha in linhas:
        if not linha.get("id"):
            linha["id"] = str(uuid.uuid4())
        registros.append(EstablishmentRecord.from_dict(linha))

    logger.info(f"📥 {len(registros)} registros carregados de {path}")
    return registros
