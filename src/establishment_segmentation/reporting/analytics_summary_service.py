# ============================================================
# 📦 src/establishment_segmentation/reporting/analytics_summary_service.py
# ============================================================

import math
from typing import List, Dict, Any

import pandas as pd

from common.establishment_entity import EstablishmentRecord
from common.math_utils import round_half_up
from establishment_segmentation.domain.feature_extractor import sales_value


DIAS_CURTOS = {
    "segunda": "Seg", "monday": "Seg", "seg": "Seg",
    "terça": "Ter", "terca": "Ter", "tuesday": "Ter", "ter": "Ter",
    "quarta": "Qua", "wednesday": "Qua", "qua": "Qua",
    "quinta": "Qui", "thursday": "Qui", "qui": "Qui",
    "sexta": "Sex", "friday": "Sex", "sex": "Sex",
    "sábado": "Sáb", "sabado": "Sáb", "saturday": "Sáb", "sab": "Sáb",
    "domingo": "Dom", "sunday": "Dom", "dom": "Dom",
}
ORDEM_DIAS = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]


# ============================================================
# 💵 Venda média por bairro (top N)
# ============================================================
def sales_by_neighborhood(records: List[EstablishmentRecord], top: int = 10) -> List[Dict[str, Any]]:
    """
    Agrupa por bairro (ou município, ou 'Outros').
    Só entram na média registros com venda != 0; grupo sem vendas fica com 0.
    """
    if not records:
        return []

    df = pd.DataFrame(
        {
            "name": [r.neighborhood or r.municipality or "Outros" for r in records],
            "sales": [sales_value(r) for r in records],
        }
    )
    df["sales"] = df["sales"].where(df["sales"] != 0)

    agrupado = df.groupby("name", sort=False)["sales"].agg(["sum", "count"]).reset_index()
    agrupado["avg"] = [
        round_half_up(s / c) if c > 0 else 0
        for s, c in zip(agrupado["sum"], agrupado["count"])
    ]

    agrupado = agrupado.sort_values("avg", ascending=False, kind="stable").head(top)
    return [{"name": n, "avg": int(a)} for n, a in zip(agrupado["name"], agrupado["avg"])]


# ============================================================
# 🏭 Distribuição por setor
# ============================================================
def sector_distribution(records: List[EstablishmentRecord]) -> List[Dict[str, Any]]:
    if not records:
        return []

    setores = pd.Series([r.sector or "Não Informado" for r in records])
    contagem = setores.groupby(setores, sort=False).size()
    total = len(setores)

    df = pd.DataFrame({"name": contagem.index, "value": contagem.values})
    df = df.sort_values("value", ascending=False, kind="stable")

    return [
        {"name": n, "value": int(v), "percent": float(v) / total * 100}
        for n, v in zip(df["name"], df["value"])
    ]


# ============================================================
# 📅 Frequência do melhor dia
# ============================================================
def _dia_curto(texto: str) -> str:
    limpo = texto.lower().split("-")[0].strip()
    return DIAS_CURTOS.get(limpo, limpo)


def best_day_frequency(records: List[EstablishmentRecord]) -> List[Dict[str, Any]]:
    """Contagem por dia da semana (Seg..Dom); dias não reconhecidos vêm antes."""
    dias = [_dia_curto(r.best_day) for r in records if r.best_day]
    if not dias:
        return []

    serie = pd.Series(dias)
    contagem = serie.groupby(serie, sort=False).size()
    itens = [{"day": d, "count": int(c)} for d, c in contagem.items()]

    return sorted(itens, key=lambda i: ORDEM_DIAS.index(i["day"]) if i["day"] in ORDEM_DIAS else -1)


# ============================================================
# ⏱️ Horas decimais → "HH:MM"
# ============================================================
def format_decimal_time(dec: float) -> str:
    horas = math.floor(dec)
    minutos = round_half_up((dec - horas) * 60)
    if minutos == 60:
        horas += 1
        minutos = 0
    return f"{horas:02d}:{minutos:02d}"
