# ============================================================
# 📦 src/establishment_segmentation/domain/feature_extractor.py
# ============================================================

import math
from datetime import time as dt_time
from typing import List, Optional

from loguru import logger

from common.establishment_entity import EstablishmentRecord
from establishment_segmentation.entities.segmentation_entities import FeatureVector


DEFAULT_OPEN = 9.0
DEFAULT_CLOSE = 18.0
MAX_TIME = 24.0


# ============================================================
# ⏱️ "HH:MM" → horas decimais
# ============================================================
def _to_number(texto: str) -> Optional[float]:
    texto = texto.strip()
    if texto == "":
        return 0.0
    try:
        valor = float(texto)
    except ValueError:
        return None
    return valor if math.isfinite(valor) else None


def time_to_decimal(valor) -> float:
    """
    Converte "08:30" → 8.5.
    Qualquer coisa não parseável vira 0 (o chamador aplica o default).
    """
    if valor is None:
        return 0.0

    if isinstance(valor, dt_time):
        return valor.hour + valor.minute / 60

    partes = str(valor).split(":")
    horas = _to_number(partes[0])
    if horas is None:
        return 0.0

    minutos = _to_number(partes[1]) if len(partes) > 1 else 0.0
    return horas + (minutos or 0.0) / 60


def open_hour(record: EstablishmentRecord) -> float:
    # 00:00 conta como ausente
    return time_to_decimal(record.open_time) or DEFAULT_OPEN


def close_hour(record: EstablishmentRecord) -> float:
    return time_to_decimal(record.close_time) or DEFAULT_CLOSE


def sales_value(record: EstablishmentRecord) -> float:
    """Venda média numérica; ausente, NaN ou lixo → 0."""
    valor = record.average_sales

    if valor is None or isinstance(valor, bool):
        return 0.0

    if isinstance(valor, str):
        try:
            valor = float(valor.strip())
        except ValueError:
            return 0.0

    try:
        valor = float(valor)
    except (TypeError, ValueError):
        return 0.0

    return valor if math.isfinite(valor) else 0.0


# ============================================================
# 🧮 Extração + normalização do lote
# ============================================================
def extract_features(records: List[EstablishmentRecord]) -> List[FeatureVector]:
    """
    Gera 1 FeatureVector por registro, na mesma ordem.
    - vendas normalizadas pelo máximo do lote (mínimo 1)
    - horários normalizados por 24
    """
    features = []
    for r in records:
        sales = sales_value(r)
        abre = open_hour(r)
        fecha = close_hour(r)
        if fecha < abre:
            fecha += 24  # fecha após a meia-noite
        features.append(FeatureVector(sales=sales, open=abre, close=fecha, duration=fecha - abre))

    if not features:
        return features

    max_sales = max(max(f.sales for f in features), 1.0)

    for f in features:
        f.n_sales = f.sales / max_sales
        f.n_open = f.open / MAX_TIME
        f.n_close = f.close / MAX_TIME

    logger.debug(f"🧮 {len(features)} vetores extraídos | max_vendas={max_sales:.2f}")
    return features
