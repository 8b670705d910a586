# rotasmart/src/pos_health/infrastructure/health_base_reader.py

# ============================================================
# 📦 src/pos_health/infrastructure/health_base_reader.py
# ============================================================

import os
import re
import uuid
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from common.errors import TelemetrySourceError
from common.records_io import detectar_separador
from common.settings import HEALTH_BASE_PATH
from pos_health.domain.health_join_service import group_by_establishment
from pos_health.entities.device_health_entity import DeviceHealthRecord, PaperStatus


# coluna lógica → trechos aceitos no cabeçalho (minúsculo)
COLUNAS = {
    "establishment": ["nome do estabelecimento"],
    "machine_id": ["id máquina", "id maquina"],
    "model": ["modelo"],
    "signal": ["sinal wifi"],
    "errors": ["taxa de erros"],
    "battery": ["bateria"],
    "paper": ["bobina"],
    "uptime": ["tempo médio ligado", "tempo medio ligado"],
    "incidents": ["incidentes abertos"],
    "firmware": ["firmware"],
    "last_update": ["ultima atualização", "última atualização", "ultima atualizacao"],
}


# ============================================================
# 🔤 Helpers
# ============================================================
def _mapear_colunas(columns) -> Dict[str, Optional[str]]:
    cabecalho = {str(c).strip().lower(): c for c in columns}
    mapa = {}
    for logico, trechos in COLUNAS.items():
        mapa[logico] = next(
            (orig for low, orig in cabecalho.items() if any(t in low for t in trechos)),
            None,
        )
    return mapa


# número no início da célula: "85%" → 85, "12,5" → 12 (vírgula encerra o número)
_INT_RE = re.compile(r"\s*([-+]?\d+)")
_FLOAT_RE = re.compile(r"\s*([-+]?\d+(?:\.\d+)?)")


def _int(valor) -> int:
    if valor is None:
        return 0
    m = _INT_RE.match(str(valor))
    return int(m.group(1)) if m else 0


def _float(valor) -> float:
    if valor is None:
        return 0.0
    m = _FLOAT_RE.match(str(valor))
    return float(m.group(1)) if m else 0.0


def normalizar_modelo(valor) -> str:
    texto = str(valor or "").lower()
    if "mini" in texto:
        return "Point Mini"
    return "Point Smart 2"


def _texto(valor) -> Optional[str]:
    if valor is None or (isinstance(valor, float) and pd.isna(valor)):
        return None
    texto = str(valor).strip()
    return texto or None


# ============================================================
# 📥 Leitura
# ============================================================
def _ler_planilha(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext in (".xlsx", ".xls"):
        return pd.read_excel(path, dtype=object)
    return pd.read_csv(path, sep=detectar_separador(path), dtype=object, encoding="utf-8-sig")


def load_health_base(path: Optional[str] = None) -> Dict[str, List[DeviceHealthRecord]]:
    """
    Carrega a base de saúde e agrupa por estabelecimento (nome minúsculo).
    Arquivo inexistente → {} (modo demonstração).
    Arquivo ilegível → TelemetrySourceError.
    """
    path = path or HEALTH_BASE_PATH

    if not os.path.exists(path):
        logger.warning(f"⚠️ Base de saúde não encontrada em {path}. Usando mocks.")
        return {}

    try:
        df = _ler_planilha(path)
    except Exception as e:
        logger.error(f"❌ Erro ao ler base de saúde {path}: {e}")
        raise TelemetrySourceError(f"Falha ao ler base de saúde: {e}") from e

    if df.empty:
        return {}

    col = _mapear_colunas(df.columns)
    if col["establishment"] is None:
        raise TelemetrySourceError("Coluna 'Nome do Estabelecimento' não encontrada na base de saúde.")

    def get(row, logico):
        nome = col[logico]
        return row.get(nome) if nome is not None else None

    linhas = []
    for row in df.to_dict(orient="records"):
        nome = _texto(get(row, "establishment"))
        if not nome:
            continue

        device = DeviceHealthRecord(
            machine_id=_texto(get(row, "machine_id")) or f"UNK-{uuid.uuid4().hex[:5]}",
            model=normalizar_modelo(get(row, "model")),
            signal_strength=_int(get(row, "signal")),
            battery_level=_int(get(row, "battery")),
            error_rate=_int(get(row, "errors")),
            paper_status=PaperStatus.parse(_texto(get(row, "paper"))),
            firmware_version=_texto(get(row, "firmware")) or "v?.?",
            incidents=_int(get(row, "incidents")),
            avg_uptime=_float(get(row, "uptime")),
            last_update=_texto(get(row, "last_update")),
        )
        linhas.append({"establishment": nome, "device": device})

    tabela = group_by_establishment(linhas)
    logger.success(f"✅ Base de saúde carregada: {len(tabela)} estabelecimentos encontrados.")
    return tabela
