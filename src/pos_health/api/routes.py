#rotasmart/src/pos_health/api/routes.py

# ============================================================
# 📦 src/pos_health/api/routes.py
# ============================================================

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from loguru import logger
from pydantic import Field

from common.api_schemas import RecordsPayload
from common.errors import TelemetrySourceError
from common.establishment_entity import EstablishmentRecord
from common.text_normalizer import normalize_health_key
from pos_health.application.health_enrichment_use_case import HealthEnrichmentUseCase
from pos_health.domain.health_classifier import classify_device
from pos_health.domain.mock_health_generator import generate_mock_health_data
from pos_health.entities.device_health_entity import DeviceHealthRecord

router = APIRouter()


class MergePayload(RecordsPayload):
    # nome do estabelecimento → máquinas; ausente/vazio → modo demonstração
    healthTable: Optional[Dict[str, List[Dict[str, Any]]]] = Field(default=None)
    useHealthBase: bool = False


def _tabela(payload: MergePayload):
    if not payload.healthTable:
        return {} if not payload.useHealthBase else None

    return {
        normalize_health_key(nome): [DeviceHealthRecord.from_dict(d) for d in devices]
        for nome, devices in payload.healthTable.items()
    }


# ============================================================
# 🩺 Junta rotas + saúde
# ============================================================
@router.post("/merge", tags=["Saúde POS"])
def merge(payload: MergePayload):
    registros = [EstablishmentRecord.from_dict(r) for r in payload.records]
    use_case = HealthEnrichmentUseCase(health_table=_tabela(payload))

    try:
        enriquecidos = use_case.execute(registros)
    except TelemetrySourceError as e:
        logger.error(f"❌ Base de saúde ilegível: {e}")
        raise HTTPException(422, str(e))

    return {
        "records": [r.to_dict() for r in enriquecidos],
        "summary": HealthEnrichmentUseCase.resumo(enriquecidos),
    }


# ============================================================
# 🧪 Mock determinístico
# ============================================================
@router.get("/mock/{name}", tags=["Saúde POS"])
def mock(name: str):
    devices = generate_mock_health_data(name)
    return {
        "name": name,
        "devices": [
            {**d.to_dict(), "status": classify_device(d).value}
            for d in devices
        ],
    }
