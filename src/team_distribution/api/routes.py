#rotasmart/src/team_distribution/api/routes.py

# ============================================================
# 📦 src/team_distribution/api/routes.py
# ============================================================

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import Field

from common.api_schemas import RecordsPayload, TeamSchema
from common.establishment_entity import EstablishmentRecord
from team_distribution.application.distribution_use_case import DistributionUseCase
from team_distribution.domain.coverage_service import compute_coverage, region_staff_weights
from team_distribution.domain.portfolio_reconciler import apply_portfolio_rules
from team_distribution.entities.team_entities import Team
from team_distribution.infrastructure.ai_service_client import AIServiceClient

router = APIRouter()


class TeamsPayload(RecordsPayload):
    teams: List[TeamSchema] = Field(default_factory=list)
    rules: Optional[str] = None
    requireRegionMatch: bool = True


def get_ai_client() -> AIServiceClient:
    return AIServiceClient()


def _entrada(payload: TeamsPayload):
    registros = [EstablishmentRecord.from_dict(r) for r in payload.records]
    equipes = [Team.from_dict(t.model_dump()) for t in payload.teams]
    return registros, equipes


# ============================================================
# 📌 Carteiras fixas
# ============================================================
@router.post("/portfolio", tags=["Distribuição"])
def carteira(payload: TeamsPayload):
    registros, equipes = _entrada(payload)
    saida = apply_portfolio_rules(registros, equipes, payload.requireRegionMatch)
    return {"records": [r.to_dict() for r in saida]}


# ============================================================
# 📊 Cobertura e capacidade
# ============================================================
@router.post("/coverage", tags=["Distribuição"])
def cobertura(payload: TeamsPayload):
    registros, equipes = _entrada(payload)
    relatorio = compute_coverage(registros, equipes)
    return {**relatorio.to_dict(), "regionWeights": region_staff_weights(equipes)}


# ============================================================
# 🤖 Distribuição via IA
# ============================================================
@router.post("/ai", tags=["Distribuição"])
def distribuir(payload: TeamsPayload, client: AIServiceClient = Depends(get_ai_client)):
    registros, equipes = _entrada(payload)
    resultado = DistributionUseCase(client).execute(registros, equipes, payload.rules)

    if not resultado.ok:
        logger.warning(f"⚠️ Distribuição abortada: {resultado.error}")
        raise HTTPException(502, resultado.error)

    return {
        "records": [r.to_dict() for r in resultado.records],
        "assigned": resultado.assigned,
        "countsByTeam": resultado.counts_by_team,
    }
