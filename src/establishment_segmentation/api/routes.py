#rotasmart/src/establishment_segmentation/api/routes.py

# ============================================================
# 📦 src/establishment_segmentation/api/routes.py
# ============================================================

from fastapi import APIRouter
from loguru import logger

from common.api_schemas import RecordsPayload
from common.establishment_entity import EstablishmentRecord
from establishment_segmentation.application.segmentation_use_case import executar_segmentacao

router = APIRouter()


# ============================================================
# 🧩 Perfis (K-Means)
# ============================================================
@router.post("/clusters", tags=["Segmentação"])
def clusterizar(payload: RecordsPayload):
    registros = [EstablishmentRecord.from_dict(r) for r in payload.records]
    resultado = executar_segmentacao(registros)

    logger.info(f"🧩 /clusters → {len(resultado['profiles'])} perfis")
    return {
        "profiles": [p.to_dict() for p in resultado["profiles"]],
        "silhouette": resultado["silhouette"],
        "n_records": resultado["n_records"],
    }


# ============================================================
# 📊 Painel analítico completo
# ============================================================
@router.post("/summary", tags=["Segmentação"])
def resumo(payload: RecordsPayload):
    registros = [EstablishmentRecord.from_dict(r) for r in payload.records]
    resultado = executar_segmentacao(registros)

    return {
        "profiles": [p.to_dict() for p in resultado["profiles"]],
        "salesByNeighborhood": resultado["sales_by_neighborhood"],
        "sectorDistribution": resultado["sector_distribution"],
        "bestDayFrequency": resultado["best_day_frequency"],
    }
