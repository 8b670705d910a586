# rotasmart/src/pos_health/application/health_enrichment_use_case.py

# ============================================================
# 📦 src/pos_health/application/health_enrichment_use_case.py
# ============================================================

from collections import Counter
from typing import Dict, List, Optional, Any

from loguru import logger

from common.establishment_entity import EstablishmentRecord
from pos_health.domain.health_classifier import classify_device, health_score
from pos_health.domain.health_join_service import merge_route_and_health_data, HealthTable
from pos_health.infrastructure.health_base_reader import load_health_base


class HealthEnrichmentUseCase:
    """
    Junta a planilha de rotas com a base de saúde das maquininhas.
    - Lê a base (ou recebe a tabela já pronta)
    - Anexa telemetria / gera mocks
    - Resume status por estabelecimento
    """

    def __init__(self, health_base_path: Optional[str] = None, health_table: Optional[HealthTable] = None):
        self.health_base_path = health_base_path
        self.health_table = health_table

    # ------------------------------------------------------------
    def _tabela(self) -> HealthTable:
        if self.health_table is not None:
            return self.health_table
        return load_health_base(self.health_base_path)

    # ------------------------------------------------------------
    def execute(self, records: List[EstablishmentRecord]) -> List[EstablishmentRecord]:
        logger.info(f"🏁 Iniciando enriquecimento de saúde | registros={len(records)}")
        tabela = self._tabela()
        return merge_route_and_health_data(records, tabela)

    # ------------------------------------------------------------
    @staticmethod
    def resumo(records: List[EstablishmentRecord]) -> List[Dict[str, Any]]:
        saida = []
        for r in records:
            devices = r.health_data
            status = Counter(classify_device(d).value for d in devices) if devices else Counter()
            saida.append(
                {
                    "id": r.id,
                    "name": r.name,
                    "devices": None if devices is None else len(devices),
                    "score": health_score(devices),
                    "statuses": dict(status),
                    "priority": r.priority,
                }
            )
        return saida
