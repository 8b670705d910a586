# rotasmart/src/team_distribution/application/distribution_use_case.py

# ============================================================
# 📦 src/team_distribution/application/distribution_use_case.py
# ============================================================

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from loguru import logger

from common.errors import ExternalServiceError
from common.establishment_entity import EstablishmentRecord
from team_distribution.domain.coverage_service import compute_coverage, CoverageReport
from team_distribution.domain.portfolio_reconciler import apply_portfolio_rules
from team_distribution.entities.team_entities import Team
from team_distribution.infrastructure.ai_service_client import AIServiceClient


@dataclass
class DistributionResult:
    ok: bool
    records: List[EstablishmentRecord]
    error: Optional[str] = None
    assigned: int = 0
    counts_by_team: Dict[str, int] = field(default_factory=dict)


def apply_distribution(
    records: List[EstablishmentRecord],
    assignments: Dict[str, Dict[str, str]],
) -> List[EstablishmentRecord]:
    """Aplica {activityId: {teamId, memberId, reason}}; atividades fora do mapa ficam como estão."""
    saida = []
    for r in records:
        a = assignments.get(r.id)
        if a and a.get("teamId"):
            saida.append(
                replace(
                    r,
                    assigned_team_id=a["teamId"],
                    assigned_member_id=a.get("memberId") or None,
                    assignment_reason=a.get("reason") or None,
                )
            )
        else:
            saida.append(r)
    return saida


def _contagem_por_equipe(records: List[EstablishmentRecord]) -> Dict[str, int]:
    contagem: Dict[str, int] = {}
    for r in records:
        if r.assigned_team_id:
            contagem[r.assigned_team_id] = contagem.get(r.assigned_team_id, 0) + 1
    return contagem


class DistributionUseCase:
    """
    Distribuição de atividades entre equipes:
    - IA externa decide equipe/membro (substitui atribuições anteriores)
    - carteiras fixas aplicadas por cima de tudo (substituem a IA)
    - em falha da IA, os registros originais voltam intactos
    """

    def __init__(self, client: Optional[AIServiceClient] = None):
        self.client = client or AIServiceClient()

    # ------------------------------------------------------------
    def execute(
        self,
        records: List[EstablishmentRecord],
        teams: List[Team],
        rules: Optional[str] = None,
    ) -> DistributionResult:
        selecionadas = [t for t in teams if t.is_active]
        if not selecionadas:
            return DistributionResult(ok=False, records=list(records), error="Selecione pelo menos uma equipe.")

        logger.info(f"🏁 Iniciando distribuição | atividades={len(records)} | equipes={len(selecionadas)}")

        try:
            assignments = self.client.distribute(records, selecionadas, rules)
        except ExternalServiceError as e:
            logger.error(f"❌ Falha na distribuição inteligente via IA: {e}")
            return DistributionResult(
                ok=False,
                records=list(records),
                error=f"Erro ao processar distribuição: {e}",
            )

        distribuidos = apply_distribution(records, assignments)
        # carteira fixa vence a sugestão da IA
        distribuidos = apply_portfolio_rules(distribuidos, selecionadas, only_unassigned=False)

        contagem = _contagem_por_equipe(distribuidos)
        total = sum(contagem.values())
        logger.success(f"✅ Distribuição concluída | atribuídos={total}/{len(records)}")

        return DistributionResult(ok=True, records=distribuidos, assigned=total, counts_by_team=contagem)

    # ------------------------------------------------------------
    @staticmethod
    def coverage(records: List[EstablishmentRecord], teams: List[Team]) -> CoverageReport:
        return compute_coverage(records, teams)
