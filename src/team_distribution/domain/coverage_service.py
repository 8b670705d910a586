# rotasmart/src/team_distribution/domain/coverage_service.py

# ============================================================
# 📦 src/team_distribution/domain/coverage_service.py
# ============================================================

from dataclasses import dataclass, field
from typing import Dict, List, Any

from loguru import logger

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from common.math_utils import round_half_up
from common.settings import UNCOVERED_REGIONS_LIMIT
from team_distribution.domain.region_matcher import team_covers
from team_distribution.entities.team_entities import Team


ADDRESS_LABEL_MAX = 40


@dataclass
class CoverageReport:
    baseline_capacity: int
    assigned_count: int
    pending_count: int
    remaining_capacity: int
    capacity_health: int
    uncovered_regions: List[str] = field(default_factory=list)
    uncovered_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "baselineCapacity": self.baseline_capacity,
            "assignedCount": self.assigned_count,
            "pendingCount": self.pending_count,
            "remainingCapacity": self.remaining_capacity,
            "capacityHealth": self.capacity_health,
            "uncoveredRegions": list(self.uncovered_regions),
            "uncoveredCount": self.uncovered_count,
        }


# ============================================================
# 🧮 Capacidade
# ============================================================
def baseline_capacity(teams: List[Team]) -> int:
    """Σ (máx. atividades por rota × membros fora de férias) das equipes ativas."""
    return sum(
        t.max_activities_per_route * len(t.available_members)
        for t in teams
        if t.is_active
    )


def capacity_health(remaining: int, pending: int) -> int:
    if pending == 0:
        return 100
    if remaining == 0:
        return 0
    return min(100, round_half_up(remaining / pending * 100))


# ============================================================
# 🗺️ Lacunas geográficas
# ============================================================
def display_label(record: EstablishmentRecord) -> str:
    partes = [p.strip() for p in (record.neighborhood, record.municipality) if p and p.strip()]
    if partes:
        return ", ".join(partes)

    endereco = (record.address or "").strip()
    if endereco:
        if len(endereco) > ADDRESS_LABEL_MAX:
            return endereco[:ADDRESS_LABEL_MAX] + "..."
        return endereco

    return record.name


def is_uncovered(record: EstablishmentRecord, active_teams: List[Team]) -> bool:
    return not any(team_covers(t, record.municipality, record.neighborhood) for t in active_teams)


# ============================================================
# 🚀 Relatório de cobertura
# ============================================================
def compute_coverage(
    records: List[EstablishmentRecord],
    teams: List[Team],
    limit: int = UNCOVERED_REGIONS_LIMIT,
) -> CoverageReport:
    if records is None or teams is None:
        raise InvalidInputError("Registros e equipes são obrigatórios.")

    ativas = [t for t in teams if t.is_active]

    base = baseline_capacity(ativas)
    atribuidos = sum(1 for r in records if r.is_assigned)
    pendentes = [r for r in records if not r.is_assigned]

    restante = max(0, base - atribuidos)
    saude = capacity_health(restante, len(pendentes))

    # dedup preservando a ordem de aparição
    descobertos: Dict[str, None] = {}
    for r in pendentes:
        if is_uncovered(r, ativas):
            descobertos.setdefault(display_label(r), None)

    labels = list(descobertos)

    logger.info(
        f"📊 Cobertura | capacidade={base} | atribuídos={atribuidos} | pendentes={len(pendentes)} | "
        f"restante={restante} | saúde={saude}% | regiões descobertas={len(labels)}"
    )

    return CoverageReport(
        baseline_capacity=base,
        assigned_count=atribuidos,
        pending_count=len(pendentes),
        remaining_capacity=restante,
        capacity_health=saude,
        uncovered_regions=labels[:limit],
        uncovered_count=len(labels),
    )


# ============================================================
# 🔥 Pesos por região (equipe ativa × nº de membros)
# ============================================================
def region_staff_weights(teams: List[Team]) -> Dict[str, int]:
    pesos: Dict[str, int] = {}
    for team in teams:
        if not team.is_active:
            continue
        peso = len(team.members)
        for reg in team.regions:
            chave = f"{reg.neighborhood}, {reg.city}"
            pesos[chave] = pesos.get(chave, 0) + peso
    return pesos
