# rotasmart/src/team_distribution/domain/portfolio_reconciler.py

# ============================================================
# 📦 src/team_distribution/domain/portfolio_reconciler.py
# ============================================================

from dataclasses import replace
from typing import List, Optional, Tuple

from loguru import logger

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from common.text_normalizer import normalize_for_match
from team_distribution.domain.region_matcher import team_covers
from team_distribution.entities.team_entities import Team, TeamMember


FIXED_PORTFOLIO_REASON = "Fixed Portfolio"


def find_portfolio_owner(
    record: EstablishmentRecord,
    teams: List[Team],
    require_region_match: bool = True,
) -> Optional[Tuple[Team, TeamMember]]:
    """
    Percorre equipes ativas (ordem da lista) e seus membros (ordem da lista).
    O primeiro membro com um item de carteira igual ao nome normalizado vence.
    Com require_region_match, equipe com regiões só reivindica registros dentro delas
    (equipe sem regiões é global).
    """
    nome = normalize_for_match(record.name)
    if not nome:
        return None

    for team in teams:
        if not team.is_active:
            continue

        if require_region_match and team.regions:
            if not team_covers(team, record.municipality, record.neighborhood):
                continue

        for member in team.members:
            if not member.portfolio:
                continue
            if any(normalize_for_match(cliente) == nome for cliente in member.portfolio):
                return team, member

    return None


def apply_portfolio_rules(
    records: List[EstablishmentRecord],
    teams: List[Team],
    require_region_match: bool = True,
    only_unassigned: bool = True,
) -> List[EstablishmentRecord]:
    """
    Vincula registros à carteira fixa do colaborador. Devolve nova lista.
    Com only_unassigned=False a carteira substitui qualquer atribuição anterior
    (ex.: a sugerida pela IA).
    """
    if records is None or teams is None:
        raise InvalidInputError("Registros e equipes são obrigatórios.")

    saida = []
    vinculados = 0

    for r in records:
        if only_unassigned and r.is_assigned:
            saida.append(r)
            continue

        dono = find_portfolio_owner(r, teams, require_region_match)
        if dono is None:
            saida.append(r)
            continue

        team, member = dono
        saida.append(
            replace(
                r,
                assigned_team_id=team.id,
                assigned_member_id=member.id,
                assignment_reason=FIXED_PORTFOLIO_REASON,
            )
        )
        vinculados += 1

    if vinculados:
        logger.success(f"📌 {vinculados} clientes vinculados às suas carteiras fixas.")
    else:
        logger.info("📌 Nenhum vínculo de carteira encontrado para os clientes listados.")

    return saida
