# tests/team_distribution/test_portfolio_reconciler.py

import pytest

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from team_distribution.domain.portfolio_reconciler import (
    FIXED_PORTFOLIO_REASON,
    apply_portfolio_rules,
    find_portfolio_owner,
)
from team_distribution.domain.region_matcher import region_matches, team_covers
from team_distribution.entities.team_entities import ServiceRegion, Team, TeamMember


def _team(team_id, membros, regioes=None, ativa=True):
    return Team(
        id=team_id,
        name=f"Equipe {team_id}",
        is_active=ativa,
        regions=[ServiceRegion(*r) for r in (regioes or [])],
        members=membros,
    )


def _membro(member_id, carteira):
    return TeamMember(id=member_id, name=f"Membro {member_id}", portfolio=carteira)


def test_vincula_pela_carteira_com_nome_normalizado():
    equipes = [_team("t1", [_membro("m1", ["Mercado X"]), _membro("m2", ["Padaria Silva"])])]
    records = [EstablishmentRecord(id="1", name=" padaria  silva ")]

    saida = apply_portfolio_rules(records, equipes)

    assert saida[0].assigned_team_id == "t1"
    assert saida[0].assigned_member_id == "m2"
    assert saida[0].assignment_reason == FIXED_PORTFOLIO_REASON
    assert records[0].assigned_team_id is None


def test_registros_ja_atribuidos_nao_mudam():
    equipes = [_team("t1", [_membro("m1", ["Padaria Silva"])])]
    r = EstablishmentRecord(id="1", name="Padaria Silva", assigned_team_id="t9", assigned_member_id="m9")

    saida = apply_portfolio_rules([r], equipes)

    assert saida[0] is r
    assert saida[0].assigned_team_id == "t9"


def test_equipe_inativa_e_ignorada():
    equipes = [
        _team("t1", [_membro("m1", ["Bar do Zé"])], ativa=False),
        _team("t2", [_membro("m2", ["Bar do Zé"])]),
    ]

    dono = find_portfolio_owner(EstablishmentRecord(id="1", name="Bar do Zé"), equipes)

    assert dono[0].id == "t2"
    assert dono[1].id == "m2"


def test_primeira_equipe_e_primeiro_membro_vencem():
    equipes = [
        _team("t1", [_membro("m1", []), _membro("m2", ["bar do ze"]), _membro("m3", ["Bar do Zé"])]),
        _team("t2", [_membro("m4", ["Bar do Zé"])]),
    ]

    team, member = find_portfolio_owner(EstablishmentRecord(id="1", name="BAR DO ZÉ"), equipes)

    assert (team.id, member.id) == ("t1", "m2")


def test_equipe_com_regioes_so_reivindica_dentro_delas():
    equipes = [_team("rj", [_membro("m1", ["Bar do Zé"])], regioes=[("Rio de Janeiro", "")])]
    r = EstablishmentRecord(id="1", name="Bar do Zé", municipality="São Paulo", neighborhood="Pinheiros")

    assert apply_portfolio_rules([r], equipes)[0].assigned_team_id is None
    assert apply_portfolio_rules([r], equipes, require_region_match=False)[0].assigned_team_id == "rj"


def test_sem_vinculo_devolve_registro_intacto():
    equipes = [_team("t1", [_membro("m1", ["Outro Cliente"])])]
    r = EstablishmentRecord(id="1", name="Padaria Silva")

    assert apply_portfolio_rules([r], equipes) == [r]


def test_nome_vazio_nao_casa():
    equipes = [_team("t1", [_membro("m1", ["!!!"])])]
    assert find_portfolio_owner(EstablishmentRecord(id="1", name=""), equipes) is None


def test_entrada_ausente_e_erro():
    with pytest.raises(InvalidInputError):
        apply_portfolio_rules(None, [])


def test_region_matches_normalizado_e_por_contencao():
    assert region_matches(ServiceRegion("São Paulo", "Pinheiros"), "SAO PAULO", "pinheiros")
    assert region_matches(ServiceRegion("São Paulo", ""), "São Paulo", "Lapa")
    assert region_matches(ServiceRegion("São Paulo", "Vila"), "São Paulo", "Vila Madalena")
    assert not region_matches(ServiceRegion("São Paulo", "Pinheiros"), "São Paulo", "Lapa")


def test_equipe_sem_regioes_nao_cobre_nada():
    assert not team_covers(_team("t1", []), "São Paulo", "Pinheiros")


def test_modo_substituicao_sobrescreve_atribuicao_anterior():
    equipes = [_team("t1", [_membro("m1", ["Padaria Silva"])])]
    r = EstablishmentRecord(id="1", name="Padaria Silva", assigned_team_id="t9", assigned_member_id="m9")

    saida = apply_portfolio_rules([r], equipes, only_unassigned=False)

    assert (saida[0].assigned_team_id, saida[0].assigned_member_id) == ("t1", "m1")
    assert saida[0].assignment_reason == FIXED_PORTFOLIO_REASON
    assert r.assigned_team_id == "t9"


def test_registro_sem_municipio_casa_com_qualquer_regiao():
    assert region_matches(ServiceRegion("São Paulo", "Pinheiros"), None, None)
    assert region_matches(ServiceRegion("Santos", ""), "", "Centro")
