# tests/team_distribution/test_coverage_service.py

import pytest

from common.errors import InvalidInputError
from common.establishment_entity import EstablishmentRecord
from team_distribution.domain.coverage_service import (
    baseline_capacity,
    capacity_health,
    compute_coverage,
    display_label,
    region_staff_weights,
)
from team_distribution.entities.team_entities import ServiceRegion, Team, TeamMember


def _membro(i, ferias=False):
    return TeamMember(id=f"m{i}", name=f"Membro {i}", is_on_vacation=ferias)


def _registros(atribuidos, pendentes, **kw):
    out = [EstablishmentRecord(id=f"a{i}", name=f"A{i}", assigned_team_id="t1") for i in range(atribuidos)]
    out += [EstablishmentRecord(id=f"p{i}", name=f"P{i}", **kw) for i in range(pendentes)]
    return out


@pytest.fixture
def equipes():
    return [
        Team(id="t1", name="Norte", max_activities_per_route=20,
             members=[_membro(1), _membro(2), _membro(3, ferias=True)],
             regions=[ServiceRegion("São Paulo", "")]),
        Team(id="t2", name="Sul", max_activities_per_route=20, members=[_membro(4)],
             regions=[ServiceRegion("Santos", "")]),
        Team(id="t3", name="Inativa", is_active=False, max_activities_per_route=50,
             members=[_membro(5)], regions=[ServiceRegion("Rio de Janeiro", "")]),
    ]


def test_capacidade_base_ignora_ferias_e_inativas(equipes):
    assert baseline_capacity(equipes) == 60


def test_cenario_capacidade_sobrando(equipes):
    rel = compute_coverage(_registros(40, 10, municipality="São Paulo"), equipes)

    assert rel.baseline_capacity == 60
    assert rel.assigned_count == 40
    assert rel.pending_count == 10
    assert rel.remaining_capacity == 20
    assert rel.capacity_health == 100
    assert rel.uncovered_regions == []


@pytest.mark.parametrize(
    "restante, pendentes, esperado",
    [(5, 10, 50), (0, 3, 0), (0, 0, 100), (7, 0, 100), (1, 3, 33), (2, 3, 67)],
)
def test_saude_da_capacidade(restante, pendentes, esperado):
    assert capacity_health(restante, pendentes) == esperado


def test_capacidade_restante_nunca_negativa():
    equipes = [Team(id="t1", name="Única", max_activities_per_route=5, members=[_membro(1)])]

    rel = compute_coverage(_registros(8, 2), equipes)

    assert rel.remaining_capacity == 0
    assert rel.capacity_health == 0


def test_regiao_descoberta_aparece_no_relatorio(equipes):
    records = [
        EstablishmentRecord(id="1", name="Bar", neighborhood="Pinheiros", municipality="Campinas"),
        EstablishmentRecord(id="2", name="Padaria", neighborhood="Pinheiros", municipality="São Paulo"),
        EstablishmentRecord(id="3", name="Loja", neighborhood="Centro", municipality="Rio de Janeiro"),
    ]

    rel = compute_coverage(records, equipes)

    # equipe do Rio está inativa
    assert rel.uncovered_regions == ["Pinheiros, Campinas", "Centro, Rio de Janeiro"]
    assert rel.uncovered_count == 2


def test_atribuidos_nao_contam_como_descobertos():
    r = EstablishmentRecord(id="1", name="Bar", municipality="Manaus", assigned_team_id="t1")

    rel = compute_coverage([r], [Team(id="t1", name="Sem região", members=[_membro(1)])])

    assert rel.uncovered_regions == []


def test_descobertos_deduplicados_e_limitados():
    records = [
        EstablishmentRecord(id=str(i), name=f"Loja {i}", neighborhood=f"Bairro {i % 60}", municipality="Manaus")
        for i in range(120)
    ]

    rel = compute_coverage(records, [])

    assert len(rel.uncovered_regions) == 50
    assert rel.uncovered_count == 60
    assert rel.uncovered_regions[0] == "Bairro 0, Manaus"


def test_rotulo_de_exibicao():
    longo = "Rua das Palmeiras Imperiais do Jardim Botânico, 1234"

    assert display_label(EstablishmentRecord(id="1", name="X", neighborhood="Lapa")) == "Lapa"
    assert display_label(EstablishmentRecord(id="1", name="X", address=longo)) == longo[:40] + "..."
    assert display_label(EstablishmentRecord(id="1", name="X", address="Rua A, 1")) == "Rua A, 1"
    assert display_label(EstablishmentRecord(id="1", name="Bar do Zé")) == "Bar do Zé"


def test_pesos_por_regiao():
    equipes = [
        Team(id="t1", name="A", members=[_membro(1), _membro(2)],
             regions=[ServiceRegion("São Paulo", "Pinheiros")]),
        Team(id="t2", name="B", members=[_membro(3)],
             regions=[ServiceRegion("São Paulo", "Pinheiros"), ServiceRegion("São Paulo", "Lapa")]),
        Team(id="t3", name="C", is_active=False, members=[_membro(4)],
             regions=[ServiceRegion("São Paulo", "Lapa")]),
    ]

    assert region_staff_weights(equipes) == {"Pinheiros, São Paulo": 3, "Lapa, São Paulo": 1}


def test_entrada_ausente_e_erro():
    with pytest.raises(InvalidInputError):
        compute_coverage(None, [])


def test_to_dict_camelcase(equipes):
    d = compute_coverage(_registros(1, 1, municipality="Santos"), equipes).to_dict()

    assert set(d) == {
        "baselineCapacity",
        "assignedCount",
        "pendingCount",
        "remainingCapacity",
        "capacityHealth",
        "uncoveredRegions",
        "uncoveredCount",
    }


def test_registro_sem_localizacao_e_coberto_por_qualquer_regiao(equipes):
    sem_local = EstablishmentRecord(id="1", name="Bar", address="Rua A, 1")

    assert compute_coverage([sem_local], equipes).uncovered_regions == []
    assert compute_coverage([sem_local], []).uncovered_regions == ["Rua A, 1"]
